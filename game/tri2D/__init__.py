"""2D Game module - Triangle collector"""

from .entities import Triangle, Role
from .world import TriangleWorld, GameState
from .loop import GameLoop, GameInitError
from .collect_env import CollectEnv, run_random_episode

__all__ = [
    'Triangle', 'Role', 'TriangleWorld', 'GameState',
    'GameLoop', 'GameInitError', 'CollectEnv', 'run_random_episode',
]

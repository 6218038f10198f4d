"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Color = Tuple[float, float, float, float]

RED: Color = (1.0, 0.0, 0.0, 1.0)
GREEN: Color = (0.0, 1.0, 0.0, 1.0)
BLUE: Color = (0.0, 0.0, 1.0, 1.0)
YELLOW: Color = (1.0, 1.0, 0.0, 1.0)
MAGENTA: Color = (1.0, 0.0, 1.0, 1.0)
CYAN: Color = (0.0, 1.0, 1.0, 1.0)

# Spawn palette. Red is in here on purpose, draws that hit it are re-sampled.
PALETTE: Tuple[Color, ...] = (RED, GREEN, BLUE, YELLOW, MAGENTA, CYAN)

HAZARD_COLOR = RED
PLAYER_COLOR = GREEN


def is_hazard_color(color: Color) -> bool:
    """Opaque red (alpha ignored, like the renderer does)"""
    return tuple(color[:3]) == HAZARD_COLOR[:3]


class Role(str, Enum):
    PLAYER = "player"
    HAZARD = "hazard"
    COLLECTIBLE = "collectible"


@dataclass(eq=False)
class Triangle:
    """One triangle in the world (player, hazard or collectible)"""
    x: float
    y: float
    size: float = 0.1
    color: Color = BLUE
    role: Optional[Role] = None  # derived from color when not given

    def __post_init__(self):
        self.color = tuple(self.color)
        if self.role is None:
            self.role = Role.HAZARD if is_hazard_color(self.color) else Role.COLLECTIBLE

    @property
    def is_player(self) -> bool:
        return self.role is Role.PLAYER

    @property
    def is_hazard(self) -> bool:
        return self.role is Role.HAZARD

    def update(self):
        # Triangles don't move on their own, the world moves the player.
        pass

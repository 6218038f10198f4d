"""
Configuration for the triangle collector game
Round rules, window, and RL environment settings
"""

# World / spawn parameters
WORLD_CONFIG = {
    "n_objects": 10,
    "n_hazards": 3,
    "size": 0.1,             # side of every triangle, normalized units
    "step": 0.01,            # player move per tick per held key
    "score_increment": 10,
    "reserve_player_slot": True,  # False: player overwrites hazard slot 0 (2 hazards)
}

# Round timing
LOOP_CONFIG = {
    "duration_ms": 60_000,   # 1 minute
}

# Arcade window
WINDOW_CONFIG = {
    "width": 800,
    "height": 800,
    "title": "Triangle Collector",
    "background": (18, 18, 22),
}

# ==============================================================================
# RL ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    "dt": 1 / 60,
    "max_steps": None,       # derived from duration_ms so rounds always finish
    "k_hazards": 3,
    "m_collectibles": 3,
}

REWARD_CONFIG = {
    "R_COLLECT": 1.0,        # per collectible picked up
    "R_WIN": 5.0,
    "R_LOSS": 5.0,           # hazard hit or timeout
    "R_TIME": 0.001,         # small per-step penalty
}

"""Static configuration: constants, stage table, env defaults"""

from .game_config import (
    GAME_CONFIG,
    SPAWN_CONFIG,
    HITBOX_CONFIG,
    SCORE_CONFIG,
    STAGES,
    ENV_CONFIG,
    STORAGE_CONFIG,
)

__all__ = [
    "GAME_CONFIG",
    "SPAWN_CONFIG",
    "HITBOX_CONFIG",
    "SCORE_CONFIG",
    "STAGES",
    "ENV_CONFIG",
    "STORAGE_CONFIG",
]

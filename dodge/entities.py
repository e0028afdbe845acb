"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from typing import Tuple


# Game status values (GameState.status)
STATUS_MENU = "menu"
STATUS_PLAYING = "playing"
STATUS_PAUSED = "paused"
STATUS_GAME_OVER = "game_over"
STATUS_STAGE_COMPLETE = "stage_complete"
STATUS_VICTORY = "victory"

# Directional controls
LEFT = "left"
RIGHT = "right"
DIRECTIONS = (LEFT, RIGHT)

# Bullet patterns a stage may enable
BULLET_PATTERNS = ("random", "aimed", "wave", "burst", "spiral")

BULLET_COLORS = {
    "normal": "#ff4444",
    "fast": "#ff8800",
    "wave": "#aa44ff",
    "boss": "#ff0066",
}


def validate_patterns(patterns) -> Tuple[str, ...]:
    """Return patterns as a tuple, raising ValueError if empty or unknown"""
    patterns = tuple(patterns)
    if not patterns:
        raise ValueError("bullet pattern set must not be empty")
    unknown = [p for p in patterns if p not in BULLET_PATTERNS]
    if unknown:
        raise ValueError(f"Unknown bullet pattern(s): {', '.join(map(str, unknown))}")
    return patterns


@dataclass
class Vec2:
    """2D vector (position or velocity), canvas pixels"""
    x: float = 0.0
    y: float = 0.0


@dataclass
class Size:
    width: float
    height: float


@dataclass
class Entity:
    """Shape shared by the player and bullets"""
    position: Vec2
    size: Size
    velocity: Vec2 = field(default_factory=Vec2)
    is_active: bool = True

    @property
    def center_x(self) -> float:
        return self.position.x + self.size.width / 2

    @property
    def center_y(self) -> float:
        return self.position.y + self.size.height / 2


@dataclass
class PlayerState(Entity):
    """Player entity"""
    lives: int = 3
    is_invincible: bool = False
    invincible_timer: float = 0.0  # ms left


@dataclass
class BulletState(Entity):
    """Bullet projectile entity, colour derived from type"""
    type: str = "normal"  # normal / fast / wave / boss
    color: str = field(init=False)

    def __post_init__(self):
        self.color = BULLET_COLORS.get(self.type, BULLET_COLORS["normal"])


@dataclass(frozen=True)
class StageConfig:
    """One timed stage of the run"""
    day: int
    name: str
    bullet_speed: float
    bullet_frequency: float  # ms between spawn bursts
    bullet_patterns: Tuple[str, ...]
    duration: float  # ms the stage must be survived
    has_boss: bool = False

    def __post_init__(self):
        object.__setattr__(self, "bullet_patterns", validate_patterns(self.bullet_patterns))
        if self.bullet_frequency <= 0:
            raise ValueError("bullet_frequency must be positive")
        if self.duration <= 0:
            raise ValueError("duration must be positive")


@dataclass
class GameState:
    """Orchestrator-owned run state"""
    status: str = STATUS_MENU
    current_stage: int = 0  # index into the stage table
    score: int = 0
    high_score: int = 0

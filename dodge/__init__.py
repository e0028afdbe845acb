"""Dodge - vertical bullet-hell survival engine"""

from .engine import GameEngine
from .player import Player
from .bullets import Bullet, BulletSpawner
from .collision import check_collisions
from .controls import InputSource, InputEvent
from .storage import MemoryHighScoreStore, JsonHighScoreStore
from .timing import PerfCounterClock, VirtualClock, ManualFrameScheduler
from .env import DodgeEnv, run_random_episode

__all__ = [
    "GameEngine",
    "Player",
    "Bullet",
    "BulletSpawner",
    "check_collisions",
    "InputSource",
    "InputEvent",
    "MemoryHighScoreStore",
    "JsonHighScoreStore",
    "PerfCounterClock",
    "VirtualClock",
    "ManualFrameScheduler",
    "DodgeEnv",
    "run_random_episode",
]

"""
Bullets and the pattern spawner
-------------------------------
Every spawn burst picks `bullets_per_spawn` patterns uniformly at random from
the stage's allowed set:

- random: one bullet at a random x, straight down
- aimed:  one bullet from a random x toward the player's centre and the canvas bottom
- wave:   four bullets evenly spaced across the canvas, straight down
- burst:  eight bullets from the top centre fanned over a half circle
- spiral: one bullet weaving around the centre, phase advancing per spawn

Velocities are per update call, not per second.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, Iterable, List, Optional

from .configs.game_config import GAME_CONFIG, SPAWN_CONFIG
from .entities import BulletState, Vec2, Size, validate_patterns
from .utils import normalize


class Bullet:
    """One projectile; deactivates itself once it leaves the canvas"""

    def __init__(self, x: float, y: float, vx: float, vy: float,
                 type: str = "normal", config: dict = GAME_CONFIG):
        size = config["bullet_size"]
        self.config = config
        self.state = BulletState(
            position=Vec2(x, y),
            size=Size(size, size),
            velocity=Vec2(vx, vy),
            type=type,
        )

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def deactivate(self):
        self.state.is_active = False

    def is_offscreen(self) -> bool:
        margin = self.config["offscreen_margin"]
        x, y = self.state.position.x, self.state.position.y
        return (
            y > self.config["canvas_height"] + margin
            or y < -margin
            or x < -margin
            or x > self.config["canvas_width"] + margin
        )

    def update(self):
        if not self.state.is_active:
            return
        self.state.position.x += self.state.velocity.x
        self.state.position.y += self.state.velocity.y

        if self.is_offscreen():
            self.state.is_active = False


class BulletSpawner:
    """Owns the live bullets and emits new ones on a fixed cadence"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: dict = GAME_CONFIG,
        spawn_config: dict = SPAWN_CONFIG,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.config = config
        self.spawn_config = spawn_config

        self.bullets: List[Bullet] = []
        self.last_spawn_time = 0.0
        self.spawn_interval = float(spawn_config["default_interval"])
        self.bullet_speed = float(spawn_config["default_speed"])
        self.patterns = ("random",)
        self.spiral_angle = 0.0

        self._spawners: Dict[str, Callable[[float], None]] = {
            "random": self._spawn_random,
            "aimed": self._spawn_aimed,
            "wave": self._spawn_wave,
            "burst": self._spawn_burst,
            "spiral": self._spawn_spiral,
        }

    def set_bullet_config(self, speed: float, interval: float, patterns: Iterable[str]):
        """Applies from the next spawn decision; in-flight bullets keep their velocity"""
        patterns = validate_patterns(patterns)
        if interval <= 0:
            raise ValueError("spawn interval must be positive")
        self.bullet_speed = float(speed)
        self.spawn_interval = float(interval)
        self.patterns = patterns

    def update(self, current_time: float, player_x: float):
        """
        Spawn a burst if the interval has elapsed, then advance and prune
        all bullets.

        Args:
            current_time: clock time in ms
            player_x: horizontal centre of the player, used by aimed bullets
        """
        if current_time - self.last_spawn_time >= self.spawn_interval:
            self.spawn_burst(player_x)
            self.last_spawn_time = current_time

        for bullet in self.bullets:
            bullet.update()

        self.bullets = [b for b in self.bullets if b.is_active]

    def spawn_burst(self, player_x: float):
        for _ in range(self.spawn_config["bullets_per_spawn"]):
            pattern = self.rng.choice(self.patterns)
            self._spawners[pattern](player_x)

    def reset(self, current_time: float = 0.0):
        # First spawn then lands one full interval after current_time
        self.bullets = []
        self.last_spawn_time = current_time
        self.spiral_angle = 0.0

    # ----------------------------
    # Patterns
    # ----------------------------

    def _add(self, x: float, vx: float, vy: float, type: str):
        y = -self.config["bullet_size"]
        self.bullets.append(Bullet(x, y, vx, vy, type, config=self.config))

    def _random_x(self) -> float:
        return self.rng.random() * (self.config["canvas_width"] - self.config["bullet_size"])

    def _spawn_random(self, player_x: float):
        self._add(self._random_x(), 0.0, self.bullet_speed, "normal")

    def _spawn_aimed(self, player_x: float):
        x = self._random_x()
        nx, ny = normalize(player_x - x, self.config["canvas_height"])
        self._add(x, nx * self.bullet_speed, ny * self.bullet_speed, "fast")

    def _spawn_wave(self, player_x: float):
        count = self.spawn_config["wave_count"]
        step = self.config["canvas_width"] / (count + 1)
        for i in range(count):
            self._add(step * (i + 1), 0.0, self.bullet_speed, "wave")

    def _spawn_burst(self, player_x: float):
        center_x = self.config["canvas_width"] / 2
        count = self.spawn_config["burst_count"]
        for i in range(count):
            angle = (math.pi / count) * i + math.pi / 2
            vx = math.cos(angle) * self.bullet_speed * self.spawn_config["burst_x_scale"]
            vy = math.sin(angle) * self.bullet_speed
            self._add(center_x, vx, vy, "normal")

    def _spawn_spiral(self, player_x: float):
        self.spiral_angle += self.spawn_config["spiral_step"]
        x = self.config["canvas_width"] / 2 + math.cos(self.spiral_angle) * self.spawn_config["spiral_radius"]
        vx = math.sin(self.spiral_angle) * self.bullet_speed * self.spawn_config["spiral_x_scale"]
        self._add(x, vx, self.bullet_speed, "wave")

"""
Player - horizontal movement, lives and invincibility window
"""

from __future__ import annotations

from typing import Set

from .configs.game_config import GAME_CONFIG
from .entities import PlayerState, Vec2, Size, LEFT, RIGHT, DIRECTIONS
from .utils import clamp


class Player:
    """Player sprite driven by held left/right controls"""

    def __init__(self, config: dict = GAME_CONFIG):
        self.config = config
        self.state: PlayerState = self._initial_state()
        # Directions currently held; written by input events, read in update()
        self._held: Set[str] = set()

    def _initial_state(self) -> PlayerState:
        cfg = self.config
        return PlayerState(
            position=Vec2(
                x=cfg["canvas_width"] / 2 - cfg["player_width"] / 2,
                y=cfg["canvas_height"] - cfg["player_height"] - cfg["player_bottom_offset"],
            ),
            size=Size(cfg["player_width"], cfg["player_height"]),
            lives=cfg["player_lives"],
        )

    @property
    def held(self) -> frozenset:
        return frozenset(self._held)

    def set_control(self, direction: str, pressed: bool):
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")
        if pressed:
            self._held.add(direction)
        else:
            self._held.discard(direction)

    def update(self, delta_time: float):
        """Move one step and tick the invincibility timer by delta_time ms"""
        speed = self.config["player_speed"]

        # right wins when both are held
        move_x = 0.0
        if LEFT in self._held:
            move_x = -speed
        if RIGHT in self._held:
            move_x = speed

        self.state.velocity.x = move_x
        max_x = self.config["canvas_width"] - self.state.size.width
        self.state.position.x = clamp(self.state.position.x + move_x, 0, max_x)

        if self.state.is_invincible:
            self.state.invincible_timer -= delta_time
            if self.state.invincible_timer <= 0:
                self.state.is_invincible = False
                self.state.invincible_timer = 0.0

    def hit(self) -> bool:
        """
        Take one hit.

        Returns True when the hit was fatal. Does nothing (and returns False)
        while invincible.
        """
        if self.state.is_invincible:
            return False

        self.state.lives -= 1
        if self.state.lives > 0:
            self.grant_invincibility(self.config["invincible_duration"])
        return self.state.lives <= 0

    def grant_invincibility(self, duration: float):
        if duration <= 0:
            return
        self.state.is_invincible = True
        self.state.invincible_timer = float(duration)

    def release_controls(self):
        self._held.clear()

    def reset(self):
        self.state = self._initial_state()
        self.release_controls()

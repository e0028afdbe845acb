"""
Arcade presentation for the dodge engine
----------------------------------------
- ArcadeFrameScheduler: runs engine frames on Arcade's clock
- GameWindow: draws engine state and turns key presses into input events

The engine uses a y-down 400x600 canvas; Arcade is y-up, so every draw
call flips y.
"""

from __future__ import annotations

import time
from typing import Optional

import arcade

from .configs.game_config import GAME_CONFIG
from .controls import InputSource, ACTION_CONFIRM, ACTION_TOGGLE_PAUSE
from .engine import GameEngine
from .entities import (
    LEFT,
    RIGHT,
    STATUS_MENU,
    STATUS_PAUSED,
    STATUS_GAME_OVER,
    STATUS_STAGE_COMPLETE,
    STATUS_VICTORY,
)


def hex_to_rgb(value: str):
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


class ArcadeFrameScheduler:
    """Frame scheduler backed by arcade.schedule_once"""

    def __init__(self, frame_delay: float = 1 / 60):
        self.frame_delay = frame_delay

    def schedule(self, callback):
        def _tick(delta_time: float):
            callback()

        arcade.schedule_once(_tick, self.frame_delay)
        return _tick

    def cancel(self, handle):
        if handle is not None:
            arcade.unschedule(handle)


class GameWindow(arcade.Window):
    """Arcade window for playing (or watching) the dodge engine"""

    DIRECTION_KEYS = {
        arcade.key.LEFT: LEFT,
        arcade.key.A: LEFT,
        arcade.key.RIGHT: RIGHT,
        arcade.key.D: RIGHT,
    }
    CONFIRM_KEYS = (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE)
    MODIFIER_MASK = (
        arcade.key.MOD_CTRL | arcade.key.MOD_ALT | arcade.key.MOD_SHIFT | arcade.key.MOD_COMMAND
    )

    def __init__(self, engine: GameEngine, input_source: Optional[InputSource] = None,
                 title: str = "Dodge until New Year"):
        super().__init__(GAME_CONFIG["canvas_width"], GAME_CONFIG["canvas_height"], title)
        self.engine = engine
        # Without an input source the window only draws (e.g. driven by DodgeEnv)
        self.input_source = input_source

        # Colors
        self.BG = (10, 10, 26)
        self.PLAYER_C = (30, 144, 255)
        self.SHIELD_C = (0, 212, 255)
        self.HUD_C = (220, 220, 220)
        self.BAR_BG = (60, 60, 60)
        self.BAR_C = (255, 215, 0)

    def _sy(self, y: float) -> float:
        return self.height - y

    def on_draw(self):
        self.clear()
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.BG)

        for b in self.engine.bullets:
            r = b.size.width / 2
            arcade.draw_circle_filled(b.center_x, self._sy(b.center_y), r, hex_to_rgb(b.color))

        self._draw_player()
        self._draw_hud()

    def _draw_player(self):
        p = self.engine.player_state
        # Blink every 100 ms while invincible
        if p.is_invincible and int(time.time() * 10) % 2 == 0:
            color = self.SHIELD_C
        else:
            color = self.PLAYER_C
        left, right = p.position.x, p.position.x + p.size.width
        top, bottom = self._sy(p.position.y), self._sy(p.position.y + p.size.height)
        arcade.draw_triangle_filled(p.center_x, top, left, bottom, right, bottom, color)

    def _draw_hud(self):
        state = self.engine.get_state()
        stage = self.engine.current_stage_config
        lives = self.engine.player_state.lives

        arcade.draw_text(f"Score: {state.score}", 10, self.height - 22, self.HUD_C, 12)
        arcade.draw_text(f"Best: {state.high_score}", 10, self.height - 40, self.HUD_C, 12)
        arcade.draw_text(f"Lives: {lives}", self.width - 80, self.height - 22, self.HUD_C, 12)

        # Stage progress bar along the top edge
        bar_w = self.width - 20
        arcade.draw_lrbt_rectangle_filled(10, 10 + bar_w, self.height - 50, self.height - 46, self.BAR_BG)
        fill = bar_w * self.engine.progress
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(10, 10 + fill, self.height - 50, self.height - 46, self.BAR_C)

        overlay = {
            STATUS_MENU: "Press Enter to start",
            STATUS_PAUSED: "Paused - Esc to resume",
            STATUS_GAME_OVER: f"Game over - {state.score} pts - Enter to retry",
            STATUS_STAGE_COMPLETE: f"{stage.name} - cleared! Enter for next day",
            STATUS_VICTORY: f"Happy new year! {state.score} pts",
        }.get(state.status)
        if overlay:
            arcade.draw_text(overlay, self.width / 2, self.height / 2, self.HUD_C, 14,
                             anchor_x="center", width=self.width - 40, multiline=True, align="center")

    def on_key_press(self, symbol: int, modifiers: int):
        if self.input_source is None or modifiers & self.MODIFIER_MASK:
            return
        if symbol in self.DIRECTION_KEYS:
            self.input_source.press(self.DIRECTION_KEYS[symbol])
        elif symbol in self.CONFIRM_KEYS:
            self.input_source.trigger(ACTION_CONFIRM)
        elif symbol == arcade.key.ESCAPE:
            self.input_source.trigger(ACTION_TOGGLE_PAUSE)

    def on_key_release(self, symbol: int, modifiers: int):
        if self.input_source is not None and symbol in self.DIRECTION_KEYS:
            self.input_source.release(self.DIRECTION_KEYS[symbol])

    def on_close(self):
        self.engine.destroy()
        super().on_close()

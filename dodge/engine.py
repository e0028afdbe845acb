"""
GameEngine - frame loop, status state machine, stage timing and scoring
-----------------------------------------------------------------------
Status transitions:

    menu -> playing
    playing -> paused | game_over | stage_complete
    paused -> playing
    stage_complete -> playing (next stage) | victory (last stage cleared)
    game_over | victory -> playing (restart)

Commands issued in the wrong status are ignored.

The engine owns the player, the spawner and the GameState. Collaborators
get copies through three callbacks (game state, player state, stage
progress) and read entity state for drawing through read-only accessors.
Time comes from an injected clock (ms) and frames from an injected
scheduler, so the same loop runs under Arcade or a virtual test clock.
"""

from __future__ import annotations

import copy
import math
import random
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from .bullets import BulletSpawner
from .collision import check_collisions
from .configs.game_config import GAME_CONFIG, SCORE_CONFIG, STAGES
from .controls import (
    InputEvent,
    InputSource,
    Subscription,
    ACTION_CONFIRM,
    ACTION_TOGGLE_PAUSE,
    ACTION_START,
    ACTION_PAUSE,
    ACTION_RESUME,
    ACTION_NEXT_STAGE,
)
from .entities import (
    BulletState,
    GameState,
    PlayerState,
    StageConfig,
    STATUS_MENU,
    STATUS_PLAYING,
    STATUS_PAUSED,
    STATUS_GAME_OVER,
    STATUS_STAGE_COMPLETE,
    STATUS_VICTORY,
)
from .player import Player
from .storage import MemoryHighScoreStore
from .timing import PerfCounterClock, ManualFrameScheduler


class GameEngine:
    """Real-time simulation of one dodge run"""

    def __init__(
        self,
        clock=None,
        scheduler=None,
        store=None,
        input_source: Optional[InputSource] = None,
        rng: Optional[random.Random] = None,
        stages: Optional[Sequence[StageConfig]] = None,
        config: dict = GAME_CONFIG,
        score_config: dict = SCORE_CONFIG,
        verbose: int = 0,
    ):
        self.clock = clock if clock is not None else PerfCounterClock()
        self.scheduler = scheduler if scheduler is not None else ManualFrameScheduler()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.stages: List[StageConfig] = list(stages if stages is not None else STAGES)
        assert self.stages, "At least one stage is required."
        self.config = config
        self.score_config = score_config
        self.verbose = verbose

        self.player = Player(config)
        self.spawner = BulletSpawner(rng=rng, config=config)

        self.game_state = GameState(high_score=int(self.store.get()))

        # Loop / timing state (clock ms)
        self._frame_handle = None
        self._running = False
        self._loop_generation = 0
        self._destroyed = False
        self._last_time = 0.0
        self.stage_start_time = 0.0
        self.stage_elapsed_time = 0.0
        self.progress = 0.0
        self._score_accumulator = 0.0

        # Callbacks
        self._on_state_change: Optional[Callable[[GameState], None]] = None
        self._on_player_state_change: Optional[Callable[[PlayerState], None]] = None
        self._on_stage_progress: Optional[Callable[[float], None]] = None

        self._subscription: Optional[Subscription] = None
        if input_source is not None:
            self._subscription = input_source.subscribe(self.handle_input)

    # ----------------------------
    # Wiring
    # ----------------------------

    def set_callbacks(
        self,
        on_state_change: Optional[Callable[[GameState], None]] = None,
        on_player_state_change: Optional[Callable[[PlayerState], None]] = None,
        on_stage_progress: Optional[Callable[[float], None]] = None,
    ):
        self._on_state_change = on_state_change
        self._on_player_state_change = on_player_state_change
        self._on_stage_progress = on_stage_progress

    def get_state(self) -> GameState:
        return replace(self.game_state)

    @property
    def state(self) -> GameState:
        return self.get_state()

    @property
    def player_state(self) -> PlayerState:
        return self.player.state

    @property
    def bullets(self) -> List[BulletState]:
        return [b.state for b in self.spawner.bullets]

    @property
    def current_stage_config(self) -> StageConfig:
        return self.stages[self.game_state.current_stage]

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # ----------------------------
    # Commands
    # ----------------------------

    def start_game(self):
        if self._destroyed or self.game_state.status == STATUS_PLAYING:
            return

        self._stop_loop()

        self.game_state.status = STATUS_PLAYING
        self.game_state.current_stage = 0
        self.game_state.score = 0
        self._score_accumulator = 0.0

        now = self.clock.now()
        self._last_time = now
        self.stage_start_time = now

        self.player.reset()
        self.spawner.reset(now)
        self._setup_stage()
        self.player.grant_invincibility(self.config["grace_duration"])

        if self.verbose > 0:
            print(f"[GameEngine] Game started (stage 1/{len(self.stages)}, high score {self.game_state.high_score})")

        self._notify_state_change()
        self._start_loop()

    def next_stage(self):
        if self._destroyed or self.game_state.status != STATUS_STAGE_COMPLETE:
            return

        self._stop_loop()

        if self.game_state.current_stage < len(self.stages) - 1:
            self.game_state.current_stage += 1
            self.game_state.status = STATUS_PLAYING

            now = self.clock.now()
            self._last_time = now
            self.stage_start_time = now

            self.spawner.reset(now)
            self._setup_stage()
            self.player.grant_invincibility(self.config["grace_duration"])

            if self.verbose > 0:
                print(f"[GameEngine] Stage {self.game_state.current_stage + 1}/{len(self.stages)}: "
                      f"{self.current_stage_config.name}")

            self._notify_state_change()
            self._start_loop()
        else:
            self.game_state.status = STATUS_VICTORY
            self._save_high_score()
            if self.verbose > 0:
                print(f"[GameEngine] Victory! Final score {self.game_state.score}")
            self._notify_state_change()

    def pause(self):
        if self._destroyed or self.game_state.status != STATUS_PLAYING:
            return
        self._stop_loop()
        self.game_state.status = STATUS_PAUSED
        if self.verbose > 0:
            print(f"[GameEngine] Paused at {self.stage_elapsed_time:.0f} ms into stage {self.game_state.current_stage + 1}")
        self._notify_state_change()

    def resume(self):
        if self._destroyed or self.game_state.status != STATUS_PAUSED:
            return
        self.game_state.status = STATUS_PLAYING

        # Re-anchor so neither progress nor the first delta jumps
        now = self.clock.now()
        self._last_time = now
        self.stage_start_time = now - self.stage_elapsed_time

        if self.verbose > 0:
            print("[GameEngine] Resumed")
        self._notify_state_change()
        self._start_loop()

    def set_control(self, direction: str, pressed: bool):
        self.player.set_control(direction, pressed)

    def handle_input(self, event: InputEvent):
        """Dispatch one event from the input source"""
        if event.kind == "direction":
            self.set_control(event.name, event.pressed)
            return

        status = self.game_state.status
        if event.name == ACTION_CONFIRM:
            if status in (STATUS_MENU, STATUS_GAME_OVER, STATUS_VICTORY):
                self.start_game()
            elif status == STATUS_STAGE_COMPLETE:
                self.next_stage()
        elif event.name == ACTION_TOGGLE_PAUSE:
            if status == STATUS_PLAYING:
                self.pause()
            elif status == STATUS_PAUSED:
                self.resume()
        elif event.name == ACTION_START:
            self.start_game()
        elif event.name == ACTION_PAUSE:
            self.pause()
        elif event.name == ACTION_RESUME:
            self.resume()
        elif event.name == ACTION_NEXT_STAGE:
            self.next_stage()

    def destroy(self):
        """Stop the loop and release input and callbacks. Safe to call twice."""
        if self._destroyed:
            return
        self._destroyed = True
        self._stop_loop()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.set_callbacks()
        self.player.release_controls()

    # ----------------------------
    # Frame loop
    # ----------------------------

    def _start_loop(self):
        self._running = True
        self._loop_generation += 1
        self._game_loop()

    def _stop_loop(self):
        self._running = False
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None

    def _game_loop(self):
        self._frame_handle = None
        if not self._running or self.game_state.status != STATUS_PLAYING:
            self._running = False
            return

        current_time = self.clock.now()
        delta_time = current_time - self._last_time
        self._last_time = current_time

        generation = self._loop_generation
        self._update(delta_time, current_time)

        # A command issued from a callback during this frame restarted the loop
        if generation != self._loop_generation:
            return
        if self._running and self.game_state.status == STATUS_PLAYING:
            self._frame_handle = self.scheduler.schedule(self._game_loop)

    def _update(self, delta_time: float, current_time: float):
        if self.game_state.status != STATUS_PLAYING:
            return

        stage = self.current_stage_config

        self.player.update(delta_time)
        self._notify_player_state()

        self.spawner.update(current_time, self.player.state.center_x)

        # Collisions resolve before the stage clock; a fatal hit on the final frame is a game over
        hit = check_collisions(self.player, self.spawner.bullets)
        if hit is not None and hit.fatal:
            self._game_over()
            return

        self.stage_elapsed_time = current_time - self.stage_start_time
        self.progress = min(self.stage_elapsed_time / stage.duration, 1.0)
        self._notify_progress()

        if self.stage_elapsed_time >= stage.duration:
            self._stage_complete()
            return

        self._accumulate_score(delta_time)
        self._notify_state_change()

    def _accumulate_score(self, delta_time: float):
        """Survival points; leftover ms carry into the next frame"""
        ms_per_point = self.score_config["ms_per_point"]
        self._score_accumulator += delta_time
        if self._score_accumulator < ms_per_point:
            return

        points = math.floor(self._score_accumulator / ms_per_point)
        progress_bonus = 1 + self.progress * self.score_config["progress_multiplier"]
        stage_bonus = 1 + self.game_state.current_stage * self.score_config["stage_multiplier"]
        self.game_state.score += int(math.floor(points * progress_bonus * stage_bonus))
        self._score_accumulator %= ms_per_point

    def _setup_stage(self):
        stage = self.current_stage_config
        self.spawner.set_bullet_config(stage.bullet_speed, stage.bullet_frequency, stage.bullet_patterns)
        self.stage_elapsed_time = 0.0
        self.progress = 0.0

    # ----------------------------
    # Terminal transitions
    # ----------------------------

    def _stage_complete(self):
        self._stop_loop()
        self.game_state.status = STATUS_STAGE_COMPLETE
        bonus = self.score_config["stage_clear_bonus"] * (self.game_state.current_stage + 1)
        self.game_state.score += bonus
        self._save_high_score()
        if self.verbose > 0:
            print(f"[GameEngine] Stage {self.game_state.current_stage + 1} cleared (+{bonus}), "
                  f"score {self.game_state.score}")
        self._notify_state_change()

    def _game_over(self):
        self._stop_loop()
        self.game_state.status = STATUS_GAME_OVER
        self._save_high_score()
        if self.verbose > 0:
            print(f"[GameEngine] Game over on stage {self.game_state.current_stage + 1}, "
                  f"score {self.game_state.score}")
        self._notify_state_change()

    def _save_high_score(self):
        if self.game_state.score > self.game_state.high_score:
            self.game_state.high_score = self.game_state.score
            self.store.set(self.game_state.high_score)
            if self.verbose > 0:
                print(f"[GameEngine] New high score: {self.game_state.high_score}")

    # ----------------------------
    # Notifications (copies only)
    # ----------------------------

    def _notify_state_change(self):
        if self._on_state_change is not None:
            self._on_state_change(self.get_state())

    def _notify_player_state(self):
        if self._on_player_state_change is not None:
            self._on_player_state_change(copy.deepcopy(self.player.state))

    def _notify_progress(self):
        if self._on_stage_progress is not None:
            self._on_stage_progress(self.progress)

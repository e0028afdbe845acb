"""
DodgeEnv - headless Gymnasium wrapper around the dodge engine
-------------------------------------------------------------
- GameEngine on a VirtualClock + ManualFrameScheduler (one frame per step)
- Seeded bullet patterns, so episodes are reproducible
- Discrete action space: 0 stay, 1 left, 2 right
- Vector observation: player state + stage progress + top-K nearest bullets
- Stage clears are advanced automatically (auto_advance=True)

Quick test:
    python -m dodge.env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.game_config import GAME_CONFIG, ENV_CONFIG
from .controls import InputSource
from .engine import GameEngine
from .entities import (
    LEFT,
    RIGHT,
    STATUS_GAME_OVER,
    STATUS_STAGE_COMPLETE,
    STATUS_VICTORY,
)
from .storage import MemoryHighScoreStore
from .timing import VirtualClock, ManualFrameScheduler
from .utils import clamp, seed_everything


class DodgeEnv(gym.Env):
    """Survive the stage table by moving left and right"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        frame_ms: float = ENV_CONFIG["frame_ms"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_bullets: int = ENV_CONFIG["k_bullets"],
        auto_advance: bool = ENV_CONFIG["auto_advance"],
        reward_scale: float = ENV_CONFIG["reward_scale"],
        death_penalty: float = ENV_CONFIG["death_penalty"],
        stages=None,
        verbose: int = 0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        assert frame_ms > 0, "frame_ms must be positive."
        assert k_bullets >= 0, "k_bullets must be non-negative."
        self.render_mode = render_mode

        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_bullets = k_bullets
        self.auto_advance = auto_advance
        self.reward_scale = reward_scale
        self.death_penalty = death_penalty
        self.stages = stages
        self.verbose = verbose

        self.width = GAME_CONFIG["canvas_width"]
        self.height = GAME_CONFIG["canvas_height"]

        # 0 stay, 1 left, 2 right
        self.action_space = spaces.Discrete(3)

        # Player: centre x(1) lives(1) invincibility(1) progress(1) stage(1)
        # Each bullet: rel pos(2) vel(2)
        obs_dim = 5 + self.k_bullets * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.clock: VirtualClock = None  # type: ignore
        self.scheduler: ManualFrameScheduler = None  # type: ignore
        self.input_source: InputSource = None  # type: ignore
        self.engine: GameEngine = None  # type: ignore
        self.store = MemoryHighScoreStore()

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        if self.engine is not None:
            self.engine.destroy()

        self._step_count = 0
        self.clock = VirtualClock()
        self.scheduler = ManualFrameScheduler()
        self.input_source = InputSource()
        self.engine = GameEngine(
            clock=self.clock,
            scheduler=self.scheduler,
            store=self.store,
            input_source=self.input_source,
            rng=random.Random(seed),
            stages=self.stages,
            verbose=self.verbose,
        )
        self.engine.start_game()

        if self._window is not None:
            self._window.engine = self.engine

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        score_before = self.engine.game_state.score

        if action == 1:
            self.input_source.press(LEFT)
            self.input_source.release(RIGHT)
        elif action == 2:
            self.input_source.press(RIGHT)
            self.input_source.release(LEFT)
        else:
            self.input_source.release(LEFT)
            self.input_source.release(RIGHT)

        self.clock.advance(self.frame_ms)
        self.scheduler.run_next()

        status = self.engine.game_state.status
        if status == STATUS_STAGE_COMPLETE and self.auto_advance:
            self.engine.next_stage()
            status = self.engine.game_state.status

        reward = (self.engine.game_state.score - score_before) * self.reward_scale
        if status == STATUS_GAME_OVER:
            reward -= self.death_penalty

        terminated = status in (STATUS_GAME_OVER, STATUS_VICTORY)
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        p = self.engine.player_state
        px, py = p.center_x, p.center_y

        grace = max(1e-6, GAME_CONFIG["invincible_duration"])
        obs_parts = [
            (px / self.width) * 2 - 1,
            (p.lives / GAME_CONFIG["player_lives"]) * 2 - 1,
            clamp(p.invincible_timer / grace, 0, 1) * 2 - 1,
            self.engine.progress * 2 - 1,
            (self.engine.game_state.current_stage / max(1, len(self.engine.stages) - 1)) * 2 - 1,
        ]

        bullets_sorted = sorted(
            (b for b in self.engine.bullets if b.is_active),
            key=lambda b: (b.center_x - px) ** 2 + (b.center_y - py) ** 2,
        )
        speed = max(1e-6, max((s.bullet_speed for s in self.engine.stages), default=1.0))
        for i in range(self.k_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [
                    clamp((b.center_x - px) / self.width, -1, 1),
                    clamp((b.center_y - py) / self.height, -1, 1),
                    clamp(b.velocity.x / speed, -1, 1),
                    clamp(b.velocity.y / speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        state = self.engine.game_state
        return {
            "status": state.status,
            "stage": state.current_stage,
            "score": state.score,
            "high_score": state.high_score,
            "lives": self.engine.player_state.lives,
            "num_bullets": len(self.engine.bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import GameWindow
            self._window = GameWindow(self.engine)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self.engine is not None:
            self.engine.destroy()
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42, max_steps: Optional[int] = None):
    """Run one episode with random actions and return its info dict"""
    kwargs = {"render_mode": "human" if render else None}
    if max_steps is not None:
        kwargs["max_steps"] = max_steps
    env = DodgeEnv(**kwargs)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"(status={info['status']}, stage={info['stage'] + 1}, score={info['score']}, steps={info['step']})")

    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)

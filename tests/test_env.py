import numpy as np

from conftest import short_stages
from dodge.env import DodgeEnv


def test_reset_returns_valid_observation():
    env = DodgeEnv(k_bullets=4)
    obs, info = env.reset(seed=1)
    assert obs.shape == (5 + 4 * 4,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["status"] == "playing"
    assert info["lives"] == 3
    env.close()


def test_same_seed_same_episode():
    def rollout():
        env = DodgeEnv()
        obs, _ = env.reset(seed=7)
        trace = [obs]
        for i in range(300):
            obs, reward, terminated, truncated, info = env.step(i % 3)
            trace.append(obs)
            if terminated:
                break
        env.close()
        return np.stack(trace)

    np.testing.assert_array_equal(rollout(), rollout())


def test_auto_advance_reaches_victory():
    env = DodgeEnv(stages=short_stages(3, duration=1000), frame_ms=100)
    env.reset(seed=0)
    total = 0.0
    terminated = truncated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(0)
        assert env.observation_space.contains(obs)
        total += reward
        steps += 1
    assert terminated
    assert info["status"] == "victory"
    assert info["stage"] == 2
    assert total > 0
    env.close()


def test_truncates_at_max_steps():
    env = DodgeEnv(stages=short_stages(1, duration=10 ** 6), max_steps=5)
    env.reset(seed=0)
    for _ in range(4):
        _, _, terminated, truncated, _ = env.step(2)
        assert not (terminated or truncated)
    _, _, terminated, truncated, info = env.step(2)
    assert truncated and not terminated
    assert info["step"] == 5
    env.close()


def test_moving_right_shifts_observed_position():
    env = DodgeEnv(stages=short_stages(1, duration=10 ** 6))
    obs, _ = env.reset(seed=0)
    obs2, *_ = env.step(2)
    assert obs2[0] > obs[0]
    obs3, *_ = env.step(1)
    assert obs3[0] < obs2[0]
    env.close()

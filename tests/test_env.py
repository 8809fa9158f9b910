import numpy as np
import pytest

from retro_space.entities import Bullet, Enemy
from retro_space.env import RetroSpaceEnv


@pytest.fixture
def env():
    e = RetroSpaceEnv(base_spawn_rate=0.0)
    yield e
    e.close()


def test_reset_returns_observation_in_bounds(env):
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["lives"] == 5
    assert info["step"] == 0


def test_step_before_reset():
    with pytest.raises(RuntimeError):
        RetroSpaceEnv().step(np.array([0, 0]))


def test_move_action_moves_player(env):
    env.reset(seed=0)
    x = env.game.player.x
    env.step(np.array([4, 0]))
    assert env.game.player.x == x + env.game.player.speed


def test_kill_is_rewarded(env):
    env.reset(seed=0)
    env.game.enemies.append(Enemy(x=100, y=100, speed_y=1))
    env.game.bullets.append(Bullet(x=110, y=120, speed_y=-8))
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0]))
    assert reward == pytest.approx(1.0 - 0.001)
    assert info["enemies_killed"] == 1
    assert not terminated


def test_game_over_terminates():
    env = RetroSpaceEnv(base_spawn_rate=0.0, lives=1)
    env.reset(seed=0)
    env.game.enemies.append(Enemy(x=0, y=env.game.height, speed_y=1))
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0]))
    assert terminated
    assert info["lives"] == 0
    assert reward == pytest.approx(-1.0 - 5.0 - 0.001)
    with pytest.raises(RuntimeError):
        env.step(np.array([0, 0]))


def test_truncates_at_max_steps():
    env = RetroSpaceEnv(base_spawn_rate=0.0, max_steps=3)
    env.reset(seed=0)
    for _ in range(2):
        assert not env.step(np.array([0, 0]))[3]
    assert env.step(np.array([0, 0]))[3]


def test_rgb_array_render():
    env = RetroSpaceEnv(render_mode="rgb_array", width=160, height=120, base_spawn_rate=0.0)
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (120, 160, 3)
    assert frame.dtype == np.uint8
    assert frame.any()


def test_reset_seed_replays_the_same_episode():
    def enemy_positions(env):
        env.reset(seed=3)
        for _ in range(60):
            env.step(np.array([0, 0]))
        return [(e.x, e.y) for e in env.game.enemies]

    env = RetroSpaceEnv(base_spawn_rate=0.2)
    first = enemy_positions(env)
    second = enemy_positions(env)
    env.close()
    assert first
    assert first == second

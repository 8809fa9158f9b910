"""
RetroSpaceEnv - headless Gymnasium wrapper around RetroSpaceGame
-----------------------------------------------------------------
- Gymnasium API over the same game the window plays
- Discrete MultiDiscrete action space: [move(5), fire(2)]
- Vector observation: player state + top-K nearest enemies
- Reward from kills and lost lives

Quick test:
    python -m retro_space.env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GAME_CONFIG
from .drawing import rasterize
from .game import GameState, RetroSpaceGame
from .utils import clamp

DEFAULT_REWARD = {
    "R_KILL": 1.0,
    "R_LIFE_LOST": 1.0,
    "R_DEATH": 5.0,
    "R_TIME": 0.001,
}

# move: 0 stay, 1 up, 2 down, 3 left, 4 right
MOVE_KEYS = {1: "up", 2: "down", 3: "left", 4: "right"}


class RetroSpaceEnv(gym.Env):
    """Retro Space as a Gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 5400,  # 90s at 60 FPS
        k_enemies: int = 5,
        reward_weights: Optional[Dict[str, float]] = None,
        **game_kwargs,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.reward_weights = dict(DEFAULT_REWARD)
        if reward_weights:
            self.reward_weights.update(reward_weights)

        config = dict(GAME_CONFIG)
        config.update(game_kwargs)
        self.game = RetroSpaceGame(**config)
        self._max_enemy_speed = max(config["enemy_speed_range"])

        self.action_space = spaces.MultiDiscrete([5, 2])

        # Player: pos(2) cooldown(1) lives(1)
        # Each enemy: rel pos(2) speed(1)
        obs_dim = 2 + 1 + 1 + self.k_enemies * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._ready = False
        self._events: Dict[str, float] = {}
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self.game.reseed(seed)

        self.game.restart()
        self.game.start()

        self._step_count = 0
        self._ready = True
        self._totals = {"kills": 0.0, "lives_lost": 0.0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self._ready:
            raise RuntimeError("Call reset() before step()")

        move, fire = int(action[0]), int(action[1])
        self._apply_action(move, fire)

        score_before = self.game.score
        lives_before = self.game.lives

        self.game.tick()

        kills = (self.game.score - score_before) / max(1, self.game.kill_score)
        lives_lost = lives_before - self.game.lives
        self._events = {"kills": float(kills), "lives_lost": float(lives_lost)}
        for key, value in self._events.items():
            self._totals[key] += value

        reward = self._compute_reward()

        terminated = self.game.state is GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps
        if terminated or truncated:
            self._ready = False

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _apply_action(self, move: int, fire: int):
        controls = self.game.controls
        for name in MOVE_KEYS.values():
            controls.key_up(name)
        if move in MOVE_KEYS:
            controls.key_down(MOVE_KEYS[move])
        if fire:
            controls.key_down("fire")
        else:
            controls.key_up("fire")

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        g = self.game
        p = g.player
        px, py = p.x + p.width / 2, p.y + p.height / 2

        obs_parts = [
            (px / g.width) * 2 - 1,
            (py / g.height) * 2 - 1,
            clamp(p.shoot_cooldown / max(1, p.cooldown_ticks) * 2 - 1, -1, 1),
            (g.lives / g.start_lives) * 2 - 1,
        ]

        def _dist2(e):
            ex, ey = e.x + e.width / 2, e.y + e.height / 2
            return (ex - px) ** 2 + (ey - py) ** 2

        enemies_sorted = sorted(g.enemies, key=_dist2)
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x + e.width / 2 - px) / g.width
                dy = (e.y + e.height / 2 - py) / g.height
                speed = e.speed_y / self._max_enemy_speed
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), clamp(speed, -1, 1)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _compute_reward(self) -> float:
        w = self.reward_weights
        reward = 0.0
        reward += w["R_KILL"] * self._events.get("kills", 0.0)
        reward -= w["R_LIFE_LOST"] * self._events.get("lives_lost", 0.0)
        reward -= w["R_TIME"]
        if self.game.state is GameState.GAME_OVER:
            reward -= w["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lives": self.game.lives,
            "level": self.game.level,
            "enemies_killed": self._totals.get("kills", 0.0),
            "lives_lost": self._totals.get("lives_lost", 0.0),
            "num_enemies": len(self.game.enemies),
            "num_bullets": len(self.game.bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.game.draw_list(), int(self.game.width), int(self.game.height))

        if self._window is None:
            # needs a display
            from .window import RetroSpaceWindow
            self._window = RetroSpaceWindow(self.game, title="RetroSpaceEnv")

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42, delay: float = 0.0):
    """Run a random episode for testing"""
    env = RetroSpaceEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if delay:
            time.sleep(delay)

    print(f"Random episode return: {total:.2f}")
    print(f"Score: {info['score']}  Level: {info['level']}  Steps: {info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True, delay=1 / 60)

"""
Spawning: enemies, explosion bursts and the background starfield
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .drawing import EXPLOSION_ENEMY
from .entities import Enemy, Particle, Playfield, Star

logger = logging.getLogger(__name__)


class EnemySpawner:
    """Probabilistic enemy generator; the rate rises with each level"""

    def __init__(
        self,
        playfield: Playfield,
        rng: random.Random,
        base_rate: float = 0.005,
        rate_step: float = 0.003,
        speed_range: Tuple[float, float] = (1.0, 2.5),
        spawn_y: float = -30.0,
        enemy_width: float = 30.0,
        enemy_height: float = 25.0,
    ):
        if not 0.0 <= base_rate <= 1.0:
            raise ValueError(f"base_rate must be in [0, 1], got {base_rate}")
        if rate_step < 0:
            raise ValueError(f"rate_step must be non-negative, got {rate_step}")
        lo, hi = speed_range
        if not 0 < lo <= hi:
            raise ValueError(f"Invalid enemy speed range {speed_range}")

        self.playfield = playfield
        self.rng = rng
        self.base_rate = base_rate
        self.rate_step = rate_step
        self.speed_range = (lo, hi)
        self.spawn_y = spawn_y
        self.enemy_width = enemy_width
        self.enemy_height = enemy_height
        self.rate = base_rate

    def reset(self):
        self.rate = self.base_rate

    def raise_rate(self):
        self.rate += self.rate_step

    def maybe_spawn(self) -> Optional[Enemy]:
        """One draw per tick; returns the new enemy or None"""
        if self.rng.random() >= self.rate:
            return None
        return self.spawn()

    def spawn(self) -> Enemy:
        x = self.rng.random() * max(0.0, self.playfield.width - self.enemy_width)
        lo, hi = self.speed_range
        speed = lo + self.rng.random() * (hi - lo)
        logger.debug("Enemy spawned at x=%.1f speed=%.2f", x, speed)
        return Enemy(
            x=x,
            y=self.spawn_y,
            speed_y=speed,
            width=self.enemy_width,
            height=self.enemy_height,
        )


class ParticleEmitter:
    """Creates a fixed-size burst of fading particles at a point"""

    def __init__(
        self,
        rng: random.Random,
        count: int = 8,
        spread: float = 3.0,
        life: int = 30,
        damping: float = 0.98,
    ):
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self.rng = rng
        self.count = count
        self.spread = spread
        self.life = life
        self.damping = damping

    def burst(self, x: float, y: float, color: str = EXPLOSION_ENEMY) -> List[Particle]:
        particles = []
        for _ in range(self.count):
            # uniform in [-spread, spread] on each axis
            speed_x = (self.rng.random() - 0.5) * 2 * self.spread
            speed_y = (self.rng.random() - 0.5) * 2 * self.spread
            particles.append(Particle(
                x=x,
                y=y,
                speed_x=speed_x,
                speed_y=speed_y,
                color=color,
                life=self.life,
                max_life=self.life,
                damping=self.damping,
            ))
        return particles


def make_starfield(playfield: Playfield, rng: random.Random, count: int = 100) -> List[Star]:
    """Scatter stars over the playfield"""
    return [
        Star(
            x=rng.random() * playfield.width,
            y=rng.random() * playfield.height,
            speed=rng.random() * 2 + 0.5,
            size=rng.random() * 2 + 1,
        )
        for _ in range(count)
    ]

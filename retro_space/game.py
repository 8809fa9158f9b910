"""
RetroSpaceGame - the orchestrator
---------------------------------
- Owns the player, every entity pool and the score/lives/level counters
- State machine: menu -> playing <-> paused, playing -> gameOver -> menu
- One ``tick()`` per display refresh: update -> spawn -> collide -> level up
- Produces a draw list each frame; knows nothing about the window

Quick test:
    python -m retro_space.play --headless --ticks 3000
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from . import drawing
from .drawing import Clear, DrawCommand
from .effects import EnemySpawner, ParticleEmitter, make_starfield
from .entities import Bullet, Enemy, Particle, Player, Playfield, Star
from .utils import aabb_overlap

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass
class InputState:
    """
    Input accumulators.

    Window events write here as they arrive; the game only reads them at the
    start of the next tick.
    """
    keys: Set[str] = field(default_factory=set)
    pointer_x: float = 0.0
    pointer_y: float = 0.0
    pointer_down: bool = False
    pointer_seen: bool = False
    fire_requested: bool = False

    def key_down(self, name: str):
        if name == "fire" and name not in self.keys:
            self.fire_requested = True
        self.keys.add(name)

    def key_up(self, name: str):
        self.keys.discard(name)

    def is_down(self, name: str) -> bool:
        return name in self.keys

    def move_pointer(self, x: float, y: float):
        self.pointer_x = x
        self.pointer_y = y
        self.pointer_seen = True

    def press_pointer(self):
        self.pointer_down = True
        self.fire_requested = True

    def release_pointer(self):
        self.pointer_down = False

    def consume_fire(self) -> bool:
        requested = self.fire_requested
        self.fire_requested = False
        return requested

    def clear(self):
        self.keys.clear()
        self.pointer_down = False
        self.fire_requested = False


@dataclass(frozen=True)
class HudSnapshot:
    score: int
    lives: int
    level: int
    state: GameState


HudListener = Callable[[HudSnapshot], None]


class RetroSpaceGame:
    """Single-player arcade shooter session"""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        lives: int = 5,
        base_spawn_rate: float = 0.005,
        spawn_rate_step: float = 0.003,
        level_score_step: int = 2000,
        kill_score: int = 100,
        player_width: float = 40.0,
        player_height: float = 30.0,
        player_speed: float = 6.0,
        shoot_cooldown_ticks: int = 6,
        bullet_width: float = 3.0,
        bullet_height: float = 10.0,
        bullet_speed: float = 8.0,
        enemy_width: float = 30.0,
        enemy_height: float = 25.0,
        enemy_speed_range: Tuple[float, float] = (1.0, 2.5),
        enemy_spawn_y: float = -30.0,
        particles_per_explosion: int = 8,
        particle_spread: float = 3.0,
        particle_life: int = 30,
        particle_damping: float = 0.98,
        star_count: int = 100,
        seed: Optional[int] = None,
    ):
        if lives <= 0:
            raise ValueError(f"lives must be positive, got {lives}")
        if level_score_step <= 0:
            raise ValueError(f"level_score_step must be positive, got {level_score_step}")
        if kill_score < 0:
            raise ValueError(f"kill_score must be non-negative, got {kill_score}")

        self.playfield = Playfield(width, height)
        self.rng = random.Random(seed)

        # Session parameters
        self.start_lives = lives
        self.level_score_step = level_score_step
        self.kill_score = kill_score
        self.star_count = star_count

        # Player parameters
        self._player_kwargs = dict(
            width=player_width,
            height=player_height,
            speed=player_speed,
            bullet_speed=bullet_speed,
            bullet_width=bullet_width,
            bullet_height=bullet_height,
            cooldown_ticks=shoot_cooldown_ticks,
        )

        self.spawner = EnemySpawner(
            self.playfield,
            self.rng,
            base_rate=base_spawn_rate,
            rate_step=spawn_rate_step,
            speed_range=enemy_speed_range,
            spawn_y=enemy_spawn_y,
            enemy_width=enemy_width,
            enemy_height=enemy_height,
        )
        self.emitter = ParticleEmitter(
            self.rng,
            count=particles_per_explosion,
            spread=particle_spread,
            life=particle_life,
            damping=particle_damping,
        )

        self.controls = InputState()
        self._listeners: List[HudListener] = []

        self.state = GameState.MENU
        self.player: Player = None  # type: ignore
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = make_starfield(self.playfield, self.rng, star_count)

        self.score = 0
        self.lives = lives
        self.level = 1
        self.tick_count = 0

        self._reset_session()

    # ----------------------------
    # Properties
    # ----------------------------

    @property
    def width(self) -> float:
        return self.playfield.width

    @property
    def height(self) -> float:
        return self.playfield.height

    @property
    def spawn_rate(self) -> float:
        return self.spawner.rate

    def snapshot(self) -> HudSnapshot:
        return HudSnapshot(self.score, self.lives, self.level, self.state)

    def add_listener(self, listener: HudListener):
        """Register a HUD callback; it is called immediately with the current values"""
        self._listeners.append(listener)
        listener(self.snapshot())

    def reseed(self, seed: Optional[int]):
        """Reseed the game rng; the starfield is rebuilt so the session replays exactly"""
        self.rng.seed(seed)
        self.stars = make_starfield(self.playfield, self.rng, self.star_count)

    # ----------------------------
    # Control signals
    # ----------------------------

    def start(self) -> bool:
        if self.state is not GameState.MENU:
            logger.debug("start ignored in state %s", self.state.value)
            return False
        self.controls.fire_requested = False
        self._set_state(GameState.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.PLAYING:
            self._set_state(GameState.PAUSED)
        elif self.state is GameState.PAUSED:
            # presses made while paused are dropped
            self.controls.fire_requested = False
            self._set_state(GameState.PLAYING)
        else:
            logger.debug("pause ignored in state %s", self.state.value)
            return False
        return True

    def restart(self):
        """Back to the menu with a fresh session"""
        self.state = GameState.MENU
        self._reset_session()
        logger.info("Game reset")

    def _set_state(self, state: GameState):
        logger.info("State %s -> %s", self.state.value, state.value)
        self.state = state
        self._notify()

    def _reset_session(self):
        self.player = Player(
            x=self.playfield.width / 2,
            y=self.playfield.height - 50,
            playfield=self.playfield,
            fire=self._add_bullet,
            **self._player_kwargs,
        )
        self.bullets = []
        self.enemies = []
        self.particles = []
        self.score = 0
        self.lives = self.start_lives
        self.level = 1
        self.tick_count = 0
        self.spawner.reset()
        self.controls.clear()
        self._notify()

    def _add_bullet(self, bullet: Bullet):
        self.bullets.append(bullet)

    # ----------------------------
    # Per-tick update
    # ----------------------------

    def tick(self) -> bool:
        """Advance one frame. Does nothing unless the game is playing."""
        if self.state is not GameState.PLAYING:
            return False

        self.tick_count += 1

        self.player.update(self.controls)
        self._update_bullets()
        self._update_enemies()
        if self.state is not GameState.PLAYING:
            return True
        self._update_particles()
        self._update_stars()

        enemy = self.spawner.maybe_spawn()
        if enemy is not None:
            self.enemies.append(enemy)

        self._handle_collisions()
        if self.state is not GameState.PLAYING:
            return True

        self._check_level()
        return True

    def _update_bullets(self):
        for b in self.bullets:
            b.update()
            if b.y < 0:
                b.alive = False
        self.bullets = [b for b in self.bullets if b.alive]

    def _update_enemies(self):
        for e in self.enemies:
            e.update()
            if e.y > self.playfield.height:
                e.alive = False
        escaped = sum(1 for e in self.enemies if not e.alive)
        self.enemies = [e for e in self.enemies if e.alive]
        for _ in range(escaped):
            self._lose_life()

    def _update_particles(self):
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.alive]

    def _update_stars(self):
        for s in self.stars:
            s.update(self.playfield, self.rng)

    def _handle_collisions(self):
        # Bullets vs enemies; each entity is consumed at most once
        for b in self.bullets:
            for e in self.enemies:
                if not e.alive:
                    continue
                if aabb_overlap(b, e):
                    b.alive = False
                    e.alive = False
                    self.particles.extend(self.emitter.burst(e.x, e.y, drawing.EXPLOSION_ENEMY))
                    self.score += self.kill_score
                    logger.debug("Enemy destroyed, score=%d", self.score)
                    self._notify()
                    break

        self.enemies = [e for e in self.enemies if e.alive]
        self.bullets = [b for b in self.bullets if b.alive]

        # Player vs enemies
        for e in self.enemies:
            if aabb_overlap(self.player, e):
                e.alive = False
                self.particles.extend(self.emitter.burst(e.x, e.y, drawing.EXPLOSION_ENEMY))
                logger.debug("Player hit at (%.1f, %.1f)", self.player.x, self.player.y)
                self._lose_life()
                if self.state is GameState.GAME_OVER:
                    break

        self.enemies = [e for e in self.enemies if e.alive]

    def _check_level(self):
        target = self.score // self.level_score_step + 1
        while self.level < target:
            self.level += 1
            self.spawner.raise_rate()
            logger.info("Level %d, spawn rate %.3f", self.level, self.spawner.rate)
            self._notify()

    def _lose_life(self):
        if self.state is GameState.GAME_OVER:
            return
        self.lives -= 1
        self._notify()
        if self.lives <= 0:
            self.lives = 0
            self._game_over()

    def _game_over(self):
        logger.info("Game over, final score %d", self.score)
        self._set_state(GameState.GAME_OVER)
        self.controls.clear()

    def _notify(self):
        snap = self.snapshot()
        for listener in self._listeners:
            listener(snap)

    # ----------------------------
    # Rendering contract
    # ----------------------------

    def draw_list(self) -> List[DrawCommand]:
        """Ordered draw commands: clear, stars, player, bullets, enemies, particles"""
        commands: List[DrawCommand] = [Clear(self.playfield.width, self.playfield.height)]
        for s in self.stars:
            commands.extend(s.draw())
        commands.extend(self.player.draw())
        for b in self.bullets:
            commands.extend(b.draw())
        for e in self.enemies:
            commands.extend(e.draw())
        for p in self.particles:
            commands.extend(p.draw())
        return commands

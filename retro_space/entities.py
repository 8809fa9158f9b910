"""
Game entity dataclasses

Every entity carries its own position, size and per-tick velocity and moves
itself in ``update``. ``draw`` returns the draw commands for the entity.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from . import drawing
from .drawing import DrawCommand, Rect, Circle
from .utils import clamp, is_finite, normalize

if TYPE_CHECKING:
    from .game import InputState


def _check_shape(kind: str, x: float, y: float, width: float, height: float,
                 allow_empty: bool = False):
    if not is_finite(x, y, width, height):
        raise ValueError(f"{kind}: position and size must be finite, got "
                         f"({x}, {y}, {width}, {height})")
    if width < 0 or height < 0:
        raise ValueError(f"{kind}: negative size {width}x{height}")
    if not allow_empty and (width == 0 or height == 0):
        raise ValueError(f"{kind}: zero size {width}x{height}")


@dataclass(frozen=True)
class Playfield:
    """Visible rectangle entities move within"""
    width: float
    height: float

    def __post_init__(self):
        if not is_finite(self.width, self.height) or self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must have positive size, got {self.width}x{self.height}")


@dataclass
class Bullet:
    """Player projectile, travels straight up"""
    x: float
    y: float
    speed_y: float
    width: float = 3.0
    height: float = 10.0
    alive: bool = True

    speed_x = 0.0  # no horizontal drift

    def __post_init__(self):
        _check_shape("Bullet", self.x, self.y, self.width, self.height)
        if not is_finite(self.speed_y):
            raise ValueError(f"Bullet: speed must be finite, got {self.speed_y}")

    def update(self):
        self.y += self.speed_y

    def draw(self) -> List[DrawCommand]:
        return [Rect(self.x, self.y, self.width, self.height, drawing.GREEN, glow=5.0)]


@dataclass
class Enemy:
    """Enemy ship descending at constant speed"""
    x: float
    y: float
    speed_y: float
    width: float = 30.0
    height: float = 25.0
    alive: bool = True

    speed_x = 0.0

    def __post_init__(self):
        _check_shape("Enemy", self.x, self.y, self.width, self.height)
        if not is_finite(self.speed_y):
            raise ValueError(f"Enemy: speed must be finite, got {self.speed_y}")

    def update(self):
        self.y += self.speed_y

    def draw(self) -> List[DrawCommand]:
        x, y, w, h = self.x, self.y, self.width, self.height
        return [
            Rect(x, y, w, h, drawing.ORANGE),
            Rect(x + 5, y + 5, w - 10, 5, drawing.YELLOW),
            # weapons
            Rect(x + 2, y + h - 5, 4, 8, drawing.RED),
            Rect(x + w - 6, y + h - 5, 4, 8, drawing.RED),
        ]


@dataclass
class Particle:
    """Short-lived explosion fragment; point sized for collision purposes"""
    x: float
    y: float
    speed_x: float
    speed_y: float
    color: str = drawing.EXPLOSION_ENEMY
    life: int = 30
    max_life: int = 30
    damping: float = 0.98
    size: float = 3.0  # render size only
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        _check_shape("Particle", self.x, self.y, self.width, self.height, allow_empty=True)
        if not is_finite(self.speed_x, self.speed_y):
            raise ValueError(f"Particle: velocity must be finite, got "
                             f"({self.speed_x}, {self.speed_y})")
        if self.max_life <= 0:
            raise ValueError(f"Particle: max_life must be positive, got {self.max_life}")

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def alpha(self) -> float:
        return clamp(self.life / self.max_life, 0.0, 1.0)

    def update(self):
        self.x += self.speed_x
        self.y += self.speed_y
        self.life -= 1
        self.speed_x *= self.damping
        self.speed_y *= self.damping

    def draw(self) -> List[DrawCommand]:
        return [Rect(self.x, self.y, self.size, self.size,
                     drawing.color_for_tag(self.color), alpha=self.alpha)]


@dataclass
class Star:
    """Background star, wraps back to the top"""
    x: float
    y: float
    speed: float
    size: float

    def update(self, playfield: Playfield, rng: random.Random):
        self.y += self.speed
        if self.y > playfield.height:
            self.y = 0.0
            self.x = rng.random() * playfield.width

    def draw(self) -> List[DrawCommand]:
        return [Circle(self.x, self.y, self.size, drawing.STAR)]


@dataclass
class Player:
    """
    Player ship.

    The ship only knows the playfield bounds and a ``fire`` callback that hands
    new bullets to whoever owns the bullet pool.
    """
    x: float
    y: float
    playfield: Playfield
    fire: Callable[[Bullet], None]
    width: float = 40.0
    height: float = 30.0
    speed: float = 6.0
    bullet_speed: float = 8.0
    bullet_width: float = 3.0
    bullet_height: float = 10.0
    cooldown_ticks: int = 6
    shoot_cooldown: int = 0
    pointer_controlled: bool = False
    speed_x: float = field(default=0.0, init=False)
    speed_y: float = field(default=0.0, init=False)

    def __post_init__(self):
        _check_shape("Player", self.x, self.y, self.width, self.height)
        if self.speed <= 0:
            raise ValueError(f"Player: speed must be positive, got {self.speed}")

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def shoot(self) -> Optional[Bullet]:
        """Fire one bullet from the nose if the cooldown has run out"""
        if self.shoot_cooldown > 0:
            return None
        bullet = Bullet(
            x=self.center_x - self.bullet_width / 2,
            y=self.y,
            speed_y=-self.bullet_speed,
            width=self.bullet_width,
            height=self.bullet_height,
        )
        self.fire(bullet)
        self.shoot_cooldown = self.cooldown_ticks
        return bullet

    def update(self, controls: "InputState"):
        if controls.consume_fire():
            self.shoot()

        # Sticky: once the pointer has been used the keyboard no longer steers
        if controls.pointer_seen:
            self.pointer_controlled = True

        if self.pointer_controlled:
            self.speed_x, self.speed_y = self._pursue(controls.pointer_x, controls.pointer_y)
        else:
            self.speed_x, self.speed_y = self._steer(controls)

        self.x += self.speed_x
        self.y += self.speed_y

        if self.pointer_controlled:
            self.x = clamp(self.x, 0.0, self.playfield.width - self.width)
            self.y = clamp(self.y, 0.0, self.playfield.height - self.height)

        if controls.pointer_down or controls.is_down("fire"):
            self.shoot()

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

    def _pursue(self, pointer_x: float, pointer_y: float):
        # Constant-speed pursuit of the pointer, ship centred on it
        dx = (pointer_x - self.width / 2) - self.x
        dy = (pointer_y - self.height / 2) - self.y
        if math.hypot(dx, dy) <= 5:
            return 0.0, 0.0
        nx, ny = normalize(dx, dy)
        return nx * self.speed, ny * self.speed

    def _steer(self, controls: "InputState"):
        # Diagonals are intentionally not normalized
        vx, vy = 0.0, 0.0
        if controls.is_down("left") and self.x > 0:
            vx -= self.speed
        if controls.is_down("right") and self.x < self.playfield.width - self.width:
            vx += self.speed
        if controls.is_down("up") and self.y > 0:
            vy -= self.speed
        if controls.is_down("down") and self.y < self.playfield.height - self.height:
            vy += self.speed
        return vx, vy

    def draw(self) -> List[DrawCommand]:
        x, y, w, h = self.x, self.y, self.width, self.height
        return [
            Rect(x + w / 2 - 2, y, 4, h, drawing.GREEN),
            # wings
            Rect(x, y + h / 2, w, 8, drawing.YELLOW),
            # cockpit
            Rect(x + w / 2 - 6, y + 5, 12, 15, drawing.ORANGE),
            # engine glow
            Rect(x + 5, y + h, 8, 6, drawing.GREEN, glow=10.0),
            Rect(x + w - 13, y + h, 8, 6, drawing.GREEN, glow=10.0),
        ]

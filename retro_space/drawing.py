"""
Draw commands produced by the game each frame.

The game never touches a graphics library. It emits a flat list of these
records in playfield coordinates (origin top-left, y grows downward) and the
window replays them.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

Color = Tuple[int, int, int]

# Palette
BACKGROUND = (0, 8, 20)
STAR = (255, 255, 255)
GREEN = (0, 255, 65)
YELLOW = (255, 214, 10)
ORANGE = (255, 107, 53)
RED = (255, 0, 0)
HUD = (220, 220, 220)

# Particle colour tags
EXPLOSION_ENEMY = "explosion-enemy"

PARTICLE_COLORS = {
    EXPLOSION_ENEMY: ORANGE,
}


def color_for_tag(tag: str) -> Color:
    """Resolve a particle colour tag, falling back to white"""
    return PARTICLE_COLORS.get(tag, STAR)


@dataclass(frozen=True)
class Clear:
    """Fill the whole playfield"""
    width: float
    height: float
    color: Color = BACKGROUND


@dataclass(frozen=True)
class Circle:
    """Filled circle centred on (x, y)"""
    x: float
    y: float
    radius: float
    color: Color


@dataclass(frozen=True)
class Rect:
    """Filled rectangle with its top-left corner at (x, y)"""
    x: float
    y: float
    width: float
    height: float
    color: Color
    alpha: float = 1.0
    glow: float = 0.0  # blur radius, 0 = none


DrawCommand = Union[Clear, Circle, Rect]


def flip_y(y: float, height: float) -> float:
    """Playfield y (down) to screen y (up)"""
    return height - y


def rect_lrbt(command: Rect, height: float, grow: float = 0.0):
    """
    Screen-space (left, right, bottom, top) of a rect, for y-up renderers.

    ``grow`` pads every side, used for the glow halo.
    """
    top = flip_y(command.y, height)
    return (
        command.x - grow,
        command.x + command.width + grow,
        top - command.height - grow,
        top + grow,
    )


def rasterize(commands, width: int, height: int) -> np.ndarray:
    """
    Paint draw commands into an RGB array of shape (height, width, 3).

    Glow is ignored; alpha is blended over whatever is already painted.
    """
    frame = np.zeros((height, width, 3), dtype=np.float32)
    for command in commands:
        if isinstance(command, Clear):
            frame[:, :] = command.color
        elif isinstance(command, Rect):
            x0 = max(0, int(np.floor(command.x)))
            y0 = max(0, int(np.floor(command.y)))
            x1 = min(width, int(np.ceil(command.x + command.width)))
            y1 = min(height, int(np.ceil(command.y + command.height)))
            if x0 >= x1 or y0 >= y1:
                continue
            a = float(np.clip(command.alpha, 0.0, 1.0))
            region = frame[y0:y1, x0:x1]
            region[:] = region * (1.0 - a) + np.asarray(command.color, dtype=np.float32) * a
        elif isinstance(command, Circle):
            r = command.radius
            x0 = max(0, int(np.floor(command.x - r)))
            y0 = max(0, int(np.floor(command.y - r)))
            x1 = min(width, int(np.ceil(command.x + r)) + 1)
            y1 = min(height, int(np.ceil(command.y + r)) + 1)
            if x0 >= x1 or y0 >= y1:
                continue
            ys, xs = np.mgrid[y0:y1, x0:x1]
            mask = (xs + 0.5 - command.x) ** 2 + (ys + 0.5 - command.y) ** 2 <= r * r
            frame[y0:y1, x0:x1][mask] = command.color
        else:
            raise TypeError(f"Unknown draw command: {command!r}")
    return frame.astype(np.uint8)

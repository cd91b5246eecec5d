"""
Entities
========

Balls, hands, the playing field and the shared ball collection.
"""

from __future__ import annotations

import colorsys
import threading
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Sequence, Tuple, Union


def hue_color(
    index: int,
    hue_step: float,
    saturation: float,
    lightness: float
) -> Tuple[int, int, int]:
    """
    RGB color for the ball spawned at `index`.

    Hue rotates by `hue_step` degrees per index; saturation and lightness
    stay fixed.
    """
    hue = (index * hue_step) % 360.0
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, lightness, saturation)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


class Ball:
    """
    A simulated circular body.

    Position and velocity are mutated every tick; radius and color are
    fixed at creation.
    """

    __slots__ = ("x", "y", "vx", "vy", "_radius", "_color", "_index")

    def __init__(
        self,
        x: float,
        y: float,
        radius: float,
        color: Tuple[int, int, int] = (255, 255, 255),
        vx: float = 0.0,
        vy: float = 0.0,
        index: int = 0
    ):
        if radius <= 0:
            raise ValueError(f"Ball radius must be positive, got {radius}")
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)
        self._radius = float(radius)
        self._color = tuple(color)
        self._index = index

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def color(self) -> Tuple[int, int, int]:
        return self._color

    @property
    def index(self) -> int:
        """Spawn order within the round."""
        return self._index

    @property
    def top_y(self) -> float:
        """Top edge (screen y grows downward)."""
        return self.y - self._radius

    def __repr__(self) -> str:
        return (
            f"Ball(#{self._index}, x={self.x:.2f}, y={self.y:.2f}, "
            f"vx={self.vx:.2f}, vy={self.vy:.2f}, r={self._radius})"
        )


@dataclass(frozen=True)
class Hand:
    """A detected hand position. Pure input, no identity across updates."""
    x: float
    y: float


HandLike = Union[Hand, Sequence[float], Mapping[str, float]]


def to_hand(value: HandLike) -> Hand:
    """Coerce a detector output entry to a Hand."""
    if isinstance(value, Hand):
        return value
    if isinstance(value, Mapping):
        return Hand(float(value["x"]), float(value["y"]))
    x, y = value
    return Hand(float(x), float(y))


class PlayField:
    """
    Bounds of the playing surface.

    Owned by the round and shared by reference, so a resize is seen by
    every component on the next tick.
    """

    def __init__(self, width: float, height: float):
        self.resize(width, height)

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Field size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    @property
    def center_x(self) -> float:
        return self.width / 2

    def __repr__(self) -> str:
        return f"PlayField({self.width:g}x{self.height:g})"


class BallCollection:
    """
    Ordered, append-only collection of balls for one round.

    The tick loop and the spawn timer both touch the collection; `lock`
    is the boundary between them. Balls are only removed by `clear()`
    at round start.
    """

    def __init__(self):
        self._balls: List[Ball] = []
        self.lock = threading.RLock()

    def append(self, ball: Ball) -> None:
        with self.lock:
            self._balls.append(ball)

    def extend(self, balls: Sequence[Ball]) -> None:
        with self.lock:
            self._balls.extend(balls)

    def clear(self) -> None:
        with self.lock:
            self._balls.clear()

    def copy(self) -> List[Ball]:
        """Point-in-time list of the balls."""
        with self.lock:
            return list(self._balls)

    def __len__(self) -> int:
        return len(self._balls)

    def __iter__(self) -> Iterator[Ball]:
        # Iterate a copy so a concurrent append cannot disturb the caller
        return iter(self.copy())

    def __getitem__(self, index: int) -> Ball:
        return self._balls[index]

"""2D vectors, screen/world mapping and interpolation helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

WIN_W = 1200
WIN_H = 900
PIX_SIZE = 0.01


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vec2":
        return Vec2(self.x / k, self.y / k)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def length(v: Vec2) -> float:
    return math.hypot(v.x, v.y)


def normalize(v: Vec2) -> Vec2:
    """Unit vector along ``v``; the zero vector stays zero."""
    size = length(v)
    if size:
        return Vec2(v.x / size, v.y / size)
    return Vec2(0.0, 0.0)


def f_interp_to(current: float, target: float, speed: float) -> float:
    """Move ``current`` a fraction ``speed`` (clamped to 0..1) of the way to ``target``."""
    speed = min(max(speed, 0.0), 1.0)
    current += (target - current) * speed
    if abs(current - target) < 0.000001:
        current = target
    return current


def quadratic_ease_out(t: float) -> float:
    return -t * (t - 2)


def smooth_interpolate_to(current: float, target: float, speed: float,
                          delta_time: float) -> float:
    """Ease ``current`` toward ``target`` by a quadratic ease-out of ``speed * delta_time``."""
    t = min(max(speed * delta_time, 0.0), 1.0)
    current += (target - current) * quadratic_ease_out(t)
    if abs(current - target) < 0.00001:
        current = target
    return current


def ws_to_win(pos: Vec2, camera_pos: Vec2, pix_size: float = PIX_SIZE) -> tuple[int, int]:
    """World coordinates to window pixels, with the camera at the window centre."""
    return (int((pos.x - camera_pos.x) / pix_size + WIN_W // 2),
            int((pos.y - camera_pos.y) / pix_size + WIN_H // 2))


def win_to_ws(pos: tuple[int, int], camera_pos: Vec2, pix_size: float = PIX_SIZE) -> Vec2:
    """Window pixels to world coordinates."""
    x, y = pos
    return Vec2((x - WIN_W // 2) * pix_size + camera_pos.x,
                (y - WIN_H // 2) * pix_size + camera_pos.y)


def letterbox_viewport(width: int, height: int) -> tuple[int, int, int, int]:
    """The largest centred 4:3 viewport (x, y, w, h) inside a window."""
    v_width = height * 4 // 3
    v_height = width // 4 * 3
    if width > v_width:
        return ((width - v_width) // 2, 0, v_width, height)
    return (0, (height - v_height) // 2, width, v_height)
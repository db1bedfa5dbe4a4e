"""A pitch/yaw fly camera with view and projection matrices.

Matrices are row-major and act on column vectors: ``m @ [x, y, z, 1]``.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Vector = Sequence[float]


def _vec3(v: Vector) -> np.ndarray:
    return np.asarray(v, dtype=float).reshape(3)


def _normalize(v: np.ndarray) -> np.ndarray:
    size = float(np.linalg.norm(v))
    if size == 0:
        raise ValueError("cannot normalise a zero-length vector")
    return v / size


def _direction(pitch: float, yaw: float) -> np.ndarray:
    p = math.radians(pitch)
    y = math.radians(yaw)
    return np.array([math.cos(p) * math.sin(y), math.sin(p), math.cos(p) * math.cos(y)])


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection; ``fov`` is the vertical angle in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(fov / 2)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def look_at(eye: Vector, center: Vector, up: Vector) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` toward ``center``."""
    eye = _vec3(eye)
    f = _normalize(_vec3(center) - eye)
    s = _normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


class FlyCamera:
    """A camera aimed by pitch and yaw in degrees."""

    def __init__(self, position: Vector = (0.0, 0.0, 0.0), pitch: float = 0.0,
                 yaw: float = 0.0, world_up: Vector = (0.0, 1.0, 0.0)) -> None:
        self.position = _vec3(position)
        self.world_up = _vec3(world_up)
        self.pitch = float(pitch)
        self.yaw = float(yaw)
        self.fov = 45.0
        self.aspect = 8 // 6
        self.z_far = 100.0
        self.forward = _direction(self.pitch, self.yaw)
        self.right = np.cross(self.forward, self.world_up)
        self.up = np.cross(self.right, self.forward)
        self.projection = perspective(self.fov, self.aspect, 0.1, self.z_far)

    @classmethod
    def looking_at(cls, position: Vector, target: Vector,
                   world_up: Vector = (0.0, 1.0, 0.0)) -> "FlyCamera":
        """A camera at ``position`` facing ``target``, with an identity projection."""
        position = _vec3(position)
        forward = _normalize(_vec3(target) - position)
        pitch = math.degrees(math.asin(max(-1.0, min(1.0, float(forward[1])))))
        yaw = math.degrees(math.atan2(float(forward[0]), float(forward[2])))
        camera = cls(position, pitch, yaw, world_up)
        camera.forward = forward
        camera.right = np.cross(forward, camera.world_up)
        camera.up = np.cross(camera.right, forward)
        camera.projection = np.eye(4)
        return camera

    def _update_vectors(self) -> None:
        self.forward = _direction(self.pitch, self.yaw)

    def view_matrix(self) -> np.ndarray:
        """Re-aim from pitch and yaw and return the view matrix."""
        self._update_vectors()
        return look_at(self.position, self.position + self.forward, self.world_up)

    def input(self, pitch: float, yaw: float) -> None:
        """Turn by a mouse delta; one hundred units make one degree."""
        self.pitch += pitch / 100
        self.yaw += yaw / 100

    def move(self, z: float) -> None:
        """Move ``z`` units along the facing direction."""
        self.position = self.position + self.forward * z
"""Vertical jump and fall for characters on the ground plane."""

from __future__ import annotations

from typing import Optional

from .timing import CanRun, Clock

STEP_MS = 10
_STEP_S = 0.01


class Physics:
    """Integrates height ``z`` under gravity in fixed 10 ms steps."""

    def __init__(self, gravity: float = -9.8, clock: Optional[Clock] = None) -> None:
        self.gravity = gravity
        self.speed_z = 0.0
        self._tick = CanRun(clock)

    def drop(self, z: float) -> float:
        """Advance one step if 10 ms have passed; return the new height."""
        if self._tick.ready(STEP_MS):
            return self.step(z)
        return z

    def step(self, z: float) -> float:
        """Advance one step unconditionally; landing clamps height and speed to zero."""
        if z > 0 or self.speed_z > 0:
            self.speed_z += self.gravity * _STEP_S
            return z + self.speed_z * _STEP_S + self.gravity * 0.00005
        self.speed_z = 0.0
        return 0.0
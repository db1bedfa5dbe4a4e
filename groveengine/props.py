"""Scenery drawn from sprite sheets, and a test actor that drifts on the timer."""

from __future__ import annotations

import math
import threading
from typing import Optional

import pygame

from .engine import Actor, EngineState
from .timing import Timer, get_timer
from .vectors import Vec2

CELL = 256


class SheetActor(Actor):
    """An actor showing one cell of a sheet whose cells run down columns of ``GRID``."""

    GRID = 1
    ORIGIN: tuple[int, int] = (0, 0)
    SHEET_FILE = ""

    def __init__(self, state: EngineState, index: int,
                 sheet: Optional[pygame.Surface] = None) -> None:
        super().__init__(state, sheet)
        self.index = index
        self.origin = self.ORIGIN

    def frame_rect(self) -> pygame.Rect:
        """The sheet area of this actor's cell."""
        return pygame.Rect(self.index // self.GRID * CELL,
                           self.index % self.GRID * CELL, CELL, CELL)

    def draw(self, surface: pygame.Surface) -> Optional[pygame.Rect]:
        if self.sprite is None:
            return None
        x, y = self.state.to_window(self.pos)
        y -= self.z / self.state.pix_size
        ox, oy = self.origin
        return surface.blit(self.sprite, (round(x - ox), round(y - oy)),
                            area=self.frame_rect())


class House(SheetActor):
    GRID = 3
    ORIGIN = (128, 220)
    SHEET_FILE = "res/house_256x3.png"


class Tree(SheetActor):
    GRID = 5
    ORIGIN = (128, 256)
    SHEET_FILE = "res/trees_256x5.png"


class DriftingActor(Actor):
    """Moves by its velocity on every timer tick until its tasks are stopped."""

    SCALE = 2
    SPEED = 4.0
    _angle = 0.0
    _angle_lock = threading.Lock()

    def __init__(self, state: EngineState, sprite: Optional[pygame.Surface] = None,
                 timer: Optional[Timer] = None) -> None:
        if sprite is not None:
            width, height = sprite.get_size()
            sprite = pygame.transform.scale(sprite, (width * self.SCALE, height * self.SCALE))
        super().__init__(state, sprite)
        self.origin = (24 * self.SCALE, 48 * self.SCALE)
        with DriftingActor._angle_lock:
            DriftingActor._angle += 1.0
            angle = DriftingActor._angle
        self.velocity = Vec2(math.cos(angle) * self.SPEED, math.sin(angle) * self.SPEED)
        self.async_canceled = False
        self.task = None
        self._timer = timer
        self._lock = threading.Lock()

    def _scheduler(self) -> Timer:
        if self._timer is None:
            self._timer = get_timer()
        return self._timer

    def start(self) -> None:
        """Schedule the next drift step for the timer's next tick."""
        with self._lock:
            if self.async_canceled:
                return
            self.task = self._scheduler().add_task(0, 1, 1, self._step)

    def _step(self) -> None:
        with self._lock:
            if self.async_canceled:
                return
            self.pos = self.pos + self.velocity
        self.start()

    def stop_all_async_tasks(self) -> None:
        with self._lock:
            self.async_canceled = True
            if self.task is not None:
                self.task.cancel()

    def destroy(self) -> None:
        """Stop drifting and remove the actor on the timer's next tick."""
        self.stop_all_async_tasks()
        self._scheduler().add_task(0, 0, 1, self._finish)

    def _finish(self) -> None:
        with self._lock:
            Actor.destroy(self)
"""The player-controlled character: key, axis and click-to-move movement."""

from __future__ import annotations

from typing import Optional

import pygame

from .controller import Axis, Controller, Key
from .engine import Actor, Camera, EngineState
from .timing import CanRun, Clock
from .vectors import Vec2, normalize

MOVE_TICK = 10
MOUSE_PRECISION = 0.1


class PlayerCharacter(Actor):
    """An actor driven by its own controller, followed by its own camera."""

    def __init__(self, state: EngineState, sprite: Optional[pygame.Surface] = None,
                 clock: Optional[Clock] = None) -> None:
        super().__init__(state, sprite)
        self.previous_position = Vec2()
        self.mouse_target = Vec2()
        self.mouse_move = False
        self.speed = 1.0
        self.camera_distance = state.pix_size * 100
        self.move_up_vec = Vec2()
        self.move_right_vec = Vec2()
        self._move_tick = CanRun(clock)

        self.controller = Controller()
        state.controller = self.controller
        bind = self.controller.bind_key
        bind(Key.W, lambda: self.move_up(-1))
        bind(Key.S, lambda: self.move_up(1))
        bind(Key.D, lambda: self.move_right(1))
        bind(Key.A, lambda: self.move_right(-1))
        bind(Key.MOUSE_LEFT, self._click)
        self.controller.bind_axis(Axis.X, self.move_right)
        self.controller.bind_axis(Axis.Y, self.move_up)
        bind(Key.IDLE, self._idle)

        self.camera = Camera(pos=self.pos)
        state.camera = self.camera

    def _click(self) -> None:
        try:
            pos = pygame.mouse.get_pos()
        except pygame.error:
            return
        self.set_mouse_target(pos)

    def _idle(self) -> None:
        if not self.mouse_move:
            self.move(Vec2(), 0)

    def velocity(self) -> Vec2:
        """Displacement made by the last movement step."""
        return self.pos - self.previous_position

    def move(self, direction: Vec2, value: float) -> bool:
        """Take one movement step if a move tick has passed; True if it moved."""
        if not self._move_tick.ready(MOVE_TICK):
            return False
        self.previous_position = self.pos
        self.pos = self.pos + direction * (value * MOVE_TICK / 1000)
        self.move_up_vec = Vec2()
        self.move_right_vec = Vec2()
        return True

    def move_up(self, value: float) -> None:
        self.move_up_vec = Vec2(0.0, value)
        self.mouse_move = False

    def move_right(self, value: float) -> None:
        self.move_right_vec = Vec2(value, 0.0)
        self.mouse_move = False

    def set_mouse_target(self, window_pos: tuple[int, int]) -> None:
        """Walk toward the world point under ``window_pos``."""
        self.mouse_move = True
        self.mouse_target = self.state.to_world(window_pos)

    def move_to_mouse(self) -> None:
        if not self.mouse_move:
            return
        direction = normalize(self.mouse_target - self.pos)
        if (abs(self.pos.x - self.mouse_target.x) > MOUSE_PRECISION
                or abs(self.pos.y - self.mouse_target.y) > MOUSE_PRECISION):
            self.move(direction, self.speed)
        else:
            self.mouse_move = False

    def move_by_key(self) -> None:
        self.move(normalize(self.move_up_vec + self.move_right_vec), self.speed)
        self.mouse_move = False

    def update(self) -> None:
        if self.mouse_move:
            self.move_to_mouse()
        else:
            self.move_by_key()

    def draw(self, surface: pygame.Surface) -> None:
        x, y = self.state.to_window(self.pos)
        self._blit_at(surface, x, y)

    def camera_follow(self) -> None:
        """Centre the camera on the player."""
        self.camera.pos = self.pos
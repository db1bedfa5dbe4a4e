"""Key and axis bindings, and the input polling that fires them."""

from __future__ import annotations

import enum
from typing import Callable

import pygame

from .vectors import letterbox_viewport

KeyAction = Callable[[], object]
AxisAction = Callable[[float], object]

_AXIS_SCALE = 100 / 50


class Key(enum.IntEnum):
    W = 0
    A = 1
    S = 2
    D = 3
    Q = 4
    E = 5
    R = 6
    UP = 7
    DOWN = 8
    SPACE = 9
    LEFT = 10
    RIGHT = 11
    MOUSE_RIGHT = 12
    MOUSE_LEFT = 13
    UI_OPEN_OR_CLOSE = 14
    OPEN_UI = 15
    CLOSE_UI = 16
    IDLE = 8
    JUMP = 9


class Axis(enum.IntEnum):
    X = 0
    Y = 1


_HELD_KEYS = (
    (pygame.K_w, Key.W),
    (pygame.K_a, Key.A),
    (pygame.K_s, Key.S),
    (pygame.K_d, Key.D),
    (pygame.K_SPACE, Key.SPACE),
)


def _nothing(*_args) -> None:
    return None


class Controller:
    """Maps keys and axes to actions; every slot starts as a no-op."""

    def __init__(self) -> None:
        self._keys: dict[Key, KeyAction] = {key: _nothing for key in Key}
        self._axes: dict[Axis, AxisAction] = {axis: _nothing for axis in Axis}

    def bind_key(self, key: Key, func: KeyAction) -> None:
        self._keys[Key(key)] = func

    def bind_axis(self, axis: Axis, func: AxisAction) -> None:
        self._axes[Axis(axis)] = func

    def press(self, key: Key) -> None:
        self._keys[Key(key)]()

    def move_axis(self, axis: Axis, value: float) -> None:
        self._axes[Axis(axis)](value)

    def _target(self, state) -> "Controller":
        return state.controller if state.controller is not None else self

    def handle_event(self, event: pygame.event.Event, state) -> None:
        """React to one window event."""
        if event.type == pygame.QUIT:
            state.game_continue = False
        elif event.type == pygame.VIDEORESIZE:
            state.viewport = letterbox_viewport(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKQUOTE:
                state.console_visible = not state.console_visible
            elif event.key == pygame.K_BACKSPACE:
                self.press(Key.UI_OPEN_OR_CLOSE)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self._target(state).press(Key.MOUSE_LEFT)
            elif event.button == 3:
                self._target(state).press(Key.MOUSE_RIGHT)

    def poll(self, state) -> None:
        """Fire held movement keys, then handle at most one pending event."""
        pressed = pygame.key.get_pressed()
        for code, key in _HELD_KEYS:
            if pressed[code]:
                self._target(state).press(key)

        event = pygame.event.poll()
        if event.type == pygame.NOEVENT:
            return
        self.handle_event(event, state)

        if pygame.joystick.get_init() and pygame.joystick.get_count():
            stick = pygame.joystick.Joystick(0)
            axes = stick.get_numaxes()
            if axes > 0:
                self._target(state).move_axis(Axis.X, stick.get_axis(0) * _AXIS_SCALE)
            if axes > 1:
                self._target(state).move_axis(Axis.Y, stick.get_axis(1) * _AXIS_SCALE)
"""Buttons, the pause panel that holds them, and the drawn mouse cursor."""

from __future__ import annotations

import enum
from typing import Callable, Optional

import pygame

from .controller import Controller, Key
from .engine import EngineState, FontRef, print_text

Point = tuple[int, int]
Color = tuple[int, int, int]

CURSOR_SCALE = 0.3


class ButtonState(enum.IntEnum):
    IDLE = 0
    HOVERED = 1
    CLICKED = 2


def _nothing() -> None:
    return None


class Button:
    """A labelled rectangle that fires ``on_clicked`` once per press."""

    def __init__(self, position: Point = (0, 0), width: int = 40, height: int = 20,
                 label: str = "",
                 on_clicked: Optional[Callable[[], object]] = None) -> None:
        self.position = position
        self.width = width
        self.height = height
        self.label = label
        self.on_clicked = on_clicked or _nothing
        self.text_color_idle: Color = (0, 0, 0)
        self.text_color_hovered: Color = (255, 255, 255)
        self.text_color = self.text_color_idle
        self.state = ButtonState.IDLE
        self._armed = True

    def is_mouse_on(self, mouse_pos: Point) -> bool:
        x = mouse_pos[0] - self.position[0]
        y = mouse_pos[1] - self.position[1]
        return 0 <= x <= self.width and 0 <= y <= self.height

    def update(self, mouse_pos: Point, pressed: bool) -> ButtonState:
        """Track hover and clicks; a held button fires only on the first frame."""
        if self.is_mouse_on(mouse_pos):
            self.state = ButtonState.HOVERED
            self.text_color = self.text_color_hovered
            if pressed:
                if self._armed:
                    self.state = ButtonState.CLICKED
                    self.on_clicked()
                self._armed = False
            else:
                self._armed = True
        else:
            self.state = ButtonState.IDLE
            self.text_color = self.text_color_idle
        return self.state

    def draw(self, surface: pygame.Surface, texture: Optional[pygame.Surface] = None,
             font: FontRef = None) -> pygame.Rect:
        """Draw the frame of ``texture`` for the current state, then the label."""
        x, y = self.position
        if texture is not None:
            side = texture.get_height()
            frame = pygame.Surface((side, side), pygame.SRCALPHA)
            frame.blit(texture, (0, 0), area=pygame.Rect(int(self.state) * side, 0, side, side))
            surface.blit(pygame.transform.scale(frame, (self.width, self.height)), (x, y))
        if self.label:
            print_text(surface, self.label, x + self.height * 0.5, y + self.height * 0.3,
                       max(1, int(self.height * 0.3)), self.text_color, font)
        return pygame.Rect(x, y, self.width, self.height)


class Widget:
    """A centred panel with start and quit buttons that takes over input while open."""

    def __init__(self, state: EngineState, position: Point, width: int, height: int,
                 on_quit: Optional[Callable[[], object]] = None) -> None:
        self.state = state
        self.position = position
        self.width = width
        self.height = height
        self.opened = False
        self.background: Optional[pygame.Surface] = None
        self.button_texture: Optional[pygame.Surface] = None
        self.font: FontRef = None
        self._saved_controller: Optional[Controller] = None
        self.controller = Controller()
        self.controller.bind_key(Key.UI_OPEN_OR_CLOSE, self.toggle)
        left, top = self.left_top()
        self.buttons = [
            Button((left + 100, top + 100), 160, 80, "开始游戏", self.close),
            Button((left + 100, top + 200), 160, 80, "关闭游戏",
                   on_quit or self._quit_game),
        ]

    def _quit_game(self) -> None:
        self.state.game_continue = False

    def left_top(self) -> Point:
        return (self.position[0] - self.width // 2, self.position[1] - self.height // 2)

    def open(self) -> None:
        """Show the panel and route input to its own controller."""
        self.state.widget = self
        self._saved_controller = self.state.controller
        self.state.controller = self.controller
        self.opened = True

    def close(self) -> None:
        """Hide the panel and give input back to the previous controller."""
        self.state.widget = None
        self.state.controller = self._saved_controller
        self.opened = False

    def toggle(self) -> None:
        if self.opened:
            self.close()
        else:
            self.open()

    def update(self, mouse_pos: Point, pressed: bool) -> None:
        for button in list(self.buttons):
            button.update(mouse_pos, pressed)

    def draw(self, surface: pygame.Surface) -> None:
        if self.background is not None:
            panel = pygame.transform.scale(self.background, (self.width, self.height))
            surface.blit(panel, self.left_top())
        for button in self.buttons:
            button.draw(surface, self.button_texture, self.font)


class MouseCursor:
    """A drawn cursor image that replaces the system pointer."""

    def __init__(self, image: Optional[pygame.Surface] = None) -> None:
        self.image = None
        if image is not None:
            width, height = image.get_size()
            self.image = pygame.transform.scale(
                image, (int(width * CURSOR_SCALE), int(height * CURSOR_SCALE)))
        try:
            pygame.mouse.set_visible(False)
        except pygame.error:
            pass

    def draw(self, surface: pygame.Surface, pos: Point) -> Optional[pygame.Rect]:
        if self.image is None:
            return None
        return surface.blit(self.image, pos)
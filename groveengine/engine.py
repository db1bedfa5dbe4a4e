"""Shared engine state, actors, the camera, the world backdrop and on-screen text."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import pygame

from .vectors import PIX_SIZE, WIN_H, WIN_W, Vec2, win_to_ws, ws_to_win

Color = tuple[int, int, int]
FontRef = Optional[str]

FONT_FILES = ("heiti.ttf", "kaiti.ttf", "zhunyuan.ttf")
FONT_SLOTS = 4
DEFAULT_TEXT = "未输入文字"
WHITE: Color = (255, 255, 255)
LOG_LINE_HEIGHT = 30

_font_cache: dict[tuple[FontRef, int], pygame.font.Font] = {}


class GameObject:
    """Base of everything the engine tracks; invalid objects are dropped."""

    valid: bool = True


@dataclass
class Camera(GameObject):
    """The 2D camera; its world position sits at the window centre."""

    position_in_win: tuple[int, int] = (WIN_W // 2, WIN_H // 2)
    pos: Vec2 = field(default_factory=Vec2)


@dataclass
class EngineState:
    """Everything the running game shares between its loops."""

    camera: Camera = field(default_factory=Camera)
    pix_size: float = PIX_SIZE
    frame_limit: int = 60
    delta_time: int = 0
    actors: list["Actor"] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)
    world: Optional["World"] = None
    player: Any = None
    controller: Any = None
    widget: Any = None
    debug_logs: list["DebugLog"] = field(default_factory=list)
    log_index: int = 0
    fonts: list[FontRef] = field(default_factory=lambda: [None] * FONT_SLOTS)
    game_continue: bool = True
    console_visible: bool = True
    viewport: tuple[int, int, int, int] = (0, 0, WIN_W, WIN_H)

    def add_actor(self, actor: "Actor") -> None:
        with self.lock:
            self.actors.append(actor)

    def purge_invalid(self) -> list["Actor"]:
        """Remove actors that are no longer valid and return them."""
        with self.lock:
            removed = [actor for actor in self.actors if not actor.valid]
            self.actors[:] = [actor for actor in self.actors if actor.valid]
        return removed

    def to_window(self, pos: Vec2) -> tuple[int, int]:
        return ws_to_win(pos, self.camera.pos, self.pix_size)

    def to_world(self, pos: tuple[int, int]) -> Vec2:
        return win_to_ws(pos, self.camera.pos, self.pix_size)


class Actor(GameObject):
    """A sprite placed in the world; registers itself with the state on creation."""

    def __init__(self, state: EngineState,
                 sprite: Optional[pygame.Surface] = None) -> None:
        self.state = state
        self.sprite = sprite
        self.origin: tuple[float, float] = (0, 0)
        self.pos = Vec2()
        self.z = 0.0
        self.valid = True
        self.ticks = 0
        state.add_actor(self)

    def update(self) -> None:
        """Per-tick logic; a plain actor only counts the ticks it received."""
        self.ticks += 1

    def _blit_at(self, surface: pygame.Surface, x: float, y: float) -> None:
        if self.sprite is None:
            return
        ox, oy = self.origin
        surface.blit(self.sprite, (round(x - ox), round(y - oy)))

    def draw(self, surface: pygame.Surface) -> None:
        x, y = self.state.to_window(self.pos)
        self._blit_at(surface, x, y - self.z / self.state.pix_size)

    def destroy(self) -> None:
        """Mark the actor for removal at the next purge."""
        self.valid = False


class World(GameObject):
    """The backdrop image; becomes the state's current world."""

    def __init__(self, state: EngineState,
                 sprite: Optional[pygame.Surface] = None) -> None:
        self.state = state
        self.sprite = sprite
        self.pos = Vec2()
        self.valid = True
        self.ticks = 0
        state.world = self

    def update(self) -> None:
        """Per-tick world logic; the plain world only counts its ticks."""
        self.ticks += 1

    def draw(self, surface: pygame.Surface) -> None:
        if self.sprite is not None:
            surface.blit(self.sprite, self.state.to_window(self.pos))


class DebugLog(GameObject):
    """One line of on-screen debug text, stacked below the previous ones."""

    def __init__(self, state: EngineState) -> None:
        self.state = state
        self.text = ""
        self.valid = True
        state.debug_logs.append(self)

    def draw(self, surface: pygame.Surface) -> None:
        print_text(surface, self.text, 0, LOG_LINE_HEIGHT * self.state.log_index)
        self.state.log_index += 1


def debug_display(state: EngineState, surface: pygame.Surface) -> None:
    """Draw every registered debug line from the top of the window."""
    state.log_index = 0
    for log in state.debug_logs:
        log.draw(surface)


def _font(path: FontRef, size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    key = (path, size)
    font = _font_cache.get(key)
    if font is None:
        font = _font_cache[key] = pygame.font.Font(path, size)
    return font


def load_fonts(root: Union[str, Path] = ".") -> list[FontRef]:
    """Find the game's fonts under ``root/res``; slots that fail to load hold None."""
    fonts: list[FontRef] = [None] * FONT_SLOTS
    for slot, name in enumerate(FONT_FILES):
        path = Path(root) / "res" / name
        try:
            _font(str(path), 12)
        except (OSError, FileNotFoundError, pygame.error):
            print(f"font{slot + 1} failed to load")
            continue
        fonts[slot] = str(path)
        print(f"font{slot + 1} loaded")
    return fonts


def print_text(surface: pygame.Surface, text: str = DEFAULT_TEXT, x: int = 0,
               y: int = 0, size: int = 30, color: Sequence[int] = WHITE,
               font: FontRef = None) -> pygame.Rect:
    """Draw ``text`` with its top-left corner at (x, y); return the covered rect."""
    rendered = _font(font, int(size)).render(text, True, tuple(color))
    return surface.blit(rendered, (int(x), int(y)))


def print_num(surface: pygame.Surface, value: Union[int, float], x: int = 0,
              y: int = 0, size: int = 30, color: Sequence[int] = WHITE,
              font: FontRef = None) -> pygame.Rect:
    """Draw a number: integers plainly, floats with six decimals."""
    text = f"{value:f}" if isinstance(value, float) else f"{int(value):d}"
    return print_text(surface, text, x, y, size, color, font)
"""Loads the game's textures, sounds and animations from XML tables."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pygame

from .animation import Animation
from .xmlread import XmlTable

PICTURE_TABLE = "res/picData.xml"
SOUND_TABLE = "res/soundData.xml"
ANIMATION_TABLE = "res/animData.xml"


@dataclass
class Sprite:
    """An image together with the point that is placed at its position."""

    image: pygame.Surface
    origin: tuple[float, float] = (0, 0)


def _load_image(path: Path) -> pygame.Surface:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError, OSError):
        print(f"file[{path}] load failed")
        return pygame.Surface((0, 0))


def _load_sound(path: Path) -> Optional[pygame.mixer.Sound]:
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        return pygame.mixer.Sound(str(path))
    except (pygame.error, FileNotFoundError, OSError):
        print(f"file[{path}] load failed")
        return None


def _int_field(row: dict[str, str], name: str) -> int:
    text = row.get(name)
    if text is None:
        raise ValueError(f"animation record has no {name!r} field")
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"animation field {name!r} is not an integer: {text!r}") from exc


class Resources:
    """All resources named by the tables under ``root/res``, keyed by record id."""

    def __init__(self, root: Union[str, Path] = ".") -> None:
        self.root = Path(root)
        self.loaded = False
        self.textures: dict[int, Sprite] = {}
        self.sounds: dict[int, Optional[pygame.mixer.Sound]] = {}
        self.animations: dict[int, Animation] = {}
        self.load_textures()
        self.load_sounds()
        self.load_animations()
        self.loaded = True

    def _table(self, name: str) -> XmlTable:
        return XmlTable(self.root / name)

    def _path(self, row: dict[str, str]) -> Path:
        return self.root / row.get("path", "")

    def load_textures(self) -> None:
        """Load every picture; each sprite's origin is the image centre."""
        table = self._table(PICTURE_TABLE)
        for resource_id in table:
            image = _load_image(self._path(table[resource_id]))
            width, height = image.get_size()
            self.textures[resource_id] = Sprite(image, (width // 2, height // 2))

    def load_sounds(self) -> None:
        """Load every sound; a sound that cannot be loaded is stored as None."""
        table = self._table(SOUND_TABLE)
        for resource_id in table:
            self.sounds[resource_id] = _load_sound(self._path(table[resource_id]))

    def load_animations(self) -> None:
        """Load every sprite-sheet animation with its frame size and grid."""
        table = self._table(ANIMATION_TABLE)
        for resource_id in table:
            row = table[resource_id]
            self.animations[resource_id] = Animation(
                _load_image(self._path(row)),
                _int_field(row, "sizex"),
                _int_field(row, "sizey"),
                _int_field(row, "row"),
                _int_field(row, "column"),
            )

    def sprite(self, resource_id: int) -> Sprite:
        """The sprite loaded under ``resource_id``."""
        return self.textures[resource_id]


_cache: dict[Path, Resources] = {}
_cache_lock = threading.Lock()


def get_resources(root: Union[str, Path] = ".") -> Resources:
    """The resources under ``root``, loaded once and shared afterwards."""
    key = Path(root).resolve()
    with _cache_lock:
        resources = _cache.get(key)
        if resources is None:
            resources = _cache[key] = Resources(root)
        return resources
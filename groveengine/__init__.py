"""A small top-down 2D role-playing game engine on pygame, with a playable demo world."""

__version__ = "0.1.0"
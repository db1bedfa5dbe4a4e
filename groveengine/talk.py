"""A speech bubble that types out lines of text over time."""

from __future__ import annotations

from typing import Optional, Sequence

import pygame

from .engine import FontRef, print_text
from .timing import CanRun, Clock

DEFAULT_LINES = ("床前看月光，", "疑是地上霜。", "举头望山月，", "低头思故乡。")
CHAR_MS = 200
LINE_MS = 4000
MAX_CHARS = 50
BUBBLE_ORIGIN_Y = 256


class Talk:
    """Reveals one character every 200 ms and moves to the next line every 4 s."""

    def __init__(self, lines: Sequence[str] = DEFAULT_LINES,
                 clock: Optional[Clock] = None) -> None:
        if not lines:
            raise ValueError("a talk needs at least one line")
        self.lines = list(lines)
        self.left_edge = 10
        self.top_edge = 5
        self.text_flag = 0
        self.str_flag = 0
        self._char_tick = CanRun(clock)
        self._line_tick = CanRun(clock)

    def advance(self) -> str:
        """Step the typing clocks and return the text visible now."""
        if self._char_tick.ready(CHAR_MS) and self.text_flag < MAX_CHARS:
            self.text_flag += 1
        if self._line_tick.ready(LINE_MS) and self.str_flag < len(self.lines) - 1:
            self.text_flag = 0
            self.str_flag += 1
        return self.lines[self.str_flag][:self.text_flag]

    def draw(self, surface: pygame.Surface, pos: tuple[float, float],
             bubble: Optional[pygame.Surface] = None, font: FontRef = None) -> str:
        """Draw the bubble with its bottom-left at ``pos`` and the text inside it."""
        text = self.advance()
        x, y = pos
        bubble_height = 0
        if bubble is not None:
            width, height = bubble.get_size()
            bubble_height = int(height * 0.5)
            scaled = pygame.transform.scale(bubble, (width, bubble_height))
            origin_y = BUBBLE_ORIGIN_Y * 0.5
            surface.blit(scaled, (round(x), round(y - origin_y)))
        if text:
            print_text(surface, text, x + self.left_edge,
                       y - bubble_height + self.top_edge, font=font)
        return text
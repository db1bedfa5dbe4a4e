"""Sprite-sheet animation and the state machine that picks clips for a character."""

from __future__ import annotations

import enum
from typing import Optional, Protocol

import pygame

from .timing import CanRun, Clock

LEFT_ORTN = 1
RIGHT_ORTN = -1
FRAME_MS = 33


class _Playable(Protocol):
    def play(self) -> object: ...


class Animation:
    """Steps through frames ``start``..``end`` of a sheet laid out in ``columns``."""

    def __init__(self, image: pygame.Surface, size_x: int, size_y: int,
                 rows: int, columns: int, clock: Optional[Clock] = None) -> None:
        if columns < 1:
            raise ValueError("an animation sheet needs at least one column")
        self.image = image
        self.size_x = size_x
        self.size_y = size_y
        self.rows = rows
        self.columns = columns
        self.current_frame = 0
        self.rate = 1.0
        self.scale: tuple[float, float] = (1.0, 1.0)
        self.start = 0
        self.end = 0
        self.origin: tuple[int, int] = (size_x // 2, size_y)
        self.texture_rect = image.get_rect()
        self._tick = CanRun(clock)

    def play(self, start: int, end: int) -> None:
        """Loop frames ``start``..``end``; a clip already starting there keeps running."""
        if self.start == start:
            return
        self.start = start
        self.end = end
        self.current_frame = start

    def frame_rect(self) -> pygame.Rect:
        """The sheet area of the current frame."""
        frame = self.current_frame
        return pygame.Rect(frame % self.columns * self.size_x,
                           frame // self.columns * self.size_y,
                           self.size_x, self.size_y)

    def update(self) -> bool:
        """Show the current frame and step on, once per frame period."""
        if not self._tick.ready(FRAME_MS / self.rate):
            return False
        self.texture_rect = self.frame_rect()
        self.current_frame += 1
        if self.current_frame > self.end:
            self.current_frame = self.start
        return True

    def frame_image(self) -> pygame.Surface:
        rect = self.texture_rect
        frame = pygame.Surface(rect.size, pygame.SRCALPHA)
        frame.blit(self.image, (0, 0), area=rect)
        return frame

    def play_sound_at_frame(self, sound: Optional[_Playable], frame: int,
                            played: bool) -> bool:
        """Play ``sound`` once on reaching ``frame``; return the updated played flag."""
        if self.current_frame == frame and not played:
            if sound is not None:
                sound.play()
            played = True
        if self.current_frame != frame:
            played = False
        return played


class AnimState(enum.Enum):
    IDLE = 0
    WALK = 1
    RUN = 2
    ATTACK = 3
    JUMP = 4


_CLIPS = {
    AnimState.IDLE: (40, 59),
    AnimState.WALK: (0, 19),
    AnimState.JUMP: (60, 70),
}

_STEP_FRAMES = (3, 13)


class AnimationBlueprint:
    """Chooses the clip for a character's state and plays footstep sounds."""

    def __init__(self, animation: Animation,
                 step_sound: Optional[_Playable] = None) -> None:
        self.orientation = LEFT_ORTN
        self.state = AnimState.IDLE
        self.played = [False] * 64
        self.animation = animation
        self.step_sound = step_sound
        self.flip_x = False
        animation.play(*_CLIPS[AnimState.IDLE])
        animation.scale = (2.0, 2.0)

    def update_anim(self, surface: pygame.Surface,
                    position: tuple[float, float]) -> pygame.Rect:
        """Advance the clip for the current state and draw it with its origin at ``position``."""
        anim = self.animation
        if self.state is AnimState.WALK:
            self.flip_x = self.orientation < 0
        clip = _CLIPS.get(self.state)
        if clip is not None:
            anim.play(*clip)
        anim.update()
        rect = self._draw(surface, position)
        self.update_sound()
        return rect

    def _draw(self, surface: pygame.Surface,
              position: tuple[float, float]) -> pygame.Rect:
        anim = self.animation
        sx, sy = (abs(k) for k in anim.scale)
        frame = anim.frame_image()
        width, height = frame.get_size()
        frame = pygame.transform.scale(frame, (round(width * sx), round(height * sy)))
        if self.flip_x:
            frame = pygame.transform.flip(frame, True, False)
        ox, oy = anim.origin
        x, y = position
        left = x - (width - ox) * sx if self.flip_x else x - ox * sx
        top = y - oy * sy
        return surface.blit(frame, (round(left), round(top)))

    def update_sound(self) -> None:
        anim = self.animation
        for slot, frame in enumerate(_STEP_FRAMES):
            self.played[slot] = anim.play_sound_at_frame(
                self.step_sound, frame, self.played[slot])
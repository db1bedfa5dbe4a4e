import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from groveengine.animation import (
    FRAME_MS,
    RIGHT_ORTN,
    AnimState,
    Animation,
    AnimationBlueprint,
)


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


class FakeSound:
    def __init__(self):
        self.count = 0

    def play(self):
        self.count += 1


def _anim(clock, columns=4):
    return Animation(pygame.Surface((40, 20)), 10, 10, 2, columns, clock)


def test_columns_must_be_positive():
    with pytest.raises(ValueError):
        Animation(pygame.Surface((4, 4)), 2, 2, 1, 0)


def test_play_sets_frame_and_ignores_same_start():
    anim = _anim(FakeClock())
    anim.play(2, 5)
    assert anim.current_frame == 2
    anim.current_frame = 4
    anim.play(2, 7)
    assert anim.current_frame == 4
    assert anim.end == 5


def test_frame_rect_first_frame():
    anim = _anim(FakeClock())
    assert anim.frame_rect() == pygame.Rect(0, 0, 10, 10)


def test_frame_rect_walks_the_grid():
    anim = _anim(FakeClock())
    anim.current_frame = anim.columns
    assert anim.frame_rect().topleft == (0, anim.size_y)
    anim.current_frame = 1
    assert anim.frame_rect().topleft == (anim.size_x, 0)


def test_update_waits_for_frame_period():
    clock = FakeClock()
    anim = _anim(clock)
    anim.play(1, 3)
    assert anim.update() is False
    assert anim.current_frame == 1
    clock.now = FRAME_MS
    shown = anim.frame_rect()
    assert anim.update() is True
    assert anim.texture_rect == shown
    assert anim.current_frame == 2


def test_update_wraps_to_start():
    clock = FakeClock()
    anim = _anim(clock)
    anim.play(1, 2)
    for step in range(1, 3):
        clock.now = FRAME_MS * step
        anim.update()
    assert anim.current_frame == anim.start


def test_rate_shortens_period():
    clock = FakeClock()
    anim = _anim(clock)
    anim.rate = 2
    anim.play(1, 3)
    clock.now = FRAME_MS / 2
    assert anim.update() is True


def test_play_sound_at_frame_once():
    anim = _anim(FakeClock())
    sound = FakeSound()
    anim.current_frame = 3
    played = anim.play_sound_at_frame(sound, 3, False)
    played = anim.play_sound_at_frame(sound, 3, played)
    assert played is True
    assert sound.count == 1
    anim.current_frame = 4
    assert anim.play_sound_at_frame(sound, 3, played) is False


def test_blueprint_starts_idle_clip():
    anim = _anim(FakeClock(), columns=10)
    bp = AnimationBlueprint(anim)
    assert bp.state is AnimState.IDLE
    assert (anim.start, anim.end) == (40, 59)
    assert anim.scale == (2.0, 2.0)


def test_blueprint_walk_flips_right():
    clock = FakeClock()
    anim = _anim(clock, columns=10)
    bp = AnimationBlueprint(anim)
    bp.state = AnimState.WALK
    bp.orientation = RIGHT_ORTN
    clock.now = FRAME_MS
    surface = pygame.Surface((200, 200))
    rect = bp.update_anim(surface, (100, 100))
    assert anim.start == 0
    assert bp.flip_x is True
    assert rect.size == (anim.size_x * 2, anim.size_y * 2)
    assert rect.bottom == 100


def test_blueprint_step_sound():
    anim = _anim(FakeClock(), columns=10)
    sound = FakeSound()
    bp = AnimationBlueprint(anim, sound)
    anim.current_frame = 13
    bp.update_sound()
    bp.update_sound()
    assert sound.count == 1
    assert bp.played[1] is True
    assert bp.played[0] is False
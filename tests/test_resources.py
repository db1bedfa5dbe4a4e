import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from groveengine.resources import Resources, get_resources


def _table(records):
    items = "".join(
        "<item>" + "".join(f"<{k}>{v}</{k}>" for k, v in rec) + "</item>"
        for rec in records
    )
    return f"<data>{items}</data>"


def _write_tree(root, pics=(), sounds=(), anims=()):
    res = root / "res"
    res.mkdir(exist_ok=True)
    (res / "picData.xml").write_text(_table(pics), encoding="utf-8")
    (res / "soundData.xml").write_text(_table(sounds), encoding="utf-8")
    (res / "animData.xml").write_text(_table(anims), encoding="utf-8")
    return root


def _png(path, size, color=(255, 0, 0)):
    surface = pygame.Surface(size)
    surface.fill(color)
    pygame.image.save(surface, str(path))


def test_texture_loaded_with_centre_origin(tmp_path):
    _png(tmp_path / "a.png", (30, 18))
    _write_tree(tmp_path, pics=[[("id", 1), ("path", "a.png")]])
    res = Resources(tmp_path)
    sprite = res.sprite(1)
    assert sprite.image.get_size() == (30, 18)
    assert sprite.origin == (30 // 2, 18 // 2)
    assert res.loaded is True


def test_missing_image_gives_empty_sprite(tmp_path):
    _write_tree(tmp_path, pics=[[("id", 4), ("path", "nothing.png")]])
    res = Resources(tmp_path)
    assert res.sprite(4).image.get_size() == (0, 0)


def test_unknown_sprite_raises(tmp_path):
    _write_tree(tmp_path)
    res = Resources(tmp_path)
    with pytest.raises(KeyError):
        res.sprite(99)


def test_missing_table_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Resources(tmp_path)


def test_missing_sound_is_none(tmp_path):
    _write_tree(tmp_path, sounds=[[("id", 2), ("path", "step.wav")]])
    res = Resources(tmp_path)
    assert 2 in res.sounds
    assert res.sounds[2] is None


def test_animation_fields(tmp_path):
    _png(tmp_path / "sheet.png", (40, 20))
    _write_tree(tmp_path, anims=[[("id", 1), ("path", "sheet.png"), ("sizex", 10),
                                  ("sizey", 20), ("row", 1), ("column", 4)]])
    res = Resources(tmp_path)
    anim = res.animations[1]
    assert (anim.size_x, anim.size_y, anim.rows, anim.columns) == (10, 20, 1, 4)
    assert anim.image.get_size() == (40, 20)


def test_animation_bad_number_raises(tmp_path):
    _write_tree(tmp_path, anims=[[("id", 1), ("path", "x.png"), ("sizex", "wide"),
                                  ("sizey", 20), ("row", 1), ("column", 4)]])
    with pytest.raises(ValueError):
        Resources(tmp_path)


def test_get_resources_is_shared(tmp_path):
    _write_tree(tmp_path)
    first = get_resources(tmp_path)
    second = get_resources(tmp_path)
    assert first is second
    assert first.loaded is True
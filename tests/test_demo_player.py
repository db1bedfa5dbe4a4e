from types import SimpleNamespace

import pygame
import pytest

from groveengine.animation import LEFT_ORTN, RIGHT_ORTN, Animation, AnimState
from groveengine.controller import Key
from groveengine.demo_player import JUMP_SPEED, DebugPanel, DemoPlayer
from groveengine.engine import EngineState, debug_display
from groveengine.resources import Sprite
from groveengine.vectors import Vec2


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state():
    return EngineState()


@pytest.fixture
def resources(clock):
    sheet = pygame.Surface((320, 256))
    return SimpleNamespace(
        animations={1: Animation(sheet, 32, 32, 8, 10, clock)},
        sounds={},
        textures={
            10: Sprite(pygame.Surface((20, 10)), (10, 5)),
            11: Sprite(pygame.Surface((64, 256)), (32, 128)),
        },
    )


def test_jump_only_from_rest(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    player.jump()
    assert player.physics.speed_z == JUMP_SPEED
    player.physics.speed_z = 2.0
    player.jump()
    assert player.physics.speed_z == 2.0


def test_space_key_jumps(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    state.controller.press(Key.SPACE)
    assert player.physics.speed_z == JUMP_SPEED


def test_ui_key_opens_widget(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    state.controller.press(Key.UI_OPEN_OR_CLOSE)
    assert state.widget is player.widget
    assert state.controller is player.widget.controller
    state.controller.press(Key.UI_OPEN_OR_CLOSE)
    assert state.controller is player.controller


def test_update_after_jump_rises(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    player.jump()
    clock.now = 10
    player.update()
    assert player.z > 0
    assert player.update_state() is AnimState.JUMP
    assert state.camera.pos == player.pos


def test_update_state_walk_and_facing(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    player.previous_position = Vec2()
    player.pos = Vec2(1, 0)
    assert player.update_state() is AnimState.WALK
    assert player.blueprint.orientation == RIGHT_ORTN
    player.pos = Vec2(-1, 0)
    player.update_state()
    assert player.blueprint.orientation == LEFT_ORTN


def test_update_state_idle_when_still(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    assert player.update_state() is AnimState.IDLE


def test_draw_fills_debug_lines(state, resources, clock):
    player = DemoPlayer(state, resources, clock=clock)
    surface = pygame.Surface((1200, 900))
    rect = player.draw(surface)
    texts = [log.text for log in state.debug_logs]
    assert f"场景对象数量：{len(state.actors)}" in texts
    assert rect.width > 0 and rect.height > 0
    assert player.blueprint.state is AnimState.IDLE


def test_debug_panels_stack(state):
    first = DebugPanel(state)
    second = DebugPanel(state)
    first.text = "a"
    second.text = "b"
    debug_display(state, pygame.Surface((200, 100)))
    assert state.log_index == 2
    assert state.debug_logs == [first, second]
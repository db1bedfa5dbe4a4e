"""The demo character: animated, jumping, talking, with a pause panel and debug lines."""

from __future__ import annotations

from typing import Any, Optional

import pygame

from .animation import LEFT_ORTN, RIGHT_ORTN, AnimationBlueprint, AnimState
from .controller import Key
from .engine import DebugLog, EngineState
from .physics import Physics
from .player import PlayerCharacter
from .talk import Talk
from .timing import Clock
from .vectors import WIN_H, WIN_W, length
from .widgets import Widget

ANIMATION_ID = 1
STEP_SOUND_ID = 2
SHADOW_ID = 10
BUBBLE_ID = 11
GRAVITY = -30.0
JUMP_SPEED = 6.0
SHADOW_SCALE = (0.3, 0.2)
SHADOW_LIFT = 5


class DebugPanel(DebugLog):
    """A debug line showing whatever text has been set on it."""

    def draw(self, surface: pygame.Surface) -> None:
        super().draw(surface)


class DemoPlayer(PlayerCharacter):
    """A player with an animation blueprint, jump physics and a speech bubble."""

    def __init__(self, state: EngineState, resources: Any,
                 widget: Optional[Widget] = None, clock: Optional[Clock] = None) -> None:
        super().__init__(state, None, clock)
        self.resources = resources
        self.blueprint = AnimationBlueprint(resources.animations[ANIMATION_ID],
                                            resources.sounds.get(STEP_SOUND_ID))
        self.physics = Physics(GRAVITY, clock)
        self.talk = Talk(clock=clock)
        self.widget = widget if widget is not None else Widget(
            state, (WIN_W // 2, WIN_H // 2), 800, 600)
        self.controller.bind_key(Key.JUMP, self.jump)
        self.controller.bind_key(Key.UI_OPEN_OR_CLOSE, self.widget.open)
        self._position_log = DebugLog(state)
        self._count_log = DebugLog(state)
        self._mouse_log = DebugLog(state)

    def jump(self) -> None:
        """Leave the ground, unless already moving vertically."""
        if not self.physics.speed_z:
            self.physics.speed_z = JUMP_SPEED

    def update_state(self) -> AnimState:
        """Pick facing and clip from the last step and the height."""
        v = self.velocity()
        if v.x > 0:
            self.blueprint.orientation = RIGHT_ORTN
        elif v.x < 0:
            self.blueprint.orientation = LEFT_ORTN
        if self.z > 0.001:
            self.blueprint.state = AnimState.JUMP
        elif length(v) > 0.0001:
            self.blueprint.state = AnimState.WALK
        else:
            self.blueprint.state = AnimState.IDLE
        return self.blueprint.state

    def update(self) -> None:
        self.camera_follow()
        super().update()
        self.z = self.physics.drop(self.z)

    def _draw_shadow(self, surface: pygame.Surface, x: float, y: float) -> None:
        shadow = self.resources.textures.get(SHADOW_ID)
        if shadow is None:
            return
        sx, sy = SHADOW_SCALE
        width, height = shadow.image.get_size()
        image = pygame.transform.scale(shadow.image, (round(width * sx), round(height * sy)))
        ox, oy = shadow.origin
        surface.blit(image, (round(x - ox * sx), round(y - oy * sy)))

    def _refresh_logs(self) -> None:
        self._position_log.text = f"玩家位置：{self.pos.x:f},{self.pos.y:f}"
        self._count_log.text = f"场景对象数量：{len(self.state.actors)}"
        try:
            mouse = self.state.to_world(pygame.mouse.get_pos())
        except pygame.error:
            return
        self._mouse_log.text = f"键鼠位置：{mouse.x:f},{mouse.y:f}"

    def draw(self, surface: pygame.Surface) -> pygame.Rect:
        """Draw shadow, character and speech bubble; return the character's rect."""
        x, y = self.state.to_window(self.pos)
        self._draw_shadow(surface, x, y - SHADOW_LIFT)
        self.update_state()
        position = (x, y - self.z / self.state.pix_size)
        rect = self.blueprint.update_anim(surface, position)
        bubble = self.resources.textures.get(BUBBLE_ID)
        self.talk.draw(surface, (position[0], position[1] - rect.height),
                       bubble.image if bubble is not None else None,
                       self.state.fonts[0])
        self._refresh_logs()
        return rect
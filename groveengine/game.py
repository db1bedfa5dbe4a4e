"""The demo world and the game that runs its data and render loops."""

from __future__ import annotations

import itertools
import os
import random
import threading
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pygame

from .controller import Controller
from .demo_player import DebugPanel, DemoPlayer
from .engine import EngineState, World, debug_display, load_fonts
from .props import CELL, House, Tree
from .resources import get_resources
from .timing import get_time, thread_sleep
from .vectors import WIN_H, WIN_W, Vec2
from .widgets import MouseCursor

GRASS_FILE = "res/grass.png"
WIDGET_FILE = "res/widget.png"
BUTTON_FILE = "res/button_128x3.png"
MOUSE_FILE = "res/mouse.png"
ICON_FILE = "res/a.png"
ICON_SIZE = (48, 48)
TITLE = "game"

MAP_TILES = 15
MAP_SIZE = MAP_TILES * CELL
GRASS_CELLS = 3
TREE_COUNT = 200
TREE_KINDS = 25
HOUSE_COUNT = 20
HOUSE_KINDS = 5
HOUSE_AREA = 1000
PLAYER_START = 500
LOOP_DISTANCE = 5.0


def sort_for_drawing(actors: Iterable[Any]) -> list[Any]:
    """Actors in painting order: farther up the screen first, then left to right."""
    return sorted(actors, key=lambda actor: (actor.pos.y, actor.pos.x))


def _load_image(path: Path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError, OSError):
        print(f"file[{path}] load failed")
        return None


class DemoWorld(World):
    """A grass map scattered with trees and houses, with the demo player on it."""

    def __init__(self, state: EngineState, resources: Any,
                 rng: Optional[random.Random] = None) -> None:
        rng = rng if rng is not None else random.Random()
        root = Path(getattr(resources, "root", "."))
        pix = state.pix_size

        cells = [
            ((i * CELL, j * CELL),
             pygame.Rect(rng.randrange(GRASS_CELLS) * CELL,
                         rng.randrange(GRASS_CELLS) * CELL, CELL, CELL))
            for i, j in itertools.product(range(MAP_TILES), repeat=2)
        ]
        grass = _load_image(root / GRASS_FILE)
        backdrop = None
        if grass is not None:
            backdrop = pygame.Surface((MAP_SIZE, MAP_SIZE))
            for position, area in cells:
                backdrop.blit(grass, position, area=area)
        super().__init__(state, backdrop)

        self.debug = DebugPanel(state)

        self.player = DemoPlayer(state, resources)
        state.player = self.player
        self.player.pos = Vec2(PLAYER_START * pix, PLAYER_START * pix)
        widget = self.player.widget
        widget.background = _load_image(root / WIDGET_FILE)
        widget.button_texture = _load_image(root / BUTTON_FILE)
        widget.font = state.fonts[0]

        tree_sheet = _load_image(root / Tree.SHEET_FILE)
        house_sheet = _load_image(root / House.SHEET_FILE)

        self.trees: list[Tree] = []
        for _ in range(TREE_COUNT):
            tree = Tree(state, rng.randrange(TREE_KINDS), tree_sheet)
            x = rng.randrange(MAP_SIZE) * pix
            y = rng.randrange(MAP_SIZE) * pix
            tree.pos = Vec2(x, y)
            self.trees.append(tree)

        self.landmark = House(state, 1, house_sheet)
        self.houses: list[House] = []
        for _ in range(HOUSE_COUNT):
            house = House(state, rng.randrange(HOUSE_KINDS), house_sheet)
            x = rng.randrange(HOUSE_AREA) * pix
            y = rng.randrange(HOUSE_AREA) * pix
            house.pos = Vec2(x, y)
            self.houses.append(house)


class Game:
    """Owns the window and runs the data loop beside the render loop."""

    def __init__(self, root: Union[str, Path] = ".", headless: bool = False) -> None:
        self.root = Path(root)
        self.headless = headless
        if headless and not pygame.display.get_init():
            os.environ["SDL_VIDEODRIVER"] = "dummy"
            os.environ["SDL_AUDIODRIVER"] = "dummy"
        pygame.init()

        self.state = EngineState()
        self.state.fonts = load_fonts(self.root)

        flags = 0 if headless else pygame.RESIZABLE
        self.window = pygame.display.set_mode((WIN_W, WIN_H), flags)
        if not headless:
            pygame.display.set_caption(TITLE)
            pygame.event.set_grab(True)
        self._set_icon()
        self.canvas = pygame.Surface((WIN_W, WIN_H))

        self.mouse = MouseCursor(_load_image(self.root / MOUSE_FILE))
        self.controller = Controller()
        self.state.controller = self.controller

        self.resources = get_resources(self.root)
        self.world = DemoWorld(self.state, self.resources)

        self.loop_distance = LOOP_DISTANCE
        self.actors_on: list[Any] = []
        self._frame_clock = pygame.time.Clock()

    def _set_icon(self) -> None:
        icon = _load_image(self.root / ICON_FILE)
        if icon is not None:
            pygame.display.set_icon(pygame.transform.scale(icon, ICON_SIZE))

    def step_data(self) -> list[Any]:
        """One pass of game logic; returns the actors close enough to be updated."""
        began = get_time()
        state = self.state
        if state.player is not None:
            state.player.camera_follow()
        state.purge_invalid()
        camera = state.camera.pos
        reach = self.loop_distance
        with state.lock:
            active = [actor for actor in state.actors
                      if abs(actor.pos.x - camera.x) < reach
                      and abs(actor.pos.y - camera.y) < reach]
            self.actors_on = active
        for actor in active:
            actor.update()
        if state.world is not None:
            state.world.update()
        if get_time() == began:
            thread_sleep(1)
        state.delta_time = get_time() - began
        return active

    def poll_keys(self) -> None:
        """Let the controller that currently owns input handle the keyboard and events."""
        if self.state.controller is not None:
            self.state.controller.poll(self.state)

    def render_frame(self) -> list[Any]:
        """Draw one frame; returns the actors drawn, in painting order."""
        self.poll_keys()
        state = self.state
        canvas = self.canvas
        canvas.fill((0, 0, 0))
        if state.world is not None:
            state.world.draw(canvas)
        with state.lock:
            drawn = sort_for_drawing(self.actors_on)
        for actor in drawn:
            actor.draw(canvas)

        mouse_pos = pygame.mouse.get_pos()
        if state.widget is not None:
            state.widget.update(mouse_pos, bool(pygame.mouse.get_pressed()[0]))
            if state.widget is not None:
                state.widget.draw(canvas)
        self.mouse.draw(canvas, mouse_pos)
        debug_display(state, canvas)

        self._present()
        if not self.headless:
            self._frame_clock.tick(state.frame_limit)
        return drawn

    def _present(self) -> None:
        window = pygame.display.get_surface()
        if window is None:
            return
        window.fill((0, 0, 0))
        x, y, width, height = self.state.viewport
        if (width, height) == self.canvas.get_size():
            window.blit(self.canvas, (x, y))
        else:
            window.blit(pygame.transform.scale(self.canvas, (width, height)), (x, y))
        pygame.display.flip()

    def _data_loop(self) -> None:
        try:
            while self.state.game_continue:
                self.step_data()
        finally:
            self.state.game_continue = False

    def run(self) -> None:
        """Run until the game is told to stop, then drop every actor."""
        data = threading.Thread(target=self._data_loop, name="data-loop", daemon=True)
        data.start()
        try:
            while self.state.game_continue:
                self.render_frame()
        finally:
            self.state.game_continue = False
            data.join()
            with self.state.lock:
                self.state.actors.clear()
                self.actors_on = []
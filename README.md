# groveengine

A small engine for top-down 2D role-playing games, built on pygame, with a
demo world to walk around in: a grass map, trees, houses and a player
character who walks, jumps, talks in a speech bubble and opens an in-game
menu.

## Installing

```
pip install groveengine
```

To run the tests as well:

```
pip install "groveengine[test]"
pytest
```

## Playing the demo

```
groveengine
```

Options:

- `--root DIR`: the folder that holds `res/` (default: the current directory).
- `--headless`: draw off-screen without opening a window.
- `--lock-dir DIR`: where the single-instance lock file is kept (default: the
  system temporary directory).

The game reads its assets from `res/` under the root folder: images
(`grass.png`, `widget.png`, `button_128x3.png`, `mouse.png`, `a.png`,
`house_256x3.png`, `trees_256x5.png`), fonts (`heiti.ttf`, `kaiti.ttf`,
`zhunyuan.ttf`), and three XML tables listing textures (`picData.xml`),
sounds (`soundData.xml`) and sprite-sheet animations (`animData.xml`).
In each table a record's first child holds its integer id. Images, sounds
and fonts that fail to load are reported and skipped. A missing or malformed
table stops the game with an error.

Only one copy of the game runs at a time. A second start notices the lock
held by the first one, prints `program is running` and exits.

### The launcher

```
groveengine-launcher
```

It checks that no other copy of itself is running, changes into the `bin`
folder (`--dir` picks another) and starts the game there with the current
Python interpreter. Arguments after `--` replace the command that is started:

```
groveengine-launcher --dir game -- groveengine --headless
```

### Controls

| Input          | Action                                   |
|----------------|------------------------------------------|
| W A S D        | walk                                     |
| Left mouse     | walk to the clicked point                |
| Space          | jump                                     |
| Backspace      | open or close the menu                   |
| Gamepad axes   | walk                                     |

While the menu is open it takes over input. One button returns to the game
and the other quits.

## Using the engine

The package is split into modules you can use on their own:

- `groveengine.vectors`: `Vec2`, `length`, `normalize`, the interpolation
  helpers `f_interp_to`, `quadratic_ease_out` and `smooth_interpolate_to`,
  the world/window conversions `ws_to_win` and `win_to_ws`, and
  `letterbox_viewport`.
- `groveengine.timing`: a millisecond clock with a time scale (`get_time`,
  `set_time_scale`, `thread_sleep`), the `CanRun` rate limiter, a
  `ThreadPool`, a `Timer` that runs scheduled, repeating `ScheduledTask`s on
  the pool (`get_timer`, `delay`, `delay_renew`), and `PeriodicCallback`.
- `groveengine.engine`: `EngineState`, `GameObject`, `Actor`, `World`,
  `Camera`, the on-screen `DebugLog` with `debug_display`, and the text
  helpers `load_fonts`, `print_text` and `print_num`.
- `groveengine.controller`: `Controller` with `Key` and `Axis` bindings.
- `groveengine.player`: `PlayerCharacter`, moved by keys, axes or clicks.
- `groveengine.animation`: sprite-sheet `Animation` and the
  `AnimationBlueprint` state machine (`AnimState`: idle, walk, jump).
- `groveengine.physics`: `Physics`, gravity and jumps for an actor's height.
- `groveengine.talk`: `Talk`, a speech bubble that types out its lines.
- `groveengine.widgets`: `Button`, the menu `Widget` and `MouseCursor`.
- `groveengine.props`: the sprite-sheet scenery `House` and `Tree`, and
  `DriftingActor`, which moves on timer ticks.
- `groveengine.resources`: `Resources` and `get_resources`, which load the
  asset tables.
- `groveengine.xmlread`: `XmlTable`, which reads the id-keyed XML tables.
- `groveengine.camera3d`: `FlyCamera` with the `perspective` and `look_at`
  matrices.
- `groveengine.game`: `DemoWorld`, `Game` and `sort_for_drawing`.
- `groveengine.instance`: `ProgramLock`, the single-instance guard.

A minimal example:

```python
from groveengine.timing import CanRun
from groveengine.vectors import Vec2, normalize, ws_to_win

limiter = CanRun()
if limiter.ready(10):
    direction = normalize(Vec2(3.0, 4.0))

screen_pos = ws_to_win(Vec2(1.0, 2.0), Vec2(0.0, 0.0), 0.01)
```

`Game(root, headless=True)` builds the demo world without opening a window.
`Game.step_data()` advances its logic one step and `Game.render_frame()`
draws one frame.

## What it does not do

- There is no 3D rendering. `groveengine.camera3d` only computes camera
  vectors and matrices. Nothing draws with them.
- The backquote key only flips `EngineState.console_visible`. It does not
  show or hide any terminal window.
- There are no save games, levels or editors. The demo world is generated
  anew at each start.
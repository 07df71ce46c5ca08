# blueprint

A small 2D game framework built on pygame. A game is made of *scenes*
described by JSON files with the `.scenebp` extension; a scene manager loads,
saves, reloads and switches between them, and a texture manager shares loaded
images between everything that uses them.

It also has a few pieces for side-scrolling games: a camera that scrolls
horizontally between limits, a fading screen shake, tile-sheet sprites, an
animated hint and a door tile.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Resource layout

Resources live under one root directory, split by kind:

```
Resources/
    Scenes/     *.scenebp scene files (JSON objects with a "Type" field)
    Textures/   images loaded by TextureManager
```

Every manager takes the root as `resources_root`; when it is left out the
root is `../Resources`, relative to the working directory. Paths handed to the
managers are relative to the kind's folder. Absolute paths, paths containing
`..` and paths that do not exist are rejected.

## Scenes

A scene file names its type:

```json
{
    "Type": "Game::Level",
    "NextScene": "Level 2.scenebp"
}
```

Scene types subclass `blueprint.scene.Scene` and are registered with the
application's `SceneFabric` under the name used in the `Type` field. The base
`Scene` keeps the data it was loaded with (`data`), the time it has run for
(`elapsed`) and how often it was drawn (`render_count`); its `save` hook
writes back any loaded keys the saved data lacks.

```python
from blueprint.application import Application
from blueprint.scene import Scene


class Level(Scene):
    def load(self, data):
        super().load(data)
        self.next_scene = data.get("NextScene")

    def update(self, delta_time):
        super().update(delta_time)

    def render(self, render_target):
        super().render(render_target)


with Application((800, 600), "My game", "Resources") as app:
    app.scene_fabric.register_scene("Game::Level", Level)
    app.scene_manager.load_scene("Level 1.scenebp")
    app.scene_manager.set_current_scene(app.scene_manager.front_scene())
    app.run()
```

`SceneManager` in `blueprint.scene_manager`:

- `load_scene(path)` checks the path and the `.scenebp` extension, reads the
  `Type`, creates the scene and queues it.
- `unload_scene(target)`, `reload_scene(target)` and `set_current_scene(target)`
  take either a path or a scene object. An unknown path raises
  `SceneNotFoundError`; an unknown scene object is ignored.
- Loads, unloads and reloads take effect at the start of the next `update()`,
  so scenes may request them from their own hooks. On unload and reload the
  scene's `save` hook is called and the data is written back to its file; a
  reload then builds a fresh scene from the file.
- `front_scene()` and `back_scene()` give the first and last scene paths, or
  `None`; `scenes` lists the loaded `(path, scene)` pairs; `current_scene` is
  the scene being updated and drawn.
- `update()` passes the seconds since the previous update to the current
  scene; `close()` finishes pending loads and saves queued unloads.

`Application` in `blueprint.application` opens the window and runs the loop
while the window is open and a scene is current. Closing the window stops it;
pressing Escape raises `EscapedError`. It exposes `scene_fabric`,
`scene_manager`, `texture_manager`, `render_target` and `render_window`, and
`close()` releases scenes, textures and the display.

## Textures

```python
from blueprint.resources import TextureManager

with TextureManager("Resources") as textures:
    door = textures.get_texture_resource("Door.png")
    print(textures.reference_count("Door.png"))  # 1
    door.release()
    print(textures.reference_count("Door.png"))  # 0
```

Each `TextureResource` holds one reference to a shared texture. `copy()`
takes another reference, `assign(other)` switches to another texture, and the
texture is dropped from the manager once the last reference is released. A
custom `loader` callable may replace `pygame.image.load`.

## Drawing and platformer pieces

- `blueprint.graphics`: `Color`, `FloatRect` (with `find_intersection`),
  `IntRect`, `View`, `RectangleShape` (position, origin, scale, rotation,
  texture rectangle, fill colour, `global_bounds()`), and `RenderTarget`,
  which draws shapes on a pygame surface through a view.
- `blueprint.camera`: `Camera`, a 192×144 view whose centre stays at half the
  view height and is clamped horizontally (`set_right_most_limit`,
  `set_center`); `CameraShaker`, a four-unit shake of up to six units that
  fades out, with an optional `random.Random`.
- `blueprint.sprites`: `SpriteObject` shows one tile of a tile sheet
  (`position`, `tile_size`, `tile_index`); `Hint` cycles three 32×32 frames
  above a point; `Door` is a 16×16 tile with a `bounding_box`.

## What is not included

The package is a framework, not a game. It has no command to start, and it
ships no scene types, levels, player character, physics, collision with tile
maps, enemies, sound or editor. Scene types and their behaviour are written by
the game that uses it.

## Errors

All errors raised by the framework derive from
`blueprint.resources.BlueprintError`: `FailedToOpenFileError`,
`FailedToLoadTextureError`, `TextureNotFoundError`,
`SceneTypeNotRegisteredError`, `SceneInvalidPathError`,
`SceneFileExtensionError`, `FailedToParseSceneDataError`,
`SceneDataTypeMissingError`, `SceneNotFoundError` and `EscapedError`.
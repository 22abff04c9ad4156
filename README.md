# spriteforge

spriteforge is the core of a small 2D game engine. It has no window, GPU or
audio device of its own. Drawing produces plain data that a backend can
submit: `DrawCommand` objects that carry the shader, the primitive, the
vertices, the uniforms and the texture.

## Modules

- **`spriteforge.transform`**
  - `Transform` holds a position, size, angle (in degrees) and uniform scale.
  - Its `model_matrix` rotates and scales about the rectangle's centre. It is
    cached and rebuilt only after a change.
  - It also offers `translate`, `scale_size`, `rotate`, `set_transform`,
    `contains`, `bounds`, `Transform.extract_position` and `Transform.lerp`.
  - `TransformManager` has `update_all` and `dirty_count` for working on many
    transforms at once.
- **`spriteforge.camera`**
  - `Camera` offers an orthographic projection (origin at the top left) or a
    perspective one, chosen with `ProjectionType`.
  - It supports view pan and zoom through `view_position` and `zoom`. A zoom of
    zero or less is replaced by 1.0.
  - `projection_matrix()`, `view_matrix()` and `view_projection_matrix()`
    return the matrices.
  - `screen_to_world()` converts screen coordinates to world coordinates. It
    raises `ValueError` when the window size is not positive.
  - `CameraManager` holds a single global camera, with `initialize`, `get`,
    `update_window_size` and `reset`.
- **`spriteforge.services`**
  - `provide(key, service)`, `get(key)` and `reset()` make up a process-wide
    service registry.
  - Keys are usually classes, but any hashable key works.
- **`spriteforge.events`**
  - `EventDispatcher.register_listener` subscribes a callback to an `EventType`
    and returns a listener id, counting up from 1.
  - `unregister_listener` removes a listener.
  - `dispatch` calls every listener of an event in registration order. An
    exception raised by one listener is logged and does not stop the others.
- **`spriteforge.input`**
  - An `InputEvent` has an `EventKind` and, where relevant, a position or a key.
  - `InputHandler` forwards events to `EventObserver`s and holds them only by
    weak reference.
  - `handle_events` forwards a sequence of events and reports whether any of
    them was a quit request.
- **`spriteforge.scenes`**
  - `GameScene` is the abstract scene.
  - `Scene` is a plain scene. It draws its layers, counts `elapsed` time and
    tracks whether it is `active`.
  - `SceneManager` creates scenes by class, optionally under a name, and
    activates, looks up, removes and clears them. Empty names raise
    `ValueError`.
- **`spriteforge.animation`**
  - `Animation` cycles through texture-region frames. It advances at most once
    per frame delay, using an injectable clock.
  - `AnimationController` keeps named animations, the current one, an `idle`
    animation and one-shot playback through `play_once`.
- **`spriteforge.objects`**
  - `GameObject` is a shaded rectangle with collision layer and mask bits and
    child objects.
  - `WireObject` is a coloured outline.
  - `TexturedObject` is a textured quad. `set_texture` adopts the texture's
    `size`.
  - `RenderLayer` holds an ordered list of objects.
  - `PhysicObject` is a mix-in with a `collide` hook.
  - Each `draw()` returns a list of `DrawCommand`s. When a `Camera` is
    registered in `services`, its matrices become the uniforms.
- **`spriteforge.collision`**
  - `CollisionDetector` runs axis-aligned overlap tests. Touching edges count
    as an overlap; rectangles with no area never overlap.
  - `try_move` ignores masks.
  - `check_collisions` calls `collide` on both `PhysicObject`s of each
    overlapping pair. A pair is checked only when the earlier object's mask
    includes the later object's layer.
  - `CollisionLayer` holds the bit flags. `Role` presets are applied with
    `setup_collision_mask`.
- **`spriteforge.batch`**
  - `BatchObject` bakes its objects into one interleaved `(x, y, r, g, b, a)`
    vertex list (`batch_vertices`) and draws it with a single command.
  - `InstancedBatchObject` builds `InstanceData2D` records and produces one
    instanced draw command. It needs a registered camera.
- **`spriteforge.ui`**
  - `Button` is a `WireObject` and an `EventObserver`.
  - A mouse press inside the button, converted through the registered camera,
    runs the callback set with `on_click`.
- **`spriteforge.resources`**
  - `ResourceManager.load_resources(directory)` reads the files directly inside
    a directory and stores each one by its file stem:
    - `name.vert` together with `name.frag` becomes a `ShaderSource`
    - `.png` becomes a `TextureFile`, whose pixel size is read from the PNG
      header
    - `.wav` and `.mp3` become a `SoundFile`
    - `.ttf` becomes a `FontFile` at size 16
  - `get(name, kind)` returns a resource or `None`. It raises `TypeError` when
    the resource is not of the requested kind.
- **`spriteforge.engine`**
  - `GameEngine` creates the window, renderer, resource manager, event
    dispatcher, scene manager and camera, and registers each of them in
    `services`.
  - `update()` runs one frame: window events, then the renderer, then the
    active scene's `update` and `render`.
  - `Window` is the abstract window.
  - `HeadlessWindow` has no screen. Events reach it through `post_event`, and
    `resize` changes its size.
  - `Renderer` keeps the registered camera matched to the window size.

## Installing

```
pip install .
```

To also install the test dependencies:

```
pip install .[test]
```

## A short example

```python
from spriteforge.engine import GameEngine, HeadlessWindow, Renderer
from spriteforge.objects import RenderLayer, WireObject
from spriteforge.scenes import Scene

engine = GameEngine()
window = engine.create_window(HeadlessWindow, 800, 600, "Demo")
engine.create_renderer(Renderer)
engine.create_event_dispatcher()
scenes = engine.create_scene_manager()
engine.create_camera(window.window_size())

scene = scenes.create_scene(Scene, "main")
scenes.activate_scene("main")

layer = RenderLayer()
layer.add_object(WireObject((350, 250), (100, 100), None, (1, 0, 0, 0.2)))
scene.add_render_layer(layer)

engine.update()              # True while the window is open
commands = layer.draw()      # one DrawCommand with primitive "lines"
```

## What it does not do

- It does not open a window or talk to a graphics API. `HeadlessWindow` is the
  only concrete window, and draw commands are returned, not submitted.
- It does not compile shaders. It does not decode images beyond reading the
  PNG size. It does not play sounds or render text with fonts. The resource
  classes only record file contents or paths.
- It provides no command-line program.

## Running the tests

```
pytest
```
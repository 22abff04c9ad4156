"""Windows, the renderer and the engine that creates services and runs frames."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from spriteforge import services
from spriteforge.camera import Camera
from spriteforge.events import EventDispatcher
from spriteforge.input import EventKind, EventObserver, InputEvent, InputHandler
from spriteforge.resources import ResourceManager
from spriteforge.scenes import GameScene, SceneManager

T = TypeVar("T")


class Window(ABC):
    """A window the engine draws into and takes input from."""

    def __init__(self, width: int, height: int, title: str) -> None:
        self.width = int(width)
        self.height = int(height)
        self.title = title
        self.running = True
        self._input_handler: InputHandler | None = None

    @property
    def input_handler(self) -> InputHandler | None:
        return self._input_handler

    @abstractmethod
    def init(self) -> None:
        """Open the window."""

    @abstractmethod
    def update(self) -> bool:
        """Process pending events and present the frame; False once closed."""

    def window_size(self) -> tuple[float, float]:
        return (float(self.width), float(self.height))


class HeadlessWindow(Window, EventObserver):
    """A window without a screen; events are posted to it by the caller."""

    def __init__(self, width: int, height: int, title: str) -> None:
        super().__init__(width, height, title)
        self._pending: deque[InputEvent] = deque()

    def init(self) -> None:
        self._input_handler = InputHandler()
        self._input_handler.add_observer(self)

    def on_notify(self, event: InputEvent) -> None:
        if event.kind is EventKind.QUIT:
            self.running = False

    def post_event(self, event: InputEvent) -> None:
        """Queue ``event`` for the next :meth:`update`."""
        self._pending.append(event)

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def update(self) -> bool:
        """Handle queued events, forwarding each to the active scene's input handler."""
        while self._pending:
            event = self._pending.popleft()
            if event.kind is EventKind.QUIT:
                self.running = False
            scene_manager = services.get(SceneManager)
            if scene_manager is not None and scene_manager.active_scene is not None:
                handler = scene_manager.active_scene.input_handler
                if handler is not None:
                    handler.forward_event(event)
        return self.running


class Renderer:
    """Clears each frame and keeps the camera matched to the window size."""

    clear_color = (0.0, 0.0, 0.0, 1.0)

    def __init__(self) -> None:
        self.active_scene: GameScene | None = None
        self.frames_drawn = 0

    def init(self) -> None:
        """Nothing to prepare without a graphics backend."""

    def draw(self) -> None:
        """Start a new frame."""
        self.update_camera_if_needed()
        self.frames_drawn += 1

    def update_camera_if_needed(self) -> None:
        """Give the registered camera the registered window's current size."""
        window = services.get(Window)
        camera = services.get(Camera)
        if window is None or camera is None:
            return
        size = window.window_size()
        if camera.window_size != size:
            camera.window_size = size


class GameEngine:
    """Creates the engine services, registers them and runs the frame loop."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._last_time = clock()
        self.window: Window | None = None
        self.renderer: Renderer | None = None
        self.resource_manager: ResourceManager | None = None
        self.event_dispatcher: EventDispatcher | None = None
        self.scene_manager: SceneManager | None = None
        self.camera: Camera | None = None

    def create_window(self, window_cls: type[Window], width: int, height: int, title: str) -> Window:
        if not (isinstance(window_cls, type) and issubclass(window_cls, Window)):
            raise TypeError("window class must derive from Window")
        self.window = window_cls(width, height, title)
        self.window.init()
        services.provide(Window, self.window)
        return self.window

    def create_renderer(self, renderer_cls: type[Renderer]) -> Renderer:
        if not (isinstance(renderer_cls, type) and issubclass(renderer_cls, Renderer)):
            raise TypeError("renderer class must derive from Renderer")
        self.renderer = renderer_cls()
        self.renderer.init()
        services.provide(Renderer, self.renderer)
        return self.renderer

    def create_resource_manager(self) -> ResourceManager:
        self.resource_manager = ResourceManager()
        services.provide(ResourceManager, self.resource_manager)
        return self.resource_manager

    def create_event_dispatcher(self) -> EventDispatcher:
        self.event_dispatcher = EventDispatcher()
        services.provide(EventDispatcher, self.event_dispatcher)
        return self.event_dispatcher

    def create_scene_manager(self) -> SceneManager:
        self.scene_manager = SceneManager()
        services.provide(SceneManager, self.scene_manager)
        return self.scene_manager

    def create_camera(self, window_size: Sequence[float]) -> Camera:
        self.camera = Camera(window_size)
        services.provide(Camera, self.camera)
        return self.camera

    def create_service(self, service_cls: type[T]) -> T:
        """Instantiate ``service_cls`` and register it under its own class."""
        service: Any = service_cls()
        services.provide(service_cls, service)
        return service

    def update(self) -> bool:
        """Run one frame; False when there is no window or it has been closed."""
        now = self._clock()
        time_delta = now - self._last_time
        self._last_time = now

        if self.window is None or not self.window.update():
            return False
        if self.renderer is None:
            raise RuntimeError("no renderer created")
        self.renderer.draw()

        scene = self.scene_manager.active_scene if self.scene_manager else None
        if scene is None:
            raise RuntimeError("no active scene")
        scene.update(time_delta)
        scene.render(time_delta)
        return True
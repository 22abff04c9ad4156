"""Game scenes and the manager that creates, switches and removes them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from spriteforge.input import InputHandler

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="GameScene")


class GameScene(ABC):
    """A scene: a stack of render layers plus lifecycle hooks."""

    def __init__(self) -> None:
        self.layers: list[Any] = []
        self._input_handler: InputHandler | None = None

    def initialize(self) -> None:
        """Prepare the scene; by default gives it its own input handler."""
        self._input_handler = InputHandler()

    @property
    def input_handler(self) -> InputHandler | None:
        return self._input_handler

    @abstractmethod
    def activate(self) -> None:
        """Called when the scene becomes the active one."""

    @abstractmethod
    def update(self, time_delta: float) -> None:
        """Advance the scene by ``time_delta`` seconds."""

    @abstractmethod
    def deactivate(self) -> None:
        """Called when another scene replaces this one."""

    @abstractmethod
    def destroy(self) -> None:
        """Release whatever the scene holds."""

    @abstractmethod
    def render(self, time_delta: float) -> None:
        """Draw the scene."""

    def add_render_layer(self, layer: Any) -> None:
        """Append ``layer``; layers are drawn in the order they were added."""
        self.layers.append(layer)


class Scene(GameScene):
    """A plain scene that draws its layers and tracks whether it is active."""

    def __init__(self) -> None:
        super().__init__()
        self.active = False
        self.elapsed = 0.0

    def initialize(self) -> None:
        """A plain scene gets no input handler of its own."""

    def activate(self) -> None:
        self.active = True

    def update(self, time_delta: float) -> None:
        """Accumulate the time the scene has run."""
        self.elapsed += time_delta

    def deactivate(self) -> None:
        self.active = False

    def destroy(self) -> None:
        """Drop every layer and leave the scene inactive."""
        self.layers.clear()
        self.active = False

    def render(self, time_delta: float) -> None:
        for layer in self.layers:
            layer.draw()


def _require_name(name: str, action: str) -> None:
    if not name:
        raise ValueError(f"empty scene name provided to {action}")


class SceneManager:
    """Keeps scenes by class and, optionally, by name, and tracks the active one."""

    def __init__(self) -> None:
        self._by_type: dict[type, GameScene] = {}
        self._by_name: dict[str, GameScene] = {}
        self._active: GameScene | None = None

    @property
    def active_scene(self) -> GameScene | None:
        return self._active

    def create_scene(self, scene_cls: type[S], name: str | None = None) -> S:
        """Instantiate and initialize ``scene_cls``, registering it by class and name."""
        if not (isinstance(scene_cls, type) and issubclass(scene_cls, GameScene)):
            raise TypeError("scene class must derive from GameScene")
        scene = scene_cls()
        scene.initialize()
        self._by_type[scene_cls] = scene
        if name is not None:
            self._by_name[name] = scene
        return scene

    def activate_scene(self, key: type | str) -> bool:
        """Make the scene with this class or name active; False if there is none."""
        if isinstance(key, str):
            _require_name(key, "activate_scene")
            scene = self._by_name.get(key)
            if scene is None:
                logger.warning("Scene '%s' not found", key)
                return False
        else:
            scene = self._by_type.get(key)
            if scene is None:
                return False
        self._switch_to(scene)
        return True

    def get_scene(self, key: type | str) -> GameScene | None:
        """The scene with this class or name, or ``None``."""
        if isinstance(key, str):
            _require_name(key, "get_scene")
            return self._by_name.get(key)
        return self._by_type.get(key)

    def has_scene(self, key: type | str) -> bool:
        if isinstance(key, str):
            return bool(key) and key in self._by_name
        return key in self._by_type

    def remove_scene(self, key: type | str) -> None:
        """Deactivate (if active), destroy and forget the scene with this class or name."""
        if isinstance(key, str):
            self._remove_named(key)
        else:
            self._remove_typed(key)

    def clear(self) -> None:
        """Deactivate the active scene, destroy every scene and forget them all."""
        if self._active is not None:
            try:
                self._active.deactivate()
            except Exception:
                logger.exception("Error deactivating active scene during clear")
            self._active = None
        for scene in self._by_type.values():
            try:
                scene.destroy()
            except Exception:
                logger.exception("Error destroying scene during clear")
        self._by_type.clear()
        self._by_name.clear()

    def _remove_typed(self, scene_cls: type) -> None:
        scene = self._by_type.get(scene_cls)
        if scene is None:
            return
        if self._active is scene:
            scene.deactivate()
            self._active = None
        scene.destroy()
        del self._by_type[scene_cls]

    def _remove_named(self, name: str) -> None:
        _require_name(name, "remove_scene")
        scene = self._by_name.get(name)
        if scene is None:
            logger.warning("Scene '%s' not found for removal", name)
            return
        if self._active is scene:
            try:
                scene.deactivate()
            except Exception:
                logger.exception("Error deactivating scene '%s'", name)
            self._active = None
        try:
            scene.destroy()
        except Exception:
            logger.exception("Error destroying scene '%s'", name)
        del self._by_name[name]
        for scene_cls, registered in self._by_type.items():
            if registered is scene:
                del self._by_type[scene_cls]
                break

    def _switch_to(self, new_scene: GameScene) -> None:
        if self._active is not None and self._active is not new_scene:
            try:
                self._active.deactivate()
            except Exception:
                logger.exception("Error deactivating current scene")
        self._active = new_scene
        try:
            new_scene.activate()
        except Exception:
            logger.exception("Error activating new scene")
            self._active = None
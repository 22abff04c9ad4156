import pytest

from spriteforge.input import InputHandler
from spriteforge.scenes import GameScene, Scene, SceneManager


class RecordingScene(GameScene):
    def __init__(self):
        super().__init__()
        self.calls = []

    def activate(self):
        self.calls.append("activate")

    def update(self, time_delta):
        self.calls.append("update")

    def deactivate(self):
        self.calls.append("deactivate")

    def destroy(self):
        self.calls.append("destroy")

    def render(self, time_delta):
        self.calls.append("render")


class OtherScene(RecordingScene):
    pass


class FailingScene(RecordingScene):
    def activate(self):
        raise RuntimeError("boom")


class CountingLayer:
    def __init__(self, log, tag):
        self.log = log
        self.tag = tag

    def draw(self):
        self.log.append(self.tag)


def test_create_scene_initializes_input_handler():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene)
    assert isinstance(scene.input_handler, InputHandler)
    assert manager.get_scene(RecordingScene) is scene


def test_plain_scene_has_no_input_handler():
    scene = SceneManager().create_scene(Scene)
    assert scene.input_handler is None


def test_create_scene_rejects_non_scene():
    with pytest.raises(TypeError):
        SceneManager().create_scene(dict)


def test_activate_by_type():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene)
    assert manager.activate_scene(RecordingScene) is True
    assert manager.active_scene is scene
    assert scene.calls == ["activate"]


def test_activate_unknown_type_returns_false():
    manager = SceneManager()
    assert manager.activate_scene(RecordingScene) is False
    assert manager.active_scene is None


def test_switching_deactivates_previous():
    manager = SceneManager()
    first = manager.create_scene(RecordingScene)
    second = manager.create_scene(OtherScene, "other")
    manager.activate_scene(RecordingScene)
    assert manager.activate_scene("other") is True
    assert first.calls == ["activate", "deactivate"]
    assert second.calls == ["activate"]
    assert manager.active_scene is second


def test_reactivating_same_scene_does_not_deactivate():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene)
    manager.activate_scene(RecordingScene)
    manager.activate_scene(RecordingScene)
    assert scene.calls == ["activate", "activate"]


def test_activate_missing_name_returns_false():
    assert SceneManager().activate_scene("nowhere") is False


def test_empty_name_is_an_error():
    manager = SceneManager()
    with pytest.raises(ValueError):
        manager.activate_scene("")
    with pytest.raises(ValueError):
        manager.get_scene("")
    with pytest.raises(ValueError):
        manager.remove_scene("")
    assert manager.has_scene("") is False


def test_get_scene_by_name():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene, "main")
    assert manager.get_scene("main") is scene
    assert manager.get_scene("missing") is None
    assert manager.has_scene("main") is True


def test_failed_activation_leaves_no_active_scene():
    manager = SceneManager()
    manager.create_scene(FailingScene)
    assert manager.activate_scene(FailingScene) is True
    assert manager.active_scene is None


def test_remove_named_active_scene():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene, "main")
    manager.activate_scene("main")
    manager.remove_scene("main")
    assert scene.calls == ["activate", "deactivate", "destroy"]
    assert manager.active_scene is None
    assert manager.has_scene("main") is False
    assert manager.has_scene(RecordingScene) is False


def test_remove_by_type():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene)
    manager.activate_scene(RecordingScene)
    manager.remove_scene(RecordingScene)
    assert scene.calls == ["activate", "deactivate", "destroy"]
    assert manager.has_scene(RecordingScene) is False
    assert manager.active_scene is None


def test_remove_missing_name_changes_nothing():
    manager = SceneManager()
    scene = manager.create_scene(RecordingScene, "main")
    manager.remove_scene("other")
    assert manager.get_scene("main") is scene
    assert scene.calls == []


def test_clear_destroys_everything():
    manager = SceneManager()
    first = manager.create_scene(RecordingScene, "first")
    second = manager.create_scene(OtherScene)
    manager.activate_scene("first")
    manager.clear()
    assert first.calls == ["activate", "deactivate", "destroy"]
    assert second.calls == ["destroy"]
    assert manager.active_scene is None
    assert manager.has_scene("first") is False
    assert manager.has_scene(OtherScene) is False


def test_scene_render_draws_layers_in_order():
    log = []
    scene = Scene()
    scene.add_render_layer(CountingLayer(log, 1))
    scene.add_render_layer(CountingLayer(log, 2))
    scene.render(0.016)
    assert log == [1, 2]
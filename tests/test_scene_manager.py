import itertools
import json

import pytest

from blueprint.resources import FailedToOpenFileError
from blueprint.scene import Scene, SceneFabric, SceneTypeNotRegisteredError
from blueprint.scene_manager import (
    FailedToParseSceneDataError,
    SceneDataTypeMissingError,
    SceneFileExtensionError,
    SceneInvalidPathError,
    SceneManager,
    SceneNotFoundError,
)


class RecordingScene(Scene):
    def __init__(self, manager):
        super().__init__(manager)
        self.loaded = []
        self.updates = []
        self.rendered = []

    def load(self, data):
        self.loaded.append(data)
        if "NextScene" in data:
            self.scene_manager.load_scene(data["NextScene"])

    def save(self, data):
        data["Saved"] = True

    def update(self, delta_time):
        self.updates.append(delta_time)

    def render(self, render_target):
        self.rendered.append(render_target)


@pytest.fixture
def scenes_dir(tmp_path):
    folder = tmp_path / "Scenes"
    folder.mkdir()
    return folder


def write_scene(scenes_dir, name, data):
    (scenes_dir / name).write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def manager(tmp_path, scenes_dir):
    application = object()
    fabric = SceneFabric(application)
    fabric.register_scene("Recording", RecordingScene)
    clock = itertools.count(0.0, 0.5).__next__
    return SceneManager(application, fabric, tmp_path, clock)


def test_new_manager_is_idle(manager):
    assert manager.is_running() is False
    assert manager.current_scene is None
    assert manager.front_scene() is None
    assert manager.back_scene() is None
    assert manager.scenes == ()


def test_missing_file_is_invalid(manager):
    with pytest.raises(SceneInvalidPathError) as info:
        manager.load_scene("Level 1.scenebp")
    assert str(info.value) == "Invalid scene path: 'Level 1.scenebp'"


def test_parent_and_absolute_paths_are_invalid(manager, scenes_dir, tmp_path):
    write_scene(tmp_path, "Outside.scenebp", {"Type": "Recording"})
    with pytest.raises(SceneInvalidPathError):
        manager.load_scene("../Outside.scenebp")
    with pytest.raises(SceneInvalidPathError):
        manager.load_scene(tmp_path / "Outside.scenebp")


def test_wrong_extension(manager, scenes_dir):
    write_scene(scenes_dir, "Main.json", {"Type": "Recording"})
    with pytest.raises(SceneFileExtensionError) as info:
        manager.load_scene("Main.json")
    assert info.value.file_type == ".json"


def test_missing_type(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Name": "Main"})
    with pytest.raises(SceneDataTypeMissingError):
        manager.load_scene("Main.scenebp")


def test_bad_json(manager, scenes_dir):
    (scenes_dir / "Main.scenebp").write_text("{not json", encoding="utf-8")
    with pytest.raises(FailedToParseSceneDataError):
        manager.load_scene("Main.scenebp")


def test_unregistered_type(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Unknown"})
    with pytest.raises(SceneTypeNotRegisteredError):
        manager.load_scene("Main.scenebp")


def test_directory_cannot_be_opened(manager, scenes_dir):
    (scenes_dir / "Folder.scenebp").mkdir()
    with pytest.raises(FailedToOpenFileError):
        manager.load_scene("Folder.scenebp")


def test_load_is_queued_until_update(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording", "Value": 3})
    manager.load_scene("Main.scenebp")
    assert manager.scenes == ()
    assert str(manager.front_scene()) == "Main.scenebp"
    manager.update()
    (path, scene), = manager.scenes
    assert str(path) == "Main.scenebp"
    assert scene.loaded == [{"Type": "Recording", "Value": 3}]


def test_front_and_back(manager, scenes_dir):
    write_scene(scenes_dir, "A.scenebp", {"Type": "Recording"})
    write_scene(scenes_dir, "B.scenebp", {"Type": "Recording"})
    manager.load_scene("A.scenebp")
    manager.load_scene("B.scenebp")
    assert str(manager.front_scene()) == "A.scenebp"
    assert str(manager.back_scene()) == "B.scenebp"
    manager.update()
    assert str(manager.front_scene()) == "A.scenebp"
    assert str(manager.back_scene()) == "B.scenebp"


def test_scene_can_queue_loads_while_loading(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording", "NextScene": "Level 1.scenebp"})
    write_scene(scenes_dir, "Level 1.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.update()
    assert [str(path) for path, _ in manager.scenes] == ["Main.scenebp", "Level 1.scenebp"]


def test_current_scene_from_load_queue(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.set_current_scene(manager.front_scene())
    assert manager.is_running() is True
    assert manager.current_scene is None
    manager.update()
    scene = manager.current_scene
    assert scene is manager.scenes[0][1]
    assert scene.updates == [0.5]
    manager.update()
    assert scene.updates == [0.5, 0.5]


def test_render_goes_to_current_scene(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.set_current_scene("Main.scenebp")
    manager.update()
    target = object()
    manager.render(target)
    assert manager.current_scene.rendered == [target]


def test_set_unknown_current_scene(manager):
    with pytest.raises(SceneNotFoundError) as info:
        manager.set_current_scene("Nowhere.scenebp")
    assert str(info.value) == "Failed to find scene with path 'Nowhere.scenebp'"


def test_reset_current_scene(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.set_current_scene("Main.scenebp")
    manager.update()
    manager.reset_current_scene()
    assert manager.is_running() is True
    manager.update()
    assert manager.current_scene is None
    assert manager.is_running() is False


def test_unload_saves_and_removes(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording", "Value": 3})
    manager.load_scene("Main.scenebp")
    manager.update()
    manager.unload_scene("Main.scenebp")
    assert manager.scenes == ()
    manager.update()
    text = (scenes_dir / "Main.scenebp").read_text(encoding="utf-8")
    assert json.loads(text) == {"Type": "Recording", "Value": 3, "Saved": True}
    assert text.startswith('{\n    "Type"')


def test_unload_unknown_path(manager):
    with pytest.raises(SceneNotFoundError):
        manager.unload_scene("Nowhere.scenebp")


def test_unload_unknown_scene_object_is_ignored(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.update()
    manager.unload_scene(RecordingScene(manager))
    manager.update()
    assert len(manager.scenes) == 1
    assert json.loads((scenes_dir / "Main.scenebp").read_text()) == {"Type": "Recording"}


def test_unload_by_scene_object(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.update()
    scene = manager.scenes[0][1]
    manager.unload_scene(scene)
    manager.update()
    assert manager.scenes == ()
    assert json.loads((scenes_dir / "Main.scenebp").read_text())["Saved"] is True


def test_unloading_scene_cannot_become_current(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.update()
    scene = manager.scenes[0][1]
    manager.unload_scene(scene)
    manager.set_current_scene(scene)
    assert manager.is_running() is False
    manager.update()
    assert manager.current_scene is None


def test_reload_replaces_current_scene(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.set_current_scene("Main.scenebp")
    manager.update()
    old = manager.current_scene
    manager.reload_scene(old)
    manager.update()
    fresh = manager.current_scene
    assert fresh is not old
    assert isinstance(fresh, RecordingScene)
    assert fresh.loaded[0]["Saved"] is True
    assert manager.scenes[0][1] is fresh


def test_reload_unknown_path(manager):
    with pytest.raises(SceneNotFoundError):
        manager.reload_scene("Nowhere.scenebp")


def test_close_saves_queued_unloads(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    manager.set_current_scene("Main.scenebp")
    manager.update()
    manager.unload_scene("Main.scenebp")
    manager.close()
    assert manager.scenes == ()
    assert manager.is_running() is False
    assert json.loads((scenes_dir / "Main.scenebp").read_text())["Saved"] is True


def test_close_finishes_pending_loads(manager, scenes_dir):
    write_scene(scenes_dir, "Main.scenebp", {"Type": "Recording"})
    manager.load_scene("Main.scenebp")
    with manager:
        pass
    assert manager.front_scene() is None
    assert json.loads((scenes_dir / "Main.scenebp").read_text()) == {"Type": "Recording"}


def test_application_is_kept(tmp_path):
    application = object()
    manager = SceneManager(application, SceneFabric(application), tmp_path)
    assert manager.application is application
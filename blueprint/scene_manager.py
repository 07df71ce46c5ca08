"""Loading, saving, reloading and switching of scenes stored as JSON files."""

from __future__ import annotations

import json
import os
import time
from collections import deque
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple, Union

from blueprint.resources import BlueprintError, FailedToOpenFileError, ResourceManager
from blueprint.scene import Scene, SceneFabric

SCENE_EXTENSION = ".scenebp"

PathLike = Union[str, "os.PathLike[str]"]
_Entry = Tuple[Path, Scene]


class SceneInvalidPathError(BlueprintError):
    """The scene path is absolute, leaves the scene folder or does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid scene path: '{path}'")


class SceneFileExtensionError(BlueprintError):
    """The scene file has the wrong extension."""

    def __init__(self, file_type: str) -> None:
        self.file_type = file_type
        super().__init__(f"Scene file extension must be 'bpscene', not '{file_type}'")


class FailedToParseSceneDataError(BlueprintError):
    """The scene file is not valid JSON or could not be serialised."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Failed to interpret scene data as json file\n Path: '{path}'")


class SceneDataTypeMissingError(BlueprintError):
    """The scene file has no ``Type`` field."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Scene file missing field: 'Type'\n Path: '{path}'")


class SceneNotFoundError(BlueprintError):
    """No scene is known under the given path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Failed to find scene with path '{path}'")


def _is_path(target: Any) -> bool:
    return isinstance(target, (str, os.PathLike))


class SceneManager:
    """Keeps the loaded scenes and applies queued changes once per update.

    Loads, unloads and reloads are queued and carried out at the start of the
    next :meth:`update`, so scenes may request them from inside their own hooks.
    """

    def __init__(self, application: Any, fabric: SceneFabric, resources_root: Any = None,
                 clock: Optional[Callable[[], float]] = None) -> None:
        self._application = application
        self._fabric = fabric
        self._resources = ResourceManager("Scenes", resources_root)
        self._clock = clock if clock is not None else time.perf_counter
        self._last_tick = self._clock()
        self._current: Optional[Scene] = None
        self._next: Optional[Scene] = None
        self._update_current = False
        self._scenes: List[_Entry] = []
        self._load_queue: Deque[_Entry] = deque()
        self._unload_queue: Deque[_Entry] = deque()
        self._reload_queue: Deque[_Entry] = deque()

    def update(self) -> None:
        """Apply queued changes, switch scenes, then update the current scene."""
        self._load_scenes()
        self._unload_scenes()
        self._reload_scenes()
        self._update_current_scene()
        if self._current is not None:
            self._current.update(self._restart_clock())

    def render(self, render_target: Any) -> None:
        if self._current is not None:
            self._current.render(render_target)

    def is_running(self) -> bool:
        return self._current is not None or self._next is not None

    @property
    def application(self) -> Any:
        return self._application

    @property
    def current_scene(self) -> Optional[Scene]:
        return self._current

    @property
    def scenes(self) -> Tuple[_Entry, ...]:
        """The loaded scenes as ``(path, scene)`` pairs, in loading order."""
        return tuple(self._scenes)

    def load_scene(self, path: PathLike) -> None:
        """Create the scene stored at ``path`` and queue it for loading."""
        path = Path(path)
        if not self._resources.is_path_valid(path):
            raise SceneInvalidPathError(str(path))
        if path.suffix != SCENE_EXTENSION:
            raise SceneFileExtensionError(path.suffix)
        scene = self._fabric.create_scene(self._scene_type(path), self)
        self._load_queue.append((path, scene))

    def unload_scene(self, target: Union[PathLike, Scene]) -> None:
        """Queue a scene, given by path or by itself, to be saved and dropped.

        An unknown path raises :class:`SceneNotFoundError`; an unknown scene
        object is ignored.
        """
        entry = self._resolve(target)
        if entry is None:
            return
        self._unload_queue.append(entry)
        self._remove(entry[0])

    def reload_scene(self, target: Union[PathLike, Scene]) -> None:
        """Queue a scene, given by path or by itself, to be saved and rebuilt."""
        entry = self._resolve(target)
        if entry is not None:
            self._reload_queue.append(entry)

    def set_current_scene(self, target: Union[PathLike, Scene]) -> None:
        """Make a scene current from the next update on."""
        if _is_path(target):
            path = Path(target)
            scene = self._find_scene(path)
            if scene is None:
                scene = next((s for p, s in self._load_queue if p == path), None)
            if scene is None:
                raise SceneNotFoundError(str(path))
        else:
            scene = target
            if any(other is scene for _, other in self._unload_queue):
                return
        self._next = scene
        self._update_current = True

    def reset_current_scene(self) -> None:
        """Leave no scene current from the next update on."""
        self._next = None
        self._update_current = True

    def front_scene(self) -> Optional[Path]:
        """Path of the first loaded scene, else of the first queued one."""
        if self._scenes:
            return self._scenes[0][0]
        if self._load_queue:
            return self._load_queue[0][0]
        return None

    def back_scene(self) -> Optional[Path]:
        """Path of the last queued scene, else of the last loaded one."""
        if self._load_queue:
            return self._load_queue[-1][0]
        if self._scenes:
            return self._scenes[-1][0]
        return None

    def close(self) -> None:
        """Finish pending loads, drop every scene and save queued unloads."""
        self._load_scenes()
        self._scenes.clear()
        self._unload_scenes()
        self._reload_queue.clear()
        self._current = None
        self._next = None
        self._update_current = False

    def __enter__(self) -> "SceneManager":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _restart_clock(self) -> float:
        now = self._clock()
        elapsed = now - self._last_tick
        self._last_tick = now
        return elapsed

    def _resolve(self, target: Union[PathLike, Scene]) -> Optional[_Entry]:
        if _is_path(target):
            path = Path(target)
            scene = self._find_scene(path)
            if scene is None:
                raise SceneNotFoundError(str(path))
            return path, scene
        found = self._find_path(target)
        return (found, target) if found is not None else None

    def _remove(self, path: Path) -> None:
        for position, (other, _) in enumerate(self._scenes):
            if other == path:
                del self._scenes[position]
                return

    def _find_scene(self, path: Path) -> Optional[Scene]:
        return next((scene for other, scene in self._scenes if other == path), None)

    def _find_path(self, scene: Scene) -> Optional[Path]:
        return next((path for path, other in self._scenes if other is scene), None)

    def _load_data(self, path: Path) -> Any:
        full_path = self._resources.full_path(path)
        try:
            with open(full_path, encoding="utf-8") as file:
                try:
                    return json.load(file)
                except ValueError:
                    raise FailedToParseSceneDataError(str(full_path)) from None
        except OSError:
            raise FailedToOpenFileError(full_path) from None

    def _save_data(self, data: Any, path: Path) -> None:
        full_path = self._resources.full_path(path)
        try:
            text = json.dumps(data, indent=4, ensure_ascii=False)
        except (TypeError, ValueError):
            raise FailedToParseSceneDataError(str(full_path)) from None
        try:
            with open(full_path, "w", encoding="utf-8") as file:
                file.write(text)
        except OSError:
            raise FailedToOpenFileError(full_path) from None

    def _scene_type(self, path: Path) -> str:
        data = self._load_data(path)
        if not isinstance(data, dict) or "Type" not in data:
            raise SceneDataTypeMissingError(str(path))
        scene_type = data["Type"]
        if not isinstance(scene_type, str):
            raise FailedToParseSceneDataError(str(self._resources.full_path(path)))
        return scene_type

    def _update_current_scene(self) -> None:
        if self._update_current:
            self._current = self._next
            self._next = None
            self._update_current = False

    def _load_scenes(self) -> None:
        # Scenes may queue further loads while loading; those are handled too.
        while self._load_queue:
            path, scene = self._load_queue.popleft()
            self._scenes.append((path, scene))
            scene.load(self._load_data(path))

    def _unload_scenes(self) -> None:
        while self._unload_queue:
            path, scene = self._unload_queue.popleft()
            self._store(path, scene)

    def _store(self, path: Path, scene: Scene) -> None:
        data = self._load_data(path)
        data["Type"] = self._scene_type(path)
        scene.save(data)
        self._save_data(data, path)

    def _reload_scenes(self) -> None:
        while self._reload_queue:
            path, scene = self._reload_queue.popleft()
            self._reload(path, scene)

    def _reload(self, path: Path, scene: Scene) -> None:
        was_current = self._current is scene
        was_next = not was_current and self._next is scene
        self._store(path, scene)
        fresh = self._fabric.create_scene(self._scene_type(path), self)
        fresh.load(self._load_data(path))
        self._scenes = [(other, fresh if other == path else old) for other, old in self._scenes]
        if was_current:
            self._current = fresh
        elif was_next:
            self._next = fresh
"""Scenes and the registry that creates them by type name."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict

from blueprint.resources import BlueprintError

if TYPE_CHECKING:
    from blueprint.scene_manager import SceneManager


class Scene:
    """A unit of game content owned by a scene manager.

    The base scene keeps the data it was loaded from, the time it has run
    for and how often it was drawn; subclasses extend the hooks they need.
    """

    def __init__(self, manager: "SceneManager") -> None:
        self._manager = manager
        self.data: Dict[str, Any] = {}
        self.elapsed = 0.0
        self.render_count = 0

    def load(self, data: Dict[str, Any]) -> None:
        """Build the scene from its parsed scene file."""
        self.data = dict(data)

    def save(self, data: Dict[str, Any]) -> None:
        """Write the scene's state into ``data`` before it is stored.

        Keys the scene was loaded with are kept where ``data`` lacks them.
        """
        for key, value in self.data.items():
            data.setdefault(key, value)

    def update(self, delta_time: float) -> None:
        """Advance the scene by ``delta_time`` seconds."""
        self.elapsed += delta_time

    def render(self, render_target: Any) -> None:
        """Draw the scene onto ``render_target``."""
        self.render_count += 1

    @property
    def scene_manager(self) -> "SceneManager":
        return self._manager


class SceneTypeNotRegisteredError(BlueprintError):
    """No scene type is registered under the requested name."""

    def __init__(self, scene_type: str) -> None:
        self.scene_type = scene_type
        super().__init__(f"Scene type '{scene_type}' is not registered")


SceneFactory = Callable[["SceneManager"], Scene]


class SceneFabric:
    """Maps type names found in scene files to scene constructors."""

    def __init__(self, application: Any) -> None:
        self._application = application
        self._creates: Dict[str, SceneFactory] = {}

    def register_scene(self, key_name: str, scene_type: SceneFactory) -> None:
        """Register ``scene_type`` under ``key_name``, replacing any earlier one."""
        self._creates[key_name] = scene_type

    def create_scene(self, key_name: str, scene_manager: "SceneManager") -> Scene:
        """Create a new scene of the type registered as ``key_name``."""
        try:
            create = self._creates[key_name]
        except KeyError:
            raise SceneTypeNotRegisteredError(key_name) from None
        return create(scene_manager)

    @property
    def application(self) -> Any:
        return self._application
"""The game window, its main loop and the managers it owns."""

from __future__ import annotations

from typing import Any, Tuple

import pygame

from blueprint.graphics import Color, RenderTarget
from blueprint.resources import BlueprintError, TextureManager
from blueprint.scene import SceneFabric
from blueprint.scene_manager import SceneManager

_CLEAR_COLOR = Color(0, 0, 0)


class EscapedError(BlueprintError):
    """The player pressed Escape to abort the game."""

    def __init__(self) -> None:
        super().__init__("Escaped")


class Application:
    """Opens a window and drives the current scene until it stops running."""

    def __init__(self, window_resolution: Tuple[int, int], window_title: str,
                 resources_root: Any = None) -> None:
        pygame.display.init()
        width, height = window_resolution
        self._window = pygame.display.set_mode((int(width), int(height)))
        pygame.display.set_caption(str(window_title))
        self._window_open = True
        self._render_target = RenderTarget(self._window)
        self._texture_manager = TextureManager(resources_root)
        self._scene_fabric = SceneFabric(self)
        self._scene_manager = SceneManager(self, self._scene_fabric, resources_root)

    @property
    def render_window(self) -> Any:
        return self._window

    @property
    def render_target(self) -> RenderTarget:
        return self._render_target

    @property
    def window_open(self) -> bool:
        return self._window_open

    @property
    def scene_fabric(self) -> SceneFabric:
        return self._scene_fabric

    @property
    def scene_manager(self) -> SceneManager:
        return self._scene_manager

    @property
    def texture_manager(self) -> TextureManager:
        return self._texture_manager

    def run(self) -> None:
        """Process events, update and render until the game stops."""
        while self.is_running():
            self.process_events()
            self.update()
            self.render()

    def is_running(self) -> bool:
        return self._window_open and self._scene_manager.is_running()

    def process_events(self) -> None:
        for event in pygame.event.get():
            self.process_event(event)

    def process_event(self, event: Any) -> None:
        """Close the window on a quit request; raise on Escape."""
        if event.type == pygame.QUIT:
            self._window_open = False
        elif event.type == pygame.KEYDOWN and getattr(event, "key", None) == pygame.K_ESCAPE:
            raise EscapedError()

    def update(self) -> None:
        self._scene_manager.update()

    def render(self) -> None:
        if not self._window_open:
            return
        self._render_target.clear(_CLEAR_COLOR)
        self._scene_manager.render(self._render_target)
        pygame.display.flip()

    def close(self) -> None:
        """Drop every scene and texture and close the window."""
        self._scene_manager.close()
        self._texture_manager.close()
        self._window_open = False
        pygame.display.quit()

    def __enter__(self) -> "Application":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
"""A side-scrolling camera and a decaying screen shake."""

from __future__ import annotations

import random
from typing import Optional

from blueprint.graphics import Vector2, View


class Camera:
    """A fixed-height view that scrolls horizontally between two limits."""

    def __init__(self) -> None:
        self.view = View(center=(96.0, 72.0), size=(192.0, 144.0))
        self._left_most_center = self.view.size[0] / 2.0
        self._right_most_center = 0.0

    def set_right_most_limit(self, right_most_limit: float) -> None:
        """Stop scrolling so the view's right edge never passes ``right_most_limit``."""
        self._right_most_center = right_most_limit - self._left_most_center

    def set_center(self, center: Vector2) -> None:
        x, _ = center
        if x < self._left_most_center:
            x = self._left_most_center
        elif self._right_most_center != 0.0 and x > self._right_most_center:
            x = self._right_most_center
        self.view.center = (x, self.view.size[1] / 2.0)

    @property
    def center(self) -> Vector2:
        return self.view.center


class CameraShaker:
    """Jitters a camera's view with a magnitude that fades over the shake."""

    def __init__(self, camera: Camera, rng: Optional[random.Random] = None) -> None:
        self._camera = camera
        self._rng = rng if rng is not None else random.Random()
        self.duration = 4.0
        self.magnitude = 6.0
        self._elapsed = 0.0
        self._shaking = False

    def initialize_shake(self) -> None:
        self._shaking = True
        self._elapsed = 0.0

    def is_shaking(self) -> bool:
        return self._shaking

    def update(self, delta_time: float) -> None:
        if not self._shaking:
            return
        self._elapsed += delta_time
        if self._elapsed >= self.duration:
            self._shaking = False
            return
        current = self.magnitude * (1.0 - self._elapsed / self.duration)
        dx = self._rng.uniform(-1.0, 1.0) * current
        dy = self._rng.uniform(-1.0, 1.0) * current
        view = self._camera.view
        view.center = (view.center[0] + dx, view.center[1] + dy)
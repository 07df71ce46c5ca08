"""Plane geometry, textured rectangles and a pygame-backed render target."""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import Any, Optional, Tuple

import pygame

Vector2 = Tuple[float, float]


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255


_WHITE = Color(255, 255, 255)


def _extent(position: Vector2, size: Vector2) -> Tuple[float, float, float, float]:
    x, y = position
    w, h = size
    return min(x, x + w), min(y, y + h), max(x, x + w), max(y, y + h)


@dataclass(frozen=True)
class FloatRect:
    position: Vector2 = (0.0, 0.0)
    size: Vector2 = (0.0, 0.0)

    def find_intersection(self, other: "FloatRect") -> Optional["FloatRect"]:
        """The overlap of both rectangles, or None when they do not overlap."""
        a_left, a_top, a_right, a_bottom = _extent(self.position, self.size)
        b_left, b_top, b_right, b_bottom = _extent(other.position, other.size)
        left, top = max(a_left, b_left), max(a_top, b_top)
        right, bottom = min(a_right, b_right), min(a_bottom, b_bottom)
        if left < right and top < bottom:
            return FloatRect((left, top), (right - left, bottom - top))
        return None


@dataclass(frozen=True)
class IntRect:
    position: Tuple[int, int] = (0, 0)
    size: Tuple[int, int] = (0, 0)


@dataclass
class View:
    """The world area, given by its centre and size, shown on a render target."""

    center: Vector2
    size: Vector2


@dataclass
class RectangleShape:
    """A rectangle with a transform, an optional texture and a fill colour."""

    size: Vector2 = (0.0, 0.0)
    position: Vector2 = (0.0, 0.0)
    origin: Vector2 = (0.0, 0.0)
    scale: Vector2 = (1.0, 1.0)
    rotation: float = 0.0
    texture: Any = None
    texture_rect: IntRect = IntRect()
    fill_color: Color = _WHITE

    def move(self, offset: Vector2) -> None:
        self.position = (self.position[0] + offset[0], self.position[1] + offset[1])

    def rotate(self, degrees: float) -> None:
        self.rotation = (self.rotation + degrees) % 360.0

    def global_bounds(self) -> FloatRect:
        """Axis-aligned bounds of the transformed rectangle in world space."""
        width, height = self.size
        ox, oy = self.origin
        sx, sy = self.scale
        angle = math.radians(self.rotation)
        cos, sin = math.cos(angle), math.sin(angle)
        xs, ys = [], []
        for cx, cy in ((0.0, 0.0), (width, 0.0), (0.0, height), (width, height)):
            lx, ly = (cx - ox) * sx, (cy - oy) * sy
            xs.append(lx * cos - ly * sin + self.position[0])
            ys.append(lx * sin + ly * cos + self.position[1])
        left, top = min(xs), min(ys)
        return FloatRect((left, top), (max(xs) - left, max(ys) - top))


class RenderTarget:
    """Draws shapes onto a pygame surface through a :class:`View`."""

    def __init__(self, surface: Any) -> None:
        self.surface = surface
        width, height = surface.get_size()
        self.view = View(center=(width / 2.0, height / 2.0), size=(float(width), float(height)))

    def set_view(self, view: View) -> None:
        self.view = view

    def clear(self, color: Color) -> None:
        self.surface.fill(astuple(color))

    def draw(self, shape: RectangleShape) -> None:
        px, py = self._pixels_per_unit()
        width = round(abs(shape.size[0] * shape.scale[0]) * px)
        height = round(abs(shape.size[1] * shape.scale[1]) * py)
        if width <= 0 or height <= 0:
            return
        image = self._shape_image(shape, (width, height))
        if image is None:
            return
        if shape.scale[0] < 0 or shape.scale[1] < 0:
            image = pygame.transform.flip(image, shape.scale[0] < 0, shape.scale[1] < 0)
        if shape.rotation:
            image = pygame.transform.rotate(image, -shape.rotation)
        left, top = self._to_screen(shape.global_bounds().position)
        self.surface.blit(image, (round(left), round(top)))

    def _pixels_per_unit(self) -> Tuple[float, float]:
        width, height = self.surface.get_size()
        return width / self.view.size[0], height / self.view.size[1]

    def _to_screen(self, point: Vector2) -> Tuple[float, float]:
        px, py = self._pixels_per_unit()
        left = self.view.center[0] - self.view.size[0] / 2.0
        top = self.view.center[1] - self.view.size[1] / 2.0
        return (point[0] - left) * px, (point[1] - top) * py

    @staticmethod
    def _shape_image(shape: RectangleShape, size: Tuple[int, int]) -> Any:
        image = pygame.Surface(size, pygame.SRCALPHA)
        if shape.texture is None:
            image.fill(astuple(shape.fill_color))
            return image
        area = pygame.Rect(shape.texture_rect.position, shape.texture_rect.size)
        area.normalize()
        area = area.clip(shape.texture.get_rect())
        if area.width == 0 or area.height == 0:
            return None
        scaled = pygame.transform.scale(shape.texture.subsurface(area), size)
        image.blit(scaled, (0, 0))
        if shape.fill_color != _WHITE:
            image.fill(astuple(shape.fill_color), special_flags=pygame.BLEND_RGBA_MULT)
        return image
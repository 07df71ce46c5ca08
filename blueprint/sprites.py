"""Textured tile-based sprites: the generic sprite, a hint bubble and a door."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from blueprint.graphics import FloatRect, IntRect, RectangleShape, Vector2
from blueprint.resources import TextureResource

TileIndex = Tuple[int, int]


def _tile_rect(tile_index: TileIndex, tile_size: Tuple[int, int]) -> IntRect:
    x, y = tile_index
    w, h = tile_size
    return IntRect((x * w, y * h), (w, h))


class SpriteObject:
    """A rectangle showing one tile of a tile-sheet texture."""

    def __init__(self, tile_size: Vector2) -> None:
        self._rectangle = RectangleShape(size=(float(tile_size[0]), float(tile_size[1])))
        self._tile_size = (int(tile_size[0]), int(tile_size[1]))
        self.tile_index = (0, 0)
        self.data: Dict[str, Any] = {}

    def load(self, data: Dict[str, Any]) -> None:
        """Keep the scene data the sprite was configured from."""
        self.data = dict(data)

    def render(self, render_target: Any) -> None:
        render_target.draw(self._rectangle)

    def set_texture_resource(self, texture_resource: TextureResource) -> None:
        self._rectangle.texture = texture_resource.texture

    @property
    def position(self) -> Vector2:
        return self._rectangle.position

    @position.setter
    def position(self, position: Vector2) -> None:
        self._rectangle.position = (float(position[0]), float(position[1]))

    @property
    def tile_size(self) -> Vector2:
        return self._rectangle.size

    @tile_size.setter
    def tile_size(self, tile_size: Vector2) -> None:
        old_index = self.tile_index
        self._rectangle.size = (float(tile_size[0]), float(tile_size[1]))
        self._tile_size = (int(tile_size[0]), int(tile_size[1]))
        self.tile_index = old_index

    @property
    def tile_index(self) -> TileIndex:
        x, y = self._rectangle.texture_rect.position
        w, h = self._tile_size
        return int(x / w), int(y / h)

    @tile_index.setter
    def tile_index(self, tile_index: TileIndex) -> None:
        self._rectangle.texture_rect = _tile_rect(
            (int(tile_index[0]), int(tile_index[1])), self._tile_size)

    @property
    def rectangle(self) -> RectangleShape:
        return self._rectangle


class Hint(SpriteObject):
    """A three-frame animated hint drawn above a point."""

    FRAME_DURATION = 4.0
    OFFSET = (-20.0, -28.0)

    def __init__(self) -> None:
        super().__init__((32.0, 32.0))
        self._elapsed = 0.0
        self._frame = 0

    def update(self, delta_time: float) -> None:
        self._elapsed += delta_time
        while self._elapsed > self.FRAME_DURATION:
            self._frame += 1
            self._elapsed -= self.FRAME_DURATION
        self.tile_index = (self._frame % 3, 0)

    def set_position(self, position: Vector2) -> None:
        """Place the hint relative to the point it points at."""
        self.position = (position[0] + self.OFFSET[0], position[1] + self.OFFSET[1])


class Door:
    """A 16 by 16 door tile the player walks through to leave a level."""

    SIZE = 16

    def __init__(self) -> None:
        self._resource = TextureResource()
        self._rectangle = RectangleShape(size=(float(self.SIZE), float(self.SIZE)))
        self.set_tile_index((0, 0))

    def render(self, render_target: Any) -> None:
        render_target.draw(self._rectangle)

    @property
    def position(self) -> Vector2:
        return self._rectangle.position

    @position.setter
    def position(self, position: Vector2) -> None:
        self._rectangle.position = (float(position[0]), float(position[1]))

    @property
    def rectangle(self) -> RectangleShape:
        return self._rectangle

    def set_texture_resource(self, texture_resource: TextureResource) -> None:
        """Hold a handle to ``texture_resource``'s texture and show it."""
        self._resource.assign(texture_resource)
        self._rectangle.texture = self._resource.texture

    def set_tile_index(self, tile_position: TileIndex) -> None:
        self._rectangle.texture_rect = _tile_rect(
            (int(tile_position[0]), int(tile_position[1])), (self.SIZE, self.SIZE))

    @property
    def bounding_box(self) -> FloatRect:
        return self._rectangle.global_bounds()
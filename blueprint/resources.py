"""File-backed resources and reference-counted textures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

DEFAULT_RESOURCES_ROOT = Path("..") / "Resources"


class BlueprintError(Exception):
    """Base class of every error raised by the package."""


class FailedToOpenFileError(BlueprintError):
    """A resource file could not be opened."""

    def __init__(self, path: Any) -> None:
        self.path = str(path)
        super().__init__(f"Failed to open file\n Path: '{self.path}'")


class FailedToLoadTextureError(BlueprintError):
    """A texture file could not be decoded."""

    def __init__(self, path: Any) -> None:
        self.path = str(path)
        super().__init__(f"Failed to load texture\n Path'{self.path}'")


class TextureNotFoundError(BlueprintError):
    """A texture could not be found or loaded."""

    def __init__(self) -> None:
        super().__init__("Failed to find texture by reference")


class ResourceManager:
    """Resolves relative resource paths below a root folder."""

    def __init__(self, sub_folder: Any, resources_root: Any = None) -> None:
        root = Path(resources_root) if resources_root is not None else DEFAULT_RESOURCES_ROOT
        self._root_path = root / Path(sub_folder)

    def is_path_valid(self, path: Any) -> bool:
        """Whether ``path`` is relative, stays below the root and exists."""
        path = Path(path)
        if path.is_absolute():
            return False
        if ".." in path.parts:
            return False
        return self.full_path(path).exists()

    def full_path(self, path: Any) -> Path:
        return self._root_path / Path(path)

    @property
    def root_path(self) -> Path:
        return self._root_path


@dataclass
class _TextureHolder:
    texture: Any
    count: int = 0


class TextureResource:
    """A counted handle to a texture owned by a :class:`TextureManager`.

    The texture is dropped from its manager once the last handle is released.
    """

    def __init__(self, manager: Optional["TextureManager"] = None, path: Any = None,
                 texture: Any = None) -> None:
        self._manager = manager
        self._path = Path(path) if path is not None else None
        self._texture = texture
        self._acquire()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def texture(self) -> Any:
        return self._texture

    def copy(self) -> "TextureResource":
        """Return a new handle to the same texture."""
        return TextureResource(self._manager, self._path, self._texture)

    def assign(self, other: "TextureResource") -> "TextureResource":
        """Drop the current texture and refer to the one ``other`` holds."""
        if other is self:
            return self
        manager, path, texture = other._manager, other._path, other._texture
        self.release()
        self._manager, self._path, self._texture = manager, path, texture
        self._acquire()
        return self

    def release(self) -> None:
        """Give up this handle; the handle refers to nothing afterwards."""
        if self._holds():
            self._manager._release(self._path)
        self._manager = None
        self._path = None
        self._texture = None

    def __enter__(self) -> "TextureResource":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def _holds(self) -> bool:
        return self._manager is not None and self._texture is not None

    def _acquire(self) -> None:
        if self._holds():
            self._manager._acquire(self._path)


def _load_image(path: Path) -> Any:
    import pygame

    return pygame.image.load(str(path))


class TextureManager(ResourceManager):
    """Loads textures from the ``Textures`` folder and shares them by path."""

    def __init__(self, resources_root: Any = None,
                 loader: Optional[Callable[[Path], Any]] = None) -> None:
        super().__init__("Textures", resources_root)
        self._loader = loader if loader is not None else _load_image
        self._textures: dict[Path, _TextureHolder] = {}

    def get_texture_resource(self, texture_path: Any) -> TextureResource:
        """Return a handle to the texture at ``texture_path``, loading it once."""
        key = Path(texture_path)
        if not self.is_path_valid(key):
            raise TextureNotFoundError()
        holder = self._textures.get(key)
        if holder is None:
            try:
                texture = self._loader(self.full_path(key))
            except (OSError, RuntimeError, ValueError) as exc:
                raise TextureNotFoundError() from exc
            if texture is None:
                raise TextureNotFoundError()
            holder = self._textures[key] = _TextureHolder(texture)
        return TextureResource(self, key, holder.texture)

    def reference_count(self, texture_path: Any) -> int:
        """Number of live handles to the texture; 0 when it is not loaded."""
        holder = self._textures.get(Path(texture_path))
        return holder.count if holder is not None else 0

    def close(self) -> None:
        """Drop every loaded texture."""
        self._textures.clear()

    def __enter__(self) -> "TextureManager":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _acquire(self, path: Path) -> None:
        self._textures[path].count += 1

    def _release(self, path: Path) -> None:
        holder = self._textures.get(path)
        if holder is None:
            return
        holder.count -= 1
        if holder.count <= 0:
            del self._textures[path]
"""Texture containers: single images, numbered frame sequences and a keyed registry."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from PIL import Image

from .models import TexType


class TextureError(Exception):
    """Raised when an image cannot be read or a texture cannot be created."""


@dataclass
class TextureInfo:
    """A loaded image together with the facts read from its file."""

    path: str
    width: int
    height: int
    format: str | None
    mode: str
    image: Image.Image = field(repr=False)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "TextureInfo":
        """Read an image file fully into memory."""
        file_path = os.fspath(path)
        try:
            with Image.open(file_path) as source:
                source.load()
                image_format = source.format
                image = source.copy()
        except (OSError, ValueError) as exc:
            raise TextureError(f"cannot load image {file_path!r}: {exc}") from exc
        return cls(
            path=file_path,
            width=image.width,
            height=image.height,
            format=image_format,
            mode=image.mode,
            image=image,
        )

    def close(self) -> None:
        self.image.close()


def _frame_path(pattern: str, index: int) -> str:
    """Put a frame number into a path pattern such as ``Tile%d.png``."""
    if "%" not in pattern:
        return pattern
    try:
        return pattern % index
    except (TypeError, ValueError) as exc:
        raise TextureError(f"bad frame path pattern {pattern!r}: {exc}") from exc


class Texture(ABC):
    """A container of loaded textures."""

    @abstractmethod
    def get_texture(self, state_key: str = "", count: int = 0) -> TextureInfo | None:
        """Return the texture for a state and frame, or ``None`` if absent."""

    @abstractmethod
    def insert_texture(self, file_path: str, state_key: str = "", count: int = 0) -> None:
        """Load images into the container, raising :class:`TextureError` on failure."""

    @abstractmethod
    def release(self) -> None:
        """Drop every loaded texture."""


class SingleTexture(Texture):
    """One image, regardless of state key and frame number."""

    def __init__(self) -> None:
        self._info: TextureInfo | None = None

    def get_texture(self, state_key: str = "", count: int = 0) -> TextureInfo | None:
        return self._info

    def insert_texture(self, file_path: str, state_key: str = "", count: int = 0) -> None:
        self.release()
        self._info = TextureInfo.from_file(file_path)

    def release(self) -> None:
        if self._info is not None:
            self._info.close()
            self._info = None


class MultiTexture(Texture):
    """Numbered frame sequences grouped by state key."""

    def __init__(self) -> None:
        self._frames: dict[str, list[TextureInfo]] = {}

    def get_texture(self, state_key: str = "", count: int = 0) -> TextureInfo | None:
        frames = self._frames.get(state_key)
        if frames is None:
            return None
        if not 0 <= count < len(frames):
            raise IndexError(f"frame {count} out of range for state {state_key!r}")
        return frames[count]

    def insert_texture(self, file_path: str, state_key: str = "", count: int = 0) -> None:
        """Load frames ``0 .. count-1`` whose paths come from the ``%d`` pattern."""
        for index in range(count):
            info = TextureInfo.from_file(_frame_path(file_path, index))
            self._frames.setdefault(state_key, []).append(info)

    def release(self) -> None:
        for frames in self._frames.values():
            for info in frames:
                info.close()
        self._frames.clear()

    @property
    def state_keys(self) -> list[str]:
        return sorted(self._frames)


class TextureManager:
    """Textures registered under object keys."""

    def __init__(self) -> None:
        self._textures: dict[str, Texture] = {}

    def __contains__(self, obj_key: str) -> bool:
        return obj_key in self._textures

    def __len__(self) -> int:
        return len(self._textures)

    def get_texture(
        self, obj_key: str, state_key: str = "", count: int = 0
    ) -> TextureInfo | None:
        texture = self._textures.get(obj_key)
        if texture is None:
            return None
        return texture.get_texture(state_key, count)

    def insert_texture(
        self,
        file_path: str,
        tex_type: TexType,
        obj_key: str = "",
        state_key: str = "",
        count: int = 0,
    ) -> None:
        """Load and register a texture unless ``obj_key`` is already taken."""
        if obj_key in self._textures:
            return
        tex_type = TexType(tex_type)
        texture: Texture = SingleTexture() if tex_type is TexType.SINGLE else MultiTexture()
        try:
            texture.insert_texture(file_path, state_key, count)
        except TextureError:
            texture.release()
            raise
        self._textures[obj_key] = texture

    def release(self) -> None:
        for texture in self._textures.values():
            texture.release()
        self._textures.clear()
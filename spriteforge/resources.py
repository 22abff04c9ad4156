"""Loading of shaders, textures, sounds and fonts from asset directories."""

from __future__ import annotations

import logging
import struct
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_SOUND_SUFFIXES = frozenset({".wav", ".mp3"})

R = TypeVar("R", bound="Resource")


class Resource:
    """Base of everything the resource manager loads."""


@dataclass(frozen=True)
class ShaderSource(Resource):
    """Vertex and fragment program text of one shader."""

    vertex_code: str
    fragment_code: str

    @classmethod
    def from_files(cls, vertex_path: str | Path, fragment_path: str | Path) -> ShaderSource:
        return cls(
            Path(vertex_path).read_text(encoding="utf-8"),
            Path(fragment_path).read_text(encoding="utf-8"),
        )


def _png_size(path: Path) -> tuple[float, float]:
    with path.open("rb") as stream:
        header = stream.read(24)
    if len(header) < 24 or header[:8] != _PNG_SIGNATURE or header[12:16] != b"IHDR":
        raise ValueError(f"{path} is not a PNG image")
    width, height = struct.unpack(">II", header[16:24])
    return (float(width), float(height))


class TextureFile(Resource):
    """A PNG image on disk together with its pixel size."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.size = _png_size(self.path)

    def __repr__(self) -> str:
        return f"TextureFile(path={str(self.path)!r}, size={self.size})"


@dataclass(frozen=True)
class SoundFile(Resource):
    """A sound effect or music track on disk."""

    path: Path

    def __init__(self, path: str | Path) -> None:
        if not str(path):
            raise ValueError("empty filename given for a sound")
        object.__setattr__(self, "path", Path(path))


@dataclass(frozen=True)
class FontFile(Resource):
    """A TrueType font on disk and the point size to render it at."""

    path: Path
    size: int = DEFAULT_FONT_SIZE

    def __init__(self, path: str | Path, size: int = DEFAULT_FONT_SIZE) -> None:
        if not str(path):
            raise ValueError("empty filename given for a font")
        object.__setattr__(self, "path", Path(path))
        object.__setattr__(self, "size", int(size))


class ResourceManager:
    """Loads assets from directories and keeps them by file stem.

    ``name.vert`` with a matching ``name.frag`` becomes a shader; ``.png``
    files become textures, ``.wav``/``.mp3`` sounds and ``.ttf`` fonts. Other
    files and sub-directories are ignored. A later file with the same stem
    replaces an earlier one.
    """

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def names(self) -> list[str]:
        return sorted(self._resources)

    def load_resources(self, directory: str | Path) -> None:
        """Load every recognised file directly inside ``directory``."""
        start = time.perf_counter()
        directory = Path(directory)
        for entry in sorted(directory.iterdir()):
            if not entry.is_file():
                continue
            name = entry.stem
            suffix = entry.suffix
            logger.info("Loading: %s", entry)
            if suffix == ".vert":
                fragment = directory / f"{name}.frag"
                if fragment.exists():
                    self._resources[name] = self._load_shader(entry, fragment)
            elif suffix == ".png":
                self._resources[name] = self._load_texture(entry)
            elif suffix in _SOUND_SUFFIXES:
                self._resources[name] = self._load_sound(entry)
            elif suffix == ".ttf":
                self._resources[name] = self._load_font(entry)
        logger.info("Resources loaded in %s seconds.", time.perf_counter() - start)

    def get(self, name: str, kind: type[R] | None = None) -> R | Resource | None:
        """The resource called ``name``, or ``None``; it must be a ``kind`` if given."""
        resource = self._resources.get(name)
        if resource is not None and kind is not None and not isinstance(resource, kind):
            raise TypeError(
                f"resource {name!r} is a {type(resource).__name__}, not a {kind.__name__}"
            )
        return resource

    def _load_shader(self, vertex_path: Path, fragment_path: Path) -> ShaderSource:
        return ShaderSource.from_files(vertex_path, fragment_path)

    def _load_texture(self, path: Path) -> TextureFile:
        return TextureFile(path)

    def _load_sound(self, path: Path) -> SoundFile:
        return SoundFile(path)

    def _load_font(self, path: Path) -> FontFile:
        return FontFile(path, DEFAULT_FONT_SIZE)
"""Part asset lookup and loading.

AIDEV-NOTE: Assets are addressed as {category}_{index}.png with 1-based
indices and must match the canvas size exactly. Stores are read-only and
can be shared between generation calls.
"""

import os
from pathlib import Path

from PIL import Image

from monsterid.models import CANVAS_SIZE, PART_CATALOG, PartCategory

PARTS_DIR_ENV = "MONSTERID_PARTS_DIR"


class PartLoadError(Exception):
    """A part asset could not be provided."""


class PartNotFoundError(PartLoadError):
    """No asset exists for the requested category and index."""


class PartDecodeError(PartLoadError):
    """The asset exists but is not a usable image."""


def part_key(category: PartCategory, index: int) -> str:
    """Build the asset file name for a part.

    Raises:
        PartNotFoundError: If index is outside the catalog for the category
    """
    count = PART_CATALOG[category]
    if not 1 <= index <= count:
        raise PartNotFoundError(
            f"No {category.value} part {index}, catalog has 1..{count}"
        )
    return f"{category.value}_{index}.png"


def default_parts_dir() -> Path:
    """Directory used when no explicit parts directory is configured."""
    override = os.environ.get(PARTS_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "parts"


class PartStore:
    """Resolves (category, index) pairs to RGBA part images."""

    def load(self, category: PartCategory, index: int) -> Image.Image:
        """Return a fresh RGBA image the caller may modify.

        Raises:
            PartLoadError: If the asset is missing or cannot be decoded
        """
        raise NotImplementedError


class DirectoryPartStore(PartStore):
    """Loads part PNGs from a directory on disk."""

    def __init__(self, root: "str | Path | None" = None, cache: bool = False):
        self.root = Path(root) if root is not None else default_parts_dir()
        self.cache = cache
        self._cache: "dict[str, Image.Image]" = {}

    def load(self, category: PartCategory, index: int) -> Image.Image:
        key = part_key(category, index)
        if key in self._cache:
            return self._cache[key].copy()

        image = self._read(self.root / key)
        if self.cache:
            self._cache[key] = image
            return image.copy()
        return image

    def _read(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as source:
                image = source.convert("RGBA")
        except FileNotFoundError as e:
            raise PartNotFoundError(f"Missing part asset {path}") from e
        except Exception as e:
            # AIDEV-NOTE: Pillow signals damaged or oversized files with
            # SyntaxError, DecompressionBombError, ValueError and OSError alike
            raise PartDecodeError(f"Failed to decode {path}: {e}") from e

        if image.size != CANVAS_SIZE:
            raise PartDecodeError(
                f"{path.name} is {image.size[0]}x{image.size[1]}, "
                f"expected {CANVAS_SIZE[0]}x{CANVAS_SIZE[1]}"
            )
        return image

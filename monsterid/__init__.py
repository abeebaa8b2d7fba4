"""Deterministic monster avatars from arbitrary bytes."""

from .image_processing import (
    DirectoryPartStore,
    MonsterProcessor,
    PartDecodeError,
    PartLoadError,
    PartNotFoundError,
    PartStore,
    generate,
)
from .models import (
    CANVAS_SIZE,
    DEFAULT_BACKGROUND,
    DRAW_ORDER,
    PART_CATALOG,
    GenerationOptions,
    MonsterDescriptor,
    PartCategory,
)

__all__ = [
    "CANVAS_SIZE",
    "DEFAULT_BACKGROUND",
    "DRAW_ORDER",
    "PART_CATALOG",
    "DirectoryPartStore",
    "GenerationOptions",
    "MonsterDescriptor",
    "MonsterProcessor",
    "PartCategory",
    "PartDecodeError",
    "PartLoadError",
    "PartNotFoundError",
    "PartStore",
    "generate",
]

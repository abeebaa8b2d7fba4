"""Image processing pipeline for monster avatar generation.

AIDEV-NOTE: This package handles the complete pipeline from input bytes to
the composited avatar. Organized into modular components:
- processor: Main MonsterProcessor orchestrator
- selection: Pinned hash and PRNG, descriptor selection
- parts: Part asset lookup and loading
- recolor: Tint and desaturate transforms
- utils: HSL conversion and canvas helpers
"""

from .parts import (
    DirectoryPartStore,
    PartDecodeError,
    PartLoadError,
    PartNotFoundError,
    PartStore,
)
from .processor import MonsterProcessor, generate

__all__ = [
    "DirectoryPartStore",
    "MonsterProcessor",
    "PartDecodeError",
    "PartLoadError",
    "PartNotFoundError",
    "PartStore",
    "generate",
]

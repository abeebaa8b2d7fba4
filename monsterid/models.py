"""Data models and constants for the monster avatar generator."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional

# AIDEV-NOTE: Every part asset is drawn on a canvas of exactly this size
CANVAS_SIZE = (120, 120)  # width, height in pixels

DEFAULT_BACKGROUND = (240, 240, 240, 255)  # light grey
TRANSPARENT = (0, 0, 0, 0)

# Configuration file path
CONFIG_FILE = Path.home() / ".monsterid_config.json"


class PartCategory(Enum):
    """Body part categories.

    AIDEV-NOTE: Member order is the draw order (back to front). Keep it in
    sync with DRAW_ORDER and the descriptor field order.
    """

    LEGS = "legs"
    HAIR = "hair"
    ARMS = "arms"
    BODY = "body"
    EYES = "eyes"
    MOUTH = "mouth"


DRAW_ORDER = (
    PartCategory.LEGS,
    PartCategory.HAIR,
    PartCategory.ARMS,
    PartCategory.BODY,
    PartCategory.EYES,
    PartCategory.MOUTH,
)

# Number of pre-drawn variants per category, indices are 1-based
PART_CATALOG = MappingProxyType(
    {
        PartCategory.LEGS: 5,
        PartCategory.HAIR: 5,
        PartCategory.ARMS: 5,
        PartCategory.BODY: 15,
        PartCategory.EYES: 15,
        PartCategory.MOUTH: 10,
    }
)


@dataclass(frozen=True)
class MonsterDescriptor:
    """Selected part variants and body color for one generated monster.

    AIDEV-NOTE: Built once per generation call from the seeded stream and
    never mutated afterwards.
    """

    legs: int
    hair: int
    arms: int
    body: int
    eyes: int
    mouth: int
    hue: float  # 0.0-1.0 (exclusive)
    saturation: float  # 0.5-1.0

    def __post_init__(self):
        for category in DRAW_ORDER:
            index = self.index_for(category)
            count = PART_CATALOG[category]
            if not 1 <= index <= count:
                raise ValueError(
                    f"{category.value} index {index} outside 1..{count}"
                )
        if not 0.0 <= self.hue < 1.0:
            raise ValueError(f"hue {self.hue} outside [0, 1)")
        if not 0.5 <= self.saturation <= 1.0:
            raise ValueError(f"saturation {self.saturation} outside [0.5, 1]")

    def index_for(self, category: PartCategory) -> int:
        """Return the selected 1-based variant for a category."""
        return getattr(self, category.value)


@dataclass(frozen=True)
class GenerationOptions:
    """Rendering options for a single generation call."""

    artistic: bool = True  # recolor body and (sometimes) limbs
    greyscale: bool = False  # desaturate instead of tinting
    background: "tuple[int, int, int, int]" = DEFAULT_BACKGROUND  # alpha 0 = transparent

    def __post_init__(self):
        background = tuple(self.background)
        if len(background) != 4 or not all(
            isinstance(c, int) and 0 <= c <= 255 for c in background
        ):
            raise ValueError(
                f"background must be four channel values in 0-255, got {self.background!r}"
            )
        # Normalize lists loaded from config into a hashable tuple
        object.__setattr__(self, "background", background)

    @property
    def transparent(self) -> bool:
        return self.background[3] == 0


@dataclass
class MonsterConfig:
    """Persisted generator settings."""

    artistic: bool = True
    greyscale: bool = False
    background: "tuple[int, int, int, int]" = DEFAULT_BACKGROUND

    # Directory holding {category}_{index}.png assets, None = package default
    parts_dir: Optional[str] = None
    cache_parts: bool = False

    def to_options(self) -> GenerationOptions:
        return GenerationOptions(
            artistic=self.artistic,
            greyscale=self.greyscale,
            background=tuple(self.background),
        )

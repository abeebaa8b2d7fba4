"""Main monster processor orchestrating the complete pipeline.

AIDEV-NOTE: This module handles the pipeline from input bytes to the final
composited avatar: seeded selection, part loading, recoloring and alpha
compositing onto the background canvas. The random stream is shared by
selection and recoloring, so the draw order here is part of the output.
"""

import logging
from typing import Optional

from PIL import Image

from monsterid.models import (
    DRAW_ORDER,
    GenerationOptions,
    MonsterDescriptor,
    PartCategory,
)

from .parts import DirectoryPartStore, PartLoadError, PartStore, part_key
from .recolor import desaturate, tint
from .selection import PCGRandom, seed_stream, select_descriptor
from .utils import create_canvas

logger = logging.getLogger(__name__)

# Chance that arms or legs get their own random color in artistic mode
LIMB_TINT_PROBABILITY = 0.3

LIMB_CATEGORIES = (PartCategory.ARMS, PartCategory.LEGS)


class MonsterProcessor:
    """Builds monster avatars from arbitrary input bytes."""

    def __init__(
        self,
        part_store: Optional[PartStore] = None,
        options: Optional[GenerationOptions] = None,
    ):
        self.part_store = part_store or DirectoryPartStore()
        self.options = options or GenerationOptions()

    def select(self, data: bytes) -> "tuple[MonsterDescriptor, PCGRandom]":
        """Seed a stream from the input and draw the descriptor.

        Args:
            data: Arbitrary input bytes (may be empty)

        Returns:
            Tuple of (descriptor, stream positioned after the descriptor draws)
        """
        rng = seed_stream(bytes(data))
        return select_descriptor(rng), rng

    def load_part(self, category: PartCategory, index: int) -> Optional[Image.Image]:
        """Load a part, logging and returning None if it is unavailable."""
        try:
            image = self.part_store.load(category, index)
        except PartLoadError as e:
            logger.warning(
                "Error loading part %s: %s", f"{category.value}_{index}.png", e
            )
            return None

        # AIDEV-NOTE: Always composite in RGBA, whatever the store returned
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return image

    def recolor_part(
        self,
        image: Image.Image,
        category: PartCategory,
        descriptor: MonsterDescriptor,
        rng: PCGRandom,
        options: GenerationOptions,
    ) -> Image.Image:
        """Apply the artistic and greyscale transforms for one part.

        AIDEV-NOTE: Limbs consume one draw for the tint decision and, when
        tinted, one more for their hue. These draws happen even in greyscale
        mode so the rest of the stream stays aligned.
        """
        if options.artistic:
            if category is PartCategory.BODY:
                return self._colorize(
                    image, descriptor.hue, descriptor.saturation, options
                )
            if category in LIMB_CATEGORIES and rng.float64() < LIMB_TINT_PROBABILITY:
                return self._colorize(
                    image, rng.float64(), descriptor.saturation, options
                )

        if options.greyscale:
            return desaturate(image)
        return image

    def _colorize(
        self,
        image: Image.Image,
        hue: float,
        saturation: float,
        options: GenerationOptions,
    ) -> Image.Image:
        if options.greyscale:
            return desaturate(image)
        return tint(image, hue, saturation)

    def render(
        self,
        descriptor: MonsterDescriptor,
        rng: PCGRandom,
        options: Optional[GenerationOptions] = None,
    ) -> Image.Image:
        """Composite all parts of a descriptor onto a fresh canvas.

        Args:
            descriptor: Selected parts and body color
            rng: Stream returned by select(), consumed by limb recoloring
            options: Overrides the processor's default options

        Returns:
            Final RGBA image
        """
        options = options or self.options
        canvas = create_canvas(options.background)

        for category in DRAW_ORDER:
            index = descriptor.index_for(category)
            part = self.load_part(category, index)
            if part is None:
                # A missing layer never aborts the monster
                continue

            part = self.recolor_part(part, category, descriptor, rng, options)
            canvas = Image.alpha_composite(canvas, part)
            logger.debug("Composited %s", part_key(category, index))

        return canvas

    def generate(
        self,
        data: bytes,
        options: Optional[GenerationOptions] = None,
    ) -> Image.Image:
        """Execute the complete generation pipeline.

        Args:
            data: Input bytes identifying the monster
            options: Overrides the processor's default options

        Returns:
            120x120 RGBA PIL image
        """
        descriptor, rng = self.select(data)
        return self.render(descriptor, rng, options)


def generate(
    data: bytes,
    options: Optional[GenerationOptions] = None,
    part_store: Optional[PartStore] = None,
) -> Image.Image:
    """Generate a monster avatar with a one-off processor."""
    return MonsterProcessor(part_store, options).generate(data)

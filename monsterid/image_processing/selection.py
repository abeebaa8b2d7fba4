"""Seeded part selection.

AIDEV-NOTE: The hash, the PRNG and the order of draws below are all part of
the output contract. Changing any of them changes the monster produced for
every input. Both algorithms are pure integer arithmetic so results are
identical on every platform.

Hash: 64-bit FNV-1a.
PRNG: PCG with a 128-bit LCG state and DXSM output, seeded with
(digest, (digest >> 1) | 1).
"""

import logging

from monsterid.models import DRAW_ORDER, PART_CATALOG, MonsterDescriptor

logger = logging.getLogger(__name__)

MASK64 = (1 << 64) - 1
MASK128 = (1 << 128) - 1

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3


def fnv1a_64(data: bytes) -> int:
    """Hash bytes with 64-bit FNV-1a.

    Args:
        data: Arbitrary input, may be empty

    Returns:
        Unsigned 64-bit digest
    """
    digest = FNV64_OFFSET_BASIS
    for byte in data:
        digest ^= byte
        digest = (digest * FNV64_PRIME) & MASK64
    return digest


class PCGRandom:
    """PCG-DXSM generator with 128 bits of state.

    The state is advanced before each output is produced.
    """

    MULTIPLIER = (2549297995355413924 << 64) | 4865540595714422341
    INCREMENT = (6364136223846793005 << 64) | 1442695040888963407
    CHEAP_MULTIPLIER = 0xDA942042E4DD58B5

    def __init__(self, seed1: int, seed2: int):
        self._state = ((seed1 & MASK64) << 64) | (seed2 & MASK64)

    @classmethod
    def from_digest(cls, digest: int) -> "PCGRandom":
        return cls(digest, (digest >> 1) | 1)

    def uint64(self) -> int:
        """Return the next 64-bit output."""
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) & MASK128
        hi = self._state >> 64
        lo = self._state & MASK64

        hi ^= hi >> 32
        hi = (hi * self.CHEAP_MULTIPLIER) & MASK64
        hi ^= hi >> 48
        hi = (hi * (lo | 1)) & MASK64
        return hi

    def int_n(self, n: int) -> int:
        """Return a uniform integer in [0, n).

        AIDEV-NOTE: Multiply-shift with rejection; the number of outputs
        consumed depends on the rejection loop, so keep it exactly as is.
        """
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        if n & (n - 1) == 0:
            return self.uint64() & (n - 1)

        product = self.uint64() * n
        if product & MASK64 < n:
            threshold = (MASK64 + 1 - n) % n
            while product & MASK64 < threshold:
                product = self.uint64() * n
        return product >> 64

    def float64(self) -> float:
        """Return a uniform float in [0, 1) with 53 bits of precision."""
        return (self.uint64() & ((1 << 53) - 1)) / (1 << 53)


def seed_stream(data: bytes) -> PCGRandom:
    """Create the generator for one generation call."""
    return PCGRandom.from_digest(fnv1a_64(data))


def select_descriptor(rng: PCGRandom) -> MonsterDescriptor:
    """Draw part indices, hue and saturation from the stream.

    Args:
        rng: Freshly seeded stream; eight values are consumed

    Returns:
        MonsterDescriptor for the stream
    """
    indices = {
        category.value: rng.int_n(PART_CATALOG[category]) + 1
        for category in DRAW_ORDER
    }
    hue = rng.float64()
    saturation = 0.5 + rng.float64() * 0.5

    descriptor = MonsterDescriptor(hue=hue, saturation=saturation, **indices)
    logger.debug("Selected %s", descriptor)
    return descriptor

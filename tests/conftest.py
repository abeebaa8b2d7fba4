"""Shared pytest fixtures for monsterid tests.

Real part artwork is not shipped with the package, so the fixtures below draw
simple 120x120 placeholder parts. Each category owns a region of the canvas
and each index gets its own color so different selections render differently.
Corners are never covered.
"""

from __future__ import annotations

import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from monsterid.image_processing import DirectoryPartStore, MonsterProcessor
from monsterid.models import CANVAS_SIZE, PART_CATALOG, PartCategory

# (shape, bounding box) per category
PART_SHAPES = {
    PartCategory.LEGS: ("rectangle", (35, 85, 85, 110)),
    PartCategory.HAIR: ("rectangle", (40, 10, 80, 25)),
    PartCategory.ARMS: ("rectangle", (10, 50, 110, 65)),
    PartCategory.BODY: ("ellipse", (25, 20, 95, 95)),
    PartCategory.EYES: ("ellipse", (45, 35, 75, 50)),
    PartCategory.MOUTH: ("rectangle", (50, 70, 70, 78)),
}

# A pixel covered by the body and nothing drawn above it
BODY_ONLY_PIXEL = (35, 40)


def part_color(category: PartCategory, index: int) -> tuple[int, int, int, int]:
    """Saturated, mid-lightness color unique to a part variant."""
    base = list(PART_SHAPES).index(category)
    return (40 + index * 9, 160 - base * 20, 60 + base * 15, 255)


def draw_part(category: PartCategory, index: int) -> Image.Image:
    image = Image.new("RGBA", CANVAS_SIZE, (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    shape, box = PART_SHAPES[category]
    color = part_color(category, index)
    if shape == "ellipse":
        draw.ellipse(box, fill=color)
    else:
        draw.rectangle(box, fill=color)
    # Near-white highlight that tint must leave alone
    draw.point((box[0] + 4, box[1] + 4), fill=(250, 250, 250, 255))
    return image


def write_parts(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for category, count in PART_CATALOG.items():
        for index in range(1, count + 1):
            draw_part(category, index).save(directory / f"{category.value}_{index}.png")
    return directory


# ============================================================================
# Part Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def parts_dir(tmp_path_factory) -> Path:
    """Directory with a complete set of placeholder parts."""
    return write_parts(tmp_path_factory.mktemp("parts"))


@pytest.fixture
def writable_parts_dir(tmp_path) -> Path:
    """Complete part set that a single test may modify."""
    return write_parts(tmp_path / "parts")


@pytest.fixture
def part_store(parts_dir) -> DirectoryPartStore:
    return DirectoryPartStore(parts_dir)


@pytest.fixture
def processor(part_store) -> MonsterProcessor:
    return MonsterProcessor(part_store)


# ============================================================================
# Damaged Asset Helpers
# ============================================================================


def write_broken_chunk_png(path: Path) -> Path:
    """Valid part whose IDAT chunk type bytes are garbage."""
    draw_part(PartCategory.BODY, 1).save(path)
    data = path.read_bytes().replace(b"IDAT", b"\x00\x01\x02\x03", 1)
    path.write_bytes(data)
    return path


def write_oversized_png(path: Path, width: int = 30000, height: int = 30000) -> Path:
    """PNG header declaring a huge image, enough to trip Pillow's bomb check."""

    def chunk(kind: bytes, body: bytes) -> bytes:
        crc = zlib.crc32(kind + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )
    return path

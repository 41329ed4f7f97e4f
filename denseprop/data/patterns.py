"""Bundled training tables: the XOR truth table and 5x7 digit bitmaps."""

from __future__ import annotations

from typing import Sequence

from ..core.types import Sample
from ..core.vector import Vector
from .registry import Dataset, register_dataset

PATTERN_WIDTH = 5
PATTERN_HEIGHT = 7

XOR_TABLE = (
    ((0.0, 0.0), (0.0,)),
    ((0.0, 1.0), (1.0,)),
    ((1.0, 0.0), (1.0,)),
    ((1.0, 1.0), (0.0,)),
)

# '#' marks a lit pixel.
DIGIT_BITMAPS = (
    (".###.", "#...#", "#...#", "#...#", "#...#", "#...#", ".###."),
    ("..#..", ".##..", "..#..", "..#..", "..#..", "..#..", ".###."),
    (".###.", "#...#", "....#", "...#.", ".##..", "#....", "#####"),
    (".###.", "#...#", "....#", "..##.", "....#", "#...#", ".###."),
    ("..##.", ".#.#.", "#..#.", "#..#.", "#####", "...#.", "...#."),
    ("#####", "#....", "####.", "....#", "....#", "#...#", ".###."),
    (".###.", "#...#", "#....", "####.", "#...#", "#...#", ".###."),
    ("#####", "....#", "...#.", "..#..", ".#...", ".#...", ".#..."),
    (".###.", "#...#", "#...#", ".###.", "#...#", "#...#", ".###."),
    (".###.", "#...#", "#...#", ".####", "....#", "#...#", ".###."),
)

_LIT = "██"
_DARK = "░░"


def bitmap_to_vector(rows: Sequence[str]) -> Vector:
    """Flatten a row-major bitmap into a 0/1 vector."""

    return Vector(1.0 if ch == "#" else 0.0 for row in rows for ch in row)


def one_hot(index: int, size: int) -> Vector:
    target = Vector.zeros(size)
    target[index] = 1.0
    return target


def render_pattern(
    pattern: Vector,
    width: int = PATTERN_WIDTH,
    height: int = PATTERN_HEIGHT,
) -> str:
    """Render a flattened bitmap with block glyphs, one line per row."""

    if len(pattern) != width * height:
        raise ValueError(
            f"Pattern of size {len(pattern)} does not fit a {width}x{height} grid"
        )
    lines = []
    for row in range(height):
        cells = (pattern[width * row + col] for col in range(width))
        lines.append("".join(_LIT if value > 0.0 else _DARK for value in cells))
    return "\n".join(lines)


@register_dataset("xor")
def make_xor(**_: object) -> Dataset:
    samples = tuple(Sample(Vector(x), Vector(y)) for x, y in XOR_TABLE)
    return Dataset(name="xor", samples=samples, metadata={"labels": ["0", "1"]})


@register_dataset("digits")
def make_digits(**_: object) -> Dataset:
    classes = len(DIGIT_BITMAPS)
    samples = tuple(
        Sample(bitmap_to_vector(bitmap), one_hot(digit, classes))
        for digit, bitmap in enumerate(DIGIT_BITMAPS)
    )
    metadata = {
        "width": PATTERN_WIDTH,
        "height": PATTERN_HEIGHT,
        "labels": [str(d) for d in range(classes)],
    }
    return Dataset(name="digits", samples=samples, metadata=metadata)


__all__ = [
    "DIGIT_BITMAPS",
    "PATTERN_HEIGHT",
    "PATTERN_WIDTH",
    "XOR_TABLE",
    "bitmap_to_vector",
    "make_digits",
    "make_xor",
    "one_hot",
    "render_pattern",
]

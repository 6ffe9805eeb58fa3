"""Unit conversion helpers for WordprocessingML measurements."""
from __future__ import annotations

TWIPS_PER_POINT = 20


def twips_to_points(value: int) -> float:
    """Convert twips to points."""
    return value / TWIPS_PER_POINT


def twips_to_pixels(value: int) -> int:
    """Convert twips to whole CSS pixels, rounding halves up (1pt is taken as 1px)."""
    return int(twips_to_points(value) + 0.5)

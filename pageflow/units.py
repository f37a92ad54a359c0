"""
Unit conversion between CSS pixels and flow-document units.

CSS pixels are taken at 96 DPI: 1px = 1/96in = 0.75pt = 15 twips.
"""

from config.constants import (
    EMU_PER_PX,
    HALF_POINTS_PER_PX,
    MIN_HALF_POINTS,
    POINTS_PER_PX,
    TWIPS_PER_PX,
)


def px_to_twip(px: float) -> int:
    """Pixels to twentieths of a point."""
    return round(px * TWIPS_PER_PX)


def px_to_half_point(px: float) -> int:
    """Font size in pixels to half-points, never below 1pt."""
    return max(MIN_HALF_POINTS, round(px * HALF_POINTS_PER_PX))


def px_to_emu(px: float) -> int:
    return round(px * EMU_PER_PX)


def px_to_pt(px: float) -> float:
    return px * POINTS_PER_PX

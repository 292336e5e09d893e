"""Geometric equality of glyph outlines."""
# this_file: src/glyphmap/compare.py

from __future__ import annotations

from .config import default_config
from .fontio import GlyphOutline

DEFAULT_TOLERANCE = default_config().tolerance


def outlines_equal(a: GlyphOutline, b: GlyphOutline, tolerance: int = DEFAULT_TOLERANCE) -> bool:
    """Check whether two outlines describe the same shape.

    Structure is compared first (contour count, each contour end index, point
    count); only then are points compared pairwise. Each point pair may differ
    by at most ``tolerance`` 26.6 units on each axis. Outlines that cannot be
    read compare unequal.
    """
    try:
        if len(a.ends) != len(b.ends):
            return False

        for end_a, end_b in zip(a.ends, b.ends):
            if end_a != end_b:
                return False

        if len(a.points) != len(b.points):
            return False

        for (xa, ya), (xb, yb) in zip(a.points, b.points):
            if abs(xa - xb) > tolerance or abs(ya - yb) > tolerance:
                return False
    except (AttributeError, TypeError, ValueError):
        return False

    return True

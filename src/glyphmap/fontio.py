"""fontTools-backed outline provider.

Everything glyphmap needs to know about a font goes through this module:
parsing raw bytes into a :class:`FontHandle`, looking up glyph indices,
probing bounds/advance at a small size, and extracting unhinted outlines
scaled to 26.6 fixed-point coordinates.
"""
# this_file: src/glyphmap/fontio.py

from __future__ import annotations

import io
import math
from dataclasses import dataclass

from fontTools.ttLib import TTFont

from .errors import FontParseError, OutlineError

# Tables every handle must carry; glyf/loca restrict us to TrueType outlines
REQUIRED_TABLES: tuple[str, ...] = ("head", "cmap", "hmtx", "glyf", "loca")

FIXED_ONE = 64  # 26.6 fixed-point

# fontTools default order, plus the Microsoft Symbol subtable as last resort
CMAP_PREFERENCES: tuple[tuple[int, int], ...] = (
    (3, 10),
    (0, 6),
    (0, 4),
    (3, 1),
    (0, 3),
    (0, 2),
    (0, 1),
    (0, 0),
    (3, 0),
)


@dataclass(frozen=True)
class GlyphOutline:
    """Contour geometry of one glyph.

    Attributes:
        ends: Index of the last point of each contour, in contour order.
        points: ``(x, y)`` coordinates in 26.6 fixed-point units.
    """

    ends: tuple[int, ...]
    points: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class GlyphMetrics:
    """Bounding box and advance of a glyph, in 26.6 units at a probe size."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int
    advance: int

    @property
    def empty(self) -> bool:
        return self.x_min >= self.x_max or self.y_min >= self.y_max


def get_unicode_to_glyph_map(font: TTFont) -> dict[int, str]:
    """Get mapping from Unicode codepoints to glyph names.

    Falls back to a Microsoft Symbol (3, 0) subtable when the font has no
    Unicode one; symbol fonts park their glyphs at U+F000..U+F0FF.
    """
    cmap = font.getBestCmap(cmapPreferences=CMAP_PREFERENCES)
    return dict(cmap) if cmap else {}


def get_upm(font: TTFont) -> int:
    """Get the units per em (UPM) from the head table."""
    if "head" in font:
        return int(getattr(font["head"], "unitsPerEm", 1000))
    return 1000


def scale_to_fixed(value: float, size: int, upm: int) -> int:
    """Scale a font-unit value to 26.6 fixed-point at ``size``, rounding half away from zero."""
    scaled = value * size * FIXED_ONE / upm
    if scaled >= 0:
        return int(math.floor(scaled + 0.5))
    return -int(math.floor(-scaled + 0.5))


class FontHandle:
    """A parsed, read-only font.

    All tables are decompiled (and all glyphs expanded) at construction, so
    later lookups only read already-built objects and the handle can be
    shared between threads.
    """

    def __init__(self, data: bytes, label: str = "font") -> None:
        self.label = label
        try:
            # fontNumber is ignored for single fonts; collections yield their first face
            font = TTFont(io.BytesIO(data), fontNumber=0, lazy=False)
            missing = [tag for tag in REQUIRED_TABLES if tag not in font]
            if missing:
                raise ValueError(f"missing table(s): {', '.join(missing)} (TrueType outlines required)")
            font.ensureDecompiled(recurse=True)
            cmap = get_unicode_to_glyph_map(font)
        except Exception as exc:
            raise FontParseError(label, str(exc) or type(exc).__name__) from exc

        if not cmap:
            raise FontParseError(label, "no Unicode or Symbol cmap subtable")

        self._font = font
        self._cmap = cmap
        self._glyf = font["glyf"]
        self._hmtx = font["hmtx"]
        self.upm = get_upm(font)

    @classmethod
    def parse(cls, data: bytes, label: str = "font") -> FontHandle:
        return cls(data, label)

    @property
    def glyph_count(self) -> int:
        return len(self._font.getGlyphOrder())

    def __repr__(self) -> str:
        return f"FontHandle({self.label!r}, glyphs={self.glyph_count}, codepoints={len(self._cmap)})"


def glyph_index(handle: FontHandle, codepoint: int) -> int:
    """Return the glyph index mapped to ``codepoint``; 0 means no cmap entry."""
    name = handle._cmap.get(codepoint)
    if name is None:
        return 0
    return handle._font.getGlyphID(name)


def glyph_metrics(handle: FontHandle, codepoint: int, size: int) -> GlyphMetrics | None:
    """Probe bounds and advance of the glyph mapped to ``codepoint``.

    Returns ``None`` when the query fails: the codepoint has no cmap entry,
    or its glyph or metrics record cannot be read.
    """
    name = handle._cmap.get(codepoint)
    if name is None:
        return None
    try:
        glyph = handle._glyf[name]
        advance_width, _lsb = handle._hmtx[name]
    except KeyError:
        return None

    upm = handle.upm
    advance = scale_to_fixed(advance_width, size, upm)
    if glyph.numberOfContours == 0 or not hasattr(glyph, "xMin"):
        return GlyphMetrics(0, 0, 0, 0, advance)

    factor = size * FIXED_ONE
    return GlyphMetrics(
        x_min=math.floor(glyph.xMin * factor / upm),
        y_min=math.floor(glyph.yMin * factor / upm),
        x_max=math.ceil(glyph.xMax * factor / upm),
        y_max=math.ceil(glyph.yMax * factor / upm),
        advance=advance,
    )


def load_outline(handle: FontHandle, render_size: int, index: int) -> GlyphOutline:
    """Load the unhinted outline of glyph ``index`` scaled to ``render_size``.

    Composite glyphs are flattened. fontTools never applies TrueType hinting,
    so the result is pure design geometry.

    Raises:
        OutlineError: the glyph does not exist or its data cannot be decoded.
    """
    glyph_order = handle._font.getGlyphOrder()
    if not 0 <= index < len(glyph_order):
        raise OutlineError(f"{handle.label}: glyph index {index} out of range")

    name = glyph_order[index]
    try:
        glyph = handle._glyf[name]
        coordinates, ends, _flags = glyph.getCoordinates(handle._glyf)
    except Exception as exc:
        raise OutlineError(f"{handle.label}: cannot load outline of {name!r}: {exc}") from exc

    # Design coordinates as-is: no shift to the hmtx origin (xMin - lsb)
    upm = handle.upm
    points = tuple(
        (scale_to_fixed(x, render_size, upm), scale_to_fixed(y, render_size, upm))
        for x, y in coordinates
    )
    return GlyphOutline(ends=tuple(int(e) for e in ends), points=points)

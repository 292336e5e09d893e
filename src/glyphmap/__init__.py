"""Map private-use font glyphs onto standard CJK codepoints by outline comparison."""

from .compare import outlines_equal
from .config import CANDIDATE_RANGE, PUA_RANGE, MapperConfig, default_config
from .errors import (
    FontParseError,
    GlyphMapError,
    OutlineError,
    SpecialFontParseError,
    StandardFontParseError,
)
from .existence import GlyphCheck, check_glyph, has_glyph
from .fontio import FontHandle, GlyphMetrics, GlyphOutline, glyph_index, glyph_metrics, load_outline
from .mapper import GlyphOutlineMapper, RuneMatch

__version__ = "0.1.0"

__all__ = [
    "CANDIDATE_RANGE",
    "PUA_RANGE",
    "FontHandle",
    "FontParseError",
    "GlyphCheck",
    "GlyphMapError",
    "GlyphMetrics",
    "GlyphOutline",
    "GlyphOutlineMapper",
    "MapperConfig",
    "OutlineError",
    "RuneMatch",
    "SpecialFontParseError",
    "StandardFontParseError",
    "check_glyph",
    "default_config",
    "glyph_index",
    "glyph_metrics",
    "has_glyph",
    "load_outline",
    "outlines_equal",
]

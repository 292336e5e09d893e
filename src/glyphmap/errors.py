"""Exception types raised by glyphmap."""

from __future__ import annotations


class GlyphMapError(Exception):
    """Base class for all glyphmap errors."""


class FontParseError(GlyphMapError):
    """Font bytes could not be turned into a usable font handle.

    Attributes:
        side: Which font failed, ``"special"`` or ``"standard"`` (or the
            free-form label passed to :class:`glyphmap.fontio.FontHandle`).
    """

    def __init__(self, side: str, message: str) -> None:
        super().__init__(f"parse {side} font failed: {message}")
        self.side = side
        self.reason = message


class SpecialFontParseError(FontParseError):
    def __init__(self, message: str) -> None:
        super().__init__("special", message)


class StandardFontParseError(FontParseError):
    def __init__(self, message: str) -> None:
        super().__init__("standard", message)


class OutlineError(GlyphMapError):
    """A glyph outline could not be extracted."""

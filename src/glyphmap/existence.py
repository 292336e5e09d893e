"""Decide whether a codepoint has a meaningful glyph in a font.

Fonts often map a codepoint to a placeholder glyph (no contours, no advance),
so the glyph index alone is not trusted. Several signals are collected once
and then run through :data:`GLYPH_RULES`, an ordered table where the first
matching rule decides.
"""
# this_file: src/glyphmap/existence.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple

from .config import default_config, is_private_use
from .fontio import FontHandle, GlyphMetrics, glyph_index, glyph_metrics


@dataclass(frozen=True)
class GlyphSignals:
    """Raw evidence gathered for one codepoint in one font."""

    codepoint: int
    index: int
    metrics: GlyphMetrics | None

    @property
    def private_use(self) -> bool:
        return is_private_use(self.codepoint)

    @property
    def advance(self) -> int:
        return self.metrics.advance if self.metrics else 0

    @property
    def bounds_empty(self) -> bool:
        return self.metrics is None or self.metrics.empty


class GlyphCheck(NamedTuple):
    present: bool
    reason: str


class GlyphRule(NamedTuple):
    matches: Callable[[GlyphSignals], bool]
    present: bool
    reason: str


# PUA rules come before the placeholder filter: custom fonts frequently park
# real glyphs there with zeroed metrics.
GLYPH_RULES: tuple[GlyphRule, ...] = (
    GlyphRule(lambda s: s.metrics is None, False, "glyph bounds unavailable"),
    GlyphRule(lambda s: s.private_use and s.advance > 0, True, "private use glyph has advance"),
    GlyphRule(lambda s: s.private_use and not s.bounds_empty, True, "private use glyph has bounds"),
    GlyphRule(lambda s: s.private_use and s.index > 0, True, "private use glyph has index"),
    GlyphRule(lambda s: s.private_use, False, "private use glyph has no data"),
    GlyphRule(lambda s: s.index == 0 and s.codepoint != 0, False, "glyph index is 0"),
    GlyphRule(lambda s: s.bounds_empty and s.advance == 0, False, "empty bounds and zero advance"),
    GlyphRule(lambda s: s.index > 0, True, "valid glyph index"),
)

FALLBACK = GlyphCheck(False, "no rule matched")


def collect_signals(font: FontHandle, codepoint: int, probe_size: int) -> GlyphSignals:
    return GlyphSignals(
        codepoint=codepoint,
        index=glyph_index(font, codepoint),
        metrics=glyph_metrics(font, codepoint, probe_size),
    )


def decide(signals: GlyphSignals) -> GlyphCheck:
    """Run ``signals`` through :data:`GLYPH_RULES`."""
    for rule in GLYPH_RULES:
        if rule.matches(signals):
            return GlyphCheck(rule.present, rule.reason)
    return FALLBACK


def check_glyph(font: FontHandle | None, codepoint: int, probe_size: int | None = None) -> GlyphCheck:
    """Return whether ``font`` has a usable glyph for ``codepoint``, and why."""
    if font is None:
        return GlyphCheck(False, "font not loaded")
    if probe_size is None:
        probe_size = default_config().probe_size
    return decide(collect_signals(font, codepoint, probe_size))


def has_glyph(font: FontHandle | None, codepoint: int, probe_size: int | None = None) -> bool:
    return check_glyph(font, codepoint, probe_size).present

"""Outline-based mapping from special-font codepoints to standard CJK codepoints.

A :class:`GlyphOutlineMapper` owns two parsed fonts. For one special
codepoint, :meth:`GlyphOutlineMapper.resolve_rune` walks the CJK Unified
Ideographs block of the standard font and returns the first codepoint whose
outline matches. :meth:`GlyphOutlineMapper.map_range` runs that resolution
for a whole codepoint range on a thread pool with a fixed number of permits.
"""
# this_file: src/glyphmap/mapper.py

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, NamedTuple

from .compare import outlines_equal
from .config import CANDIDATE_RANGE, MapperConfig, default_config
from .errors import FontParseError, OutlineError, SpecialFontParseError, StandardFontParseError
from .existence import has_glyph
from .fontio import FontHandle, GlyphOutline, glyph_index, load_outline

logger = logging.getLogger(__name__)


class RuneMatch(NamedTuple):
    """Result of resolving one special codepoint.

    ``standard`` is ``None`` when ``found`` is false.
    """

    special: int
    standard: int | None
    found: bool


ProgressCallback = Callable[[int, int, RuneMatch], None]


class _ResultStore:
    """Lock-protected accumulator written to by resolution tasks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[int, int] = {}

    def store(self, special: int, standard: int) -> None:
        with self._lock:
            self._items[special] = standard

    def snapshot(self) -> dict[int, int]:
        with self._lock:
            return dict(self._items)


class GlyphOutlineMapper:
    """Match glyphs of a special font against a standard CJK font.

    Args:
        special_font_data: Raw bytes of the nonstandard (usually PUA) font.
        standard_font_data: Raw bytes of the font holding standard CJK glyphs.
        config: Matching constants; defaults to :func:`default_config`.

    Raises:
        SpecialFontParseError: ``special_font_data`` is not a usable font.
        StandardFontParseError: ``standard_font_data`` is not a usable font.
    """

    def __init__(
        self,
        special_font_data: bytes,
        standard_font_data: bytes,
        config: MapperConfig | None = None,
    ) -> None:
        self.config = config or default_config()
        self.concurrency = self.config.concurrency

        try:
            self.special_font = FontHandle(special_font_data, "special")
        except FontParseError as exc:
            raise SpecialFontParseError(exc.reason) from exc

        try:
            self.standard_font = FontHandle(standard_font_data, "standard")
        except FontParseError as exc:
            raise StandardFontParseError(exc.reason) from exc

        logger.debug("Loaded %r and %r", self.special_font, self.standard_font)

    @classmethod
    def from_files(
        cls,
        special_path: Path | str,
        standard_path: Path | str,
        config: MapperConfig | None = None,
    ) -> GlyphOutlineMapper:
        """Read both fonts from disk and build a mapper."""
        return cls(Path(special_path).read_bytes(), Path(standard_path).read_bytes(), config)

    def set_concurrency(self, concurrency: int) -> None:
        """Set how many resolutions :meth:`map_range` keeps in flight.

        Takes effect at the start of the next batch.
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.concurrency = concurrency

    # ------------------------------------------------------------------
    # Single-pair and single-codepoint matching
    # ------------------------------------------------------------------

    def _load(self, font: FontHandle, codepoint: int) -> GlyphOutline | None:
        index = glyph_index(font, codepoint)
        if index == 0:
            return None
        try:
            return load_outline(font, self.config.render_size, index)
        except OutlineError as exc:
            logger.debug("U+%04X: %s", codepoint, exc)
            return None

    def glyph_outlines_equal(self, special_codepoint: int, standard_codepoint: int) -> bool:
        """Compare the special glyph of one codepoint with the standard glyph of another.

        Missing glyphs and unreadable outlines compare unequal.
        """
        special = self._load(self.special_font, special_codepoint)
        if special is None:
            return False
        standard = self._load(self.standard_font, standard_codepoint)
        if standard is None:
            return False
        return outlines_equal(special, standard, self.config.tolerance)

    def resolve_rune(self, codepoint: int) -> RuneMatch:
        """Find the standard CJK codepoint drawn like ``codepoint`` in the special font.

        The candidate block is scanned in ascending order and the lowest
        matching codepoint wins.
        """
        miss = RuneMatch(codepoint, None, False)
        probe_size = self.config.probe_size
        if not has_glyph(self.special_font, codepoint, probe_size):
            return miss

        # Loaded on the first candidate that reaches comparison
        special: GlyphOutline | None = None
        first, last = CANDIDATE_RANGE
        for candidate in range(first, last + 1):
            if not has_glyph(self.standard_font, candidate, probe_size):
                continue

            if special is None:
                special = self._load(self.special_font, codepoint)
                if special is None:
                    # Every remaining candidate would fail the same way
                    return miss

            standard = self._load(self.standard_font, candidate)
            if standard is None:
                continue

            if outlines_equal(special, standard, self.config.tolerance):
                logger.debug("U+%04X -> U+%04X", codepoint, candidate)
                return RuneMatch(codepoint, candidate, True)

        return miss

    # ------------------------------------------------------------------
    # Batch mapping
    # ------------------------------------------------------------------

    def _resolve_into(self, codepoint: int, results: _ResultStore) -> RuneMatch:
        try:
            match = self.resolve_rune(codepoint)
        except Exception:
            logger.exception("Resolving U+%04X failed", codepoint)
            return RuneMatch(codepoint, None, False)
        if match.found:
            results.store(match.special, match.standard)
        return match

    def map_range(
        self,
        start: int,
        end: int,
        progress: ProgressCallback | None = None,
    ) -> dict[int, int]:
        """Resolve every codepoint in ``[start, end]`` and collect the matches.

        At most ``self.concurrency`` resolutions run at once; dispatch blocks
        until a permit frees up. The limit bounds how much work is in
        flight, not CPU parallelism: resolution is pure-Python outline work
        and threads share the GIL. Completed futures are not retained;
        leaving the executor block waits for the stragglers. Always returns
        a dict, empty when ``start > end``.

        Args:
            start: First special codepoint, inclusive.
            end: Last special codepoint, inclusive.
            progress: Optional ``progress(done, total, match)``, called once
                per codepoint as it completes. Calls are serialized but come
                from worker threads.
        """
        if start > end:
            return {}

        limit = self.concurrency
        total = end - start + 1
        results = _ResultStore()
        permits = threading.BoundedSemaphore(limit)
        progress_lock = threading.Lock()
        done = 0
        logger.info("Mapping U+%04X..U+%04X (%d codepoints, concurrency %d)", start, end, total, limit)

        def finished(future: Future[RuneMatch]) -> None:
            nonlocal done
            permits.release()
            if progress is None:
                return
            with progress_lock:
                done += 1
                progress(done, total, future.result())

        with ThreadPoolExecutor(max_workers=limit, thread_name_prefix="glyphmap") as executor:
            for codepoint in range(start, end + 1):
                permits.acquire()
                future = executor.submit(self._resolve_into, codepoint, results)
                future.add_done_callback(finished)

        mapping = results.snapshot()
        logger.info("Mapped %d of %d codepoints", len(mapping), total)
        return mapping

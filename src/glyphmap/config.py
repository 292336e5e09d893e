"""Matching configuration for glyphmap."""
# this_file: src/glyphmap/config.py

from __future__ import annotations

from dataclasses import dataclass

# CJK Unified Ideographs, the only block searched for standard matches
CANDIDATE_RANGE: tuple[int, int] = (0x4E00, 0x9FFF)

# Private Use Area (BMP)
PUA_RANGE: tuple[int, int] = (0xE000, 0xF8FF)


@dataclass
class MapperConfig:
    """Tunable constants of the outline matcher.

    Attributes:
        render_size: Pixel size outlines are scaled to before comparison.
            Coordinates are 26.6 fixed-point at this size.
        tolerance: Maximum per-axis deviation, in 26.6 units, between two
            points that still count as the same point.
        probe_size: Pixel size used for the bounds/advance existence probe.
        concurrency: Default number of resolutions allowed in flight.
    """

    render_size: int = 1000
    tolerance: int = 10
    probe_size: int = 12
    concurrency: int = 10

    def __post_init__(self) -> None:
        if self.render_size <= 0:
            raise ValueError(f"render_size must be positive, got {self.render_size}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must not be negative, got {self.tolerance}")
        if self.probe_size <= 0:
            raise ValueError(f"probe_size must be positive, got {self.probe_size}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")


def default_config() -> MapperConfig:
    """Return a fresh configuration holding the default matching constants."""
    return MapperConfig()


def is_private_use(codepoint: int) -> bool:
    return PUA_RANGE[0] <= codepoint <= PUA_RANGE[1]

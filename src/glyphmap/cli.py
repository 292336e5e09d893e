"""Command-line entry point: build a special -> standard codepoint table from two fonts."""
# this_file: src/glyphmap/cli.py

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

import unicodedata2

from .config import PUA_RANGE, MapperConfig
from .errors import FontParseError
from .mapper import GlyphOutlineMapper, RuneMatch

# fontTools is chatty about slightly malformed tables while decompiling
NOISY_LOGGERS = ("fontTools.ttLib", "fontTools.ttLib.tables._h_m_t_x")


def parse_codepoint(value: str) -> int:
    """Parse ``E000``, ``0xE000`` or ``U+E000`` into an int."""
    text = value.strip().upper()
    for prefix in ("U+", "0X"):
        if text.startswith(prefix):
            text = text[len(prefix) :]
            break
    try:
        codepoint = int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hexadecimal codepoint: {value!r}") from None
    if not 0 <= codepoint <= 0x10FFFF:
        raise argparse.ArgumentTypeError(f"codepoint out of range: {value!r}")
    return codepoint


def format_codepoint(codepoint: int) -> str:
    return f"U+{codepoint:04X}"


def describe(codepoint: int) -> dict[str, str]:
    """Describe a standard codepoint for the JSON report."""
    char = chr(codepoint)
    return {
        "codepoint": format_codepoint(codepoint),
        "char": char,
        "name": unicodedata2.name(char, ""),
    }


def build_report(mapping: dict[int, int]) -> dict[str, Any]:
    """Turn a mapping table into a JSON-ready dict keyed by ``U+XXXX``, sorted by key."""
    return {format_codepoint(special): describe(mapping[special]) for special in sorted(mapping)}


def _print_progress(done: int, total: int, match: RuneMatch) -> None:
    if match.found:
        print(
            f"  [{done}/{total}] {format_codepoint(match.special)} -> "
            f"{format_codepoint(match.standard)} {chr(match.standard)}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphmap",
        description="Map special-font codepoints to standard CJK codepoints by glyph outline",
    )
    parser.add_argument("special", type=Path, help="Font whose (private use) glyphs are mapped")
    parser.add_argument("standard", type=Path, help="Font holding the standard CJK glyphs")
    parser.add_argument(
        "--start",
        type=parse_codepoint,
        default=PUA_RANGE[0],
        help="First special codepoint, hex (default: E000)",
    )
    parser.add_argument(
        "--end",
        type=parse_codepoint,
        default=PUA_RANGE[1],
        help="Last special codepoint, hex (default: F8FF)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=MapperConfig.concurrency,
        help="Resolutions kept in flight",
    )
    parser.add_argument(
        "--tolerance",
        type=int,
        default=MapperConfig.tolerance,
        help="Per-axis point tolerance in 26.6 units",
    )
    parser.add_argument(
        "--render-size",
        type=int,
        default=MapperConfig.render_size,
        help="Size outlines are scaled to before comparison",
    )
    parser.add_argument("--output", "-o", type=Path, help="Write the table as JSON to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point for the mapper."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    try:
        config = MapperConfig(
            render_size=args.render_size,
            tolerance=args.tolerance,
            concurrency=args.concurrency,
        )
    except ValueError as exc:
        parser.error(str(exc))

    print("=" * 60)
    print("Glyph Outline Mapper")
    print("=" * 60)
    print(f"  Special font: {args.special}")
    print(f"  Standard font: {args.standard}")
    print(f"  Range: {format_codepoint(args.start)}..{format_codepoint(args.end)}")
    print(f"  Concurrency: {config.concurrency}")
    print(f"  Tolerance: {config.tolerance} @ {config.render_size}")

    try:
        mapper = GlyphOutlineMapper.from_files(args.special, args.standard, config)
    except FontParseError as exc:
        print(f"  ERROR: {exc}")
        raise SystemExit(1) from exc
    except OSError as exc:
        print(f"  ERROR: cannot read font: {exc}")
        raise SystemExit(1) from exc

    print("\nMapping...")
    mapping = mapper.map_range(args.start, args.end, progress=_print_progress)
    report = build_report(mapping)

    print("\n" + "=" * 60)
    print("COMPLETE!")
    print("=" * 60)
    total = max(args.end - args.start + 1, 0)
    print(f"  Codepoints scanned: {total}")
    print(f"  Codepoints mapped: {len(mapping)}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(report, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        print(f"  Output: {args.output}")
    else:
        for special, entry in report.items():
            print(f"  {special} -> {entry['codepoint']} {entry['char']} {entry['name']}")


if __name__ == "__main__":
    main()

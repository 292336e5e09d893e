"""Shared fixtures: tiny TrueType fonts built in memory with FontBuilder."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont

from glyphmap import GlyphOutlineMapper

Contours = list[list[tuple[int, int]]]

# Simplified strokes, 1000 UPM
ZHONG: Contours = [
    [(100, 200), (900, 200), (900, 600), (100, 600)],
    [(150, 250), (150, 550), (850, 550), (850, 250)],
    [(450, 0), (550, 0), (550, 800), (450, 800)],
]
YI: Contours = [[(50, 350), (950, 350), (950, 450), (50, 450)]]
ER: Contours = [
    [(150, 600), (850, 600), (850, 680), (150, 680)],
    [(50, 150), (950, 150), (950, 230), (50, 230)],
]
TRIANGLE: Contours = [[(100, 0), (500, 700), (900, 0)]]
NOTDEF: Contours = [[(50, 0), (450, 0), (450, 700), (50, 700)]]


def draw(contours: Contours) -> Any:
    pen = TTGlyphPen(None)
    for contour in contours:
        pen.moveTo(contour[0])
        for point in contour[1:]:
            pen.lineTo(point)
        pen.closePath()
    return pen.glyph()


def build_font(
    family: str,
    glyphs: dict[str, tuple[Contours | None, int]],
    cmap: dict[int, str],
    composites: dict[str, tuple[str, int]] | None = None,
) -> bytes:
    """Build a TrueType font and return its bytes.

    Args:
        glyphs: glyph name -> (contours or None for an empty glyph, advance).
        cmap: codepoint -> glyph name.
        composites: glyph name -> (component glyph name, advance).
    """
    composites = composites or {}
    glyph_order = [".notdef", *glyphs, *composites]
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)

    glyf: dict[str, Any] = {".notdef": draw(NOTDEF)}
    hmtx: dict[str, tuple[int, int]] = {".notdef": (500, 0)}
    for name, (contours, advance) in glyphs.items():
        glyf[name] = draw(contours or [])
        hmtx[name] = (advance, 0)
    for name, (base, advance) in composites.items():
        pen = TTGlyphPen(glyf)
        pen.addComponent(base, (1, 0, 0, 1, 0, 0))
        glyf[name] = pen.glyph()
        hmtx[name] = (advance, 0)

    fb.setupGlyf(glyf)
    fb.setupHorizontalMetrics(hmtx)
    fb.setupCharacterMap(cmap)
    fb.setupHorizontalHeader(ascent=880, descent=-120)
    fb.setupOS2(sTypoAscender=880, sTypoDescender=-120, usWinAscent=880, usWinDescent=120)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": "Regular",
            "uniqueFontIdentifier": f"{family}-Regular",
            "fullName": f"{family} Regular",
            "psName": f"{family.replace(' ', '')}-Regular",
            "version": "Version 1.000",
        }
    )
    fb.setupPost()

    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()



def as_collection(*fonts: bytes) -> bytes:
    """Wrap font binaries into a .ttc collection, in order."""
    collection = TTCollection()
    collection.fonts = [TTFont(io.BytesIO(data)) for data in fonts]
    buf = io.BytesIO()
    collection.save(buf)
    return buf.getvalue()


def symbol_cmap_only(data: bytes) -> bytes:
    """Keep only the Windows cmap subtable, relabelled as Microsoft Symbol (3, 0)."""
    font = TTFont(io.BytesIO(data))
    cmap = font["cmap"]
    windows = cmap.getcmap(3, 1)
    windows.platEncID = 0
    cmap.tables = [windows]
    buf = io.BytesIO()
    font.save(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def special_font_data() -> bytes:
    return build_font(
        "Special Test",
        {
            "pua_zhong": (ZHONG, 1000),
            "pua_er": (ER, 1000),
            "pua_triangle": (TRIANGLE, 1000),
            "pua_placeholder": (None, 0),
            "pua_space": (None, 600),
            "digit_yi": (YI, 1000),
        },
        {
            0x0030: "digit_yi",
            0xE000: "pua_zhong",
            0xE001: "pua_er",
            0xE002: "pua_triangle",
            0xE003: "pua_placeholder",
            0xE006: "pua_space",
            0xE007: "pua_zhong_ref",
        },
        composites={"pua_zhong_ref": ("pua_zhong", 1000)},
    )


@pytest.fixture(scope="session")
def standard_font_data() -> bytes:
    return build_font(
        "Standard Test",
        {
            "A": (TRIANGLE, 1000),
            "uni4E00": (YI, 1000),
            "uni4E01": (None, 0),
            "uni4E2D": (ZHONG, 1000),
            "uni4E8C": (ER, 1000),
            "uni9000": (ZHONG, 1000),
        },
        {
            0x0041: "A",
            0x4E00: "uni4E00",
            0x4E01: "uni4E01",
            0x4E2D: "uni4E2D",
            0x4E8C: "uni4E8C",
            0x9000: "uni9000",
        },
    )


@pytest.fixture()
def mapper(special_font_data: bytes, standard_font_data: bytes) -> GlyphOutlineMapper:
    return GlyphOutlineMapper(special_font_data, standard_font_data)


@pytest.fixture()
def font_files(tmp_path: Path, special_font_data: bytes, standard_font_data: bytes) -> tuple[Path, Path]:
    special = tmp_path / "special.ttf"
    standard = tmp_path / "standard.ttf"
    special.write_bytes(special_font_data)
    standard.write_bytes(standard_font_data)
    return special, standard


@pytest.fixture(scope="session")
def standard_collection_data(standard_font_data: bytes, special_font_data: bytes) -> bytes:
    """A .ttc whose first face is the standard font."""
    return as_collection(standard_font_data, special_font_data)


@pytest.fixture(scope="session")
def symbol_special_font_data(special_font_data: bytes) -> bytes:
    return symbol_cmap_only(special_font_data)

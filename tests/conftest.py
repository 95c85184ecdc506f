"""Shared fixtures: small TrueType fonts built on the fly."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from quadraster.domain import CurveSet, Point, QuadraticSegment

UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200


def _draw_w(pen: TTGlyphPen) -> None:
    # Straight base and left side, one quadratic arc on the right.
    pen.moveTo((0, 0))
    pen.lineTo((400, 0))
    pen.qCurveTo((400, 600), (0, 600))
    pen.closePath()


def _draw_o(pen: TTGlyphPen) -> None:
    # Two consecutive off-curve points imply an on-curve point at (300, 150).
    pen.moveTo((0, 0))
    pen.lineTo((200, 0))
    pen.qCurveTo((300, 100), (300, 200), (200, 300))
    pen.lineTo((0, 300))
    pen.closePath()


def build_test_font() -> FontBuilder:
    """Build a TrueType font with glyphs W, O and an empty space."""
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)

    glyph_names = [".notdef", "O", "W", "space"]
    fb.setupGlyphOrder(glyph_names)
    fb.setupCharacterMap({ord("O"): "O", ord("W"): "W", ord(" "): "space"})

    glyph_dict = {}
    for name, draw_fn in ((".notdef", None), ("O", _draw_o), ("W", _draw_w), ("space", None)):
        pen = TTGlyphPen(None)
        if draw_fn is not None:
            draw_fn(pen)
        glyph_dict[name] = pen.glyph()
    fb.setupGlyf(glyph_dict)

    # All outlines start at x = 0, so lsb 0 matches xMin.
    fb.setupHorizontalMetrics({name: (500, 0) for name in glyph_names})
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({
        "familyName": "QuadrasterTest",
        "styleName": "Regular",
    })
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
    )
    fb.setupPost()
    return fb


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """Path to a freshly saved test font."""
    path = tmp_path / "QuadrasterTest.ttf"
    build_test_font().save(str(path))
    return path


@pytest.fixture
def square() -> CurveSet:
    """Counter-clockwise square from (0, 0) to (10, 10) made of lines."""
    corners = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
    return CurveSet.of(
        QuadraticSegment.from_line(corners[i], corners[(i + 1) % 4]) for i in range(4)
    )

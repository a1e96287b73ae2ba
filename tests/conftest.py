"""Shared fixtures: outlines and generated fonts.

Fonts are built with fontTools' FontBuilder so the integration tests need
no binary fixtures.
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from glyphmatcher.domain import Outline

UNIT_SQUARE = [(0, 0), (0, 100), (100, 100), (100, 0)]

# Glyph shapes as lists of closed polygons
SHAPES: dict[str, list[list[tuple[int, int]]]] = {
    ".notdef": [[(50, 0), (50, 700), (450, 700), (450, 0)]],
    "space": [],
    "A": [[(0, 0), (250, 700), (500, 0)]],
    "B": [
        [(0, 0), (0, 700), (400, 700), (400, 0)],
        [(100, 100), (300, 100), (300, 300), (100, 300)],
        [(100, 400), (300, 400), (300, 600), (100, 600)],
    ],
    "O": [
        [(0, 0), (0, 700), (500, 700), (500, 0)],
        [(100, 100), (400, 100), (400, 600), (100, 600)],
    ],
    "uni0394": [[(10, 0), (260, 710), (510, 0)]],
    "mystery": [[(0, 0), (0, 50), (50, 50)]],
}
CMAP = {0x20: "space", 0x41: "A", 0x42: "B", 0x4F: "O", 0x394: "uni0394"}


def _x_min(name: str) -> int:
    """Left side bearing matching the glyph's bounding box."""
    return min((x for polygon in SHAPES[name] for x, _ in polygon), default=0)


def _draw(pen, polygons):
    for polygon in polygons:
        pen.moveTo(polygon[0])
        for point in polygon[1:]:
            pen.lineTo(point)
        pen.closePath()


def build_ttf(path: Path, glyph_order: list[str], ps_name: str | None, cmap: dict[int, str] | None) -> Path:
    """Write a TrueType font made of the named SHAPES."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({cp: name for cp, name in (cmap or {}).items() if name in glyph_order})
    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        _draw(pen, SHAPES[name])
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (600, _x_min(name)) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    names = {"familyName": "Test", "styleName": "Regular"}
    if ps_name is not None:
        names["psName"] = ps_name
    fb.setupNameTable(names)
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(path))
    if ps_name is None:
        font = TTFont(str(path))
        font["name"].removeNames(nameID=6)
        font.save(str(path))
    return path


def build_otf(path: Path, glyph_order: list[str], ps_name: str, cmap: dict[int, str] | None) -> Path:
    """Write a CFF-flavoured OpenType font made of the named SHAPES."""
    fb = FontBuilder(1000, isTTF=False)
    fb.setupGlyphOrder(glyph_order)
    if cmap is not None:
        fb.setupCharacterMap({cp: name for cp, name in cmap.items() if name in glyph_order})
    charstrings = {}
    for name in glyph_order:
        pen = T2CharStringPen(600, None)
        _draw(pen, SHAPES[name])
        charstrings[name] = pen.getCharString()
    fb.setupCFF(ps_name, {"FullName": ps_name}, charstrings, {})
    fb.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test", "styleName": "Regular", "psName": ps_name})
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def unit_square() -> Outline:
    """The unit square contour labelled 'A' in the end-to-end scenario."""
    return Outline.from_coordinates([UNIT_SQUARE])


@pytest.fixture
def reference_ttf(tmp_path: Path) -> Path:
    """TrueType reference font with a cmap."""
    order = [".notdef", "space", "A", "B", "O", "uni0394"]
    return build_ttf(tmp_path / "Test-Regular.ttf", order, "Test-Regular", CMAP)


@pytest.fixture
def reference_otf(tmp_path: Path) -> Path:
    """CFF OpenType reference font; glyph names are the label source."""
    order = [".notdef", "space", "A", "B", "O", "uni0394", "mystery"]
    return build_otf(tmp_path / "TestCFF-Regular.otf", order, "TestCFF-Regular", CMAP)


@pytest.fixture
def subset_ttf(tmp_path: Path) -> Path:
    """Subset of the TrueType reference: reordered glyphs, no cmap."""
    order = [".notdef", "O", "space", "B", "A"]
    return build_ttf(tmp_path / "ABCDEF+Test-Regular.ttf", order, "ABCDEF+Test-Regular", None)


@pytest.fixture
def ttf_factory():
    """Build TrueType fonts from SHAPES: (path, glyph_order, ps_name, cmap)."""
    return build_ttf

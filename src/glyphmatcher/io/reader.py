"""Font reader for loading reference and target fonts.

This module provides the FontReader class and parse_font() for turning
font bytes into a FontSource. The flavour of the font decides which
mapping tables the FontSource exposes.
"""

import io
import re
from pathlib import Path

from fontTools.cffLib import CFFFontSet
from fontTools.pens.recordingPen import DecomposingRecordingPen, RecordingPen
from fontTools.ttLib import TTFont

from glyphmatcher.domain.font import FontKind, FontSource
from glyphmatcher.domain.outline import Outline
from glyphmatcher.exceptions import FontLoadError
from glyphmatcher.io.converter import recording_to_outline

# Name table ID of the PostScript name
NAME_ID_POSTSCRIPT = 6

# Subset tag prepended to font names of embedded subsets, e.g. "ABCDEF+"
SUBSET_TAG = re.compile(r"^[A-Z]{6}\+")

# First byte of a bare CFF font program (header major version)
CFF_MAJOR_VERSION = 1


def strip_subset_tag(name: str) -> str:
    """Remove a leading six-letter subset tag ("ABCDEF+") from a font name."""
    return SUBSET_TAG.sub("", name, count=1)


def _is_bare_cff(data: bytes) -> bool:
    """Check for a CFF header: major 1, minor, header size 4, offset size 1..4."""
    return len(data) >= 4 and data[0] == CFF_MAJOR_VERSION and data[2] == 4 and 1 <= data[3] <= 4


def _parse_sfnt(data: bytes) -> FontSource:
    """Parse a TrueType or OpenType (sfnt) font."""
    font = TTFont(io.BytesIO(data))
    glyph_order = font.getGlyphOrder()
    glyph_set = font.getGlyphSet()

    is_cff = "CFF " in font or "CFF2" in font
    kind = FontKind.OPENTYPE if is_cff else FontKind.TRUETYPE

    postscript_name = None
    if "name" in font:
        postscript_name = font["name"].getDebugName(NAME_ID_POSTSCRIPT)
    if postscript_name is None and "CFF " in font:
        postscript_name = font["CFF "].cff.fontNames[0]

    cmap = None
    if "cmap" in font:
        best = font.getBestCmap()
        if best:
            cmap = {code_point: font.getGlyphID(name) for code_point, name in best.items()}

    glyph_names: dict[str, int] = {}
    if kind == FontKind.OPENTYPE:
        glyph_names = {name: gid for gid, name in enumerate(glyph_order)}

    def load_outline(glyph_id: int) -> Outline:
        pen = DecomposingRecordingPen(glyph_set)
        glyph_set[glyph_order[glyph_id]].draw(pen)
        return recording_to_outline(pen.value)

    return FontSource(
        kind=kind,
        postscript_name=postscript_name,
        glyph_count=len(glyph_order),
        load_outline=load_outline,
        cmap=cmap,
        glyph_names=glyph_names,
    )


def _parse_cff(data: bytes) -> FontSource:
    """Parse a bare CFF font program (as embedded in PDF FontFile3 streams)."""
    cff = CFFFontSet()
    cff.decompile(io.BytesIO(data), None)
    postscript_name = cff.fontNames[0]
    top_dict = cff[postscript_name]
    charstrings = top_dict.CharStrings
    glyph_order = top_dict.getGlyphOrder()

    def load_outline(glyph_id: int) -> Outline:
        pen = RecordingPen()
        charstrings[glyph_order[glyph_id]].draw(pen)
        return recording_to_outline(pen.value)

    return FontSource(
        kind=FontKind.CFF,
        postscript_name=postscript_name or None,
        glyph_count=len(glyph_order),
        load_outline=load_outline,
        cmap=None,
        glyph_names={name: gid for gid, name in enumerate(glyph_order)},
    )


def parse_font(data: bytes, path: str = "<bytes>") -> FontSource:
    """Parse font bytes into a FontSource.

    Args:
        data: Raw font file contents
        path: Name used in error messages

    Returns:
        Parsed font

    Raises:
        FontLoadError: If fonttools cannot parse the data
    """
    try:
        if _is_bare_cff(data):
            return _parse_cff(data)
        return _parse_sfnt(data)
    except Exception as e:
        raise FontLoadError(path, str(e)) from e


class FontReader:
    """Loads a font file into a FontSource.

    Example:
        reader = FontReader(Path("font.ttf"))
        source = reader.load()
        for glyph_id in range(source.glyph_count):
            outline = source.glyph(glyph_id)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the font file
        """
        self._font_path = font_path

    def load(self) -> FontSource:
        """Load the font file.

        Returns:
            Parsed font

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If font file is invalid or cannot be parsed
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        return parse_font(self._font_path.read_bytes(), str(self._font_path))

    @property
    def subset_name(self) -> str:
        """Return a font name derived from the file name.

        Subsetted fonts extracted from PDFs are commonly named
        "ABCDEF+Family-Style"; the subset tag is dropped.
        """
        return strip_subset_tag(self._font_path.stem)

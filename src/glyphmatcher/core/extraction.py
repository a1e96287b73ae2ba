"""Reference extraction: building shape databases from labelled fonts.

A reference font contributes one (outline, label) entry per glyph whose
Unicode identity can be read from the font itself. Labels come from, in
order of preference:

1. the glyph-name table, resolved through the Adobe Glyph List or the
   uniXXXX naming convention;
2. the character map, inverted to glyph id -> character.

Which tables a font can offer depends on its flavour (see FontKind).
"""

import string
from pathlib import Path

from fontTools import agl

from glyphmatcher.core.shapedb import ShapeDb
from glyphmatcher.core.storage import write_db
from glyphmatcher.domain.font import FontKind, FontSource
from glyphmatcher.io.reader import FontReader
from glyphmatcher.utils.logging import ExtractionLogger

MAX_CODE_POINT = 0x10FFFF


def _is_scalar_value(code_point: int) -> bool:
    """Check that a code point can be turned into a character."""
    return 0 <= code_point <= MAX_CODE_POINT and not 0xD800 <= code_point <= 0xDFFF


def resolve_glyph_name(name: str) -> str | None:
    """Map a glyph name to the text it represents.

    The Adobe Glyph List is consulted first. Names it does not know are
    tried as "uni" followed by a hex scalar value in either case, which
    the AGL rules reject for lowercase digits.

    Args:
        name: Glyph name, e.g. "A", "eacute", "uni00E9", "f_i"

    Returns:
        The resolved text, or None if the name has no Unicode meaning
    """
    text = agl.toUnicode(name)
    if text:
        return text

    digits = name[3:]
    if name.startswith("uni") and digits and all(c in string.hexdigits for c in digits):
        code_point = int(digits, 16)
        if _is_scalar_value(code_point):
            return chr(code_point)

    return None


def labels_from_names(
    glyph_names: dict[str, int],
    extraction_logger: ExtractionLogger | None = None,
) -> list[tuple[int, str]]:
    """Label glyphs by their names.

    Unresolvable names are skipped and logged.

    Args:
        glyph_names: Glyph name to glyph id
        extraction_logger: Receives unresolved names

    Returns:
        (glyph id, label) pairs in glyph id order
    """
    pairs: list[tuple[int, str]] = []
    for name, glyph_id in sorted(glyph_names.items(), key=lambda t: t[1]):
        label = resolve_glyph_name(name)
        if label is None:
            if extraction_logger is not None:
                extraction_logger.log_name_unresolved(name)
            continue
        pairs.append((glyph_id, label))
    return pairs


def labels_from_cmap(cmap: dict[int, int]) -> list[tuple[int, str]]:
    """Label glyphs by inverting a character map.

    A glyph mapped from several code points yields one pair per code point.

    Args:
        cmap: Unicode code point to glyph id

    Returns:
        (glyph id, label) pairs in code point order
    """
    return [
        (glyph_id, chr(code_point))
        for code_point, glyph_id in sorted(cmap.items())
        if _is_scalar_value(code_point)
    ]


def label_assignments(
    source: FontSource,
    extraction_logger: ExtractionLogger | None = None,
) -> list[tuple[int, str]] | None:
    """Decide the label of each glyph of a reference font.

    Args:
        source: Parsed reference font
        extraction_logger: Receives unresolved glyph names

    Returns:
        (glyph id, label) pairs, or None if the font offers no mapping source
    """
    if source.kind == FontKind.TRUETYPE:
        if source.cmap:
            return labels_from_cmap(source.cmap)
        return None

    if source.kind == FontKind.OPENTYPE:
        if source.glyph_names:
            return labels_from_names(source.glyph_names, extraction_logger)
        if source.cmap:
            return labels_from_cmap(source.cmap)
        return None

    if source.kind == FontKind.CFF:
        if source.glyph_names:
            return labels_from_names(source.glyph_names, extraction_logger)
        return None

    return None


def build_shape_db(
    source: FontSource,
    extraction_logger: ExtractionLogger | None = None,
) -> ShapeDb[str] | None:
    """Build a shape database from a reference font.

    Args:
        source: Parsed reference font
        extraction_logger: Receives unresolved glyph names

    Returns:
        Frozen database, or None if the font offers no mapping source
    """
    assignments = label_assignments(source, extraction_logger)
    if assignments is None:
        return None

    db: ShapeDb[str] = ShapeDb()
    for glyph_id, label in assignments:
        db.add(source.glyph(glyph_id), label)
    return db.freeze()


def add_font(
    db_dir: Path,
    font_path: Path,
    extraction_logger: ExtractionLogger | None = None,
) -> Path | None:
    """Extract one reference font into the database directory.

    The database file is named after the font's PostScript name.

    Args:
        db_dir: Database directory
        font_path: Reference font file
        extraction_logger: Progress and statistics sink

    Returns:
        Path of the written database, or None if the font was skipped

    Raises:
        FileNotFoundError: If font_path does not exist
        FontLoadError: If the font cannot be parsed
        DatabaseWriteError: If the database cannot be written
    """
    if extraction_logger is None:
        extraction_logger = ExtractionLogger()
    extraction_logger.log_font_start(font_path)

    source = FontReader(font_path).load()
    if not source.postscript_name:
        extraction_logger.log_font_skipped(font_path, "no PostScript name")
        return None
    if Path(source.postscript_name).name != source.postscript_name:
        extraction_logger.log_font_skipped(font_path, "PostScript name is not a file name")
        return None

    db = build_shape_db(source, extraction_logger)
    if db is None:
        extraction_logger.log_font_skipped(
            font_path, f"{source.kind.value} font has no glyph names or cmap"
        )
        return None

    db_path = db_dir / source.postscript_name
    write_db(db_path, db)
    extraction_logger.log_font_added(font_path, source.postscript_name, len(db))
    return db_path

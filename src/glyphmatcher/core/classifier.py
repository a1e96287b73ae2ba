"""Glyph classification against a shape database."""

from glyphmatcher.core.observer import MatchObserver
from glyphmatcher.core.shapedb import ShapeDb
from glyphmatcher.domain.font import FontSource


def classify_font(
    db: ShapeDb,
    font: FontSource,
    observer: MatchObserver | None = None,
) -> dict[int, str]:
    """Label the glyphs of a font.

    Glyphs with an empty outline (spaces, control glyphs) are never
    classified. Glyphs without a match are absent from the result.

    Args:
        db: Shape database of the font's reference version
        font: Parsed target font
        observer: Optional receiver of diagnostic events

    Returns:
        Glyph id to label
    """
    labels: dict[int, str] = {}

    for glyph_id in range(font.glyph_count):
        outline = font.glyph(glyph_id)
        if outline.is_empty():
            continue

        if observer is not None:
            observer.glyph_start(glyph_id, outline)

        label = db.query(outline, observer)
        if label is not None:
            labels[glyph_id] = label

        if observer is not None:
            observer.glyph_end(glyph_id, label)

    return labels

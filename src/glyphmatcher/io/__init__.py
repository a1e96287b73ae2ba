"""Font I/O layer for glyphmatcher.

This module handles reading font files using fonttools. It provides a
clean abstraction layer between fonttools and the domain models.

Key responsibilities:
- Load TrueType, CFF-flavoured OpenType and bare CFF fonts
- Detect the font flavour and the mapping tables it exposes
- Convert fonttools drawings to domain outlines and back to pen calls

Key classes:
- FontReader: Load a font file into a FontSource
"""

from glyphmatcher.io.converter import draw_outline, recording_to_outline
from glyphmatcher.io.reader import FontReader, parse_font, strip_subset_tag

__all__ = [
    "FontReader",
    "draw_outline",
    "parse_font",
    "recording_to_outline",
    "strip_subset_tag",
]

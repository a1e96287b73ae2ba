"""Parsed font representation.

A FontSource is what the rest of glyphmatcher sees of a font file: its
flavour, its PostScript name, its glyph count, an outline accessor and the
mapping tables the flavour can carry.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from glyphmatcher.domain.outline import Outline


class FontKind(str, Enum):
    """Font flavour.

    Each flavour exposes a different subset of mapping tables:
    - TRUETYPE: glyf outlines; character map only
    - OPENTYPE: CFF outlines in an sfnt wrapper; glyph names and character map
    - CFF: bare CFF font program; glyph names only
    """

    TRUETYPE = "TrueType"
    OPENTYPE = "OpenType"
    CFF = "CFF"


@dataclass
class FontSource:
    """A parsed font.

    Attributes:
        kind: Font flavour
        postscript_name: Canonical PostScript name, None if the font has none
        glyph_count: Number of glyphs; valid glyph ids are range(glyph_count)
        cmap: Unicode code point to glyph id, None if the font has no usable cmap
        glyph_names: Glyph name to glyph id, empty if the font exposes no names
    """

    kind: FontKind
    postscript_name: str | None
    glyph_count: int
    load_outline: Callable[[int], Outline] = field(repr=False)
    cmap: dict[int, int] | None = None
    glyph_names: dict[str, int] = field(default_factory=dict)

    def glyph(self, glyph_id: int) -> Outline:
        """Get the outline of a glyph.

        Args:
            glyph_id: Glyph index

        Returns:
            Outline of the glyph (empty for blank glyphs)

        Raises:
            IndexError: If glyph_id is out of range
        """
        if not 0 <= glyph_id < self.glyph_count:
            raise IndexError(f"Glyph id {glyph_id} out of range (0..{self.glyph_count - 1})")
        return self.load_outline(glyph_id)

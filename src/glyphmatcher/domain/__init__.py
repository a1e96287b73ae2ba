"""Domain models for glyphmatcher.

This module contains the models representing glyph outlines and parsed
fonts. They are independent of fonttools implementation details:

- Point: A 2D point with curve metadata
- Contour: A closed sequence of points bounding one region of a glyph
- Outline: A glyph's shape, made of contours
- FontKind: The closed set of supported font flavours
- FontSource: A parsed font exposing glyph outlines and mapping tables
"""

from glyphmatcher.domain.font import FontKind, FontSource
from glyphmatcher.domain.outline import Contour, Outline, Point, PointType

__all__: list[str] = [
    # Enums
    "FontKind",
    "PointType",
    # Core types
    "Point",
    "Contour",
    "Outline",
    "FontSource",
]

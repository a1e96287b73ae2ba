"""Core matching algorithms for glyphmatcher.

This module contains:

- ShapeDb: outline fingerprint database (insertion and query)
- Match observers: the optional diagnostic side channel
- Storage: versioned on-disk encoding of shape databases
- Reference extraction: labelling reference glyphs and building databases
- Glyph classification and the FontDb cache

Key functions:
- quantize: Truncate a coordinate onto the 16-bit grid
- contour_signature: Quantized point set of a contour
- build_shape_db: Build a database from a parsed reference font
- classify_font: Label the glyphs of a target font

Key classes:
- ShapeDb: Fingerprint database
- FontDb: Directory-backed, thread-safe database cache
- MatchObserver / TraceRecorder: Matching event receivers
"""

from glyphmatcher.core.classifier import classify_font
from glyphmatcher.core.extraction import (
    add_font,
    build_shape_db,
    label_assignments,
    resolve_glyph_name,
)
from glyphmatcher.core.observer import MatchObserver, TraceRecorder
from glyphmatcher.core.shapedb import ShapeDb, contour_signature, quantize
from glyphmatcher.core.storage import dumps, loads, read_db, write_db
from glyphmatcher.core.fontdb import FontDb

__all__ = [
    # Database classes
    "FontDb",
    "MatchObserver",
    "ShapeDb",
    "TraceRecorder",
    # Functions
    "add_font",
    "build_shape_db",
    "classify_font",
    "contour_signature",
    "dumps",
    "label_assignments",
    "loads",
    "quantize",
    "read_db",
    "resolve_glyph_name",
    "write_db",
]

"""glyphmatcher - Recover Unicode labels for glyphs of unmapped fonts.

glyphmatcher fingerprints glyph outlines of reference fonts whose character
mapping is known and stores them in one shape database per font. Glyphs of a
subsetted or obfuscated copy of the same font (for example one embedded in a
PDF with its cmap stripped) are then identified by exact outline matching.

Example:
    $ glyphmatcher build fonts/ --db db
    $ glyphmatcher classify ABCDEF+Roboto-Regular.ttf --db db --report out.html
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

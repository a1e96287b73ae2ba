"""Exception hierarchy for glyphmatcher."""


class GlyphMatcherError(Exception):
    """Base exception for all glyphmatcher errors."""

    pass


class FontError(GlyphMatcherError):
    """Errors related to reading font files."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class DatabaseError(GlyphMatcherError):
    """Errors related to shape database files."""

    pass


class DatabaseCorruptError(DatabaseError):
    """A shape database file exists but cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt shape database '{path}': {reason}")


class DatabaseWriteError(DatabaseError):
    """A shape database file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write shape database '{path}': {reason}")

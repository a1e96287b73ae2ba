"""Configuration settings for glyphmatcher."""

from pathlib import Path

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Configuration for the shape database directory and reference corpus."""

    db_dir: Path = Field(
        default=Path("db"),
        description="Directory holding one shape database file per reference font",
    )
    font_extensions: tuple[str, ...] = Field(
        default=(".ttf", ".otf", ".cff"),
        description="File extensions picked up when scanning a reference corpus (empty = all files)",
    )

    def accepts(self, path: Path) -> bool:
        """Check whether a corpus file should be extracted.

        Args:
            path: Candidate font file

        Returns:
            True if the file's extension is accepted
        """
        if not self.font_extensions:
            return True
        return path.suffix.lower() in self.font_extensions


class ReportConfig(BaseModel):
    """Configuration for the HTML diagnostic report."""

    title: str = Field(
        default="glyphmatcher report",
        description="Document title of the report",
    )
    preview_scale: float = Field(
        default=0.05,
        gt=0.0,
        le=1.0,
        description="Rendered preview width as a fraction of the glyph's width in font units",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphMatcherSettings(BaseModel):
    """Main application settings."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphMatcherSettings:
    """Get default application settings."""
    return GlyphMatcherSettings()

"""Logging utilities for glyphmatcher."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

LOGGER_NAME = "glyphmatcher"


def get_logger() -> structlog.stdlib.BoundLogger:
    """Return the package logger.

    Before configure_logging() runs this is structlog's default logger, so
    library code can log without requiring the CLI setup.
    """
    return structlog.get_logger(LOGGER_NAME)


@dataclass
class ExtractionStats:
    """Statistics from a reference extraction run."""

    fonts_added: int = 0
    fonts_skipped: int = 0
    fonts_failed: int = 0
    glyphs_indexed: int = 0
    names_unresolved: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate extraction duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"glyphmatcher_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = get_logger()
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ExtractionLogger:
    """Logger for tracking reference extraction progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger()
        self._stats = ExtractionStats()

    def start(self) -> None:
        """Mark the beginning of an extraction run."""
        self._stats.start_time = time.time()

    def finish(self) -> None:
        """Mark the end of an extraction run."""
        self._stats.end_time = time.time()
        self._logger.info(
            "Extraction finished",
            added=self._stats.fonts_added,
            skipped=self._stats.fonts_skipped,
            failed=self._stats.fonts_failed,
            glyphs=self._stats.glyphs_indexed,
        )

    def log_font_start(self, font_path: Path) -> None:
        """Log start of reference font extraction."""
        self._logger.debug("Extracting font", path=str(font_path))

    def log_font_added(self, font_path: Path, postscript_name: str, glyphs: int) -> None:
        """Log a database written for a reference font."""
        self._logger.info(
            "Font added",
            path=str(font_path),
            postscript_name=postscript_name,
            glyphs=glyphs,
        )
        self._stats.fonts_added += 1
        self._stats.glyphs_indexed += glyphs

    def log_font_skipped(self, font_path: Path, reason: str) -> None:
        """Log a reference font that yields no database."""
        self._logger.info("Font skipped", path=str(font_path), reason=reason)
        self._stats.fonts_skipped += 1

    def log_font_error(self, font_path: Path, error: Exception) -> None:
        """Log a reference font that could not be processed."""
        self._logger.error(
            "Font extraction failed",
            path=str(font_path),
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.fonts_failed += 1
        self._stats.errors.append((str(font_path), str(error)))

    def log_name_unresolved(self, glyph_name: str) -> None:
        """Log a glyph name with no Unicode interpretation."""
        self._logger.debug("Glyph name not resolved", glyph=glyph_name)
        self._stats.names_unresolved += 1

    @property
    def stats(self) -> ExtractionStats:
        """Get current extraction statistics."""
        return self._stats

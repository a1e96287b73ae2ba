"""Directory-backed store of shape databases.

FontDb maps a font's PostScript name to the database file of the same name
inside its directory. Databases are loaded on first use and kept for the
lifetime of the FontDb, including the fact that a name has no database.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from glyphmatcher.config import DatabaseConfig
from glyphmatcher.core import extraction
from glyphmatcher.core.classifier import classify_font
from glyphmatcher.core.shapedb import ShapeDb
from glyphmatcher.core.storage import read_db
from glyphmatcher.domain.font import FontSource
from glyphmatcher.exceptions import GlyphMatcherError
from glyphmatcher.utils.locking import ReadWriteLock
from glyphmatcher.utils.logging import ExtractionLogger, ExtractionStats, get_logger

if TYPE_CHECKING:
    from glyphmatcher.report import HtmlReport


class FontDb:
    """Thread-safe, lazily populated cache of shape databases.

    Lookups that hit the cache take a shared lock only. A miss reads the
    file without holding the lock and then records the outcome under the
    exclusive lock; two threads racing on the same miss both read the file
    and store equal results.

    Example:
        fontdb = FontDb(Path("db"))
        labels = fontdb.classify("Roboto-Regular", source)
    """

    def __init__(
        self,
        path: Path,
        config: DatabaseConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            path: Database directory
            config: Database settings (extension filter for scans)
            logger: Logger to use (package logger if None)
        """
        self.path = path
        self.config = config if config is not None else DatabaseConfig(db_dir=path)
        self.logger = logger if logger is not None else get_logger()
        self._cache: dict[str, ShapeDb[str] | None] = {}
        self._lock = ReadWriteLock()

    def scan(self, source_dir: Path) -> ExtractionStats:
        """Extract every reference font of a directory.

        Fonts that fail to parse are logged and counted; the scan goes on
        with the remaining files.

        Args:
            source_dir: Directory of reference font files

        Returns:
            Statistics of the run
        """
        self.path.mkdir(parents=True, exist_ok=True)
        extraction_logger = ExtractionLogger(self.logger)
        extraction_logger.start()

        for font_path in sorted(source_dir.iterdir()):
            if not font_path.is_file() or not self.config.accepts(font_path):
                continue
            try:
                extraction.add_font(self.path, font_path, extraction_logger)
            except GlyphMatcherError as e:
                extraction_logger.log_font_error(font_path, e)

        extraction_logger.finish()
        return extraction_logger.stats

    def add_font(self, font_path: Path) -> Path | None:
        """Extract a single reference font into the directory.

        Returns:
            Path of the written database, or None if the font was skipped
        """
        self.path.mkdir(parents=True, exist_ok=True)
        return extraction.add_font(self.path, font_path, ExtractionLogger(self.logger))

    def lookup(self, name: str) -> ShapeDb[str] | None:
        """Get the database of a font.

        Args:
            name: PostScript name of the font

        Returns:
            The shared, frozen database, or None if none exists

        Raises:
            DatabaseCorruptError: If the database file cannot be decoded
        """
        if not name or Path(name).name != name:
            self.logger.warning("Invalid font name", font=name)
            return None

        with self._lock.read():
            if name in self._cache:
                return self._cache[name]

        file_path = self.path / name
        if file_path.is_file():
            db: ShapeDb[str] | None = read_db(file_path)
            self.logger.debug("Database loaded", font=name, entries=len(db))
        else:
            db = None
            self.logger.debug("No database", font=name)

        with self._lock.write():
            self._cache[name] = db
        return db

    def classify(self, name: str, font: FontSource) -> dict[int, str] | None:
        """Label the glyphs of a font.

        Args:
            name: PostScript name of the font's reference version
            font: Parsed target font

        Returns:
            Glyph id to label, or None if no database exists for the name
        """
        db = self.lookup(name)
        if db is None:
            return None
        return classify_font(db, font)

    def report(self, name: str, font: FontSource, report: "HtmlReport | None" = None) -> str | None:
        """Label the glyphs of a font and render the matching trace.

        Args:
            name: PostScript name of the font's reference version
            font: Parsed target font
            report: Report to fill (a default HtmlReport if None)

        Returns:
            HTML document, or None if no database exists for the name
        """
        db = self.lookup(name)
        if db is None:
            return None
        if report is None:
            from glyphmatcher.report import HtmlReport

            report = HtmlReport()
        report.labels = classify_font(db, font, report)
        return report.render()

"""CLI application entry point for glyphmatcher.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from glyphmatcher import __version__
from glyphmatcher.cli.output import (
    SYM_OK,
    console,
    print_error,
    print_extraction_summary,
    print_font_info,
    print_header,
    print_labels,
    print_step,
)
from glyphmatcher.config import GlyphMatcherSettings, get_default_settings
from glyphmatcher.core import FontDb
from glyphmatcher.exceptions import DatabaseError, FontLoadError, GlyphMatcherError
from glyphmatcher.io import FontReader, strip_subset_tag
from glyphmatcher.report import HtmlReport
from glyphmatcher.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphmatcher",
    help="Identify glyphs of fonts without a usable cmap by matching their outlines.",
    add_completion=False,
    no_args_is_help=True,
)

DbOption = Annotated[
    Path,
    typer.Option("--db", "-d", help="Shape database directory"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphmatcher[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Identify glyphs of fonts without a usable cmap by matching their outlines."""


def _settings(db: Path, log_file: Path | None, log_level: str, quiet: bool) -> GlyphMatcherSettings:
    settings = get_default_settings()
    settings.database.db_dir = db
    settings.logging.log_file = log_file
    settings.logging.log_level = log_level if not quiet else "WARNING"
    return settings


def _open_fontdb(settings: GlyphMatcherSettings, quiet: bool) -> FontDb:
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return FontDb(settings.database.db_dir, config=settings.database, logger=logger)


@app.command()
def build(
    source_dir: Annotated[
        Path,
        typer.Argument(help="Directory of reference fonts", show_default=False),
    ],
    db: DbOption = Path("db"),
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Build one shape database per reference font of a directory.

    Example:
        glyphmatcher build fonts/ --db db
    """
    if not source_dir.is_dir():
        print_error(f"Not a directory: {source_dir}")
        raise typer.Exit(code=1)

    settings = _settings(db, log_file, log_level, quiet)
    if not quiet:
        print_header(__version__)
        print_step(f"Scanning {source_dir}")

    fontdb = _open_fontdb(settings, quiet)
    try:
        stats = fontdb.scan(source_dir)
    except GlyphMatcherError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_extraction_summary(stats)


@app.command()
def add(
    font: Annotated[
        Path,
        typer.Argument(help="Reference font file", show_default=False),
    ],
    db: DbOption = Path("db"),
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Build the shape database of a single reference font."""
    if not font.is_file():
        print_error(f"Input file not found: {font}")
        raise typer.Exit(code=1)

    settings = _settings(db, log_file, log_level, quiet)
    fontdb = _open_fontdb(settings, quiet)
    try:
        db_path = fontdb.add_font(font)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphMatcherError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if db_path is None:
        print_error(
            f"No database built for {font}",
            details="The font has no PostScript name or no glyph names/cmap to label glyphs with.",
        )
        raise typer.Exit(code=1)
    if not quiet:
        console.print(f"[bold green]{SYM_OK}[/bold green] {db_path}")


@app.command()
def classify(
    font: Annotated[
        Path,
        typer.Argument(help="Font file to identify glyphs of", show_default=False),
    ],
    db: DbOption = Path("db"),
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Database name (default: the font's PostScript name, else the file name, without subset tag)",
        ),
    ] = None,
    report: Annotated[
        Path | None,
        typer.Option("--report", "-r", help="Write an HTML matching report"),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Identify the glyphs of a font using the database of its reference version.

    Example:
        glyphmatcher classify ABCDEF+Roboto-Regular.ttf --report out.html
    """
    if not font.is_file():
        print_error(f"Input file not found: {font}")
        raise typer.Exit(code=1)

    settings = _settings(db, log_file, log_level, quiet)
    fontdb = _open_fontdb(settings, quiet)

    try:
        reader = FontReader(font)
        source = reader.load()
        db_name = name
        if not db_name and source.postscript_name:
            db_name = strip_subset_tag(source.postscript_name)
        if not db_name:
            db_name = reader.subset_name

        if not quiet:
            print_header(__version__)
            print_step("Loading font")
            print_font_info(str(font), source, db_name)
            print_step("Matching glyphs")

        if report is not None:
            html_report = HtmlReport(settings.report)
            document = fontdb.report(db_name, source, html_report)
            labels = html_report.labels if document is not None else None
            if document is not None:
                report.write_text(document, encoding="utf-8")
        else:
            labels = fontdb.classify(db_name, source)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except DatabaseError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if labels is None:
        print_error(
            f"No database for '{db_name}'",
            details=f"Build one with: glyphmatcher add <reference font> --db {db}",
        )
        raise typer.Exit(code=2)

    print_labels(labels, source.glyph_count)
    if report is not None and not quiet:
        console.print(f"  report written to {report}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

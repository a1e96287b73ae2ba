"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphmatcher.domain.font import FontSource
from glyphmatcher.utils.logging import ExtractionStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphmatcher[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, source: FontSource, name: str) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        source: Parsed font
        name: Name used to look up the font's database
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({source.kind.value})")
    console.print(line1)
    line2 = Text(f"  {source.glyph_count:,} glyphs {SYM_DOT} database ")
    line2.append(name, style="bold")
    console.print(line2)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_extraction_summary(stats: ExtractionStats) -> None:
    """Print the outcome of a reference extraction run."""
    time_str = _format_time(stats.duration_seconds)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    error_style = "red" if stats.fonts_failed > 0 else "green"
    console.print(
        f"  {stats.fonts_added} fonts {SYM_DOT} {stats.glyphs_indexed} glyphs {SYM_DOT} "
        f"{stats.fonts_skipped} skipped {SYM_DOT} "
        f"[{error_style}]{stats.fonts_failed} errors[/{error_style}]"
    )
    if stats.names_unresolved:
        console.print(f"  {stats.names_unresolved} glyph names not resolved")
    for path, error in stats.errors:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(path)
        line.append(f": {error}")
        console.print(line)


def print_labels(labels: dict[int, str], glyph_count: int) -> None:
    """Print the glyph id to label table."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("glyph", justify="right")
    table.add_column("label")
    table.add_column("code points", style="dim")
    for glyph_id in sorted(labels):
        label = labels[glyph_id]
        table.add_row(
            str(glyph_id),
            Text(label),
            " ".join(f"U+{ord(c):04X}" for c in label),
        )
    console.print(table)
    console.print(f"\n  [green]{len(labels)}[/green] of {glyph_count} glyphs identified")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")

"""Command-line interface for glyphmatcher.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Building shape databases from a reference corpus
- Classifying the glyphs of an unmapped font
- Optional HTML diagnostic report
"""

from glyphmatcher.cli.app import cli, main

__all__ = ["cli", "main"]

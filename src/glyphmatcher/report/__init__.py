"""Diagnostic reports for glyph classification.

Key classes:
- HtmlReport: Match observer rendering a standalone HTML document
"""

from glyphmatcher.report.html import HtmlReport, outline_svg

__all__ = ["HtmlReport", "outline_svg"]

"""HTML rendering of the matching trace.

The report shows, for every classified glyph, an SVG preview of its outline
followed by each candidate the database considered and why it was rejected
or accepted. It is meant to be read by a person auditing a classification.
"""

from html import escape
from typing import Any

from fontTools.pens.svgPathPen import SVGPathPen

from glyphmatcher.config import ReportConfig
from glyphmatcher.core.observer import MatchObserver
from glyphmatcher.domain.outline import Outline
from glyphmatcher.io.converter import draw_outline

STYLE = """\
.test {
    margin-bottom: 1em;
}
.candidate {
    display: flex;
    margin-left: 2em;
}
.rejected {
    color: #888;
}
svg {
    border: 1px solid blue;
}
p > span {
    font-size: 40pt;
}
"""


def _fmt(value: float) -> str:
    return f"{value:g}"


def outline_svg(outline: Outline, scale: float = 0.05) -> str:
    """Render an outline as an inline SVG element.

    The y axis is flipped so that font coordinates (y up) display upright.

    Args:
        outline: Outline to render
        scale: Rendered width in pixels per font unit

    Returns:
        An <svg> element
    """
    min_x, min_y, max_x, max_y = outline.bounding_box()
    width = max_x - min_x
    height = max_y - min_y

    pen = SVGPathPen(None)
    draw_outline(outline, pen)

    return (
        f'<svg viewBox="{_fmt(min_x)} {_fmt(min_y)} {_fmt(width)} {_fmt(height)}" '
        f'transform="scale(1, -1)" style="display: inline-block;" '
        f'width="{_fmt(width * scale)}px"><path d="{escape(pen.getCommands())}" /></svg>'
    )


class HtmlReport(MatchObserver):
    """Match observer that renders a standalone HTML report.

    Example:
        report = HtmlReport()
        report.labels = classify_font(db, font, report)
        Path("report.html").write_text(report.render(), encoding="utf-8")
    """

    def __init__(self, config: ReportConfig | None = None) -> None:
        self.config = config if config is not None else ReportConfig()
        self.labels: dict[int, str] = {}
        self._parts: list[str] = []

    def glyph_start(self, glyph_id: int, outline: Outline) -> None:
        self._parts.append(f'<div class="test" id="glyph-{glyph_id}">')
        self._parts.append(f"<h3>glyph {glyph_id}</h3>")
        self._parts.append(outline_svg(outline, self.config.preview_scale))

    def candidate(self, label: Any, hits: int) -> None:
        self._parts.append(
            f'<div class="candidate">candidate <span>{escape(str(label))}</span> '
            f"({hits} points shared)"
        )

    def contour_count_mismatch(self, label: Any, stored: int, query: int) -> None:
        self._parts.append(
            f'<span class="rejected"> incorrect number of contours {stored} != {query}</span></div>'
        )

    def contour_mismatch(self, label: Any, missing: int, total: int) -> None:
        self._parts.append(f" {missing} of {total} points do not match")

    def candidate_result(self, label: Any, used: list[bool], matched: bool) -> None:
        usage = ", ".join("true" if u else "false" for u in used)
        verdict = "match" if matched else "rejected"
        self._parts.append(
            f"<p>Unicode: <span>{escape(str(label))}</span>, [{usage}] {verdict}</p></div>"
        )

    def glyph_end(self, glyph_id: int, label: Any | None) -> None:
        if label is None:
            self._parts.append("<p>no match</p>")
        self._parts.append("</div>")

    def render(self) -> str:
        """Return the complete HTML document."""
        head = (
            "<!DOCTYPE html>\n<html>\n<head><meta charset=\"utf-8\">\n"
            f"<title>{escape(self.config.title)}</title>\n"
            f'<style type="text/css">\n{STYLE}</style>\n</head>\n<body>\n'
        )
        summary = f"<p>{len(self.labels)} glyphs identified</p>\n"
        return head + summary + "\n".join(self._parts) + "\n</body></html>"

"""Observers for the matching side channel.

ShapeDb.query() and classify_font() accept an optional observer. When none
is given no diagnostic work is done at all; when one is given it is told
about every glyph, candidate, rejection and accepted match.
"""

from typing import Any

from glyphmatcher.domain.outline import Outline


class MatchObserver:
    """Receives matching events. All methods are no-ops by default."""

    def glyph_start(self, glyph_id: int, outline: Outline) -> None:
        """A glyph is about to be matched."""

    def candidate(self, label: Any, hits: int) -> None:
        """A candidate entry is being considered."""

    def contour_count_mismatch(self, label: Any, stored: int, query: int) -> None:
        """The candidate was rejected because its contour count differs."""

    def contour_mismatch(self, label: Any, missing: int, total: int) -> None:
        """A query contour did not equal an unused stored contour.

        Args:
            label: Candidate label
            missing: Query contour points absent from the stored contour
            total: Number of distinct points of the query contour
        """

    def candidate_result(self, label: Any, used: list[bool], matched: bool) -> None:
        """Contour assignment finished for a candidate."""

    def glyph_end(self, glyph_id: int, label: Any | None) -> None:
        """Matching finished for a glyph; label is None when nothing matched."""


class TraceRecorder(MatchObserver):
    """Records matching events as plain tuples.

    Example:
        trace = TraceRecorder()
        db.query(outline, trace)
        for event in trace.events:
            print(event)
    """

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def glyph_start(self, glyph_id: int, outline: Outline) -> None:
        self.events.append(("glyph", glyph_id, len(outline)))

    def candidate(self, label: Any, hits: int) -> None:
        self.events.append(("candidate", label, hits))

    def contour_count_mismatch(self, label: Any, stored: int, query: int) -> None:
        self.events.append(("contour_count_mismatch", label, stored, query))

    def contour_mismatch(self, label: Any, missing: int, total: int) -> None:
        self.events.append(("contour_mismatch", label, missing, total))

    def candidate_result(self, label: Any, used: list[bool], matched: bool) -> None:
        self.events.append(("result", label, tuple(used), matched))

    def glyph_end(self, glyph_id: int, label: Any | None) -> None:
        self.events.append(("glyph_end", glyph_id, label))

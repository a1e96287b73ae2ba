"""Outline fingerprint database.

A ShapeDb stores, per label, the contours of one reference outline as sets
of quantized points, plus an inverted index from quantized point to the
entries that touch it. Queries use the index to rank candidates by shared
points, then confirm a candidate by exact contour-set equality.

Quantization truncates each coordinate toward zero and saturates it into
the unsigned 16-bit range. Distinct points that truncate to the same grid
position are equal; negative coordinates all collapse to 0.

Contour assignment during a query is a greedy linear scan: each query
contour claims the first unused stored contour with an equal point set. It
is not an optimal bipartite matching, and its outcome depends on the order
the stored contours were inserted in.
"""

import math
from collections.abc import Iterator
from typing import Generic, TypeVar

from glyphmatcher.core.observer import MatchObserver
from glyphmatcher.domain.outline import Contour, Outline

L = TypeVar("L")

QuantizedPoint = tuple[int, int]
ContourSignature = frozenset[QuantizedPoint]

COORD_MAX = 0xFFFF


def quantize(value: float) -> int:
    """Truncate a coordinate onto the unsigned 16-bit grid.

    Args:
        value: Coordinate in font units

    Returns:
        int(value) clamped to [0, 65535]; NaN maps to 0
    """
    if math.isnan(value):
        return 0
    if value <= 0:
        return 0
    if value >= COORD_MAX:
        return COORD_MAX
    return int(value)


def _quantized_points(contour: Contour) -> Iterator[QuantizedPoint]:
    for p in contour.points:
        yield (quantize(p.x), quantize(p.y))


def contour_signature(contour: Contour) -> ContourSignature:
    """Return the set of quantized points of a contour."""
    return frozenset(_quantized_points(contour))


def outline_points(outline: Outline) -> list[QuantizedPoint]:
    """Return the distinct quantized points of an outline in first-seen order."""
    seen: dict[QuantizedPoint, None] = {}
    for contour in outline.contours:
        for key in _quantized_points(contour):
            seen.setdefault(key, None)
    return list(seen)


class ShapeDb(Generic[L]):
    """Fingerprint database mapping outlines to labels.

    Once freeze() has been called the database no longer accepts entries
    and may be shared between threads without locking.

    Example:
        db = ShapeDb()
        db.add(outline, "A")
        db.query(outline)  # -> "A"
    """

    def __init__(self) -> None:
        self.entries: list[tuple[L, tuple[ContourSignature, ...]]] = []
        self.points: dict[QuantizedPoint, list[int]] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def frozen(self) -> bool:
        """Whether the database has been sealed against insertion."""
        return self._frozen

    def freeze(self) -> "ShapeDb[L]":
        """Seal the database. Returns self for chaining."""
        self._frozen = True
        return self

    def add(self, outline: Outline, label: L) -> None:
        """Insert an outline under a label.

        Every distinct quantized point of the outline indexes the new entry
        once, however many contours share it.

        Args:
            outline: Reference outline
            label: Label for the outline

        Raises:
            RuntimeError: If the database has been frozen
        """
        if self._frozen:
            raise RuntimeError("ShapeDb is frozen")

        entry_idx = len(self.entries)
        for key in outline_points(outline):
            self.points.setdefault(key, []).append(entry_idx)

        signatures = tuple(contour_signature(c) for c in outline.contours)
        self.entries.append((label, signatures))

    def rank_candidates(self, outline: Outline) -> list[tuple[int, int]]:
        """Rank entries by the number of query points they share.

        Args:
            outline: Query outline

        Returns:
            (entry index, hit count) pairs, highest count first; equal
            counts keep insertion order
        """
        hits: dict[int, int] = {}
        for key in outline_points(outline):
            for idx in self.points.get(key, ()):
                hits[idx] = hits.get(idx, 0) + 1
        return sorted(hits.items(), key=lambda t: (-t[1], t[0]))

    def query(self, outline: Outline, observer: MatchObserver | None = None) -> L | None:
        """Find the label of an outline.

        Candidates are tried in rank order. A candidate matches when it has
        as many contours as the query and every query contour claims a
        distinct stored contour with an equal point set. The first full
        match wins.

        Args:
            outline: Query outline
            observer: Optional receiver of diagnostic events

        Returns:
            Matching label, or None if no candidate matches
        """
        query_signatures = [contour_signature(c) for c in outline.contours]

        for idx, hit_count in self.rank_candidates(outline):
            label, stored = self.entries[idx]
            if observer is not None:
                observer.candidate(label, hit_count)

            if len(stored) != len(query_signatures):
                if observer is not None:
                    observer.contour_count_mismatch(label, len(stored), len(query_signatures))
                continue

            used = [False] * len(stored)
            for query_sig in query_signatures:
                for stored_idx, stored_sig in enumerate(stored):
                    if used[stored_idx]:
                        continue
                    if query_sig == stored_sig:
                        used[stored_idx] = True
                        break
                    if observer is not None:
                        observer.contour_mismatch(
                            label, len(query_sig - stored_sig), len(query_sig)
                        )

            matched = all(used)
            if observer is not None:
                observer.candidate_result(label, used, matched)
            if matched:
                return label

        return None

"""Core geometric types for glyph outlines.

This module defines the outline primitives consumed by the shape database:
- Point: A 2D point with curve type information
- Contour: A closed contour representing a shape boundary
- Outline: The ordered contours of one glyph
- PointType: Enum for point type on a curve
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class PointType(Enum):
    """Point type on a contour.

    Points can be:
    - ON_CURVE: Point on the actual curve
    - OFF_CURVE_QUAD: Quadratic Bezier control point (TrueType)
    - OFF_CURVE_CUBIC: Cubic Bezier control point (PostScript/CFF)
    """

    ON_CURVE = auto()
    OFF_CURVE_QUAD = auto()
    OFF_CURVE_CUBIC = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with curve metadata.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        point_type: Type of point (on-curve or control point)
    """

    x: float
    y: float
    point_type: PointType = PointType.ON_CURVE

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class Contour:
    """A closed contour representing a shape boundary.

    Control points are part of the contour: they take part in outline
    fingerprints the same way on-curve points do.

    Attributes:
        points: List of points forming the contour
    """

    points: list[Point]
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Result is cached for efficiency.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox


@dataclass
class Outline:
    """A glyph outline: its contours in drawing order.

    Attributes:
        contours: List of contours forming the outline
    """

    contours: list[Contour] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.contours)

    def is_empty(self) -> bool:
        """Check if the outline has no contours.

        Empty outlines belong to spaces and other non-printing glyphs.
        """
        return len(self.contours) == 0

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate the bounding box over all contours.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), all zero for an empty outline
        """
        boxes = [c.bounding_box() for c in self.contours if c.points]
        if not boxes:
            return (0.0, 0.0, 0.0, 0.0)
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    @classmethod
    def from_coordinates(cls, contours: list[list[tuple[float, float]]]) -> "Outline":
        """Build an outline of on-curve points from plain coordinate lists.

        Args:
            contours: One list of (x, y) tuples per contour

        Returns:
            Outline instance
        """
        return cls(contours=[Contour(points=[Point(x, y) for x, y in c]) for c in contours])

"""Converters between fonttools pen drawings and domain outlines.

fonttools glyphs are drawn into a recording pen and the recorded commands
become Contour objects. The reverse direction replays an Outline into any
fonttools pen, which the report uses to produce SVG path data.
"""

from typing import Any

from fontTools.pens.basePen import AbstractPen

from glyphmatcher.domain.outline import Contour, Outline, Point, PointType


def recording_to_outline(recording: list[tuple[str, tuple[Any, ...]]]) -> Outline:
    """Convert a RecordingPen recording to an Outline.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    A qCurveTo whose last argument is None describes a closed contour made
    only of off-curve points.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        Outline with one Contour per recorded path
    """
    contours: list[Contour] = []
    current_points: list[Point] = []

    for command, args in recording:
        if command == "moveTo":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "lineTo":
            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "qCurveTo":
            if args and args[-1] is None:
                for x, y in args[:-1]:
                    current_points.append(Point(x, y, PointType.OFF_CURVE_QUAD))
                continue
            for i, (x, y) in enumerate(args):
                if i < len(args) - 1:
                    current_points.append(Point(x, y, PointType.OFF_CURVE_QUAD))
                else:
                    current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "curveTo":
            x1, y1 = args[0]
            x2, y2 = args[1]
            x3, y3 = args[2]
            current_points.append(Point(x1, y1, PointType.OFF_CURVE_CUBIC))
            current_points.append(Point(x2, y2, PointType.OFF_CURVE_CUBIC))
            current_points.append(Point(x3, y3, PointType.ON_CURVE))

        elif command == "closePath" or command == "endPath":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

    if current_points:
        contours.append(Contour(points=current_points))

    return Outline(contours=contours)


def draw_outline(outline: Outline, pen: AbstractPen) -> None:
    """Replay an outline into a fonttools pen.

    Runs of quadratic control points end at the next on-curve point, or wrap
    around to the contour's first point when the contour ends off-curve.

    Args:
        outline: Outline to draw
        pen: Any fonttools pen (SVGPathPen, RecordingPen, ...)
    """
    for contour in outline.contours:
        points = contour.points
        if not points:
            continue

        if all(p.point_type == PointType.OFF_CURVE_QUAD for p in points):
            pen.qCurveTo(*[p.to_tuple() for p in points], None)
            pen.closePath()
            continue

        first_point = points[0]
        pen.moveTo(first_point.to_tuple())

        i = 1
        while i < len(points):
            point = points[i]

            if point.point_type == PointType.ON_CURVE:
                pen.lineTo(point.to_tuple())
                i += 1

            elif point.point_type == PointType.OFF_CURVE_QUAD:
                quad_points = [point.to_tuple()]
                i += 1

                while i < len(points) and points[i].point_type == PointType.OFF_CURVE_QUAD:
                    quad_points.append(points[i].to_tuple())
                    i += 1

                if i < len(points):
                    quad_points.append(points[i].to_tuple())
                    i += 1
                else:
                    quad_points.append(first_point.to_tuple())

                pen.qCurveTo(*quad_points)

            else:
                p1 = point.to_tuple()
                p2 = points[i + 1].to_tuple() if i + 1 < len(points) else first_point.to_tuple()
                p3 = points[i + 2].to_tuple() if i + 2 < len(points) else first_point.to_tuple()
                pen.curveTo(p1, p2, p3)
                i += 3

        pen.closePath()

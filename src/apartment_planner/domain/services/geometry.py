"""Geometry kernel for floor-plan placement.

Pure functions over Point2D and Polygon values:
- point transforms (translate, rotate)
- oriented rectangle construction
- clamped projection of a point onto a segment
- Separating Axis Theorem overlap test for convex polygons
- ray-casting point-in-polygon containment and boundary tests

Degenerate inputs (zero-length segments or edges) are skipped rather than
divided by; no function here returns NaN for them.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from ..value_objects import Interval, Point2D, Polygon, SegmentProjection

__all__ = [
    "BOUNDARY_TOLERANCE",
    "DEGENERATE_LENGTH",
    "distance",
    "edge_normals",
    "point_in_polygon",
    "point_on_boundary",
    "polygon_center",
    "polygon_extents",
    "polygons_intersect",
    "project_onto_segment",
    "project_polygon",
    "rect_polygon",
    "rotate_point",
    "translate",
]

# Lengths at or below this are treated as zero.
DEGENERATE_LENGTH = 1e-12

# Points this close to a polygon edge count as lying on it.
BOUNDARY_TOLERANCE = 1e-9

_ORIGIN = Point2D(0.0, 0.0)


def distance(a: Point2D, b: Point2D) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def translate(point: Point2D, dx: float, dy: float) -> Point2D:
    return Point2D(x=point.x + dx, y=point.y + dy)


def rotate_point(point: Point2D, degrees: float, origin: Point2D = _ORIGIN) -> Point2D:
    """Rotate a point counter-clockwise about ``origin``.

    Args:
        point: Point to rotate.
        degrees: Rotation angle in degrees.
        origin: Center of rotation.

    Returns:
        The rotated point.
    """
    rad = math.radians(degrees)
    cos = math.cos(rad)
    sin = math.sin(rad)
    dx = point.x - origin.x
    dy = point.y - origin.y
    return Point2D(
        x=origin.x + dx * cos - dy * sin,
        y=origin.y + dx * sin + dy * cos,
    )


def rect_polygon(
    center: Point2D, width: float, depth: float, rotation: float = 0.0
) -> Polygon:
    """Build the four corners of an oriented rectangle.

    Corners are ordered around the rectangle so consecutive corners share
    an edge. Width runs along the local x axis and depth along local y
    before rotation.

    Args:
        center: Rectangle center.
        width: Extent along the local x axis.
        depth: Extent along the local y axis.
        rotation: Rotation in degrees about the center.

    Returns:
        Tuple of four corner points.
    """
    rad = math.radians(rotation)
    cos = math.cos(rad)
    sin = math.sin(rad)
    hw = width / 2
    hd = depth / 2
    corners = ((-hw, -hd), (hw, -hd), (hw, hd), (-hw, hd))
    return tuple(
        Point2D(
            x=center.x + cx * cos - cy * sin,
            y=center.y + cx * sin + cy * cos,
        )
        for cx, cy in corners
    )


def project_onto_segment(
    point: Point2D, start: Point2D, end: Point2D
) -> SegmentProjection | None:
    """Project a point perpendicularly onto a segment, clamped to its extent.

    Args:
        point: Point to project.
        start: Segment start.
        end: Segment end.

    Returns:
        The projection, or None when the segment has zero length.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length <= DEGENERATE_LENGTH:
        return None

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / (length * length)
    t = min(1.0, max(0.0, t))
    projected = Point2D(x=start.x + dx * t, y=start.y + dy * t)
    return SegmentProjection(
        offset=t * length,
        distance=distance(point, projected),
        point=projected,
        length=length,
    )


def edge_normals(polygon: Sequence[Point2D]) -> list[Point2D]:
    """Unit normals of every polygon edge, as candidate separating axes.

    Zero-length edges have no normal and are skipped.
    """
    axes: list[Point2D] = []
    count = len(polygon)
    for i in range(count):
        a = polygon[i]
        b = polygon[(i + 1) % count]
        nx = -(b.y - a.y)
        ny = b.x - a.x
        length = math.hypot(nx, ny)
        if length > DEGENERATE_LENGTH:
            axes.append(Point2D(x=nx / length, y=ny / length))
    return axes


def project_polygon(polygon: Iterable[Point2D], axis: Point2D) -> Interval:
    """Project every vertex onto ``axis`` and return the covered interval."""
    values = [p.x * axis.x + p.y * axis.y for p in polygon]
    return Interval(minimum=min(values), maximum=max(values))


def polygons_intersect(a: Sequence[Point2D], b: Sequence[Point2D]) -> bool:
    """Separating Axis Theorem overlap test for two convex polygons.

    The edge normals of both polygons are the candidate axes. The polygons
    are disjoint as soon as one axis separates their projections; touching
    projections do not separate. The test is symmetric in its arguments.
    """
    for axis in edge_normals(a) + edge_normals(b):
        if not project_polygon(a, axis).overlaps(project_polygon(b, axis)):
            return False
    return True


def point_in_polygon(point: Point2D, polygon: Sequence[Point2D]) -> bool:
    """Ray-casting parity test for point containment.

    Casts a ray towards +x and counts edge crossings. Horizontal edges
    never cross the ray, so no division by zero occurs.
    """
    inside = False
    count = len(polygon)
    j = count - 1
    for i in range(count):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            crossing_x = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < crossing_x:
                inside = not inside
        j = i
    return inside


def point_on_boundary(
    point: Point2D, polygon: Sequence[Point2D], tolerance: float = BOUNDARY_TOLERANCE
) -> bool:
    """Whether a point lies on any edge of a polygon, within ``tolerance``.

    The parity test in point_in_polygon is half-open: points on the min-x or
    min-y edges of an axis-aligned outline count as inside, points on the
    opposite edges as outside. Pair it with this test to treat every edge
    alike.
    """
    count = len(polygon)
    for i in range(count):
        projection = project_onto_segment(point, polygon[i - 1], polygon[i])
        if projection is None:
            if distance(point, polygon[i]) <= tolerance:
                return True
        elif projection.distance <= tolerance:
            return True
    return False


def polygon_extents(points: Iterable[Point2D]) -> tuple[float, float, float, float]:
    """Bounding box of a point set as (min_x, min_y, max_x, max_y)."""
    points = list(points)
    if not points:
        raise ValueError("Cannot compute extents of an empty point set")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def polygon_center(points: Iterable[Point2D]) -> Point2D:
    """Center of the bounding box of a point set."""
    min_x, min_y, max_x, max_y = polygon_extents(points)
    return Point2D(x=(min_x + max_x) / 2, y=(min_y + max_y) / 2)

"""Planar geometry value objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """2D point on the floor plane.

    The second coordinate is the floor-plane depth axis. Furniture items
    call it ``z`` (as the 3D views do); geometry code calls it ``y``.
    Negative values are valid.
    """

    x: float
    y: float


# Ordered vertices, implicitly closed (last vertex connects to first).
Polygon = tuple[Point2D, ...]


@dataclass(frozen=True)
class SegmentProjection:
    """Perpendicular projection of a point onto a line segment.

    Attributes:
        offset: Distance from the segment start to the projected point,
            clamped to [0, length].
        distance: Distance from the original point to the projected point.
        point: The projected point, always on the segment.
        length: Length of the segment projected onto.
    """

    offset: float
    distance: float
    point: Point2D
    length: float


@dataclass(frozen=True)
class Interval:
    """Closed 1D interval, used for polygon projections onto an axis."""

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.maximum < self.minimum:
            raise ValueError("Interval maximum must not be below its minimum")

    def overlaps(self, other: Interval) -> bool:
        """Check whether two intervals share at least one point.

        Touching intervals count as overlapping.
        """
        return not (self.maximum < other.minimum or other.maximum < self.minimum)

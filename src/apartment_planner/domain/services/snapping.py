"""Snapping of world points onto the nearest wall.

Used to attach doors and windows to walls from a calibrated click on a
reference image, and by interactive opening authoring.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..entities import Wall, WallSegment
from ..exceptions import CalibrationRequired
from ..value_objects import (
    Calibration,
    Door,
    HingeSide,
    Opening,
    OpeningDefaults,
    OpeningType,
    Point2D,
    SwingDirection,
    Window,
)
from .geometry import project_onto_segment

__all__ = [
    "WallSnap",
    "snap_opening",
    "snap_reference_point",
    "snap_to_nearest_wall",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WallSnap:
    """Nearest-wall match for a world point.

    Attributes:
        wall: The matched wall.
        segment: The matched segment of that wall.
        offset_along_wall: Offset of the projected point from the wall's
            first vertex.
        offset_along_segment: Offset of the projected point from the
            segment start.
        perpendicular_distance: Distance from the query point to the wall.
        point: The projected point on the wall centerline.
    """

    wall: Wall
    segment: WallSegment
    offset_along_wall: float
    offset_along_segment: float
    perpendicular_distance: float
    point: Point2D


def snap_to_nearest_wall(point: Point2D, walls: Sequence[Wall]) -> WallSnap | None:
    """Find the wall segment closest to ``point``.

    Every segment of every wall is tried. On equal distances the segment
    encountered first in input order wins.

    Args:
        point: World point to snap.
        walls: Candidate walls.

    Returns:
        The closest match, however distant, or None if there are no
        usable wall segments. Judging the distance is left to the caller.
    """
    best: WallSnap | None = None
    for wall in walls:
        for segment in wall.segments():
            projection = project_onto_segment(point, segment.start, segment.end)
            if projection is None:
                continue
            if best is None or projection.distance < best.perpendicular_distance:
                best = WallSnap(
                    wall=wall,
                    segment=segment,
                    offset_along_wall=segment.start_along_parent + projection.offset,
                    offset_along_segment=projection.offset,
                    perpendicular_distance=projection.distance,
                    point=projection.point,
                )
    if best is not None:
        logger.debug(
            f"Snapped ({point.x:.3f}, {point.y:.3f}) to {best.segment.segment_id} "
            f"at offset {best.offset_along_wall:.3f} "
            f"(distance {best.perpendicular_distance:.3f})"
        )
    return best


def snap_reference_point(
    calibration: Calibration | None,
    reference_point: Point2D,
    walls: Sequence[Wall],
) -> WallSnap | None:
    """Calibrate a reference-image point and snap it to the nearest wall.

    Raises:
        CalibrationRequired: If no calibration is available.
    """
    if calibration is None:
        raise CalibrationRequired(
            "A valid calibration is required to snap reference-image points"
        )
    return snap_to_nearest_wall(calibration.to_world(reference_point), walls)


def snap_opening(
    point: Point2D,
    walls: Sequence[Wall],
    opening_type: OpeningType,
    opening_id: str,
    defaults: OpeningDefaults | None = None,
    width: float | None = None,
    height: float | None = None,
    sill_height: float | None = None,
    hinge: HingeSide = HingeSide.LEFT,
    swing: SwingDirection = SwingDirection.IN,
) -> Opening | None:
    """Author an opening centered on the wall point nearest to ``point``.

    A door is positioned by its start edge, so its offset is the snapped
    offset minus half its width; a window is positioned by its center.
    Either is shifted along the wall so it lies within the snapped segment,
    which keeps a click near a corner on the segment that was clicked. A door
    wider than its segment starts at the segment start; such a window is
    centered on the segment.

    Returns:
        The new opening, or None if there is no wall to snap to.
    """
    snap = snap_to_nearest_wall(point, walls)
    if snap is None:
        return None

    defaults = defaults or OpeningDefaults()
    if opening_type is OpeningType.DOOR:
        door_width = width if width is not None else defaults.door_width
        return Door(
            id=opening_id,
            host_wall_id=snap.wall.id,
            width=door_width,
            height=height if height is not None else defaults.door_height,
            offset_along_wall=_fit_start(snap, door_width),
            hinge=hinge,
            swing=swing,
        )

    window_width = width if width is not None else defaults.window_width
    return Window(
        id=opening_id,
        host_wall_id=snap.wall.id,
        width=window_width,
        height=height if height is not None else defaults.window_height,
        center_offset_along_wall=_fit_center(snap, window_width),
        sill_height=(
            sill_height if sill_height is not None else defaults.window_sill_height
        ),
    )


def _fit_start(snap: WallSnap, width: float) -> float:
    """Start offset of an opening centered on ``snap``, kept in its segment."""
    segment = snap.segment
    latest = max(segment.start_along_parent, segment.end_along_parent - width)
    start = snap.offset_along_wall - width / 2
    return min(max(start, segment.start_along_parent), latest)


def _fit_center(snap: WallSnap, width: float) -> float:
    segment = snap.segment
    if width > segment.length:
        return (segment.start_along_parent + segment.end_along_parent) / 2
    return _fit_start(snap, width) + width / 2

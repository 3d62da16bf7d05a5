"""Calibration of reference-image coordinates against world units.

A scanned or photographed floor plan is calibrated by picking two points on
it and stating the real distance between them. The resulting Calibration
maps any reference-space point into world units and back.
"""

from __future__ import annotations

import logging
import math

from ..exceptions import CalibrationDegenerate
from ..value_objects import AxisAlignment, Calibration, Point2D, WorldAxisAssignment

__all__ = [
    "CALIBRATION_EPSILON",
    "calibrate",
    "to_reference",
    "to_world",
]

logger = logging.getLogger(__name__)

# Reference points closer than this cannot produce a stable scale.
CALIBRATION_EPSILON = 1e-9

_ALIGNMENT_ANGLES = {
    AxisAlignment.X: 0.0,
    AxisAlignment.Z: math.pi / 2,
}


def calibrate(
    point_a: Point2D,
    point_b: Point2D,
    known_distance: float,
    origin_world: Point2D = Point2D(0.0, 0.0),
    axes: WorldAxisAssignment | None = None,
) -> Calibration:
    """Derive a calibration from two reference points and a real distance.

    Args:
        point_a: First reference point; maps onto ``origin_world``.
        point_b: Second reference point.
        known_distance: Real-world distance between the two points.
        origin_world: World point that ``point_a`` maps onto.
        axes: Axis convention. Defaults to flipping the image's vertical
            axis with no rotation.

    Returns:
        The derived Calibration.

    Raises:
        CalibrationDegenerate: If the reference points coincide or are
            closer than CALIBRATION_EPSILON.
        ValueError: If ``known_distance`` is not positive.
    """
    axes = axes or WorldAxisAssignment()
    if known_distance <= 0:
        raise ValueError("known_distance must be positive")

    dx = point_b.x - point_a.x
    dy = point_b.y - point_a.y
    reference_distance = math.hypot(dx, dy)
    if reference_distance < CALIBRATION_EPSILON:
        raise CalibrationDegenerate(
            f"Reference points {point_a} and {point_b} are too close to calibrate "
            f"(distance {reference_distance!r})",
            reference_distance=reference_distance,
        )

    rotation = 0.0
    if axes.align is not AxisAlignment.NONE:
        if axes.flip_vertical:
            dy = -dy
        rotation = _ALIGNMENT_ANGLES[axes.align] - math.atan2(dy, dx)

    scale = known_distance / reference_distance
    logger.debug(
        f"Calibrated {reference_distance:.4f} reference units -> {known_distance} "
        f"world units (scale {scale:.6f}, rotation {math.degrees(rotation):.2f} deg)"
    )
    return Calibration(
        reference_a=point_a,
        reference_b=point_b,
        known_distance=known_distance,
        origin_world=origin_world,
        scale=scale,
        rotation=rotation,
        axes=axes,
    )


def to_world(calibration: Calibration, reference_point: Point2D) -> Point2D:
    """Map a reference-space point into world coordinates."""
    return calibration.to_world(reference_point)


def to_reference(calibration: Calibration, world_point: Point2D) -> Point2D:
    """Map a world point into reference space; exact inverse of to_world."""
    return calibration.to_reference(world_point)

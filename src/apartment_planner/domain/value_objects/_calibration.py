"""Reference-image calibration value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from ._geometry import Point2D


class AxisAlignment(str, Enum):
    """World axis that the reference segment A->B is rotated onto.

    Attributes:
        NONE: Keep the reference image's orientation (no rotation).
        X: Rotate so A->B points along world +x.
        Z: Rotate so A->B points along world +z.
    """

    NONE = "none"
    X = "x"
    Z = "z"


@dataclass(frozen=True)
class WorldAxisAssignment:
    """How reference-image axes map onto world axes.

    Attributes:
        flip_vertical: Image rows grow downward; when True the reference
            vertical axis is negated before scaling.
        align: Optional world axis to rotate the A->B direction onto.
    """

    flip_vertical: bool = True
    align: AxisAlignment = AxisAlignment.NONE


@dataclass(frozen=True)
class Calibration:
    """Similarity transform from reference-image space into world space.

    Reference point A maps onto ``origin_world``. Use
    ``services.calibration.calibrate`` to build one from two reference
    points and a known real-world distance.

    Attributes:
        reference_a: First reference point, in reference units (e.g. pixels).
        reference_b: Second reference point, in reference units.
        known_distance: Real-world distance between A and B, in world units.
        origin_world: World point that reference point A maps onto.
        axes: Axis convention between the two spaces.
        scale: World units per reference unit.
        rotation: Rotation applied after the axis flip, in radians.
    """

    reference_a: Point2D
    reference_b: Point2D
    known_distance: float
    origin_world: Point2D
    scale: float
    rotation: float = 0.0
    axes: WorldAxisAssignment = field(default_factory=WorldAxisAssignment)

    def __post_init__(self) -> None:
        if self.known_distance <= 0:
            raise ValueError("known_distance must be positive")
        if self.scale <= 0 or not math.isfinite(self.scale):
            raise ValueError("scale must be a positive finite number")

    def to_world(self, reference_point: Point2D) -> Point2D:
        """Map a reference-space point into world coordinates."""
        dx = reference_point.x - self.reference_a.x
        dy = reference_point.y - self.reference_a.y
        if self.axes.flip_vertical:
            dy = -dy
        cos = math.cos(self.rotation)
        sin = math.sin(self.rotation)
        return Point2D(
            x=self.origin_world.x + (dx * cos - dy * sin) * self.scale,
            y=self.origin_world.y + (dx * sin + dy * cos) * self.scale,
        )

    def to_reference(self, world_point: Point2D) -> Point2D:
        """Map a world point back into reference space (inverse of to_world)."""
        wx = (world_point.x - self.origin_world.x) / self.scale
        wy = (world_point.y - self.origin_world.y) / self.scale
        cos = math.cos(self.rotation)
        sin = math.sin(self.rotation)
        dx = wx * cos + wy * sin
        dy = -wx * sin + wy * cos
        if self.axes.flip_vertical:
            dy = -dy
        return Point2D(
            x=self.reference_a.x + dx,
            y=self.reference_a.y + dy,
        )

"""Value objects for the floor-plan domain.

This module provides immutable data types used throughout the planner.
All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Planar geometry
from ._geometry import (
    Interval,
    Point2D,
    Polygon,
    SegmentProjection,
)

# Openings and resolved wall geometry
from ._openings import (
    BlockedRegion,
    Door,
    DroppedOpening,
    HingeSide,
    Opening,
    OpeningDefaults,
    OpeningType,
    OpeningUnresolvable,
    ResolvedOpening,
    SolidBox,
    SwingDirection,
    WallResolution,
    Window,
)

# Reference-image calibration
from ._calibration import (
    AxisAlignment,
    Calibration,
    WorldAxisAssignment,
)

__all__ = [
    # Geometry
    "Interval",
    "Point2D",
    "Polygon",
    "SegmentProjection",
    # Openings
    "BlockedRegion",
    "Door",
    "DroppedOpening",
    "HingeSide",
    "Opening",
    "OpeningDefaults",
    "OpeningType",
    "OpeningUnresolvable",
    "ResolvedOpening",
    "SolidBox",
    "SwingDirection",
    "WallResolution",
    "Window",
    # Calibration
    "AxisAlignment",
    "Calibration",
    "WorldAxisAssignment",
]

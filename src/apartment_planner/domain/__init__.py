"""Domain layer - floor-plan geometry, openings and placement rules."""

from .entities import FloorPlan, FurnitureItem, Wall, WallKind, WallSegment
from .exceptions import CalibrationDegenerate, CalibrationRequired
from .services import (
    FloorPlanModel,
    OpeningResolver,
    PlacementStore,
    PlacementValidator,
    calibrate,
    is_valid_placement,
    snap_to_nearest_wall,
)
from .value_objects import (
    Calibration,
    Door,
    Opening,
    Point2D,
    SolidBox,
    Window,
)

__all__ = [
    "Calibration",
    "CalibrationDegenerate",
    "CalibrationRequired",
    "Door",
    "FloorPlan",
    "FloorPlanModel",
    "FurnitureItem",
    "Opening",
    "OpeningResolver",
    "PlacementStore",
    "PlacementValidator",
    "Point2D",
    "SolidBox",
    "Wall",
    "WallKind",
    "WallSegment",
    "Window",
    "calibrate",
    "is_valid_placement",
    "snap_to_nearest_wall",
]

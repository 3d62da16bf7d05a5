"""Domain services for floor-plan layout.

This package provides:
- The geometry kernel (transforms, SAT overlap, containment)
- Reference-image calibration and nearest-wall snapping
- Resolution of openings into solid wall geometry
- Placement validation and the interactive placement store
"""

from .calibration import CALIBRATION_EPSILON, calibrate, to_reference, to_world
from .geometry import (
    distance,
    point_in_polygon,
    point_on_boundary,
    polygon_center,
    polygon_extents,
    polygons_intersect,
    project_onto_segment,
    rect_polygon,
    rotate_point,
    translate,
)
from .layout_store import (
    POSITION_SNAP,
    ROTATION_STEP,
    DragSession,
    PlacementStore,
    item_from_record,
    snap_position,
)
from .opening_resolver import (
    MIN_BOX_LENGTH,
    MIN_OPENING_WIDTH,
    OpeningResolver,
    complement_ranges,
    merge_ranges,
)
from .placement import (
    COLLISION_GAP,
    PlacementValidator,
    build_wall_colliders,
    colliders_from_resolution,
    is_valid_placement,
    item_footprint,
    wall_collider,
)
from .plan_model import FloorPlanModel
from .snapping import WallSnap, snap_opening, snap_reference_point, snap_to_nearest_wall

__all__ = [
    # Calibration
    "CALIBRATION_EPSILON",
    "calibrate",
    "to_reference",
    "to_world",
    # Geometry kernel
    "distance",
    "point_in_polygon",
    "point_on_boundary",
    "polygon_center",
    "polygon_extents",
    "polygons_intersect",
    "project_onto_segment",
    "rect_polygon",
    "rotate_point",
    "translate",
    # Placement store
    "POSITION_SNAP",
    "ROTATION_STEP",
    "DragSession",
    "PlacementStore",
    "item_from_record",
    "snap_position",
    # Opening resolution
    "MIN_BOX_LENGTH",
    "MIN_OPENING_WIDTH",
    "OpeningResolver",
    "complement_ranges",
    "merge_ranges",
    # Placement validation
    "COLLISION_GAP",
    "PlacementValidator",
    "build_wall_colliders",
    "colliders_from_resolution",
    "is_valid_placement",
    "item_footprint",
    "wall_collider",
    # Model and snapping
    "FloorPlanModel",
    "WallSnap",
    "snap_opening",
    "snap_reference_point",
    "snap_to_nearest_wall",
]

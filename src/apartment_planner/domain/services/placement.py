"""Placement validation for furniture on a floor plan.

A placement is legal when the item's footprint stays inside the floor
outline, keeps the collision gap to every wall collider, and keeps the
collision gap to every other placed item. Rejection is an expected outcome
of interactive use and is reported as ``False``, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..entities import FurnitureItem, WallKind, WallSegment
from ..value_objects import Point2D, Polygon, WallResolution
from .geometry import (
    point_in_polygon,
    point_on_boundary,
    polygons_intersect,
    rect_polygon,
)

__all__ = [
    "COLLISION_GAP",
    "FLOOR_LEVEL_TOLERANCE",
    "PlacementValidator",
    "build_wall_colliders",
    "colliders_from_resolution",
    "is_valid_placement",
    "item_footprint",
    "wall_collider",
]

logger = logging.getLogger(__name__)

# Default clearance between items, and between items and walls.
COLLISION_GAP = 0.2

# Solid boxes starting at or below this height block furniture.
FLOOR_LEVEL_TOLERANCE = 1e-6


def _contained(point: Point2D, outline: Sequence[Point2D]) -> bool:
    return point_on_boundary(point, outline) or point_in_polygon(point, outline)


def item_footprint(item: FurnitureItem, inflate: float = 0.0) -> Polygon:
    """Footprint rectangle of an item, grown by ``inflate`` on every side."""
    return rect_polygon(
        item.center,
        item.width + 2 * inflate,
        item.depth + 2 * inflate,
        item.rotation,
    )


def wall_collider(
    segment: WallSegment,
    collision_gap: float,
    start: float = 0.0,
    end: float | None = None,
) -> Polygon:
    """Collision rectangle for a stretch of a wall segment.

    The rectangle follows the segment centerline between the local offsets
    ``start`` and ``end`` and is ``thickness + collision_gap`` deep.
    """
    end = segment.length if end is None else end
    a = segment.point_at(start)
    b = segment.point_at(end)
    center = Point2D(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)
    return rect_polygon(
        center,
        end - start,
        segment.thickness + collision_gap,
        segment.direction,
    )


def build_wall_colliders(
    segments: Iterable[WallSegment], collision_gap: float
) -> list[Polygon]:
    """One full-length collider per wall segment."""
    return [wall_collider(segment, collision_gap) for segment in segments]


def colliders_from_resolution(
    resolution: WallResolution,
    collision_gap: float,
    kinds: Iterable[WallKind] = (WallKind.INTERIOR,),
) -> list[Polygon]:
    """Colliders for floor-level wall material of the given wall kinds.

    Only solid boxes that reach the floor block furniture, so doorways are
    passable while the wall below a window still blocks.
    """
    kinds = set(kinds)
    segments = {
        segment.segment_id: segment
        for segment in resolution.segments
        if segment.kind in kinds
    }
    colliders: list[Polygon] = []
    for box in resolution.solid_boxes:
        segment = segments.get(box.segment_id)
        if segment is None or box.bottom > FLOOR_LEVEL_TOLERANCE:
            continue
        colliders.append(wall_collider(segment, collision_gap, box.start, box.end))
    return colliders


class PlacementValidator:
    """Decides whether a furniture placement is legal.

    Attributes:
        collision_gap: Minimum clearance between item surfaces, and between
            an item and a wall collider.
        contain_inflated: When True, the inflated footprint's corners must
            lie inside the floor outline; by default the item's own corners
            are tested, so items may sit flush against the outline.
    """

    def __init__(
        self, collision_gap: float = COLLISION_GAP, contain_inflated: bool = False
    ) -> None:
        if collision_gap < 0:
            raise ValueError("Collision gap must be non-negative")
        self.collision_gap = collision_gap
        self.contain_inflated = contain_inflated

    def is_valid_placement(
        self,
        candidate: FurnitureItem,
        ignore_id: str | None,
        floor_outline: Sequence[Point2D],
        wall_colliders: Iterable[Sequence[Point2D]],
        placed_items: Iterable[FurnitureItem],
    ) -> bool:
        """Check a candidate placement against the outline, walls and items.

        Only the four corners are tested for containment, and a corner on an
        outline edge counts as contained. This is exact for convex outlines
        but can miss a thin outline notch spearing the middle of a large
        item.

        Args:
            candidate: The item at its proposed position and rotation.
            ignore_id: Item id to skip among ``placed_items`` (the
                candidate's own committed state during a move or rotate).
            floor_outline: Floor outline polygon.
            wall_colliders: Collision rectangles of walls.
            placed_items: Items already on the plan.

        Returns:
            True if every check passes, False at the first failure.
        """
        inflate = self.collision_gap / 2
        inflated = item_footprint(candidate, inflate)

        corners = inflated if self.contain_inflated else item_footprint(candidate)
        for corner in corners:
            if not _contained(corner, floor_outline):
                logger.debug(
                    f"Placement of '{candidate.id}' rejected: corner "
                    f"({corner.x:.3f}, {corner.y:.3f}) outside floor outline"
                )
                return False

        for index, collider in enumerate(wall_colliders):
            if polygons_intersect(inflated, collider):
                logger.debug(
                    f"Placement of '{candidate.id}' rejected: hits wall collider {index}"
                )
                return False

        for other in placed_items:
            if other.id == ignore_id:
                continue
            if polygons_intersect(inflated, item_footprint(other, inflate)):
                logger.debug(
                    f"Placement of '{candidate.id}' rejected: overlaps '{other.id}'"
                )
                return False

        return True


def is_valid_placement(
    candidate: FurnitureItem,
    ignore_id: str | None,
    floor_outline: Sequence[Point2D],
    wall_colliders: Iterable[Sequence[Point2D]],
    placed_items: Iterable[FurnitureItem],
    collision_gap: float = COLLISION_GAP,
) -> bool:
    """Functional form of PlacementValidator.is_valid_placement."""
    return PlacementValidator(collision_gap).is_valid_placement(
        candidate, ignore_id, floor_outline, wall_colliders, placed_items
    )

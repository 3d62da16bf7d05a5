"""Resolved floor-plan model.

FloorPlanModel is the single product handed to rendering and placement
layers: segments, solid wall boxes, resolved and dropped openings, and wall
colliders, all derived from one immutable FloorPlan. It is never patched;
any configuration edit builds a new model.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..entities import FloorPlan, FurnitureItem, WallKind, WallSegment
from ..exceptions import CalibrationRequired
from ..value_objects import (
    BlockedRegion,
    DroppedOpening,
    HingeSide,
    OpeningType,
    Point2D,
    Polygon,
    ResolvedOpening,
    SolidBox,
    SwingDirection,
    WallResolution,
)
from .geometry import polygon_center
from .opening_resolver import OpeningResolver
from .placement import PlacementValidator, colliders_from_resolution
from .snapping import WallSnap, snap_opening, snap_reference_point, snap_to_nearest_wall

__all__ = ["FloorPlanModel"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FloorPlanModel:
    """Wholesale-derived geometry of a floor plan.

    Attributes:
        plan: The configuration this model was built from.
        resolution: Walls resolved against their openings.
        wall_colliders: Collision rectangles used by placement validation.
        collider_kinds: Wall kinds that contribute colliders.
    """

    plan: FloorPlan
    resolution: WallResolution
    wall_colliders: tuple[Polygon, ...]
    collider_kinds: tuple[WallKind, ...] = (WallKind.INTERIOR,)

    @classmethod
    def build(
        cls,
        plan: FloorPlan,
        collider_kinds: Iterable[WallKind] = (WallKind.INTERIOR,),
    ) -> FloorPlanModel:
        """Derive the complete model from a floor plan.

        Exterior walls are represented by the floor outline for placement,
        so by default only interior walls produce colliders.
        """
        collider_kinds = tuple(collider_kinds)
        resolver = OpeningResolver(plan.ceiling_height)
        resolution = resolver.resolve(plan.walls, plan.openings)
        colliders = colliders_from_resolution(
            resolution, plan.collision_gap, collider_kinds
        )
        logger.info(
            f"Built floor plan '{plan.name}': {len(resolution.segments)} segments, "
            f"{len(resolution.openings)} openings, {len(resolution.dropped)} dropped, "
            f"{len(colliders)} colliders"
        )
        if plan.calibration_error:
            logger.warning(
                f"Floor plan '{plan.name}' has no usable calibration: "
                f"{plan.calibration_error}"
            )
        return cls(
            plan=plan,
            resolution=resolution,
            wall_colliders=tuple(colliders),
            collider_kinds=collider_kinds,
        )

    def rebuild(self, plan: FloorPlan) -> FloorPlanModel:
        """Build a fresh model for an edited plan, keeping collider settings."""
        return type(self).build(plan, self.collider_kinds)

    @property
    def floor_outline(self) -> Polygon:
        return self.plan.outline

    @property
    def segments(self) -> tuple[WallSegment, ...]:
        return self.resolution.segments

    @property
    def solid_boxes(self) -> tuple[SolidBox, ...]:
        return self.resolution.solid_boxes

    @property
    def resolved_openings(self) -> tuple[ResolvedOpening, ...]:
        return self.resolution.openings

    @property
    def blocked_regions(self) -> tuple[BlockedRegion, ...]:
        return self.resolution.blocked_regions

    @property
    def dropped_openings(self) -> tuple[DroppedOpening, ...]:
        return self.resolution.dropped

    @property
    def floor_center(self) -> Point2D:
        """Center of the floor outline's bounding box."""
        return polygon_center(self.plan.outline)

    def snap(self, point: Point2D) -> WallSnap | None:
        return snap_to_nearest_wall(point, self.plan.walls)

    def snap_reference(self, reference_point: Point2D) -> WallSnap | None:
        """Snap a reference-image point using the plan's calibration.

        Raises:
            CalibrationRequired: If the plan has no calibration. When a
                configured calibration was rejected, the message says why.
        """
        if self.plan.calibration is None and self.plan.calibration_error:
            raise CalibrationRequired(
                f"Calibration is unavailable: {self.plan.calibration_error}"
            )
        return snap_reference_point(
            self.plan.calibration, reference_point, self.plan.walls
        )

    def with_opening_at(
        self,
        point: Point2D,
        opening_type: OpeningType,
        opening_id: str,
        width: float | None = None,
        height: float | None = None,
        sill_height: float | None = None,
        hinge: HingeSide = HingeSide.LEFT,
        swing: SwingDirection = SwingDirection.IN,
    ) -> FloorPlanModel:
        """Author an opening at the wall nearest ``point`` and rebuild.

        Returns:
            A new model including the opening, or this model unchanged if
            the plan has no walls.
        """
        opening = snap_opening(
            point,
            self.plan.walls,
            opening_type,
            opening_id,
            defaults=self.plan.opening_defaults,
            width=width,
            height=height,
            sill_height=sill_height,
            hinge=hinge,
            swing=swing,
        )
        if opening is None:
            return self
        return self.rebuild(self.plan.with_opening(opening))

    def is_valid_placement(
        self,
        candidate: FurnitureItem,
        ignore_id: str | None,
        placed_items: Iterable[FurnitureItem],
        validator: PlacementValidator | None = None,
    ) -> bool:
        """Validate a placement against this model's outline and colliders."""
        validator = validator or PlacementValidator(self.plan.collision_gap)
        return validator.is_valid_placement(
            candidate,
            ignore_id,
            self.plan.outline,
            self.wall_colliders,
            placed_items,
        )

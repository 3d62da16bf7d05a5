"""Domain entities for floor-plan layout."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum

from .value_objects import Calibration, Opening, OpeningDefaults, Point2D, Polygon

# Segments shorter than this (e.g. from duplicate polyline vertices) are dropped.
MIN_SEGMENT_LENGTH = 1e-6


class WallKind(str, Enum):
    """Whether a wall is part of the building envelope or a partition."""

    EXTERIOR = "exterior"
    INTERIOR = "interior"


@dataclass(frozen=True)
class WallSegment:
    """One straight run of a wall polyline.

    Attributes:
        wall_id: Id of the parent wall.
        segment_id: Stable id, ``"{wall_id}:{index}"`` where index is the
            position of the segment's first vertex in the polyline.
        index: Position of the segment's first vertex in the polyline.
        kind: Kind of the parent wall.
        start: First endpoint.
        end: Second endpoint.
        start_along_parent: Cumulative wall length up to ``start``.
        end_along_parent: Cumulative wall length up to ``end``.
        thickness: Wall thickness.
    """

    wall_id: str
    segment_id: str
    index: int
    kind: WallKind
    start: Point2D
    end: Point2D
    start_along_parent: float
    end_along_parent: float
    thickness: float

    @property
    def length(self) -> float:
        return self.end_along_parent - self.start_along_parent

    @property
    def direction(self) -> float:
        """Direction of the segment in degrees from the +x axis."""
        return math.degrees(
            math.atan2(self.end.y - self.start.y, self.end.x - self.start.x)
        )

    @property
    def midpoint(self) -> Point2D:
        return Point2D(
            x=(self.start.x + self.end.x) / 2,
            y=(self.start.y + self.end.y) / 2,
        )

    def point_at(self, offset: float) -> Point2D:
        """Point at a local offset from the segment start."""
        t = offset / self.length
        return Point2D(
            x=self.start.x + (self.end.x - self.start.x) * t,
            y=self.start.y + (self.end.y - self.start.y) * t,
        )


@dataclass(frozen=True)
class Wall:
    """A wall run defined by a polyline of two or more vertices.

    Attributes:
        id: Identifier referenced by openings.
        kind: Exterior or interior.
        polyline: Vertices of the wall centerline.
        thickness: Wall thickness.
    """

    id: str
    kind: WallKind
    polyline: tuple[Point2D, ...]
    thickness: float

    def __post_init__(self) -> None:
        # Accept any sequence; store a tuple so the wall stays hashable.
        object.__setattr__(self, "polyline", tuple(self.polyline))
        if not self.id:
            raise ValueError("Wall id must not be empty")
        if len(self.polyline) < 2:
            raise ValueError("Wall polyline must have at least two vertices")
        if self.thickness <= 0:
            raise ValueError("Wall thickness must be positive")

    def segments(self) -> list[WallSegment]:
        """Explode the polyline into segments, dropping degenerate ones.

        Returns:
            One WallSegment per consecutive vertex pair whose length exceeds
            MIN_SEGMENT_LENGTH, carrying cumulative offsets along the wall.
        """
        segments: list[WallSegment] = []
        along = 0.0
        for i, (start, end) in enumerate(zip(self.polyline, self.polyline[1:])):
            length = math.hypot(end.x - start.x, end.y - start.y)
            if length <= MIN_SEGMENT_LENGTH:
                continue
            segments.append(
                WallSegment(
                    wall_id=self.id,
                    segment_id=f"{self.id}:{i}",
                    index=i,
                    kind=self.kind,
                    start=start,
                    end=end,
                    start_along_parent=along,
                    end_along_parent=along + length,
                    thickness=self.thickness,
                )
            )
            along += length
        return segments

    @property
    def length(self) -> float:
        """Total centerline length of the wall."""
        return sum(segment.length for segment in self.segments())


@dataclass
class FurnitureItem:
    """A piece of furniture placed on the floor plan.

    Only the footprint (width x depth at ``rotation``) participates in
    collision checks; height is carried for display layers.

    Attributes:
        id: Identifier, unique within a placement store.
        name: Display name.
        width: Extent along the item's local x axis.
        depth: Extent along the item's local z axis.
        height: Vertical extent.
        x: Center x coordinate.
        z: Center z coordinate (floor-plane depth axis).
        rotation: Rotation in the floor plane, in degrees.
        color: Display color as a hex string.
    """

    id: str
    name: str
    width: float
    depth: float
    height: float
    x: float = 0.0
    z: float = 0.0
    rotation: float = 0.0
    color: str = "#c46f37"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Furniture id must not be empty")
        if self.width <= 0 or self.depth <= 0 or self.height <= 0:
            raise ValueError("Furniture dimensions must be positive")

    @property
    def center(self) -> Point2D:
        return Point2D(x=self.x, y=self.z)

    def copy_with(self, **changes: float) -> FurnitureItem:
        """Candidate copy of this item with some fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class FloorPlan:
    """Immutable floor-plan configuration.

    Edits never mutate a FloorPlan; the ``with_*`` methods return a new
    value that callers rebuild their resolved model from.

    Attributes:
        outline: Floor outline polygon (at least three vertices).
        walls: All walls, exterior and interior.
        openings: Doors and windows attached to walls.
        ceiling_height: Height of the ceiling above the floor.
        collision_gap: Minimum clearance between items and walls.
        opening_defaults: Dimensions for openings authored without them.
        calibration: Optional reference-image calibration.
        name: Identifier for the plan.
        units: Length unit of every coordinate and dimension.
        calibration_error: Why a configured calibration could not be
            derived, when it could not. The plan is otherwise usable.
    """

    outline: Polygon
    walls: tuple[Wall, ...] = ()
    openings: tuple[Opening, ...] = ()
    ceiling_height: float = 8.0
    collision_gap: float = 0.2
    opening_defaults: OpeningDefaults = field(default_factory=OpeningDefaults)
    calibration: Calibration | None = None
    name: str = "apartment"
    units: str = "feet"
    calibration_error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "outline", tuple(self.outline))
        object.__setattr__(self, "walls", tuple(self.walls))
        object.__setattr__(self, "openings", tuple(self.openings))
        if len(self.outline) < 3:
            raise ValueError("Floor outline must have at least three vertices")
        if self.ceiling_height <= 0:
            raise ValueError("Ceiling height must be positive")
        if self.collision_gap < 0:
            raise ValueError("Collision gap must be non-negative")
        wall_ids = [wall.id for wall in self.walls]
        if len(set(wall_ids)) != len(wall_ids):
            raise ValueError("Wall ids must be unique")
        opening_ids = [opening.id for opening in self.openings]
        if len(set(opening_ids)) != len(opening_ids):
            raise ValueError("Opening ids must be unique")

    def wall_by_id(self, wall_id: str) -> Wall | None:
        for wall in self.walls:
            if wall.id == wall_id:
                return wall
        return None

    def with_openings(self, openings: list[Opening] | tuple[Opening, ...]) -> FloorPlan:
        """Return a copy with the opening list replaced wholesale."""
        return replace(self, openings=tuple(openings))

    def with_opening(self, opening: Opening) -> FloorPlan:
        """Return a copy with ``opening`` added, replacing any with the same id."""
        openings = [op for op in self.openings if op.id != opening.id]
        openings.append(opening)
        return self.with_openings(openings)

    def without_opening(self, opening_id: str) -> FloorPlan:
        """Return a copy without the opening ``opening_id``."""
        return self.with_openings([op for op in self.openings if op.id != opening_id])

    def with_calibration(self, calibration: Calibration | None) -> FloorPlan:
        return replace(self, calibration=calibration, calibration_error=None)

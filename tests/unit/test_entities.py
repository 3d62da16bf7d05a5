"""Unit tests for domain entities.

These tests verify:
- Wall validation and segment explosion with cumulative offsets
- Degenerate polyline steps are dropped without renumbering segments
- FurnitureItem validation and candidate copies
- FloorPlan validation and non-mutating edits
"""

import pytest

from apartment_planner.domain.entities import (
    FloorPlan,
    FurnitureItem,
    Wall,
    WallKind,
)
from apartment_planner.domain.value_objects import Door, Point2D, Window


def _door(opening_id: str = "d1", offset: float = 1.0) -> Door:
    return Door(id=opening_id, host_wall_id="divider", width=3.0, height=6.8, offset_along_wall=offset)


class TestWall:
    """Tests for Wall entity."""

    def test_valid_wall_creation(self, divider_wall: Wall) -> None:
        assert divider_wall.id == "divider"
        assert divider_wall.kind is WallKind.INTERIOR
        assert divider_wall.length == pytest.approx(10.0)

    def test_wall_is_frozen(self, divider_wall: Wall) -> None:
        """Wall should be immutable (frozen dataclass)."""
        with pytest.raises(AttributeError):
            divider_wall.thickness = 1.0  # type: ignore

    def test_polyline_list_is_stored_as_tuple(self) -> None:
        wall = Wall(id="w", kind=WallKind.EXTERIOR, polyline=[Point2D(0, 0), Point2D(1, 0)], thickness=0.3)
        assert isinstance(wall.polyline, tuple)

    def test_rejects_single_vertex(self) -> None:
        with pytest.raises(ValueError, match="two vertices"):
            Wall(id="w", kind=WallKind.EXTERIOR, polyline=(Point2D(0, 0),), thickness=0.3)

    def test_rejects_zero_thickness(self) -> None:
        with pytest.raises(ValueError, match="thickness"):
            Wall(id="w", kind=WallKind.EXTERIOR, polyline=(Point2D(0, 0), Point2D(1, 0)), thickness=0)

    def test_rejects_empty_id(self) -> None:
        with pytest.raises(ValueError):
            Wall(id="", kind=WallKind.EXTERIOR, polyline=(Point2D(0, 0), Point2D(1, 0)), thickness=0.3)


class TestWallSegments:
    """Tests for Wall.segments()."""

    def test_segments_carry_cumulative_offsets(self) -> None:
        wall = Wall(
            id="divider",
            kind=WallKind.INTERIOR,
            polyline=(Point2D(11.73, 2.2), Point2D(11.73, 11.92), Point2D(10.58, 11.92)),
            thickness=0.3,
        )
        first, second = wall.segments()
        assert first.segment_id == "divider:0"
        assert second.segment_id == "divider:1"
        assert first.start_along_parent == 0.0
        assert first.end_along_parent == pytest.approx(9.72)
        assert second.start_along_parent == pytest.approx(9.72)
        assert second.end_along_parent == pytest.approx(10.87)
        assert second.kind is WallKind.INTERIOR
        assert wall.length == pytest.approx(10.87)

    def test_degenerate_steps_are_dropped(self) -> None:
        """Repeated vertices produce no segment; ids keep vertex positions."""
        wall = Wall(
            id="w",
            kind=WallKind.EXTERIOR,
            polyline=(Point2D(0, 0), Point2D(0, 0), Point2D(4, 0), Point2D(4, 3)),
            thickness=0.3,
        )
        segments = wall.segments()
        assert [s.segment_id for s in segments] == ["w:1", "w:2"]
        assert segments[1].start_along_parent == pytest.approx(4.0)

    def test_segment_direction_and_midpoint(self) -> None:
        wall = Wall(id="w", kind=WallKind.EXTERIOR, polyline=(Point2D(0, 0), Point2D(0, 6)), thickness=0.3)
        (segment,) = wall.segments()
        assert segment.direction == pytest.approx(90.0)
        assert segment.midpoint == Point2D(0.0, 3.0)
        assert segment.point_at(1.5) == Point2D(0.0, 1.5)


class TestFurnitureItem:
    """Tests for FurnitureItem entity."""

    def test_defaults(self) -> None:
        item = FurnitureItem(id="chair", name="Chair", width=1.0, depth=1.0, height=1.0)
        assert (item.x, item.z, item.rotation) == (0.0, 0.0, 0.0)
        assert item.center == Point2D(0.0, 0.0)

    @pytest.mark.parametrize("field", ["width", "depth", "height"])
    def test_rejects_non_positive_dimensions(self, field: str) -> None:
        dims = {"width": 1.0, "depth": 1.0, "height": 1.0, field: 0.0}
        with pytest.raises(ValueError):
            FurnitureItem(id="x", name="X", **dims)

    def test_copy_with_leaves_original(self, desk: FurnitureItem) -> None:
        """Candidate copies never change the committed item."""
        moved = desk.copy_with(x=8.0, rotation=90.0)
        assert (moved.x, moved.rotation) == (8.0, 90.0)
        assert (desk.x, desk.rotation) == (2.0, 0.0)


class TestFloorPlan:
    """Tests for FloorPlan aggregate."""

    def test_defaults(self, square_outline) -> None:
        plan = FloorPlan(outline=square_outline)
        assert plan.ceiling_height == 8.0
        assert plan.collision_gap == 0.2
        assert plan.units == "feet"
        assert plan.calibration is None

    def test_rejects_short_outline(self) -> None:
        with pytest.raises(ValueError, match="three vertices"):
            FloorPlan(outline=(Point2D(0, 0), Point2D(1, 0)))

    def test_rejects_duplicate_wall_ids(self, square_outline, divider_wall: Wall) -> None:
        with pytest.raises(ValueError, match="Wall ids"):
            FloorPlan(outline=square_outline, walls=(divider_wall, divider_wall))

    def test_rejects_duplicate_opening_ids(self, square_outline) -> None:
        with pytest.raises(ValueError, match="Opening ids"):
            FloorPlan(outline=square_outline, openings=(_door(), _door()))

    def test_rejects_bad_ceiling(self, square_outline) -> None:
        with pytest.raises(ValueError):
            FloorPlan(outline=square_outline, ceiling_height=0.0)

    def test_wall_by_id(self, square_plan: FloorPlan) -> None:
        assert square_plan.wall_by_id("divider") is not None
        assert square_plan.wall_by_id("garage") is None

    def test_with_opening_returns_new_plan(self, square_plan: FloorPlan) -> None:
        """Edits return a new plan and leave the original untouched."""
        edited = square_plan.with_opening(_door())
        assert [op.id for op in edited.openings] == ["d1"]
        assert square_plan.openings == ()

    def test_with_opening_replaces_same_id(self, square_plan: FloorPlan) -> None:
        plan = square_plan.with_opening(_door(offset=1.0)).with_opening(_door(offset=4.0))
        (door,) = plan.openings
        assert door.offset_along_wall == 4.0

    def test_without_opening(self, square_plan: FloorPlan) -> None:
        window = Window(
            id="w1", host_wall_id="divider", width=2.0, height=3.0,
            center_offset_along_wall=5.0, sill_height=3.0,
        )
        plan = square_plan.with_openings([_door(), window]).without_opening("d1")
        assert [op.id for op in plan.openings] == ["w1"]

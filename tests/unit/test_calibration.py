"""Unit tests for reference-image calibration.

These tests verify:
- Scale derivation from two reference points and a known distance
- Vertical flip of image coordinates
- Optional alignment of the reference segment onto a world axis
- to_reference as the exact inverse of to_world
- Degenerate reference points raise CalibrationDegenerate
"""

import math

import pytest

from apartment_planner.domain.exceptions import CalibrationDegenerate
from apartment_planner.domain.services.calibration import (
    calibrate,
    to_reference,
    to_world,
)
from apartment_planner.domain.value_objects import (
    AxisAlignment,
    Calibration,
    Point2D,
    WorldAxisAssignment,
)


class TestCalibrate:
    """Tests for calibrate()."""

    def test_scale_from_known_distance(self) -> None:
        """Scale is world distance over reference distance."""
        calibration = calibrate(Point2D(0, 0), Point2D(300, 400), 10.0)
        assert calibration.scale == pytest.approx(10.0 / 500.0)
        assert calibration.rotation == 0.0

    def test_reference_a_maps_onto_origin(self) -> None:
        """Reference point A lands on the configured world origin."""
        calibration = calibrate(
            Point2D(120, 80), Point2D(220, 80), 5.0, origin_world=Point2D(3, -2)
        )
        world = calibration.to_world(Point2D(120, 80))
        assert world.x == pytest.approx(3.0)
        assert world.y == pytest.approx(-2.0)

    def test_reference_b_lands_at_known_distance(self) -> None:
        """Reference point B is known_distance from the world origin."""
        calibration = calibrate(Point2D(10, 10), Point2D(70, 90), 24.08)
        a = calibration.to_world(Point2D(10, 10))
        b = calibration.to_world(Point2D(70, 90))
        assert math.hypot(b.x - a.x, b.y - a.y) == pytest.approx(24.08)

    def test_vertical_axis_is_flipped_by_default(self) -> None:
        """Image rows grow downward, so +y in the image is -z in the world."""
        calibration = calibrate(Point2D(0, 0), Point2D(100, 0), 10.0)
        world = calibration.to_world(Point2D(0, 50))
        assert world.x == pytest.approx(0.0)
        assert world.y == pytest.approx(-5.0)

    def test_no_flip(self) -> None:
        """Without the flip, image and world vertical axes agree."""
        calibration = calibrate(
            Point2D(0, 0),
            Point2D(100, 0),
            10.0,
            axes=WorldAxisAssignment(flip_vertical=False),
        )
        assert calibration.to_world(Point2D(0, 50)).y == pytest.approx(5.0)

    def test_align_to_x_axis(self) -> None:
        """A diagonal reference segment can be rotated onto world +x."""
        calibration = calibrate(
            Point2D(0, 0),
            Point2D(30, 40),
            5.0,
            axes=WorldAxisAssignment(align=AxisAlignment.X),
        )
        world = calibration.to_world(Point2D(30, 40))
        assert world.x == pytest.approx(5.0)
        assert world.y == pytest.approx(0.0, abs=1e-9)

    def test_align_to_z_axis(self) -> None:
        """A horizontal reference segment can be rotated onto world +z."""
        calibration = calibrate(
            Point2D(0, 0),
            Point2D(100, 0),
            10.0,
            axes=WorldAxisAssignment(align=AxisAlignment.Z),
        )
        world = calibration.to_world(Point2D(100, 0))
        assert world.x == pytest.approx(0.0, abs=1e-9)
        assert world.y == pytest.approx(10.0)

    def test_coincident_points_raise(self) -> None:
        """Identical reference points cannot define a scale."""
        with pytest.raises(CalibrationDegenerate) as exc_info:
            calibrate(Point2D(5, 5), Point2D(5, 5), 10.0)
        assert exc_info.value.reference_distance == 0.0

    def test_degenerate_is_a_value_error(self) -> None:
        """CalibrationDegenerate can be caught as a ValueError."""
        with pytest.raises(ValueError):
            calibrate(Point2D(1, 1), Point2D(1, 1 + 1e-12), 10.0)

    @pytest.mark.parametrize("known", [0.0, -3.0])
    def test_non_positive_distance_raises(self, known: float) -> None:
        """The known distance must be positive."""
        with pytest.raises(ValueError, match="known_distance"):
            calibrate(Point2D(0, 0), Point2D(10, 0), known)


class TestRoundTrip:
    """Tests for the world/reference inverse pair."""

    @pytest.mark.parametrize(
        "axes",
        [
            WorldAxisAssignment(),
            WorldAxisAssignment(flip_vertical=False),
            WorldAxisAssignment(align=AxisAlignment.X),
            WorldAxisAssignment(flip_vertical=False, align=AxisAlignment.Z),
        ],
    )
    def test_to_reference_inverts_to_world(self, axes: WorldAxisAssignment) -> None:
        """Mapping to world and back returns the original reference point."""
        calibration = calibrate(
            Point2D(35, 410),
            Point2D(612, 388),
            24.08,
            origin_world=Point2D(1.5, -2.0),
            axes=axes,
        )
        for point in (Point2D(0, 0), Point2D(512.25, 97.5), Point2D(-40, 900)):
            back = to_reference(calibration, to_world(calibration, point))
            assert back.x == pytest.approx(point.x)
            assert back.y == pytest.approx(point.y)


class TestCalibrationValue:
    """Tests for Calibration validation."""

    def test_rejects_non_positive_scale(self) -> None:
        """A Calibration needs a positive scale."""
        with pytest.raises(ValueError, match="scale"):
            Calibration(
                reference_a=Point2D(0, 0),
                reference_b=Point2D(1, 0),
                known_distance=1.0,
                origin_world=Point2D(0, 0),
                scale=0.0,
            )

    def test_calibration_is_frozen(self) -> None:
        """Calibrations are immutable."""
        calibration = calibrate(Point2D(0, 0), Point2D(10, 0), 1.0)
        with pytest.raises(AttributeError):
            calibration.scale = 2.0  # type: ignore[misc]

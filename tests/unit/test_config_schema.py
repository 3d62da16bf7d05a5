"""Unit tests for configuration schema and loader.

These tests verify:
- Valid configurations are loaded correctly
- Points accept object and pair notation, with y as an alias for z
- Openings are discriminated on their type
- Missing required fields and unknown fields are rejected (extra="forbid")
- Schema version pattern and supported version validation
- Duplicate wall and opening ids are rejected
- Loader error handling (file not found, JSON parse errors, validation)
- Loading straight into a FloorPlan, tolerating an unusable calibration
"""

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from apartment_planner.application.config import (
    SUPPORTED_VERSIONS,
    CalibrationConfig,
    ConfigError,
    DoorConfig,
    FloorPlanConfig,
    PointConfig,
    WallConfig,
    WindowConfig,
    load_config,
    load_config_from_dict,
    load_floor_plan,
)
from apartment_planner.domain.entities import WallKind
from apartment_planner.domain.value_objects import AxisAlignment, HingeSide, SwingDirection

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"

SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10]]


def _plan(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "outline": SQUARE,
        "walls": [{"id": "divider", "kind": "interior", "polyline": [[5, 0], [5, 10]]}],
    }
    data.update(overrides)
    return data


class TestPointConfig:
    """Tests for PointConfig model."""

    def test_object_notation(self) -> None:
        point = PointConfig.model_validate({"x": 1.5, "z": -2})
        assert (point.x, point.z) == (1.5, -2.0)

    def test_y_is_accepted_for_z(self) -> None:
        point = PointConfig.model_validate({"x": 1, "y": 4})
        assert point.z == 4.0

    def test_pair_notation(self) -> None:
        point = PointConfig.model_validate([3, 7])
        assert (point.x, point.z) == (3.0, 7.0)

    def test_rejects_triples(self) -> None:
        with pytest.raises(PydanticValidationError):
            PointConfig.model_validate([1, 2, 3])


class TestWallConfig:
    """Tests for WallConfig model."""

    def test_default_thickness(self) -> None:
        wall = WallConfig.model_validate(
            {"id": "w", "kind": "exterior", "polyline": [[0, 0], [4, 0]]}
        )
        assert wall.kind is WallKind.EXTERIOR
        assert wall.thickness == 0.3

    def test_thickness_alias(self) -> None:
        wall = WallConfig.model_validate(
            {"id": "w", "kind": "interior", "polyline": [[0, 0], [4, 0]], "thicknessIn": 0.5}
        )
        assert wall.thickness == 0.5

    def test_keyword_construction(self) -> None:
        wall = WallConfig(id="w", kind=WallKind.INTERIOR, polyline=[[0, 0], [1, 0]], thickness=0.4)
        assert wall.thickness == 0.4

    def test_rejects_single_vertex(self) -> None:
        with pytest.raises(PydanticValidationError):
            WallConfig.model_validate({"id": "w", "kind": "interior", "polyline": [[0, 0]]})

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(PydanticValidationError):
            WallConfig.model_validate(
                {"id": "w", "kind": "curtain", "polyline": [[0, 0], [1, 0]]}
            )

    def test_rejects_zero_thickness(self) -> None:
        with pytest.raises(PydanticValidationError):
            WallConfig.model_validate(
                {"id": "w", "kind": "interior", "polyline": [[0, 0], [1, 0]], "thicknessIn": 0}
            )


class TestOpeningConfig:
    """Tests for door and window configuration."""

    def test_openings_are_discriminated(self) -> None:
        config = FloorPlanConfig.model_validate(
            _plan(
                openings=[
                    {"type": "door", "id": "d", "hostWallId": "divider",
                     "offsetAlongWallIn": 2, "hinge": "right", "swing": "out"},
                    {"type": "window", "id": "w", "hostWallId": "divider",
                     "centerOffsetAlongWallIn": 6, "sillHeightIn": 2.5},
                ]
            )
        )
        door, window = config.openings
        assert isinstance(door, DoorConfig)
        assert door.hinge is HingeSide.RIGHT
        assert door.swing is SwingDirection.OUT
        assert door.width is None
        assert isinstance(window, WindowConfig)
        assert window.center_offset_along_wall == 6.0
        assert window.sill_height == 2.5

    def test_window_offset_alias(self) -> None:
        window = WindowConfig.model_validate(
            {"type": "window", "id": "w", "hostWallId": "x", "offsetAlongWallIn": 4}
        )
        assert window.center_offset_along_wall == 4.0

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(PydanticValidationError):
            FloorPlanConfig.model_validate(
                _plan(openings=[{"type": "skylight", "id": "s", "hostWallId": "divider"}])
            )

    def test_rejects_negative_width(self) -> None:
        with pytest.raises(PydanticValidationError):
            DoorConfig.model_validate(
                {"type": "door", "id": "d", "hostWallId": "x", "offsetAlongWallIn": 1, "widthIn": -3}
            )

    def test_unknown_host_wall_is_accepted(self) -> None:
        """Unknown walls are reported during resolution, not by the schema."""
        config = FloorPlanConfig.model_validate(
            _plan(openings=[{"type": "door", "id": "d", "hostWallId": "garage", "offsetAlongWallIn": 1}])
        )
        assert config.openings[0].host_wall_id == "garage"


class TestCalibrationConfig:
    """Tests for CalibrationConfig model."""

    def test_defaults(self) -> None:
        calibration = CalibrationConfig.model_validate(
            {"referencePointA": [0, 0], "referencePointB": [100, 0], "knownRealDistance": 10}
        )
        assert calibration.flip_vertical is True
        assert calibration.align is AxisAlignment.NONE
        assert (calibration.origin_world.x, calibration.origin_world.z) == (0.0, 0.0)

    def test_rejects_non_positive_distance(self) -> None:
        with pytest.raises(PydanticValidationError):
            CalibrationConfig.model_validate(
                {"referencePointA": [0, 0], "referencePointB": [100, 0], "knownRealDistance": 0}
            )


class TestFloorPlanConfig:
    """Tests for the root FloorPlanConfig model."""

    def test_minimal(self) -> None:
        config = FloorPlanConfig.model_validate({"outline": SQUARE})
        assert config.schema_version == "1.0"
        assert config.units == "feet"
        assert config.ceiling_height == 8.0
        assert config.collision_gap == 0.2
        assert config.walls == []
        assert config.opening_defaults.door.width == 3.0
        assert config.opening_defaults.window.sill_height == 3.0
        assert config.calibration is None

    def test_supported_versions(self) -> None:
        assert "1.0" in SUPPORTED_VERSIONS
        assert "1.1" in SUPPORTED_VERSIONS

    def test_rejects_unsupported_version(self) -> None:
        with pytest.raises(PydanticValidationError, match="Unsupported schema version"):
            FloorPlanConfig.model_validate(_plan(schemaVersion="2.0"))

    def test_rejects_malformed_version(self) -> None:
        with pytest.raises(PydanticValidationError):
            FloorPlanConfig.model_validate(_plan(schemaVersion="v1"))

    def test_rejects_short_outline(self) -> None:
        with pytest.raises(PydanticValidationError):
            FloorPlanConfig.model_validate({"outline": [[0, 0], [1, 0]]})

    def test_rejects_duplicate_wall_ids(self) -> None:
        wall = {"id": "a", "kind": "interior", "polyline": [[0, 0], [1, 0]]}
        with pytest.raises(PydanticValidationError, match="Duplicate wall ids: a"):
            FloorPlanConfig.model_validate(_plan(walls=[wall, wall]))

    def test_rejects_duplicate_opening_ids(self) -> None:
        door = {"type": "door", "id": "d", "hostWallId": "divider", "offsetAlongWallIn": 1}
        with pytest.raises(PydanticValidationError, match="Duplicate opening ids: d"):
            FloorPlanConfig.model_validate(_plan(openings=[door, door]))

    def test_rejects_unknown_units(self) -> None:
        with pytest.raises(PydanticValidationError):
            FloorPlanConfig.model_validate(_plan(units="meters"))


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_minimal_config(self) -> None:
        config = load_config(FIXTURES_PATH / "minimal.json")
        assert len(config.outline) == 4
        assert config.walls == []

    def test_load_apartment_config(self) -> None:
        config = load_config(FIXTURES_PATH / "apartment.json")
        assert config.schema_version == "1.1"
        assert len(config.walls) == 8
        assert len(config.openings) == 5
        assert config.calibration is not None
        assert config.calibration.known_distance == 24.08

    def test_file_not_found(self) -> None:
        """Non-existent file should raise ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "nonexistent.json")

        error = exc_info.value
        assert error.error_type == "file_not_found"
        assert "Config file not found" in error.message

    def test_invalid_json(self) -> None:
        """Invalid JSON should raise ConfigError with line/column info."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "invalid_json.json")

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert "Invalid JSON" in error.message
        assert "line" in error.details[0]

    def test_unknown_field_rejected(self) -> None:
        """Unknown fields should cause validation error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "unknown_field.json")

        error = exc_info.value
        assert error.error_type == "validation"
        assert any(d["path"] == "walls[0].colour" for d in error.details)

    def test_directory_is_a_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.error_type in {"file_read_error", "permission_denied"}


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_valid_dict(self) -> None:
        config = load_config_from_dict(_plan(name="studio"))
        assert config.name == "studio"
        assert config.walls[0].id == "divider"

    def test_invalid_dict(self) -> None:
        """Invalid dictionary should raise ConfigError with JSON paths."""
        data = _plan(walls=[{"id": "w", "kind": "interior", "polyline": [[0, 0], [1, 0]], "thicknessIn": -1}])
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(data)

        error = exc_info.value
        assert error.error_type == "validation"
        assert "walls[0].thicknessIn" in error.message
        assert error.path is None


class TestLoadFloorPlan:
    """Tests for load_floor_plan function."""

    def test_loads_domain_plan(self) -> None:
        plan = load_floor_plan(FIXTURES_PATH / "apartment.json")
        assert plan.name == "one-bedroom"
        assert plan.calibration is not None
        assert plan.calibration_error is None

    def test_degenerate_calibration_does_not_fail_load(self, tmp_path: Path) -> None:
        """A calibration whose points coincide is recorded, not raised."""
        data = _plan(
            calibration={
                "referencePointA": [40, 40],
                "referencePointB": [40, 40],
                "knownRealDistance": 3,
            }
        )
        config_file = tmp_path / "plan.json"
        config_file.write_text(json.dumps(data), encoding="utf-8")

        plan = load_floor_plan(config_file)
        assert plan.calibration is None
        assert plan.calibration_error is not None
        assert [wall.id for wall in plan.walls] == ["divider"]

    def test_missing_file_raises_config_error(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_floor_plan(FIXTURES_PATH / "nonexistent.json")
        assert exc_info.value.error_type == "file_not_found"

"""Configuration schema and loading system for floor plans.

This package provides JSON-based configuration loading and validation for
floor plans: Pydantic models for the declarative configuration shape, a
loader with comprehensive error handling, and adapters into the domain.

Example:
    >>> from pathlib import Path
    >>> from apartment_planner.application.config import (
    ...     ConfigError, config_to_floor_plan, load_config,
    ... )
    >>>
    >>> try:
    ...     plan = config_to_floor_plan(load_config(Path("apartment.json")))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from apartment_planner.application.config.adapter import (
    config_to_calibration,
    config_to_floor_plan,
    config_to_opening_defaults,
    config_to_openings,
    config_to_wall,
)
from apartment_planner.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
    load_floor_plan,
)
from apartment_planner.application.config.schema import (
    SUPPORTED_VERSIONS,
    CalibrationConfig,
    DoorConfig,
    DoorDefaultsConfig,
    FloorPlanConfig,
    OpeningConfig,
    OpeningDefaultsConfig,
    PointConfig,
    WallConfig,
    WindowConfig,
    WindowDefaultsConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CalibrationConfig",
    "ConfigError",
    "DoorConfig",
    "DoorDefaultsConfig",
    "FloorPlanConfig",
    "OpeningConfig",
    "OpeningDefaultsConfig",
    "PointConfig",
    "WallConfig",
    "WindowConfig",
    "WindowDefaultsConfig",
    "config_to_calibration",
    "config_to_floor_plan",
    "config_to_opening_defaults",
    "config_to_openings",
    "config_to_wall",
    "load_config",
    "load_config_from_dict",
    "load_floor_plan",
]

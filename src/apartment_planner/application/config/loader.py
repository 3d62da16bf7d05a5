"""Floor-plan configuration loader with comprehensive error handling.

This module loads and parses JSON floor-plan configuration files. It turns
file system errors, JSON parsing errors and Pydantic validation errors into
a single ConfigError with clear, actionable messages.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from apartment_planner.application.config.adapter import config_to_floor_plan
from apartment_planner.application.config.schema import FloorPlanConfig
from apartment_planner.domain.entities import FloorPlan


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON,
            validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("walls", 0, "polyline"))
        'walls[0].polyline'
        >>> _format_json_path(("openings", 2, "door", "hostWallId"))
        'openings[2].door.hostWallId'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message dictionaries."""
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Floor plan configuration validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> FloorPlanConfig:
    try:
        return FloorPlanConfig.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> FloorPlanConfig:
    """Load and validate a floor-plan configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated FloorPlanConfig instance

    Raises:
        ConfigError: If the file cannot be loaded or validated. The
            error_type attribute indicates the specific error category.

    Example:
        >>> try:
        ...     config = load_config(Path("apartment.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> FloorPlanConfig:
    """Load and validate a floor-plan configuration from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)


def load_floor_plan(path: Path) -> FloorPlan:
    """Load a configuration file straight into a domain FloorPlan.

    An unusable calibration record does not fail the load; see
    ``config_to_floor_plan``.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    return config_to_floor_plan(load_config(path))

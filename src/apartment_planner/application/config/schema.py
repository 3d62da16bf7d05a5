"""Pydantic models for the declarative floor-plan configuration.

Field names follow the published configuration shape (``hostWallId``,
``widthIn``, ``thicknessIn`` ...); the snake_case attribute names are
accepted as well. Openings are a discriminated union on ``type``.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from apartment_planner.domain.entities import WallKind
from apartment_planner.domain.value_objects import (
    AxisAlignment,
    HingeSide,
    SwingDirection,
)

# Supported schema versions for configuration files
# Version 1.0: Outline, walls, openings and opening defaults
# Version 1.1: Reference-image calibration record
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class PointConfig(BaseModel):
    """A point as ``{"x": .., "z": ..}``, ``{"x": .., "y": ..}`` or ``[x, z]``."""

    model_config = ConfigDict(extra="forbid")

    x: float
    z: float = Field(validation_alias=AliasChoices("z", "y"))

    @model_validator(mode="before")
    @classmethod
    def accept_pairs(cls, data: Any) -> Any:
        """Allow a point to be written as a two-element list."""
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError("Point lists must have exactly two coordinates")
            return {"x": data[0], "z": data[1]}
        return data


class WallConfig(BaseModel):
    """Configuration for one wall.

    Attributes:
        id: Wall identifier referenced by openings
        kind: exterior or interior
        polyline: Centerline vertices (at least two)
        thickness: Wall thickness (``thicknessIn``)
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: WallKind
    polyline: list[PointConfig] = Field(..., min_length=2)
    thickness: float = Field(
        default=0.3,
        gt=0,
        validation_alias=AliasChoices("thicknessIn", "thickness"),
    )


class DoorConfig(BaseModel):
    """Configuration for a door, positioned by its start edge.

    Width and height fall back to the door defaults when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    type: Literal["door"]
    id: str = Field(..., min_length=1)
    host_wall_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("hostWallId", "host_wall_id")
    )
    offset_along_wall: float = Field(
        ..., validation_alias=AliasChoices("offsetAlongWallIn", "offset_along_wall")
    )
    width: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("widthIn", "width")
    )
    height: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("heightIn", "height")
    )
    hinge: HingeSide = HingeSide.LEFT
    swing: SwingDirection = SwingDirection.IN


class WindowConfig(BaseModel):
    """Configuration for a window, positioned by its center.

    A window's ``offsetAlongWallIn`` is read as its center offset.
    Dimensions fall back to the window defaults when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    type: Literal["window"]
    id: str = Field(..., min_length=1)
    host_wall_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("hostWallId", "host_wall_id")
    )
    center_offset_along_wall: float = Field(
        ...,
        validation_alias=AliasChoices(
            "centerOffsetAlongWallIn",
            "offsetAlongWallIn",
            "center_offset_along_wall",
        ),
    )
    width: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("widthIn", "width")
    )
    height: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("heightIn", "height")
    )
    sill_height: float | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("sillHeightIn", "sill_height")
    )


OpeningConfig = Annotated[DoorConfig | WindowConfig, Field(discriminator="type")]


class DoorDefaultsConfig(BaseModel):
    """Default door dimensions."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=3.0, gt=0, validation_alias=AliasChoices("widthIn", "width")
    )
    height: float = Field(
        default=6.8, gt=0, validation_alias=AliasChoices("heightIn", "height")
    )


class WindowDefaultsConfig(BaseModel):
    """Default window dimensions."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=3.0, gt=0, validation_alias=AliasChoices("widthIn", "width")
    )
    height: float = Field(
        default=4.0, gt=0, validation_alias=AliasChoices("heightIn", "height")
    )
    sill_height: float = Field(
        default=3.0, ge=0, validation_alias=AliasChoices("sillHeightIn", "sill_height")
    )


class OpeningDefaultsConfig(BaseModel):
    """Default opening dimensions by opening type."""

    model_config = ConfigDict(extra="forbid")

    door: DoorDefaultsConfig = Field(default_factory=DoorDefaultsConfig)
    window: WindowDefaultsConfig = Field(default_factory=WindowDefaultsConfig)


class CalibrationConfig(BaseModel):
    """Reference-image calibration record.

    Attributes:
        reference_a: First reference point in image coordinates
        reference_b: Second reference point in image coordinates
        known_distance: Real-world distance between the reference points
        origin_world: World point that reference point A maps onto
        flip_vertical: Whether the image's vertical axis points down
        align: World axis to rotate the A->B direction onto
    """

    model_config = ConfigDict(extra="forbid")

    reference_a: PointConfig = Field(
        ..., validation_alias=AliasChoices("referencePointA", "reference_a")
    )
    reference_b: PointConfig = Field(
        ..., validation_alias=AliasChoices("referencePointB", "reference_b")
    )
    known_distance: float = Field(
        ..., gt=0, validation_alias=AliasChoices("knownRealDistance", "known_distance")
    )
    origin_world: PointConfig = Field(
        default_factory=lambda: PointConfig(x=0.0, z=0.0),
        validation_alias=AliasChoices("originWorld", "origin_world"),
    )
    flip_vertical: bool = Field(
        default=True, validation_alias=AliasChoices("flipVertical", "flip_vertical")
    )
    align: AxisAlignment = AxisAlignment.NONE


class FloorPlanConfig(BaseModel):
    """Root configuration model for a floor plan.

    Openings may name walls that do not exist; such openings are dropped
    (and reported) when the plan is resolved rather than rejected here.

    Attributes:
        schema_version: Configuration schema version
        name: Identifier for the plan
        units: Length unit of every coordinate and dimension
        ceiling_height: Ceiling height above the floor
        collision_gap: Minimum clearance between items and walls
        outline: Floor outline vertices (at least three)
        walls: Exterior and interior walls
        opening_defaults: Dimensions for openings that omit them
        openings: Doors and windows
        calibration: Optional reference-image calibration
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        default="1.0",
        pattern=r"^\d+\.\d+$",
        validation_alias=AliasChoices("schemaVersion", "schema_version"),
    )
    name: str = "apartment"
    units: Literal["feet", "inches"] = "feet"
    ceiling_height: float = Field(
        default=8.0, gt=0, validation_alias=AliasChoices("ceilingHeight", "ceiling_height")
    )
    collision_gap: float = Field(
        default=0.2, ge=0, validation_alias=AliasChoices("collisionGap", "collision_gap")
    )
    outline: list[PointConfig] = Field(..., min_length=3)
    walls: list[WallConfig] = Field(default_factory=list)
    opening_defaults: OpeningDefaultsConfig = Field(
        default_factory=OpeningDefaultsConfig,
        validation_alias=AliasChoices("openingDefaults", "opening_defaults"),
    )
    openings: list[OpeningConfig] = Field(default_factory=list)
    calibration: CalibrationConfig | None = None

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate that the schema version is supported."""
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema version '{v}'. "
                f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "FloorPlanConfig":
        """Reject duplicate wall ids and duplicate opening ids."""
        wall_ids = [wall.id for wall in self.walls]
        duplicates = sorted({i for i in wall_ids if wall_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate wall ids: {', '.join(duplicates)}")
        opening_ids = [opening.id for opening in self.openings]
        duplicates = sorted({i for i in opening_ids if opening_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate opening ids: {', '.join(duplicates)}")
        return self

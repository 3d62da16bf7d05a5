"""Conversion of floor-plan configuration into domain objects.

These functions transform validated Pydantic configuration models into the
domain-level FloorPlan, Wall, Opening and Calibration values.
"""

from apartment_planner.application.config.schema import (
    CalibrationConfig,
    DoorConfig,
    FloorPlanConfig,
    OpeningDefaultsConfig,
    PointConfig,
    WallConfig,
)
from apartment_planner.domain.entities import FloorPlan, Wall
from apartment_planner.domain.exceptions import CalibrationDegenerate
from apartment_planner.domain.services.calibration import calibrate
from apartment_planner.domain.value_objects import (
    Calibration,
    Door,
    Opening,
    OpeningDefaults,
    Point2D,
    Window,
    WorldAxisAssignment,
)


def _point(config: PointConfig) -> Point2D:
    return Point2D(x=config.x, y=config.z)


def config_to_opening_defaults(config: OpeningDefaultsConfig) -> OpeningDefaults:
    return OpeningDefaults(
        door_width=config.door.width,
        door_height=config.door.height,
        window_width=config.window.width,
        window_height=config.window.height,
        window_sill_height=config.window.sill_height,
    )


def config_to_wall(config: WallConfig) -> Wall:
    return Wall(
        id=config.id,
        kind=config.kind,
        polyline=tuple(_point(p) for p in config.polyline),
        thickness=config.thickness,
    )


def config_to_openings(config: FloorPlanConfig) -> list[Opening]:
    """Convert configured openings, filling omitted dimensions from defaults.

    Host wall ids are not checked here; unknown walls are reported when
    the plan is resolved.
    """
    defaults = config_to_opening_defaults(config.opening_defaults)
    openings: list[Opening] = []
    for item in config.openings:
        if isinstance(item, DoorConfig):
            openings.append(
                Door(
                    id=item.id,
                    host_wall_id=item.host_wall_id,
                    width=item.width or defaults.door_width,
                    height=item.height or defaults.door_height,
                    offset_along_wall=item.offset_along_wall,
                    hinge=item.hinge,
                    swing=item.swing,
                )
            )
        else:
            openings.append(
                Window(
                    id=item.id,
                    host_wall_id=item.host_wall_id,
                    width=item.width or defaults.window_width,
                    height=item.height or defaults.window_height,
                    center_offset_along_wall=item.center_offset_along_wall,
                    sill_height=(
                        item.sill_height
                        if item.sill_height is not None
                        else defaults.window_sill_height
                    ),
                )
            )
    return openings


def config_to_calibration(config: CalibrationConfig | None) -> Calibration | None:
    """Derive the calibration described by a calibration record.

    Returns:
        None when no calibration record is configured.

    Raises:
        CalibrationDegenerate: If the reference points coincide.
    """
    if config is None:
        return None
    return calibrate(
        _point(config.reference_a),
        _point(config.reference_b),
        config.known_distance,
        origin_world=_point(config.origin_world),
        axes=WorldAxisAssignment(
            flip_vertical=config.flip_vertical,
            align=config.align,
        ),
    )


def config_to_floor_plan(config: FloorPlanConfig) -> FloorPlan:
    """Convert a validated configuration into an immutable FloorPlan.

    A calibration record whose reference points cannot define a scale does
    not stop the plan from loading. The plan is built without a calibration
    and keeps the reason in ``calibration_error``; walls, openings and
    placement work as usual while reference-point snapping is refused.

    Example:
        >>> plan = config_to_floor_plan(load_config(Path("apartment.json")))
        >>> model = FloorPlanModel.build(plan)
    """
    calibration_error = None
    try:
        calibration = config_to_calibration(config.calibration)
    except CalibrationDegenerate as e:
        calibration = None
        calibration_error = str(e)

    return FloorPlan(
        outline=tuple(_point(p) for p in config.outline),
        walls=tuple(config_to_wall(wall) for wall in config.walls),
        openings=tuple(config_to_openings(config)),
        ceiling_height=config.ceiling_height,
        collision_gap=config.collision_gap,
        opening_defaults=config_to_opening_defaults(config.opening_defaults),
        calibration=calibration,
        name=config.name,
        units=config.units,
        calibration_error=calibration_error,
    )

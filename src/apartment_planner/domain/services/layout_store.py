"""Interactive furniture placement under the validator's gate.

PlacementStore owns the placed FurnitureItems. Adding, moving and rotating
an item validates the candidate first and commits only when it is legal;
removal is always allowed. DragSession turns a stream of pointer positions
into independent move attempts.
"""

from __future__ import annotations

import logging
import math
import threading
import uuid
from collections.abc import Mapping
from typing import Any

from ..entities import FurnitureItem
from ..value_objects import Point2D
from .placement import PlacementValidator
from .plan_model import FloorPlanModel

__all__ = [
    "DragSession",
    "POSITION_SNAP",
    "PlacementStore",
    "ROTATION_STEP",
    "item_from_record",
    "snap_position",
]

logger = logging.getLogger(__name__)

# Grid step that dragged positions snap to.
POSITION_SNAP = 0.25

# Rotation applied by a single rotate action, in degrees.
ROTATION_STEP = 90.0


def snap_position(value: float, step: float = POSITION_SNAP) -> float:
    """Round ``value`` to the nearest multiple of ``step`` (halves round up)."""
    return math.floor(value / step + 0.5) * step


def item_from_record(
    record: Mapping[str, Any], default_center: Point2D | None = None
) -> FurnitureItem | None:
    """Build a FurnitureItem from a loosely shaped record.

    Older records store the depth coordinate as ``y`` and the rotation in
    radians as ``rotationY``; both are accepted. Records without a positive
    width and depth are rejected.

    Returns:
        The item, or None if the record has no usable footprint.
    """
    width = float(record.get("width") or 0)
    depth = float(record.get("depth") or 0)
    if width <= 0 or depth <= 0:
        return None

    default_center = default_center or Point2D(0.0, 0.0)
    if _is_number(record.get("z")):
        z = float(record["z"])
    elif _is_number(record.get("y")):
        z = float(record["y"])
    else:
        z = default_center.y

    if _is_number(record.get("rotation")):
        rotation = float(record["rotation"])
    elif _is_number(record.get("rotationY")):
        rotation = math.degrees(float(record["rotationY"]))
    else:
        rotation = 0.0

    x = float(record["x"]) if _is_number(record.get("x")) else default_center.x
    height = record.get("height")
    height = float(height) if _is_number(height) and height > 0 else 1.0
    return FurnitureItem(
        id=str(record.get("id") or uuid.uuid4()),
        name=str(record.get("name", "")),
        width=width,
        depth=depth,
        height=height,
        x=x,
        z=z,
        rotation=rotation,
        color=str(record.get("color") or "#c46f37"),
    )


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class PlacementStore:
    """Owns placed furniture and gates every mutation on validation.

    Item lifecycle: Unplaced -> Placed on a successful ``add``; a Placed
    item changes position or rotation only through a successful ``move``
    or ``rotate``; ``remove`` always succeeds. A rejected candidate leaves
    the store unchanged.

    Each validate-then-commit step holds the store's lock, so mutations
    from several threads are serialized. Items handed in and out are
    copies; the store's own items change only through its methods.
    """

    def __init__(
        self, model: FloorPlanModel, validator: PlacementValidator | None = None
    ) -> None:
        self._model = model
        self._validator = validator or PlacementValidator(model.plan.collision_gap)
        self._items: dict[str, FurnitureItem] = {}
        self._lock = threading.RLock()

    @property
    def model(self) -> FloorPlanModel:
        return self._model

    @property
    def validator(self) -> PlacementValidator:
        return self._validator

    @property
    def items(self) -> list[FurnitureItem]:
        with self._lock:
            return [item.copy_with() for item in self._items.values()]

    def get(self, item_id: str) -> FurnitureItem | None:
        with self._lock:
            item = self._items.get(item_id)
            return item.copy_with() if item is not None else None

    def use_model(self, model: FloorPlanModel) -> list[str]:
        """Swap in a rebuilt floor-plan model.

        Items are kept where they are.

        Returns:
            Ids of items that are no longer legal under the new model.
        """
        with self._lock:
            self._model = model
            return self.invalid_items()

    def invalid_items(self) -> list[str]:
        with self._lock:
            return [
                item.id
                for item in self._items.values()
                if not self.check(item, ignore_id=item.id)
            ]

    def check(self, candidate: FurnitureItem, ignore_id: str | None = None) -> bool:
        """Validate a candidate against the model and the placed items."""
        with self._lock:
            return self._model.is_valid_placement(
                candidate, ignore_id, self._items.values(), self._validator
            )

    def add(self, item: FurnitureItem) -> bool:
        """Place a new item if its position is legal.

        Raises:
            ValueError: If an item with the same id is already placed.
        """
        with self._lock:
            if item.id in self._items:
                raise ValueError(f"Furniture item '{item.id}' is already placed")
            if not self.check(item, ignore_id=item.id):
                logger.info(f"Placement blocked for '{item.name or item.id}'")
                return False
            self._items[item.id] = item.copy_with()
            logger.debug(f"Placed '{item.id}' at ({item.x}, {item.z})")
            return True

    def place_at_center(
        self,
        name: str,
        width: float,
        depth: float,
        height: float,
        color: str = "#c46f37",
        item_id: str | None = None,
    ) -> FurnitureItem | None:
        """Create an item at the center of the floor outline and place it.

        Returns:
            The placed item, or None if the center position is blocked.
        """
        center = self._model.floor_center
        item = FurnitureItem(
            id=item_id or str(uuid.uuid4()),
            name=name,
            width=width,
            depth=depth,
            height=height,
            x=center.x,
            z=center.y,
            rotation=0.0,
            color=color,
        )
        return item if self.add(item) else None

    def move(self, item_id: str, x: float, z: float) -> bool:
        """Move an item; its position is unchanged if the move is illegal."""
        with self._lock:
            item = self._require(item_id)
            if not self.check(item.copy_with(x=x, z=z), ignore_id=item_id):
                return False
            item.x = x
            item.z = z
            return True

    def set_rotation(self, item_id: str, rotation: float) -> bool:
        """Rotate an item to an absolute angle if the result is legal."""
        with self._lock:
            item = self._require(item_id)
            rotation = rotation % 360
            if not self.check(item.copy_with(rotation=rotation), ignore_id=item_id):
                logger.info(f"Rotate blocked for '{item_id}'")
                return False
            item.rotation = rotation
            return True

    def rotate(self, item_id: str, step: float = ROTATION_STEP) -> bool:
        """Rotate an item by ``step`` degrees if the result is legal."""
        with self._lock:
            item = self._require(item_id)
            return self.set_rotation(item_id, item.rotation + step)

    def remove(self, item_id: str) -> FurnitureItem | None:
        """Remove an item without validation.

        Returns:
            The removed item, or None if it was not placed.
        """
        with self._lock:
            return self._items.pop(item_id, None)

    def drag(
        self, item_id: str, grab_point: Point2D, snap_step: float | None = POSITION_SNAP
    ) -> DragSession:
        """Start dragging an item from the pointer position ``grab_point``."""
        return DragSession(self, item_id, grab_point, snap_step)

    def _require(self, item_id: str) -> FurnitureItem:
        item = self._items.get(item_id)
        if item is None:
            raise KeyError(f"Unknown furniture item: {item_id}")
        return item


class DragSession:
    """A drag of one item, fed pointer positions one at a time.

    Each position is snapped and validated independently. A rejected
    position is skipped; earlier committed positions are kept, and
    releasing the drag performs no rollback.

    Example:
        >>> with store.drag("sofa", Point2D(4.0, 5.0)) as session:
        ...     session.move_to(Point2D(4.5, 5.0))
    """

    def __init__(
        self,
        store: PlacementStore,
        item_id: str,
        grab_point: Point2D,
        snap_step: float | None = POSITION_SNAP,
    ) -> None:
        item = store.get(item_id)
        if item is None:
            raise KeyError(f"Unknown furniture item: {item_id}")
        self.store = store
        self.item_id = item_id
        self.snap_step = snap_step
        self.active = True
        self._offset = Point2D(x=item.x - grab_point.x, y=item.z - grab_point.y)

    def move_to(self, pointer: Point2D) -> bool:
        """Attempt to move the item so it follows ``pointer``.

        Returns:
            True if the item moved, False if the position was rejected or
            the drag has been released.
        """
        if not self.active:
            return False
        x = pointer.x + self._offset.x
        z = pointer.y + self._offset.y
        if self.snap_step:
            x = snap_position(x, self.snap_step)
            z = snap_position(z, self.snap_step)
        return self.store.move(self.item_id, x, z)

    def release(self) -> None:
        self.active = False

    def __enter__(self) -> DragSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

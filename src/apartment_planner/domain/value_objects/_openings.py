"""Door and window openings and the geometry they resolve into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import WallSegment


class OpeningType(str, Enum):
    """Kinds of openings that can be cut into a wall."""

    DOOR = "door"
    WINDOW = "window"


class HingeSide(str, Enum):
    """Side of the door leaf that carries the hinges."""

    LEFT = "left"
    RIGHT = "right"


class SwingDirection(str, Enum):
    """Direction a door leaf swings relative to its host wall."""

    IN = "in"
    OUT = "out"


class OpeningUnresolvable(str, Enum):
    """Reasons an opening is dropped during wall resolution.

    Dropping an opening is never fatal: the rest of the floor plan still
    resolves, and the opening is reported as a DroppedOpening.

    Attributes:
        UNKNOWN_WALL: The host wall id matches no wall.
        NO_SEGMENTS: The host wall has no segment longer than the minimum.
        COLLAPSED_WIDTH: The clamped horizontal extent is below the minimum.
        COLLAPSED_HEIGHT: The clamped vertical extent is below the minimum.
    """

    UNKNOWN_WALL = "unknown_wall"
    NO_SEGMENTS = "no_segments"
    COLLAPSED_WIDTH = "collapsed_width"
    COLLAPSED_HEIGHT = "collapsed_height"


@dataclass(frozen=True)
class Opening(ABC):
    """An opening attached to a named wall.

    Offsets are measured along the host wall's polyline from its first
    vertex. Concrete openings are either a Door or a Window.

    Attributes:
        id: Identifier of the opening.
        host_wall_id: Id of the wall the opening is cut into.
        width: Horizontal extent along the wall.
        height: Vertical extent.
    """

    id: str
    host_wall_id: str
    width: float
    height: float

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Opening id must not be empty")
        if not self.host_wall_id:
            raise ValueError("Opening host_wall_id must not be empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Opening dimensions must be positive")

    @property
    @abstractmethod
    def opening_type(self) -> OpeningType:
        """Kind of this opening."""

    @property
    @abstractmethod
    def anchor_along_wall(self) -> float:
        """Offset along the wall used to pick the host segment."""

    @property
    @abstractmethod
    def span_along_wall(self) -> tuple[float, float]:
        """Unclamped (start, end) offsets along the host wall."""

    @property
    @abstractmethod
    def vertical_span(self) -> tuple[float, float]:
        """Unclamped (bottom, top) heights above the floor."""


@dataclass(frozen=True)
class Door(Opening):
    """A door opening, positioned by its start edge.

    Attributes:
        offset_along_wall: Distance along the wall to the door's start edge.
        hinge: Side of the leaf carrying the hinges.
        swing: Swing direction of the leaf.
    """

    offset_along_wall: float
    hinge: HingeSide = HingeSide.LEFT
    swing: SwingDirection = SwingDirection.IN

    @property
    def opening_type(self) -> OpeningType:
        return OpeningType.DOOR

    @property
    def anchor_along_wall(self) -> float:
        return self.offset_along_wall

    @property
    def span_along_wall(self) -> tuple[float, float]:
        return (self.offset_along_wall, self.offset_along_wall + self.width)

    @property
    def vertical_span(self) -> tuple[float, float]:
        return (0.0, self.height)


@dataclass(frozen=True)
class Window(Opening):
    """A window opening, positioned by its center.

    Attributes:
        center_offset_along_wall: Distance along the wall to the window center.
        sill_height: Height of the window's bottom edge above the floor.
    """

    center_offset_along_wall: float
    sill_height: float

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.sill_height < 0:
            raise ValueError("Window sill_height must be non-negative")

    @property
    def opening_type(self) -> OpeningType:
        return OpeningType.WINDOW

    @property
    def anchor_along_wall(self) -> float:
        return self.center_offset_along_wall

    @property
    def span_along_wall(self) -> tuple[float, float]:
        half = self.width / 2
        return (
            self.center_offset_along_wall - half,
            self.center_offset_along_wall + half,
        )

    @property
    def vertical_span(self) -> tuple[float, float]:
        return (self.sill_height, self.sill_height + self.height)


@dataclass(frozen=True)
class OpeningDefaults:
    """Dimensions used when an opening does not specify its own.

    Values are in the floor plan's length unit (feet by default).
    """

    door_width: float = 3.0
    door_height: float = 6.8
    window_width: float = 3.0
    window_height: float = 4.0
    window_sill_height: float = 3.0

    def __post_init__(self) -> None:
        if min(
            self.door_width, self.door_height, self.window_width, self.window_height
        ) <= 0:
            raise ValueError("Default opening dimensions must be positive")
        if self.window_sill_height < 0:
            raise ValueError("Default window sill height must be non-negative")


@dataclass(frozen=True)
class ResolvedOpening:
    """An opening bound to one concrete wall segment.

    Offsets are local to the segment and clamped to [0, segment length];
    heights are clamped to [0, ceiling height].
    """

    opening: Opening
    wall_id: str
    segment_id: str
    start_offset: float
    end_offset: float
    bottom: float
    top: float

    @property
    def width(self) -> float:
        return self.end_offset - self.start_offset

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def opening_type(self) -> OpeningType:
        return self.opening.opening_type


@dataclass(frozen=True)
class SolidBox:
    """A region of a wall segment that remains physical wall material.

    Attributes:
        wall_id: Id of the parent wall.
        segment_id: Id of the wall segment.
        start: Offset along the segment where the box begins.
        end: Offset along the segment where the box ends.
        bottom: Height of the box's lower face.
        top: Height of the box's upper face.
    """

    wall_id: str
    segment_id: str
    start: float
    end: float
    bottom: float
    top: float

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("end must be greater than start")
        if self.top <= self.bottom:
            raise ValueError("top must be greater than bottom")

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def height(self) -> float:
        return self.top - self.bottom


@dataclass(frozen=True)
class BlockedRegion:
    """A merged region of a wall segment carved out by openings.

    Overlapping openings produce a single region; adjacent bands with the
    same blocked height range are coalesced.
    """

    wall_id: str
    segment_id: str
    start: float
    end: float
    bottom: float
    top: float

    @property
    def length(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class DroppedOpening:
    """Diagnostic record for an opening that could not be resolved."""

    opening: Opening
    reason: OpeningUnresolvable
    message: str


@dataclass(frozen=True)
class WallResolution:
    """Complete product of resolving walls against their openings.

    Attributes:
        segments: All non-degenerate wall segments, in wall order.
        openings: Openings bound to segments.
        solid_boxes: Wall material left after subtracting openings.
        blocked_regions: Merged regions carved out by openings.
        dropped: Openings that could not be resolved, with reasons.
    """

    segments: tuple[WallSegment, ...]
    openings: tuple[ResolvedOpening, ...]
    solid_boxes: tuple[SolidBox, ...]
    blocked_regions: tuple[BlockedRegion, ...]
    dropped: tuple[DroppedOpening, ...]

    def boxes_for(self, segment_id: str) -> list[SolidBox]:
        return [box for box in self.solid_boxes if box.segment_id == segment_id]

    def openings_for(self, segment_id: str) -> list[ResolvedOpening]:
        return [op for op in self.openings if op.segment_id == segment_id]

    def segment(self, segment_id: str) -> WallSegment | None:
        for segment in self.segments:
            if segment.segment_id == segment_id:
                return segment
        return None

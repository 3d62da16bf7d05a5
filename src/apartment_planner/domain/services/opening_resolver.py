"""Resolution of door and window openings into wall geometry.

Walls are exploded into segments; every opening is bound to one segment of
its host wall, clamped to that segment, and subtracted from it. The result
is the set of solid boxes that remain as physical wall material, plus the
merged regions carved out by openings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..entities import Wall, WallSegment
from ..value_objects import (
    BlockedRegion,
    DroppedOpening,
    Opening,
    OpeningUnresolvable,
    ResolvedOpening,
    SolidBox,
    WallResolution,
)

__all__ = [
    "MIN_BOX_LENGTH",
    "MIN_OPENING_WIDTH",
    "OpeningResolver",
    "complement_ranges",
    "merge_ranges",
]

logger = logging.getLogger(__name__)

# Openings narrower (or shorter) than this after clamping are dropped.
MIN_OPENING_WIDTH = 0.01

# Solid boxes thinner than this in either direction are not emitted.
MIN_BOX_LENGTH = 0.01

Range = tuple[float, float]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def merge_ranges(ranges: Iterable[Range]) -> list[Range]:
    """Merge overlapping or touching ranges into a sorted disjoint list.

    Examples:
        >>> merge_ranges([(3.0, 7.0), (0.0, 2.0), (2.0, 4.0)])
        [(0.0, 7.0)]
    """
    merged: list[Range] = []
    for low, high in sorted(ranges):
        if merged and low <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], high))
        else:
            merged.append((low, high))
    return merged


def complement_ranges(ranges: Sequence[Range], lower: float, upper: float) -> list[Range]:
    """Gaps left in [lower, upper] by sorted disjoint ``ranges``."""
    gaps: list[Range] = []
    cursor = lower
    for low, high in ranges:
        if low > cursor:
            gaps.append((cursor, min(low, upper)))
        cursor = max(cursor, high)
        if cursor >= upper:
            break
    if cursor < upper:
        gaps.append((cursor, upper))
    return gaps


class OpeningResolver:
    """Binds openings to wall segments and computes solid wall geometry.

    Attributes:
        ceiling_height: Height every wall extends to.
        min_opening_width: Openings whose clamped extent falls below this
            are dropped.
        min_box_length: Solid boxes below this in length or height are
            skipped.
    """

    def __init__(
        self,
        ceiling_height: float,
        min_opening_width: float = MIN_OPENING_WIDTH,
        min_box_length: float = MIN_BOX_LENGTH,
    ) -> None:
        if ceiling_height <= 0:
            raise ValueError("Ceiling height must be positive")
        self.ceiling_height = ceiling_height
        self.min_opening_width = min_opening_width
        self.min_box_length = min_box_length

    def resolve(
        self, walls: Sequence[Wall], openings: Sequence[Opening]
    ) -> WallResolution:
        """Resolve every opening and compute the solid boxes of every segment.

        A bad opening never aborts resolution: it is logged, recorded in
        ``WallResolution.dropped`` and skipped.

        Args:
            walls: All walls of the floor plan.
            openings: All openings, each naming a host wall.

        Returns:
            The complete WallResolution.
        """
        segments_by_wall = {wall.id: wall.segments() for wall in walls}

        resolved: list[ResolvedOpening] = []
        dropped: list[DroppedOpening] = []
        for opening in openings:
            result = self.resolve_opening(opening, segments_by_wall)
            if isinstance(result, DroppedOpening):
                logger.warning(f"Dropped opening '{opening.id}': {result.message}")
                dropped.append(result)
            else:
                resolved.append(result)

        by_segment: dict[str, list[ResolvedOpening]] = {}
        for item in resolved:
            by_segment.setdefault(item.segment_id, []).append(item)

        segments: list[WallSegment] = []
        boxes: list[SolidBox] = []
        blocked: list[BlockedRegion] = []
        for wall in walls:
            for segment in segments_by_wall[wall.id]:
                segment_openings = by_segment.get(segment.segment_id, [])
                segments.append(segment)
                boxes.extend(self.solid_boxes(segment, segment_openings))
                blocked.extend(self.blocked_regions(segment, segment_openings))

        logger.debug(
            f"Resolved {len(resolved)} openings across {len(segments)} segments "
            f"into {len(boxes)} solid boxes ({len(dropped)} dropped)"
        )
        return WallResolution(
            segments=tuple(segments),
            openings=tuple(resolved),
            solid_boxes=tuple(boxes),
            blocked_regions=tuple(blocked),
            dropped=tuple(dropped),
        )

    def resolve_opening(
        self,
        opening: Opening,
        segments_by_wall: dict[str, list[WallSegment]],
    ) -> ResolvedOpening | DroppedOpening:
        """Bind one opening to a segment of its host wall and clamp it.

        The opening's anchor (a door's start edge, a window's center)
        selects the segment; the opening's extent is then clamped to that
        segment and to [0, ceiling_height].
        """
        segments = segments_by_wall.get(opening.host_wall_id)
        if segments is None:
            return DroppedOpening(
                opening=opening,
                reason=OpeningUnresolvable.UNKNOWN_WALL,
                message=f"host wall '{opening.host_wall_id}' does not exist",
            )
        if not segments:
            return DroppedOpening(
                opening=opening,
                reason=OpeningUnresolvable.NO_SEGMENTS,
                message=f"host wall '{opening.host_wall_id}' has no usable segments",
            )

        segment = self._host_segment(segments, opening.anchor_along_wall)
        span_start, span_end = opening.span_along_wall
        start = _clamp(span_start - segment.start_along_parent, 0.0, segment.length)
        end = _clamp(span_end - segment.start_along_parent, 0.0, segment.length)
        if end - start < self.min_opening_width:
            return DroppedOpening(
                opening=opening,
                reason=OpeningUnresolvable.COLLAPSED_WIDTH,
                message=(
                    f"clamped width {end - start:.4f} on {segment.segment_id} "
                    f"is below {self.min_opening_width}"
                ),
            )

        low, high = opening.vertical_span
        bottom = _clamp(low, 0.0, self.ceiling_height)
        top = _clamp(high, 0.0, self.ceiling_height)
        if top - bottom < self.min_opening_width:
            return DroppedOpening(
                opening=opening,
                reason=OpeningUnresolvable.COLLAPSED_HEIGHT,
                message=(
                    f"clamped height {top - bottom:.4f} is below "
                    f"{self.min_opening_width}"
                ),
            )

        return ResolvedOpening(
            opening=opening,
            wall_id=segment.wall_id,
            segment_id=segment.segment_id,
            start_offset=start,
            end_offset=end,
            bottom=bottom,
            top=top,
        )

    def solid_boxes(
        self, segment: WallSegment, openings: Sequence[ResolvedOpening]
    ) -> list[SolidBox]:
        """Wall material left on one segment after subtracting its openings.

        The segment is split into horizontal bands at every opening edge.
        In each band the blocked height ranges are merged, and every gap
        in [0, ceiling_height] becomes one solid box.
        """
        boxes: list[SolidBox] = []
        for left, right, blocked in self._bands(segment, openings):
            if right - left < self.min_box_length:
                continue
            for bottom, top in complement_ranges(blocked, 0.0, self.ceiling_height):
                if top - bottom < self.min_box_length:
                    continue
                boxes.append(
                    SolidBox(
                        wall_id=segment.wall_id,
                        segment_id=segment.segment_id,
                        start=left,
                        end=right,
                        bottom=bottom,
                        top=top,
                    )
                )
        return boxes

    def blocked_regions(
        self, segment: WallSegment, openings: Sequence[ResolvedOpening]
    ) -> list[BlockedRegion]:
        """Merged regions carved out of one segment by its openings.

        Consecutive bands blocked over the same height range are coalesced,
        so overlapping openings yield a single region.
        """
        regions: list[list[float]] = []
        active: dict[Range, list[float]] = {}
        for left, right, blocked in self._bands(segment, openings):
            next_active: dict[Range, list[float]] = {}
            for height_range in blocked:
                region = active.get(height_range)
                if region is None:
                    region = [left, right, height_range[0], height_range[1]]
                    regions.append(region)
                else:
                    region[1] = right
                next_active[height_range] = region
            active = next_active

        return [
            BlockedRegion(
                wall_id=segment.wall_id,
                segment_id=segment.segment_id,
                start=start,
                end=end,
                bottom=bottom,
                top=top,
            )
            for start, end, bottom, top in regions
        ]

    def _bands(
        self, segment: WallSegment, openings: Sequence[ResolvedOpening]
    ) -> list[tuple[float, float, list[Range]]]:
        """Split a segment at opening edges into (left, right, blocked) bands."""
        edges = sorted(
            {0.0, segment.length}
            | {op.start_offset for op in openings}
            | {op.end_offset for op in openings}
        )
        bands: list[tuple[float, float, list[Range]]] = []
        for left, right in zip(edges, edges[1:]):
            middle = (left + right) / 2
            blocked = merge_ranges(
                (op.bottom, op.top)
                for op in openings
                if op.start_offset < middle < op.end_offset
            )
            bands.append((left, right, blocked))
        return bands

    @staticmethod
    def _host_segment(segments: Sequence[WallSegment], anchor: float) -> WallSegment:
        for segment in segments:
            if anchor < segment.end_along_parent:
                return segment
        return segments[-1]

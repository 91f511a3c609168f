"""2-D preview of crossing slots, built without touching the lexicon."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import CONFLICT_MARK, EMPTY_MARK, REFERENCE_POINT, Orientation
from ..core.models import PlacementGrid, SlotConstraint, placement_cells
from .validator import check_constraints

Point = Tuple[int, int]


def _back_off(cell: Point, orientation: Orientation, position: int) -> Point:
    """Start of a slot whose ``position``-th cell sits on ``cell``."""

    dx, dy = orientation.step
    return (cell[0] - dx * (position - 1), cell[1] - dy * (position - 1))


def _advance(start: Point, orientation: Orientation, position: int) -> Point:
    dx, dy = orientation.step
    return (start[0] + dx * (position - 1), start[1] + dy * (position - 1))


def slot_origins(slots: Sequence[SlotConstraint], reference: Point = REFERENCE_POINT) -> List[Point]:
    """Absolute start cell of every slot.

    With two slots, both crossing cells sit on ``reference``. With three,
    slot 3's first crossing cell sits on ``reference`` and slot 2 is hung off
    slot 3's second crossing cell.
    """

    if len(slots) == 2:
        return [_back_off(reference, slot.orientation, slot.positions[0]) for slot in slots]

    first, second, third = slots
    position_3a, position_3b = third.positions
    start_3 = _back_off(reference, third.orientation, position_3a)
    start_1 = _back_off(reference, first.orientation, first.positions[0])
    crossing_2 = _advance(start_3, third.orientation, position_3b)
    start_2 = _back_off(crossing_2, second.orientation, second.positions[0])
    return [start_1, start_2, start_3]


def rasterize(points: Iterable[Tuple[Point, str]]) -> PlacementGrid:
    """Draw placed characters on their minimal bounding box."""

    points = list(points)
    if not points:
        return PlacementGrid(rows=(), origin=(0, 0))

    min_x = min(x for (x, _), _ in points)
    max_x = max(x for (x, _), _ in points)
    min_y = min(y for (_, y), _ in points)
    max_y = max(y for (_, y), _ in points)

    grid = [[EMPTY_MARK] * (max_x - min_x + 1) for _ in range(max_y - min_y + 1)]
    conflicts: List[Point] = []
    for (x, y), char in points:
        row, col = y - min_y, x - min_x
        previous = grid[row][col]
        if previous != EMPTY_MARK and previous != char:
            grid[row][col] = CONFLICT_MARK
            if (x, y) not in conflicts:
                conflicts.append((x, y))
        else:
            grid[row][col] = char

    return PlacementGrid(
        rows=tuple(tuple(row) for row in grid),
        origin=(min_x, min_y),
        conflicts=tuple(conflicts),
    )


def build_preview(
    slots: Sequence[SlotConstraint],
    reference: Point = REFERENCE_POINT,
) -> Optional[PlacementGrid]:
    """Lay the slot patterns out around their crossings.

    Returns ``None`` while the request is not ready (see
    :class:`~crossfinder.engine.validator.SlotValidator`).
    """

    if not check_constraints(slots).ok:
        return None

    points: List[Tuple[Point, str]] = []
    for slot, start in zip(slots, slot_origins(slots, reference)):
        points.extend(placement_cells(slot.cells, start, slot.orientation).items())
    return rasterize(points)


__all__ = ["build_preview", "rasterize", "slot_origins"]

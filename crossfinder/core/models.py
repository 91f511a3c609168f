"""Data models supporting the crossing finder."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List, Optional, Tuple

from .constants import (
    WILDCARD,
    MatchMode,
    NOT_READY_STATUSES,
    Orientation,
    SolveStatus,
)


@dataclass(frozen=True)
class WordRecord:
    """A lexicon entry as seen by the solver."""

    key: str
    display: str
    normalized: str
    length: int
    definition_count: int = 0
    favorite: bool = False
    active: bool = True
    source: str = ""

    def letter_at(self, position: int) -> Optional[str]:
        """Return the letter at a 1-based ``position`` or ``None`` if too short."""

        index = position - 1
        if index < 0 or index >= len(self.normalized):
            return None
        return self.normalized[index]


SolutionTuple = Tuple[WordRecord, ...]


@dataclass(frozen=True)
class PatternSpec:
    """Compiled form of a user pattern.

    ``cells`` holds one entry per pattern cell: the literal letter, or ``None``
    for a single-character wildcard.
    """

    cells: Tuple[Optional[str], ...]
    mode: MatchMode

    @property
    def contains(self) -> bool:
        return self.mode.contains

    @property
    def end_anchored(self) -> bool:
        return self.mode.end_anchored

    @property
    def text(self) -> str:
        return "".join(WILDCARD if cell is None else cell for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def like(self) -> str:
        """``LIKE`` expression, to be used with ``ESCAPE '\\'``."""

        parts = []
        for cell in self.cells:
            if cell is None:
                parts.append("_")
            elif cell in ("%", "_", "\\"):
                parts.append("\\" + cell)
            else:
                parts.append(cell)
        return self.mode.like("".join(parts))

    @property
    def regex(self) -> str:
        core = "".join("." if cell is None else re.escape(cell) for cell in self.cells)
        return self.mode.regex(core)

    def matches(self, word: str) -> bool:
        return re.fullmatch(self.regex, word, flags=re.DOTALL) is not None


@dataclass(frozen=True)
class SlotConstraint:
    """One word slot of a solve request.

    Immutable: an edited slot is a new constraint (``dataclasses.replace``).
    """

    pattern: str
    orientation: Orientation
    positions: Tuple[Optional[int], ...] = ()

    @cached_property
    def spec(self) -> Optional[PatternSpec]:
        from ..data.pattern import compile_pattern

        return compile_pattern(self.pattern)

    @property
    def cells(self) -> str:
        """Cell sequence used for crossing positions (empty if uncompilable)."""

        spec = self.spec
        return spec.text if spec is not None else ""


@dataclass
class SolveResult:
    status: SolveStatus
    solutions: List[SolutionTuple] = field(default_factory=list)
    candidate_counts: Tuple[int, ...] = ()
    message: str = ""
    max_solutions: Optional[int] = None
    # Set only when more combinations existed beyond ``max_solutions``.
    truncated: bool = False

    @property
    def attempted(self) -> bool:
        """True once a lexicon search actually ran for this request."""

        return self.status not in NOT_READY_STATUSES

    @property
    def returned(self) -> int:
        return len(self.solutions)

    @classmethod
    def empty(cls, status: SolveStatus, slot_count: int, message: str = "") -> "SolveResult":
        return cls(status=status, candidate_counts=(0,) * slot_count, message=message)


@dataclass(frozen=True)
class PlacementGrid:
    """Rasterized preview of the slots on their minimal bounding box."""

    rows: Tuple[Tuple[str, ...], ...]
    origin: Tuple[int, int]
    conflicts: Tuple[Tuple[int, int], ...] = ()

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def cell(self, x: int, y: int) -> str:
        """Return the character at absolute coordinates ``(x, y)``."""

        return self.rows[y - self.origin[1]][x - self.origin[0]]

    def has_conflict(self) -> bool:
        return bool(self.conflicts)

    def render(self) -> str:
        return "\n".join(" ".join(row) for row in self.rows)

    def as_lists(self) -> List[List[str]]:
        return [list(row) for row in self.rows]


def placement_cells(
    text: str,
    start: Tuple[int, int],
    orientation: Orientation,
) -> Dict[Tuple[int, int], str]:
    """Return absolute coordinates for each character of ``text``."""

    dx, dy = orientation.step
    return {(start[0] + dx * i, start[1] + dy * i): char for i, char in enumerate(text)}


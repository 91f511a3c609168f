"""Shared constants and enumerations for the crossing finder."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


CONTAINS_MARKER = "-"
END_ANCHOR_MARKER = "*"
WILDCARD = "_"

EMPTY_MARK = "·"
CONFLICT_MARK = "!"

# Absolute (x, y) where the anchored slot's crossing cell is placed in previews.
REFERENCE_POINT: Tuple[int, int] = (12, 6)

DEFAULT_CANDIDATE_LIMIT = 1200
DEFAULT_MAX_SOLUTIONS = 500
DEFAULT_SEARCH_LIMIT = 500


class Orientation(str, Enum):
    """Axis a slot is written along."""

    HORIZONTAL = "H"
    VERTICAL = "V"

    @property
    def step(self) -> Tuple[int, int]:
        if self is Orientation.HORIZONTAL:
            return (1, 0)
        return (0, 1)


class MatchMode(str, Enum):
    """How a cell sequence must sit inside a word."""

    EXACT = "EXACT"
    PREFIX = "PREFIX"
    SUFFIX = "SUFFIX"
    CONTAINS = "CONTAINS"

    @property
    def contains(self) -> bool:
        return self in (MatchMode.SUFFIX, MatchMode.CONTAINS)

    @property
    def end_anchored(self) -> bool:
        return self in (MatchMode.EXACT, MatchMode.SUFFIX)

    def like(self, core: str) -> str:
        """Wrap an already escaped ``LIKE`` body with the mode's ``%`` anchors."""

        head = "%" if self.contains else ""
        tail = "" if self.end_anchored else "%"
        return f"{head}{core}{tail}"

    def regex(self, core: str) -> str:
        """Wrap a regular expression body so it honours the mode's anchors."""

        head = ".*" if self.contains else ""
        tail = "" if self.end_anchored else ".*"
        return f"{head}{core}{tail}"


class SolveStatus(str, Enum):
    """Outcome of a solve request."""

    SOLVED = "SOLVED"
    INVALID_PATTERN = "INVALID_PATTERN"
    INVALID_POSITION = "INVALID_POSITION"
    ORIENTATION_CONFLICT = "ORIENTATION_CONFLICT"
    RETRIEVAL_FAILED = "RETRIEVAL_FAILED"
    SUPERSEDED = "SUPERSEDED"


NOT_READY_STATUSES = frozenset(
    {
        SolveStatus.INVALID_PATTERN,
        SolveStatus.INVALID_POSITION,
        SolveStatus.ORIENTATION_CONFLICT,
    }
)

"""Readiness checks run before any lexicon search or preview."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import SolveStatus
from ..core.exceptions import ConstraintError
from ..core.models import SlotConstraint
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

PAIR_ORIENTATION_ADVICE = "To cross, set one slot Horizontal and the other Vertical."
THIRD_ORIENTATION_ADVICE = (
    "Slot 3 crosses slots 1 and 2, so its orientation must differ from both of them."
)


def expected_positions(slot_count: int) -> Tuple[int, ...]:
    """Number of crossing positions each slot declares."""

    if slot_count == 2:
        return (1, 1)
    if slot_count == 3:
        return (1, 1, 2)
    raise ValueError(f"Only 2 or 3 slots can be crossed, got {slot_count}")


@dataclass
class ValidationResult:
    ok: bool
    status: Optional[SolveStatus] = None
    messages: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return " ".join(self.messages)


class SlotValidator:
    """Checks patterns, crossing positions and orientations of a request."""

    def validate(self, slots: Sequence[SlotConstraint]) -> ValidationResult:
        expected = expected_positions(len(slots))
        try:
            self._check_patterns(slots)
            self._check_positions(slots, expected)
            self._check_orientations(slots)
        except ConstraintError as exc:
            LOGGER.debug("Request not ready (%s): %s", exc.status.value, exc)
            return ValidationResult(ok=False, status=exc.status, messages=[str(exc)])
        return ValidationResult(ok=True)

    def _check_patterns(self, slots: Sequence[SlotConstraint]) -> None:
        for number, slot in enumerate(slots, start=1):
            if slot.spec is None:
                raise ConstraintError(
                    SolveStatus.INVALID_PATTERN,
                    f"Slot {number} pattern {slot.pattern!r} matches nothing",
                )

    def _check_positions(self, slots: Sequence[SlotConstraint], expected: Tuple[int, ...]) -> None:
        for number, (slot, needed) in enumerate(zip(slots, expected), start=1):
            if len(slot.positions) != needed:
                raise ConstraintError(
                    SolveStatus.INVALID_POSITION,
                    f"Slot {number} needs {needed} crossing position(s), got {len(slot.positions)}",
                )
            size = len(slot.cells)
            for position in slot.positions:
                if position is None:
                    raise ConstraintError(
                        SolveStatus.INVALID_POSITION,
                        f"Slot {number} crossing position is not set",
                    )
                if not 1 <= position <= size:
                    raise ConstraintError(
                        SolveStatus.INVALID_POSITION,
                        f"Slot {number} crossing position {position} is outside 1..{size}",
                    )

    def _check_orientations(self, slots: Sequence[SlotConstraint]) -> None:
        if len(slots) == 2:
            if slots[0].orientation == slots[1].orientation:
                raise ConstraintError(SolveStatus.ORIENTATION_CONFLICT, PAIR_ORIENTATION_ADVICE)
            return
        third = slots[2].orientation
        if third == slots[0].orientation or third == slots[1].orientation:
            raise ConstraintError(SolveStatus.ORIENTATION_CONFLICT, THIRD_ORIENTATION_ADVICE)


def check_constraints(slots: Sequence[SlotConstraint]) -> ValidationResult:
    return SlotValidator().validate(slots)


__all__ = [
    "PAIR_ORIENTATION_ADVICE",
    "THIRD_ORIENTATION_ADVICE",
    "SlotValidator",
    "ValidationResult",
    "check_constraints",
    "expected_positions",
]

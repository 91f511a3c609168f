"""Crossing search over two or three word slots.

Each slot pattern is looked up in the lexicon (concurrently, one query per
slot), the crossing slots are bucketed by the letter at their crossing
position, and the combinations are enumerated in retrieval order until the
solution bound is reached.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from typing import Callable, Iterator, List, Optional, Sequence

from ..core.constants import (
    DEFAULT_CANDIDATE_LIMIT,
    DEFAULT_MAX_SOLUTIONS,
    DEFAULT_SEARCH_LIMIT,
    SolveStatus,
)
from ..core.exceptions import RetrievalError
from ..core.models import PatternSpec, SlotConstraint, SolutionTuple, SolveResult, WordRecord
from ..data.lexicon import LexiconQuery
from ..data.pattern import compile_pattern
from ..utils.logger import get_logger
from .indexer import index_by_pair, index_by_position
from .validator import SlotValidator

LOGGER = get_logger(__name__)


def _check_bounds(candidate_limit: int, max_solutions: int) -> None:
    if candidate_limit < 1:
        raise ValueError(f"candidate_limit must be positive, got {candidate_limit}")
    if max_solutions < 1:
        raise ValueError(f"max_solutions must be positive, got {max_solutions}")


@dataclass
class SolverConfig:
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT
    max_solutions: int = DEFAULT_MAX_SOLUTIONS
    parallel_retrieval: bool = True

    def __post_init__(self) -> None:
        _check_bounds(self.candidate_limit, self.max_solutions)


class IntersectionSolver:
    """Finds every lexicon combination filling 2 or 3 mutually crossing slots."""

    def __init__(
        self,
        lexicon: LexiconQuery,
        config: Optional[SolverConfig] = None,
        validator: Optional[SlotValidator] = None,
    ) -> None:
        self.lexicon = lexicon
        self.config = config or SolverConfig()
        self.validator = validator or SlotValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def solve(
        self,
        slots: Sequence[SlotConstraint],
        candidate_limit: Optional[int] = None,
        max_solutions: Optional[int] = None,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> SolveResult:
        """Run one solve request.

        Slots 1 and 2 declare one crossing position each. With a third slot,
        slot 3 declares two: the first crosses slot 1, the second crosses
        slot 2. ``is_current`` is polled once the candidates are in; when it
        returns ``False`` the request is abandoned as superseded.
        """

        slots = list(slots)
        limit = candidate_limit if candidate_limit is not None else self.config.candidate_limit
        bound = max_solutions if max_solutions is not None else self.config.max_solutions
        _check_bounds(limit, bound)

        validation = self.validator.validate(slots)
        if not validation.ok:
            return SolveResult.empty(validation.status, len(slots), validation.message)

        try:
            pools = self._retrieve([slot.spec for slot in slots], limit)
        except RetrievalError as exc:
            LOGGER.warning("Candidate retrieval failed: %s", exc)
            return SolveResult.empty(SolveStatus.RETRIEVAL_FAILED, len(slots), str(exc))

        counts = tuple(len(pool) for pool in pools)
        LOGGER.debug("Candidates per slot: %s (limit %s)", counts, limit)

        if is_current is not None and not is_current():
            LOGGER.debug("Dropping request superseded during retrieval")
            return SolveResult.empty(
                SolveStatus.SUPERSEDED, len(slots), "Superseded by a newer request"
            )

        if len(slots) == 2:
            combos = self._iter_pairs(slots, pools)
        else:
            combos = self._iter_triples(slots, pools)
        # One extra combination tells a cut-off search from a complete one.
        solutions = list(islice(combos, bound + 1))
        truncated = len(solutions) > bound
        del solutions[bound:]

        LOGGER.info(
            "Found %s solution(s)%s from %s candidates",
            len(solutions),
            " (bound reached)" if truncated else "",
            " / ".join(str(count) for count in counts),
        )
        return SolveResult(
            status=SolveStatus.SOLVED,
            solutions=solutions,
            candidate_counts=counts,
            max_solutions=bound,
            truncated=truncated,
        )

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------
    def _retrieve(self, specs: List[PatternSpec], limit: int) -> List[List[WordRecord]]:
        if not self.config.parallel_retrieval:
            return [self._fetch(spec, limit) for spec in specs]
        with ThreadPoolExecutor(max_workers=len(specs)) as executor:
            futures = [executor.submit(self._fetch, spec, limit) for spec in specs]
            return [future.result() for future in futures]

    def _fetch(self, spec: PatternSpec, limit: int) -> List[WordRecord]:
        try:
            return list(self.lexicon.find_by_pattern(spec, limit))
        except RetrievalError:
            raise
        except Exception as exc:
            raise RetrievalError(f"Lexicon query {spec.text!r} failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    @staticmethod
    def _iter_pairs(
        slots: Sequence[SlotConstraint],
        pools: Sequence[List[WordRecord]],
    ) -> Iterator[SolutionTuple]:
        position_a = slots[0].positions[0]
        index_b = index_by_position(pools[1], slots[1].positions[0])
        for word_a in pools[0]:
            letter = word_a.letter_at(position_a)
            if letter is None:
                continue
            for word_b in index_b.get(letter, ()):
                yield (word_a, word_b)

    @staticmethod
    def _iter_triples(
        slots: Sequence[SlotConstraint],
        pools: Sequence[List[WordRecord]],
    ) -> Iterator[SolutionTuple]:
        position_1 = slots[0].positions[0]
        position_3a, position_3b = slots[2].positions
        index_3 = index_by_pair(pools[2], position_3a, position_3b)
        # Key order is first appearance in slot 2's retrieval order.
        index_2 = index_by_position(pools[1], slots[1].positions[0])
        for word_1 in pools[0]:
            letter_1 = word_1.letter_at(position_1)
            if letter_1 is None:
                continue
            for letter_2, group_2 in index_2.items():
                group_3 = index_3.get((letter_1, letter_2))
                if not group_3:
                    continue
                for word_2 in group_2:
                    for word_3 in group_3:
                        yield (word_1, word_2, word_3)


def search_pattern(
    lexicon: LexiconQuery,
    raw: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> List[WordRecord]:
    """Return the lexicon entries matching a single pattern."""

    spec = compile_pattern(raw)
    if spec is None:
        return []
    return list(lexicon.find_by_pattern(spec, limit))


__all__ = ["IntersectionSolver", "SolverConfig", "search_pattern"]

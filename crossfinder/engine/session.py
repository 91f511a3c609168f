"""Request sequencing for interactive use.

Every solve request gets a generation token when it is dispatched. A request
whose token is no longer the latest when it finishes is dropped, so a slow
query for an old keystroke can never overwrite the answer to a newer one.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Sequence

from ..core.constants import SolveStatus
from ..core.models import PlacementGrid, SlotConstraint, SolveResult
from ..utils.logger import get_logger
from .preview import build_preview
from .solver import IntersectionSolver

LOGGER = get_logger(__name__)


class SolveSession:
    """Holds the latest applied solve result and preview for one user."""

    def __init__(self, solver: IntersectionSolver, max_workers: int = 2) -> None:
        self.solver = solver
        self._max_workers = max_workers
        self._lock = threading.Lock()
        self._dispatched = 0
        self._applied_token = 0
        self._result: Optional[SolveResult] = None
        self._failure: Optional[SolveResult] = None
        self._preview: Optional[PlacementGrid] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------
    def dispatch(self) -> int:
        """Reserve the next generation token, superseding older requests."""

        with self._lock:
            self._dispatched += 1
            return self._dispatched

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._dispatched

    @property
    def latest_token(self) -> int:
        with self._lock:
            return self._dispatched

    @property
    def applied_token(self) -> int:
        with self._lock:
            return self._applied_token

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def result(self) -> Optional[SolveResult]:
        with self._lock:
            return self._result

    @property
    def failure(self) -> Optional[SolveResult]:
        """Most recent current request whose retrieval failed, if newer than ``result``."""

        with self._lock:
            return self._failure

    @property
    def preview_grid(self) -> Optional[PlacementGrid]:
        with self._lock:
            return self._preview

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    def preview(self, slots: Sequence[SlotConstraint]) -> Optional[PlacementGrid]:
        grid = build_preview(slots)
        with self._lock:
            self._preview = grid
        return grid

    def solve(
        self,
        slots: Sequence[SlotConstraint],
        candidate_limit: Optional[int] = None,
        max_solutions: Optional[int] = None,
    ) -> SolveResult:
        """Run a request on the calling thread."""

        token = self.dispatch()
        return self.run(token, slots, candidate_limit, max_solutions)

    def submit(
        self,
        slots: Sequence[SlotConstraint],
        candidate_limit: Optional[int] = None,
        max_solutions: Optional[int] = None,
    ) -> "Future[SolveResult]":
        """Run a request on the session's worker pool."""

        token = self.dispatch()
        return self._pool().submit(self.run, token, list(slots), candidate_limit, max_solutions)

    def run(
        self,
        token: int,
        slots: Sequence[SlotConstraint],
        candidate_limit: Optional[int] = None,
        max_solutions: Optional[int] = None,
    ) -> SolveResult:
        """Solve for an already dispatched ``token`` and apply it if still current."""

        result = self.solver.solve(
            slots,
            candidate_limit=candidate_limit,
            max_solutions=max_solutions,
            is_current=lambda: self.is_current(token),
        )
        return self._apply(token, result)

    def _apply(self, token: int, result: SolveResult) -> SolveResult:
        with self._lock:
            if token != self._dispatched:
                LOGGER.debug("Discarding result of request %s (latest is %s)", token, self._dispatched)
                return SolveResult.empty(
                    SolveStatus.SUPERSEDED,
                    len(result.candidate_counts),
                    f"Request {token} superseded by request {self._dispatched}",
                )
            if result.status == SolveStatus.RETRIEVAL_FAILED:
                # ``result`` keeps the last successful request.
                self._failure = result
                return result
            self._result = result
            self._failure = None
            self._applied_token = token
            return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="crossfinder-solve",
                )
            return self._executor

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "SolveSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["SolveSession"]

"""Pretty-print helpers for previews and solve results."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import PlacementGrid, SolveResult, WordRecord


def format_preview(grid: PlacementGrid) -> str:
    """Render the preview labelled with absolute x (columns) and y (rows)."""

    if not grid.rows:
        return ""
    left, top = grid.origin
    xs = range(left, left + grid.width)
    ys = range(top, top + grid.height)
    pad = max(len(str(y)) for y in ys)
    lines = [" " * (pad + 3) + " ".join(f"{x:>2}" for x in xs)]
    lines.append(" " * (pad + 3) + "-" * (3 * grid.width - 1))
    for y, row in zip(ys, grid.rows):
        marks = " ".join(f"{symbol:>2}" for symbol in row)
        lines.append(f"{y:>{pad}} | {marks}")
    return "\n".join(lines)


def format_stats(result: SolveResult) -> str:
    counts = " / ".join(str(count) for count in result.candidate_counts)
    line = f"candidates: {counts} | solutions: {result.returned}"
    if result.truncated:
        line += " (bound reached)"
    return line


def format_records(records: Sequence[WordRecord], limit: Optional[int] = None) -> str:
    shown = list(records)[:limit] if limit is not None else list(records)
    lines = []
    for record in shown:
        star = "*" if record.favorite else " "
        lines.append(f"{star} {record.display:<24} L={record.length:<3} defs={record.definition_count}")
    return "\n".join(lines)


def format_solutions(result: SolveResult, limit: Optional[int] = None) -> str:
    solutions = result.solutions[:limit] if limit is not None else result.solutions
    if not solutions:
        return ""
    widths: List[int] = [0] * len(solutions[0])
    for solution in solutions:
        for i, record in enumerate(solution):
            widths[i] = max(widths[i], len(record.display))
    lines = []
    for solution in solutions:
        cells = [f"{record.display:<{widths[i]}}" for i, record in enumerate(solution)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


def print_solve_report(
    result: SolveResult,
    preview: Optional[PlacementGrid] = None,
    *,
    limit: Optional[int] = 50,
    stream=None,
) -> None:
    """Print preview, stats and the first solutions of a request."""

    stream = stream or sys.stdout
    if preview is not None:
        print("--- Preview ---", file=stream)
        print(format_preview(preview), file=stream)
        if preview.conflicts:
            print(f"  Conflicts at: {', '.join(map(str, preview.conflicts))}", file=stream)
        print(file=stream)

    if not result.attempted:
        print(f"Not searched: {result.message}", file=stream)
        return
    if result.message:
        print(f"{result.status.value}: {result.message}", file=stream)

    print(format_stats(result), file=stream)
    table = format_solutions(result, limit)
    if table:
        print(file=stream)
        print(table, file=stream)
        if limit is not None and result.returned > limit:
            print(f"... {result.returned - limit} more", file=stream)

"""CLI entrypoint for the crossword crossing finder."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from crossfinder.core.constants import (
    DEFAULT_CANDIDATE_LIMIT,
    DEFAULT_MAX_SOLUTIONS,
    DEFAULT_SEARCH_LIMIT,
    Orientation,
    SolveStatus,
)
from crossfinder.core.exceptions import CrossfinderError
from crossfinder.core.models import PlacementGrid, SlotConstraint, SolveResult
from crossfinder.data.lexicon import LexiconConfig, open_lexicon
from crossfinder.engine.preview import build_preview
from crossfinder.engine.solver import IntersectionSolver, SolverConfig, search_pattern
from crossfinder.engine.validator import check_constraints
from crossfinder.io.export import records_to_frame, solutions_to_frame, write_frame
from crossfinder.utils.logger import configure_logging, get_logger, resolve_level
from crossfinder.utils.pretty import format_preview, format_records, print_solve_report

LOGGER = get_logger("crossfinder.cli")

TABLE_SUFFIXES = {".csv", ".tsv"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find lexicon words filling 2 or 3 crossing crossword slots",
        epilog=(
            "Pattern syntax: '_' is one unknown letter, a leading '-' matches anywhere "
            "in the word, a trailing '*' anchors to the end of the word."
        ),
    )
    parser.add_argument("--lexicon", type=Path, help="Word database (.db/.sqlite) or TSV word list")
    parser.add_argument("--pattern1", type=str, default="", help="Pattern of slot 1")
    parser.add_argument("--pattern2", type=str, default="", help="Pattern of slot 2")
    parser.add_argument("--pattern3", type=str, default="", help="Optional pattern of slot 3")
    orientations = [o.value for o in Orientation]
    parser.add_argument("--dir1", choices=orientations, default="H", help="Orientation of slot 1")
    parser.add_argument(
        "--dir2",
        choices=orientations,
        default=None,
        help="Orientation of slot 2 (defaults to V with two slots, H with three)",
    )
    parser.add_argument("--dir3", choices=orientations, default="V", help="Orientation of slot 3")
    parser.add_argument("--pos1", type=int, help="Crossing position in slot 1 (1-based)")
    parser.add_argument("--pos2", type=int, help="Crossing position in slot 2 (1-based)")
    parser.add_argument("--pos3a", type=int, help="Position in slot 3 crossing slot 1")
    parser.add_argument("--pos3b", type=int, help="Position in slot 3 crossing slot 2")
    parser.add_argument(
        "--candidate-limit",
        type=int,
        default=DEFAULT_CANDIDATE_LIMIT,
        help="Maximum candidates retrieved per slot",
    )
    parser.add_argument(
        "--max-solutions",
        type=int,
        default=DEFAULT_MAX_SOLUTIONS,
        help="Stop after this many solutions",
    )
    parser.add_argument(
        "--preview-only",
        action="store_true",
        help="Only print the placement preview (no lexicon needed)",
    )
    parser.add_argument("--search", type=str, help="Run a single-pattern search instead")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_SEARCH_LIMIT,
        help="Maximum results for --search",
    )
    parser.add_argument("--only-favorites", action="store_true", help="Only favorite entries")
    parser.add_argument("--only-active", action="store_true", help="Only active entries")
    parser.add_argument("--show", type=int, default=50, help="Solutions printed to the terminal")
    parser.add_argument("--output", type=Path, help="Write results to .csv/.tsv (table) or JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_slots(args: argparse.Namespace) -> List[SlotConstraint]:
    use_third = bool(args.pattern3.strip())
    dir2 = args.dir2 or ("H" if use_third else "V")
    slots = [
        SlotConstraint(args.pattern1, Orientation(args.dir1), (args.pos1,)),
        SlotConstraint(args.pattern2, Orientation(dir2), (args.pos2,)),
    ]
    if use_third:
        slots.append(SlotConstraint(args.pattern3, Orientation(args.dir3), (args.pos3a, args.pos3b)))
    return slots


def result_payload(result: SolveResult, preview: Optional[PlacementGrid]) -> Dict[str, Any]:
    return {
        "status": result.status.value,
        "message": result.message,
        "candidate_counts": list(result.candidate_counts),
        "returned": result.returned,
        "truncated": result.truncated,
        "solutions": [[record.display for record in solution] for solution in result.solutions],
        "preview": preview.as_lists() if preview is not None else None,
    }


def _lexicon_config(args: argparse.Namespace) -> LexiconConfig:
    return LexiconConfig(
        path=args.lexicon,
        only_favorites=args.only_favorites,
        only_active=args.only_active,
    )


def run_search(args: argparse.Namespace) -> int:
    lexicon = open_lexicon(_lexicon_config(args))
    records = search_pattern(lexicon, args.search, limit=args.limit)
    print(f"{len(records)} result(s)")
    if records:
        print(format_records(records, limit=args.show))
    if args.output:
        if args.output.suffix.lower() in TABLE_SUFFIXES:
            write_frame(records_to_frame(records), args.output)
        else:
            payload = [record.__dict__ for record in records]
            args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return 0


def run_solve(args: argparse.Namespace, slots: List[SlotConstraint]) -> int:
    preview = build_preview(slots)
    if args.preview_only:
        if preview is None:
            print(f"No preview: {check_constraints(slots).message}")
            return 1
        print(format_preview(preview))
        return 0

    lexicon = open_lexicon(_lexicon_config(args))
    solver = IntersectionSolver(
        lexicon,
        SolverConfig(candidate_limit=args.candidate_limit, max_solutions=args.max_solutions),
    )
    result = solver.solve(slots)
    print_solve_report(result, preview, limit=args.show)

    if args.output:
        if args.output.suffix.lower() in TABLE_SUFFIXES:
            write_frame(solutions_to_frame(result), args.output)
        else:
            output_text = json.dumps(result_payload(result, preview), ensure_ascii=False, indent=2)
            args.output.write_text(output_text, encoding="utf-8")

    if result.status == SolveStatus.RETRIEVAL_FAILED:
        return 2
    return 0 if result.attempted else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(resolve_level(args.log_level))

    if args.search is None and not args.preview_only and args.lexicon is None:
        parser.error("--lexicon is required unless --preview-only is given")
    if args.search is not None and args.lexicon is None:
        parser.error("--search requires --lexicon")
    if args.search is None and (not args.pattern1.strip() or not args.pattern2.strip()):
        parser.error("--pattern1 and --pattern2 are required")
    if args.candidate_limit < 1 or args.max_solutions < 1 or args.limit < 1:
        parser.error("--candidate-limit, --max-solutions and --limit must be positive")

    try:
        if args.search is not None:
            return run_search(args)
        return run_solve(args, build_slots(args))
    except CrossfinderError as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Tabular export of search results as pandas DataFrames."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from ..core.models import SolveResult, WordRecord

RECORD_COLUMNS = ["word", "normalized", "length", "definitions", "favorite", "active", "source"]


def solution_columns(slot_count: int) -> List[str]:
    numbers = range(1, slot_count + 1)
    return (
        [f"word{i}" for i in numbers]
        + [f"len{i}" for i in numbers]
        + [f"defs{i}" for i in numbers]
    )


def solutions_to_frame(result: SolveResult) -> pd.DataFrame:
    """One row per solution: display forms, then lengths, then definition counts."""

    slot_count = len(result.candidate_counts)
    if not slot_count and result.solutions:
        slot_count = len(result.solutions[0])
    rows = []
    for solution in result.solutions:
        row = {}
        for i, record in enumerate(solution, start=1):
            row[f"word{i}"] = record.display
            row[f"len{i}"] = record.length
            row[f"defs{i}"] = record.definition_count
        rows.append(row)
    return pd.DataFrame(rows, columns=solution_columns(slot_count))


def records_to_frame(records: Iterable[WordRecord]) -> pd.DataFrame:
    rows = [
        {
            "word": record.display,
            "normalized": record.normalized,
            "length": record.length,
            "definitions": record.definition_count,
            "favorite": record.favorite,
            "active": record.active,
            "source": record.source,
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def write_frame(frame: pd.DataFrame, path: Path | str) -> Path:
    """Write ``frame`` as TSV for ``.tsv`` paths and CSV otherwise."""

    location = Path(path)
    location.parent.mkdir(parents=True, exist_ok=True)
    sep = "\t" if location.suffix.lower() == ".tsv" else ","
    frame.to_csv(location, sep=sep, index=False)
    return location


__all__ = ["records_to_frame", "solution_columns", "solutions_to_frame", "write_frame"]

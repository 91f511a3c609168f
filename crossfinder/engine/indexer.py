"""Bucket candidate words by the letters found at crossing positions."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..core.models import WordRecord


def _check_position(position: int) -> None:
    if position < 1:
        raise ValueError(f"Crossing positions are 1-based, got {position}")


def index_by_position(
    candidates: Iterable[WordRecord],
    position: int,
) -> Dict[str, List[WordRecord]]:
    """Map each letter seen at ``position`` to the candidates carrying it.

    Candidates too short to reach ``position`` are left out. Buckets keep the
    input order and keys appear in first-seen order.
    """

    _check_position(position)
    index: Dict[str, List[WordRecord]] = {}
    for record in candidates:
        letter = record.letter_at(position)
        if letter is None:
            continue
        index.setdefault(letter, []).append(record)
    return index


def index_by_pair(
    candidates: Iterable[WordRecord],
    first: int,
    second: int,
) -> Dict[Tuple[str, str], List[WordRecord]]:
    """Like :func:`index_by_position`, keyed by the letters at two positions."""

    _check_position(first)
    _check_position(second)
    index: Dict[Tuple[str, str], List[WordRecord]] = {}
    for record in candidates:
        letter_a = record.letter_at(first)
        letter_b = record.letter_at(second)
        if letter_a is None or letter_b is None:
            continue
        index.setdefault((letter_a, letter_b), []).append(record)
    return index


__all__ = ["index_by_pair", "index_by_position"]

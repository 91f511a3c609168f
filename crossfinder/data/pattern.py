"""Compile the compact pattern syntax into a :class:`PatternSpec`.

Syntax (after trimming, uppercasing and removing whitespace):

- a leading ``-`` lets the pattern appear anywhere in the word;
- a trailing ``*`` anchors the pattern to the end of the word;
- ``_`` stands for exactly one unknown letter.

``TE__`` matches words starting with ``TE`` followed by at least two letters,
``TE__*`` only four-letter words, ``-TE`` any word containing ``TE`` and
``-TE*`` any word ending in ``TE``.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..core.constants import CONTAINS_MARKER, END_ANCHOR_MARKER, WILDCARD, MatchMode
from ..core.models import PatternSpec
from .normalization import normalize_word

# (contains, end_anchored) -> mode
MODE_TABLE: Dict[Tuple[bool, bool], MatchMode] = {
    (False, False): MatchMode.PREFIX,
    (False, True): MatchMode.EXACT,
    (True, False): MatchMode.CONTAINS,
    (True, True): MatchMode.SUFFIX,
}


def compile_pattern(raw: Optional[str]) -> Optional[PatternSpec]:
    """Return the compiled pattern, or ``None`` when it cannot match anything useful.

    Empty input, input made only of markers and input made only of wildcards
    all compile to ``None``; callers treat that as "no results".
    """

    text = normalize_word(raw or "")
    if not text:
        return None

    contains = text.startswith(CONTAINS_MARKER)
    if contains:
        text = text[1:]

    end_anchored = text.endswith(END_ANCHOR_MARKER)
    if end_anchored:
        text = text[:-1]

    if not text:
        return None

    cells = tuple(None if char == WILDCARD else char for char in text)
    if all(cell is None for cell in cells):
        return None

    return PatternSpec(cells=cells, mode=MODE_TABLE[(contains, end_anchored)])


def pattern_cells(raw: Optional[str]) -> str:
    """Return the cell sequence crossing positions refer to ("" if uncompilable)."""

    spec = compile_pattern(raw)
    return spec.text if spec is not None else ""


__all__ = ["MODE_TABLE", "compile_pattern", "pattern_cells"]

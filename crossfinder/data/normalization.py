"""Shared helpers for word normalization."""

from __future__ import annotations

import re

WHITESPACE_RE = re.compile(r"\s+")


def normalize_word(text: str) -> str:
    """Return the uppercase, whitespace-free form used for all comparisons."""

    if not text:
        return ""
    return WHITESPACE_RE.sub("", text.strip().upper())


__all__ = ["normalize_word"]

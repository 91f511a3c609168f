"""Lexicon backends answering pattern queries for the solver."""

from __future__ import annotations

import csv
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from ..core.constants import MatchMode
from ..core.exceptions import LexiconLoadError, RetrievalError
from ..core.models import PatternSpec, WordRecord
from ..utils.logger import get_logger
from .normalization import normalize_word

LOGGER = get_logger(__name__)

SQLITE_SUFFIXES = frozenset({".db", ".sqlite", ".sqlite3"})


@dataclass
class LexiconConfig:
    """Where the lexicon lives and which entries pattern queries may return."""

    path: Path | str
    only_favorites: bool = False
    only_active: bool = False


class LexiconQuery(Protocol):
    def find_by_pattern(self, spec: PatternSpec, limit: int) -> List[WordRecord]:
        """Return at most ``limit`` records matching ``spec`` in lexicon order."""


def ordering_key(record: WordRecord) -> Tuple[bool, int, str]:
    """Favorites first, then entries with more definitions, then alphabetical."""

    return (not record.favorite, -record.definition_count, record.display.casefold())


def _parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes"}


def _parse_int(value: Optional[str]) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _parse_active(value: Optional[str]) -> bool:
    if value is None or not value.strip():
        return True
    return _parse_bool(value)


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")


class InMemoryLexicon:
    """Keeps every record in memory, pre-sorted by the lexicon ordering."""

    def __init__(
        self,
        records: Iterable[WordRecord],
        only_favorites: bool = False,
        only_active: bool = False,
    ) -> None:
        self.only_favorites = only_favorites
        self.only_active = only_active
        self._by_key: Dict[str, WordRecord] = {}
        for record in records:
            if record.key in self._by_key:
                LOGGER.debug("Skipping duplicate lexicon key %s", record.key)
                continue
            self._by_key[record.key] = record
        self._records: List[WordRecord] = sorted(self._by_key.values(), key=ordering_key)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, word: str) -> Optional[WordRecord]:
        return self._by_key.get(normalize_word(word))

    def iter_all(self) -> Iterable[WordRecord]:
        return iter(self._records)

    def find_by_pattern(self, spec: PatternSpec, limit: int) -> List[WordRecord]:
        _check_limit(limit)
        size = len(spec)
        exact = spec.mode is MatchMode.EXACT
        found: List[WordRecord] = []
        for record in self._records:
            if self.only_favorites and not record.favorite:
                continue
            if self.only_active and not record.active:
                continue
            length = len(record.normalized)
            if length < size or (exact and length != size):
                continue
            if spec.matches(record.normalized):
                found.append(record)
                if len(found) >= limit:
                    break
        return found


def load_tsv_lexicon(
    path: Path | str,
    only_favorites: bool = False,
    only_active: bool = False,
) -> InMemoryLexicon:
    """Load a tab-separated word list.

    ``base`` is required; ``normalise``, ``favoris``, ``actif``,
    ``definitions`` and ``source`` are optional columns. A missing ``actif``
    column or a blank ``actif`` cell both mean active.
    """

    location = Path(path)
    if not location.exists():
        raise LexiconLoadError(f"Missing lexicon file: {location}")

    records: List[WordRecord] = []
    with location.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, delimiter="\t")
        if not reader.fieldnames or "base" not in reader.fieldnames:
            raise LexiconLoadError(f"Lexicon file {location} has no 'base' column")
        for row in reader:
            display = (row.get("base") or "").strip()
            normalized = normalize_word(row.get("normalise") or display)
            if not normalized:
                continue
            records.append(
                WordRecord(
                    key=normalized,
                    display=display or normalized,
                    normalized=normalized,
                    length=len(normalized),
                    definition_count=_parse_int(row.get("definitions")),
                    favorite=_parse_bool(row.get("favoris")),
                    active=_parse_active(row.get("actif")),
                    source=(row.get("source") or "").strip(),
                )
            )
    LOGGER.info("Loaded %s lexicon rows from %s", len(records), location)
    return InMemoryLexicon(records, only_favorites=only_favorites, only_active=only_active)


class SqliteLexicon:
    """Queries the word database (``mots_fr_filtre`` + ``definitions`` tables).

    A new read-only connection is opened per query so slot retrievals can run
    on worker threads.
    """

    QUERY = """
        SELECT
          rowid,
          base,
          normalise,
          longueur,
          source,
          actif,
          favoris,
          (SELECT COUNT(*) FROM definitions d WHERE d.mot_normalise = mots_fr_filtre.normalise) AS nb_definitions
        FROM mots_fr_filtre
        WHERE {where}
        ORDER BY favoris DESC, nb_definitions DESC, base COLLATE NOCASE ASC, rowid ASC
        LIMIT ?
    """

    REQUIRED_TABLES = ("mots_fr_filtre", "definitions")

    def __init__(self, config: LexiconConfig) -> None:
        self.config = config
        self.path = Path(config.path)
        if not self.path.exists():
            raise LexiconLoadError(f"Missing lexicon database: {self.path}")
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                ).fetchall()
        except sqlite3.Error as exc:
            raise LexiconLoadError(f"Cannot open {self.path}: {exc}") from exc
        tables = {name for (name,) in rows}
        missing = [table for table in self.REQUIRED_TABLES if table not in tables]
        if missing:
            raise LexiconLoadError(f"{self.path} is missing tables: {', '.join(missing)}")

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True)

    def find_by_pattern(self, spec: PatternSpec, limit: int) -> List[WordRecord]:
        _check_limit(limit)
        where = ["normalise LIKE ? ESCAPE '\\'"]
        if self.config.only_favorites:
            where.append("favoris = 1")
        if self.config.only_active:
            where.append("actif = 1")
        sql = self.QUERY.format(where=" AND ".join(where))
        try:
            with closing(self._connect()) as conn:
                conn.row_factory = sqlite3.Row
                rows = conn.execute(sql, (spec.like, int(limit))).fetchall()
        except sqlite3.Error as exc:
            raise RetrievalError(f"Pattern query {spec.text!r} failed: {exc}") from exc
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: sqlite3.Row) -> WordRecord:
        normalized = normalize_word(row["normalise"] or "")
        length = row["longueur"]
        return WordRecord(
            key=normalized,
            display=row["base"] or normalized,
            normalized=normalized,
            length=int(length) if length is not None else len(normalized),
            definition_count=int(row["nb_definitions"] or 0),
            favorite=bool(row["favoris"]),
            active=bool(row["actif"]),
            source=row["source"] or "",
        )


def open_lexicon(config: LexiconConfig) -> LexiconQuery:
    """Pick the backend from the file suffix: SQLite databases or TSV word lists."""

    if Path(config.path).suffix.lower() in SQLITE_SUFFIXES:
        return SqliteLexicon(config)
    return load_tsv_lexicon(
        config.path,
        only_favorites=config.only_favorites,
        only_active=config.only_active,
    )


__all__ = [
    "InMemoryLexicon",
    "LexiconConfig",
    "LexiconQuery",
    "SqliteLexicon",
    "load_tsv_lexicon",
    "open_lexicon",
    "ordering_key",
]

"""Crossing finder for crossword constructors.

This package exposes the public API surface via:

- ``crossfinder.data.pattern.compile_pattern``: parses the pattern syntax.
- ``crossfinder.engine.solver.IntersectionSolver``: finds words filling 2 or 3 crossing slots.
- ``crossfinder.engine.preview.build_preview``: lays the slots out on a grid.
- ``crossfinder.engine.session.SolveSession``: applies only the newest request's results.
"""

from .core.constants import MatchMode, Orientation, SolveStatus
from .core.models import PatternSpec, PlacementGrid, SlotConstraint, SolveResult, WordRecord
from .data.lexicon import InMemoryLexicon, LexiconConfig, open_lexicon
from .data.pattern import compile_pattern
from .engine.preview import build_preview
from .engine.session import SolveSession
from .engine.solver import IntersectionSolver, SolverConfig, search_pattern

__all__ = [
    "InMemoryLexicon",
    "IntersectionSolver",
    "LexiconConfig",
    "MatchMode",
    "Orientation",
    "PatternSpec",
    "PlacementGrid",
    "SlotConstraint",
    "SolveResult",
    "SolveSession",
    "SolveStatus",
    "SolverConfig",
    "WordRecord",
    "build_preview",
    "compile_pattern",
    "open_lexicon",
    "search_pattern",
]

__version__ = "0.1.0"

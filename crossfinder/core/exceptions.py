"""Custom exception hierarchy for the crossing finder."""


class CrossfinderError(Exception):
    """Base exception for crossing finder failures."""


class LexiconLoadError(CrossfinderError):
    """Raised when a lexicon store cannot be opened or parsed."""


class RetrievalError(CrossfinderError):
    """Raised when the lexicon cannot answer a pattern query."""


class ConstraintError(CrossfinderError):
    """Raised by slot checks when a request is not ready to be solved."""

    def __init__(self, status, message: str) -> None:
        super().__init__(message)
        self.status = status

"""Exceptions raised by the retrieval engine.

Every error is reported synchronously to the caller of the failing operation;
nothing is retried internally.
"""
from __future__ import annotations
from typing import Optional


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(EngineError, ValueError):
    """Unknown stop-word language, bad character filter, or conflicting options."""


class EmptyVectorNormalization(EngineError, ArithmeticError):
    """A non-empty vector has zero Euclidean norm and cannot be L2-normalized."""

    def __init__(self, message: str = "cannot normalize a zero vector", doc_id: Optional[str] = None):
        if doc_id is not None:
            message = f"{message} (document {doc_id!r})"
        super().__init__(message)
        self.doc_id = doc_id


class QueryBeforeBuild(EngineError, RuntimeError):
    """The model has no IDF table yet; call build() first."""


class StaleModel(QueryBeforeBuild):
    """Documents were added after the last build(); scores would be inconsistent."""


class RebuildUnavailable(EngineError, RuntimeError):
    """The model was loaded without raw term frequencies and cannot be rebuilt."""

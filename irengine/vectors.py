"""Sparse vector helpers. A vector is a ``{token: weight}`` dict."""

from __future__ import annotations
import math
from typing import Dict, Mapping, Optional

from .errors import EmptyVectorNormalization


def l2_norm(vec: Mapping[str, float]) -> float:
    """Euclidean magnitude of a sparse vector."""
    return math.sqrt(sum(w * w for w in vec.values()))


def l2_normalize(vec: Mapping[str, float], doc_id: Optional[str] = None) -> Dict[str, float]:
    """Return a new vector scaled to unit length.

    An empty vector stays empty. A non-empty vector whose norm is zero raises
    ``EmptyVectorNormalization`` instead of producing NaN weights.
    """
    if not vec:
        return {}
    norm = l2_norm(vec)
    if norm == 0.0:
        raise EmptyVectorNormalization(doc_id=doc_id)
    return {t: w / norm for t, w in vec.items()}


def dot(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """Dot product over the tokens present in both vectors."""
    if len(b) < len(a):
        a, b = b, a
    return sum(w * b[t] for t, w in a.items() if t in b)

from __future__ import annotations
import math
from collections import Counter
from typing import Dict

from .config import DEFAULT_CONFIG, EngineConfig
from .preprocess import preprocess


def term_frequencies(raw_text: str, config: EngineConfig = DEFAULT_CONFIG) -> Dict[str, float]:
    """Sparse log-dampened term frequencies: tf(t) = ln(1 + count(t)).

    Only tokens present in the preprocessed text appear in the mapping.
    """
    text = preprocess(raw_text, config)
    if not text:
        return {}
    counts = Counter(text.split(" "))
    return {word: math.log(1.0 + n) for word, n in counts.items()}

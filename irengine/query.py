"""Ranking of documents against a free-text query by cosine similarity."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .corpus import CorpusModel
from .errors import EmptyVectorNormalization
from .term_freq import term_frequencies
from .vectors import dot, l2_normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    id: str
    score: float


class QueryEngine:
    """Scores queries against a built ``CorpusModel``. Never mutates the model."""

    def __init__(self, corpus: CorpusModel):
        self.corpus = corpus

    def vectorize(self, text: str) -> Dict[str, float]:
        """Query TF-IDF vector, L2-normalized.

        Tokens missing from the IDF table weigh zero. Raises ``EmptyVectorNormalization``
        when the query has tokens but all of them weigh zero.
        """
        self.corpus.ensure_ready()
        idf = self.corpus.idf
        tf = term_frequencies(text.lower(), self.corpus.config)
        weighted = {word: w * idf.get(word, 0.0) for word, w in tf.items()}
        return l2_normalize(weighted)

    def query(self, text: str, top_k: Optional[int] = None) -> List[SearchResult]:
        """Return documents with a strictly positive score, best first.

        Equal scores keep document insertion order.
        """
        try:
            qvec = self.vectorize(text)
        except EmptyVectorNormalization:
            logger.debug("query %r has no weighted tokens; nothing can match", text)
            return []
        if not qvec:
            return []

        results: List[SearchResult] = []
        for doc in self.corpus.documents:
            score = dot(qvec, doc.tfidf)
            if score > 0:
                results.append(SearchResult(doc.id, score))
        # sorted() is stable, so ties stay in insertion order
        results = sorted(results, key=lambda r: r.score, reverse=True)
        if top_k is not None:
            results = results[: max(0, top_k)]
        logger.debug("query %r matched %d documents", text, len(results))
        return results

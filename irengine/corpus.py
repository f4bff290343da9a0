"""Corpus model: owns the documents and the IDF table.

Documents keep two vectors. ``tf`` is the raw log-dampened term frequency computed at
ingestion and never touched again; ``tfidf`` is derived from it on every ``build()``.
Rebuilding therefore never applies IDF weighting twice.
"""
from __future__ import annotations
import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .config import DEFAULT_CONFIG, EngineConfig
from .errors import QueryBeforeBuild, RebuildUnavailable, StaleModel
from .term_freq import term_frequencies
from .vectors import l2_normalize

logger = logging.getLogger(__name__)


@dataclass
class Document:
    id: str
    tf: Optional[Dict[str, float]]  # None when restored from a dump without raw frequencies
    tfidf: Dict[str, float] = field(default_factory=dict)


def inverse_document_frequencies(vectors: Iterable[Dict[str, float]]) -> Dict[str, float]:
    """idf(t) = ln(V / (1 + df(t))) with V the number of distinct tokens in the corpus.

    Normalizing by vocabulary size instead of document count changes magnitudes but
    not ranking, since V is shared by every token and cosine similarity ignores scale.
    """
    df: Counter = Counter()
    for vec in vectors:
        df.update(vec.keys())
    vocabulary_size = float(len(df))
    return {word: math.log(vocabulary_size / (1 + n)) for word, n in df.items()}


class CorpusModel:
    """Ordered document collection plus the IDF table built over it."""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.documents: List[Document] = []
        self.idf: Dict[str, float] = {}
        self.built = False
        self.stale = False

    def __len__(self) -> int:
        return len(self.documents)

    def add_document(self, doc_id: str, raw_text: str) -> Document:
        """Store a document with its provisional term-frequency vector."""
        doc = Document(id=str(doc_id), tf=term_frequencies(raw_text or "", self.config))
        self.documents.append(doc)
        self.stale = self.built
        logger.debug("added document %r with %d distinct tokens", doc.id, len(doc.tf))
        return doc

    def build(self) -> None:
        """(Re)compute IDF and every document's normalized TF-IDF vector.

        Nothing is committed unless every document normalizes, so a failed build
        leaves the previous model intact.
        """
        missing = [d.id for d in self.documents if d.tf is None]
        if missing:
            raise RebuildUnavailable(
                f"{len(missing)} document(s) were loaded without term frequencies, e.g. {missing[0]!r}"
            )

        idf = inverse_document_frequencies(d.tf for d in self.documents)
        finals = []
        for doc in self.documents:
            weighted = {word: tf * idf[word] for word, tf in doc.tf.items()}
            finals.append(l2_normalize(weighted, doc_id=doc.id))

        self.idf = idf
        for doc, vec in zip(self.documents, finals):
            doc.tfidf = vec
        self.built = True
        self.stale = False
        logger.info("built model: %d documents, vocabulary of %d tokens", len(self.documents), len(idf))

    def ensure_ready(self) -> None:
        if not self.built:
            raise QueryBeforeBuild("build() must be called before querying the model")
        if self.stale:
            raise StaleModel("documents were added after the last build(); call build() again")

    def reset(self) -> None:
        self.documents = []
        self.idf = {}
        self.built = False
        self.stale = False

    @classmethod
    def restore(
        cls,
        documents: Iterable[Tuple[str, Dict[str, float], Optional[Dict[str, float]]]],
        idf: Dict[str, float],
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> "CorpusModel":
        """Recreate a built model from ``(id, tfidf, tf)`` triples and an IDF table."""
        model = cls(config)
        for doc_id, tfidf, tf in documents:
            model.documents.append(
                Document(id=doc_id, tf=dict(tf) if tf is not None else None, tfidf=dict(tfidf))
            )
        model.idf = dict(idf)
        model.built = True
        return model

"""In-memory TF-IDF retrieval engine.

Typical use::

    eng = new_engine(stop_words="english")
    for url, html in pages:
        eng.add_document(url, html)
    eng.build()
    for result in eng.query("keyword"):
        print(result.id, result.score)
"""
from __future__ import annotations
import threading
from typing import Any, Dict, List, Optional, Tuple

from . import serialize as _ser
from .config import EngineConfig, make_config
from .corpus import CorpusModel
from .errors import InvalidConfiguration
from .query import QueryEngine, SearchResult


class Engine:
    """Owns one corpus model and answers queries against it.

    All public operations hold a re-entrant lock, so one engine can be shared by
    request threads. Vectors handed out are copies.
    """

    def __init__(self, config: Optional[EngineConfig] = None, corpus: Optional[CorpusModel] = None):
        self._config = config or make_config()
        self._corpus = corpus if corpus is not None else CorpusModel(self._config)
        self._corpus.config = self._config
        self._queries = QueryEngine(self._corpus)
        self._lock = threading.RLock()

    # ---------------------------
    # mutation
    # ---------------------------
    def add_document(self, doc_id: str, body: str) -> None:
        with self._lock:
            self._corpus.add_document(doc_id, body)

    def build(self) -> None:
        with self._lock:
            self._corpus.build()

    # older name for build()
    vectorize = build

    def reset(self) -> None:
        with self._lock:
            self._corpus.reset()

    # ---------------------------
    # reads
    # ---------------------------
    def query(self, text: str, top_k: Optional[int] = None) -> List[SearchResult]:
        with self._lock:
            return self._queries.query(text, top_k=top_k)

    def query_vector(self, text: str) -> Dict[str, float]:
        with self._lock:
            return self._queries.vectorize(text)

    def serialize(self, include_tf: bool = False) -> Dict[str, Any]:
        with self._lock:
            return _ser.serialize(self._corpus, include_tf=include_tf)

    def to_json(self, include_tf: bool = False) -> str:
        with self._lock:
            return _ser.to_json(self._corpus, include_tf=include_tf)

    def load(self, data: Any) -> None:
        """Replace the corpus with a dumped model, keeping this engine's config."""
        corpus = _ser.load(data, self._config)
        with self._lock:
            self._corpus = corpus
            self._queries = QueryEngine(corpus)

    @classmethod
    def from_dict(cls, data: Any, config: Optional[EngineConfig] = None) -> "Engine":
        config = config or make_config()
        return cls(config, _ser.load(data, config))

    @classmethod
    def from_json(cls, text: str, config: Optional[EngineConfig] = None) -> "Engine":
        config = config or make_config()
        return cls(config, _ser.from_json(text, config))

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def is_built(self) -> bool:
        with self._lock:
            return self._corpus.built

    @property
    def is_stale(self) -> bool:
        with self._lock:
            return self._corpus.stale

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._corpus.idf))

    @property
    def idf(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._corpus.idf)

    @property
    def document_ids(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(d.id for d in self._corpus.documents)

    def vector(self, doc_id: str) -> Dict[str, float]:
        """Final TF-IDF vector of the first document stored under ``doc_id``."""
        with self._lock:
            for doc in self._corpus.documents:
                if doc.id == doc_id:
                    return dict(doc.tfidf)
        raise KeyError(doc_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._corpus)


def new_engine(config: Optional[EngineConfig] = None, **options: Any) -> Engine:
    """Create an engine from a config or from ``stop_words`` / ``char_filter`` options."""
    if config is not None and options:
        raise InvalidConfiguration("pass either a config or keyword options, not both")
    if config is None:
        config = make_config(**options)
    return Engine(config)

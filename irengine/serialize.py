"""Structured dumps of a built model.

Shape::

    {"documents": [{"id": ..., "tfidf": {token: weight}}], "idf": {token: weight}}

Documents keep insertion order and token maps are sorted, so dumps diff cleanly.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .config import DEFAULT_CONFIG, EngineConfig
from .corpus import CorpusModel


class DocumentDump(BaseModel):
    id: str
    tfidf: Dict[str, float]
    tf: Optional[Dict[str, float]] = Field(None, description="Raw term frequencies; needed to rebuild")


class EngineDump(BaseModel):
    documents: List[DocumentDump] = Field(default_factory=list)
    idf: Dict[str, float] = Field(default_factory=dict)


def _sorted(vec: Dict[str, float]) -> Dict[str, float]:
    return {k: vec[k] for k in sorted(vec)}


def dump_model(corpus: CorpusModel, include_tf: bool = False) -> EngineDump:
    corpus.ensure_ready()
    docs = []
    for doc in corpus.documents:
        tf = _sorted(doc.tf) if include_tf and doc.tf is not None else None
        docs.append(DocumentDump(id=doc.id, tfidf=_sorted(doc.tfidf), tf=tf))
    return EngineDump(documents=docs, idf=_sorted(corpus.idf))


def serialize(corpus: CorpusModel, include_tf: bool = False) -> Dict[str, Any]:
    """Plain-dict dump; ``tf`` appears only when requested."""
    return dump_model(corpus, include_tf).model_dump(exclude_none=True)


def to_json(corpus: CorpusModel, include_tf: bool = False) -> str:
    return dump_model(corpus, include_tf).model_dump_json(indent=2, exclude_none=True)


def load(data: Any, config: EngineConfig = DEFAULT_CONFIG) -> CorpusModel:
    """Rehydrate a built model from a dict (or ``EngineDump``)."""
    dump = data if isinstance(data, EngineDump) else EngineDump.model_validate(data)
    return CorpusModel.restore(
        ((d.id, d.tfidf, d.tf) for d in dump.documents),
        dump.idf,
        config,
    )


def from_json(text: str, config: EngineConfig = DEFAULT_CONFIG) -> CorpusModel:
    return load(EngineDump.model_validate_json(text), config)

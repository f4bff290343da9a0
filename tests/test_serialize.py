import json

import pytest

from irengine.engine import Engine, new_engine
from irengine.errors import QueryBeforeBuild, RebuildUnavailable


@pytest.fixture
def built():
    eng = new_engine(stop_words="english")
    eng.add_document("doc1", "The cat sat on the mat")
    eng.add_document("doc2", "The dog sat on the log")
    eng.add_document("doc3", "<p>A bird sat in a tree</p>")
    eng.build()
    return eng


def test_dump_shape(built):
    data = built.serialize()
    assert list(data) == ["documents", "idf"]
    assert [d["id"] for d in data["documents"]] == ["doc1", "doc2", "doc3"]
    assert list(data["documents"][0]) == ["id", "tfidf"]
    assert data["idf"] == built.idf
    # token maps are sorted for stable diffs
    assert list(data["idf"]) == sorted(data["idf"])
    assert list(data["documents"][0]["tfidf"]) == ["cat", "mat", "sat"]


def test_json_is_indented_and_parseable(built):
    text = built.to_json()
    assert text.startswith('{\n  "documents": [')
    assert json.loads(text) == built.serialize()


def test_json_is_stable(built):
    assert built.to_json() == built.to_json()


def test_round_trip(built):
    restored = Engine.from_json(built.to_json(), config=built.config)
    assert restored.document_ids == built.document_ids
    assert restored.idf == built.idf
    for doc_id in built.document_ids:
        assert restored.vector(doc_id) == pytest.approx(built.vector(doc_id))
    assert restored.is_built
    assert restored.query("cat sat") == built.query("cat sat")


def test_restored_model_without_tf_cannot_rebuild(built):
    restored = Engine.from_dict(built.serialize(), config=built.config)
    with pytest.raises(RebuildUnavailable):
        restored.build()
    # a failed rebuild leaves the loaded model usable
    assert [r.id for r in restored.query("cat")] == ["doc1"]


def test_include_tf_allows_rebuild(built):
    data = built.serialize(include_tf=True)
    assert "tf" in data["documents"][0]
    restored = Engine.from_dict(data, config=built.config)
    restored.add_document("doc4", "a cat in a hat")
    restored.build()

    fresh = new_engine(built.config)
    for doc_id, body in [("doc1", "The cat sat on the mat"), ("doc2", "The dog sat on the log"),
                         ("doc3", "<p>A bird sat in a tree</p>"), ("doc4", "a cat in a hat")]:
        fresh.add_document(doc_id, body)
    fresh.build()
    assert restored.idf == pytest.approx(fresh.idf)
    assert restored.vector("doc4") == pytest.approx(fresh.vector("doc4"))


def test_serialize_requires_build():
    eng = new_engine()
    eng.add_document("a", "cat")
    with pytest.raises(QueryBeforeBuild):
        eng.serialize()

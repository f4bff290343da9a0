import math

import pytest

from irengine.engine import new_engine
from irengine.query import SearchResult
from irengine.vectors import dot, l2_norm, l2_normalize
from irengine.errors import EmptyVectorNormalization


@pytest.fixture
def pets():
    eng = new_engine(stop_words="english")
    eng.add_document("doc1", "The cat sat on the mat")
    eng.add_document("doc2", "The dog sat on the log")
    eng.build()
    return eng


def test_cat_ranks_doc1_only(pets):
    results = pets.query("cat")
    assert [r.id for r in results] == ["doc1"]
    assert results[0].score > 0


def test_shared_term_matches_both(pets):
    results = pets.query("sat")
    assert {r.id for r in results} == {"doc1", "doc2"}
    assert results[0].score == pytest.approx(results[1].score)


def test_query_is_case_insensitive(pets):
    assert pets.query("CAT") == pets.query("cat")


def test_stop_words_or_unknown_tokens_give_no_results(pets):
    assert pets.query("the on") == []
    assert pets.query("unicorn") == []
    assert pets.query("") == []
    assert pets.query("12345 !!!") == []


def test_query_vector_has_unit_norm(pets):
    vec = pets.query_vector("cat sat unicorn")
    assert l2_norm(vec) == pytest.approx(1.0, abs=1e-9)
    assert vec["unicorn"] == 0.0


def test_unknown_only_query_vector_cannot_be_normalized(pets):
    with pytest.raises(EmptyVectorNormalization):
        pets.query_vector("unicorn")


def test_ranking_by_term_weight():
    eng = new_engine()
    eng.add_document("mostly-cat", "cat cat cat dog")
    eng.add_document("mostly-dog", "cat dog dog dog")
    eng.add_document("birds", "fish bird")
    eng.add_document("rocks", "tree rock")
    eng.build()
    results = eng.query("cat")
    assert [r.id for r in results] == ["mostly-cat", "mostly-dog"]
    assert results[0].score == pytest.approx(2 / math.sqrt(5))
    assert results[1].score == pytest.approx(1 / math.sqrt(5))


def test_ties_keep_insertion_order():
    eng = new_engine()
    eng.add_document("b", "alpha beta")
    eng.add_document("a", "alpha beta")
    eng.add_document("c", "gamma delta")
    eng.build()
    results = eng.query("alpha")
    assert [r.id for r in results] == ["b", "a"]
    assert results[0].score == results[1].score == pytest.approx(1 / math.sqrt(2))


def test_uniform_scaling_of_counts_does_not_change_scores():
    eng = new_engine()
    eng.add_document("once", "cat dog")
    eng.add_document("twice", "cat cat dog dog")
    eng.add_document("other", "fish bird")
    eng.build()
    assert eng.vector("once") == pytest.approx(eng.vector("twice"))
    scores = {r.id: r.score for r in eng.query("cat")}
    assert scores["once"] == pytest.approx(scores["twice"])


def test_scores_are_cosines(pets):
    q = pets.query_vector("cat mat")
    for r in pets.query("cat mat"):
        assert r.score == pytest.approx(dot(q, pets.vector(r.id)))
        assert 0 < r.score <= 1 + 1e-9


def test_top_k_truncates():
    eng = new_engine()
    for i, body in enumerate(["red apple", "red car", "red wine", "blue sky"]):
        eng.add_document(f"d{i}", body)
    eng.build()
    assert len(eng.query("red")) == 3
    assert [r.id for r in eng.query("red", top_k=2)] == ["d0", "d1"]
    assert eng.query("red", top_k=0) == []


def test_query_does_not_mutate_model(pets):
    before = pets.serialize()
    pets.query("cat sat mat dog")
    assert pets.serialize() == before


def test_search_result_fields():
    r = SearchResult("x", 0.5)
    assert (r.id, r.score) == ("x", 0.5)


def test_vector_helpers():
    assert l2_normalize({}) == {}
    assert l2_normalize({"a": 3.0, "b": 4.0}) == pytest.approx({"a": 0.6, "b": 0.8})
    with pytest.raises(EmptyVectorNormalization):
        l2_normalize({"a": 0.0})
    assert dot({"a": 1.0, "b": 2.0}, {"b": 3.0, "c": 5.0}) == 6.0

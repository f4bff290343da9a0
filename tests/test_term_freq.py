import math

from irengine.config import make_config
from irengine.term_freq import term_frequencies


def test_log_dampened_counts():
    tf = term_frequencies("cat cat dog")
    assert tf == {"cat": math.log(3), "dog": math.log(2)}


def test_counts_after_preprocessing():
    tf = term_frequencies("Cat, CAT! <b>cat</b>")
    assert tf == {"cat": math.log(4)}


def test_empty_text_has_no_tokens():
    assert term_frequencies("") == {}
    assert term_frequencies("  ,,, 42 ") == {}
    assert "" not in term_frequencies("  spaced   out  ")


def test_only_stop_words_gives_empty_vector():
    assert term_frequencies("the and of", make_config(stop_words="en")) == {}

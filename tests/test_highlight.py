"""TDD: Search/highlight tests written FIRST"""
import pytest

from fastwhisper_client.highlight import count_matches, find_matches, highlight


@pytest.mark.parametrize("text", ["", "The Cat sat", "a.b*c (d)"])
def test_empty_term_returns_text_unchanged(text):
    assert highlight(text, "") == text


def test_case_insensitive_match_keeps_original_casing():
    assert highlight("The Cat sat", "cat") == "The <mark>Cat</mark> sat"


def test_all_occurrences_are_wrapped():
    assert highlight("cat CAT caT", "cat") == "<mark>cat</mark> <mark>CAT</mark> <mark>caT</mark>"


def test_matches_do_not_overlap():
    assert highlight("aaaa", "aa") == "<mark>aa</mark><mark>aa</mark>"
    assert find_matches("aaa", "aa") == [(0, 2)]


def test_empty_text_with_term():
    assert highlight("", "cat") == ""


def test_term_is_literal_not_regex():
    text = "costs $5.00 (approx) vs 5x00"
    assert highlight(text, "5.00") == "costs $<mark>5.00</mark> (approx) vs 5x00"
    assert highlight(text, "(approx)") == "costs $5.00 <mark>(approx)</mark> vs 5x00"


@pytest.mark.parametrize("term", ["[", "(", "*", "\\", "a|b", ".*"])
def test_pattern_special_terms_never_raise(term):
    assert highlight("nothing special here", term) == "nothing special here"


def test_custom_markers():
    assert highlight("say hi", "HI", "[", "]") == "say [hi]"


def test_non_matched_text_preserved_exactly():
    text = "line one\n\ttab <b>html</b> & more"
    marked = highlight(text, "one")
    assert marked.replace("<mark>", "").replace("</mark>", "") == text


def test_find_matches_spans():
    assert find_matches("The Cat sat on the cat", "cat") == [(4, 7), (19, 22)]


def test_count_matches():
    assert count_matches("to be or not to be", "TO") == 2
    assert count_matches("anything", "") == 0


def test_highlight_does_not_mutate_input():
    text = "The Cat sat"
    highlight(text, "cat")
    assert text == "The Cat sat"

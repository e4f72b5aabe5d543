"""Tests for neutral-language cleaning of candidate facts."""

from __future__ import annotations

import pytest

from sponsor_facts.core.cleaner import clean_text


def test_clean_text_strips_promotional_words():
    result = clean_text("the leading renowned provider")
    assert result == "the provider"
    assert "leading" not in result
    assert "renowned" not in result


def test_clean_text_strips_every_listed_term_case_insensitively():
    raw = (
        "Leading PREMIER renowned World-Class world class iconic Innovative "
        "cutting-edge Award-Winning award winning best Ultimate "
        "state-of-the-art top-tier Top Tier widgets"
    )
    assert clean_text(raw) == "widgets"


def test_clean_text_keeps_words_that_only_contain_a_term():
    assert clean_text("A bestseller from Premierland") == "A bestseller from Premierland"


def test_clean_text_normalizes_quotes_and_dashes():
    assert clean_text("“Acme”—it’s a ‘maker’") == "\"Acme\" it's a 'maker'"


def test_clean_text_removes_parentheticals_and_collapses_whitespace():
    assert clean_text("  Acme   (founded 1990)\n makes\tthings  ") == "Acme makes things"


def test_clean_text_nested_parentheses_are_a_known_limitation():
    # Non-greedy matching stops at the first closing parenthesis.
    assert clean_text("Acme (a (b) c) builds") == "Acme c) builds"


@pytest.mark.parametrize("raw", [None, "", "   ", "(only an aside)"])
def test_clean_text_empty_inputs_return_empty_string(raw):
    assert clean_text(raw) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "the leading renowned provider",
        "world best class",
        "Acme (a (b) c) builds",
        "“Quoted” — text (aside) with  spaces",
        "top best tier service",
        "Leading, innovative, and iconic.",
        "founded in 1998",
    ],
)
def test_clean_text_is_idempotent(raw):
    once = clean_text(raw)
    assert clean_text(once) == once

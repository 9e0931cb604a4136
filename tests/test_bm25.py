"""Tests for the tokenizer and BM25 index."""

from __future__ import annotations

import pytest

from uxpro.core.bm25 import BM25Index, Document, tokenize
from uxpro.core.error_handling import IndexingError


def _index(*contents: str) -> BM25Index:
    return BM25Index([Document(id=f"d{i}", content=c, data={}) for i, c in enumerate(contents)])


def test_tokenize_lowercases_and_splits_punctuation() -> None:
    assert tokenize("Glassmorphism, dark-mode card!") == ["glassmorphism", "dark", "mode", "card"]


def test_tokenize_drops_single_characters() -> None:
    assert tokenize("a b c UI x") == ["ui"]


@pytest.mark.parametrize(
    "text",
    ["Hello, World", "backdrop-filter: blur(12px);", "  spaced   out  ", "#0F172A / #FFF", ""],
)
def test_tokenize_is_idempotent(text: str) -> None:
    once = tokenize(text)
    assert tokenize(" ".join(once)) == once


def test_empty_index_is_rejected() -> None:
    with pytest.raises(IndexingError):
        BM25Index([])


@pytest.mark.parametrize("query", ["", "   ", "!!", "a"])
def test_queries_without_tokens_return_nothing(query: str) -> None:
    assert _index("alpha beta").search(query) == []


def test_document_is_relevant_to_its_own_text() -> None:
    index = _index("alpha beta", "gamma delta")
    results = index.search("alpha beta")
    assert results[0].document.id == "d0"
    assert results[0].score > 0


def test_scores_are_never_negative() -> None:
    index = _index("card card card", "card", "table", "card layout grid")
    for position in range(len(index)):
        assert index.score("card grid table", position) >= 0


def test_search_respects_max_results() -> None:
    index = _index(*["card"] * 5)
    assert len(index.search("card", 2)) == 2
    assert len(index.search("card")) == 3


def test_only_positive_scores_are_returned() -> None:
    index = _index("card", "table", "grid")
    results = index.search("card")
    assert [r.document.id for r in results] == ["d0"]


def test_ties_keep_document_order() -> None:
    index = _index("card layout", "card layout", "card layout")
    assert [r.document.id for r in index.search("card", 3)] == ["d0", "d1", "d2"]


def test_idf_never_grows_as_a_term_becomes_common() -> None:
    rare = _index("pixel grid", "font", "color")
    common = _index("pixel grid", "font", "color", "pixel art", "pixel shader")
    assert common.idf("pixel") <= rare.idf("pixel")
    assert rare.idf("pixel") > 0


def test_document_frequency_counts_documents_not_occurrences() -> None:
    index = _index("card card card", "card", "table")
    assert index.document_frequency("card") == 2
    assert index.document_frequency("missing") == 0


def test_average_length_is_floored_for_token_free_corpora() -> None:
    index = _index("a", "?")
    assert index.avg_doc_length == 1.0
    assert index.search("anything") == []


def test_repeated_query_terms_count_again() -> None:
    index = _index("card layout", "table grid")
    once = index.score("card", 0)
    twice = index.score("card card", 0)
    assert twice == pytest.approx(2 * once)

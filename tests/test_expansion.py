"""Tests for query expansion and search input validation."""

from __future__ import annotations

import pytest

from uxpro.core.error_handling import SearchValidationError
from uxpro.core.expansion import (
    DOMAIN_EXPANSIONS,
    expand_query,
    validate_choice,
    validate_search_input,
)


def test_expansion_appends_related_terms() -> None:
    assert expand_query("crypto wallet") == "crypto wallet dashboard numbers metrics chart dark mode"


def test_expansion_applies_longest_trigger_first() -> None:
    expected = " ".join(
        ["ios flutter app", DOMAIN_EXPANSIONS["ios flutter"], DOMAIN_EXPANSIONS["ios"]]
    )
    assert expand_query("ios flutter app") == expected


def test_expansion_keeps_duplicate_terms() -> None:
    expanded = expand_query("saas landing")
    assert DOMAIN_EXPANSIONS["saas"] in expanded
    assert DOMAIN_EXPANSIONS["landing"] in expanded
    assert expanded.count("toggle") == 2


def test_expansion_is_case_insensitive_but_keeps_query_text() -> None:
    expanded = expand_query("Crypto Wallet")
    assert expanded.startswith("Crypto Wallet ")
    assert expanded.endswith(DOMAIN_EXPANSIONS["crypto"])


def test_query_without_triggers_is_unchanged() -> None:
    assert expand_query("zebra") == "zebra"


def test_valid_input_is_trimmed_and_expanded() -> None:
    request = validate_search_input("  glassmorphism  ", 4.0)
    assert request.query == "glassmorphism"
    assert request.expanded_query == "glassmorphism"
    assert request.max_results == 4


def test_default_result_count() -> None:
    assert validate_search_input("cards").max_results == 3
    assert validate_search_input("cards", default=10).max_results == 10


@pytest.mark.parametrize(
    ("query", "max_results", "message"),
    [
        (None, None, "Query is required"),
        (123, None, "Query must be a string"),
        ("   ", None, "Query cannot be empty"),
        ("x" * 501, None, "Query exceeds maximum length of 500 characters"),
        ("cards", "3", "max_results must be a positive integer"),
        ("cards", 2.5, "max_results must be a positive integer"),
        ("cards", True, "max_results must be a positive integer"),
        ("cards", 0, "max_results must be at least 1"),
        ("cards", -4, "max_results must be at least 1"),
        ("cards", 51, "max_results cannot exceed 50"),
    ],
)
def test_invalid_input_is_rejected(query, max_results, message: str) -> None:
    with pytest.raises(SearchValidationError) as excinfo:
        validate_search_input(query, max_results)
    assert str(excinfo.value) == message


def test_query_at_length_limit_is_accepted() -> None:
    assert validate_search_input("x" * 500).query == "x" * 500


def test_custom_limit() -> None:
    with pytest.raises(SearchValidationError, match="cannot exceed 5"):
        validate_search_input("cards", 6, limit=5)


def test_validate_choice_normalises_and_rejects() -> None:
    assert validate_choice(None, ("light", "dark"), "mode") is None
    assert validate_choice(" Dark ", ("light", "dark"), "mode") == "dark"
    with pytest.raises(SearchValidationError) as excinfo:
        validate_choice("sepia", ("light", "dark"), "mode")
    assert str(excinfo.value) == 'Invalid mode: "sepia". Must be one of: light, dark'

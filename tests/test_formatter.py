"""Tests for the JSON tool output envelope."""

from __future__ import annotations

import json

from uxpro.core.error_handling import SearchError
from uxpro.core.search import SearchContext, search_all
from uxpro.output import ToolOutputFormatter


def test_search_hits_envelope(search_context: SearchContext) -> None:
    formatter = ToolOutputFormatter()
    hits = search_all(search_context, "glassmorphism for iphone", 5)
    output = formatter.format("search_all", hits, query="glassmorphism for iphone", elapsed_seconds=0.002)

    assert formatter.validate_output(output)
    payload = json.loads(output)
    assert payload["metadata"]["tool"] == "search_all"
    assert payload["metadata"]["total_results"] == len(hits)
    assert payload["metadata"]["elapsed_ms"] == 2.0
    assert payload["error"] is None
    assert payload["hints"]["detected_domains"][0]["domain"] == "style"
    assert payload["hints"]["detected_platform"]["platform"] == "mobile-ios"


def test_error_envelope() -> None:
    formatter = ToolOutputFormatter()
    payload = formatter.build("search_stack", SearchError('Unknown stack: "x". Available stacks: react'))
    assert payload["results"] is None
    assert payload["error"].startswith("Unknown stack")
    assert payload["metadata"]["total_results"] == 0
    assert payload["hints"]["tips"] == ["Use one of the names listed in the error message"]


def test_empty_results_get_a_tip() -> None:
    payload = ToolOutputFormatter().build("search_styles", [], query="zebra")
    assert payload["results"] == []
    assert payload["hints"]["tips"]


def test_mapping_payload_counts_as_one_result() -> None:
    payload = ToolOutputFormatter().build(
        "design_system", {"query": "fintech", "platform": {"platform": "web"}}
    )
    assert payload["metadata"]["total_results"] == 1
    assert payload["hints"]["detected_platform"] == {"platform": "web"}


def test_validate_output_rejects_foreign_json() -> None:
    formatter = ToolOutputFormatter()
    assert not formatter.validate_output("{}")
    assert not formatter.validate_output("not json")
    assert formatter.get_schema()["required"] == ["metadata", "results", "error", "hints"]

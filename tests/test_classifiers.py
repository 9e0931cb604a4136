"""Tests for domain, stack, platform and page-intent classification."""

from __future__ import annotations

import pytest

from uxpro.core.classifiers import (
    classify_page_intent,
    detect_domain,
    detect_domains,
    detect_platform_intent,
    detect_stacks,
    infer_framework,
    matches_keyword,
)
from uxpro.core.settings import RankingConfig


def _domains(query: str) -> dict:
    return {match.domain: match.confidence for match in detect_domains(query)}


def test_single_words_need_word_boundaries() -> None:
    assert not matches_keyword("sidebar navigation", "bar")
    assert matches_keyword("bar chart comparison", "bar")
    assert matches_keyword("sticky cta-button", "cta")


def test_sidebar_does_not_trigger_chart() -> None:
    domains = _domains("sidebar navigation")
    assert "chart" not in domains
    assert domains["ux"] == pytest.approx(0.4)


def test_bar_chart_is_detected_as_chart() -> None:
    matches = detect_domains("bar chart comparison")
    assert matches[0].domain == "chart"
    assert matches[0].confidence == 1.0
    assert "bar chart" in matches[0].matched_keywords


def test_multiple_matches_add_a_small_boost() -> None:
    assert _domains("palette hex")["color"] == pytest.approx(0.93)


@pytest.mark.parametrize(
    "query",
    [
        "color palette hex rgb gradient theme dark mode contrast",
        "bar chart line chart pie chart graph visualization",
        "glassmorphism minimalism brutalism neumorphism",
        "hello world",
        "",
    ],
)
def test_confidences_stay_within_unit_interval(query: str) -> None:
    for match in detect_domains(query) + detect_stacks(query):
        assert 0.0 <= match.confidence <= 1.0
    platform = detect_platform_intent(query)
    assert 0.0 <= platform.confidence <= 1.0
    assert 0.0 <= classify_page_intent(query).confidence <= 1.0


def test_domain_floor_comes_from_config() -> None:
    assert _domains("navigation") == {"ux": pytest.approx(0.4)}
    strict = RankingConfig(domain_floor=0.5)
    assert detect_domains("navigation", strict) == []


def test_detect_domain_returns_best_or_none() -> None:
    assert detect_domain("glassmorphism") == "style"
    assert detect_domain("hello world") is None


def test_detect_stacks_escapes_keyword_punctuation() -> None:
    stacks = {match.domain: match for match in detect_stacks("vue ref(count) helper")}
    assert "vue" in stacks
    assert "ref(" in stacks["vue"].matched_keywords


def test_detect_stacks_orders_by_confidence() -> None:
    stacks = detect_stacks("react hooks with usestate")
    assert stacks[0].domain == "react"


def test_platform_defaults_to_web() -> None:
    result = detect_platform_intent("pricing table")
    assert result.platform == "web"
    assert result.is_default
    assert result.confidence == pytest.approx(0.3)
    assert result.framework == "html-tailwind"


def test_platform_ios_detection() -> None:
    result = detect_platform_intent("settings screen for iphone")
    assert result.platform == "mobile-ios"
    assert result.confidence == pytest.approx(0.9)
    assert result.framework == "swiftui"
    assert not result.is_default


def test_cross_platform_beats_single_platforms() -> None:
    result = detect_platform_intent("flutter app for ios and android")
    assert result.platform == "cross-platform"
    assert result.framework == "flutter"
    alternatives = {alt.platform for alt in result.alternatives}
    assert {"mobile-ios", "mobile-android"} <= alternatives


def test_cross_platform_defaults_to_react_native() -> None:
    result = detect_platform_intent("cross-platform mobile app")
    assert result.platform == "cross-platform"
    assert result.framework == "react-native"


def test_flutter_replaces_react_native_default() -> None:
    assert infer_framework("cross-platform", "dart app") == "flutter"
    assert infer_framework("mobile-generic", "native app") == "react-native"
    assert infer_framework("web", "anything") == "html-tailwind"


def test_page_intent_prefers_earliest_phrase() -> None:
    result = classify_page_intent("landing page dashboard")
    assert result.intent == "landing"
    assert result.confidence == 1.0
    assert result.matched_keyword == "landing page"
    assert result.position == 0


def test_page_intent_phrase_beats_earlier_single_word() -> None:
    result = classify_page_intent("dashboard with a landing page")
    assert result.intent == "landing"
    assert result.confidence == pytest.approx(0.85)


def test_page_intent_admin_dashboard() -> None:
    assert classify_page_intent("admin dashboard for sales").intent == "dashboard"


def test_page_intent_position_penalty() -> None:
    result = classify_page_intent("build me a dashboard")
    assert result.intent == "dashboard"
    assert result.position == 3
    assert result.confidence == pytest.approx(0.8)


def test_page_intent_confidence_floor() -> None:
    result = classify_page_intent("please help me design something nice for my new form")
    assert result.intent == "page"
    assert result.confidence == pytest.approx(0.3)


def test_page_intent_unknown() -> None:
    result = classify_page_intent("tell me a story")
    assert result.intent == "unknown"
    assert result.confidence == 0.0
    assert result.note


@pytest.mark.parametrize("query", [None, 42, ["glassmorphism"]])
def test_non_string_queries_classify_as_empty(query) -> None:
    assert detect_domains(query) == []
    assert detect_stacks(query) == []
    assert detect_domain(query) is None
    platform = detect_platform_intent(query)
    assert platform.platform == "web"
    assert platform.is_default
    assert classify_page_intent(query).intent == "unknown"


def test_boundary_pattern_cache_is_bounded() -> None:
    from uxpro.core.classifiers import _boundary_pattern

    for i in range(1100):
        matches_keyword("alpha beta", f"kw{i}")
    assert _boundary_pattern.cache_info().maxsize == 1024
    assert _boundary_pattern.cache_info().currsize <= 1024

"""Tests for lenient colour blob parsing."""

from __future__ import annotations

import pytest

from uxpro.core.lenient import parse_color_blob


def test_strict_json_object() -> None:
    assert parse_color_blob('{"background": "#0F172A", "text": "#F1F5F9"}') == {
        "background": "#0F172A",
        "text": "#F1F5F9",
    }


def test_bare_and_quoted_keys() -> None:
    blob = "{primary: #6366F1, 'background': \"#020617\", \"text\": '#F8FAFC'}"
    assert parse_color_blob(blob) == {
        "primary": "#6366F1",
        "background": "#020617",
        "text": "#F8FAFC",
    }


def test_semicolon_and_newline_separators() -> None:
    assert parse_color_blob("primary: #111111; cta: #22C55E\nbackground: #000000") == {
        "primary": "#111111",
        "cta": "#22C55E",
        "background": "#000000",
    }


@pytest.mark.parametrize("blob", [None, "", "   ", "not a palette", "[1, 2]", "{}"])
def test_unusable_input_yields_none(blob) -> None:
    assert parse_color_blob(blob) is None

"""Tests for design-system composition."""

from __future__ import annotations

import json
from typing import Dict, List

import pytest

from uxpro.core.design_system import (
    DesignSystem,
    build_css_variables,
    build_design_system,
    contrast_text_color,
    parse_hex,
)
from uxpro.core.error_handling import SearchError


def _fintech_records(dark_mode: str = "{background: #020617, text: '#E2E8F0'}") -> Dict[str, List[Dict[str, str]]]:
    return {
        "products": [
            {
                "Product Type": "Fintech App",
                "Keywords": "fintech banking",
                "Primary Style Recommendation": "Glassmorphism",
            }
        ],
        "styles": [
            {
                "Style Category": "Glassmorphism",
                "Keywords": "glassmorphism frosted",
                "CSS_Code": "backdrop-filter: blur(12px);",
            },
            {"Style Category": "Minimalism", "Keywords": "minimal clean"},
        ],
        "colors": [
            {
                "Product Type": "Fintech",
                "Keywords": "fintech banking navy",
                "Primary (Hex)": "#1E3A8A",
                "Secondary (Hex)": "#3B82F6",
                "CTA (Hex)": "#22C55E",
                "Background (Hex)": "#FFFFFF",
                "Text (Hex)": "#0F172A",
                "Dark_Mode_Colors": dark_mode,
            }
        ],
        "typography": [
            {
                "Font Pairing Name": "Tech",
                "Heading Font": "Space Grotesk",
                "Body Font": "Inter",
                "Mood/Style Keywords": "fintech glassmorphism",
            }
        ],
        "landing": [
            {
                "Pattern Name": "Trust Hero",
                "Page_Type": "landing",
                "Keywords": "fintech hero trust",
                "Platform_Support": "web",
            },
            {
                "Pattern Name": "App Showcase",
                "Page_Type": "landing",
                "Keywords": "fintech hero app",
                "Platform_Support": "mobile",
            },
            {
                "Pattern Name": "Finance Dashboard",
                "Page_Type": "dashboard",
                "Keywords": "fintech dashboard kpi",
                "Platform_Support": "web",
            },
        ],
    }


@pytest.fixture()
def fintech_context(context_factory):
    return context_factory(_fintech_records())


def test_landing_design_system(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech landing page")
    assert isinstance(system, DesignSystem)
    assert system.page_intent.intent == "landing"
    assert system.platform.platform == "web"
    assert system.product["Product Type"] == "Fintech App"
    assert system.style["name"] == "Glassmorphism"
    assert system.typography["heading"] == "Space Grotesk"
    assert system.layout["pattern"] == "Trust Hero"

    colors = system.colors
    assert colors["mode"] == "light"
    assert colors["palette"]["background"] == "#FFFFFF"
    assert colors["text_on_background"] == "#000000"
    assert colors["text_on_primary"] == "#FFFFFF"
    assert not colors["dark_mode_applied"]

    assert system.css_variables.startswith(":root {")
    assert "  --color-primary: #1E3A8A;" in system.css_variables
    assert "--font-heading: 'Space Grotesk', sans-serif;" in system.css_variables
    assert system.guide.startswith("# Design System: fintech landing page")


def test_dark_mode_overlays_lenient_palette(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech landing page", mode="dark")
    palette = system.colors["palette"]
    assert palette["background"] == "#020617"
    assert palette["text"] == "#E2E8F0"
    assert palette["primary"] == "#1E3A8A"
    assert system.colors["dark_mode_applied"]
    assert system.colors["text_on_background"] == "#FFFFFF"


def test_unparseable_dark_palette_falls_back_to_light(context_factory) -> None:
    ctx = context_factory(_fintech_records(dark_mode="garbage"))
    system = build_design_system(ctx, "fintech landing page", mode="dark")
    assert system.colors["palette"]["background"] == "#FFFFFF"
    assert not system.colors["dark_mode_applied"]
    assert any("Dark mode" in note for note in system.notes)


def test_dashboard_intent_picks_dashboard_layout(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech admin dashboard")
    assert system.page_intent.intent == "dashboard"
    assert system.layout["pattern"] == "Finance Dashboard"


def test_platform_override_prefers_mobile_layouts(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech landing page", platform="ios")
    assert system.platform.platform == "mobile-ios"
    assert system.platform.framework == "swiftui"
    assert system.layout["pattern"] == "App Showcase"
    assert system.layout["platform_support"] == "mobile"


def test_empty_layout_subset_falls_back_to_all_records(context_factory) -> None:
    ctx = context_factory(
        {
            "landing": [
                {
                    "Pattern Name": "Metrics Hero",
                    "Page_Type": "landing",
                    "Keywords": "dashboard metrics hero",
                }
            ]
        }
    )
    system = build_design_system(ctx, "admin dashboard")
    assert system.page_intent.intent == "dashboard"
    assert system.layout["pattern"] == "Metrics Hero"
    assert system.colors is None
    assert system.style is None


def test_unknown_intent_is_noted(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech banking")
    assert system.page_intent.intent == "unknown"
    assert system.notes


def test_design_system_serialises_to_json(fintech_context) -> None:
    system = build_design_system(fintech_context, "fintech landing page", mode="dark")
    payload = json.loads(json.dumps(system.to_dict()))
    assert payload["mode"] == "dark"
    assert payload["page_intent"]["intent"] == "landing"
    assert payload["platform"]["platform"] == "web"


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"max_results": 6}, "max_results cannot exceed 5"),
        ({"mode": "sepia"}, 'Invalid mode: "sepia". Must be one of: light, dark'),
        ({"platform": "desktop"}, 'Invalid platform: "desktop"'),
        ({"style": 3}, "style must be a string"),
    ],
)
def test_invalid_arguments(fintech_context, kwargs, message: str) -> None:
    result = build_design_system(fintech_context, "fintech landing page", **kwargs)
    assert isinstance(result, SearchError)
    assert result.error.startswith(message)


@pytest.mark.parametrize(
    ("background", "expected"),
    [
        ("#FFFFFF", "#000000"),
        ("#000000", "#FFFFFF"),
        ("#FFF", "#000000"),
        ("FACC15", "#000000"),
        ("#2563EB", "#FFFFFF"),
        ("blue", None),
        ("", None),
        (None, None),
    ],
)
def test_contrast_text_color(background, expected) -> None:
    assert contrast_text_color(background) == expected


def test_parse_hex_expands_short_form() -> None:
    assert parse_hex("#0af") == (0, 170, 255)
    assert parse_hex("#12345") is None


def test_css_variables_empty_without_sections() -> None:
    assert build_css_variables(None, None) == ""

"""Shared pytest fixtures for uxpro tests."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Sequence

import pytest
import yaml

from uxpro.core.indexer import InMemoryRecordSupply, build_search_context
from uxpro.core.search import SearchContext

Records = List[Dict[str, str]]


def _records() -> Dict[str, Records]:
    return {
        "styles": [
            {
                "Style Category": "Glassmorphism",
                "Keywords": "glassmorphism dark-mode card",
                "CSS_Code": "backdrop-filter: blur(12px);",
                "Platform_Support": "both",
            },
            {
                "Style Category": "Minimalism",
                "Keywords": "minimal clean whitespace",
                "Platform_Support": "web",
            },
            {"Style Category": "Brutalism", "Keywords": "raw bold borders"},
        ],
        "colors": [
            {
                "Product Type": "SaaS",
                "Keywords": "saas trust blue",
                "Primary (Hex)": "#2563EB",
                "Secondary (Hex)": "#3B82F6",
                "CTA (Hex)": "#F97316",
                "Background (Hex)": "#F8FAFC",
                "Text (Hex)": "#1E293B",
                "Dark_Mode_Colors": json.dumps({"background": "#0F172A", "text": "#F1F5F9"}),
            },
            {
                "Product Type": "Crypto",
                "Keywords": "crypto neon",
                "Primary (Hex)": "#F59E0B",
                "Background (Hex)": "#0F172A",
                "Dark_Mode_Colors": "garbage",
            },
        ],
        "typography": [
            {
                "Font Pairing Name": "Modern Professional",
                "Heading Font": "Inter",
                "Body Font": "Inter",
                "Mood/Style Keywords": "modern clean glassmorphism saas",
            },
            {
                "Font Pairing Name": "Editorial",
                "Heading Font": "Playfair Display",
                "Body Font": "Source Sans 3",
                "Mood/Style Keywords": "elegant serif editorial",
            },
        ],
        "charts": [
            {"Data Type": "Trend", "Keywords": "trend line time", "Best Chart Type": "Line Chart"},
            {
                "Data Type": "Comparison",
                "Keywords": "bar comparison categories",
                "Best Chart Type": "Bar Chart",
            },
        ],
        "ux-guidelines": [
            {
                "Category": "Navigation",
                "Issue": "Sidebar collapse",
                "Description": "sidebar navigation collapse",
                "Platform_Support": "web",
            },
            {
                "Category": "Touch",
                "Issue": "Touch targets",
                "Description": "touch target size mobile",
                "Platform_Support": "mobile",
            },
        ],
        "icons": [{"Icon Name": "menu", "Keywords": "menu navigation hamburger"}],
        "landing": [
            {
                "Pattern Name": "Hero-Centric",
                "Page_Type": "landing",
                "Keywords": "hero launch cta",
                "Platform_Support": "web",
            },
            {
                "Pattern Name": "Analytics Dashboard",
                "Page_Type": "dashboard",
                "Keywords": "dashboard analytics kpi sidebar",
                "Platform_Support": "web",
            },
        ],
        "products": [
            {
                "Product Type": "SaaS",
                "Keywords": "saas software subscription",
                "Primary Style Recommendation": "Glassmorphism",
            },
            {
                "Product Type": "Fintech",
                "Keywords": "fintech banking payments",
                "Primary Style Recommendation": "Minimalism",
            },
        ],
        "prompts": [
            {
                "Style Category": "Glassmorphism",
                "AI Prompt Keywords (Copy-Paste Ready)": "glassmorphism frosted card",
            }
        ],
    }


STACK_RECORDS: Dict[str, Records] = {
    "react": [
        {"Category": "State", "Guideline": "useState local state", "Description": "hooks state"},
        {"Category": "Effects", "Guideline": "useEffect cleanup", "Description": "subscriptions"},
    ]
}

PLATFORM_RECORDS: Dict[str, Records] = {
    "ios": [
        {"Category": "Navigation", "Pattern": "Tab Bar", "Description": "tab bar navigation"},
    ]
}


def write_csv(path: Path, rows: Sequence[Mapping[str, str]]) -> Path:
    """Write ``rows`` with the union of their keys as header."""
    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=columns)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


@pytest.fixture()
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated project root for tests."""
    monkeypatch.setenv("UXPRO_PROJECT_ROOT", str(tmp_path))
    monkeypatch.delenv("UXPRO_DATA_DIR", raising=False)
    return tmp_path


@pytest.fixture()
def sample_records() -> Dict[str, Records]:
    """Fresh copy of the domain records used across tests."""
    return _records()


@pytest.fixture()
def record_supply(sample_records: Dict[str, Records]) -> InMemoryRecordSupply:
    return InMemoryRecordSupply(sample_records, STACK_RECORDS, PLATFORM_RECORDS)


@pytest.fixture()
def search_context(record_supply: InMemoryRecordSupply) -> SearchContext:
    return build_search_context(record_supply)


@pytest.fixture()
def context_factory() -> Callable[..., SearchContext]:
    """Build a context from ad-hoc domain records."""

    def _factory(domains: Mapping[str, Records], **kwargs) -> SearchContext:
        return build_search_context(InMemoryRecordSupply(domains), **kwargs)

    return _factory


@pytest.fixture()
def csv_data_dir(project_root: Path, sample_records: Dict[str, Records]) -> Path:
    """Write the sample records as a CSV data directory."""
    data_dir = project_root / "data"
    for name, rows in sample_records.items():
        write_csv(data_dir / f"{name}.csv", rows)
    for stack, rows in STACK_RECORDS.items():
        write_csv(data_dir / "stacks" / f"{stack}.csv", rows)
    for platform, rows in PLATFORM_RECORDS.items():
        write_csv(data_dir / "platforms" / f"{platform}.csv", rows)
    return data_dir


@pytest.fixture()
def minimal_config(project_root: Path, csv_data_dir: Path) -> Path:
    """Write a configuration file pointing to the temporary data directory."""
    config = {
        "data_dir": str(csv_data_dir),
        "ranking": {"high_confidence": 0.7, "candidate_multiplier": 3},
        "logging": {"verbose": False},
    }
    config_path = project_root / "config.yaml"
    config_path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return config_path

"""
Design System Composer - one query in, a complete design-system bundle out

Runs the product, style, color, typography and layout searches for a query and
derives the pieces an implementer needs directly: CSS custom properties,
contrast-safe text colours and a short markdown guide.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .classifiers import (
    PageIntentResult,
    PlatformIntentResult,
    classify_page_intent,
    detect_platform_intent,
    detect_stacks,
    infer_framework,
)
from .error_handling import SearchValidationError, log_debug, returns_search_error
from .expansion import validate_choice, validate_search_input
from .lenient import parse_color_blob
from .search import SearchContext, SearchHit, boost_by_platform

MAX_DESIGN_RESULTS = 5
MODES = ("light", "dark")

PLATFORM_OVERRIDES: Dict[str, str] = {
    "web": "web",
    "ios": "mobile-ios",
    "android": "mobile-android",
    "mobile": "mobile-generic",
    "cross-platform": "cross-platform",
}

PALETTE_COLUMNS: Dict[str, str] = {
    "primary": "Primary (Hex)",
    "secondary": "Secondary (Hex)",
    "cta": "CTA (Hex)",
    "background": "Background (Hex)",
    "text": "Text (Hex)",
    "border": "Border (Hex)",
}

_HEX = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass
class DesignSystem:
    """Composed design system for one query. Sections are None when their index had no hit."""

    query: str
    page_intent: PageIntentResult
    platform: PlatformIntentResult
    mode: str = "light"
    product: Optional[Dict[str, Any]] = None
    style: Optional[Dict[str, str]] = None
    colors: Optional[Dict[str, Any]] = None
    typography: Optional[Dict[str, str]] = None
    layout: Optional[Dict[str, str]] = None
    css_variables: str = ""
    guide: str = ""
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "mode": self.mode,
            "page_intent": self.page_intent.to_dict(),
            "platform": self.platform.to_dict(),
            "product": self.product,
            "style": self.style,
            "colors": self.colors,
            "typography": self.typography,
            "layout": self.layout,
            "css_variables": self.css_variables,
            "guide": self.guide,
            "notes": list(self.notes),
        }


def parse_hex(value: Optional[str]):
    """Return (r, g, b) for ``#RGB`` or ``#RRGGBB``, None for anything else."""
    if not value:
        return None
    match = _HEX.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))


def contrast_text_color(background: Optional[str]) -> Optional[str]:
    """
    Black or white text for ``background``, by perceived luminance.

    Examples:
        >>> contrast_text_color("#FFFFFF")
        '#000000'
        >>> contrast_text_color("#0F172A")
        '#FFFFFF'
    """
    rgb = parse_hex(background)
    if rgb is None:
        return None
    r, g, b = rgb
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#FFFFFF"


def _top(hits: List[SearchHit]) -> Optional[Dict[str, Any]]:
    return hits[0].data if hits else None


def _search_top(ctx: SearchContext, domain: str, query: str, n: int) -> Optional[Dict[str, Any]]:
    index = ctx.index_for(domain)
    if index is None:
        return None
    results = index.search(query, n)
    return dict(results[0].document.data) if results else None


def _resolve_platform(override: Optional[str], query: str, ctx: SearchContext) -> PlatformIntentResult:
    if override is None:
        return detect_platform_intent(query, ctx.config)
    platform = PLATFORM_OVERRIDES[override]
    return PlatformIntentResult(
        platform=platform,
        confidence=1.0,
        framework=infer_framework(platform, query, detect_stacks(query, ctx.config)),
    )


def _layout(
    ctx: SearchContext, query: str, intent: PageIntentResult, platform: PlatformIntentResult
) -> Optional[Dict[str, Any]]:
    """Best landing record for the page intent, preferring the detected platform."""
    index = ctx.index_for("landing")
    if index is None:
        return None
    candidates = [
        SearchHit(data=dict(r.document.data), score=r.score)
        for r in index.search(query, len(index))
    ]
    want_dashboard = intent.intent == "dashboard"
    subset = [
        hit for hit in candidates
        if (str(hit.data.get("Page_Type", "")).strip().lower() == "dashboard") == want_dashboard
    ]
    if not subset:
        log_debug("No layout records for page type; using all landing records", intent=intent.intent)
        subset = candidates
    return _top(boost_by_platform(subset, platform.platform, ctx.config))


def _palette(record: Mapping[str, Any], mode: str, notes: List[str]) -> Dict[str, Any]:
    palette = {name: record.get(column, "") for name, column in PALETTE_COLUMNS.items()}
    dark_applied = False
    if mode == "dark":
        dark = parse_color_blob(record.get("Dark_Mode_Colors"))
        if dark:
            for key, value in dark.items():
                name = key.strip().lower().replace("_", "-")
                if name in palette:
                    palette[name] = value
                    dark_applied = True
        if not dark_applied:
            notes.append("Dark mode colors unavailable for this palette; using light palette")

    return {
        "palette": palette,
        "mode": mode,
        "dark_mode_applied": dark_applied,
        "text_on_background": contrast_text_color(palette["background"]),
        "text_on_primary": contrast_text_color(palette["primary"]),
        "text_on_cta": contrast_text_color(palette["cta"]),
        "tailwind_config": record.get("Tailwind_Config", ""),
        "glow_effects": record.get("Glow_Effects", ""),
    }


def build_css_variables(
    colors: Optional[Dict[str, Any]], typography: Optional[Dict[str, str]]
) -> str:
    """Render a ``:root`` block of CSS custom properties."""
    lines = []
    if colors:
        for name, value in colors["palette"].items():
            if value:
                lines.append(f"  --color-{name}: {value};")
        if colors.get("text_on_background"):
            lines.append(f"  --color-on-background: {colors['text_on_background']};")
        if colors.get("text_on_primary"):
            lines.append(f"  --color-on-primary: {colors['text_on_primary']};")
    if typography:
        if typography.get("heading"):
            lines.append(f"  --font-heading: '{typography['heading']}', sans-serif;")
        if typography.get("body"):
            lines.append(f"  --font-body: '{typography['body']}', sans-serif;")
    if not lines:
        return ""
    return ":root {\n" + "\n".join(lines) + "\n}"


def build_guide(system: DesignSystem) -> str:
    """Short markdown summary an agent can paste into a design brief."""
    lines = [f"# Design System: {system.query}", ""]
    lines.append(
        f"- **Page type:** {system.page_intent.intent}"
        f" | **Platform:** {system.platform.platform}"
        f" ({system.platform.framework or 'n/a'})"
        f" | **Mode:** {system.mode}"
    )
    if system.product:
        lines.append(f"- **Product:** {system.product.get('Product Type', '')}")
    if system.style:
        lines += ["", "## Style", f"{system.style['name']}"]
        if system.style.get("effects"):
            lines.append(f"Effects: {system.style['effects']}")
    if system.colors:
        lines += ["", "## Colors", "| Role | Value |", "| --- | --- |"]
        for name, value in system.colors["palette"].items():
            if value:
                lines.append(f"| {name} | {value} |")
    if system.typography:
        lines += [
            "",
            "## Typography",
            f"Heading: {system.typography['heading']}; Body: {system.typography['body']}",
        ]
    if system.layout:
        lines += ["", "## Layout", f"{system.layout['pattern']}"]
        if system.layout.get("section_order"):
            lines.append(f"Sections: {system.layout['section_order']}")
    if system.css_variables:
        lines += ["", "## CSS Variables", "```css", system.css_variables, "```"]
    return "\n".join(lines)


@returns_search_error
def build_design_system(
    ctx: SearchContext,
    query: Any,
    style: Any = None,
    mode: Any = None,
    max_results: Any = 1,
    platform: Any = None,
):
    """
    Compose a design system for ``query``.

    Args:
        ctx: Search context
        query: Product type or design description, e.g. "fintech dark"
        style: Preferred style name; otherwise the product's primary style
        mode: "light" or "dark"
        max_results: Hits fetched per domain (1-5); only the top one is used
        platform: web, ios, android, mobile or cross-platform to skip detection

    Returns:
        DesignSystem or SearchError
    """
    request = validate_search_input(query, max_results, default=1, limit=MAX_DESIGN_RESULTS)
    chosen_mode = validate_choice(mode, MODES, "mode") or "light"
    override = validate_choice(platform, tuple(PLATFORM_OVERRIDES), "platform")
    if style is not None and not isinstance(style, str):
        raise SearchValidationError("style must be a string")
    style_name = style.strip() if style else None

    intent = classify_page_intent(request.query)
    target = _resolve_platform(override, request.query, ctx)
    base = request.expanded_query
    n = request.max_results
    notes: List[str] = []
    if intent.note:
        notes.append(intent.note)

    product = _search_top(ctx, "products", base, n)
    inferred_style = style_name or (product or {}).get("Primary Style Recommendation") or None

    style_record = _search_top(ctx, "styles", inferred_style or base, n)
    color_query = f"{base} {chosen_mode} mode" if mode else base
    color_record = _search_top(ctx, "colors", color_query, n)
    typo_query = f"{base} {inferred_style}" if inferred_style else base
    typo_record = _search_top(ctx, "typography", typo_query, n)
    layout_record = _layout(ctx, base, intent, target)

    system = DesignSystem(
        query=request.query,
        page_intent=intent,
        platform=target,
        mode=chosen_mode,
        product=product,
        notes=notes,
    )
    if style_record:
        system.style = {
            "name": style_record.get("Style Category") or style_record.get("Type") or "Unknown",
            "css_code": style_record.get("CSS_Code", ""),
            "effects": style_record.get("Effects & Animation", ""),
            "motion_config": style_record.get("Motion_Config", ""),
            "animation_variants": style_record.get("Animation_Variants", ""),
        }
    if color_record:
        system.colors = _palette(color_record, chosen_mode, notes)
    if typo_record:
        system.typography = {
            "heading": typo_record.get("Heading Font", ""),
            "body": typo_record.get("Body Font", ""),
            "css_import": typo_record.get("CSS Import", ""),
            "google_fonts_url": typo_record.get("Google Fonts URL", ""),
            "tailwind_config": typo_record.get("Tailwind Config", ""),
        }
    if layout_record:
        system.layout = {
            "pattern": layout_record.get("Pattern Name", ""),
            "page_type": layout_record.get("Page_Type", ""),
            "platform_support": layout_record.get("Platform_Support", "") or "web",
            "section_order": layout_record.get("Section Order", ""),
            "layout_css": layout_record.get("Layout_CSS", ""),
            "grid_config": layout_record.get("Grid_System_Config", ""),
            "bento_map": layout_record.get("Bento_Layout_Map", ""),
            "responsive_strategy": layout_record.get("Responsive_Strategy", ""),
        }

    system.css_variables = build_css_variables(system.colors, system.typography)
    system.guide = build_guide(system)
    return system

"""
Query Expansion and Input Validation

Validation turns loosely typed tool arguments into a ``SearchRequest``;
expansion appends related vocabulary for known trigger phrases so BM25 favours
documents written in the domain's own terms.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_handling import SearchValidationError, log_debug

MAX_QUERY_LENGTH = 500
DEFAULT_MAX_RESULTS = 3
MAX_RESULTS_LIMIT = 50


DOMAIN_EXPANSIONS: Dict[str, str] = {
    "crypto": "dashboard numbers metrics chart dark mode",
    "fintech": "pricing table trust security calculator data",
    "modern": "clean minimal bento gradient",

    # Industries
    "ecommerce": "gallery image search filter pricing plans reviews hero cart",
    "healthcare": "dashboard metrics table trust profile form clean medical",
    "education": "dashboard profile search gallery clean learning course",
    "realestate": "map location gallery image search filter property listing",
    "travel": "map location gallery image search filter reviews destination booking",
    "saas": "dashboard chart metrics pricing plans table modern analytics toggle dark mode theme switch scroll navigation footer utility back-to-top accessibility",
    "gaming": "dark mode social profile feed gallery modern stream immersive",
    "social": "feed profile social gallery search modern community chat",
    "news": "feed search bento clean modern image article trending",
    "portfolio": "gallery image profile clean modern bento showcase creative",

    # Page types
    "landing": "hero cta testimonials pricing features section toggle navigation header footer utility scroll dark-mode light-mode theme accessibility back-to-top",
    "dashboard": "analytics chart metrics kpi toggle dark mode theme panel sidebar navigation utility",
    "page": "landing hero section toggle dark mode navigation footer header utility accessibility",

    # Concepts
    "security": "authentication password validation privacy alerts trust shield",
    "trust": "reviews testimonials badges secure verified",
    "analytics": "dashboard chart metrics table data visualization report",
    "onboarding": "form profile clean modern step guide welcome",
    "conversion": "pricing plans reviews trust hero cta signup",

    # Landing page features
    "hero": "hero-centric headline visual banner above-fold primary",
    "pricing": "pricing-focused plans tiers comparison subscription",
    "testimonials": "social-proof reviews trust badges authority",
    "features": "feature-grid benefits highlights showcase",
    "cta": "call-to-action button conversion signup",

    # Page intent helpers
    "website": "landing page hero cta testimonials features section",
    "web": "landing page hero cta section",
    "site": "landing page hero cta section",
    "homepage": "landing hero features cta testimonials pricing",
    "admin": "dashboard panel analytics metrics sidebar",
    "panel": "dashboard admin analytics metrics sidebar",
    "metrics": "dashboard analytics chart kpi data",
    "kpi": "dashboard metrics analytics chart data",

    # iOS
    "ios": "hig human interface guidelines iphone ipad sf symbols cupertino design system apple guidelines swiftui like mobile native",
    "platform": "ios hig human interface iphone ipad sf symbols cupertino apple design swiftui style android material flutter native mobile",
    "iphone": "ios mobile hig human interface guidelines apple native cupertino sf symbols",
    "ipad": "ios tablet hig human interface guidelines apple native cupertino sf symbols",
    "apple": "ios hig human interface guidelines iphone ipad sf symbols cupertino design system swiftui native",
    "cupertino": "ios apple hig human interface guidelines sf symbols iphone ipad flutter native",
    "hig": "ios apple human interface guidelines cupertino sf symbols design system native mobile",

    # iOS look on cross-platform stacks
    "ios style": "cupertino hig human interface sf symbols apple design flutter react-native without swift",
    "swiftui style": "ios cupertino hig sf symbols apple design flutter react-native",
    "cupertino style": "ios hig flutter react-native apple design sf symbols",
    "ios without swift": "cupertino flutter react-native ios style hig sf symbols",
    "ios flutter": "cupertino hig sf symbols apple design ios style cross-platform",
    "ios react native": "cupertino hig sf symbols apple design ios style cross-platform",

    # Android
    "android": "material material design m3 material you google design jetpack compose kotlin ui dynamic color tonal elevation",
    "material": "android material design m3 material 3 material you google design dynamic color tonal elevation",
    "material 3": "android material design m3 material you google design jetpack compose dynamic color",
    "material design": "android m3 material 3 material you google design dynamic color tonal elevation",
    "m3": "android material material 3 material design material you google design dynamic color",
    "jetpack compose": "android material m3 kotlin ui compose google design native",
    "compose": "android jetpack compose kotlin ui material m3 google design native",
    "kotlin ui": "android jetpack compose compose material m3 google design native",
    "google design": "android material m3 material design material you dynamic color tonal elevation",
    "android hig": "material material design m3 material you google design jetpack compose",
    "material you": "android material m3 material design dynamic color personalization google design",
    "dynamic color": "android material you m3 material 3 personalization theming google design",
    "tonal elevation": "android material m3 surface elevation depth google design",

    # Android look on cross-platform stacks
    "android style": "material m3 material design jetpack compose flutter react-native without kotlin",
    "material style": "android m3 material design flutter react-native google design",
    "android flutter": "material m3 material design android style cross-platform flutter",
    "android react native": "material m3 material design android style cross-platform react-native",
}

# Longest trigger first; sorted() is stable so equal lengths keep table order
_TRIGGERS = tuple(sorted(DOMAIN_EXPANSIONS, key=len, reverse=True))


@dataclass(frozen=True)
class SearchRequest:
    """A validated search: display query, scoring query and result count."""

    query: str
    expanded_query: str
    max_results: int


def expand_query(query: str) -> str:
    """
    Append expansion text for every trigger phrase contained in the query.

    Triggers match as plain substrings, longest first; expansions are
    concatenated and never deduplicated.

    Examples:
        >>> expand_query("crypto wallet")
        'crypto wallet dashboard numbers metrics chart dark mode'
    """
    lowered = query.lower()
    parts = [query]
    for trigger in _TRIGGERS:
        if trigger in lowered:
            parts.append(DOMAIN_EXPANSIONS[trigger])
    expanded = " ".join(parts)
    if expanded != query:
        log_debug("Query expanded", query=query, expanded=expanded)
    return expanded


def _coerce_max_results(value: Any, default: int, limit: int) -> int:
    if value is None:
        return default
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        raise SearchValidationError("max_results must be a positive integer")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise SearchValidationError("max_results must be a positive integer")
        value = int(value)
    if not isinstance(value, int):
        raise SearchValidationError("max_results must be a positive integer")
    if value < 1:
        raise SearchValidationError("max_results must be at least 1")
    if value > limit:
        raise SearchValidationError(f"max_results cannot exceed {limit}")
    return value


def validate_search_input(
    query: Any,
    max_results: Any = None,
    *,
    default: int = DEFAULT_MAX_RESULTS,
    limit: int = MAX_RESULTS_LIMIT,
) -> SearchRequest:
    """
    Validate raw search arguments.

    Args:
        query: Search text; must be a non-empty string of at most 500 characters
        max_results: Requested result count, ``None`` for ``default``
        default: Result count used when ``max_results`` is None
        limit: Largest accepted result count

    Returns:
        SearchRequest with the trimmed query and its expansion

    Raises:
        SearchValidationError: With a message suitable for returning to the caller
    """
    if query is None:
        raise SearchValidationError("Query is required")
    if not isinstance(query, str):
        raise SearchValidationError("Query must be a string")

    text = query.strip()
    if not text:
        raise SearchValidationError("Query cannot be empty")
    if len(text) > MAX_QUERY_LENGTH:
        raise SearchValidationError(
            f"Query exceeds maximum length of {MAX_QUERY_LENGTH} characters"
        )

    count = _coerce_max_results(max_results, default, limit)
    return SearchRequest(query=text, expanded_query=expand_query(text), max_results=count)


def validate_choice(value: Optional[str], choices, label: str) -> Optional[str]:
    """Normalise an optional enum-like parameter, rejecting values outside ``choices``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise SearchValidationError(f"{label} must be a string")
    normalised = value.strip().lower()
    if not normalised:
        return None
    if normalised not in choices:
        raise SearchValidationError(
            f"Invalid {label}: \"{value}\". Must be one of: {', '.join(choices)}"
        )
    return normalised

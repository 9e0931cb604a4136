"""
Query Classifiers - weighted keyword detection of domain, stack, platform and page intent

All classifiers share one matching rule: phrase keywords (containing a space)
match as substrings of the lowercased query, single-word keywords only match
on regex word boundaries so that "bar" never fires inside "sidebar".
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .settings import DEFAULT_RANKING, RankingConfig
from .signatures import (
    DOMAIN_SIGNATURES,
    PAGE_INTENT_SIGNATURES,
    PLATFORM_DEFAULT_FRAMEWORKS,
    PLATFORM_SIGNATURES,
    PLATFORM_STACKS,
    STACK_SIGNATURES,
    SignatureTable,
)

DEFAULT_PLATFORM = "web"
UNKNOWN_INTENT = "unknown"


@dataclass(frozen=True)
class DomainMatch:
    """A detected domain (or framework stack) with its confidence."""

    domain: str
    confidence: float
    matched_keywords: Tuple[str, ...] = ()

    def to_dict(self):
        return {
            "domain": self.domain,
            "confidence": self.confidence,
            "matched_keywords": list(self.matched_keywords),
        }


@dataclass(frozen=True)
class PlatformMatch:
    platform: str
    confidence: float
    matched_keywords: Tuple[str, ...] = ()

    def to_dict(self):
        return {
            "platform": self.platform,
            "confidence": self.confidence,
            "matched_keywords": list(self.matched_keywords),
        }


@dataclass(frozen=True)
class PlatformIntentResult:
    """Target platform of a query plus the framework most likely meant."""

    platform: str
    confidence: float
    matched_keywords: Tuple[str, ...] = ()
    framework: Optional[str] = None
    alternatives: Tuple[PlatformMatch, ...] = field(default_factory=tuple)
    is_default: bool = False

    def to_dict(self):
        return {
            "platform": self.platform,
            "confidence": self.confidence,
            "matched_keywords": list(self.matched_keywords),
            "framework": self.framework,
            "alternatives": [alt.to_dict() for alt in self.alternatives],
            "is_default": self.is_default,
        }


@dataclass(frozen=True)
class PageIntentResult:
    """Page type a query is about (landing, dashboard, page or unknown)."""

    intent: str
    confidence: float
    matched_keyword: Optional[str] = None
    position: Optional[int] = None
    note: Optional[str] = None

    def to_dict(self):
        return {
            "intent": self.intent,
            "confidence": self.confidence,
            "matched_keyword": self.matched_keyword,
            "position": self.position,
            "note": self.note,
        }


def is_phrase(keyword: str) -> bool:
    return " " in keyword


@lru_cache(maxsize=1024)
def _boundary_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def _lowered(query: Optional[str]) -> str:
    # non-string input classifies as an empty query
    return query.lower() if isinstance(query, str) else ""


def matches_keyword(lowered_query: str, keyword: str) -> bool:
    """Return True when ``keyword`` occurs in the already-lowercased query."""
    if is_phrase(keyword):
        return keyword in lowered_query
    return _boundary_pattern(keyword).search(lowered_query) is not None


def _score_table(
    query: str, table: SignatureTable, step: float, cap: float
) -> List[Tuple[str, float, Tuple[str, ...]]]:
    """Score every category of ``table``; zero-match categories are omitted.

    The score is the maximum matched weight plus ``min(cap, (n - 1) * step)``
    for n matched keywords, never above 1.0. Output is sorted by score,
    highest first, ties in table order.
    """
    lowered = _lowered(query)
    scored = []
    for category, signatures in table.items():
        matched = [(kw, weight) for kw, weight in signatures if matches_keyword(lowered, kw)]
        if not matched:
            continue
        best = max(weight for _, weight in matched)
        boost = min(cap, (len(matched) - 1) * step)
        scored.append((category, min(1.0, best + boost), tuple(kw for kw, _ in matched)))
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def detect_domains(query: str, config: RankingConfig = DEFAULT_RANKING) -> List[DomainMatch]:
    """
    Detect which design domains a query is about.

    Args:
        query: Raw user query
        config: Ranking tunables (multi-match boost and confidence floor)

    Returns:
        DomainMatch list sorted by confidence, highest first; domains scoring
        below ``config.domain_floor`` are dropped
    """
    scored = _score_table(
        query,
        DOMAIN_SIGNATURES,
        config.domain_multi_match_step,
        config.domain_multi_match_cap,
    )
    return [
        DomainMatch(domain=name, confidence=score, matched_keywords=keywords)
        for name, score, keywords in scored
        if score >= config.domain_floor
    ]


def detect_domain(query: str, config: RankingConfig = DEFAULT_RANKING) -> Optional[str]:
    """Single best domain for ``query``, or None when nothing is confident enough."""
    matches = detect_domains(query, config)
    if matches and matches[0].confidence >= config.low_confidence:
        return matches[0].domain
    return None


def detect_stacks(query: str, config: RankingConfig = DEFAULT_RANKING) -> List[DomainMatch]:
    """Detect framework stacks named in ``query`` (react, flutter, swiftui, ...)."""
    scored = _score_table(
        query,
        STACK_SIGNATURES,
        config.domain_multi_match_step,
        config.domain_multi_match_cap,
    )
    return [
        DomainMatch(domain=name, confidence=score, matched_keywords=keywords)
        for name, score, keywords in scored
        if score >= config.stack_floor
    ]


def infer_framework(platform: str, query: str, stacks: Sequence[DomainMatch] = ()) -> str:
    """Pick the framework for ``platform``.

    A detected stack that can target the platform wins; otherwise the
    platform default applies, with flutter replacing react-native when the
    query mentions flutter or dart.
    """
    candidates = PLATFORM_STACKS.get(platform, ())
    for stack in stacks:
        if stack.domain in candidates:
            return stack.domain

    default = PLATFORM_DEFAULT_FRAMEWORKS.get(platform, PLATFORM_DEFAULT_FRAMEWORKS[DEFAULT_PLATFORM])
    if default == "react-native":
        lowered = _lowered(query)
        if matches_keyword(lowered, "flutter") or matches_keyword(lowered, "dart"):
            return "flutter"
    return default


def detect_platform_intent(
    query: str, config: RankingConfig = DEFAULT_RANKING
) -> PlatformIntentResult:
    """
    Detect the target platform of a query.

    Unlike domain detection there is no confidence floor. A query without any
    platform keyword is assumed to target the web.

    Examples:
        >>> detect_platform_intent("settings screen for iphone").platform
        'mobile-ios'

        >>> detect_platform_intent("pricing table").is_default
        True
    """
    scored = _score_table(
        query,
        PLATFORM_SIGNATURES,
        config.platform_multi_match_step,
        config.platform_multi_match_cap,
    )
    stacks = detect_stacks(query, config)

    if not scored:
        return PlatformIntentResult(
            platform=DEFAULT_PLATFORM,
            confidence=config.platform_default_confidence,
            framework=infer_framework(DEFAULT_PLATFORM, query, stacks),
            is_default=True,
        )

    (platform, confidence, keywords), rest = scored[0], scored[1:]
    return PlatformIntentResult(
        platform=platform,
        confidence=confidence,
        matched_keywords=keywords,
        framework=infer_framework(platform, query, stacks),
        alternatives=tuple(
            PlatformMatch(platform=name, confidence=score, matched_keywords=kws)
            for name, score, kws in rest
        ),
    )


def _word_position(lowered: str, char_index: int) -> int:
    return len(lowered[:char_index].split())


def _intent_confidence(weight: float, position: int) -> float:
    penalty = min(0.3, position * 0.05)
    return round(max(0.3, weight - penalty), 2)


def _phrase_candidates(lowered: str) -> List[Tuple[int, float, str, str]]:
    found = []
    for intent, signatures in PAGE_INTENT_SIGNATURES.items():
        for keyword, weight in signatures:
            if not is_phrase(keyword):
                continue
            idx = lowered.find(keyword)
            if idx >= 0:
                found.append((_word_position(lowered, idx), weight, intent, keyword))
    return found


def _word_candidates(words: Sequence[str]) -> Optional[Tuple[int, float, str, str]]:
    for position, word in enumerate(words):
        best: Optional[Tuple[int, float, str, str]] = None
        for intent, signatures in PAGE_INTENT_SIGNATURES.items():
            for keyword, weight in signatures:
                if is_phrase(keyword) or not matches_keyword(word, keyword):
                    continue
                if best is None or weight > best[1]:
                    best = (position, weight, intent, keyword)
        if best is not None:
            return best
    return None


def classify_page_intent(query: str) -> PageIntentResult:
    """
    Classify the page type a query asks for.

    Phrase keywords are checked first; the earliest phrase in the query wins
    and ties at the same position go to the higher weight. Single words are
    only considered when no phrase matched, scanning left to right. The
    matched weight loses 0.05 per preceding word (at most 0.3) and never
    drops below 0.3.
    """
    lowered = _lowered(query)

    phrases = _phrase_candidates(lowered)
    if phrases:
        # earliest position first, then heavier weight; table order breaks the rest
        position, weight, intent, keyword = min(phrases, key=lambda c: (c[0], -c[1]))
    else:
        hit = _word_candidates(lowered.split())
        if hit is None:
            return PageIntentResult(
                intent=UNKNOWN_INTENT,
                confidence=0.0,
                note="No page-type keywords found in query; layout falls back to general landing patterns",
            )
        position, weight, intent, keyword = hit

    return PageIntentResult(
        intent=intent,
        confidence=_intent_confidence(weight, position),
        matched_keyword=keyword,
        position=position,
    )

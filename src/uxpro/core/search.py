"""
Search Engine - multi-index BM25 search over the design knowledge base

Routes validated queries to one or more domain indexes, merges their results
and reranks them with the classifier output. Every public function returns a
list of ``SearchHit`` or a ``SearchError`` value; nothing raises across this
boundary.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .bm25 import BM25Index, ScoredDocument
from .classifiers import DomainMatch, detect_domains, detect_platform_intent, detect_stacks
from .domains import DOMAIN_SPECS, DOMAINS_BY_NAME
from .error_handling import (
    IndexNotReadyError,
    SearchError,
    SearchValidationError,
    log_debug,
    returns_search_error,
)
from .expansion import SearchRequest, validate_choice, validate_search_input
from .settings import DEFAULT_RANKING, RankingConfig
from .signatures import (
    AVAILABLE_PLATFORMS,
    AVAILABLE_STACKS,
    DOMAIN_DOCUMENT_TYPES,
    PLATFORM_SUPPORT_TAGS,
)

__all__ = [
    "SearchContext",
    "SearchHit",
    "SearchError",
    "SearchResponse",
    "search_domain",
    "search_styles",
    "search_components",
    "search_patterns",
    "search_stack",
    "search_platforms",
    "search_all",
    "boost_by_platform",
    "get_data_stats",
    "list_available_stacks",
    "list_available_platforms",
]


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


VISUAL_DOMAINS: Dict[str, str] = {
    "style": "styles",
    "color": "colors",
    "typography": "typography",
    "prompt": "prompts",
}
COMPONENT_TYPES: Dict[str, str] = {"icon": "icons", "chart": "charts"}
PATTERN_TYPES: Dict[str, str] = {
    "layout": "landing",
    "ux": "ux-guidelines",
    "product": "products",
}

PLATFORM_SUPPORT_VALUES = ("web", "mobile", "both")


@dataclass(frozen=True)
class SearchContext:
    """Read-only bundle of every index built at startup.

    Built once by ``uxpro.core.indexer.build_search_context`` and passed to
    each query function. Domains without records have no entry in
    ``indexes``.
    """

    indexes: Mapping[str, BM25Index] = field(default_factory=_empty_mapping)
    stack_indexes: Mapping[str, BM25Index] = field(default_factory=_empty_mapping)
    platform_indexes: Mapping[str, BM25Index] = field(default_factory=_empty_mapping)
    unified: Optional[BM25Index] = None
    record_counts: Mapping[str, int] = field(default_factory=_empty_mapping)
    stack_counts: Mapping[str, int] = field(default_factory=_empty_mapping)
    platform_counts: Mapping[str, int] = field(default_factory=_empty_mapping)
    config: RankingConfig = field(default=DEFAULT_RANKING)

    def index_for(self, domain: str) -> Optional[BM25Index]:
        return self.indexes.get(domain)


@dataclass(frozen=True)
class SearchHit:
    """One ranked record. ``data`` is a copy; index data is never handed out."""

    data: Dict[str, Any]
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"data": dict(self.data), "score": self.score}


SearchResponse = Union[List[SearchHit], SearchError]


def _to_hits(scored: Sequence[ScoredDocument], **extra: Any) -> List[SearchHit]:
    return [
        SearchHit(data={**r.document.data, **extra}, score=r.score) for r in scored
    ]


def _require_index(ctx: SearchContext, domain: str) -> BM25Index:
    index = ctx.index_for(domain)
    if index is None:
        raise IndexNotReadyError(f"{DOMAINS_BY_NAME[domain].label} index not initialized")
    return index


def _sort_by_score(hits: List[SearchHit]) -> List[SearchHit]:
    # sorted() is stable, equal scores keep merge order
    return sorted(hits, key=lambda h: h.score, reverse=True)


@returns_search_error
def search_domain(
    ctx: SearchContext, domain: str, query: Any, max_results: Any = None
) -> SearchResponse:
    """
    Search a single domain index.

    Args:
        ctx: Search context
        domain: One of styles, colors, typography, charts, ux-guidelines,
            icons, landing, products, prompts
        query: Search text
        max_results: Result count, 3 when omitted

    Returns:
        Ranked hits or a SearchError
    """
    request = validate_search_input(query, max_results)
    if not isinstance(domain, str):
        raise SearchValidationError("Domain must be a string")
    if domain not in DOMAINS_BY_NAME:
        raise SearchValidationError(
            f"Unknown domain: \"{domain}\". Available domains: "
            + ", ".join(spec.name for spec in DOMAIN_SPECS)
        )
    index = _require_index(ctx, domain)
    return _to_hits(index.search(request.expanded_query, request.max_results))


def _merged_search(
    ctx: SearchContext,
    request: SearchRequest,
    selection: Mapping[str, str],
    chosen: Optional[str],
) -> List[SearchHit]:
    """Search each selected domain with an equal quota and tag hits with ``_domain``."""
    targets = [chosen] if chosen else list(selection)
    n = request.max_results
    quota = n if chosen else max(2, math.ceil(n / len(targets)))

    merged: List[SearchHit] = []
    for tag in targets:
        index = ctx.index_for(selection[tag])
        if index is None:
            continue
        merged.extend(_to_hits(index.search(request.expanded_query, quota), _domain=tag))
    return _sort_by_score(merged)


@returns_search_error
def search_styles(
    ctx: SearchContext, query: Any, domain: Optional[str] = None, max_results: Any = 5
) -> SearchResponse:
    """Visual design search across styles, colors, typography and prompts."""
    request = validate_search_input(query, max_results, default=5)
    chosen = validate_choice(domain, tuple(VISUAL_DOMAINS), "domain")
    return _merged_search(ctx, request, VISUAL_DOMAINS, chosen)[: request.max_results]


@returns_search_error
def search_components(
    ctx: SearchContext, query: Any, type: Optional[str] = None, max_results: Any = 5
) -> SearchResponse:
    """Component search across icons and charts."""
    request = validate_search_input(query, max_results, default=5)
    chosen = validate_choice(type, tuple(COMPONENT_TYPES), "type")
    return _merged_search(ctx, request, COMPONENT_TYPES, chosen)[: request.max_results]


@returns_search_error
def search_patterns(
    ctx: SearchContext, query: Any, type: Optional[str] = None, max_results: Any = 5
) -> SearchResponse:
    """
    Pattern search across landing layouts, UX guidelines and product types.

    When the query names a platform the merged hits are reranked with
    ``boost_by_platform`` before truncation.
    """
    request = validate_search_input(query, max_results, default=5)
    chosen = validate_choice(type, tuple(PATTERN_TYPES), "type")
    hits = _merged_search(ctx, request, PATTERN_TYPES, chosen)

    platform = detect_platform_intent(request.query, ctx.config)
    if not platform.is_default:
        hits = boost_by_platform(hits, platform.platform, ctx.config)
    return hits[: request.max_results]


def _lookup_name(value: Any, label: str, available: Sequence[str]) -> str:
    if value is None:
        raise SearchValidationError(f"{label.capitalize()} name is required")
    if not isinstance(value, str):
        raise SearchValidationError(f"{label.capitalize()} name must be a string")
    name = value.strip().lower()
    if name not in available:
        raise SearchValidationError(
            f"Unknown {label}: \"{name}\". Available {label}s: {', '.join(available)}"
        )
    return name


@returns_search_error
def search_stack(
    ctx: SearchContext, stack_name: Any, query: Any, max_results: Any = None
) -> SearchResponse:
    """Search the guidelines of one framework stack (react, vue, flutter, ...)."""
    name = _lookup_name(stack_name, "stack", AVAILABLE_STACKS)
    request = validate_search_input(query, max_results)
    index = ctx.stack_indexes.get(name)
    if index is None:
        raise IndexNotReadyError(f"Stack index not initialized for: {name}")
    return _to_hits(index.search(request.expanded_query, request.max_results))


@returns_search_error
def search_platforms(
    ctx: SearchContext, platform_name: Any, query: Any, max_results: Any = None
) -> SearchResponse:
    """Search the guidelines of one mobile platform (ios, android)."""
    name = _lookup_name(platform_name, "platform", AVAILABLE_PLATFORMS)
    request = validate_search_input(query, max_results)
    index = ctx.platform_indexes.get(name)
    if index is None:
        raise IndexNotReadyError(f"Platform index not initialized for: {name}")
    return _to_hits(index.search(request.expanded_query, request.max_results))


def _platform_factor(support: Any, platform: str, config: RankingConfig) -> float:
    tag = str(support or "").strip().lower()
    if tag not in PLATFORM_SUPPORT_VALUES:
        tag = "web"

    if platform == "cross-platform":
        if tag == "both":
            return config.cross_platform_both_boost
        if tag == "mobile":
            return config.cross_platform_mobile_boost
        return config.cross_platform_web_boost

    target = PLATFORM_SUPPORT_TAGS.get(platform, "web")
    if tag == "both" or tag == target:
        return config.platform_match_boost
    return config.platform_mismatch_penalty


def boost_by_platform(
    hits: Sequence[SearchHit], platform: str, config: RankingConfig = DEFAULT_RANKING
) -> List[SearchHit]:
    """
    Rescale scores by how well each record's ``Platform_Support`` fits ``platform``.

    Records without the column count as ``web``. ``both`` fits every single
    platform. The result is re-sorted by adjusted score, ties keeping input
    order; truncate afterwards.

    Examples:
        >>> hits = [SearchHit({"Platform_Support": "web"}, 1.0),
        ...         SearchHit({"Platform_Support": "mobile"}, 1.0)]
        >>> [h.data["Platform_Support"] for h in boost_by_platform(hits, "mobile-ios")]
        ['mobile', 'web']
    """
    boosted = [
        SearchHit(
            data=dict(hit.data),
            score=hit.score * _platform_factor(hit.data.get("Platform_Support"), platform, config),
        )
        for hit in hits
    ]
    return _sort_by_score(boosted)


def _partition(candidates: Sequence[ScoredDocument], doc_type: str):
    matching = [c for c in candidates if c.document.type == doc_type]
    other = [c for c in candidates if c.document.type != doc_type]
    return matching, other


def _prioritize(
    candidates: Sequence[ScoredDocument], doc_type: str, slots: int, n: int
) -> List[ScoredDocument]:
    """Take up to ``slots`` hits of ``doc_type`` first, then fill from the rest."""
    matching, other = _partition(candidates, doc_type)
    other_slots = n - min(slots, len(matching))
    return (matching[:slots] + other[:other_slots])[:n]


def _balance(
    candidates: Sequence[ScoredDocument],
    domains: Sequence[DomainMatch],
    n: int,
) -> List[ScoredDocument]:
    """Give each domain a confidence-weighted quota, fill up, re-sort by score."""
    chosen: List[ScoredDocument] = []
    taken = set()
    for match in domains:
        doc_type = DOMAIN_DOCUMENT_TYPES.get(match.domain)
        if doc_type is None:
            continue
        slots = math.ceil((n / len(domains)) * match.confidence)
        for candidate in [c for c in candidates if c.document.type == doc_type][:slots]:
            chosen.append(candidate)
            taken.add(candidate.document.id)

    remaining = n - len(chosen)
    if remaining > 0:
        chosen.extend([c for c in candidates if c.document.id not in taken][:remaining])

    chosen.sort(key=lambda c: c.score, reverse=True)
    return chosen[:n]


def _compose(
    candidates: Sequence[ScoredDocument],
    domains: Sequence[DomainMatch],
    n: int,
    config: RankingConfig,
) -> List[ScoredDocument]:
    if domains and domains[0].confidence >= config.high_confidence:
        doc_type = DOMAIN_DOCUMENT_TYPES.get(domains[0].domain)
        if doc_type:
            log_debug("search_all strategy", strategy="high_confidence", domain=domains[0].domain)
            slots = math.ceil(n * config.high_confidence_share)
            return _prioritize(candidates, doc_type, slots, n)

    strong = [d for d in domains if d.confidence >= config.multi_domain]
    if len(strong) > 1:
        log_debug("search_all strategy", strategy="multi_domain", domains=[d.domain for d in strong])
        return _balance(candidates, strong, n)

    if len(domains) == 1 and domains[0].confidence >= config.low_confidence:
        doc_type = DOMAIN_DOCUMENT_TYPES.get(domains[0].domain)
        if doc_type:
            log_debug("search_all strategy", strategy="low_confidence", domain=domains[0].domain)
            share = (
                config.low_confidence_base_share
                + domains[0].confidence * config.low_confidence_share_per_confidence
            )
            return _prioritize(candidates, doc_type, math.ceil(n * share), n)

    log_debug("search_all strategy", strategy="unified")
    return list(candidates[:n])


@returns_search_error
def search_all(ctx: SearchContext, query: Any, max_results: Any = 10) -> SearchResponse:
    """
    Unified search across every domain with classifier-driven reranking.

    Domains, stacks and platform are detected on the query as typed; BM25
    scores the expanded query against the unified index for several times the
    requested count, then one strategy picks the final hits:

    1. top domain confidence >= high_confidence: ~80% of slots for that domain
    2. two or more domains >= multi_domain: confidence-weighted quota per domain
    3. exactly one domain >= low_confidence: milder quota for that domain
    4. otherwise: unified BM25 order

    Each returned record carries the detection results under
    ``_detected_domains``, ``_detected_stacks`` and ``_detected_platform``
    when something was detected.
    """
    request = validate_search_input(query, max_results, default=10)
    if ctx.unified is None:
        raise IndexNotReadyError("Unified index not initialized")

    config = ctx.config
    domains = detect_domains(request.query, config)
    stacks = detect_stacks(request.query, config)
    platform = detect_platform_intent(request.query, config)

    n = request.max_results
    candidates = ctx.unified.search(request.expanded_query, n * config.candidate_multiplier)
    selected = _compose(candidates, domains, n, config)

    metadata: Dict[str, Any] = {}
    if domains:
        metadata["_detected_domains"] = [d.to_dict() for d in domains]
    if stacks:
        metadata["_detected_stacks"] = [s.to_dict() for s in stacks]
    if not platform.is_default:
        metadata["_detected_platform"] = platform.to_dict()

    return _to_hits(selected, **metadata)


def get_data_stats(ctx: SearchContext) -> Dict[str, Any]:
    """Record counts per domain, stack and platform plus the unified total."""
    stats: Dict[str, Any] = {spec.name: ctx.record_counts.get(spec.name, 0) for spec in DOMAIN_SPECS}
    stats["stacks"] = dict(ctx.stack_counts)
    stats["platforms"] = dict(ctx.platform_counts)
    stats["total"] = len(ctx.unified) if ctx.unified is not None else 0
    return stats


def list_available_stacks() -> List[str]:
    return list(AVAILABLE_STACKS)


def list_available_platforms() -> List[str]:
    return list(AVAILABLE_PLATFORMS)

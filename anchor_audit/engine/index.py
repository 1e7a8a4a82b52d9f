"""Coordinator for the anchor validation pipeline."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from . import dom as dom_module
from . import filters as filters_module
from . import rank as rank_module
from . import targets as targets_module
from .config import EngineConfig, default_config
from .naturalness import is_natural_sentence
from .sentences import extract_sentence, locate_anchor
from .text import fuzzy_contains, normalize_text
from .types import CandidateKind, RawCandidate, Rejection, SourceDocument, Target, ValidatedOpportunity

logger = logging.getLogger(__name__)

CandidateInput = Union[RawCandidate, Mapping[str, Any]]

REJECTION_REASONS = (
    "malformed",
    "unsupported_kind",
    "anchor_too_long",
    "file_extension",
    "duplicate",
    "not_in_document",
    "no_sentence",
    "unnatural_context",
    "list_item",
    "unresolved_target",
    "self_link",
    "context_not_literal",
    "low_relevance",
    "boilerplate",
    "unsafe_position",
)

_ALIASES: Dict[str, Tuple[str, ...]] = {
    "snippet": ("snippet", "trecho"),
    "kind": ("kind", "type"),
    "relevance_score": ("relevance_score", "score"),
    "note": ("note", "pillar_context"),
    "target_url": ("target_url", "destino", "url"),
}


@dataclass
class RunState:
    """Mutable state scoped to a single pipeline invocation."""

    seen_keys: Set[str] = field(default_factory=set)
    rejections: List[Rejection] = field(default_factory=list)

    def reject(self, anchor: str, reason: str, detail: str = "") -> Rejection:
        rejection = Rejection(anchor=anchor, reason=reason, detail=detail)
        self.rejections.append(rejection)
        logger.debug("Rejected %r: %s %s", anchor, reason, detail)
        return rejection

    def rejection_counts(self) -> Dict[str, int]:
        return dict(Counter(rejection.reason for rejection in self.rejections))


def _field(payload: Mapping[str, Any], name: str, default: Any = None) -> Any:
    for alias in _ALIASES.get(name, (name,)):
        if payload.get(alias) is not None:
            return payload[alias]
    return default


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_candidate(payload: CandidateInput) -> Union[RawCandidate, Rejection]:
    """Build a RawCandidate from untrusted generator output.

    Anything that cannot be turned into an ``exact`` candidate comes back
    as a Rejection rather than an exception.
    """

    if isinstance(payload, RawCandidate):
        return payload
    if not isinstance(payload, Mapping):
        return Rejection("", "malformed", f"unexpected payload type {type(payload).__name__}")

    anchor = payload.get("anchor")
    topic = payload.get("target_topic")
    if not isinstance(anchor, str) or not anchor.strip():
        return Rejection(str(anchor or ""), "malformed", "missing anchor")
    if not isinstance(topic, str) or not topic.strip():
        return Rejection(anchor, "malformed", "missing target_topic")

    kind_value = _field(payload, "kind", CandidateKind.EXACT)
    kind = str(getattr(kind_value, "value", kind_value)).strip().lower()
    if kind not in {member.value for member in CandidateKind}:
        return Rejection(anchor, "unsupported_kind", kind)

    try:
        score = float(_field(payload, "relevance_score"))
    except (TypeError, ValueError):
        return Rejection(anchor, "malformed", "relevance score is not a number")

    try:
        return RawCandidate(
            anchor=anchor,
            snippet=str(_field(payload, "snippet", "")),
            target_topic=topic,
            relevance_score=score,
            kind=kind,
            target_url=_optional_text(_field(payload, "target_url")),
            note=_optional_text(_field(payload, "note")),
        )
    except ValueError as exc:
        return Rejection(anchor, "malformed", str(exc))


def validate_candidate(
    candidate: RawCandidate,
    document: SourceDocument,
    targets: Sequence[Target],
    config: EngineConfig,
    state: RunState,
) -> Optional[ValidatedOpportunity]:
    """Run one candidate through every gate; None means it was rejected."""

    anchor = candidate.anchor.strip()
    text = document.text

    if candidate.kind is not CandidateKind.EXACT:
        state.reject(anchor, "unsupported_kind", str(candidate.kind))
        return None

    if filters_module.anchor_too_long(anchor, int(config.get("max_anchor_words"))):
        state.reject(anchor, "anchor_too_long")
        return None
    if filters_module.looks_like_file(anchor):
        state.reject(anchor, "file_extension")
        return None

    key = f"{normalize_text(anchor)}|{candidate.target_url or ''}"
    if key in state.seen_keys:
        state.reject(anchor, "duplicate", key)
        return None
    state.seen_keys.add(key)

    if not fuzzy_contains(text, anchor):
        state.reject(anchor, "not_in_document")
        return None

    match = locate_anchor(text, anchor)
    context = extract_sentence(text, anchor) if match is not None else None
    if match is None or context is None:
        state.reject(anchor, "no_sentence")
        return None

    if not is_natural_sentence(context, int(config.get("min_sentence_length"))):
        state.reject(anchor, "unnatural_context", context)
        return None

    start, end = match.span()
    if filters_module.looks_like_list_item(
        text,
        start,
        candidate.snippet,
        context,
        window=int(config.get("list_window")),
        min_words=int(config.get("list_item_min_words")),
    ):
        state.reject(anchor, "list_item", context)
        return None

    target = targets_module.resolve_target(candidate, targets)
    if target is None:
        state.reject(anchor, "unresolved_target", candidate.target_topic)
        return None

    if targets_module.same_page(target.url, document.url):
        state.reject(anchor, "self_link", target.url)
        return None

    if not filters_module.is_literal_substring(context, text):
        state.reject(anchor, "context_not_literal", context)
        return None

    if candidate.relevance_score < float(config.get("min_relevance")):
        state.reject(anchor, "low_relevance", f"{candidate.relevance_score:.2f}")
        return None
    phrase = filters_module.boilerplate_phrase((anchor, context), config.boilerplate_phrases())
    if phrase is not None:
        state.reject(anchor, "boilerplate", phrase)
        return None

    return ValidatedOpportunity(
        anchor=text[start:end],
        context=context,
        origin_url=document.url,
        destination_url=target.url,
        score=candidate.relevance_score,
        reason=rank_module.score_reason(candidate),
        relevance=candidate.relevance_score,
        kind=candidate.kind.value,
    )


def validate_candidates(
    document: SourceDocument,
    candidates: Sequence[CandidateInput],
    targets: Optional[Sequence[Target]],
    config: EngineConfig | None = None,
    state: RunState | None = None,
) -> List[ValidatedOpportunity]:
    """Return the candidates that pass every gate, in input order."""

    if targets is None:
        raise ValueError("a target registry is required to validate candidates")

    engine_config = config or default_config()
    run_state = state if state is not None else RunState()

    validated: List[ValidatedOpportunity] = []
    for payload in candidates:
        candidate = parse_candidate(payload)
        if isinstance(candidate, Rejection):
            run_state.reject(candidate.anchor, candidate.reason, candidate.detail)
            continue
        opportunity = validate_candidate(candidate, document, targets, engine_config, run_state)
        if opportunity is not None:
            validated.append(opportunity)
    return validated


def find_opportunities(
    document: SourceDocument,
    candidates: Sequence[CandidateInput],
    targets: Optional[Sequence[Target]],
    config: EngineConfig | None = None,
    state: RunState | None = None,
) -> List[ValidatedOpportunity]:
    """Return validated, ranked and truncated opportunities for the page.

    The DOM position check runs last, over the truncated list, and only
    when the document carries HTML.
    """

    engine_config = config or default_config()
    run_state = state if state is not None else RunState()

    validated = validate_candidates(document, candidates, targets, engine_config, run_state)
    ranked = rank_module.rank_opportunities(validated, engine_config)
    limit = int(engine_config.get("max_opportunities_per_page"))
    selected = rank_module.truncate(ranked, limit)
    final = dom_module.filter_unsafe_positions(
        selected,
        document.html,
        engine_config.get("dom_skip_tags", dom_module.HEADING_TAGS),
        run_state.rejections,
    )

    logger.info(
        "Anchor audit for %s: %d candidates, %d accepted, %d rejected",
        document.url,
        len(candidates),
        len(final),
        len(run_state.rejections),
    )
    return final


def dry_run(
    jobs: Sequence[Tuple[SourceDocument, Sequence[CandidateInput]]],
    targets: Sequence[Target],
    config: EngineConfig | None = None,
) -> Dict[str, float | Dict[str, int]]:
    """Return diagnostic metrics for a batch of pages."""

    engine_config = config or default_config()

    total_pages = len(jobs) or 1
    pages_with_opportunities = 0
    total_candidates = 0
    inbound_counts: Dict[str, int] = {
        targets_module.normalize_url_for_comparison(target.url): 0 for target in targets
    }
    rejection_counts: Counter[str] = Counter()
    selected_scores: List[float] = []

    for document, candidates in jobs:
        state = RunState()
        opportunities = find_opportunities(document, candidates, targets, engine_config, state)
        total_candidates += len(candidates)
        rejection_counts.update(state.rejection_counts())
        if opportunities:
            pages_with_opportunities += 1
        for opportunity in opportunities:
            selected_scores.append(opportunity.score)
            key = targets_module.normalize_url_for_comparison(opportunity.destination_url)
            inbound_counts[key] = inbound_counts.get(key, 0) + 1

    accepted = len(selected_scores)
    linked = Counter({url: count for url, count in inbound_counts.items() if count})

    return {
        "coverage": pages_with_opportunities / total_pages,
        "acceptance_rate": accepted / total_candidates if total_candidates else 0.0,
        "mean_score_selected": sum(selected_scores) / accepted if accepted else 0.0,
        "orphan_rate": _compute_orphan_rate(inbound_counts),
        "destination_diversity_index": _shannon_entropy(linked),
        "rejection_counts": dict(rejection_counts),
    }


def _compute_orphan_rate(inbound_counts: Dict[str, int]) -> float:
    total = len(inbound_counts) or 1
    orphans = sum(1 for count in inbound_counts.values() if count == 0)
    return orphans / total


def _shannon_entropy(counter: Counter) -> float:
    total = sum(counter.values())
    if total == 0:
        return 0.0
    entropy = 0.0
    for count in counter.values():
        probability = count / total
        entropy -= probability * math.log(probability)
    if len(counter) <= 1:
        return 0.0
    return entropy / math.log(len(counter))

"""Scoring and ranking logic for validated opportunities."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from .config import EngineConfig
from .types import RawCandidate, ValidatedOpportunity


def snippet_quality(context: str, config: EngineConfig) -> float:
    """Score the context length: 1.0 inside the band, decaying outside it."""

    length = len(context)
    if length == 0:
        return 0.0
    min_length = config.snippet("min_length")
    max_length = config.snippet("max_length")
    if length < min_length:
        return length / min_length
    if length > max_length:
        return max(0.0, 1 - (length - max_length) / config.snippet("decay"))
    return 1.0


def final_score(relevance: float, context: str, config: EngineConfig) -> float:
    """Weighted blend of generator relevance and snippet quality."""

    return config.weight("relevance") * relevance + config.weight("snippet_quality") * snippet_quality(
        context, config
    )


def rank_opportunities(
    opportunities: Sequence[ValidatedOpportunity],
    config: EngineConfig,
) -> List[ValidatedOpportunity]:
    """Return opportunities rescored and sorted by score, descending.

    The sort is stable, so equal scores keep their input order.
    """

    rescored = [
        replace(opportunity, score=final_score(opportunity.relevance, opportunity.context, config))
        for opportunity in opportunities
    ]
    return sorted(rescored, key=lambda item: item.score, reverse=True)


def truncate(opportunities: Sequence[ValidatedOpportunity], limit: int) -> List[ValidatedOpportunity]:
    return list(opportunities[: max(limit, 0)])


def score_reason(candidate: RawCandidate) -> str:
    """Return the human-facing justification for an opportunity."""

    if candidate.note and candidate.note.strip():
        return candidate.note.strip()
    return f"Topic: {candidate.target_topic}"

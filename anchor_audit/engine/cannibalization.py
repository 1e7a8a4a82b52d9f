"""Detect analysed pages that compete for the same topics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .types import Target

SIMILARITY_THRESHOLD = 0.5
SAME_INTENT_THRESHOLD = 0.3


@dataclass(frozen=True)
class CannibalizationReport:
    url: str
    score: float
    competitors: List[str] = field(default_factory=list)


def cluster_similarity(a: Target, b: Target) -> float:
    """Shared clusters over the size of the larger cluster set."""

    clusters_a = {cluster.strip().lower() for cluster in a.clusters if cluster.strip()}
    clusters_b = {cluster.strip().lower() for cluster in b.clusters if cluster.strip()}
    largest = max(len(clusters_a), len(clusters_b))
    if largest == 0:
        return 0.0
    return len(clusters_a & clusters_b) / largest


def _same_intent(a: Target, b: Target) -> bool:
    if not a.intent or not b.intent:
        return False
    return a.intent.strip().lower() == b.intent.strip().lower()


def detect_cannibalization(pages: Sequence[Target]) -> List[CannibalizationReport]:
    """Return one report per page that overlaps with at least one other page."""

    reports: List[CannibalizationReport] = []
    for index, current in enumerate(pages):
        competitors: List[str] = []
        max_score = 0.0
        for other_index, other in enumerate(pages):
            if other_index == index:
                continue
            similarity = cluster_similarity(current, other)
            if similarity > SIMILARITY_THRESHOLD or (
                _same_intent(current, other) and similarity > SAME_INTENT_THRESHOLD
            ):
                competitors.append(other.url)
                max_score = max(max_score, similarity)
        if competitors:
            reports.append(CannibalizationReport(url=current.url, score=max_score, competitors=competitors))
    return reports

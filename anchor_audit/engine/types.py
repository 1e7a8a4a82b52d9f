"""Typed data structures used by the anchor validation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CandidateKind(str, Enum):
    """Closed set of candidate kinds the pipeline accepts."""

    EXACT = "exact"


@dataclass(frozen=True)
class RawCandidate:
    """Unverified anchor proposal produced by the upstream generator."""

    anchor: str
    snippet: str
    target_topic: str
    relevance_score: float
    kind: CandidateKind = CandidateKind.EXACT
    target_url: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        # Coerce plain strings; anything outside the enum raises ValueError.
        object.__setattr__(self, "kind", CandidateKind(self.kind))
        if not 0.0 <= self.relevance_score <= 1.0:
            raise ValueError(f"relevance_score out of range: {self.relevance_score!r}")


@dataclass(frozen=True)
class Target:
    """Linkable destination known to the caller for one run."""

    url: str
    clusters: List[str] = field(default_factory=list)
    theme: Optional[str] = None
    intent: Optional[str] = None


@dataclass(frozen=True)
class SourceDocument:
    """Page whose body text is searched for anchors."""

    url: str
    text: str
    html: Optional[str] = None


@dataclass(frozen=True)
class ValidatedOpportunity:
    """Grounded, ranked internal-link opportunity."""

    anchor: str
    context: str
    origin_url: str
    destination_url: str
    score: float
    reason: str
    relevance: float
    kind: str = CandidateKind.EXACT.value


@dataclass(frozen=True)
class Rejection:
    """Record of a candidate that failed a gate."""

    anchor: str
    reason: str
    detail: str = ""

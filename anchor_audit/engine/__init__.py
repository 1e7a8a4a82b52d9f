"""Anchor validation engine: grounding, filtering and ranking of candidates."""

from .index import RunState, dry_run, find_opportunities, parse_candidate, validate_candidates
from .types import CandidateKind, RawCandidate, Rejection, SourceDocument, Target, ValidatedOpportunity

__all__ = [
    "CandidateKind",
    "RawCandidate",
    "Rejection",
    "RunState",
    "SourceDocument",
    "Target",
    "ValidatedOpportunity",
    "dry_run",
    "find_opportunities",
    "parse_candidate",
    "validate_candidates",
]

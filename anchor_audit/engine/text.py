"""Shared text utilities for the anchor validation engine."""

from __future__ import annotations

import re
import unicodedata
from typing import List

from rapidfuzz.distance import Levenshtein

_WS_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[\W_]+")

FUZZY_MAX_NEEDLE = 50
FUZZY_STEP = 5
FUZZY_WINDOW_SLACK = 5
FUZZY_TOLERANCE = 0.2
FUZZY_MIN_ERRORS = 2


def normalize_text(text: str) -> str:
    """Lower-case the text and strip combining diacritical marks."""

    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""

    return _WS_RE.sub(" ", text).strip()


def words(text: str) -> List[str]:
    """Return whitespace-separated words of the text."""

    return [word for word in _WS_RE.split(text.strip()) if word]


def _strip_to_alnum(text: str) -> str:
    return _NON_ALNUM_RE.sub("", text)


def fuzzy_contains(document: str, needle: str) -> bool:
    """Return True when the document plausibly contains the needle.

    Two passes, cheapest first. The exact pass compares both strings after
    normalization with every non-alphanumeric character removed, which
    absorbs punctuation and spacing drift. The fuzzy pass only runs for
    needles of at most ``FUZZY_MAX_NEEDLE`` characters: it slides over the
    normalized document in steps of ``FUZZY_STEP`` and accepts the first
    window whose leading ``len(needle)`` characters are within
    ``max(FUZZY_MIN_ERRORS, floor(FUZZY_TOLERANCE * len(needle)))`` edits.

    The stride is an approximation: a near match that starts between two
    window offsets can be missed. The check is asymmetric and answers only
    whether the document contains the needle.
    """

    if not document or not needle:
        return False

    document_norm = normalize_text(document)
    needle_norm = normalize_text(needle)

    needle_clean = _strip_to_alnum(needle_norm)
    if needle_clean and needle_clean in _strip_to_alnum(document_norm):
        return True

    size = len(needle_norm)
    if size > FUZZY_MAX_NEEDLE or not needle_norm.strip():
        return False

    threshold = max(FUZZY_MIN_ERRORS, int(size * FUZZY_TOLERANCE))
    for start in range(0, len(document_norm) - size + 1, FUZZY_STEP):
        window = document_norm[start : start + size + FUZZY_WINDOW_SLACK]
        if Levenshtein.distance(needle_norm, window[:size]) <= threshold:
            return True
    return False

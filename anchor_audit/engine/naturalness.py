"""Heuristics that tell editorial prose apart from layout and code leaks."""

from __future__ import annotations

import re

MIN_SENTENCE_LENGTH = 20

_CODE_RE = re.compile(
    r"\bfunction\s*\w*\s*\(|\bdef\s+\w+\s*\(|\b(?:const|let|var)\s+\w+\s*=|=>",
)
_BARE_VALUE_RE = re.compile(r"^[\d\W_]+$")
_CAPTION_RE = re.compile(r"^\s*(?:fig|figure|imagem|foto|v[ií]deo)\.?\s*\d+", re.IGNORECASE)
_IMAGE_SUFFIX_RE = re.compile(r"\.(?:jpe?g|png|gif|webp|svg|avif|bmp)\s*$", re.IGNORECASE)


def is_natural_sentence(text: str, min_length: int = MIN_SENTENCE_LENGTH) -> bool:
    """Return True when the text reads like a sentence of body copy."""

    if not text or not text.strip():
        return False
    stripped = text.strip()
    if stripped.count("|") > 1 or stripped.count("•") > 1:
        return False
    if stripped[0] in "{[(":
        return False
    if _CODE_RE.search(stripped):
        return False
    if _BARE_VALUE_RE.match(stripped):
        return False
    if len(stripped) < min_length:
        return False
    if _CAPTION_RE.match(stripped):
        return False
    if _IMAGE_SUFFIX_RE.search(stripped):
        return False
    return True

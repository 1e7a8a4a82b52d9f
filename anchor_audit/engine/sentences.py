"""Recover the literal sentence that holds an anchor in the source text."""

from __future__ import annotations

import re
from typing import Optional

_MARKDOWN_MARKS_RE = re.compile(r"[*_#`~]+")
_SENTENCE_END = ".?!"
_URL_CHARS = "/.-"
_PATH_WINDOW = 10


def clean_anchor(anchor: str) -> str:
    """Strip markdown emphasis and heading characters from the anchor."""

    return " ".join(_MARKDOWN_MARKS_RE.sub(" ", anchor).split())


def _anchor_pattern(anchor: str) -> re.Pattern[str]:
    parts = [re.escape(part) for part in anchor.split()]
    return re.compile(r"\s+".join(parts), flags=re.IGNORECASE)


def _inside_markdown_link(text: str, start: int, end: int) -> bool:
    before = text[start - 1] if start > 0 else ""
    after = text[end] if end < len(text) else ""
    if before == "[" or after == "]":
        return True
    return text[max(0, start - 2) : start] == "]("


def _inside_url(text: str, start: int, end: int) -> bool:
    window = text[max(0, start - _PATH_WINDOW) : end + _PATH_WINDOW]
    if not any(char.isspace() for char in window) and any(char in window for char in _URL_CHARS):
        return True

    # Whole whitespace-delimited token, so a URL ending near a space still counts.
    token_start = start
    while token_start > 0 and not text[token_start - 1].isspace():
        token_start -= 1
    token_end = end
    while token_end < len(text) and not text[token_end].isspace():
        token_end += 1
    token = text[token_start:token_end]
    return "/" in token or token.lower().startswith("www.")


def locate_anchor(text: str, anchor: str) -> Optional[re.Match[str]]:
    """Return the first occurrence of the anchor that sits in prose.

    Occurrences inside markdown link labels or targets, URLs and file paths
    are skipped and the scan resumes one character later.
    """

    cleaned = clean_anchor(anchor)
    if not cleaned or not text:
        return None

    pattern = _anchor_pattern(cleaned)
    position = 0
    while position <= len(text):
        match = pattern.search(text, position)
        if match is None:
            return None
        start, end = match.span()
        if _inside_markdown_link(text, start, end) or _inside_url(text, start, end):
            position = start + 1
            continue
        return match
    return None


def _ends_sentence(text: str, index: int) -> bool:
    # "![" opens image markdown and does not close a sentence.
    if text[index] == "!" and text[index + 1 : index + 2] == "[":
        return False
    return text[index] in _SENTENCE_END


def _inside_image_markdown(text: str, start: int) -> bool:
    """Return True when the position belongs to an image caption on its line."""

    line_start = text.rfind("\n", 0, start) + 1
    if text[line_start:start].lstrip().lower().startswith("[image"):
        return True
    opener = text.rfind("![", line_start, start)
    return opener != -1 and "]" not in text[opener:start]


def extract_sentence(text: str, anchor: str) -> Optional[str]:
    """Return the sentence or clause around the anchor, or None.

    The span grows left to the previous sentence terminator or newline and
    right to the next terminator (kept) or newline. Image captions, whether
    ``![alt](src)`` or ``[Image: ...]``, are refused.
    """

    match = locate_anchor(text, anchor)
    if match is None:
        return None
    start, end = match.span()
    if _inside_image_markdown(text, start):
        return None

    left = start
    while left > 0 and not _ends_sentence(text, left - 1) and text[left - 1] != "\n":
        left -= 1

    right = end
    while right < len(text) and text[right] != "\n":
        if _ends_sentence(text, right):
            right += 1
            break
        right += 1

    sentence = text[left:right].strip()
    if not sentence:
        return None
    if sentence.startswith("![") or sentence.lower().startswith("[image"):
        return None
    return sentence

"""Guardrails and filtering for anchor candidates."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from .text import collapse_whitespace, normalize_text, words

_FILE_EXTENSION_RE = re.compile(
    r"\.(?:jpe?g|png|gif|webp|svg|avif|bmp|ico|pdf|docx?|xlsx?|pptx?|csv|zip|rar|mp3|mp4|mov)\b",
    re.IGNORECASE,
)
_LIST_ITEM_RE = re.compile(r"^\s*[*-]\s+")

BOILERPLATE_PHRASES: Sequence[str] = (
    "copyright",
    "©",
    "todos os direitos reservados",
    "all rights reserved",
    "cookie",
    "politica de privacidade",
    "privacy policy",
    "termos de uso",
    "terms of use",
    "clique aqui",
    "click here",
    "saiba mais",
    "leia mais",
    "read more",
    "leia tambem",
    "veja tambem",
    "posts relacionados",
    "artigos relacionados",
    "related posts",
    "inscreva-se",
    "subscribe",
    "newsletter",
    "compartilhe",
    "share this",
    "cadastre-se",
    "sign up",
)


def anchor_too_long(anchor: str, max_words: int) -> bool:
    return len(words(anchor)) > max_words


def looks_like_file(anchor: str) -> bool:
    """Return True when the anchor names an image or document file."""

    return bool(_FILE_EXTENSION_RE.search(anchor))


def looks_like_list_item(
    text: str,
    start: int,
    snippet: str,
    context: str,
    window: int,
    min_words: int,
) -> bool:
    """Return True for short bullet items (menus, feature lists).

    Either the line holding the anchor must open with a dash or star bullet
    no more than ``window`` characters before the anchor, or the generator's
    snippet must open with one. The recovered context must also be shorter
    than ``min_words`` words.
    """

    line_start = text.rfind("\n", 0, start) + 1
    prefix = text[line_start:start]
    bulleted = len(prefix) <= window and bool(_LIST_ITEM_RE.match(prefix))
    bulleted = bulleted or bool(_LIST_ITEM_RE.match(snippet or ""))
    return bulleted and len(words(context)) < min_words


def boilerplate_phrase(texts: Iterable[str], extra: Sequence[str] = ()) -> Optional[str]:
    """Return the first blocklisted phrase found in any of the texts."""

    haystacks = [normalize_text(text) for text in texts if text]
    for phrase in list(BOILERPLATE_PHRASES) + list(extra):
        needle = normalize_text(phrase)
        if needle and any(needle in haystack for haystack in haystacks):
            return phrase
    return None


def is_literal_substring(context: str, text: str) -> bool:
    """Return True when the context occurs verbatim in the text.

    Tried exactly, then with whitespace collapsed, then with whitespace
    collapsed and case folded.
    """

    if not context:
        return False
    if context in text:
        return True
    context_ws = collapse_whitespace(context)
    text_ws = collapse_whitespace(text)
    if context_ws in text_ws:
        return True
    return context_ws.lower() in text_ws.lower()

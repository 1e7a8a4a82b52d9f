"""Reject anchors that only occur in headings, links or code in the page HTML."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString  # type: ignore

from .text import collapse_whitespace, normalize_text
from .types import Rejection, ValidatedOpportunity

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLOCK_TAGS = ("p", "li", "blockquote", "td", "dd", "figcaption", "div", "section", "article")


@dataclass(frozen=True)
class PageRegions:
    """Normalized text of the page split by whether links may go there."""

    headings: List[str]
    safe: List[str]
    unsafe: List[str]


def _key(text: str) -> str:
    return collapse_whitespace(normalize_text(text))


def _parse(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        return BeautifulSoup(html, "html.parser")


def _should_skip(node: NavigableString, skip_tags: Iterable[str]) -> bool:
    """Return True when any ancestor of the text node is a skip tag."""

    skip = set(skip_tags)
    parent = node.parent
    while parent is not None and getattr(parent, "name", None):
        if parent.name and parent.name.lower() in skip:
            return True
        parent = parent.parent
    return False


def page_regions(html: str, skip_tags: Sequence[str]) -> PageRegions:
    """Collect heading, safe and unsafe text from the HTML."""

    soup = _parse(html)
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    headings = [_key(tag.get_text(" ")) for tag in soup.find_all(HEADING_TAGS)]

    unsafe = [_key(str(node)) for node in soup.find_all(string=True) if _should_skip(node, skip_tags)]

    safe: List[str] = []
    blocks = soup.find_all(BLOCK_TAGS) or [soup]
    for block in blocks:
        safe_parts: List[str] = []
        for node in block.descendants:
            if not isinstance(node, NavigableString):
                continue
            safe_parts.append(" " if _should_skip(node, skip_tags) else str(node))
        text = _key("".join(safe_parts))
        if text:
            safe.append(text)

    unsafe.extend(heading for heading in headings if heading)
    return PageRegions(
        headings=[heading for heading in headings if heading],
        safe=safe,
        unsafe=[text for text in unsafe if text],
    )


def position_rejection(opportunity: ValidatedOpportunity, regions: PageRegions) -> Optional[Rejection]:
    """Return a Rejection when the opportunity sits in an unsafe region."""

    context = _key(opportunity.context)
    anchor = _key(opportunity.anchor)
    if context and any(context in heading for heading in regions.headings):
        return Rejection(opportunity.anchor, "unsafe_position", "context is heading text")
    if any(anchor in text for text in regions.safe):
        return None
    if any(anchor in text for text in regions.unsafe):
        return Rejection(opportunity.anchor, "unsafe_position", "anchor only inside heading, link or code")
    return None


def filter_unsafe_positions(
    opportunities: Sequence[ValidatedOpportunity],
    html: Optional[str],
    skip_tags: Sequence[str],
    rejections: Optional[List[Rejection]] = None,
) -> List[ValidatedOpportunity]:
    """Return the opportunities whose anchors may be linked in the HTML.

    Without HTML the input is returned unchanged.
    """

    if not html or not opportunities:
        return list(opportunities)

    regions = page_regions(html, skip_tags)
    kept: List[ValidatedOpportunity] = []
    for opportunity in opportunities:
        rejection = position_rejection(opportunity, regions)
        if rejection is None:
            kept.append(opportunity)
            continue
        logger.debug("Rejected %r: %s (%s)", rejection.anchor, rejection.reason, rejection.detail)
        if rejections is not None:
            rejections.append(rejection)
    return kept

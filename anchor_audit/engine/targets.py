"""Target lookup and URL normalization."""

from __future__ import annotations

import re
from typing import Optional, Sequence
from urllib.parse import urlparse

from .text import normalize_text
from .types import RawCandidate, Target

_SCHEME_WWW_RE = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)


def _parse(url: str):
    candidate = url.strip()
    if not candidate.lower().startswith("http"):
        candidate = f"https://{candidate}"
    parsed = urlparse(candidate)
    if not parsed.hostname:
        raise ValueError(f"no host in {url!r}")
    return parsed


def normalize_url_for_comparison(url: str) -> str:
    """Return ``host/path`` without scheme, ``www.``, query or trailing slash."""

    try:
        parsed = _parse(url)
    except ValueError:
        cleaned = _SCHEME_WWW_RE.sub("", url.strip().lower())
        return cleaned.split("#")[0].rstrip("/")
    hostname = parsed.hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return f"{hostname}{parsed.path.rstrip('/')}"


def normalize_url_for_metadata(url: str) -> str:
    """Return the canonical ``https://host/path`` form used for storage keys."""

    try:
        parsed = _parse(url)
    except ValueError:
        return url.strip().lower().split("#")[0].rstrip("/")
    hostname = parsed.hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    path = parsed.path.rstrip("/") or "/"
    return f"https://{hostname}{path}"


def same_page(url_a: str, url_b: str) -> bool:
    return normalize_url_for_comparison(url_a) == normalize_url_for_comparison(url_b)


def _overlaps(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


def resolve_target(candidate: RawCandidate, targets: Sequence[Target]) -> Optional[Target]:
    """Return the target the candidate points to, or None.

    The declared ``target_url`` wins when it names a known target. Otherwise
    the stated topic is matched, in either direction, against each target's
    normalized URL, clusters and theme.
    """

    if candidate.target_url:
        for target in targets:
            if target.url == candidate.target_url:
                return target
        for target in targets:
            if same_page(target.url, candidate.target_url):
                return target

    topic = normalize_text(candidate.target_topic or "").strip()
    if not topic:
        return None

    for target in targets:
        if _overlaps(topic, normalize_text(target.url)):
            return target
        clusters = [normalize_text(cluster).strip() for cluster in target.clusters]
        if any(_overlaps(topic, cluster) for cluster in clusters):
            return target
        if target.theme and _overlaps(topic, normalize_text(target.theme).strip()):
            return target
    return None

"""URL helpers for capture URLs: normalization plus page and host labels."""

from __future__ import annotations

from urllib.parse import urlparse

MISSING_URL = "—"

UNKNOWN_SOURCE = "Unknown"
HOSTNAME_FALLBACK = "Captured from"


def normalize_url(url: str | None) -> str:
    """Normalize a capture URL, mapping absent values to the missing-url sentinel."""
    if url is None or not url.strip():
        return MISSING_URL
    return url.strip()


def _parse_absolute(url: str | None):
    if not url or url == MISSING_URL:
        return None
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed


def source_label_from_url(url: str | None) -> str:
    """Page label from the first path segment: "/" -> Homepage, "/dashboard/x" -> Dashboard."""
    parsed = _parse_absolute(url)
    if parsed is None:
        return UNKNOWN_SOURCE
    segments = [seg for seg in parsed.path.split("/") if seg]
    if not segments:
        return "Homepage"
    first = segments[0]
    return first[:1].upper() + first[1:]


def hostname_label(url: str | None) -> str:
    """Hostname for a Source entry, or a literal fallback label for malformed URLs."""
    parsed = _parse_absolute(url)
    if parsed is None:
        return HOSTNAME_FALLBACK
    try:
        return parsed.hostname or HOSTNAME_FALLBACK
    except ValueError:
        return HOSTNAME_FALLBACK

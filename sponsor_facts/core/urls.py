"""URL helpers for website hints and provenance records."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_site(site: str | None) -> str:
    """Reduce a website hint to a bare ``host[/path]`` form.

    The hint is parsed as a URL (``https://`` is assumed when no scheme is
    given) and reduced to its hostname plus path. The hostname is
    lowercased by the parser and the port, query and fragment are dropped;
    a root path ("/" or empty) is omitted. Hints that do not parse to a
    hostname fall back to plain removal of a leading ``http(s)://``.

    Examples:
        >>> normalize_site("https://Example.com/About/")
        'example.com/About/'
        >>> normalize_site("acme.org")
        'acme.org'
    """
    if not site:
        return ""
    site = site.strip()
    candidate = site if _SCHEME_RE.match(site) else f"https://{site}"
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
    except ValueError:
        hostname = None
    if not hostname:
        return _SCHEME_RE.sub("", site)
    path = parts.path
    return hostname + ("" if path in ("", "/") else path)


def site_url(normalized: str) -> str:
    """Build the absolute https URL for a normalized ``host[/path]``."""
    return f"https://{normalized}"


def is_absolute_http_url(url: str | None) -> bool:
    if not url:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)

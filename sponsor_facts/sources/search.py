"""
Search fallback provider.

Scrapes the first organic result from a lite HTML search page and runs
the HTML fact extractor on the page it points to. Matching the results
anchor by pattern is brittle by nature; no match simply means no facts.
"""

from __future__ import annotations

import html
import re
from urllib.parse import parse_qs, unquote, urlsplit

from ..core.types import Provenance, ProviderResult, SourceType, SponsorQuery
from ..core.urls import is_absolute_http_url
from ..extract.html import extract_facts_from_html
from .base import SourceProvider

_RESULT_LINK_RE = re.compile(r'<a[^>]+class="result__a"[^>]*href="(.*?)"', re.IGNORECASE)
_REDIRECT_PATHS = ("/l", "/l/")


class SearchFallbackProvider(SourceProvider):
    """Facts from the top search hit, used only when earlier sources came up short."""

    name = "search"

    def should_run(self, query: SponsorQuery, fact_count: int) -> bool:
        return fact_count < self.cfg.sources.search_fallback_threshold

    async def fetch_facts(self, query: SponsorQuery) -> ProviderResult:
        results = await self.fetcher.get_text(self.cfg.sources.search_url, params={"q": query.name})
        if not results.ok:
            return self._fail(f"search page failed: {results.error}")

        href = first_result_href(results.text or "")
        if not href:
            return self._fail("no result link on search page")
        link = resolve_result_link(href)
        if not is_absolute_http_url(link):
            return self._fail(f"unusable result link: {link!r}")

        page = await self.fetcher.get_text(link)
        if not page.ok:
            return self._fail(f"result fetch failed: {page.error}")

        return ProviderResult(
            provider=self.name,
            facts=extract_facts_from_html(page.text, self.cfg.extract),
            source=Provenance(type=SourceType.search, url=link),
        )


def first_result_href(results_html: str) -> str:
    match = _RESULT_LINK_RE.search(results_html)
    return match.group(1).strip() if match else ""


def resolve_result_link(href: str) -> str:
    """Turn a result anchor href into the target URL.

    Redirect links of the form ``//duckduckgo.com/l/?uddg=<encoded>&rut=...``
    are unwrapped to the ``uddg`` target; anything else is percent-decoded.
    Protocol-relative results get an ``https:`` scheme.

    Examples:
        >>> resolve_result_link("//duckduckgo.com/l/?uddg=https%3A%2F%2Facme.com%2F&amp;rut=x")
        'https://acme.com/'
    """
    href = html.unescape(href)
    parts = urlsplit(href)
    link = ""
    if parts.path in _REDIRECT_PATHS:
        target = parse_qs(parts.query).get("uddg")
        if target:
            link = target[0]
    if not link:
        link = unquote(href)
    if link.startswith("//"):
        link = f"https:{link}"
    return link

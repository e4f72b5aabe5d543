from __future__ import annotations

from ..core.types import Provenance, ProviderResult, SourceType, SponsorQuery
from ..core.urls import normalize_site, site_url
from ..extract.html import extract_facts_from_html
from .base import SourceProvider


class WebsiteProvider(SourceProvider):
    """Facts from the sponsor's own homepage, when a website hint is given."""

    name = "website"

    def should_run(self, query: SponsorQuery, fact_count: int) -> bool:
        return bool(query.website)

    async def fetch_facts(self, query: SponsorQuery) -> ProviderResult:
        site = normalize_site(query.website)
        if not site:
            return self._fail("no website hint")
        url = site_url(site)

        result = await self.fetcher.get_text(url)
        if not result.ok:
            return self._fail(f"fetch failed: {result.error}")

        facts = extract_facts_from_html(result.text, self.cfg.extract)
        return ProviderResult(
            provider=self.name,
            facts=facts,
            source=Provenance(type=SourceType.website, url=url),
        )

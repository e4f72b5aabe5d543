"""
Fact aggregation across source providers.

This module coordinates one sponsor lookup:
1. Validate the query (no network activity for an invalid one)
2. Website provider (only with a website hint), then Wikipedia
3. Search fallback, only while fewer than the threshold of facts exist
4. Placeholder fact if nothing at all was found
5. Pinned "information available at <site>" fact for website hints
6. Final clean, de-duplicate and truncate to the output cap

Each provider is an isolation boundary: its failure (returned or raised)
withholds only its own contribution.
"""

from __future__ import annotations

import asyncio
import logging

from .config import AppConfig
from .core.cleaner import clean_text
from .core.factset import FactSet
from .core.types import PipelineResult, Provenance, ProviderResult, SponsorQuery
from .core.urls import is_absolute_http_url, normalize_site
from .fetch.fetcher import HttpFetcher
from .logging_utils import log_event
from .sources import Fetcher, SearchFallbackProvider, SourceProvider, WebsiteProvider, WikipediaProvider


def placeholder_fact(sponsor: str) -> str:
    return f"{sponsor} is referenced on public web sources"


def website_fact(normalized_site: str) -> str:
    return f"information available at {normalized_site}"


class FactAggregator:
    """Runs the provider chain for a sponsor and merges the evidence.

    Attributes:
        fetcher: HTTP capability shared by all providers of a run
        cfg: Application configuration
        logger: Logger for per-provider outcome events
        primary: Providers that run before the fallback threshold check
        fallback: Providers gated on the running fact count
    """

    def __init__(self, fetcher: Fetcher, cfg: AppConfig | None = None, logger: logging.Logger | None = None):
        self.fetcher = fetcher
        self.cfg = cfg or AppConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.primary: list[SourceProvider] = [
            WebsiteProvider(fetcher, self.cfg),
            WikipediaProvider(fetcher, self.cfg),
        ]
        self.fallback: list[SourceProvider] = [SearchFallbackProvider(fetcher, self.cfg)]

    async def aggregate(self, query: SponsorQuery) -> PipelineResult:
        """Produce the bounded, de-duplicated fact list for a sponsor.

        Args:
            query: Validated sponsor query

        Returns:
            PipelineResult with at most cfg.output.max_facts facts and one
            provenance record per provider that succeeded
        """
        facts = self._new_fact_set()
        sources: list[Provenance] = []

        if self.cfg.sources.parallel_primary:
            # Primary providers do not depend on each other; gather keeps their order.
            results = await asyncio.gather(*(self._run_provider(p, query, 0) for p in self.primary))
            for result in results:
                self._merge(result, facts, sources)
        else:
            for provider in self.primary:
                self._merge(await self._run_provider(provider, query, len(facts)), facts, sources)
        for provider in self.fallback:
            self._merge(await self._run_provider(provider, query, len(facts)), facts, sources)

        if not len(facts):
            facts.add(placeholder_fact(query.name))

        site = normalize_site(query.website)
        pinned = website_fact(site) if site else None
        final = self._finalize(facts, pinned)

        log_event(
            self.logger,
            "Aggregation finished",
            event="aggregate_done",
            sponsor=query.name,
            fact_count=len(final),
            source_types=[source.type.value for source in sources],
        )
        return PipelineResult(facts=final, sources=sources)

    async def _run_provider(
        self,
        provider: SourceProvider,
        query: SponsorQuery,
        fact_count: int,
    ) -> ProviderResult | None:
        """Run one provider behind an isolation boundary.

        Returns:
            The provider's result, a failure result if it raised, or None
            when the provider chose not to run
        """
        if not provider.should_run(query, fact_count):
            log_event(
                self.logger,
                f"Provider {provider.name} skipped",
                level=logging.DEBUG,
                event="provider_skipped",
                provider=provider.name,
                fact_count=fact_count,
            )
            return None
        try:
            result = await provider.fetch_facts(query)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning(
                "Provider %s raised",
                provider.name,
                exc_info=True,
                extra={"event": "provider_failed", "provider": provider.name},
            )
            return ProviderResult.failure(provider.name, f"{type(exc).__name__}: {exc}")

        if result.ok:
            log_event(
                self.logger,
                f"Provider {provider.name} returned {len(result.facts)} facts",
                event="provider_done",
                provider=provider.name,
                fact_count=len(result.facts),
            )
        else:
            log_event(
                self.logger,
                f"Provider {provider.name} failed: {result.error}",
                event="provider_failed",
                provider=provider.name,
                reason=result.error,
            )
        return result

    def _merge(self, result: ProviderResult | None, facts: FactSet, sources: list[Provenance]) -> None:
        if result is None or not result.ok:
            return
        facts.extend(clean_text(fact) for fact in result.facts)
        if result.source is not None and is_absolute_http_url(result.source.url):
            sources.append(result.source)

    def _finalize(self, facts: FactSet, pinned: str | None) -> list[str]:
        limit = self.cfg.output.max_facts
        if limit <= 0:
            return []
        cleaned = self._new_fact_set()
        if pinned:
            # Reserve the pinned fact so an identical extracted fact is not kept twice.
            cleaned.add(pinned)
        cleaned.extend(clean_text(fact) for fact in facts)
        ordered = [fact for fact in cleaned if fact != pinned]
        if pinned:
            return ordered[: limit - 1] + [pinned]
        return ordered[:limit]

    def _new_fact_set(self) -> FactSet:
        threshold = self.cfg.dedup.similarity_threshold if self.cfg.dedup.fuzzy else None
        return FactSet(similarity_threshold=threshold)


async def aggregate_sponsor(
    name: str,
    website: str | None = None,
    cfg: AppConfig | None = None,
    fetcher: Fetcher | None = None,
    logger: logging.Logger | None = None,
) -> PipelineResult:
    """Validate inputs and run the full pipeline for one sponsor.

    Raises:
        InvalidQueryError: If the sponsor name is missing or blank
    """
    cfg = cfg or AppConfig()
    query = SponsorQuery(name=name, website=website)
    if fetcher is not None:
        return await FactAggregator(fetcher, cfg, logger).aggregate(query)
    async with HttpFetcher(cfg.fetch) as http:
        return await FactAggregator(http, cfg, logger).aggregate(query)

"""
Abstract base class for source providers.

New providers should inherit from SourceProvider and implement
fetch_facts(). Override should_run() when the provider is conditional.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Protocol

from ..config import AppConfig
from ..core.types import ProviderResult, SponsorQuery
from ..fetch.fetcher import FetchResult


class Fetcher(Protocol):
    """The HTTP capability providers depend on (see HttpFetcher)."""

    async def get_text(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResult: ...

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResult: ...


class SourceProvider(ABC):
    """Abstract base class for best-effort fact sources.

    Providers never raise for upstream problems; they return a
    ProviderResult carrying either facts plus a provenance record, or a
    failure reason.

    Attributes:
        name: Short provider identifier used in logs
        fetcher: HTTP capability shared across providers of one run
        cfg: Application configuration
    """

    name: str = "provider"

    def __init__(self, fetcher: Fetcher, cfg: AppConfig):
        self.fetcher = fetcher
        self.cfg = cfg

    def should_run(self, query: SponsorQuery, fact_count: int) -> bool:
        """Decide whether to consult this provider.

        Args:
            query: The sponsor query
            fact_count: Number of facts gathered by earlier providers

        Returns:
            True to run the provider, False to skip it
        """
        return True

    @abstractmethod
    async def fetch_facts(self, query: SponsorQuery) -> ProviderResult:
        """Fetch candidate facts for a sponsor.

        Args:
            query: The sponsor query

        Returns:
            ProviderResult with cleaned facts and a provenance record on success
        """
        raise NotImplementedError

    def _fail(self, reason: str) -> ProviderResult:
        return ProviderResult.failure(self.name, reason)

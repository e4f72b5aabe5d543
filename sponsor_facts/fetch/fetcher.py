"""
Async HTTP fetching for source providers.

HttpFetcher wraps a single httpx.AsyncClient for the lifetime of one
pipeline run. Failures (network errors, non-2xx responses, undecodable
JSON) are returned as FetchResult values rather than raised, so each
call site can decide how to degrade.
"""

from __future__ import annotations

from dataclasses import dataclass
import asyncio
from typing import Any, Mapping

import httpx

from ..config import FetchConfig, get_user_agent


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    On success text is populated (and data too for JSON requests); on
    failure error is populated. status_code may be None for network-level
    failures.

    Attributes:
        url: The URL that was requested (final URL after redirects on success)
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
        data: Decoded JSON body for get_json(), None otherwise
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HttpFetcher:
    """Redirect-following HTTP client used by all providers.

    Use as an async context manager; the underlying connection pool is
    closed on exit.

    Attributes:
        cfg: Fetch settings (timeout, retries, proxy trust, User-Agent)
    """

    def __init__(self, cfg: FetchConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg or FetchConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpFetcher":
        self._client = httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds,
            headers={"User-Agent": get_user_agent(self.cfg)},
            follow_redirects=True,
            trust_env=self.cfg.trust_env,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_text(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResult:
        """GET a URL and return its body as text."""
        return await self._get(url, params, parse_json=False)

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResult:
        """GET a URL and decode its body as JSON into FetchResult.data."""
        return await self._get(url, params, parse_json=True)

    async def _get(self, url: str, params: Mapping[str, Any] | None, parse_json: bool) -> FetchResult:
        if self._client is None:
            raise RuntimeError("HttpFetcher must be used as an async context manager")

        last_error: str | None = None
        status_code: int | None = None

        for attempt in range(self.cfg.retries + 1):
            try:
                resp = await self._client.get(url, params=params)
                status_code = resp.status_code
                resp.raise_for_status()
                data = resp.json() if parse_json else None
                return FetchResult(
                    url=str(resp.url),
                    status_code=status_code,
                    text=resp.text,
                    error=None,
                    data=data,
                )
            except httpx.HTTPStatusError as exc:
                last_error = f"HTTP {exc.response.status_code}"
            except ValueError as exc:
                # Malformed or undecodable bodies will not improve on retry
                return FetchResult(url=url, status_code=status_code, text=None, error=f"{type(exc).__name__}: {exc}")
            except httpx.HTTPError as exc:
                status_code = None
                last_error = f"{type(exc).__name__}: {exc}"
            if attempt < self.cfg.retries:
                await asyncio.sleep(0.5 * (attempt + 1))

        return FetchResult(url=url, status_code=status_code, text=None, error=last_error)

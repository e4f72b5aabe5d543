"""Shared fixtures: a scripted stand-in for HttpFetcher."""

from __future__ import annotations

import json

import pytest

from sponsor_facts.fetch.fetcher import FetchResult


class FakeFetcher:
    """Answers requests from a handler(url, params) function.

    The handler returns a str (text body), a dict/list (JSON body), None
    (HTTP 404 failure) or an Exception instance (raised to the caller).
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls: list[tuple[str, dict]] = []

    async def get_text(self, url, params=None):  # noqa: ANN001
        return self._respond(url, params)

    async def get_json(self, url, params=None):  # noqa: ANN001
        return self._respond(url, params)

    def _respond(self, url, params):  # noqa: ANN001
        params = dict(params or {})
        self.calls.append((url, params))
        payload = self.handler(url, params)
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            return FetchResult(url=url, status_code=404, text=None, error="HTTP 404")
        if isinstance(payload, str):
            return FetchResult(url=url, status_code=200, text=payload, error=None)
        return FetchResult(url=url, status_code=200, text=json.dumps(payload), error=None, data=payload)

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def make_fetcher():
    return FakeFetcher

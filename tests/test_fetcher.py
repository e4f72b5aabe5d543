"""Tests for HttpFetcher using httpx's mock transport."""

from __future__ import annotations

import asyncio

import httpx

from sponsor_facts.config import FetchConfig
from sponsor_facts.fetch.fetcher import HttpFetcher


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/old":
        return httpx.Response(301, headers={"location": "https://example.com/new"})
    if path == "/new":
        return httpx.Response(200, text=f"<title>New</title>{request.headers['user-agent']}")
    if path == "/data.json":
        return httpx.Response(200, json={"q": request.url.params.get("q")})
    if path == "/bad.json":
        return httpx.Response(200, text="not json")
    if path == "/binary.json":
        return httpx.Response(200, content=b'{"entities": "\xff\xfe"}', headers={"content-type": "application/json"})
    if path == "/down":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(404, text="missing")


def _fetch(method: str, url: str, params=None, cfg: FetchConfig | None = None):  # noqa: ANN001
    async def run():
        transport = httpx.MockTransport(_handler)
        async with HttpFetcher(cfg or FetchConfig(user_agent="test-agent/1.0"), transport=transport) as fetcher:
            return await getattr(fetcher, method)(url, params)

    return asyncio.run(run())


def test_get_text_follows_redirects_and_sends_user_agent():
    result = _fetch("get_text", "https://example.com/old")

    assert result.ok
    assert result.status_code == 200
    assert result.url == "https://example.com/new"
    assert result.text == "<title>New</title>test-agent/1.0"


def test_get_json_decodes_body_and_passes_params():
    result = _fetch("get_json", "https://example.com/data.json", {"q": "Acme Corp"})

    assert result.ok
    assert result.data == {"q": "Acme Corp"}


def test_non_2xx_is_a_failure():
    result = _fetch("get_text", "https://example.com/missing")

    assert not result.ok
    assert result.status_code == 404
    assert result.error == "HTTP 404"
    assert result.text is None


def test_invalid_json_is_a_failure():
    result = _fetch("get_json", "https://example.com/bad.json")

    assert not result.ok
    assert result.error.startswith("JSONDecodeError")


def test_undecodable_json_body_is_a_failure():
    result = _fetch("get_json", "https://example.com/binary.json")

    assert not result.ok
    assert result.status_code == 200
    assert result.error.startswith("UnicodeDecodeError")


def test_network_error_is_a_failure_after_retries(monkeypatch):
    sleeps: list[float] = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)

    result = _fetch("get_text", "https://example.com/down", cfg=FetchConfig(retries=2))

    assert not result.ok
    assert result.status_code is None
    assert result.error.startswith("ConnectError")
    assert sleeps == [0.5, 1.0]

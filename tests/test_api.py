"""Tests for the request entry point and its JSON envelopes."""

from __future__ import annotations

import asyncio

from sponsor_facts import api


def test_missing_sponsor_is_a_client_error(make_fetcher):
    fetcher = make_fetcher(lambda url, params: None)

    response = asyncio.run(api.handle_query({"website": "acme.example"}, fetcher=fetcher))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing sponsor"}
    assert response.headers["content-type"] == "application/json; charset=utf-8"
    assert fetcher.calls == []


def test_success_envelope_contains_facts_and_sources(make_fetcher):
    fetcher = make_fetcher(lambda url, params: None)

    response = asyncio.run(api.handle_query({"sponsor": "Société Générale", "website": ""}, fetcher=fetcher))

    assert response.status_code == 200
    assert response.json() == {
        "facts": ["Société Générale is referenced on public web sources"],
        "sources": [],
    }
    # UTF-8 body, not ASCII escapes
    assert "Société" in response.body


def test_unexpected_failure_is_a_generic_server_error(monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(api, "aggregate_sponsor", boom)

    response = asyncio.run(api.handle_query({"sponsor": "Acme"}))

    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
    assert "hunter2" not in response.body

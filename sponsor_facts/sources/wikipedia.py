"""
Wikipedia source provider with Wikidata enrichment.

Three dependent requests:
1. MediaWiki search for the sponsor name (first hit's page id)
2. Intro extract, canonical URL and Wikidata item id for that page
3. Wikidata entity claims, when the page exposes an item id

Wikidata facts are folded into the single "wikipedia" provenance record.
A Wikidata failure only drops the enrichment; the Wikipedia facts stand.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..core.cleaner import clean_text
from ..core.types import Provenance, ProviderResult, SourceType, SponsorQuery
from ..core.urls import is_absolute_http_url
from ..logging_utils import log_event
from .base import SourceProvider

# Wikidata property ids
INCEPTION = "P571"
HEADQUARTERS = "P159"
INDUSTRY = "P452"

_PAREN_RE = re.compile(r"\(.*?\)")
_SENTENCE_SPLIT_RE = re.compile(r"[.\n]")
_YEAR_RE = re.compile(r"\d{4}")

logger = logging.getLogger(__name__)


class WikipediaProvider(SourceProvider):
    """Neutral descriptors from the sponsor's Wikipedia intro, plus Wikidata claims."""

    name = "wikipedia"

    async def fetch_facts(self, query: SponsorQuery) -> ProviderResult:
        sources = self.cfg.sources
        search = await self.fetcher.get_json(
            sources.wikipedia_api_url,
            params={
                "action": "query",
                "list": "search",
                "srsearch": query.name,
                "format": "json",
            },
        )
        if not search.ok:
            return self._fail(f"search failed: {search.error}")
        pageid = _first_search_pageid(search.data)
        if pageid is None:
            return self._fail("no search results")

        extract = await self.fetcher.get_json(
            sources.wikipedia_api_url,
            params={
                "action": "query",
                "prop": "extracts|pageprops|info",
                "exintro": 1,
                "explaintext": 1,
                "inprop": "url",
                "pageids": pageid,
                "format": "json",
            },
        )
        if not extract.ok:
            return self._fail(f"extract failed: {extract.error}")
        page = _page_from_response(extract.data, pageid)
        if page is None:
            return self._fail(f"page {pageid} missing from extract response")

        facts = intro_sentences(page.get("extract") or "", sources.wikipedia_max_sentences)
        url = page.get("fullurl")
        if not is_absolute_http_url(url):
            url = sources.wikipedia_curid_url.format(pageid=pageid)

        entity_id = (page.get("pageprops") or {}).get("wikibase_item")
        if isinstance(entity_id, str) and entity_id:
            try:
                enrichment = await self._wikidata_facts(entity_id)
            except Exception as exc:  # noqa: BLE001
                log_event(
                    logger,
                    "Wikidata enrichment skipped",
                    level=logging.DEBUG,
                    event="wikidata_failed",
                    entity_id=entity_id,
                    reason=f"{type(exc).__name__}: {exc}",
                )
                enrichment = []
            for fact in enrichment:
                if fact not in facts:
                    facts.append(fact)

        return ProviderResult(
            provider=self.name,
            facts=facts,
            source=Provenance(type=SourceType.wikipedia, url=url),
        )

    async def _wikidata_facts(self, entity_id: str) -> list[str]:
        sources = self.cfg.sources
        result = await self.fetcher.get_json(sources.wikidata_entity_url.format(entity_id=entity_id))
        if not result.ok:
            log_event(
                logger,
                "Wikidata enrichment skipped",
                level=logging.DEBUG,
                event="wikidata_failed",
                entity_id=entity_id,
                reason=result.error,
            )
            return []
        entities = result.data.get("entities") if isinstance(result.data, dict) else None
        if not isinstance(entities, dict):
            return []
        entity = entities.get(entity_id)
        if not isinstance(entity, dict) or not isinstance(entity.get("claims") or {}, dict):
            return []

        labels: dict[str, str] = {}
        if sources.resolve_wikidata_labels:
            labels = await self._resolve_labels(_unlabelled_item_ids(entity))
        return wikidata_facts(entity, labels)

    async def _resolve_labels(self, item_ids: list[str]) -> dict[str, str]:
        if not item_ids:
            return {}
        result = await self.fetcher.get_json(
            self.cfg.sources.wikidata_api_url,
            params={
                "action": "wbgetentities",
                "ids": "|".join(item_ids),
                "props": "labels",
                "languages": "en",
                "format": "json",
            },
        )
        if not result.ok or not isinstance(result.data, dict):
            return {}
        entities = result.data.get("entities")
        if not isinstance(entities, dict):
            return {}
        labels: dict[str, str] = {}
        for item_id, item in entities.items():
            if not isinstance(item, dict) or not isinstance(item.get("labels"), dict):
                continue
            english = item["labels"].get("en")
            label = english.get("value") if isinstance(english, dict) else None
            if isinstance(label, str) and label:
                labels[item_id] = label
        return labels


def intro_sentences(extract: str, limit: int) -> list[str]:
    """Split a plain-text intro into up to ``limit`` cleaned sentences.

    Parenthetical asides and em-dashes are removed before splitting on
    periods and newlines, so abbreviations like "Inc." split early.
    """
    text = _PAREN_RE.sub("", extract).replace("—", " ")
    sentences: list[str] = []
    for part in _SENTENCE_SPLIT_RE.split(text):
        if len(sentences) >= limit:
            break
        sentence = clean_text(part)
        if sentence and sentence not in sentences:
            sentences.append(sentence)
    return sentences


def wikidata_facts(entity: dict[str, Any], labels: dict[str, str] | None = None) -> list[str]:
    """Map selected Wikidata claims to short facts.

    - inception (P571) -> "founded in YYYY"
    - headquarters location (P159) -> "headquartered in <label>"
    - industry (P452) -> "<label lowercased> sector"

    Entity-valued claims only count when they carry a textual label,
    either inline or via ``labels`` (item id -> label). Missing or
    malformed claims are skipped.
    """
    labels = labels or {}
    claims = entity.get("claims") or {}
    facts: list[str] = []

    inception = _claim_value(claims, INCEPTION)
    if isinstance(inception, dict):
        match = _YEAR_RE.search(str(inception.get("time") or ""))
        if match:
            facts.append(f"founded in {match.group(0)}")

    place = _claim_label(_claim_value(claims, HEADQUARTERS), labels)
    if place:
        facts.append(f"headquartered in {place}")

    industry = _claim_label(_claim_value(claims, INDUSTRY), labels)
    if industry:
        facts.append(f"{industry.lower()} sector")

    return [fact for fact in (clean_text(f) for f in facts) if fact]


def _first_search_pageid(data: Any) -> int | None:
    if not isinstance(data, dict):
        return None
    hits = (data.get("query") or {}).get("search") or []
    if not hits or not isinstance(hits[0], dict):
        return None
    return hits[0].get("pageid")


def _page_from_response(data: Any, pageid: int) -> dict[str, Any] | None:
    if not isinstance(data, dict):
        return None
    pages = (data.get("query") or {}).get("pages") or {}
    page = pages.get(str(pageid))
    return page if isinstance(page, dict) else None


def _claim_value(claims: dict[str, Any], prop: str) -> Any:
    try:
        return claims[prop][0]["mainsnak"]["datavalue"]["value"]
    except (KeyError, IndexError, TypeError):
        return None


def _claim_label(value: Any, labels: dict[str, str]) -> str:
    if not isinstance(value, dict):
        return ""
    text = value.get("text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return labels.get(value.get("id") or "", "")


def _unlabelled_item_ids(entity: dict[str, Any]) -> list[str]:
    claims = entity.get("claims") or {}
    ids: list[str] = []
    for prop in (HEADQUARTERS, INDUSTRY):
        value = _claim_value(claims, prop)
        if isinstance(value, dict) and not value.get("text") and value.get("id"):
            ids.append(value["id"])
    return ids

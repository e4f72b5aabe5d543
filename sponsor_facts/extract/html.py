"""
Heuristic fact extraction from raw HTML.

This is deliberately not an HTML parser. A short ordered list of regex
rules each yields zero or one candidate:
1. <title> text
2. og:description meta content
3. name="description" meta content
4. "founded in YYYY" from the visible text
5. "headquartered in Place" from the visible text
6. The first body sentence of moderate length

Malformed or missing markup only means fewer candidates.
"""

from __future__ import annotations

import re
from typing import Callable

from ..config import ExtractConfig
from ..core.cleaner import clean_text

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE)
_OG_DESCRIPTION_RE = re.compile(
    r"""<meta[^>]+property=["']og:description["'][^>]+content=["']([^"']+)["'][^>]*>""",
    re.IGNORECASE,
)
_META_DESCRIPTION_RE = re.compile(
    r"""<meta[^>]+name=["']description["'][^>]+content=["']([^"']+)["'][^>]*>""",
    re.IGNORECASE,
)
_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_FOUNDED_RE = re.compile(r"founded\s+in\s+(\d{4})", re.IGNORECASE)
# Only the keyword is case-insensitive; the place must start uppercase.
_HEADQUARTERED_RE = re.compile(r"(?i:headquartered\s+in)\s+([A-Z][A-Za-z\s,]+)")

# (markup, visible text, config) -> candidate or None
ExtractionRule = Callable[[str, str, ExtractConfig], "str | None"]


def extract_facts_from_html(html: str | None, cfg: ExtractConfig | None = None) -> list[str]:
    """Derive cleaned candidate facts from one HTML document.

    Every rule runs independently against the markup (meta rules) or the
    tag-stripped text (body rules). Candidates are cleaned, then empty or
    over-long ones (>= max_fact_chars after cleaning) are dropped.

    Args:
        html: Raw HTML; None or empty yields no candidates
        cfg: Length gates, defaults to ExtractConfig()

    Returns:
        De-duplicated candidates in rule order
    """
    if not html:
        return []
    cfg = cfg or ExtractConfig()
    text = html_to_text(html)

    candidates: dict[str, None] = {}
    for rule in RULES:
        raw = rule(html, text, cfg)
        if not raw:
            continue
        fact = clean_text(raw)
        if fact and len(fact) < cfg.max_fact_chars:
            candidates.setdefault(fact, None)
    return list(candidates)


def html_to_text(html: str) -> str:
    """Plain-text rendering: drop script/style blocks and tags, collapse whitespace."""
    text = _SCRIPT_RE.sub(" ", html)
    text = _STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text)


def _match1(text: str, pattern: re.Pattern[str]) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def _title_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    return _match1(html, _TITLE_RE)


def _og_description_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    return _match1(html, _OG_DESCRIPTION_RE)


def _meta_description_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    return _match1(html, _META_DESCRIPTION_RE)


def _founded_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    year = _match1(text, _FOUNDED_RE)
    return f"founded in {year}" if year else None


def _headquartered_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    place = _match1(text, _HEADQUARTERED_RE).rstrip(", ")
    return f"headquartered in {place}" if place else None


def _first_sentence_rule(html: str, text: str, cfg: ExtractConfig) -> str | None:
    for sentence in text.split("."):
        sentence = sentence.strip()
        if cfg.min_sentence_chars < len(sentence) < cfg.max_sentence_chars:
            return sentence
    return None


RULES: list[ExtractionRule] = [
    _title_rule,
    _og_description_rule,
    _meta_description_rule,
    _founded_rule,
    _headquartered_rule,
    _first_sentence_rule,
]

"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- SourcesConfig: Upstream endpoints and provider ordering knobs
- ExtractConfig: HTML fact extraction length gates
- OutputConfig: Output cap
- DedupConfig: Fact deduplication settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


DEFAULT_USER_AGENT = "sponsor-facts/0.1 (+https://github.com/sponsor-facts/sponsor-facts)"


@dataclass
class FetchConfig:
    """Configuration for outbound HTTP requests.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests (0 = single attempt)
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string (falls back to SPONSOR_FACTS_USER_AGENT)
    """

    timeout_seconds: float = 15.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str | None = None


@dataclass
class SourcesConfig:
    """Configuration for the upstream sources consulted per sponsor.

    Attributes:
        wikipedia_api_url: MediaWiki action API endpoint
        wikipedia_curid_url: Page URL template used when no canonical URL is exposed
        wikidata_entity_url: Entity data template, keyed by entity id
        wikidata_api_url: Wikidata action API, used for optional label lookups
        resolve_wikidata_labels: Resolve entity-valued claims to English labels
        search_url: Lite HTML search results page
        wikipedia_max_sentences: Sentences kept from the Wikipedia intro
        search_fallback_threshold: Search runs only when fewer facts than this exist
        parallel_primary: Run website and Wikipedia providers concurrently
    """

    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikipedia_curid_url: str = "https://en.wikipedia.org/?curid={pageid}"
    wikidata_entity_url: str = "https://www.wikidata.org/wiki/Special:EntityData/{entity_id}.json"
    wikidata_api_url: str = "https://www.wikidata.org/w/api.php"
    resolve_wikidata_labels: bool = False
    search_url: str = "https://duckduckgo.com/html/"
    wikipedia_max_sentences: int = 3
    search_fallback_threshold: int = 3
    parallel_primary: bool = False


@dataclass
class ExtractConfig:
    """Length gates for heuristic HTML fact extraction.

    Attributes:
        min_sentence_chars: Body sentences must be longer than this
        max_sentence_chars: Body sentences must be shorter than this
        max_fact_chars: Cleaned candidates must be shorter than this
    """

    min_sentence_chars: int = 40
    max_sentence_chars: int = 200
    max_fact_chars: int = 180


@dataclass
class OutputConfig:
    """Configuration for the final fact list.

    Attributes:
        max_facts: Maximum number of facts returned per sponsor
    """

    max_facts: int = 5


@dataclass
class DedupConfig:
    """Configuration for fact deduplication.

    Attributes:
        fuzzy: Also suppress near-duplicates, not only exact matches
        similarity_threshold: Fuzzy match threshold (0-100) when fuzzy is enabled
    """

    fuzzy: bool = False
    similarity_threshold: int = 92


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "sponsor_facts.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retries": cfg.fetch.retries,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "sources": {
            "wikipedia_api_url": cfg.sources.wikipedia_api_url,
            "wikipedia_curid_url": cfg.sources.wikipedia_curid_url,
            "wikidata_entity_url": cfg.sources.wikidata_entity_url,
            "wikidata_api_url": cfg.sources.wikidata_api_url,
            "resolve_wikidata_labels": cfg.sources.resolve_wikidata_labels,
            "search_url": cfg.sources.search_url,
            "wikipedia_max_sentences": cfg.sources.wikipedia_max_sentences,
            "search_fallback_threshold": cfg.sources.search_fallback_threshold,
            "parallel_primary": cfg.sources.parallel_primary,
        },
        "extract": {
            "min_sentence_chars": cfg.extract.min_sentence_chars,
            "max_sentence_chars": cfg.extract.max_sentence_chars,
            "max_fact_chars": cfg.extract.max_fact_chars,
        },
        "output": {
            "max_facts": cfg.output.max_facts,
        },
        "dedup": {
            "fuzzy": cfg.dedup.fuzzy,
            "similarity_threshold": cfg.dedup.similarity_threshold,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        sources=SourcesConfig(**data["sources"]),
        extract=ExtractConfig(**data["extract"]),
        output=OutputConfig(**data["output"]),
        dedup=DedupConfig(**data["dedup"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_user_agent(cfg: FetchConfig) -> str:
    """Get the User-Agent from inline config or environment variable."""
    if cfg.user_agent:
        return cfg.user_agent
    return os.getenv("SPONSOR_FACTS_USER_AGENT") or DEFAULT_USER_AGENT

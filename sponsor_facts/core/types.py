"""
Core data types for the sponsor fact pipeline.

This module defines the fundamental data structures used throughout the pipeline:
- SponsorQuery: Validated input to a single pipeline run
- Provenance: Which external source contributed to the result
- ProviderResult: Outcome of one source provider (facts or failure reason)
- PipelineResult: Final bounded fact list plus provenance
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class InvalidQueryError(ValueError):
    """Raised when a query is missing its required sponsor name."""


class SourceType(str, Enum):
    website = "website"
    wikipedia = "wikipedia"
    search = "search"


@dataclass(frozen=True)
class SponsorQuery:
    """Immutable input to one pipeline run.

    Attributes:
        name: The sponsor (organization) name, required and non-blank
        website: Optional raw URL or bare hostname supplied by the caller
    """
    name: str
    website: str | None = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise InvalidQueryError("Missing sponsor")
        website = (self.website or "").strip() or None
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "website", website)


@dataclass(frozen=True)
class Provenance:
    """A (type, url) pair recording a consulted source.

    The url is always absolute and scheme-qualified.
    """
    type: SourceType
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "url": self.url}


@dataclass
class ProviderResult:
    """Result of running a single source provider.

    Either the provider succeeded (error is None, facts/source may be
    populated) or it failed and error carries the reason. The aggregator
    discards the reason; it is kept for logging only.

    Attributes:
        provider: Name of the provider that produced this result
        facts: Cleaned candidate facts in discovery order
        source: Provenance record, present only on success
        error: Failure reason, None on success
    """
    provider: str
    facts: list[str] = field(default_factory=list)
    source: Provenance | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, provider: str, reason: str) -> "ProviderResult":
        return cls(provider=provider, error=reason)


@dataclass
class PipelineResult:
    """Terminal output of one pipeline run.

    Attributes:
        facts: Ordered, de-duplicated facts (bounded by the output cap)
        sources: Provenance records in consultation order
    """
    facts: list[str] = field(default_factory=list)
    sources: list[Provenance] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "facts": list(self.facts),
            "sources": [source.to_dict() for source in self.sources],
        }

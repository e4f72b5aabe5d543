"""
Core domain models and text handling.

This package contains data types and pure functions that are
independent of any specific source provider.
"""

from .cleaner import clean_text
from .factset import FactSet
from .types import (
    InvalidQueryError,
    PipelineResult,
    Provenance,
    ProviderResult,
    SourceType,
    SponsorQuery,
)
from .urls import is_absolute_http_url, normalize_site, site_url

__all__ = [
    "clean_text",
    "FactSet",
    "InvalidQueryError",
    "PipelineResult",
    "Provenance",
    "ProviderResult",
    "SourceType",
    "SponsorQuery",
    "is_absolute_http_url",
    "normalize_site",
    "site_url",
]

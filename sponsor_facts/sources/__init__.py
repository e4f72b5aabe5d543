"""
Source provider implementations.

This package contains the abstract base class and the concrete
providers consulted, in order, for every sponsor.

To add a new provider:
1. Inherit from SourceProvider
2. Implement fetch_facts() (and should_run() if conditional)
3. Export the class from __init__.py
4. Add it to FactAggregator's provider ordering in aggregator.py
"""

from .base import Fetcher, SourceProvider
from .search import SearchFallbackProvider
from .website import WebsiteProvider
from .wikipedia import WikipediaProvider

__all__ = [
    "Fetcher",
    "SourceProvider",
    "SearchFallbackProvider",
    "WebsiteProvider",
    "WikipediaProvider",
]

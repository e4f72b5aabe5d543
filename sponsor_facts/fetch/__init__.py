"""
HTTP fetching.

This package provides the async client shared by all source providers.
"""

from .fetcher import FetchResult, HttpFetcher

__all__ = ["FetchResult", "HttpFetcher"]

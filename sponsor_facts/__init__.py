"""
Sponsor Facts - neutral, de-duplicated facts about an organization.

This package aggregates evidence about a named sponsor from its website,
Wikipedia/Wikidata and a search fallback, strips promotional language and
returns a short bounded list of facts with provenance.

Main entry points are the `sponsor-facts lookup` CLI command and the
`handle_query` coroutine.

Example:
    $ sponsor-facts lookup "Acme Corporation" --website acme.com
"""

__all__ = [
    "__version__",
    "FactAggregator",
    "aggregate_sponsor",
    "handle_query",
    "clean_text",
    "extract_facts_from_html",
    "normalize_site",
    "InvalidQueryError",
    "PipelineResult",
    "SponsorQuery",
]
__version__ = "0.1.0"

from .aggregator import FactAggregator, aggregate_sponsor
from .api import handle_query
from .core import InvalidQueryError, PipelineResult, SponsorQuery, clean_text, normalize_site
from .extract import extract_facts_from_html

"""
HTML fact extraction.

This package turns fetched markup into short candidate facts.
"""

from .html import RULES, extract_facts_from_html, html_to_text

__all__ = ["RULES", "extract_facts_from_html", "html_to_text"]

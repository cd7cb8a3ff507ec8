"""
Related Module - Related Content Discovery

Keyword extraction and CQL/JQL synthesis for "find related" lookups.
"""

from atlassian_mcp.related.keywords import extract_keywords
from atlassian_mcp.related.query import (
    And,
    Equals,
    Match,
    Not,
    Or,
    Ordered,
    related_issues_query,
    related_pages_query,
)

__all__ = [
    "extract_keywords",
    "And",
    "Equals",
    "Match",
    "Not",
    "Or",
    "Ordered",
    "related_issues_query",
    "related_pages_query",
]

"""
Content Module - Markup Flattening

Confluence storage XHTML and Jira ADF converted to readable text.
"""

from atlassian_mcp.content.adf import adf_to_text
from atlassian_mcp.content.issue_extractor import IssueExtractor
from atlassian_mcp.content.storage_parser import StorageParser

__all__ = [
    "adf_to_text",
    "IssueExtractor",
    "StorageParser",
]

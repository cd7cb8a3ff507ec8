"""
Schemas Module - Pydantic Models

Data models for Confluence pages and Jira issues.
"""

from atlassian_mcp.schemas.confluence import SimplePageResult, PageListResult
from atlassian_mcp.schemas.jira import (
    JiraIssue,
    JiraIssueFields,
    SimpleJiraIssue,
)

__all__ = [
    "SimplePageResult",
    "PageListResult",
    "JiraIssue",
    "JiraIssueFields",
    "SimpleJiraIssue",
]

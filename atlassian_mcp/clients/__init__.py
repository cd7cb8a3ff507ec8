"""
Clients Module - Atlassian REST Clients

Async clients for Confluence and Jira Cloud.
"""

from atlassian_mcp.clients.base import BaseAtlassianClient
from atlassian_mcp.clients.confluence import ConfluenceClient
from atlassian_mcp.clients.jira import JiraClient

__all__ = [
    "BaseAtlassianClient",
    "ConfluenceClient",
    "JiraClient",
]

"""
Atlassian MCP - Confluence and Jira clients exposed as MCP tools.
"""

__version__ = "0.1.0"

"""
Tools Module - MCP Tool Registration

Binds the Confluence and Jira tool objects to a FastMCP server.
"""

from fastmcp import FastMCP

from atlassian_mcp.tools.confluence_tools import ConfluenceTools
from atlassian_mcp.tools.jira_tools import JiraTools

READ_ONLY = {"readOnlyHint": True, "openWorldHint": True}

# MCP tool name -> method name
CONFLUENCE_TOOLS = {
    "getPageById": "get_page_by_id",
    "searchPagesByTitle": "search_pages_by_title",
    "searchContent": "search_content",
    "getPagesInSpace": "get_pages_in_space",
    "getChildPages": "get_child_pages",
    "getAllSpaces": "get_all_spaces",
    "getPageHistory": "get_page_history",
    "getPageComments": "get_page_comments",
    "getPageAttachments": "get_page_attachments",
    "downloadAttachment": "download_attachment",
    "getRecentlyUpdated": "get_recently_updated",
    "getContentByLabel": "get_content_by_label",
    "getRelatedPages": "get_related_pages",
}

JIRA_TOOLS = {
    "getIssue": "get_issue",
    "searchIssues": "search_issues",
    "getProjects": "get_projects",
    "getBoards": "get_boards",
    "getSprints": "get_sprints",
    "getSprintIssues": "get_sprint_issues",
    "getIssueComments": "get_issue_comments",
    "getIssueTransitions": "get_issue_transitions",
    "getRelatedIssues": "get_related_issues",
}


def _register(mcp: FastMCP, tools, table: dict) -> None:
    for name, method in table.items():
        mcp.tool(name=name, annotations=READ_ONLY)(getattr(tools, method))


def register_confluence_tools(mcp: FastMCP, tools: ConfluenceTools) -> None:
    _register(mcp, tools, CONFLUENCE_TOOLS)


def register_jira_tools(mcp: FastMCP, tools: JiraTools) -> None:
    _register(mcp, tools, JIRA_TOOLS)


__all__ = [
    "ConfluenceTools",
    "JiraTools",
    "CONFLUENCE_TOOLS",
    "JIRA_TOOLS",
    "register_confluence_tools",
    "register_jira_tools",
]

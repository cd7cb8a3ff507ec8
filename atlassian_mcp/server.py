"""
Atlassian MCP Server - Main Entry Point

FastMCP server exposing Confluence and Jira tools over STDIO or SSE.
"""

import argparse
import logging
from typing import Optional

from fastmcp import FastMCP

from atlassian_mcp.clients import ConfluenceClient, JiraClient
from atlassian_mcp.config import Settings, get_settings
from atlassian_mcp.errors import ConfigurationError
from atlassian_mcp.logging_config import configure_logging
from atlassian_mcp.tools import (
    ConfluenceTools,
    JiraTools,
    register_confluence_tools,
    register_jira_tools,
)

logger = logging.getLogger(__name__)

INSTRUCTIONS = """Atlassian assistant for Confluence and Jira.
Confluence: read pages, search by title, label or CQL, browse spaces and
child pages, page history, comments and attachments, recently updated
content, and related pages.
Jira: read and search issues, projects, boards, sprints, comments,
transitions, and related issues."""


def create_app(
    settings: Optional[Settings] = None,
    confluence_client: Optional[ConfluenceClient] = None,
    jira_client: Optional[JiraClient] = None,
) -> FastMCP:
    """
    Create and configure the MCP application.

    Clients are built here once from settings unless passed in. Tools are
    only registered for services that have a client.

    Args:
        settings: Loaded settings (default: from environment)
        confluence_client: Pre-built Confluence client
        jira_client: Pre-built Jira client

    Returns:
        Configured FastMCP server
    """
    settings = settings or get_settings()

    if confluence_client is None and settings.confluence.is_configured:
        confluence_client = ConfluenceClient.from_settings(settings.confluence, settings.http)
    if jira_client is None and settings.jira.is_configured:
        jira_client = JiraClient.from_settings(settings.jira, settings.http)

    if confluence_client is None and jira_client is None:
        raise ConfigurationError(
            "Please set CONFLUENCE_DOMAIN, CONFLUENCE_USER and CONFLUENCE_TOKEN "
            "and/or JIRA_DOMAIN, JIRA_USER and JIRA_TOKEN in the environment or .env file"
        )

    mcp = FastMCP(name="atlassian-mcp", instructions=INSTRUCTIONS)

    if confluence_client is not None:
        register_confluence_tools(mcp, ConfluenceTools(confluence_client))
        logger.info("Confluence tools enabled for %s", confluence_client.domain)
    if jira_client is not None:
        register_jira_tools(mcp, JiraTools(jira_client))
        logger.info("Jira tools enabled for %s", jira_client.domain)

    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Atlassian MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="Transport protocol (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    transport = args.transport or settings.mcp.transport
    port = args.port or settings.mcp.port

    mcp = create_app(settings)

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.mcp.host, port=port)


if __name__ == "__main__":
    main()

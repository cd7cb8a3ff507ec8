"""
Tests for the MCP Tool Layer and Server Setup
"""

import json
import logging
import sys

import pytest
from unittest.mock import AsyncMock, MagicMock

from atlassian_mcp.config import Settings
from atlassian_mcp.logging_config import JSONFormatter, configure_logging
from atlassian_mcp.errors import (
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    PermissionDeniedError,
    UpstreamHTTPError,
    UpstreamUnavailableError,
)
from atlassian_mcp.content import IssueExtractor
from atlassian_mcp.server import create_app
from atlassian_mcp.tools import (
    CONFLUENCE_TOOLS,
    JIRA_TOOLS,
    ConfluenceTools,
    JiraTools,
)

CREDENTIAL_VARS = [
    "CONFLUENCE_DOMAIN", "CONFLUENCE_USER", "CONFLUENCE_TOKEN",
    "JIRA_DOMAIN", "JIRA_USER", "JIRA_TOKEN",
]


def confluence_mock():
    client = MagicMock()
    client.site_url = "https://example.atlassian.net"
    client.domain = "example.atlassian.net"
    return client


def jira_mock():
    client = MagicMock()
    client.domain = "example.atlassian.net"
    client.issue_extractor = IssueExtractor()
    client.extract_issue_details = client.issue_extractor.extract_issue_details
    return client


class TestConfluenceTools:
    """Tests for ConfluenceTools."""

    @pytest.mark.asyncio
    async def test_get_page_by_id_simplified(self):
        client = confluence_mock()
        client.get_page_by_id = AsyncMock(return_value={
            "id": "123",
            "status": "current",
            "title": "Runbook",
            "body": {"storage": {"value": "<h2>Steps</h2><p>Restart it</p>"}},
            "_links": {"webui": "/spaces/OPS/pages/123/Runbook"},
        })
        tools = ConfluenceTools(client)

        result = await tools.get_page_by_id("123")

        client.get_page_by_id.assert_awaited_once_with("123", ["body.storage"])
        assert result["id"] == "123"
        assert result["title"] == "Runbook"
        assert "## Steps" in result["content"]
        assert result["url"] == "https://example.atlassian.net/wiki/spaces/OPS/pages/123/Runbook"

    @pytest.mark.asyncio
    async def test_get_related_pages(self):
        client = confluence_mock()
        client.get_topically_related_pages = AsyncMock(return_value={
            "results": [{"id": "200", "title": "Oncall guide"}],
            "start": 0,
            "limit": 5,
            "size": 1,
        })
        tools = ConfluenceTools(client)

        result = await tools.get_related_pages("123", limit=5)

        client.get_topically_related_pages.assert_awaited_once_with("123", 5, ["body.storage"])
        assert result["count"] == 1
        assert result["related"][0]["id"] == "200"
        assert result["related"][0]["content"] == ""

    @pytest.mark.asyncio
    async def test_pages_in_space_keeps_pagination(self):
        client = confluence_mock()
        client.get_pages_by_space_key = AsyncMock(return_value={
            "results": [{"id": "1", "title": "A"}, {"id": "2", "title": "B"}],
            "start": 10,
            "limit": 2,
            "size": 2,
        })
        tools = ConfluenceTools(client)

        result = await tools.get_pages_in_space("DOCS", limit=2, start=10)

        assert [p["id"] for p in result["results"]] == ["1", "2"]
        assert (result["start"], result["limit"], result["size"]) == (10, 2, 2)

    @pytest.mark.asyncio
    async def test_download_attachment_base64(self):
        client = confluence_mock()
        client.download_attachment = AsyncMock(return_value={
            "data": b"hello",
            "content_type": "text/plain",
            "filename": "a.txt",
        })
        tools = ConfluenceTools(client)

        result = await tools.download_attachment("att1")

        assert result == {
            "filename": "a.txt",
            "content_type": "text/plain",
            "size": 5,
            "data_base64": "aGVsbG8=",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,message", [
        (AuthenticationError("x", service="Confluence", status_code=401), "Authentication Error"),
        (PermissionDeniedError("x", service="Confluence", status_code=403), "Permission Error"),
        (NotFoundError("x", service="Confluence", status_code=404), "Not Found Error"),
        (UpstreamHTTPError("Confluence API Error: 500 Internal Server Error",
                           service="Confluence", status_code=500), "Confluence API Error: 500"),
        (UpstreamUnavailableError("timed out", service="Confluence"),
         "An unexpected error occurred: timed out"),
    ])
    async def test_errors_become_error_results(self, error, message):
        client = confluence_mock()
        client.get_page_by_id = AsyncMock(side_effect=error)
        tools = ConfluenceTools(client)

        result = await tools.get_page_by_id("123")

        assert set(result) == {"error"}
        assert message in result["error"]

    @pytest.mark.asyncio
    async def test_error_result_not_logged_again(self, caplog):
        """The client already logged the failure; the tool layer stays quiet."""
        client = confluence_mock()
        client.get_page_by_id = AsyncMock(
            side_effect=NotFoundError("x", service="Confluence", status_code=404)
        )
        tools = ConfluenceTools(client)

        with caplog.at_level(logging.DEBUG, logger="atlassian_mcp"):
            result = await tools.get_page_by_id("123")

        assert result["error"].startswith("Not Found Error")
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.asyncio
    async def test_invalid_argument_becomes_error_result(self):
        client = confluence_mock()
        client.get_topically_related_pages = AsyncMock(side_effect=ValueError("limit must be positive"))
        tools = ConfluenceTools(client)

        result = await tools.get_related_pages("123", limit=0)

        assert result == {"error": "Invalid argument: limit must be positive"}


class TestJiraTools:
    """Tests for JiraTools."""

    @pytest.mark.asyncio
    async def test_get_issue(self):
        client = jira_mock()
        client.get_issue = AsyncMock(return_value={
            "key": "OPS-1",
            "fields": {"summary": "Disk full", "status": {"name": "Open"}, "labels": ["infra"]},
        })
        tools = JiraTools(client)

        result = await tools.get_issue("OPS-1")

        assert result["issue"]["summary"] == "Disk full"
        assert result["issue"]["labels"] == ["infra"]
        assert "Issue Key: OPS-1" in result["details"]

    @pytest.mark.asyncio
    async def test_get_related_issues(self):
        client = jira_mock()
        client.get_related_issues = AsyncMock(return_value=[
            {"key": "OPS-2", "fields": {"summary": "Disk alert", "issuetype": {"name": "Bug"}}},
        ])
        tools = JiraTools(client)

        result = await tools.get_related_issues("OPS-1", limit=3)

        client.get_related_issues.assert_awaited_once_with("OPS-1", 3)
        assert result["count"] == 1
        assert result["related"][0]["key"] == "OPS-2"
        assert result["related"][0]["issue_type"] == "Bug"

    @pytest.mark.asyncio
    async def test_comments_flattened(self):
        client = jira_mock()
        client.get_issue_comments = AsyncMock(return_value={
            "comments": [{
                "id": "9",
                "author": {"displayName": "Ana"},
                "created": "2024-01-01T00:00:00.000+0000",
                "body": {"type": "doc", "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": "Looks good"}]},
                ]},
            }],
            "total": 1,
        })
        tools = JiraTools(client)

        result = await tools.get_issue_comments("OPS-1")

        assert result["comments"][0]["body"] == "Looks good"
        assert result["comments"][0]["author"] == "Ana"

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = jira_mock()
        client.get_issue = AsyncMock(side_effect=NotFoundError("x", service="Jira", status_code=404))
        tools = JiraTools(client)

        result = await tools.get_issue("OPS-404")

        assert result["error"].startswith("Not Found Error: The requested Jira resource")


class TestCreateApp:
    """Tests for server wiring."""

    def test_no_credentials(self, monkeypatch):
        for var in CREDENTIAL_VARS:
            monkeypatch.delenv(var, raising=False)

        with pytest.raises(ConfigurationError):
            create_app(Settings())

    @pytest.mark.asyncio
    async def test_only_configured_services_registered(self, monkeypatch):
        for var in CREDENTIAL_VARS:
            monkeypatch.delenv(var, raising=False)

        mcp = create_app(Settings(), confluence_client=confluence_mock())
        tools = await mcp.get_tools()

        assert set(CONFLUENCE_TOOLS) <= set(tools)
        assert not set(JIRA_TOOLS) & set(tools)

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("JIRA_DOMAIN", "acme.atlassian.net")
        monkeypatch.setenv("JIRA_USER", "bot@acme.com")
        monkeypatch.setenv("JIRA_TOKEN", "t0k3n")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "5")

        settings = Settings()

        assert settings.jira.is_configured
        assert settings.jira.domain == "acme.atlassian.net"
        assert settings.http.timeout_seconds == 5.0
        assert settings.mcp.transport == "stdio"


class TestLogging:
    """Tests for logging setup."""

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord("atlassian_mcp.clients", logging.ERROR, __file__, 1,
                                   "request failed", None, None)
        record.status_code = 404

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "ERROR"
        assert entry["message"] == "request failed"
        assert entry["status_code"] == 404
        assert entry["service"] == "atlassian-mcp"

    def test_configure_logging_uses_stderr(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(Settings())

            assert len(root.handlers) == 1
            assert root.handlers[0].stream is sys.stderr
            assert root.level == logging.DEBUG
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

"""
MCP Tools - Confluence

Read-only Confluence tools. Page-shaped responses are reduced to
SimplePageResult with the body converted to Markdown.
"""

import base64
from typing import Any, Dict, List, Literal, Optional

from atlassian_mcp.clients import ConfluenceClient
from atlassian_mcp.content import StorageParser
from atlassian_mcp.schemas import PageListResult, SimplePageResult
from atlassian_mcp.tools.errors import TOOL_ERRORS, error_response


class ConfluenceTools:
    """Tool implementations bound to one ConfluenceClient."""

    def __init__(self, client: ConfluenceClient, parser: Optional[StorageParser] = None):
        self.client = client
        self.parser = parser or StorageParser()

    def _simplify(self, page: Dict[str, Any]) -> SimplePageResult:
        body = ((page.get("body") or {}).get("storage") or {}).get("value", "")
        webui = (page.get("_links") or {}).get("webui")
        return SimplePageResult(
            id=str(page["id"]),
            status=page.get("status", "current"),
            title=page.get("title", ""),
            content=self.parser.to_markdown(body),
            url=f"{self.client.site_url}/wiki{webui}" if webui else None,
        )

    def _simplify_list(self, response: Dict[str, Any]) -> Dict[str, Any]:
        results = [self._simplify(p) for p in response.get("results", [])]
        return PageListResult(
            results=results,
            start=response.get("start", 0),
            limit=response.get("limit", len(results)),
            size=response.get("size", len(results)),
        ).model_dump()

    async def get_page_by_id(self, page_id: str) -> dict:
        """
        Get a Confluence page by its ID.

        Args:
            page_id: ID of the Confluence page

        Returns:
            Page id, status, title and body as Markdown
        """
        try:
            page = await self.client.get_page_by_id(page_id, ["body.storage"])
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify(page).model_dump()

    async def search_pages_by_title(
        self,
        title: str,
        space_key: Optional[str] = None,
    ) -> dict:
        """
        Search for Confluence pages by title.

        Args:
            title: Page title or title fragment
            space_key: Optional space key to limit search scope
        """
        try:
            response = await self.client.get_pages_by_title(
                title, space_key, ["body.storage"]
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def search_content(self, cql: str, limit: int = 25, start: int = 0) -> dict:
        """
        Search Confluence content with a raw CQL query.

        Args:
            cql: CQL query, e.g. 'space = "DOCS" AND type = page'
            limit: Maximum number of results, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            response = await self.client.search(
                cql, limit=limit, start=start, expand=["body.storage"]
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def get_pages_in_space(
        self,
        space_key: str,
        limit: int = 25,
        start: int = 0,
    ) -> dict:
        """
        Get all pages in a specific Confluence space.

        Args:
            space_key: Key of the Confluence space
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            response = await self.client.get_pages_by_space_key(
                space_key, limit, start, ["body.storage"]
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def get_child_pages(self, page_id: str) -> dict:
        """
        Get child pages of a Confluence page.

        Args:
            page_id: ID of the parent page
        """
        try:
            response = await self.client.get_page_children(page_id, ["body.storage"])
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def get_all_spaces(
        self,
        type: Optional[Literal["global", "personal"]] = None,
        status: Optional[Literal["current", "archived"]] = None,
        limit: int = 25,
        start: int = 0,
    ) -> dict:
        """
        Get all accessible Confluence spaces.

        Args:
            type: Space type: global or personal
            status: Space status: current or archived
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            return await self.client.get_spaces(type, status, limit, start)
        except TOOL_ERRORS as e:
            return error_response(e)

    async def get_page_history(self, page_id: str, limit: int = 25, start: int = 0) -> dict:
        """
        Get history versions of a Confluence page.

        Args:
            page_id: ID of the page
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            return await self.client.get_page_history(page_id, limit, start)
        except TOOL_ERRORS as e:
            return error_response(e)

    async def get_page_comments(
        self,
        page_id: str,
        limit: int = 25,
        start: int = 0,
        expand: Optional[List[str]] = None,
    ) -> dict:
        """
        Get comments on a Confluence page.

        Args:
            page_id: ID of the page
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
            expand: Fields to expand, e.g. ['body.storage']
        """
        try:
            return await self.client.get_page_comments(page_id, limit, start, expand)
        except TOOL_ERRORS as e:
            return error_response(e)

    async def get_page_attachments(
        self,
        page_id: str,
        filename: Optional[str] = None,
        media_type: Optional[str] = None,
        limit: int = 25,
        start: int = 0,
    ) -> dict:
        """
        Get attachments on a Confluence page.

        Args:
            page_id: ID of the page
            filename: Optional filename filter
            media_type: Optional media type filter
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            return await self.client.get_attachments(
                page_id, filename, media_type, limit, start
            )
        except TOOL_ERRORS as e:
            return error_response(e)

    async def download_attachment(self, attachment_id: str) -> dict:
        """
        Download a Confluence attachment.

        Args:
            attachment_id: ID of the attachment (e.g. att12345)

        Returns:
            Filename, content type, size and base64-encoded data
        """
        try:
            attachment = await self.client.download_attachment(attachment_id)
        except TOOL_ERRORS as e:
            return error_response(e)
        return {
            "filename": attachment["filename"],
            "content_type": attachment["content_type"],
            "size": len(attachment["data"]),
            "data_base64": base64.b64encode(attachment["data"]).decode("ascii"),
        }

    async def get_recently_updated(
        self,
        space_key: Optional[str] = None,
        type: Literal["page", "blogpost", "comment", "attachment"] = "page",
        limit: int = 25,
        start: int = 0,
    ) -> dict:
        """
        Get recently updated content in Confluence.

        Args:
            space_key: Optional space key to limit results
            type: Content type filter
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            response = await self.client.get_recently_updated(
                space_key, type, limit, start, ["body.storage"]
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def get_content_by_label(
        self,
        label_name: str,
        space_key: Optional[str] = None,
        limit: int = 25,
        start: int = 0,
    ) -> dict:
        """
        Get Confluence content by label.

        Args:
            label_name: Name of the label
            space_key: Optional space key to limit results
            limit: Maximum number of results to return, default is 25
            start: Starting index for pagination, default is 0
        """
        try:
            response = await self.client.get_content_by_label(
                label_name, space_key, limit, start
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        return self._simplify_list(response)

    async def get_related_pages(self, page_id: str, limit: int = 10) -> dict:
        """
        Find pages related to a given page.

        Pages sharing title keywords or labels with the source page.

        Args:
            page_id: Source page ID
            limit: Maximum related pages (default 10)

        Returns:
            Related pages and their count
        """
        try:
            response = await self.client.get_topically_related_pages(
                page_id, limit, ["body.storage"]
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        related = self._simplify_list(response)["results"]
        return {
            "page_id": page_id,
            "related": related,
            "count": len(related),
        }

"""
Clients - Confluence Client

Thin async wrapper over the Confluence Cloud REST API (/wiki/rest/api).
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from atlassian_mcp.clients.base import BaseAtlassianClient, join_fields
from atlassian_mcp.errors import AtlassianError
from atlassian_mcp.related import extract_keywords, related_pages_query
from atlassian_mcp.related.query import Equals, Match, and_

logger = logging.getLogger(__name__)


def _check_content_id(content_id: str) -> str:
    content_id = str(content_id)
    if not content_id.isalnum():
        raise ValueError(f"Invalid content id: {content_id}. Must be alphanumeric.")
    return content_id


class ConfluenceClient(BaseAtlassianClient):
    """Confluence content, space and label endpoints."""

    SERVICE = "Confluence"
    API_PATH = "/wiki/rest/api"

    async def get_page_by_id(
        self,
        page_id: str,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Get a page by its ID.

        Args:
            page_id: Confluence page ID
            expand: Fields to expand (default: body.storage)

        Returns:
            Raw page JSON
        """
        page_id = _check_content_id(page_id)
        if expand is None:
            expand = ["body.storage"]
        return await self._get(
            f"/content/{page_id}", params={"expand": join_fields(expand)}
        )

    async def search(
        self,
        cql: str,
        limit: Optional[int] = None,
        start: Optional[int] = None,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Search content with CQL.

        Examples:
            ``title ~ "API"``, ``space = "DOCS"``, ``contributor = "jdoe"``

        Args:
            cql: CQL query string
            limit: Maximum results
            start: Pagination offset
            expand: Fields to expand on each result

        Returns:
            Raw result page (results, start, limit, size, _links)
        """
        return await self._get(
            "/content/search",
            params={
                "cql": cql,
                "limit": limit,
                "start": start,
                "expand": join_fields(expand),
            },
        )

    async def get_pages_by_title(
        self,
        title: str,
        space_key: Optional[str] = None,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Pages whose title matches ``title``, optionally within one space."""
        if expand is None:
            expand = ["body.storage"]
        cql = and_(
            Match("title", title),
            Equals("space", space_key) if space_key else None,
        )
        return await self.search(cql.render(), expand=expand)

    async def get_pages_by_space_key(
        self,
        space_key: str,
        limit: int = 25,
        start: int = 0,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        return await self._get(
            "/content",
            params={
                "spaceKey": space_key,
                "type": "page",
                "limit": limit,
                "start": start,
                "expand": join_fields(expand),
            },
        )

    async def get_page_children(
        self,
        page_id: str,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        page_id = _check_content_id(page_id)
        return await self._get(
            f"/content/{page_id}/child/page",
            params={"expand": join_fields(expand)},
        )

    async def get_spaces(
        self,
        type: Optional[Literal["global", "personal"]] = None,
        status: Optional[Literal["current", "archived"]] = None,
        limit: int = 25,
        start: int = 0,
    ) -> Dict[str, Any]:
        return await self._get(
            "/space",
            params={"type": type, "status": status, "limit": limit, "start": start},
        )

    async def get_page_history(
        self,
        page_id: str,
        limit: int = 25,
        start: int = 0,
    ) -> Dict[str, Any]:
        page_id = _check_content_id(page_id)
        return await self._get(
            f"/content/{page_id}/history",
            params={"limit": limit, "start": start},
        )

    async def get_page_comments(
        self,
        page_id: str,
        limit: int = 25,
        start: int = 0,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        page_id = _check_content_id(page_id)
        return await self._get(
            f"/content/{page_id}/child/comment",
            params={"limit": limit, "start": start, "expand": join_fields(expand)},
        )

    async def get_attachments(
        self,
        page_id: str,
        filename: Optional[str] = None,
        media_type: Optional[str] = None,
        limit: int = 25,
        start: int = 0,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        page_id = _check_content_id(page_id)
        return await self._get(
            f"/content/{page_id}/child/attachment",
            params={
                "filename": filename,
                "mediaType": media_type,
                "limit": limit,
                "start": start,
                "expand": join_fields(expand),
            },
        )

    async def get_attachment(self, attachment_id: str) -> Dict[str, Any]:
        attachment_id = _check_content_id(attachment_id)
        return await self._get(f"/content/{attachment_id}")

    async def download_attachment(self, attachment_id: str) -> Dict[str, Any]:
        """
        Download attachment bytes.

        Args:
            attachment_id: Attachment content ID (e.g. "att12345")

        Returns:
            Dict with data (bytes), content_type and filename
        """
        attachment = await self.get_attachment(attachment_id)
        download_path = (attachment.get("_links") or {}).get("download")
        if not download_path:
            raise AtlassianError("Download link not available", service=self.SERVICE)

        response = await self._request(
            download_path, base_url=f"{self.site_url}/wiki"
        )
        return {
            "data": response.content,
            "content_type": response.headers.get("content-type", ""),
            "filename": attachment.get("title", ""),
        }

    async def get_recently_updated(
        self,
        space_key: Optional[str] = None,
        type: Literal["page", "blogpost", "comment", "attachment"] = "page",
        limit: int = 25,
        start: int = 0,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        return await self._get(
            "/content",
            params={
                "type": type,
                "spaceKey": space_key,
                "limit": limit,
                "start": start,
                "expand": join_fields(expand),
                "orderby": "modified",
            },
        )

    async def get_content_by_label(
        self,
        label_name: str,
        space_key: Optional[str] = None,
        limit: int = 25,
        start: int = 0,
    ) -> Dict[str, Any]:
        cql = and_(
            Equals("label", label_name),
            Equals("space", space_key) if space_key else None,
        )
        return await self.search(cql.render(), limit=limit, start=start)

    async def get_content_labels(
        self,
        content_id: str,
        prefix: Optional[str] = None,
        limit: int = 25,
        start: int = 0,
    ) -> Dict[str, Any]:
        content_id = _check_content_id(content_id)
        return await self._get(
            f"/content/{content_id}/label",
            params={"prefix": prefix, "limit": limit, "start": start},
        )

    async def get_topically_related_pages(
        self,
        page_id: str,
        limit: int = 10,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Find pages topically related to a given page.

        Pages sharing title keywords or labels with the source page are
        searched for with a synthesized CQL query. The source page is never
        part of the result.

        Args:
            page_id: Source page ID
            limit: Maximum number of related pages
            expand: Fields to expand on each result (default: body.storage)

        Returns:
            Raw search result page, trimmed to at most ``limit`` results
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        page_id = _check_content_id(page_id)
        if expand is None:
            expand = ["body.storage"]

        source = await self.get_page_by_id(page_id, ["metadata.labels"])

        keywords = extract_keywords(source.get("title") or "")
        labels = [
            label["name"]
            for label in ((source.get("metadata") or {}).get("labels") or {}).get("results") or []
        ]
        query = related_pages_query(page_id, keywords, labels)
        cql = query.render()
        logger.debug("Related pages CQL for %s: %s", page_id, cql)

        page = await self.search(cql, limit=limit, expand=expand)

        results = [
            r for r in page.get("results", [])
            if str(r.get("id")) != page_id
        ][:limit]
        page["results"] = results
        page["size"] = len(results)
        return page

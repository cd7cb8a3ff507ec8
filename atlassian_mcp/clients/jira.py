"""
Clients - Jira Client

Thin async wrapper over the Jira Cloud REST API (v3) and the agile API.
"""

import logging
import re
from typing import Any, Dict, List, Literal, Optional, Union

from atlassian_mcp.clients.base import BaseAtlassianClient, join_fields
from atlassian_mcp.content.issue_extractor import IssueExtractor
from atlassian_mcp.related import extract_keywords, related_issues_query
from atlassian_mcp.schemas.jira import JiraIssue

logger = logging.getLogger(__name__)

_ISSUE_KEY = re.compile(r"[A-Za-z0-9_]+(-[0-9]+)?")


def _check_issue_key(issue_key: str) -> str:
    issue_key = str(issue_key)
    if not _ISSUE_KEY.fullmatch(issue_key):
        raise ValueError(f"Invalid issue key: {issue_key}. Expected e.g. PROJ-123.")
    return issue_key


class JiraClient(BaseAtlassianClient):
    """Jira issue, project, board, sprint and user endpoints."""

    SERVICE = "Jira"
    API_PATH = "/rest/api/3"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.agile_url = f"{self.site_url}/rest/agile/1.0"
        self.issue_extractor = IssueExtractor()

    async def get_issue(
        self,
        issue_key: str,
        fields: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Get an issue by key.

        Args:
            issue_key: Issue key (e.g. PROJ-123) or numeric ID
            fields: Field names to include (default: all)

        Returns:
            Raw issue JSON
        """
        issue_key = _check_issue_key(issue_key)
        return await self._get(
            f"/issue/{issue_key}", params={"fields": join_fields(fields)}
        )

    async def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 50,
        fields: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Search issues with JQL.

        Examples:
            ``project = PROJ``,
            ``type = Bug AND status = "Open" AND assignee = currentUser()``

        Args:
            jql: JQL query string
            start_at: Pagination offset
            max_results: Maximum results
            fields: Field names to include on each issue

        Returns:
            Raw search response (issues, startAt, maxResults, total)
        """
        return await self._get(
            "/search",
            params={
                "jql": jql,
                "startAt": start_at,
                "maxResults": max_results,
                "fields": join_fields(fields),
            },
        )

    async def get_projects(self, recent: bool = False) -> Dict[str, Any]:
        endpoint = "/project/recent" if recent else "/project"
        return {"projects": await self._get(endpoint)}

    async def get_project(self, project_key: str) -> Dict[str, Any]:
        project_key = _check_issue_key(project_key)
        return await self._get(f"/project/{project_key}")

    async def get_boards(
        self,
        project_key_or_id: Optional[str] = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> Dict[str, Any]:
        return await self._get(
            "/board",
            params={
                "projectKeyOrId": project_key_or_id,
                "startAt": start_at,
                "maxResults": max_results,
            },
            base_url=self.agile_url,
        )

    async def get_sprints(
        self,
        board_id: int,
        state: Optional[Literal["future", "active", "closed"]] = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> Dict[str, Any]:
        return await self._get(
            f"/board/{int(board_id)}/sprint",
            params={"state": state, "startAt": start_at, "maxResults": max_results},
            base_url=self.agile_url,
        )

    async def get_sprint_issues(
        self,
        sprint_id: int,
        start_at: int = 0,
        max_results: int = 50,
        issue_types: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Issues in a sprint, optionally filtered by issue type name.

        Filtering happens after the page is fetched, so a filtered page may
        hold fewer than ``max_results`` issues.
        """
        data = await self._get(
            f"/sprint/{int(sprint_id)}/issue",
            params={"startAt": start_at, "maxResults": max_results},
            base_url=self.agile_url,
        )
        if issue_types:
            wanted = set(issue_types)
            data["issues"] = [
                issue for issue in data.get("issues", [])
                if ((issue.get("fields") or {}).get("issuetype") or {}).get("name") in wanted
            ]
        return data

    async def get_users(self, start_at: int = 0, max_results: int = 50) -> List[Dict[str, Any]]:
        return await self._get(
            "/users/search", params={"startAt": start_at, "maxResults": max_results}
        )

    async def search_users(
        self, query: str, start_at: int = 0, max_results: int = 50
    ) -> List[Dict[str, Any]]:
        return await self._get(
            "/user/search",
            params={"query": query, "startAt": start_at, "maxResults": max_results},
        )

    async def get_issue_comments(
        self, issue_key: str, start_at: int = 0, max_results: int = 50
    ) -> Dict[str, Any]:
        issue_key = _check_issue_key(issue_key)
        return await self._get(
            f"/issue/{issue_key}/comment",
            params={"startAt": start_at, "maxResults": max_results},
        )

    async def get_issue_worklogs(
        self, issue_key: str, start_at: int = 0, max_results: int = 50
    ) -> Dict[str, Any]:
        issue_key = _check_issue_key(issue_key)
        return await self._get(
            f"/issue/{issue_key}/worklog",
            params={"startAt": start_at, "maxResults": max_results},
        )

    async def get_issue_types(self, project_id_or_key: str) -> List[Dict[str, Any]]:
        """Issue types of a project, each with its workflow statuses."""
        project_id_or_key = _check_issue_key(project_id_or_key)
        return await self._get(f"/project/{project_id_or_key}/statuses")

    async def get_issue_transitions(self, issue_key: str) -> List[Dict[str, Any]]:
        issue_key = _check_issue_key(issue_key)
        data = await self._get(f"/issue/{issue_key}/transitions")
        return data.get("transitions", [])

    async def get_dashboards(self, start_at: int = 0, max_results: int = 50) -> Dict[str, Any]:
        return await self._get(
            "/dashboard", params={"startAt": start_at, "maxResults": max_results}
        )

    async def get_related_issues(
        self,
        issue_key: str,
        limit: int = 10,
        fields: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find issues related to a given issue.

        Issues in the same project, with summary keywords in common or with
        shared labels are searched for, newest first. The source issue is
        never part of the result.

        Args:
            issue_key: Source issue key
            limit: Maximum number of related issues
            fields: Field names to include on each result

        Returns:
            Raw issue dicts, at most ``limit`` of them
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        issue_key = _check_issue_key(issue_key)

        source = JiraIssue.model_validate(
            await self.get_issue(issue_key, ["summary", "labels", "project"])
        )

        keywords = extract_keywords(source.fields.summary or "")
        project_key = source.fields.project.key if source.fields.project else None
        query = related_issues_query(
            issue_key, project_key, keywords, source.fields.labels
        )
        jql = query.render()
        logger.debug("Related issues JQL for %s: %s", issue_key, jql)

        result = await self.search_issues(jql, 0, limit, fields)

        excluded = {issue_key.upper(), source.key.upper()}
        if source.id:
            excluded.add(source.id)
        return [
            issue for issue in result.get("issues", [])
            if str(issue.get("key", "")).upper() not in excluded
            and str(issue.get("id", "")) not in excluded
        ][:limit]

    def extract_issue_details(self, issue: Union[JiraIssue, Dict[str, Any]]) -> str:
        """Formatted text with the key details of an issue."""
        return self.issue_extractor.extract_issue_details(issue)

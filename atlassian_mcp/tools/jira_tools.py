"""
MCP Tools - Jira

Read-only Jira tools. Issues are reduced to SimpleJiraIssue.
"""

from typing import List, Literal, Optional

from atlassian_mcp.clients import JiraClient
from atlassian_mcp.content import adf_to_text
from atlassian_mcp.tools.errors import TOOL_ERRORS, error_response


class JiraTools:
    """Tool implementations bound to one JiraClient."""

    def __init__(self, client: JiraClient):
        self.client = client
        self.extractor = client.issue_extractor

    def _simplify_issues(self, issues: List[dict]) -> List[dict]:
        return [self.extractor.simplify(i).model_dump() for i in issues]

    async def get_issue(self, issue_key: str) -> dict:
        """
        Get a Jira issue by key.

        Args:
            issue_key: Issue key, e.g. PROJ-123

        Returns:
            The simplified issue plus a formatted text summary including
            custom fields
        """
        try:
            issue = await self.client.get_issue(issue_key)
        except TOOL_ERRORS as e:
            return error_response(e)
        return {
            "issue": self.extractor.simplify(issue).model_dump(),
            "details": self.client.extract_issue_details(issue),
        }

    async def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 50,
    ) -> dict:
        """
        Search Jira issues with JQL.

        Args:
            jql: JQL query, e.g. 'project = PROJ AND status = "Open"'
            start_at: Starting index for pagination, default is 0
            max_results: Maximum number of results, default is 50
        """
        try:
            response = await self.client.search_issues(jql, start_at, max_results)
        except TOOL_ERRORS as e:
            return error_response(e)
        return {
            "issues": self._simplify_issues(response.get("issues", [])),
            "start_at": response.get("startAt", start_at),
            "max_results": response.get("maxResults", max_results),
            "total": response.get("total"),
        }

    async def get_projects(self, recent: bool = False) -> dict:
        """
        Get Jira projects visible to the user.

        Args:
            recent: Only recently accessed projects
        """
        try:
            response = await self.client.get_projects(recent)
        except TOOL_ERRORS as e:
            return error_response(e)
        return {
            "projects": [
                {"id": p.get("id"), "key": p.get("key"), "name": p.get("name")}
                for p in response["projects"]
            ]
        }

    async def get_boards(
        self,
        project_key: Optional[str] = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> dict:
        """
        Get agile boards, optionally for one project.

        Args:
            project_key: Optional project key or ID
            start_at: Starting index for pagination, default is 0
            max_results: Maximum number of results, default is 50
        """
        try:
            return await self.client.get_boards(project_key, start_at, max_results)
        except TOOL_ERRORS as e:
            return error_response(e)

    async def get_sprints(
        self,
        board_id: int,
        state: Optional[Literal["future", "active", "closed"]] = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> dict:
        """
        Get sprints of a board.

        Args:
            board_id: ID of the board
            state: Optional sprint state filter
            start_at: Starting index for pagination, default is 0
            max_results: Maximum number of results, default is 50
        """
        try:
            return await self.client.get_sprints(board_id, state, start_at, max_results)
        except TOOL_ERRORS as e:
            return error_response(e)

    async def get_sprint_issues(
        self,
        sprint_id: int,
        start_at: int = 0,
        max_results: int = 50,
        issue_types: Optional[List[str]] = None,
    ) -> dict:
        """
        Get issues in a sprint.

        Args:
            sprint_id: ID of the sprint
            start_at: Starting index for pagination, default is 0
            max_results: Maximum number of results, default is 50
            issue_types: Optional issue type names, e.g. ['Story', 'Bug']
        """
        try:
            response = await self.client.get_sprint_issues(
                sprint_id, start_at, max_results, issue_types
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        issues = self._simplify_issues(response.get("issues", []))
        return {"issues": issues, "count": len(issues)}

    async def get_issue_comments(
        self,
        issue_key: str,
        start_at: int = 0,
        max_results: int = 50,
    ) -> dict:
        """
        Get comments on a Jira issue, bodies as plain text.

        Args:
            issue_key: Issue key, e.g. PROJ-123
            start_at: Starting index for pagination, default is 0
            max_results: Maximum number of results, default is 50
        """
        try:
            response = await self.client.get_issue_comments(
                issue_key, start_at, max_results
            )
        except TOOL_ERRORS as e:
            return error_response(e)
        comments = [
            {
                "id": c.get("id"),
                "author": (c.get("author") or {}).get("displayName", "Unknown"),
                "created": c.get("created"),
                "body": c["body"] if isinstance(c.get("body"), str) else adf_to_text(c.get("body")),
            }
            for c in response.get("comments", [])
        ]
        return {"comments": comments, "total": response.get("total", len(comments))}

    async def get_issue_transitions(self, issue_key: str) -> dict:
        """
        Get the workflow transitions currently available for an issue.

        Args:
            issue_key: Issue key, e.g. PROJ-123
        """
        try:
            transitions = await self.client.get_issue_transitions(issue_key)
        except TOOL_ERRORS as e:
            return error_response(e)
        return {
            "transitions": [
                {
                    "id": t.get("id"),
                    "name": t.get("name"),
                    "to": (t.get("to") or {}).get("name"),
                }
                for t in transitions
            ]
        }

    async def get_related_issues(self, issue_key: str, limit: int = 10) -> dict:
        """
        Find issues related to a given issue.

        Issues in the same project, with similar summaries or shared labels,
        most recently updated first.

        Args:
            issue_key: Source issue key
            limit: Maximum related issues (default 10)
        """
        try:
            issues = await self.client.get_related_issues(issue_key, limit)
        except TOOL_ERRORS as e:
            return error_response(e)
        related = self._simplify_issues(issues)
        return {"issue_key": issue_key, "related": related, "count": len(related)}

"""
Content - Issue Extractor

Formats a Jira issue as a short, readable text summary.
"""

import json
from typing import Any, Dict, List, Optional, Union

from atlassian_mcp.content.adf import adf_to_text
from atlassian_mcp.schemas.jira import JiraIssue, SimpleJiraIssue


def _description_text(description: Any) -> str:
    if isinstance(description, str):
        return description
    return adf_to_text(description)


def _list_item_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        if item.get("name"):
            return item["name"]
        if item.get("value"):
            return str(item["value"])
    return json.dumps(item)


def _custom_field_lines(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, dict) and value.get("content"):
        text = adf_to_text(value)
        return [f"{key}:", text] if text.strip() else []
    if isinstance(value, list):
        joined = ", ".join(t for t in (_list_item_text(i) for i in value) if t)
        return [f"{key}: {joined}"] if joined else []
    if isinstance(value, dict):
        named = value.get("name") or value.get("value") or value.get("displayName")
        return [f"{key}: {named}"] if named else []
    return [f"{key}: {value}"]


class IssueExtractor:
    """Builds text and simplified views of Jira issues."""

    def extract_issue_details(
        self, issue: Optional[Union[JiraIssue, Dict[str, Any]]]
    ) -> str:
        """
        Extract formatted details from a Jira issue.

        Args:
            issue: Issue model or raw issue JSON

        Returns:
            Multi-line text with key fields, description and custom fields
        """
        if not issue:
            return "No issue data available"
        if isinstance(issue, dict):
            if not issue.get("fields"):
                return "No issue data available"
            issue = JiraIssue.model_validate(issue)

        fields = issue.fields
        lines = [
            f"Issue Key: {issue.key}",
            f"Summary: {fields.summary or 'No summary'}",
            f"Status: {(fields.status and fields.status.name) or 'Unknown'}",
            f"Type: {(fields.issuetype and fields.issuetype.name) or 'Unknown'}",
            f"Assignee: {(fields.assignee and fields.assignee.display_name) or 'Unassigned'}",
            f"Reporter: {(fields.reporter and fields.reporter.display_name) or 'Unknown'}",
        ]

        if fields.description:
            lines.extend(["", "Description:", _description_text(fields.description)])

        if fields.custom_fields:
            lines.extend(["", "Custom Fields:"])
            for key, value in fields.custom_fields.items():
                lines.extend(_custom_field_lines(key, value))

        return "\n".join(lines)

    def simplify(self, issue: Union[JiraIssue, Dict[str, Any]]) -> SimpleJiraIssue:
        """Reshape an issue into SimpleJiraIssue."""
        if isinstance(issue, dict):
            issue = JiraIssue.model_validate(issue)
        fields = issue.fields
        return SimpleJiraIssue(
            key=issue.key,
            summary=fields.summary or "",
            status=(fields.status and fields.status.name) or "Unknown",
            issue_type=(fields.issuetype and fields.issuetype.name) or "Unknown",
            labels=fields.labels,
            description=(
                _description_text(fields.description) if fields.description else None
            ),
        )

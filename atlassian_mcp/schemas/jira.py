"""
Schemas - Jira Models

Pydantic models for the parts of a Jira issue the tools read. Custom fields
are kept in a side mapping instead of being modeled one by one.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, List, Optional

CUSTOM_FIELD_PREFIX = "customfield_"


class NamedRef(BaseModel):
    """Status, issue type and similar ``{"id", "name"}`` references."""
    id: Optional[str] = None
    name: Optional[str] = None


class ProjectRef(BaseModel):
    id: Optional[str] = None
    key: str
    name: Optional[str] = None


class UserRef(BaseModel):
    account_id: Optional[str] = Field(None, alias="accountId")
    display_name: Optional[str] = Field(None, alias="displayName")
    email_address: Optional[str] = Field(None, alias="emailAddress")

    model_config = {"populate_by_name": True}


class JiraIssueFields(BaseModel):
    """Typed core of an issue's field bag plus its custom fields."""
    summary: Optional[str] = None
    description: Optional[Any] = None
    status: Optional[NamedRef] = None
    issuetype: Optional[NamedRef] = None
    project: Optional[ProjectRef] = None
    labels: List[str] = []
    assignee: Optional[UserRef] = None
    reporter: Optional[UserRef] = None
    updated: Optional[str] = None
    custom_fields: Dict[str, Any] = {}

    @model_validator(mode="before")
    @classmethod
    def _collect_custom_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        custom = {
            key: value
            for key, value in data.items()
            if key.startswith(CUSTOM_FIELD_PREFIX)
        }
        if not custom:
            return data
        core = {k: v for k, v in data.items() if k not in custom}
        core["custom_fields"] = {**core.get("custom_fields", {}), **custom}
        return core


class JiraIssue(BaseModel):
    """A Jira issue as returned by /issue/{key} or /search."""
    id: Optional[str] = None
    key: str
    self_url: Optional[str] = Field(None, alias="self")
    fields: JiraIssueFields = Field(default_factory=JiraIssueFields)

    model_config = {"populate_by_name": True}


class SimpleJiraIssue(BaseModel):
    """Issue reshaped for tool output."""
    key: str
    summary: str = ""
    status: str = "Unknown"
    issue_type: str = "Unknown"
    labels: List[str] = []
    description: Optional[str] = None

"""
Atlassian MCP Server - Errors

Exception hierarchy for failures talking to Confluence and Jira.
"""

from typing import Optional

import httpx


class AtlassianError(Exception):
    """Base class for every error raised by the Atlassian clients."""

    def __init__(
        self,
        message: str,
        service: str = "Atlassian",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.status_code = status_code


class ConfigurationError(AtlassianError):
    """Required credentials or settings are missing."""


class UpstreamUnavailableError(AtlassianError):
    """No HTTP response was received from the remote service."""


class AuthenticationError(AtlassianError):
    """HTTP 401 - credentials were rejected."""


class PermissionDeniedError(AtlassianError):
    """HTTP 403 - authenticated, but not allowed to see the resource."""


class NotFoundError(AtlassianError):
    """HTTP 404 - the item or one of its expansions does not exist."""


class UpstreamHTTPError(AtlassianError):
    """Any other non-success HTTP status."""


_STATUS_ERRORS = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
}


def classify_http_error(exc: httpx.HTTPError, service: str) -> AtlassianError:
    """
    Map an httpx failure onto the error taxonomy.

    Args:
        exc: Exception raised by httpx (status or transport error)
        service: Human readable service name ("Confluence", "Jira")

    Returns:
        The matching AtlassianError subclass instance
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        reason = exc.response.reason_phrase
        error_cls = _STATUS_ERRORS.get(status, UpstreamHTTPError)
        return error_cls(
            f"{service} API Error: {status} {reason}".rstrip(),
            service=service,
            status_code=status,
        )
    return UpstreamUnavailableError(str(exc) or exc.__class__.__name__, service=service)


def user_message(exc: Exception) -> str:
    """Friendly, tool-facing message for an error."""
    if isinstance(exc, AuthenticationError):
        return (
            f"Authentication Error: Failed to authenticate with {exc.service}. "
            "Please check your credentials."
        )
    if isinstance(exc, PermissionDeniedError):
        return (
            f"Permission Error: You do not have permission to access this "
            f"resource in {exc.service}."
        )
    if isinstance(exc, NotFoundError):
        return (
            f"Not Found Error: The requested {exc.service} resource could not "
            "be found. Please check the provided ID or parameters."
        )
    if isinstance(exc, (UpstreamHTTPError, ConfigurationError)):
        return exc.message
    if isinstance(exc, UpstreamUnavailableError):
        return f"An unexpected error occurred: {exc.message}"
    return f"An unexpected error occurred: {exc}"

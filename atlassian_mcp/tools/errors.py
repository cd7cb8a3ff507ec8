"""
Tools - Error Responses

Turns client errors into ``{"error": ...}`` tool results.
"""

import logging

from atlassian_mcp.errors import AtlassianError, user_message

logger = logging.getLogger(__name__)

TOOL_ERRORS = (AtlassianError, ValueError)


def error_response(exc: Exception) -> dict:
    """
    Build the tool result for a failed call.

    Args:
        exc: AtlassianError from a client, or ValueError for a bad argument

    Returns:
        Dict with a single ``error`` message
    """
    if isinstance(exc, ValueError):
        message = f"Invalid argument: {exc}"
    else:
        message = user_message(exc)
    logger.debug("Tool call failed: %s", message)
    return {"error": message}

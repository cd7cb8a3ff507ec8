"""
Clients - Base REST Client

Shared httpx plumbing for the Confluence and Jira clients: basic auth,
parameter cleanup and error classification.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from atlassian_mcp.errors import classify_http_error

logger = logging.getLogger(__name__)


def join_fields(fields) -> Optional[str]:
    """Comma-join an expand/fields list, or None when empty."""
    if not fields:
        return None
    return ",".join(fields)


class BaseAtlassianClient:
    """Async REST client for one Atlassian Cloud product."""

    SERVICE = "Atlassian"
    API_PATH = ""

    def __init__(
        self,
        domain: str,
        user: str,
        token: str,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.domain = domain.rstrip("/")
        self.site_url = f"https://{self.domain}"
        self.base_url = f"{self.site_url}{self.API_PATH}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(user, token),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            verify=verify_ssl,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, service_settings, http_settings, **kwargs):
        """Build a client from a Confluence/Jira settings block."""
        return cls(
            domain=service_settings.domain,
            user=service_settings.user,
            token=service_settings.token,
            timeout=http_settings.timeout_seconds,
            verify_ssl=service_settings.verify_ssl,
            **kwargs,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None,
    ) -> httpx.Response:
        """
        Issue a GET and raise a classified error on failure.

        Args:
            path: Path relative to the API root, or absolute when base_url is set
            params: Query parameters (None values are dropped)
            base_url: Alternate API root (e.g. the agile API)

        Returns:
            The successful httpx.Response
        """
        url = f"{base_url.rstrip('/')}{path}" if base_url else path
        clean = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s GET %s params=%s", self.SERVICE, url, clean)

        try:
            response = await self._client.get(url, params=clean or None)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s request failed: %s - %s",
                self.SERVICE,
                e.response.status_code,
                e.response.reason_phrase,
            )
            raise classify_http_error(e, self.SERVICE) from e
        except httpx.HTTPError as e:
            logger.error("%s request failed: %s", self.SERVICE, e)
            raise classify_http_error(e, self.SERVICE) from e

        return response

    async def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None,
    ) -> Any:
        """GET and decode the JSON body."""
        response = await self._request(path, params=params, base_url=base_url)
        return response.json()

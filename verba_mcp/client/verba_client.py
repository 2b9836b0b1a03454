"""
Verba REST API client.

Thin async wrapper over httpx that authenticates every request and reports
HTTP status through the result instead of raising, so callers can decide
what a non-2xx response means.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config.settings import Settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@dataclass(frozen=True)
class BackendResult:
    """Normalized outcome of one backend call."""
    ok: bool
    status: int
    data: Any


class BackendTransportError(Exception):
    """The backend could not be reached or returned an unreadable body."""
    pass


class VerbaClient:
    """Async client for the Verba translation-management API."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize Verba client.

        Args:
            settings: Server settings holding the credential and base URL
            http_client: Optional preconfigured httpx client (tests inject a
                MockTransport here)
        """
        self.base_url = f"{settings.api_url}{API_PREFIX}"
        self._headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }
        self.client = http_client or httpx.AsyncClient(timeout=None)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def call(self, method: str, path: str, body: Any = None) -> BackendResult:
        """
        Issue one request against the API.

        Args:
            method: HTTP method
            path: Path below the API root, including any query string
            body: JSON-serializable request body, omitted when None

        Returns:
            BackendResult with the parsed JSON body

        Raises:
            httpx.HTTPError: On network failure
            BackendTransportError: If the response body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        content = None
        if body is not None:
            content = json.dumps(body).encode("utf-8")

        logger.debug(f"{method} {url}")
        response = await self.client.request(
            method,
            url,
            headers=self._headers,
            content=content
        )

        try:
            data = response.json()
        except ValueError as e:
            raise BackendTransportError(
                f"Invalid JSON in response from {method} {path} "
                f"(HTTP {response.status_code}): {e}"
            ) from e

        ok = response.is_success
        if not ok:
            logger.warning(f"{method} {path} returned HTTP {response.status_code}")

        return BackendResult(ok=ok, status=response.status_code, data=data)

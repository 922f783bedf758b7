"""
Shared plumbing for the JSON-over-HTTP clients.

Every call is a single attempt: failures become ``TransientError`` and the
caller decides what to show. Cancelling the awaiting task aborts the request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from friday.domain.errors import TransientError

logger = logging.getLogger(__name__)


class JsonApiClient:
    """Lazily-created, reused ``httpx.AsyncClient`` bound to one base URL.

    Parameters
    ----------
    base_url:
        Prefix for every request path.
    headers:
        Extra headers sent with every request.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Dict[str, Any]:
        """Send one request and return the decoded JSON object.

        The body is decoded whatever the status code, since the API reports
        business failures as ``{"success": false, "message": ...}`` alongside
        4xx codes.
        """
        client = await self._client_get()
        url = f"{self.base_url}{path}"
        try:
            resp = await client.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransientError(str(exc) or type(exc).__name__) from exc

        try:
            body = resp.json()
        except ValueError as exc:
            logger.warning("%s %s returned non-JSON body (HTTP %s)", method, url, resp.status_code)
            raise TransientError(f"invalid JSON from {path}") from exc

        if not isinstance(body, dict):
            raise TransientError(f"unexpected payload from {path}")
        return body

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Cleanly close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "JsonApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

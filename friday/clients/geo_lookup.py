"""
IP geolocation lookup (ipapi.co by default).

The payload is untrusted: it is accepted only when both ``country`` and
``country_code`` are present.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from friday import config
from friday.domain.errors import TransientError

logger = logging.getLogger(__name__)


class GeoLookupClient:
    """One-shot country lookup for the caller's IP."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url or config.GEO_LOOKUP_URL
        self.timeout = timeout if timeout is not None else config.GEO_LOOKUP_TIMEOUT_SECONDS
        self._transport = transport

    async def lookup(self) -> Dict[str, str]:
        """Return ``{"country": <display name>, "country_code": <ISO-2>}``.

        Raises ``TransientError`` on HTTP errors, timeouts and payloads that
        lack either field.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise TransientError(f"Failed to fetch location data: {exc}") from exc
        except ValueError as exc:
            raise TransientError("Location payload was not JSON") from exc

        if not isinstance(data, dict) or not data.get("country") or not data.get("country_code"):
            raise TransientError("Location detection failed")

        return {
            "country": str(data.get("country_name") or data["country"]),
            "country_code": str(data["country_code"]).upper(),
        }

"""
Client for this site's own form routes (``friday.api.routes``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from friday import config
from friday.clients.base import JsonApiClient


class SiteClient(JsonApiClient):
    """Posts the feedback and international-waitlist forms."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url if base_url is not None else config.SITE_URL,
            timeout=config.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def send_feedback(self, name: str, email: str, category: str, message: str) -> Dict[str, Any]:
        """``POST /api/send-feedback`` → ``{success, error?}``."""
        payload = {"name": name, "email": email, "type": category, "message": message}
        return await self._request("POST", "/api/send-feedback", json=payload)

    async def join_international_waitlist(self, email: str, country: str) -> Dict[str, Any]:
        """``POST /api/international-waitlist`` → ``{success, message}`` or ``{error}``."""
        payload = {
            "email": email,
            "country": country,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return await self._request("POST", "/api/international-waitlist", json=payload)

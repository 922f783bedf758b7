"""
Friday API client — signup, city search, friends, invitations, profiles.

Wraps the Supabase edge functions the site calls. Business failures
(``success: false``) raise ``UpstreamError`` carrying the server message;
transport failures raise ``TransientError``.

Usage::

    api = FridayApiClient()
    cities = await api.search_cities("Sea")
    result = await api.signup("Ada", "ada@example.com", cities[0].id)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from friday import config
from friday.clients.base import JsonApiClient
from friday.core.constants import (
    MSG_INVALID_INVITATION,
    MSG_INVALID_PROFILE,
    MSG_PROFILE_UPDATE_FAILED,
    MSG_SIGNUP_FAILED,
)
from friday.domain.errors import TransientError, UpstreamError
from friday.domain.models import City

logger = logging.getLogger(__name__)


def _auth_headers(api_key: str, anon_key: str) -> Dict[str, str]:
    headers = {}
    if api_key:
        headers["X-API-Key"] = api_key
    if anon_key:
        headers["Authorization"] = f"Bearer {anon_key}"
    return headers


def _require_success(body: Dict[str, Any], default_message: str) -> Dict[str, Any]:
    if not body.get("success"):
        raise UpstreamError(str(body.get("message") or default_message), payload=body)
    return body


class FridayApiClient(JsonApiClient):
    """Async client for the Friday signup API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        anon_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url if base_url is not None else config.API_BASE_URL,
            headers=_auth_headers(
                api_key if api_key is not None else config.API_KEY,
                anon_key if anon_key is not None else config.SUPABASE_ANON_KEY,
            ),
            timeout=timeout if timeout is not None else config.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # City search
    # ------------------------------------------------------------------

    async def search_cities(self, term: str) -> List[City]:
        """``GET /cities?search=<term>`` → ordered list of ``City``."""
        body = _require_success(
            await self._request("GET", "/cities", params={"search": term}),
            "City search failed",
        )
        try:
            return [City.from_dict(row) for row in body.get("cities") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransientError("malformed city search response") from exc

    # ------------------------------------------------------------------
    # Signup / friends
    # ------------------------------------------------------------------

    async def signup(self, name: str, email: str, city_id: int) -> Dict[str, Any]:
        """``POST /signup`` → ``{success, user, invitation}``."""
        payload = {"name": name, "email": email, "city_id": city_id}
        return _require_success(
            await self._request("POST", "/signup", json=payload),
            MSG_SIGNUP_FAILED,
        )

    async def add_friend(
        self,
        user_id: str,
        friend_email: str,
        friend_name: str,
        friend_city_id: Optional[int],
        relationship_type: str,
    ) -> Dict[str, Any]:
        """``POST /add-friend`` → ``{success, friend}``."""
        payload = {
            "user_id": user_id,
            "friend_email": friend_email,
            "friend_name": friend_name,
            "friend_city_id": friend_city_id,
            "relationship_type": relationship_type,
        }
        return _require_success(
            await self._request("POST", "/add-friend", json=payload),
            "Failed to add friend",
        )

    # ------------------------------------------------------------------
    # Invitations
    # ------------------------------------------------------------------

    async def get_invitation(self, token: str) -> Dict[str, Any]:
        """``GET /invitation/<token>``; an invalid token raises ``UpstreamError``."""
        body = await self._request("GET", f"/invitation/{token}")
        if not (body.get("success") and body.get("valid")):
            raise UpstreamError(
                str(body.get("message") or MSG_INVALID_INVITATION),
                payload=body,
            )
        return body

    async def redeem_invitation(
        self,
        token: str,
        name: str,
        email: str,
        city_id: int,
        relationship_type: str,
    ) -> Dict[str, Any]:
        """``POST /redeem-invitation`` → ``{success, user, invitation}``."""
        payload = {
            "token": token,
            "name": name,
            "email": email,
            "city_id": city_id,
            "relationship_type": relationship_type,
        }
        return _require_success(
            await self._request("POST", "/redeem-invitation", json=payload),
            MSG_SIGNUP_FAILED,
        )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def get_profile(self, token: str) -> Dict[str, Any]:
        return _require_success(
            await self._request("GET", f"/profile/{token}"),
            MSG_INVALID_PROFILE,
        )

    async def update_profile(self, token: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """``PUT /profile/<token>`` with only the changed fields."""
        return _require_success(
            await self._request("PUT", f"/profile/{token}", json=changes),
            MSG_PROFILE_UPDATE_FAILED,
        )

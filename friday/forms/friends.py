"""
Inviting friends after a successful signup or invitation redemption.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from friday.core.observable import Observable
from friday.domain.enums import DEFAULT_RELATIONSHIP, RelationshipType
from friday.domain.errors import TransientError, UpstreamError
from friday.domain.models import Friend

logger = logging.getLogger(__name__)


class FriendApi(Protocol):
    async def add_friend(
        self,
        user_id: str,
        friend_email: str,
        friend_name: str,
        friend_city_id: Optional[int],
        relationship_type: str,
    ) -> dict: ...


class FriendInviter(Observable):
    """Adds friends on behalf of a signed-up user.

    Failures are logged only; the invite box simply keeps its input so the
    user can try again.
    """

    def __init__(self, api: FriendApi) -> None:
        super().__init__()
        self._api = api
        self.added: List[Friend] = []
        self.is_adding = False
        self.relationship: RelationshipType = DEFAULT_RELATIONSHIP

    async def add(
        self,
        user_id: Optional[str],
        email: str,
        name: str,
        city_id: Optional[int],
        relationship: Optional[RelationshipType] = None,
    ) -> Optional[Friend]:
        if not email or not name or not user_id or self.is_adding:
            return None

        rel = relationship or self.relationship
        self.is_adding = True
        self._notify()
        try:
            result = await self._api.add_friend(user_id, email, name, city_id, rel.value)
        except (TransientError, UpstreamError) as exc:
            logger.error("Add friend error: %s", exc)
            return None
        finally:
            self.is_adding = False
            self._notify()

        raw = result.get("friend")
        if not raw:
            return None
        friend = Friend.from_dict(raw)
        self.added.append(friend)
        self._notify()
        return friend

"""
friday.forms.invitation — Join Friday through a friend's invitation link.
"""

from __future__ import annotations

import logging
from typing import Optional

from friday.clients.friday_api import FridayApiClient
from friday.core.constants import (
    MSG_FILL_ALL_FIELDS,
    MSG_INVALID_INVITATION,
    MSG_INVITATION_CHECK_FAILED,
)
from friday.core.observable import Observable
from friday.domain.enums import DEFAULT_RELATIONSHIP, RelationshipType
from friday.domain.errors import FormValidationError, TransientError, UpstreamError
from friday.domain.models import Friend, Invitation, User
from friday.forms.common import error_message, require_fields
from friday.forms.friends import FriendInviter
from friday.forms.signup import STEP_SIGNUP, STEP_SUCCESS
from friday.search.city_search import CitySearchController

logger = logging.getLogger(__name__)


class InvitationFlow(Observable):
    """Validate an invitation token, then redeem it with the invitee's details."""

    def __init__(
        self,
        api: FridayApiClient,
        token: str,
        city_search: Optional[CitySearchController] = None,
    ) -> None:
        super().__init__()
        self._api = api
        self.token = token
        self.city_search = city_search if city_search is not None else CitySearchController(api)
        self.friends = FriendInviter(api)

        self.is_validating = True
        self.is_valid: Optional[bool] = None
        self.invitation: Optional[Invitation] = None

        self.name = ""
        self.email = ""
        self.relationship: RelationshipType = DEFAULT_RELATIONSHIP

        self.step = STEP_SIGNUP
        self.user: Optional[User] = None
        self.own_invitation: Optional[Invitation] = None
        self.error = ""
        self.is_submitting = False

    async def validate_token(self) -> bool:
        if not self.token:
            self.is_validating = False
            self.is_valid = False
            self.error = MSG_INVALID_INVITATION
            self._notify()
            return False
        try:
            result = await self._api.get_invitation(self.token)
        except UpstreamError as exc:
            self.is_valid = False
            self.error = str(exc) or MSG_INVALID_INVITATION
        except TransientError:
            self.is_valid = False
            self.error = MSG_INVITATION_CHECK_FAILED
        else:
            self.is_valid = True
            self.invitation = Invitation.from_dict(result.get("invitation"))
        finally:
            self.is_validating = False
            self._notify()
        return bool(self.is_valid)

    async def redeem(self) -> bool:
        if self.is_submitting:
            return False
        try:
            require_fields(MSG_FILL_ALL_FIELDS, self.name, self.email, self.city_search.city_id)
        except FormValidationError as exc:
            self.error = str(exc)
            self._notify()
            return False

        self.is_submitting = True
        self.error = ""
        self._notify()
        try:
            result = await self._api.redeem_invitation(
                self.token,
                self.name,
                self.email,
                self.city_search.city_id,
                self.relationship.value,
            )
        except (UpstreamError, TransientError) as exc:
            self.error = error_message(exc)
            return False
        finally:
            self.is_submitting = False
            self._notify()

        self.user = User.from_dict(result.get("user") or {})
        self.own_invitation = Invitation.from_dict(result.get("invitation"))
        self.step = STEP_SUCCESS
        self._notify()
        return True

    async def add_friend(
        self,
        email: str,
        name: str,
        relationship: Optional[RelationshipType] = None,
    ) -> Optional[Friend]:
        if self.user is None:
            return None
        return await self.friends.add(
            self.user.id, email, name, self.city_search.city_id, relationship,
        )

    def close(self) -> None:
        self.city_search.close()

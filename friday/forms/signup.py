"""
friday.forms.signup — Waitlist signup form.

The submit button is a ``GatedAction``: visitors outside the recognized
region get the international waitlist instead, and nothing is submitted
while the region is still being resolved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from friday.clients.friday_api import FridayApiClient
from friday.core.constants import MSG_ACCEPT_TERMS, MSG_FILL_ALL_FIELDS
from friday.core.observable import Observable
from friday.domain.enums import GateDecision, RelationshipType
from friday.domain.errors import FormValidationError, TransientError, UpstreamError
from friday.domain.models import Friend, Invitation, User
from friday.forms.common import error_message, require_fields
from friday.forms.friends import FriendInviter
from friday.gate import GatedAction
from friday.geo.context import GeoContext
from friday.search.city_search import CitySearchController

logger = logging.getLogger(__name__)

STEP_SIGNUP = "signup"
STEP_SUCCESS = "success"


class SignupForm(Observable):
    """
    Parameters
    ----------
    api:
        Friday API client.
    geo:
        Geo context used to gate the submit button.
    on_international:
        Fallback for visitors outside the recognized region.
    city_search:
        City typeahead; a new one bound to ``api`` by default.
    """

    def __init__(
        self,
        api: FridayApiClient,
        geo: GeoContext,
        on_international: Callable[[], Any],
        city_search: Optional[CitySearchController] = None,
    ) -> None:
        super().__init__()
        self._api = api
        self.city_search = city_search if city_search is not None else CitySearchController(api)
        self.friends = FriendInviter(api)

        self.name = ""
        self.email = ""
        self.accepted_terms = False

        self.step = STEP_SIGNUP
        self.user: Optional[User] = None
        self.invitation: Optional[Invitation] = None
        self.error = ""
        self.is_submitting = False
        self.submissions = 0

        self.action = GatedAction(
            geo,
            primary=self.submit,
            fallback=on_international,
            label="Join the Waitlist",
        )

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def city_id(self) -> Optional[int]:
        return self.city_search.city_id

    @property
    def invitation_url(self) -> str:
        return self.invitation.invitation_url if self.invitation else ""

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Raise ``FormValidationError`` with the inline message."""
        require_fields(MSG_FILL_ALL_FIELDS, self.name, self.email, self.city_id)
        if not self.accepted_terms:
            raise FormValidationError(MSG_ACCEPT_TERMS)

    async def click_submit(self) -> GateDecision:
        """Submit button handler (goes through the geo gate)."""
        return await self.action.trigger()

    async def submit(self) -> bool:
        """Post the signup once. Returns True on success."""
        if self.is_submitting:
            return False
        try:
            self.validate()
        except FormValidationError as exc:
            self.error = str(exc)
            self._notify()
            return False

        self.is_submitting = True
        self.action.disabled_by_caller = True
        self.error = ""
        self.submissions += 1
        self._notify()
        try:
            result = await self._api.signup(self.name, self.email, self.city_id)
        except (UpstreamError, TransientError) as exc:
            self.error = error_message(exc)
            logger.info("signup rejected for %s: %s", self.email, exc)
            return False
        finally:
            self.is_submitting = False
            self.action.disabled_by_caller = False
            self._notify()

        self.user = User.from_dict(result.get("user") or {})
        self.invitation = Invitation.from_dict(result.get("invitation"))
        self.step = STEP_SUCCESS
        self._notify()
        return True

    # ------------------------------------------------------------------
    # After signup
    # ------------------------------------------------------------------

    async def add_friend(
        self,
        email: str,
        name: str,
        relationship: Optional[RelationshipType] = None,
    ) -> Optional[Friend]:
        if self.user is None:
            return None
        return await self.friends.add(self.user.id, email, name, self.city_id, relationship)

    def close(self) -> None:
        self.city_search.close()

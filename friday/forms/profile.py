"""
friday.forms.profile — View and edit a member profile through its private token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from friday.clients.friday_api import FridayApiClient
from friday.core.constants import (
    MSG_INVALID_PROFILE,
    MSG_NO_CHANGES,
    MSG_PROFILE_LOAD_FAILED,
    MSG_PROFILE_UPDATED,
)
from friday.core.observable import Observable
from friday.domain.errors import TransientError, UpstreamError
from friday.domain.models import User
from friday.forms.common import error_message
from friday.search.city_search import CitySearchController


class ProfileEditor(Observable):
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

        self.is_loading = True
        self.is_valid: Optional[bool] = None
        self.user: Optional[User] = None
        self.name = ""
        self.error = ""
        self.success = ""
        self.is_updating = False

    async def load(self) -> bool:
        try:
            result = await self._api.get_profile(self.token)
        except UpstreamError as exc:
            self.is_valid = False
            self.error = str(exc) or MSG_INVALID_PROFILE
        except TransientError:
            self.is_valid = False
            self.error = MSG_PROFILE_LOAD_FAILED
        else:
            self.is_valid = True
            self._show(User.from_dict(result.get("user") or {}))
        finally:
            self.is_loading = False
            self._notify()
        return bool(self.is_valid)

    def pending_changes(self) -> Dict[str, Any]:
        """Only the fields that differ from the stored profile."""
        changes: Dict[str, Any] = {}
        if self.user is None:
            return changes
        if self.name.strip() and self.name != self.user.name:
            changes["name"] = self.name
        if self.city_search.city_id is not None:
            changes["city_id"] = self.city_search.city_id
        return changes

    async def save(self) -> bool:
        if self.is_updating:
            return False
        changes = self.pending_changes()
        if not changes:
            self.error = MSG_NO_CHANGES
            self._notify()
            return False

        self.is_updating = True
        self.error = ""
        self.success = ""
        self._notify()
        try:
            result = await self._api.update_profile(self.token, changes)
        except (UpstreamError, TransientError) as exc:
            self.error = error_message(exc)
            return False
        finally:
            self.is_updating = False
            self._notify()

        self._show(User.from_dict(result.get("user") or {}))
        self.success = MSG_PROFILE_UPDATED
        self._notify()
        return True

    def _show(self, user: User) -> None:
        self.user = user
        self.name = user.name
        self.city_search.prefill(user.location)

    def close(self) -> None:
        self.city_search.close()

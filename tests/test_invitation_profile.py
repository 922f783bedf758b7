from __future__ import annotations

import pytest

from friday.core.constants import (
    MSG_FILL_ALL_FIELDS,
    MSG_INVALID_INVITATION,
    MSG_INVITATION_CHECK_FAILED,
    MSG_NO_CHANGES,
    MSG_PROFILE_LOAD_FAILED,
    MSG_PROFILE_UPDATED,
)
from friday.domain.enums import RelationshipType
from friday.domain.errors import TransientError, UpstreamError
from friday.forms.invitation import InvitationFlow
from friday.forms.profile import ProfileEditor
from friday.forms.signup import STEP_SUCCESS
from friday.search.city_search import CitySearchController

PROFILE_USER = {
    "id": "u-9",
    "name": "Ada",
    "email": "ada@example.com",
    "location_city": "Seattle",
    "location_state": "WA",
}


class FakeApi:
    def __init__(self, errors=None):
        self.errors = errors or {}
        self.calls: list[tuple] = []

    def _maybe_fail(self, op):
        if op in self.errors:
            raise self.errors[op]

    async def search_cities(self, term):
        return []

    async def get_invitation(self, token):
        self.calls.append(("get_invitation", token))
        self._maybe_fail("get_invitation")
        return {"success": True, "valid": True, "invitation": {"token": token, "inviter": {"name": "Grace"}}}

    async def redeem_invitation(self, token, name, email, city_id, relationship_type):
        self.calls.append(("redeem", token, name, email, city_id, relationship_type))
        self._maybe_fail("redeem")
        return {
            "success": True,
            "user": {"id": "u-2", "name": name, "email": email},
            "invitation": {"token": "own", "invitation_url": "https://friday.example/invite/own"},
        }

    async def add_friend(self, *args):
        self.calls.append(("add_friend",) + args)
        return {"success": True, "friend": {"id": "f-1", "name": args[2], "email": args[1]}}

    async def get_profile(self, token):
        self.calls.append(("get_profile", token))
        self._maybe_fail("get_profile")
        return {"success": True, "user": dict(PROFILE_USER)}

    async def update_profile(self, token, changes):
        self.calls.append(("update_profile", token, changes))
        self._maybe_fail("update_profile")
        return {"success": True, "user": {**PROFILE_USER, **changes}}


# ---------------------------------------------------------------------------
# Invitation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_valid_invitation_shows_inviter():
    flow = InvitationFlow(FakeApi(), "abc")
    assert await flow.validate_token()
    assert flow.is_valid
    assert not flow.is_validating
    assert flow.invitation.inviter_name == "Grace"


@pytest.mark.asyncio
async def test_empty_token_is_invalid_without_request():
    api = FakeApi()
    flow = InvitationFlow(api, "")
    assert not await flow.validate_token()
    assert flow.error == MSG_INVALID_INVITATION
    assert api.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, message",
    [
        (UpstreamError("Invitation already used"), "Invitation already used"),
        (TransientError("timeout"), MSG_INVITATION_CHECK_FAILED),
    ],
)
async def test_invitation_check_failures(error, message):
    flow = InvitationFlow(FakeApi({"get_invitation": error}), "abc")
    assert not await flow.validate_token()
    assert flow.is_valid is False
    assert flow.error == message


@pytest.mark.asyncio
async def test_redeem_requires_city(seattle):
    api = FakeApi()
    flow = InvitationFlow(api, "abc", CitySearchController(api))
    flow.name, flow.email = "Bob", "bob@example.com"

    assert not await flow.redeem()
    assert flow.error == MSG_FILL_ALL_FIELDS


@pytest.mark.asyncio
async def test_redeem_and_invite_a_friend(seattle):
    api = FakeApi()
    flow = InvitationFlow(api, "abc", CitySearchController(api))
    flow.city_search.select(seattle)
    flow.name, flow.email = "Bob", "bob@example.com"
    flow.relationship = RelationshipType.FAMILY

    assert await flow.redeem()
    assert flow.step == STEP_SUCCESS
    assert flow.own_invitation.invitation_url.endswith("/own")
    assert ("redeem", "abc", "Bob", "bob@example.com", 1, "Family") in api.calls

    friend = await flow.add_friend("cy@example.com", "Cy")
    assert friend.email == "cy@example.com"


@pytest.mark.asyncio
async def test_redeem_upstream_error_is_shown(seattle):
    api = FakeApi({"redeem": UpstreamError("Email already registered")})
    flow = InvitationFlow(api, "abc", CitySearchController(api))
    flow.city_search.select(seattle)
    flow.name, flow.email = "Bob", "bob@example.com"

    assert not await flow.redeem()
    assert flow.error == "Email already registered"
    assert not flow.is_submitting


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_load_profile_prefills_fields():
    editor = ProfileEditor(FakeApi(), "tok")
    assert await editor.load()
    assert editor.name == "Ada"
    assert editor.city_search.query == "Seattle, WA"
    assert editor.city_search.city_id is None
    assert not editor.is_loading


@pytest.mark.asyncio
async def test_load_profile_network_failure():
    editor = ProfileEditor(FakeApi({"get_profile": TransientError("down")}), "tok")
    assert not await editor.load()
    assert editor.is_valid is False
    assert editor.error == MSG_PROFILE_LOAD_FAILED


@pytest.mark.asyncio
async def test_save_without_changes_is_rejected():
    api = FakeApi()
    editor = ProfileEditor(api, "tok")
    await editor.load()

    assert not await editor.save()
    assert editor.error == MSG_NO_CHANGES
    assert not any(call[0] == "update_profile" for call in api.calls)


@pytest.mark.asyncio
async def test_save_sends_only_changed_fields(tacoma):
    api = FakeApi()
    editor = ProfileEditor(api, "tok")
    await editor.load()
    editor.name = "Ada L."
    editor.city_search.select(tacoma)

    assert editor.pending_changes() == {"name": "Ada L.", "city_id": 2}
    assert await editor.save()
    assert ("update_profile", "tok", {"name": "Ada L.", "city_id": 2}) in api.calls
    assert editor.success == MSG_PROFILE_UPDATED
    assert editor.name == "Ada L."


@pytest.mark.asyncio
async def test_save_failure_shows_message():
    api = FakeApi({"update_profile": UpstreamError("Name too long")})
    editor = ProfileEditor(api, "tok")
    await editor.load()
    editor.name = "x" * 500

    assert not await editor.save()
    assert editor.error == "Name too long"
    assert not editor.is_updating

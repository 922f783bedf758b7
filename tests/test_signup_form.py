"""
Tests for friday.forms.signup.SignupForm.

Covers:
  1. Validation messages (missing fields, terms not accepted)
  2. One API call per accepted click, even on a double click
  3. Upstream message vs. generic network message
  4. Gate: loading ignores the click, international opens the fallback
  5. Friend invites after a successful signup
"""

from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from friday.core.constants import MSG_ACCEPT_TERMS, MSG_FILL_ALL_FIELDS, MSG_NETWORK_ERROR
from friday.domain.enums import GateDecision, RelationshipType
from friday.domain.errors import TransientError, UpstreamError
from friday.forms.signup import STEP_SIGNUP, STEP_SUCCESS, SignupForm
from friday.search.city_search import CitySearchController


class FakeApi:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.signups: list[tuple] = []
        self.friends: list[tuple] = []

    async def search_cities(self, term):
        return []

    async def signup(self, name, email, city_id):
        self.signups.append((name, email, city_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return {
            "success": True,
            "user": {"id": "u-1", "name": name, "email": email, "location_city": "Seattle"},
            "invitation": {"token": "tok", "invitation_url": "https://friday.example/invite/tok"},
        }

    async def add_friend(self, user_id, friend_email, friend_name, friend_city_id, relationship_type):
        self.friends.append((user_id, friend_email, friend_name, friend_city_id, relationship_type))
        return {"success": True, "friend": {"id": "f-1", "name": friend_name, "email": friend_email}}


def _form(api, geo, seattle=None, opened=None) -> SignupForm:
    opened = opened if opened is not None else []
    form = SignupForm(api, geo, on_international=lambda: opened.append(True),
                      city_search=CitySearchController(api))
    if seattle is not None:
        form.city_search.select(seattle)
    return form


def _fill(form: SignupForm) -> None:
    form.name = "Ada"
    form.email = "ada@example.com"
    form.accepted_terms = True


@pytest.fixture
def us(geo_state):
    return geo_state(is_loading=False, country="United States", country_code="US")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_missing_city_is_rejected_without_calling_api(us):
    api = FakeApi()
    form = _form(api, us)
    _fill(form)

    await form.click_submit()

    assert form.error == MSG_FILL_ALL_FIELDS
    assert api.signups == []


@pytest.mark.asyncio
async def test_terms_must_be_accepted(us, seattle):
    api = FakeApi()
    form = _form(api, us, seattle)
    _fill(form)
    form.accepted_terms = False

    await form.click_submit()

    assert form.error == MSG_ACCEPT_TERMS
    assert api.signups == []


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_successful_signup_moves_to_success_step(us, seattle):
    api = FakeApi()
    form = _form(api, us, seattle)
    _fill(form)

    assert await form.click_submit() is GateDecision.ALLOW

    assert api.signups == [("Ada", "ada@example.com", 1)]
    assert form.step == STEP_SUCCESS
    assert form.user.id == "u-1"
    assert form.invitation_url == "https://friday.example/invite/tok"
    assert form.error == ""


@pytest.mark.asyncio
async def test_double_click_submits_once(us, seattle):
    api = FakeApi()
    api.gate = asyncio.Event()
    form = _form(api, us, seattle)
    _fill(form)

    first = asyncio.ensure_future(form.click_submit())
    await asyncio.sleep(0)
    assert form.is_submitting
    assert form.action.disabled

    await form.click_submit()
    api.gate.set()
    await first

    assert len(api.signups) == 1
    assert form.submissions == 1
    assert not form.action.disabled


@pytest.mark.asyncio
async def test_upstream_message_is_shown(us, seattle):
    api = FakeApi(error=UpstreamError("Email already registered"))
    form = _form(api, us, seattle)
    _fill(form)

    await form.click_submit()

    assert form.error == "Email already registered"
    assert form.step == STEP_SIGNUP
    assert not form.is_submitting


@pytest.mark.asyncio
async def test_transport_failure_shows_network_message(us, seattle):
    api = FakeApi(error=TransientError("connection reset"))
    form = _form(api, us, seattle)
    _fill(form)

    await form.click_submit()

    assert form.error == MSG_NETWORK_ERROR
    assert len(api.signups) == 1


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_click_while_geo_loading_does_nothing(geo_state, seattle):
    api, opened = FakeApi(), []
    form = _form(api, geo_state(), seattle, opened)
    _fill(form)

    assert await form.click_submit() is GateDecision.SUSPEND
    assert api.signups == []
    assert opened == []


@pytest.mark.asyncio
async def test_international_visitor_gets_waitlist_modal(geo_state, seattle):
    api, opened = FakeApi(), []
    geo = geo_state(is_loading=False, is_recognized_region=False, country="Canada", country_code="CA")
    form = _form(api, geo, seattle, opened)
    _fill(form)

    assert await form.click_submit() is GateDecision.FALLBACK
    assert api.signups == []
    assert opened == [True]


# ---------------------------------------------------------------------------
# Friends
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_friend_before_signup_is_ignored(us):
    api = FakeApi()
    form = _form(api, us)
    assert await form.add_friend("bob@example.com", "Bob") is None
    assert api.friends == []


@pytest.mark.asyncio
async def test_add_friend_after_signup(us, seattle):
    api = FakeApi()
    form = _form(api, us, seattle)
    _fill(form)
    await form.click_submit()

    friend = await form.add_friend("bob@example.com", "Bob", RelationshipType.CLOSE_FRIENDS)

    assert friend.name == "Bob"
    assert api.friends == [("u-1", "bob@example.com", "Bob", 1, "Close Friends")]
    assert form.friends.added == [friend]


@pytest.mark.asyncio
async def test_add_friend_failure_is_swallowed(us, seattle):
    api = FakeApi()
    form = _form(api, us, seattle)
    _fill(form)
    await form.click_submit()

    async def _fail(*_args):
        raise TransientError("offline")

    api.add_friend = _fail
    assert await form.add_friend("bob@example.com", "Bob") is None
    assert not form.friends.is_adding

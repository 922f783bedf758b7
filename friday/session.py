"""
friday.session — One visitor's page session.

Builds the single ``GeoResolver``, hands the read-only ``GeoContext`` to
every consumer, and points every gated action's fallback at the
international waitlist modal.

Typical usage::

    async with PageSession() as session:
        await session.geo_ready()
        session.signup.name = "Ada"
        ...
        await session.signup.click_submit()
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from friday.cache_backend import CacheBackend, get_cache_backend
from friday.clients.friday_api import FridayApiClient
from friday.clients.geo_lookup import GeoLookupClient
from friday.clients.site import SiteClient
from friday.domain.models import GeoResolution
from friday.forms.feedback import FeedbackForm
from friday.forms.international import InternationalWaitlistModal
from friday.forms.invitation import InvitationFlow
from friday.forms.profile import ProfileEditor
from friday.forms.signup import SignupForm
from friday.gate import GatedAction
from friday.geo.banner import RestrictionBanner
from friday.geo.context import GeoContext
from friday.geo.resolver import GeoLookup, GeoResolver

logger = logging.getLogger(__name__)


class PageSession:
    def __init__(
        self,
        api: Optional[FridayApiClient] = None,
        site: Optional[SiteClient] = None,
        geo_lookup: Optional[GeoLookup] = None,
        cache: Optional[CacheBackend] = None,
    ) -> None:
        self.api = api if api is not None else FridayApiClient()
        self.site = site if site is not None else SiteClient()
        self.cache = cache if cache is not None else get_cache_backend()

        self.resolver = GeoResolver(
            lookup=geo_lookup if geo_lookup is not None else GeoLookupClient(),
            cache=self.cache,
        )
        self.geo = GeoContext(self.resolver)

        self.international = InternationalWaitlistModal(self.site, self.geo)
        self.banner = RestrictionBanner(self.geo, self.international.open, cache=self.cache)
        self.signup = SignupForm(self.api, self.geo, on_international=self.international.open)
        self.feedback = FeedbackForm(self.site)
        self._flows: List[Union[InvitationFlow, ProfileEditor]] = []

    def gated(self, primary, label: str = "") -> GatedAction:
        """Gate any other call-to-action on the same geo resolution."""
        return GatedAction(self.geo, primary, self.international.open, label=label)

    def invitation(self, token: str) -> InvitationFlow:
        flow = InvitationFlow(self.api, token)
        self._flows.append(flow)
        return flow

    def profile(self, token: str) -> ProfileEditor:
        editor = ProfileEditor(self.api, token)
        self._flows.append(editor)
        return editor

    async def geo_ready(self) -> GeoResolution:
        return await self.resolver.resolve()

    async def __aenter__(self) -> "PageSession":
        self.resolver.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        self.signup.close()
        for flow in self._flows:
            flow.close()
        self._flows.clear()
        await self.resolver.aclose()
        await self.api.close()
        await self.site.close()

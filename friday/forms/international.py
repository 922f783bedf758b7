"""
friday.forms.international — "Not available in your country yet" waitlist modal.

This is the fallback target of every gated action.
"""

from __future__ import annotations

import logging

from friday.clients.site import SiteClient
from friday.core.constants import INTERNATIONAL_COUNTRIES, MSG_FILL_ALL_FIELDS, MSG_GENERIC_RETRY
from friday.core.observable import Observable
from friday.domain.errors import FormValidationError, TransientError
from friday.forms.common import require_fields
from friday.geo.context import GeoContext

logger = logging.getLogger(__name__)


class InternationalWaitlistModal(Observable):
    def __init__(self, site: SiteClient, geo: GeoContext) -> None:
        super().__init__()
        self._site = site
        self._geo = geo
        self.is_open = False
        self.email = ""
        self.country = ""
        self.error = ""
        self.is_submitting = False
        self.is_submitted = False

    @property
    def headline(self) -> str:
        return f"Friday isn't available in {self._geo.country or 'your country'} yet"

    @property
    def country_options(self) -> list:
        """Choices for the country picker. A detected country that is not in
        the list comes first."""
        detected = self._geo.country
        if detected and detected not in INTERNATIONAL_COUNTRIES:
            return [detected, *INTERNATIONAL_COUNTRIES]
        return list(INTERNATIONAL_COUNTRIES)

    def open(self) -> None:
        if not self.country:
            self.country = self._geo.country
        self.is_open = True
        self._notify()

    def close(self) -> bool:
        """Close and reset the form; refused while a submission is running."""
        if self.is_submitting:
            return False
        self.email = ""
        self.country = self._geo.country
        self.error = ""
        self.is_submitted = False
        self.is_open = False
        self._notify()
        return True

    async def submit(self) -> bool:
        if self.is_submitting:
            return False
        try:
            require_fields(MSG_FILL_ALL_FIELDS, self.email, self.country)
        except FormValidationError as exc:
            self.error = str(exc)
            self._notify()
            return False

        self.is_submitting = True
        self.error = ""
        self._notify()
        try:
            result = await self._site.join_international_waitlist(self.email, self.country)
            if not result.get("success"):
                raise TransientError(str(result.get("error") or "Failed to submit"))
        except TransientError as exc:
            logger.error("International waitlist submission error: %s", exc)
            self.error = MSG_GENERIC_RETRY
            return False
        finally:
            self.is_submitting = False
            self._notify()

        self.is_submitted = True
        self._notify()
        return True

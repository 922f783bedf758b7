"""
friday.forms.feedback — Contact / feedback form posting to ``/api/send-feedback``.
"""

from __future__ import annotations

from friday.clients.site import SiteClient
from friday.core.constants import MSG_FEEDBACK_FAILED, MSG_FILL_ALL_FIELDS
from friday.core.observable import Observable
from friday.domain.enums import FeedbackCategory
from friday.domain.errors import FormValidationError, TransientError
from friday.forms.common import error_message, require_fields


class FeedbackForm(Observable):
    def __init__(self, site: SiteClient) -> None:
        super().__init__()
        self._site = site
        self.name = ""
        self.email = ""
        self.category = FeedbackCategory.FEEDBACK
        self.message = ""
        self.error = ""
        self.submitted = False
        self.is_submitting = False

    @staticmethod
    def category_options() -> list:
        """``(value, label)`` pairs for the category picker."""
        return [(c.value, c.label) for c in FeedbackCategory]

    async def submit(self) -> bool:
        if self.is_submitting:
            return False
        try:
            require_fields(MSG_FILL_ALL_FIELDS, self.name, self.email, self.message)
        except FormValidationError as exc:
            self.error = str(exc)
            self._notify()
            return False

        self.is_submitting = True
        self.error = ""
        self._notify()
        try:
            result = await self._site.send_feedback(
                self.name, self.email, self.category.value, self.message,
            )
        except TransientError as exc:
            self.error = error_message(exc)
            return False
        finally:
            self.is_submitting = False
            self._notify()

        if not result.get("success"):
            self.error = str(result.get("error") or MSG_FEEDBACK_FAILED)
            self._notify()
            return False

        self.submitted = True
        self.name = self.email = self.message = ""
        self.category = FeedbackCategory.FEEDBACK
        self._notify()
        return True

    def acknowledge(self) -> None:
        """Hide the thank-you note (the page does this after a few seconds)."""
        self.submitted = False
        self._notify()

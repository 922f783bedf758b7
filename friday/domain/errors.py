"""
friday.domain.errors — Error taxonomy for the client controllers.

Cancellation is deliberately absent: superseded work raises the standard
``asyncio.CancelledError`` and is discarded without reaching the user.
"""

from __future__ import annotations


class FormValidationError(ValueError):
    """A required field is missing or malformed.

    Shown inline next to the form; the submission is blocked until the user
    corrects the input.
    """


class TransientError(RuntimeError):
    """Network, timeout or response-parsing failure. Never retried automatically."""


class UpstreamError(RuntimeError):
    """The API answered ``{"success": false, "message": ...}``.

    ``str(exc)`` is the upstream message, surfaced verbatim.
    """

    def __init__(self, message: str, payload: dict | None = None) -> None:
        super().__init__(message)
        self.payload = payload or {}

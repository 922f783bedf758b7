"""
Helpers shared by the form controllers.
"""

from __future__ import annotations

from typing import Optional

from friday.core.constants import MSG_NETWORK_ERROR
from friday.domain.errors import FormValidationError, UpstreamError


def require_fields(message: str, *values: object) -> None:
    """Raise ``FormValidationError(message)`` if any value is empty."""
    if any(v is None or (isinstance(v, str) and not v.strip()) for v in values):
        raise FormValidationError(message)


def error_message(exc: Exception, default: Optional[str] = None) -> str:
    """Text shown inline for a failed submission."""
    if isinstance(exc, (UpstreamError, FormValidationError)):
        return str(exc)
    return default or MSG_NETWORK_ERROR

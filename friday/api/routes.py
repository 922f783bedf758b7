"""
Friday — Centralised router registration.

Call ``register_routes(app)`` once in ``friday.app``.

  POST /api/send-feedback           — email the feedback form to the team
  POST /api/international-waitlist  — record interest from outside the US
  GET  /api/health                  — health check
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from friday import __version__, config
from friday.api.schemas import (
    FeedbackRequest,
    FeedbackResponse,
    HealthResponse,
    InternationalWaitlistRequest,
    InternationalWaitlistResponse,
)
from friday.cache_backend import get_cache_backend
from friday.core.constants import EMAIL_PATTERN, INTERNATIONAL_WAITLIST_PREFIX
from friday.mailer import is_configured as email_configured, send_feedback_email
from friday.rate_limiter import check_rate_limit, client_identity

logger = logging.getLogger(__name__)

_START_TIME: float = time.time()
_EMAIL_RE = re.compile(EMAIL_PATTERN)

# Waitlist records are kept for a year.
_WAITLIST_RECORD_TTL_SECONDS = 365 * 24 * 3600


def _too_many_requests() -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": "Too many requests. Please try again later."},
    )


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

feedback_router = APIRouter(prefix="/api", tags=["feedback"])


@feedback_router.post("/send-feedback", response_model=FeedbackResponse)
async def send_feedback(body: FeedbackRequest, request: Request):
    allowed, _ = check_rate_limit(
        "feedback", client_identity(request), config.FEEDBACK_RATE_LIMIT_PER_MINUTE,
    )
    if not allowed:
        return _too_many_requests()

    if not (body.name and body.email and body.type and body.message):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "All fields are required"},
        )
    if not _EMAIL_RE.match(body.email):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid email format"},
        )

    result = await send_feedback_email(body.name, body.email, body.type, body.message)
    if not result.get("success"):
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to send feedback. Please try again."},
        )
    return FeedbackResponse(success=True, message="Feedback sent successfully!")


# ---------------------------------------------------------------------------
# International waitlist
# ---------------------------------------------------------------------------

waitlist_router = APIRouter(prefix="/api", tags=["waitlist"])


@waitlist_router.post("/international-waitlist", response_model=InternationalWaitlistResponse)
async def join_international_waitlist(body: InternationalWaitlistRequest, request: Request):
    identity = client_identity(request)
    allowed, _ = check_rate_limit("intl", identity, config.WAITLIST_RATE_LIMIT_PER_MINUTE)
    if not allowed:
        return _too_many_requests()

    if not body.email or not body.country:
        return JSONResponse(status_code=400, content={"error": "Email and country are required"})
    if not _EMAIL_RE.match(body.email):
        return JSONResponse(status_code=400, content={"error": "Invalid email format"})

    record = {
        "email": body.email,
        "country": body.country,
        "timestamp": body.timestamp,
        "received_at": datetime.now(timezone.utc).isoformat(),
        "user_agent": request.headers.get("user-agent"),
        "ip": identity,
    }
    get_cache_backend().set_json(
        f"{INTERNATIONAL_WAITLIST_PREFIX}{body.email.strip().lower()}",
        record,
        ttl_seconds=_WAITLIST_RECORD_TTL_SECONDS,
    )
    logger.info("International waitlist signup: %s (%s)", body.email, body.country)
    return InternationalWaitlistResponse()


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------

system_router = APIRouter(prefix="/api", tags=["system"])


@system_router.get("/health", response_model=HealthResponse)
async def health_check():
    cache = get_cache_backend()
    return HealthResponse(
        status="ok",
        version=__version__,
        cache_backend=cache.backend,
        email_configured=email_configured(),
        uptime_seconds=round(time.time() - _START_TIME, 1),
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_routes(app: FastAPI) -> None:
    """Mount all routers onto ``app``."""
    app.include_router(feedback_router)
    app.include_router(waitlist_router)
    app.include_router(system_router)

    logger.info("Routes registered: %d total endpoints", len(app.routes))

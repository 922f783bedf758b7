"""
Friday — API request/response schemas (Pydantic).

Request fields default to empty strings so the routes can answer missing
fields with the site's own 400 messages instead of FastAPI's 422 detail.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# POST /api/send-feedback
# ---------------------------------------------------------------------------

class FeedbackRequest(BaseModel):
    name: str = ""
    email: str = ""
    type: str = ""          # FeedbackCategory value
    message: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ada",
                "email": "ada@example.com",
                "type": "feedback",
                "message": "Love the idea!",
            }
        }


class FeedbackResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# POST /api/international-waitlist
# ---------------------------------------------------------------------------

class InternationalWaitlistRequest(BaseModel):
    email: str = ""
    country: str = ""
    timestamp: Optional[str] = None     # ISO-8601, client clock


class InternationalWaitlistResponse(BaseModel):
    success: bool = True
    message: str = "Successfully added to international waitlist"


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    version: str
    cache_backend: str
    email_configured: bool
    uptime_seconds: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.utcnow)

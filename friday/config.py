"""
Centralized configuration for the Friday waitlist site.
All settings come from environment variables for 12-factor deployment.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _env_set(name: str, default: str) -> set:
    return {
        s.strip().upper()
        for s in os.environ.get(name, default).split(",")
        if s.strip()
    }


# ---------------------------------------------------------------------------
# Friday API (Supabase edge functions)
# ---------------------------------------------------------------------------
SUPABASE_PROJECT = os.environ.get("NEXT_PUBLIC_SUPABASE_PROJECT", "").strip()
API_BASE_URL = os.environ.get(
    "FRIDAY_API_BASE_URL",
    f"https://{SUPABASE_PROJECT}.supabase.co/functions/v1" if SUPABASE_PROJECT else "",
).rstrip("/")
API_KEY = os.environ.get("NEXT_PUBLIC_API_KEY", "")
SUPABASE_ANON_KEY = os.environ.get("NEXT_PUBLIC_SUPABASE_ANON_KEY", "")
API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "15"))

# Base URL of this site's own routes (feedback / international waitlist)
SITE_URL = os.environ.get("SITE_URL", "http://localhost:3000").rstrip("/")

# ---------------------------------------------------------------------------
# City search
# ---------------------------------------------------------------------------
SEARCH_DEBOUNCE_SECONDS = float(os.environ.get("SEARCH_DEBOUNCE_SECONDS", "0.4"))
SEARCH_MIN_CHARS = int(os.environ.get("SEARCH_MIN_CHARS", "2"))

# ---------------------------------------------------------------------------
# Geo resolution
# ---------------------------------------------------------------------------
GEO_LOOKUP_URL = os.environ.get("GEO_LOOKUP_URL", "https://ipapi.co/json/")
GEO_LOOKUP_TIMEOUT_SECONDS = float(os.environ.get("GEO_LOOKUP_TIMEOUT_SECONDS", "5"))
GEO_CACHE_TTL_SECONDS = int(os.environ.get("GEO_CACHE_TTL_SECONDS", str(24 * 60 * 60)))
# Countries where the product is available; everyone else gets the
# international waitlist instead of the signup action.
RECOGNIZED_COUNTRY_CODES = _env_set("RECOGNIZED_COUNTRY_CODES", "US")

# ---------------------------------------------------------------------------
# Cache backend
# ---------------------------------------------------------------------------
REDIS_URL = os.environ.get("REDIS_URL", "").strip()
# JSON file used as durable client storage when Redis is not configured.
CLIENT_CACHE_PATH = os.environ.get("CLIENT_CACHE_PATH", "").strip()

# ---------------------------------------------------------------------------
# Email (feedback form)
# ---------------------------------------------------------------------------
EMAIL_USER = os.environ.get("EMAIL_USER", "")
EMAIL_APP_PASSWORD = os.environ.get("EMAIL_APP_PASSWORD", "")
SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.environ.get("SMTP_PORT", "465"))
SMTP_USE_SSL = _env_bool("SMTP_USE_SSL", True)
SMTP_TIMEOUT_SECONDS = float(os.environ.get("SMTP_TIMEOUT_SECONDS", "20"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"
# Comma-separated subsystems to trace at DEBUG: search, geo, forms, api, mail, cache
LOG_DEBUG = [s.strip() for s in os.environ.get("LOG_DEBUG", "").split(",") if s.strip()]

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
PORT = int(os.environ.get("PORT", "8001"))
CORS_ORIGINS = [
    s.strip()
    for s in os.environ.get("CORS_ORIGINS", "*").split(",")
    if s.strip()
]
FEEDBACK_RATE_LIMIT_PER_MINUTE = int(os.environ.get("FEEDBACK_RATE_LIMIT_PER_MINUTE", "5"))
WAITLIST_RATE_LIMIT_PER_MINUTE = int(os.environ.get("WAITLIST_RATE_LIMIT_PER_MINUTE", "10"))

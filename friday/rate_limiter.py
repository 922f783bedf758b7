"""
Per-client fixed-window rate limiter for the public form routes, backed by
the shared cache.
"""

from __future__ import annotations

import time

from starlette.requests import Request

from friday.cache_backend import get_cache_backend


def client_identity(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def check_rate_limit(
    bucket: str,
    identity: str,
    limit_per_minute: int,
) -> tuple[bool, int]:
    """Count one hit; returns ``(allowed, hits_this_minute)``."""
    if limit_per_minute <= 0:
        return True, 0

    minute_bucket = int(time.time() // 60)
    key = f"rl:{bucket}:{identity}:{minute_bucket}"
    try:
        count = get_cache_backend().incr(key, ttl_seconds=70)
    except Exception:
        # Fail-open if cache backend is unavailable.
        return True, 0
    return count <= int(limit_per_minute), count

from __future__ import annotations

from starlette.requests import Request

from friday import rate_limiter
from friday.cache_backend import MemoryCacheBackend


def _request(headers: dict | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/send-feedback",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "query_string": b"",
        "client": ("10.0.0.9", 50000),
    }
    return Request(scope)


def test_check_rate_limit_blocks_after_threshold(monkeypatch):
    cache = MemoryCacheBackend()
    monkeypatch.setattr(rate_limiter, "get_cache_backend", lambda: cache)

    ok1, c1 = rate_limiter.check_rate_limit("feedback", "1.2.3.4", 2)
    ok2, c2 = rate_limiter.check_rate_limit("feedback", "1.2.3.4", 2)
    ok3, c3 = rate_limiter.check_rate_limit("feedback", "1.2.3.4", 2)

    assert ok1 is True and c1 == 1
    assert ok2 is True and c2 == 2
    assert ok3 is False and c3 == 3


def test_buckets_and_identities_are_independent(monkeypatch):
    cache = MemoryCacheBackend()
    monkeypatch.setattr(rate_limiter, "get_cache_backend", lambda: cache)

    assert rate_limiter.check_rate_limit("feedback", "a", 1)[0] is True
    assert rate_limiter.check_rate_limit("feedback", "b", 1)[0] is True
    assert rate_limiter.check_rate_limit("intl", "a", 1)[0] is True
    assert rate_limiter.check_rate_limit("feedback", "a", 1)[0] is False


def test_zero_limit_disables_limiting():
    assert rate_limiter.check_rate_limit("feedback", "a", 0) == (True, 0)


def test_check_rate_limit_fails_open_when_cache_errors(monkeypatch):
    class BrokenCache:
        def incr(self, *_args, **_kwargs):
            raise RuntimeError("cache down")

    monkeypatch.setattr(rate_limiter, "get_cache_backend", lambda: BrokenCache())
    ok, count = rate_limiter.check_rate_limit("feedback", "1.2.3.4", 2)
    assert ok is True
    assert count == 0


def test_client_identity_prefers_forwarded_for():
    req = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "198.51.100.2"})
    assert rate_limiter.client_identity(req) == "203.0.113.7"


def test_client_identity_falls_back_to_real_ip_then_peer():
    assert rate_limiter.client_identity(_request({"X-Real-IP": "198.51.100.2"})) == "198.51.100.2"
    assert rate_limiter.client_identity(_request()) == "10.0.0.9"

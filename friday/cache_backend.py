"""
Shared key/value cache (Redis preferred, JSON file or in-memory fallback).

The client controllers treat this as durable storage: the geo resolution and
the banner "dismissed" flag are written here. The HTTP service uses it for
rate-limit counters and international waitlist records.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from typing import Any, Dict, Optional

from friday import config

try:
    import redis  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    redis = None

logger = logging.getLogger(__name__)


class CacheBackend:
    backend: str = "none"

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def incr(self, key: str, ttl_seconds: int = 60) -> int:
        raise NotImplementedError

    def get_json(self, key: str) -> Optional[Any]:
        try:
            raw = self.get(key)
        except Exception:
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except Exception:
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        try:
            self.set(key, json.dumps(value), ttl_seconds=ttl_seconds)
        except Exception as exc:
            logger.warning("cache write failed for %s: %s", key, exc)


_SWEEP_EVERY = 500


class MemoryCacheBackend(CacheBackend):
    backend = "memory"

    def __init__(self) -> None:
        self._store: Dict[str, tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._incr_count = 0

    def get(self, key: str) -> Optional[str]:
        now = time.time()
        with self._lock:
            hit = self._store.get(key)
            if not hit:
                return None
            value, expires_at = hit
            if expires_at is not None and now > expires_at:
                self._store.pop(key, None)
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        expires_at = None
        if ttl_seconds is not None:
            expires_at = time.time() + max(1, ttl_seconds)
        with self._lock:
            self._store[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def purge_expired(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = time.time()
        with self._lock:
            expired = [k for k, (_, exp) in self._store.items() if exp is not None and now > exp]
            for key in expired:
                del self._store[key]
        return len(expired)

    def incr(self, key: str, ttl_seconds: int = 60) -> int:
        now = time.time()
        with self._lock:
            hit = self._store.get(key)
            expires_at: Optional[float] = None
            current = 0
            if hit:
                value, expires_at = hit
                if expires_at is not None and now > expires_at:
                    current = 0
                    expires_at = None
                else:
                    try:
                        current = int(value)
                    except ValueError:
                        current = 0
            current += 1
            if expires_at is None:
                expires_at = now + max(1, ttl_seconds)
            self._store[key] = (str(current), expires_at)
            self._incr_count += 1
            sweep = self._incr_count % _SWEEP_EVERY == 0
        if sweep:
            self.purge_expired()
        return current


class FileCacheBackend(MemoryCacheBackend):
    """Memory cache mirrored to a JSON file so values survive restarts.

    Plays the role of browser ``localStorage`` for the client controllers.
    """

    backend = "file"

    def __init__(self, path: str) -> None:
        super().__init__()
        self._path = path
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self._path):
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("FileCacheBackend: ignoring unreadable %s (%s)", self._path, exc)
            return
        if not isinstance(raw, dict):
            return
        for key, entry in raw.items():
            if isinstance(entry, list) and len(entry) == 2:
                self._store[key] = (str(entry[0]), entry[1])

    def _flush(self) -> None:
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = f"{self._path}.tmp"
        # Closed rate-limit windows are never read again.
        self.purge_expired()
        with self._lock:
            snapshot = {k: [v, exp] for k, (v, exp) in self._store.items()}
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(snapshot, f)
        os.replace(tmp, self._path)

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        super().set(key, value, ttl_seconds=ttl_seconds)
        self._flush()

    def delete(self, key: str) -> None:
        super().delete(key)
        self._flush()

    def incr(self, key: str, ttl_seconds: int = 60) -> int:
        value = super().incr(key, ttl_seconds=ttl_seconds)
        self._flush()
        return value


class RedisCacheBackend(CacheBackend):
    backend = "redis"

    def __init__(self, url: str) -> None:
        if redis is None:
            raise RuntimeError("redis package not installed")
        self._client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=1,
            socket_timeout=1,
            retry_on_timeout=False,
        )
        # Fail fast at startup so we can fall back immediately.
        self._client.ping()

    def get(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        if ttl_seconds:
            self._client.setex(key, max(1, int(ttl_seconds)), value)
        else:
            self._client.set(key, value)

    def delete(self, key: str) -> None:
        self._client.delete(key)

    def incr(self, key: str, ttl_seconds: int = 60) -> int:
        value = int(self._client.incr(key))
        if value == 1:
            self._client.expire(key, max(1, int(ttl_seconds)))
        return value


_backend_singleton: Optional[CacheBackend] = None
_backend_lock = threading.Lock()


def _local_backend() -> CacheBackend:
    if config.CLIENT_CACHE_PATH:
        return FileCacheBackend(config.CLIENT_CACHE_PATH)
    return MemoryCacheBackend()


def get_cache_backend() -> CacheBackend:
    global _backend_singleton
    if _backend_singleton is not None:
        return _backend_singleton

    with _backend_lock:
        if _backend_singleton is not None:
            return _backend_singleton

        if config.REDIS_URL:
            try:
                _backend_singleton = RedisCacheBackend(config.REDIS_URL)
                return _backend_singleton
            except Exception as exc:
                logger.warning("Redis unavailable (%s); using local cache", exc)

        _backend_singleton = _local_backend()
        return _backend_singleton


def reset_cache_backend_for_tests() -> None:
    """Test helper to clear singleton cache backend."""
    global _backend_singleton
    with _backend_lock:
        _backend_singleton = None

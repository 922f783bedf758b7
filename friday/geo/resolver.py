"""
friday.geo.resolver — Resolve the caller's country once per cache window.

Lifecycle::

    UNINITIALIZED --start()--+--> RESOLVED               (fresh cache entry)
                             +--> RESOLVING --> RESOLVED (lookup result or fallback)

A lookup that errors, times out or returns an incomplete payload resolves to
the permissive default (country code ``US``, recognized region). Only
successful lookups are written to the durable cache, under
``friday_geo_data`` as ``{"data": ..., "timestamp": <epoch ms>}``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable, Optional, Protocol

from friday import config
from friday.cache_backend import CacheBackend, get_cache_backend
from friday.clients.geo_lookup import GeoLookupClient
from friday.core.constants import FALLBACK_COUNTRY, FALLBACK_COUNTRY_CODE, GEO_CACHE_KEY
from friday.core.observable import Observable
from friday.domain.enums import ResolutionState
from friday.domain.models import GeoResolution, GeoState

logger = logging.getLogger(__name__)


class GeoLookup(Protocol):
    async def lookup(self) -> dict: ...


class GeoResolver(Observable):
    """Single owner of the geo resolution for one page session.

    Parameters
    ----------
    lookup:
        Object with an async ``lookup()`` returning ``country`` /
        ``country_code``. Defaults to ``GeoLookupClient()``.
    cache:
        Durable key/value store. Defaults to ``get_cache_backend()``.
    ttl_seconds:
        Age after which a cached resolution is ignored (default 24 h).
    timeout:
        Upper bound for the lookup in seconds (default 5 s).
    recognized_codes:
        Country codes in which the primary actions are available.
    clock:
        Returns the current epoch time in seconds.
    """

    def __init__(
        self,
        lookup: Optional[GeoLookup] = None,
        cache: Optional[CacheBackend] = None,
        ttl_seconds: Optional[float] = None,
        timeout: Optional[float] = None,
        recognized_codes: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__()
        self._lookup = lookup if lookup is not None else GeoLookupClient()
        self._cache = cache if cache is not None else get_cache_backend()
        self.ttl_seconds = config.GEO_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.timeout = config.GEO_LOOKUP_TIMEOUT_SECONDS if timeout is None else timeout
        self.recognized_codes = {
            c.upper() for c in (recognized_codes if recognized_codes is not None
                                else config.RECOGNIZED_COUNTRY_CODES)
        }
        self._clock = clock

        self.phase = ResolutionState.UNINITIALIZED
        self.resolution: Optional[GeoResolution] = None
        self.lookups_issued = 0
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> GeoState:
        if self.resolution is None:
            return GeoState.loading()
        return GeoState.from_resolution(self.resolution)

    def is_recognized(self, country_code: str) -> bool:
        return country_code.upper() in self.recognized_codes

    def start(self) -> None:
        """Begin resolution ("mount"). Idempotent; needs a running loop
        unless a fresh cache entry settles it synchronously."""
        if self.phase is not ResolutionState.UNINITIALIZED:
            return

        cached = self.read_cache()
        if cached is not None:
            logger.debug("geo resolved from cache: %s", cached.country_code)
            self._finish(cached)
            return

        self.phase = ResolutionState.RESOLVING
        self._task = asyncio.get_running_loop().create_task(self._lookup_once())
        self._notify()

    async def resolve(self) -> GeoResolution:
        """Start if needed and wait for the shared resolution.

        Any number of concurrent callers share one lookup. Cancelling a
        caller does not cancel the lookup.
        """
        self.start()
        if self.resolution is not None:
            return self.resolution
        assert self._task is not None
        return await asyncio.shield(self._task)

    def read_cache(self) -> Optional[GeoResolution]:
        """Return the cached resolution if present and younger than the TTL."""
        cached = GeoResolution.from_cache_entry(self._cache.get_json(GEO_CACHE_KEY))
        if cached is None:
            return None
        if self._clock() - cached.resolved_at >= self.ttl_seconds:
            logger.debug("geo cache entry expired (resolved_at=%.0f)", cached.resolved_at)
            return None
        return GeoResolution(
            country=cached.country,
            country_code=cached.country_code,
            is_recognized_region=self.is_recognized(cached.country_code),
            resolved_at=cached.resolved_at,
        )

    async def aclose(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _lookup_once(self) -> GeoResolution:
        self.lookups_issued += 1
        try:
            data = await asyncio.wait_for(self._lookup.lookup(), timeout=self.timeout)
            resolution = self._from_payload(data)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Geo-location detection failed: %s; allowing access", reason)
            resolution = GeoResolution(
                country=FALLBACK_COUNTRY,
                country_code=FALLBACK_COUNTRY_CODE,
                is_recognized_region=True,
                resolved_at=self._clock(),
                error=reason,
            )
        else:
            self._cache.set_json(GEO_CACHE_KEY, resolution.to_cache_entry())
            logger.info(
                "Detected country: %s (%s), %s",
                resolution.country, resolution.country_code,
                "recognized region" if resolution.is_recognized_region else "international",
            )

        self._finish(resolution)
        return resolution

    def _from_payload(self, data: dict) -> GeoResolution:
        if not isinstance(data, dict) or not data.get("country") or not data.get("country_code"):
            raise ValueError("Location detection failed")
        code = str(data["country_code"]).upper()
        return GeoResolution(
            country=str(data["country"]),
            country_code=code,
            is_recognized_region=self.is_recognized(code),
            resolved_at=self._clock(),
        )

    def _finish(self, resolution: GeoResolution) -> None:
        self.resolution = resolution
        self.phase = ResolutionState.RESOLVED
        self._notify()

"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • memory_cache      — fresh MemoryCacheBackend, also installed as the singleton
  • fake_lookup(...)  — build a scriptable geo lookup
  • geo_state(...)    — build a StaticGeo (GeoContext stand-in) in one state
  • seattle           — sample City rows
"""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Optional

import pytest

# Ensure the project root is on the path so all friday imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from friday import cache_backend  # noqa: E402
from friday.cache_backend import MemoryCacheBackend  # noqa: E402
from friday.domain.models import City, GeoState  # noqa: E402


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_cache(monkeypatch):
    cache = MemoryCacheBackend()
    monkeypatch.setattr(cache_backend, "_backend_singleton", cache)
    yield cache
    cache_backend.reset_cache_backend_for_tests()


# ---------------------------------------------------------------------------
# Geo
# ---------------------------------------------------------------------------

class FakeLookup:
    """Geo lookup that returns ``payload``, raises ``error`` or waits on ``gate``."""

    def __init__(self, payload=None, error: Optional[Exception] = None, delay: float = 0.0):
        self.payload = payload if payload is not None else {"country": "United States", "country_code": "US"}
        self.error = error
        self.delay = delay
        self.gate: Optional[asyncio.Event] = None
        self.calls = 0

    async def lookup(self) -> dict:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_lookup():
    return FakeLookup


class StaticGeo:
    """Stands in for ``GeoContext`` with a fixed, replaceable state."""

    def __init__(self, state: GeoState):
        self.state = state

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def is_recognized_region(self) -> bool:
        return self.state.is_recognized_region

    @property
    def country(self) -> str:
        return self.state.country

    @property
    def decision(self):
        return self.state.decision


@pytest.fixture
def geo_state():
    def _factory(**kwargs) -> StaticGeo:
        return StaticGeo(GeoState(**kwargs))
    return _factory


# ---------------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------------

@pytest.fixture
def seattle() -> City:
    return City(id=1, city="Seattle", state="WA", timezone="America/Los_Angeles", display="Seattle, WA")


@pytest.fixture
def tacoma() -> City:
    return City(id=2, city="Tacoma", state="WA", timezone="America/Los_Angeles", display="Seattle Tacoma, WA")

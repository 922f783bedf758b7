"""
friday.domain.models — Canonical dataclass models.

These are the single source of truth for records flowing between the API
client, the controllers and the routes. Layers that produce or consume these
records must not invent their own parallel types.

Import pattern::

    from friday.domain.models import City, GeoResolution, GeoState
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from friday.domain.enums import GateDecision


# ---------------------------------------------------------------------------
# City search
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class City:
    """One candidate row returned by ``GET /cities?search=``."""
    id: int
    city: str = ""
    state: str = ""
    timezone: str = ""
    display: str = ""

    @property
    def label(self) -> str:
        return self.display or ", ".join(p for p in (self.city, self.state) if p)

    @classmethod
    def from_dict(cls, d: dict) -> "City":
        return cls(
            id=int(d["id"]),
            city=str(d.get("city") or ""),
            state=str(d.get("state") or ""),
            timezone=str(d.get("timezone") or ""),
            display=str(d.get("display") or ""),
        )


@dataclass
class InFlightRequest:
    """The single search request currently owned by the tracker.

    ``generation`` is compared against the tracker's counter before any
    result is applied; ``task`` is the cancellation handle.
    """
    query: str
    generation: int
    task: Optional["asyncio.Task[Any]"] = None

    @property
    def done(self) -> bool:
        return self.task is not None and self.task.done()


# ---------------------------------------------------------------------------
# Geo resolution
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeoResolution:
    """Outcome of resolving the caller's country.

    Replaced wholesale on refresh, never mutated. ``error`` is only set on
    the fail-open fallback.
    """
    country: str
    country_code: str
    is_recognized_region: bool
    resolved_at: float
    error: Optional[str] = None

    def to_cache_entry(self) -> dict:
        """Serialise as ``{"data": {...}, "timestamp": <epoch ms>}``."""
        return {
            "data": {
                "country": self.country,
                "countryCode": self.country_code,
                "isUS": self.is_recognized_region,
            },
            "timestamp": int(self.resolved_at * 1000),
        }

    @classmethod
    def from_cache_entry(cls, entry: Any) -> Optional["GeoResolution"]:
        """Parse a cache entry; returns ``None`` for anything malformed."""
        if not isinstance(entry, dict):
            return None
        data = entry.get("data")
        timestamp = entry.get("timestamp")
        if not isinstance(data, dict) or not isinstance(timestamp, (int, float)):
            return None
        code = data.get("countryCode")
        if not code:
            return None
        return cls(
            country=str(data.get("country") or ""),
            country_code=str(code),
            is_recognized_region=bool(data.get("isUS")),
            resolved_at=float(timestamp) / 1000.0,
        )


@dataclass(frozen=True)
class GeoState:
    """Read-only snapshot handed to every geo consumer."""
    country: str = ""
    country_code: str = ""
    # Permissive until told otherwise; consumers must check is_loading first.
    is_recognized_region: bool = True
    is_loading: bool = True
    error: Optional[str] = None

    @classmethod
    def loading(cls) -> "GeoState":
        return cls()

    @classmethod
    def from_resolution(cls, r: GeoResolution) -> "GeoState":
        return cls(
            country=r.country,
            country_code=r.country_code,
            is_recognized_region=r.is_recognized_region,
            is_loading=False,
            error=r.error,
        )

    @property
    def decision(self) -> GateDecision:
        if self.is_loading:
            return GateDecision.SUSPEND
        if self.is_recognized_region:
            return GateDecision.ALLOW
        return GateDecision.FALLBACK


# ---------------------------------------------------------------------------
# Signup API records
# ---------------------------------------------------------------------------

@dataclass
class User:
    id: str
    name: str
    email: str
    location_city: str = ""
    location_state: str = ""
    location_timezone: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        return ", ".join(p for p in (self.location_city, self.location_state) if p)

    @classmethod
    def from_dict(cls, d: dict) -> "User":
        known = {"id", "name", "email", "location_city", "location_state", "location_timezone"}
        return cls(
            id=str(d.get("id") or ""),
            name=str(d.get("name") or ""),
            email=str(d.get("email") or ""),
            location_city=str(d.get("location_city") or ""),
            location_state=str(d.get("location_state") or ""),
            location_timezone=str(d.get("location_timezone") or ""),
            extra={k: v for k, v in d.items() if k not in known},
        )

    def to_dict(self) -> dict:
        out = asdict(self)
        out.update(out.pop("extra"))
        return out


# Friends share the user shape.
Friend = User


@dataclass
class Invitation:
    token: str = ""
    invitation_url: str = ""
    inviter_name: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> "Invitation":
        d = d or {}
        inviter = d.get("inviter") or {}
        return cls(
            token=str(d.get("token") or ""),
            invitation_url=str(d.get("invitation_url") or ""),
            inviter_name=str(d.get("inviter_name") or inviter.get("name") or ""),
            raw=dict(d),
        )

"""
friday.geo.context — Read-only geo view passed to consumers.

Consumers receive a ``GeoContext`` instead of reaching for a global; they
can read the current ``GeoState`` and subscribe to changes, but they cannot
trigger or replace the resolution.
"""

from __future__ import annotations

from typing import Callable

from friday.domain.enums import GateDecision
from friday.domain.models import GeoState
from friday.geo.resolver import GeoResolver


class GeoContext:
    def __init__(self, resolver: GeoResolver) -> None:
        self._resolver = resolver

    @property
    def state(self) -> GeoState:
        return self._resolver.state

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
    def decision(self) -> GateDecision:
        return self.state.decision

    def subscribe(self, callback: Callable[[GeoState], None]) -> Callable[[], None]:
        """Call ``callback(state)`` whenever the resolution changes."""
        return self._resolver.subscribe(lambda resolver: callback(resolver.state))

"""
City typeahead used by the signup, invitation and profile forms.

Keystrokes go through ``DebouncedDispatcher``; settled queries are issued
through ``RequestTracker`` so only the newest query's cities are shown.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from friday.core.constants import MSG_NETWORK_ERROR
from friday.core.observable import Observable
from friday.domain.errors import UpstreamError
from friday.domain.models import City
from friday.search.debounce import DebouncedDispatcher
from friday.search.tracker import RequestTracker

logger = logging.getLogger(__name__)


class CitySource(Protocol):
    async def search_cities(self, term: str) -> List[City]: ...


class CitySearchController(Observable):
    """Holds the visible state of one city search box.

    Public state: ``query``, ``results``, ``show_results``, ``selected``,
    ``error`` and ``is_searching``. Listeners registered with
    ``subscribe()`` are called after every change.
    """

    def __init__(
        self,
        source: CitySource,
        delay: Optional[float] = None,
        min_chars: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.query = ""
        self.results: List[City] = []
        self.show_results = False
        self.selected: Optional[City] = None
        self.error: Optional[str] = None

        self.tracker = RequestTracker(
            source.search_cities,
            on_result=self._apply_results,
            on_error=self._apply_error,
            on_searching=lambda _flag: self._notify(),
        )
        self.dispatcher = DebouncedDispatcher(
            self.tracker.issue,
            delay=delay,
            min_chars=min_chars,
            on_clear=self._clear_results,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_searching(self) -> bool:
        return self.tracker.is_searching

    @property
    def city_id(self) -> Optional[int]:
        return self.selected.id if self.selected else None

    def on_input(self, text: str) -> None:
        """Handle a change of the search box text."""
        self.query = text
        self.selected = None
        self.error = None
        self.dispatcher.submit(text)
        self._notify()

    def select(self, city: City) -> None:
        """Pick ``city`` from the results; stops any pending search."""
        self.dispatcher.cancel()
        self.tracker.cancel()
        self.selected = city
        self.query = city.label
        self.show_results = False
        self.error = None
        self._notify()

    def prefill(self, text: str) -> None:
        """Set the box text without searching (e.g. a saved location)."""
        self.query = text
        self.selected = None
        self._notify()

    def reset(self) -> None:
        self.dispatcher.cancel()
        self.tracker.cancel()
        self.query = ""
        self.results = []
        self.show_results = False
        self.selected = None
        self.error = None
        self._notify()

    def close(self) -> None:
        """Stop timers and in-flight work (view teardown)."""
        self.dispatcher.cancel()
        self.tracker.cancel()

    # ------------------------------------------------------------------
    # Tracker / dispatcher callbacks
    # ------------------------------------------------------------------

    def _clear_results(self) -> None:
        self.tracker.cancel()
        self.results = []
        self.show_results = False

    def _apply_results(self, query: str, cities: Any) -> None:
        self.results = list(cities)
        self.show_results = True
        self.error = None
        logger.debug("%d cities for %r", len(self.results), query)
        self._notify()

    def _apply_error(self, query: str, exc: Exception) -> None:
        self.error = str(exc) if isinstance(exc, UpstreamError) else MSG_NETWORK_ERROR
        self._notify()

    def dismiss_error(self) -> None:
        self.error = None
        self._notify()

"""
friday.geo.banner — "Friday is currently US-only" notice for international visitors.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from friday.cache_backend import CacheBackend, get_cache_backend
from friday.core.constants import BANNER_DISMISSED_KEY
from friday.geo.context import GeoContext

logger = logging.getLogger(__name__)


class RestrictionBanner:
    """Visible once geo has resolved to a non-recognized region, until the
    visitor dismisses it. The dismissal is remembered in the durable cache.
    """

    def __init__(
        self,
        geo: GeoContext,
        on_open_modal: Callable[[], None],
        cache: Optional[CacheBackend] = None,
    ) -> None:
        self._geo = geo
        self._on_open_modal = on_open_modal
        self._cache = cache if cache is not None else get_cache_backend()
        try:
            self.dismissed = self._cache.get(BANNER_DISMISSED_KEY) == "true"
        except Exception as exc:
            logger.warning("cache read failed for %s: %s", BANNER_DISMISSED_KEY, exc)
            self.dismissed = False

    @property
    def visible(self) -> bool:
        state = self._geo.state
        return not (state.is_loading or state.is_recognized_region or self.dismissed)

    @property
    def message(self) -> str:
        country = self._geo.country
        if country:
            return f"Friday is currently US-only. Interested in bringing it to {country}?"
        return "Friday is currently US-only."

    def dismiss(self) -> None:
        self.dismissed = True
        try:
            self._cache.set(BANNER_DISMISSED_KEY, "true")
        except Exception as exc:
            logger.warning("cache write failed for %s: %s", BANNER_DISMISSED_KEY, exc)

    def open_modal(self) -> None:
        self._on_open_modal()

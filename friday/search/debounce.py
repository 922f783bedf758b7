"""
Restartable delay scheduler for search-as-you-type.

Every ``submit()`` cancels the previously scheduled call, so only the value
typed last before a pause of ``delay`` seconds ever reaches the callback.
Inputs shorter than ``min_chars`` clear results immediately and schedule
nothing.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

from friday import config

logger = logging.getLogger(__name__)


class DebouncedDispatcher:
    """
    Parameters
    ----------
    callback:
        Called with the settled text once the window elapses. May be a plain
        function or a coroutine function.
    delay:
        Debounce window in seconds (default ``config.SEARCH_DEBOUNCE_SECONDS``).
    min_chars:
        Minimum input length that may trigger a search.
    on_clear:
        Called synchronously when the input is too short.
    """

    def __init__(
        self,
        callback: Callable[[str], Any],
        delay: Optional[float] = None,
        min_chars: Optional[int] = None,
        on_clear: Optional[Callable[[], None]] = None,
    ) -> None:
        self.delay = config.SEARCH_DEBOUNCE_SECONDS if delay is None else delay
        self.min_chars = config.SEARCH_MIN_CHARS if min_chars is None else min_chars
        self._callback = callback
        self._on_clear = on_clear
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not fired yet."""
        return self._task is not None and not self._task.done()

    def submit(self, text: str) -> None:
        """Restart the window for ``text``. Must be called from the event loop."""
        self.cancel()

        if len(text) < self.min_chars:
            if self._on_clear is not None:
                self._on_clear()
            return

        self._task = asyncio.get_running_loop().create_task(self._fire(text))

    def cancel(self) -> None:
        """Drop the scheduled call, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire(self, text: str) -> None:
        await asyncio.sleep(self.delay)
        # Past this point the call belongs to the callback; a later submit()
        # schedules a new timer instead of cancelling this one.
        self._task = None
        logger.debug("debounce window elapsed for %r", text)
        result = self._callback(text)
        if inspect.isawaitable(result):
            await result

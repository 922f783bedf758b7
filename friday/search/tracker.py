"""
Latest-wins tracking of in-flight search requests.

``issue()`` cancels whatever request was current and starts a new one under a
fresh generation number. Results, errors and the "searching" flag are applied
only while the request's generation is still current, so a slow response for
an old query can never overwrite the answer to a newer one, even when the
transport ignores cancellation and completes anyway.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from friday.domain.models import InFlightRequest

logger = logging.getLogger(__name__)


class RequestTracker:
    """
    Parameters
    ----------
    fetch:
        Coroutine function performing the request for a query.
    on_result:
        ``on_result(query, result)`` for the current request's response.
    on_error:
        ``on_error(query, exc)`` for non-cancellation failures of the current
        request. Nothing is retried.
    on_searching:
        ``on_searching(flag)`` whenever the searching indicator changes.
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[Any]],
        on_result: Callable[[str, Any], None],
        on_error: Optional[Callable[[str, Exception], None]] = None,
        on_searching: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._fetch = fetch
        self._on_result = on_result
        self._on_error = on_error
        self._on_searching = on_searching
        self._generation = 0
        self._current: Optional[InFlightRequest] = None
        self.is_searching = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[InFlightRequest]:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, handle: InFlightRequest) -> bool:
        return self._current is handle and handle.generation == self._generation

    def issue(self, query: str) -> InFlightRequest:
        """Supersede the current request with one for ``query``."""
        self._cancel_current()
        self._generation += 1
        handle = InFlightRequest(query=query, generation=self._generation)
        self._current = handle
        self._set_searching(True)
        handle.task = asyncio.get_running_loop().create_task(self._run(handle))
        return handle

    def cancel(self) -> None:
        """Cancel the current request without issuing a new one."""
        self._cancel_current()
        self._generation += 1
        self._current = None
        self._set_searching(False)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _cancel_current(self) -> None:
        handle = self._current
        if handle is not None and handle.task is not None and not handle.done:
            handle.task.cancel()

    def _set_searching(self, flag: bool) -> None:
        if self.is_searching == flag:
            return
        self.is_searching = flag
        if self._on_searching is not None:
            self._on_searching(flag)

    async def _run(self, handle: InFlightRequest) -> None:
        try:
            result = await self._fetch(handle.query)
        except asyncio.CancelledError:
            logger.debug("search for %r cancelled", handle.query)
            return
        except Exception as exc:
            if self.is_current(handle):
                self._set_searching(False)
                logger.warning("search for %r failed: %s", handle.query, exc)
                if self._on_error is not None:
                    self._on_error(handle.query, exc)
            return

        if not self.is_current(handle):
            logger.debug("discarding stale results for %r", handle.query)
            return

        self._set_searching(False)
        self._on_result(handle.query, result)

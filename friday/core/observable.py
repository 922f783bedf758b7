"""
Minimal change-notification base for stateful controllers.

Controllers mutate their public attributes and call ``_notify()``; views
(or tests) register callbacks with ``subscribe()``.
"""

from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class Observable:
    """Tracks listeners and fans out change notifications."""

    def __init__(self) -> None:
        self._listeners: List[Callable[["Observable"], None]] = []

    def subscribe(self, callback: Callable[["Observable"], None]) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                logger.exception("%s listener failed", type(self).__name__)

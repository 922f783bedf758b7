"""
friday.gate — Route a primary action through the geo gate.

``decide()`` is a pure function of the geo state. ``GatedAction`` wraps a
button-like action:

  • geo still loading   → disabled, click ignored (no decision forced)
  • recognized region   → primary handler runs
  • anywhere else       → fallback handler runs (international waitlist);
                          the primary handler is never invoked
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from friday.core.constants import (
    GATE_INTERNATIONAL_TEXT,
    GATE_LOADING_TEXT,
    GATE_UNAVAILABLE_TITLE,
)
from friday.domain.enums import GateDecision
from friday.domain.models import GeoState
from friday.geo.context import GeoContext

logger = logging.getLogger(__name__)


def decide(state: GeoState) -> GateDecision:
    """Map a geo snapshot onto a gate decision."""
    return state.decision


class GatedAction:
    """
    Parameters
    ----------
    geo:
        Read-only geo context.
    primary:
        Handler for visitors in the recognized region. May be async.
    fallback:
        Handler for everyone else (usually opens the international modal).
    label:
        Text shown when the primary action is available.
    international_label:
        Text shown instead when the fallback applies.
    """

    def __init__(
        self,
        geo: GeoContext,
        primary: Optional[Callable[[], Any]],
        fallback: Callable[[], Any],
        label: str = "",
        international_label: str = GATE_INTERNATIONAL_TEXT,
    ) -> None:
        self._geo = geo
        self._primary = primary
        self._fallback = fallback
        self.label_text = label
        self.international_label = international_label
        self.disabled_by_caller = False

    @property
    def decision(self) -> GateDecision:
        return decide(self._geo.state)

    @property
    def disabled(self) -> bool:
        return self.disabled_by_caller or self.decision is GateDecision.SUSPEND

    @property
    def label(self) -> str:
        decision = self.decision
        if decision is GateDecision.SUSPEND:
            return GATE_LOADING_TEXT
        if decision is GateDecision.FALLBACK:
            return self.international_label
        return self.label_text

    @property
    def title(self) -> Optional[str]:
        return GATE_UNAVAILABLE_TITLE if self.decision is GateDecision.FALLBACK else None

    async def trigger(self) -> GateDecision:
        """Handle a click; returns the decision that was applied."""
        decision = self.decision
        if decision is GateDecision.SUSPEND:
            logger.debug("gated action clicked while geo is loading; ignored")
            return decision
        if self.disabled_by_caller:
            return decision

        handler = self._primary if decision is GateDecision.ALLOW else self._fallback
        if handler is not None:
            result = handler()
            if inspect.isawaitable(result):
                await result
        return decision

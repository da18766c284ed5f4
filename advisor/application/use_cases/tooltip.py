from __future__ import annotations

import asyncio
import logging

from advisor.application.use_cases.projection import place_tooltip
from advisor.domain.entities.displayed_set import DisplayedSet
from advisor.domain.entities.views import Rect, Size, TooltipView, Viewport

NO_DESCRIPTION = "No description"


class TooltipController:
    """Hover description for product cards with a fade-out grace period."""

    def __init__(self, displayed: DisplayedSet, grace_seconds: float = 0.2) -> None:
        self._displayed = displayed
        self._grace_seconds = grace_seconds
        self._view = TooltipView(visible=False)
        self._generation = 0
        self._logger = logging.getLogger(__name__)

    @property
    def view(self) -> TooltipView:
        return self._view

    def enter(self, product_id: int, card: Rect, tooltip: Size, viewport: Viewport) -> TooltipView:
        product = self._displayed.find(product_id)
        if product is None:
            self._logger.debug("Tooltip skipped", extra={"product_id": product_id, "reason": "not_in_displayed_set"})
            return self._view

        self._generation += 1

        top, left, placement = place_tooltip(card, tooltip, viewport)
        self._view = TooltipView(
            visible=True,
            product_id=product.id,
            text=product.description or NO_DESCRIPTION,
            top=top,
            left=left,
            placement=placement,
        )
        return self._view

    async def leave(self) -> TooltipView:
        """Hide after the grace delay unless the pointer re-entered a card meanwhile."""
        generation = self._generation
        await asyncio.sleep(self._grace_seconds)
        if generation == self._generation:
            self._view = TooltipView(visible=False)
        return self._view

from __future__ import annotations

import logging
from dataclasses import dataclass

from advisor.application.ports.selection_store import SelectionStorePort
from advisor.application.use_cases.projection import SelectionProjector
from advisor.domain.entities.displayed_set import DisplayedSet
from advisor.domain.entities.product import Product
from advisor.domain.entities.selection_state import SelectionState
from advisor.domain.entities.views import CardView, SelectionView


@dataclass(frozen=True)
class SelectionUpdate:
    """Result of a selection mutation."""

    selection: SelectionView
    cards: tuple[CardView, ...]  # Displayed cards with reconciled selected markers
    changed: bool


class SelectionUseCase:
    """Toggle and remove products; every mutation persists first, then re-renders."""

    def __init__(
        self,
        state: SelectionState,
        displayed: DisplayedSet,
        persistence: SelectionStorePort,
        projector: SelectionProjector,
    ) -> None:
        self._state = state
        self._displayed = displayed
        self._persistence = persistence
        self._projector = projector
        self._logger = logging.getLogger(__name__)
        self.view: SelectionView = projector.render(state)

    def restore(self) -> SelectionView:
        """Load the persisted selection into the store. Best-effort."""
        products = self._persistence.load()
        self._state.replace_all(products)
        self._logger.info("Selection restored", extra={"count": len(self._state)})
        self.view = self._projector.render(self._state)
        return self.view

    def toggle(self, product_id: int) -> SelectionUpdate:
        if product_id in self._state:
            self._state.discard(product_id)
            self._logger.info("Product deselected", extra={"product_id": product_id})
            return self._after_mutation()

        product = self._displayed.find(product_id)
        if product is None:
            # Card no longer matches the displayed set
            self._logger.info(
                "Toggle ignored",
                extra={"product_id": product_id, "reason": "not_in_displayed_set"},
            )
            return SelectionUpdate(selection=self.view, cards=self._cards(), changed=False)

        self._state.add(product)
        self._logger.info("Product selected", extra={"product_id": product_id})
        return self._after_mutation()

    def remove(self, product_id: int) -> SelectionUpdate:
        removed = self._state.discard(product_id)
        if not removed:
            self._logger.debug("Remove of unselected product", extra={"product_id": product_id})
        return self._after_mutation(changed=removed)

    def snapshot(self) -> tuple[Product, ...]:
        return self._state.snapshot()

    def _after_mutation(self, changed: bool = True) -> SelectionUpdate:
        self._persistence.save(self._state.snapshot())
        self.view = self._projector.render(self._state)
        return SelectionUpdate(selection=self.view, cards=self._cards(), changed=changed)

    def _cards(self) -> tuple[CardView, ...]:
        return self._projector.render_cards(self._state, self._displayed.products)

from __future__ import annotations

import itertools
import logging

from advisor.application.exceptions import CatalogUnavailableError
from advisor.application.ports.catalog import CatalogPort
from advisor.application.use_cases.projection import SelectionProjector
from advisor.domain.entities.displayed_set import DisplayedSet
from advisor.domain.entities.selection_state import SelectionState
from advisor.domain.entities.views import CatalogView


class CatalogDisplayUseCase:
    """
    Filter the catalog by category and replace the displayed set.

    Each request takes a monotonically increasing tag. Only the response of
    the latest request is applied; older responses are discarded and reported
    as stale.
    """

    def __init__(
        self,
        catalog: CatalogPort,
        state: SelectionState,
        displayed: DisplayedSet,
        projector: SelectionProjector,
    ) -> None:
        self._catalog = catalog
        self._state = state
        self._displayed = displayed
        self._projector = projector
        self._tags = itertools.count(1)
        self._latest_tag = 0
        self._logger = logging.getLogger(__name__)

    async def display(self, category: str) -> CatalogView:
        tag = next(self._tags)
        self._latest_tag = tag

        try:
            products = await self._catalog.load_products()
        except CatalogUnavailableError as e:
            if tag != self._latest_tag:
                self._logger.info(
                    "Stale catalog failure discarded",
                    extra={"category": category, "request_tag": tag, "reason": str(e)},
                )
                return CatalogView(category=category, cards=(), stale=True)
            raise

        if tag != self._latest_tag:
            self._logger.info(
                "Stale catalog response discarded",
                extra={"category": category, "request_tag": tag, "reason": f"latest={self._latest_tag}"},
            )
            return CatalogView(category=category, cards=(), stale=True)

        filtered = [p for p in products if p.category == category]
        self._displayed.replace(filtered, category=category, request_tag=tag)
        self._logger.info(
            "Catalog displayed",
            extra={"category": category, "request_tag": tag, "count": len(filtered)},
        )
        return self.current()

    def current(self) -> CatalogView:
        return self._projector.render_catalog(self._state, self._displayed.products, self._displayed.category)

    async def categories(self) -> list[str]:
        products = await self._catalog.load_products()
        seen: dict[str, None] = {}
        for product in products:
            if product.category:
                seen.setdefault(product.category, None)
        return list(seen)

from __future__ import annotations

from typing import Iterable

from advisor.domain.entities.product import Product
from advisor.domain.entities.selection_state import SelectionState
from advisor.domain.entities.views import (
    CardView,
    CatalogView,
    ChipView,
    Rect,
    SelectionView,
    Size,
    Viewport,
)

NO_SELECTION_PLACEHOLDER = "No products selected"
NO_CATEGORY_PLACEHOLDER = "Select a category to view products"

TOOLTIP_MARGIN = 8
VIEWPORT_PADDING = 8


class SelectionProjector:
    """Pure projection of selection state into view descriptions."""

    def render(self, state: SelectionState) -> SelectionView:
        if len(state) == 0:
            return SelectionView(chips=(), placeholder=NO_SELECTION_PLACEHOLDER)
        return SelectionView(
            chips=tuple(
                ChipView(
                    id=p.id,
                    label=p.name,
                    brand=p.brand,
                    remove_label=f"Remove {p.name}",
                )
                for p in state.snapshot()
            )
        )

    def reconcile_visible_cards(self, state: SelectionState, displayed_ids: Iterable[int]) -> dict[int, bool]:
        return {product_id: product_id in state for product_id in displayed_ids}

    def render_cards(self, state: SelectionState, products: Iterable[Product]) -> tuple[CardView, ...]:
        products = tuple(products)
        marks = self.reconcile_visible_cards(state, (p.id for p in products))
        return tuple(
            CardView(id=p.id, name=p.name, brand=p.brand, image=p.image, selected=marks[p.id])
            for p in products
        )

    def render_catalog(
        self,
        state: SelectionState,
        products: Iterable[Product],
        category: str | None,
    ) -> CatalogView:
        if category is None:
            return CatalogView(category=None, cards=(), placeholder=NO_CATEGORY_PLACEHOLDER)
        return CatalogView(category=category, cards=self.render_cards(state, products))


def place_tooltip(card: Rect, tooltip: Size, viewport: Viewport) -> tuple[int, int, str]:
    """
    Position a tooltip next to a card in page coordinates.

    Card rect is relative to the viewport. Prefers placement above the card
    and falls back below when there is not enough room above. The left edge
    is centered on the card, then clamped to the viewport; the right clamp
    wins when the tooltip is wider than the viewport.

    Returns:
        (top, left, placement) with placement "above" or "below"
    """
    top = viewport.scroll_y + card.top - tooltip.height - TOOLTIP_MARGIN
    placement = "above"
    if top < viewport.scroll_y + VIEWPORT_PADDING:
        top = viewport.scroll_y + card.bottom + TOOLTIP_MARGIN
        placement = "below"

    left = viewport.scroll_x + card.left + (card.width - tooltip.width) / 2
    min_left = viewport.scroll_x + VIEWPORT_PADDING
    max_left = viewport.scroll_x + viewport.width - tooltip.width - VIEWPORT_PADDING
    if left < min_left:
        left = min_left
    if left > max_left:
        left = max_left

    return round(top), round(left), placement

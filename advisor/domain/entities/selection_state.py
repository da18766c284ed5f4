from __future__ import annotations

from typing import Iterable, Iterator

from advisor.domain.entities.product import Product


class SelectionState:
    """
    Ordered mapping of product id -> Product.

    Membership is the only signal of "selected". Iteration follows insertion
    order, which keeps chip ordering stable between renders.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._items: dict[int, Product] = {}
        for product in products:
            self._items[product.id] = product

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def get(self, product_id: int) -> Product | None:
        return self._items.get(product_id)

    def add(self, product: Product) -> None:
        if product.id in self._items:
            return
        self._items[product.id] = product

    def discard(self, product_id: int) -> bool:
        """Remove the entry if present. Returns True if something was removed."""
        return self._items.pop(product_id, None) is not None

    def replace_all(self, products: Iterable[Product]) -> None:
        self._items = {}
        for product in products:
            self._items[product.id] = product

    def snapshot(self) -> tuple[Product, ...]:
        return tuple(self._items.values())

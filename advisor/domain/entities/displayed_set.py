from __future__ import annotations

from advisor.domain.entities.product import Product


class DisplayedSet:
    """Last applied filtered product list. Used to resolve card ids back to products."""

    def __init__(self) -> None:
        self._products: tuple[Product, ...] = ()
        self._by_id: dict[int, Product] = {}
        self.category: str | None = None
        self.request_tag: int | None = None

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(p.id for p in self._products)

    def replace(self, products: list[Product], category: str | None, request_tag: int | None) -> None:
        self._products = tuple(products)
        self._by_id = {p.id: p for p in self._products}
        self.category = category
        self.request_tag = request_tag

    def find(self, product_id: int) -> Product | None:
        return self._by_id.get(product_id)

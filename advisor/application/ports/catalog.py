from __future__ import annotations

from abc import ABC, abstractmethod

from advisor.domain.entities.product import Product


class CatalogPort(ABC):
    @abstractmethod
    async def load_products(self) -> list[Product]:
        """
        Load the full product list.

        Called fresh on every category change; adapters must not cache.

        Raises:
            CatalogUnavailableError: fetch failed or payload is malformed
        """
        raise NotImplementedError

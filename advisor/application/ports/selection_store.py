from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from advisor.domain.entities.product import Product


class SelectionStorePort(ABC):
    @abstractmethod
    def save(self, products: Iterable[Product]) -> None:
        """Persist the selected products. Must not raise; failures are logged."""
        raise NotImplementedError

    @abstractmethod
    def load(self) -> list[Product]:
        """Load the persisted selection. Returns an empty list on missing or corrupt data."""
        raise NotImplementedError

from __future__ import annotations

import json
import logging
from typing import Iterable

from pydantic import ValidationError

from advisor.application.dto.catalog_payload import PRODUCT_LIST_ADAPTER
from advisor.application.ports.key_value_store import KeyValueStorePort
from advisor.application.ports.selection_store import SelectionStorePort
from advisor.domain.entities.product import Product


class SelectionPersistence(SelectionStorePort):
    """Stores the selected products as a JSON list of full product records under one key."""

    def __init__(self, store: KeyValueStorePort, key: str = "selectedProducts") -> None:
        self._store = store
        self._key = key
        self._logger = logging.getLogger(__name__)

    def save(self, products: Iterable[Product]) -> None:
        try:
            raw = json.dumps([p.to_dict() for p in products], ensure_ascii=False)
            self._store.set(self._key, raw)
        except Exception as e:
            self._logger.warning("Could not save selected products", extra={"key": self._key, "reason": str(e)})

    def load(self) -> list[Product]:
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            self._logger.warning("Could not read selected products", extra={"key": self._key, "reason": str(e)})
            return []

        if not raw:
            self._logger.info("No saved selection", extra={"key": self._key})
            return []

        try:
            items = PRODUCT_LIST_ADAPTER.validate_json(raw)
        except ValidationError as e:
            self._logger.warning(
                "Could not load selected products",
                extra={"key": self._key, "reason": f"{e.error_count()} validation error(s)"},
            )
            return []

        return [item.to_product() for item in items]

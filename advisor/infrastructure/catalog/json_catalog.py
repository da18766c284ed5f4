from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from advisor.application.dto.catalog_payload import CatalogPayloadDTO
from advisor.application.exceptions import CatalogUnavailableError
from advisor.application.ports.catalog import CatalogPort
from advisor.domain.entities.product import Product


class JsonFileCatalog(CatalogPort):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._logger = logging.getLogger(__name__)

    async def load_products(self) -> list[Product]:
        try:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except OSError as e:
            self._logger.error("Catalog file unreadable", extra={"reason": str(e)})
            raise CatalogUnavailableError(f"Catalog file unreadable: {self._path}") from e
        return parse_catalog(raw)


def parse_catalog(raw: str | bytes) -> list[Product]:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise CatalogUnavailableError(f"Catalog: invalid JSON: {e}") from e
    try:
        return CatalogPayloadDTO.model_validate(data).to_products()
    except ValidationError as e:
        raise CatalogUnavailableError(f"Catalog: malformed payload: {e.error_count()} error(s)") from e

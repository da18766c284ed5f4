from __future__ import annotations

import logging

import httpx

from advisor.application.exceptions import CatalogUnavailableError
from advisor.application.ports.catalog import CatalogPort
from advisor.domain.entities.product import Product
from advisor.infrastructure.catalog.json_catalog import parse_catalog


class HttpCatalog(CatalogPort):
    def __init__(self, url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    async def load_products(self) -> list[Product]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self._url)
        except httpx.HTTPError as e:
            self._logger.error("Catalog fetch failed", extra={"reason": str(e)})
            raise CatalogUnavailableError(f"Catalog fetch failed: {e}") from e

        if resp.status_code >= 400:
            self._logger.error("Catalog fetch failed", extra={"status": resp.status_code})
            raise CatalogUnavailableError(f"Catalog fetch failed: {resp.status_code}")

        return parse_catalog(resp.content)

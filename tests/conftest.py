from __future__ import annotations

import asyncio
from typing import Any

import pytest

from advisor.application.exceptions import CompletionUpstreamError
from advisor.application.ports.catalog import CatalogPort
from advisor.application.ports.completion import CompletionPort
from advisor.application.ports.key_value_store import KeyValueStorePort
from advisor.application.use_cases.advisor_session import AdvisorSession
from advisor.domain.entities.product import Product
from advisor.infrastructure.store.memory_store import MemoryKeyValueStore
from advisor.infrastructure.store.selection_persistence import SelectionPersistence

SYSTEM = "You are a test assistant."


class FakeCatalog(CatalogPort):
    def __init__(self, products: list[Product]) -> None:
        self.products = list(products)
        self.calls = 0

    async def load_products(self) -> list[Product]:
        self.calls += 1
        return list(self.products)


class FakeCompletion(CompletionPort):
    def __init__(self, reply: str = "hello", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[dict[str, Any]]] = []
        self.gate: asyncio.Event | None = None

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        self.calls.append([dict(m) for m in messages])
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


class BrokenStore(KeyValueStorePort):
    def get(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")

    def delete(self, key: str) -> None:
        raise OSError("disk unavailable")


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id=1, name="Hydrating Cleanser", brand="CeraVe", category="cleanser",
                image="https://img/1.jpg", description="Gentle cleanser."),
        Product(id=2, name="Foaming Cleanser", brand="La Roche-Posay", category="cleanser",
                image="https://img/2.jpg", description="Oil-free foam."),
        Product(id=3, name="HA Serum", brand="L'Oréal Paris", category="skincare",
                image="https://img/3.jpg", description="Plumping serum."),
        Product(id=4, name="Retinol Serum", brand="L'Oréal Paris", category="skincare",
                image="https://img/4.jpg", description=""),
    ]


@pytest.fixture
def catalog(products) -> FakeCatalog:
    return FakeCatalog(products)


@pytest.fixture
def completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def failing_completion() -> FakeCompletion:
    return FakeCompletion(
        error=CompletionUpstreamError("Worker error: 500 upstream exploded", status_code=500, body="upstream exploded")
    )


@pytest.fixture
def kv_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


@pytest.fixture
def make_session(catalog, completion, kv_store):
    def _make(**overrides) -> AdvisorSession:
        session = AdvisorSession(
            session_id=overrides.get("session_id", "test"),
            catalog=overrides.get("catalog", catalog),
            completion=overrides.get("completion", completion),
            selection_store=SelectionPersistence(overrides.get("store", kv_store)),
            system_instruction=SYSTEM,
            tooltip_grace_seconds=overrides.get("grace", 0.01),
        )
        session.start()
        return session

    return _make

"""
Tests for the picker HTTP API.
"""

from __future__ import annotations

from collections import OrderedDict

import pytest
from fastapi.testclient import TestClient

from advisor.core.config import settings
from advisor.main import app
from advisor.wiring import dependencies
from advisor.wiring.dependencies import get_session


@pytest.fixture
def session(make_session):
    return make_session()


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_placeholder_before_display(client):
    data = client.get("/api/v1/catalog").json()

    assert data["cards"] == []
    assert data["placeholder"] == "Select a category to view products"


def test_categories(client):
    assert client.get("/api/v1/categories").json() == {"categories": ["cleanser", "skincare"]}


def test_display_toggle_and_remove(client):
    cards = client.post("/api/v1/catalog/display", json={"category": "cleanser"}).json()["cards"]
    assert [c["id"] for c in cards] == [1, 2]

    update = client.post("/api/v1/selection/1/toggle").json()
    assert update["changed"] is True
    assert [c["id"] for c in update["selection"]["chips"]] == [1]
    assert {c["id"]: c["selected"] for c in update["cards"]} == {1: True, 2: False}

    update = client.delete("/api/v1/selection/1").json()
    assert update["selection"]["placeholder"] == "No products selected"
    assert {c["id"]: c["selected"] for c in update["cards"]} == {1: False, 2: False}


def test_toggle_unknown_product(client):
    update = client.post("/api/v1/selection/99/toggle").json()

    assert update["changed"] is False
    assert client.get("/api/v1/selection").json()["placeholder"] == "No products selected"


def test_tooltip_enter_and_leave(client):
    client.post("/api/v1/catalog/display", json={"category": "skincare"})
    payload = {
        "product_id": 3,
        "card": {"top": 10, "left": 100, "width": 200, "height": 250},
        "tooltip": {"width": 100, "height": 40},
        "viewport": {"width": 1024, "height": 768},
    }

    shown = client.post("/api/v1/tooltip/enter", json=payload).json()
    assert shown["visible"] is True
    assert shown["text"] == "Plumping serum."
    assert shown["placement"] == "below"

    hidden = client.post("/api/v1/tooltip/leave").json()
    assert hidden["visible"] is False


def test_chat_round_trip(client, session):
    data = client.post("/api/v1/chat", json={"text": "hi"}).json()

    assert [(e["role"], e["text"], e["status"]) for e in data["entries"]] == [
        ("user", "hi", "resolved"),
        ("assistant", "hello", "resolved"),
    ]
    assert data["submit_enabled"] is True
    assert len(session.conversation) == 3
    assert client.get("/api/v1/transcript").json() == data


def test_blank_chat_is_noop(client, completion):
    data = client.post("/api/v1/chat", json={"text": "   "}).json()

    assert data["entries"] == []
    assert completion.calls == []


def test_routine_without_selection(client):
    data = client.post("/api/v1/routine").json()

    assert [(e["role"], e["text"]) for e in data["entries"]] == [
        ("assistant", "Please select at least one product to generate a routine.")
    ]


def test_routine_failure_shows_error_entry(make_session, failing_completion):
    failing = make_session(completion=failing_completion)
    app.dependency_overrides[get_session] = lambda: failing
    try:
        client = TestClient(app)
        client.post("/api/v1/catalog/display", json={"category": "cleanser"})
        client.post("/api/v1/selection/2/toggle")
        data = client.post("/api/v1/routine").json()
    finally:
        app.dependency_overrides.clear()

    last = data["entries"][-1]
    assert last["status"] == "failed"
    assert last["text"].startswith("Error generating routine: ")


def test_invalid_session_id_rejected():
    client = TestClient(app)

    resp = client.get("/api/v1/selection", headers={"X-Session-Id": "../etc"})

    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_session_registry_evicts_least_recently_used(monkeypatch, make_session):
    built = []

    def fake_build(session_id):
        built.append(session_id)
        return make_session(session_id=session_id)

    monkeypatch.setattr(settings, "MAX_SESSIONS", 2)
    monkeypatch.setattr(dependencies, "_sessions", OrderedDict())
    monkeypatch.setattr(dependencies, "build_session", fake_build)

    a = await get_session("a")
    await get_session("b")
    assert await get_session("a") is a
    await get_session("c")

    assert list(dependencies._sessions) == ["a", "c"]
    await get_session("b")
    assert built == ["a", "b", "c", "b"]
    assert len(dependencies._sessions) == 2

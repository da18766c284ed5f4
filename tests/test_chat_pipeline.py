"""
Tests for the chat pipeline: provisional entries, reconciliation and routine requests.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from advisor.application.exceptions import SubmissionInProgressError
from advisor.application.utils.prompts import EMPTY_SELECTION_ADVISORY, THINKING_PLACEHOLDER
from advisor.domain.entities.transcript import EntryStatus

SYSTEM_TURN = {"role": "system", "content": "You are a test assistant."}


@pytest.mark.asyncio
async def test_successful_round_trip(make_session, completion):
    session = make_session()

    entry = await session.send_message("hi")

    assert session.conversation.to_messages() == [
        SYSTEM_TURN,
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
    ]
    assert completion.calls == [[SYSTEM_TURN, {"role": "user", "content": "hi"}]]
    assert entry.status is EntryStatus.resolved
    assert session.transcript.last("assistant").text == "hello"
    assert [(e.role, e.text) for e in session.transcript.entries] == [("user", "hi"), ("assistant", "hello")]
    assert session.submit_enabled is True


@pytest.mark.asyncio
async def test_whole_log_sent_every_time(make_session, completion):
    session = make_session()

    await session.send_message("first")
    await session.send_message("second")

    assert [m["content"] for m in completion.calls[1]] == [
        "You are a test assistant.",
        "first",
        "hello",
        "second",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_message_is_noop(make_session, completion, text):
    session = make_session()

    assert await session.send_message(text) is None

    assert len(session.conversation) == 1
    assert len(session.transcript) == 0
    assert completion.calls == []


@pytest.mark.asyncio
async def test_failed_round_trip_keeps_user_turn_only(make_session, failing_completion):
    session = make_session(completion=failing_completion)

    entry = await session.send_message("hi")

    assert session.conversation.to_messages() == [SYSTEM_TURN, {"role": "user", "content": "hi"}]
    assert entry.status is EntryStatus.failed
    assert entry.text == "Error: Worker error: 500 upstream exploded"
    assert session.transcript.last("assistant") is entry
    assert session.submit_enabled is True


@pytest.mark.asyncio
async def test_placeholder_pending_while_awaiting(make_session, completion):
    completion.gate = asyncio.Event()
    session = make_session()

    task = asyncio.create_task(session.send_message("hi"))
    while not completion.calls:
        await asyncio.sleep(0)

    pending = session.transcript.last("assistant")
    assert pending.status is EntryStatus.pending
    assert pending.text == THINKING_PLACEHOLDER
    assert session.submit_enabled is False

    completion.gate.set()
    entry = await task

    assert entry is pending
    assert pending.text == "hello"
    assert session.submit_enabled is True


@pytest.mark.asyncio
async def test_second_submission_rejected_while_awaiting(make_session, completion):
    completion.gate = asyncio.Event()
    session = make_session()

    task = asyncio.create_task(session.send_message("one"))
    while not completion.calls:
        await asyncio.sleep(0)

    with pytest.raises(SubmissionInProgressError):
        await session.send_message("two")
    with pytest.raises(SubmissionInProgressError):
        await session.generate_routine()

    completion.gate.set()
    await task

    assert [t.role for t in session.conversation.turns] == ["system", "user", "assistant"]
    assert len(completion.calls) == 1


@pytest.mark.asyncio
async def test_empty_routine_rejected_while_awaiting(make_session, completion):
    completion.gate = asyncio.Event()
    session = make_session()

    task = asyncio.create_task(session.send_message("one"))
    while not completion.calls:
        await asyncio.sleep(0)
    entries_before = len(session.transcript.entries)

    with pytest.raises(SubmissionInProgressError):
        await session.generate_routine()

    assert len(session.transcript.entries) == entries_before
    assert all(e.text != EMPTY_SELECTION_ADVISORY for e in session.transcript.entries)

    completion.gate.set()
    await task


@pytest.mark.asyncio
async def test_cancelled_request_fails_entry(make_session, completion):
    completion.gate = asyncio.Event()
    session = make_session()

    task = asyncio.create_task(session.send_message("hi"))
    while not completion.calls:
        await asyncio.sleep(0)
    pending = session.transcript.last("assistant")

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert pending.status is EntryStatus.failed
    assert pending.text == "Error: request cancelled"
    assert session.submit_enabled is True
    assert [t.role for t in session.conversation.turns] == ["system", "user"]


@pytest.mark.asyncio
async def test_routine_with_empty_selection_short_circuits(make_session, completion):
    session = make_session()

    entry = await session.generate_routine()

    assert completion.calls == []
    assert [(e.role, e.text) for e in session.transcript.entries] == [("assistant", EMPTY_SELECTION_ADVISORY)]
    assert entry.status is EntryStatus.resolved
    assert len(session.conversation) == 1


@pytest.mark.asyncio
async def test_routine_embeds_selected_products(make_session, completion, products):
    completion.reply = "1. Cleanse (AM/PM)"
    session = make_session()
    await session.change_category("cleanser")
    session.toggle(2)
    session.toggle(1)

    entry = await session.generate_routine()

    instruction = session.conversation.turns[1].content
    assert "application order" in instruction
    assert "AM/PM" in instruction
    payload = json.loads(instruction.split("SELECTED_PRODUCTS_JSON:\n", 1)[1])
    assert [item["id"] for item in payload] == [2, 1]
    assert set(payload[0]) == {"id", "brand", "name", "category", "image", "description"}
    assert session.transcript.entries[0].text == "Generate routine for 2 selected product(s)."
    assert entry.text == "1. Cleanse (AM/PM)"
    assert session.conversation.turns[-1].content == "1. Cleanse (AM/PM)"


@pytest.mark.asyncio
async def test_routine_failure_message(make_session, failing_completion):
    session = make_session(completion=failing_completion)
    await session.change_category("cleanser")
    session.toggle(1)

    entry = await session.generate_routine()

    assert entry.text.startswith("Error generating routine: Worker error: 500")
    assert [t.role for t in session.conversation.turns] == ["system", "user"]

#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local picker harness (no HTTP).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable session_id for the run (selection persists under STORE_DATA_DIR)
- Drives the same AdvisorSession the API uses
- Prints the catalog cards, selected chips and the chat transcript
"""

import asyncio
import os
import time

from dotenv import load_dotenv

load_dotenv()

from advisor.application.exceptions import CatalogUnavailableError, SubmissionInProgressError  # noqa: E402
from advisor.application.use_cases.advisor_session import AdvisorSession  # noqa: E402
from advisor.domain.entities.views import CatalogView, SelectionView  # noqa: E402
from advisor.wiring.dependencies import build_session  # noqa: E402


def _print_header(session_id: str) -> None:
    print("\nLocal Routine Advisor")
    print("-" * 60)
    print(f"session_id: {session_id}")
    print("Type a message and press Enter to chat.")
    print("Commands: /categories, /show <category>, /pick <id>, /drop <id>,")
    print("          /selected, /routine, /new, /quit, /help")
    print("-" * 60)


def _print_catalog(view: CatalogView) -> None:
    if view.stale:
        print("(stale catalog response ignored)")
        return
    if view.placeholder:
        print(view.placeholder)
        return
    if not view.cards:
        print(f"No products in {view.category!r}")
        return
    for card in view.cards:
        mark = "[x]" if card.selected else "[ ]"
        print(f"  {mark} {card.id:>4}  {card.name} ({card.brand})")


def _print_selection(view: SelectionView) -> None:
    if view.placeholder:
        print(view.placeholder)
        return
    for chip in view.chips:
        print(f"  * {chip.id:>4}  {chip.label} ({chip.brand})")


def _print_last_reply(session: AdvisorSession) -> None:
    entry = session.transcript.last("assistant")
    if entry is not None:
        print(f"\n(assistant, {entry.status.value}) {entry.text}")


def _parse_id(arg: str) -> int | None:
    try:
        return int(arg)
    except ValueError:
        print(f"Not a product id: {arg!r}")
        return None


async def _run() -> None:
    session_id = os.getenv("ADVISOR_SESSION_ID", "local_user_1")
    session = build_session(session_id)
    _print_header(session_id)
    _print_selection(session.selection_view)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd, _, arg = user_text.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            _print_header(session_id)
            continue
        if cmd == "/new":
            session_id = f"local_user_{int(time.time())}"
            session = build_session(session_id)
            print(f"New session_id: {session_id}")
            continue

        try:
            if cmd == "/categories":
                for category in await session.categories():
                    print(f"  - {category}")
            elif cmd == "/show":
                _print_catalog(await session.change_category(arg))
            elif cmd == "/pick":
                product_id = _parse_id(arg)
                if product_id is not None:
                    update = session.toggle(product_id)
                    if not update.changed:
                        print("(product is not on the displayed list)")
                    _print_selection(update.selection)
            elif cmd == "/drop":
                product_id = _parse_id(arg)
                if product_id is not None:
                    _print_selection(session.remove(product_id).selection)
            elif cmd == "/selected":
                _print_selection(session.selection_view)
            elif cmd == "/routine":
                await session.generate_routine()
                _print_last_reply(session)
            elif cmd.startswith("/"):
                print(f"Unknown command: {cmd}")
            else:
                await session.send_message(user_text)
                _print_last_reply(session)
        except CatalogUnavailableError as e:
            print(f"ERROR: catalog unavailable: {e}")
        except SubmissionInProgressError as e:
            print(f"ERROR: {e}")


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()

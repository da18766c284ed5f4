from __future__ import annotations

import json
from typing import Any

from advisor.application.ports.completion import CompletionPort


class MockCompletion(CompletionPort):
    async def complete(self, messages: list[dict[str, Any]]) -> str:
        last = messages[-1]["content"] if messages else ""
        marker = "SELECTED_PRODUCTS_JSON:"
        if marker in last:
            try:
                items = json.loads(last.split(marker, 1)[1])
            except ValueError:
                items = []
            steps = [
                f"{i}. {item.get('brand', '')} {item.get('name', '')} ({'AM' if i % 2 else 'PM'})".strip()
                for i, item in enumerate(items, 1)
            ]
            return "Mock routine:\n" + "\n".join(steps)

        user_turns = sum(1 for m in messages if m.get("role") == "user")
        return f"Mock reply #{user_turns}: {last}"

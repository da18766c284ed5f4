from __future__ import annotations

import json
from typing import Iterable

from advisor.domain.entities.product import Product

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a helpful L'Oréal assistant that provides step-by-step routines and product guidance "
    "when asked. Keep answers concise and user-friendly. Keep conversations to those beauty-related "
    "topics and don't respond to unrelated questions."
)

THINKING_PLACEHOLDER = "...thinking..."
EMPTY_SELECTION_ADVISORY = "Please select at least one product to generate a routine."


def routine_payload(products: Iterable[Product]) -> list[dict]:
    return [
        {
            "id": p.id,
            "brand": p.brand,
            "name": p.name,
            "category": p.category,
            "image": p.image,
            "description": p.description,
        }
        for p in products
    ]


def build_routine_instruction(products: Iterable[Product]) -> str:
    items = routine_payload(products)
    return (
        "Here are the selected products as JSON. Generate a step-by-step routine using these products, "
        "include application order, timing (AM/PM), any compatibility notes or cautions, and a short "
        "explanation for each step. Respond in plain text.\n"
        "\n"
        "SELECTED_PRODUCTS_JSON:\n"
        f"{json.dumps(items, indent=2, ensure_ascii=False)}"
    )


def routine_summary(count: int) -> str:
    return f"Generate routine for {count} selected product(s)."

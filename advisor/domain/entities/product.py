from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    brand: str
    category: str
    image: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChipView:
    id: int
    label: str
    brand: str
    remove_label: str


@dataclass(frozen=True)
class SelectionView:
    chips: tuple[ChipView, ...] = ()
    placeholder: str | None = None


@dataclass(frozen=True)
class CardView:
    id: int
    name: str
    brand: str
    image: str
    selected: bool


@dataclass(frozen=True)
class CatalogView:
    category: str | None
    cards: tuple[CardView, ...] = ()
    placeholder: str | None = None
    stale: bool = False


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    scroll_x: float = 0.0
    scroll_y: float = 0.0


@dataclass(frozen=True)
class TooltipView:
    visible: bool
    product_id: int | None = None
    text: str = ""
    top: int = 0
    left: int = 0
    placement: str | None = None  # "above", "below"

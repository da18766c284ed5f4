from pydantic import BaseModel, Field

from advisor.application.use_cases.selection import SelectionUpdate
from advisor.domain.entities.transcript import EntryStatus, TranscriptEntry
from advisor.domain.entities.views import CardView, CatalogView, Rect, SelectionView, Size, TooltipView, Viewport


class CategoriesResponseSchema(BaseModel):
    categories: list[str]


class DisplayRequestSchema(BaseModel):
    category: str = Field(min_length=1)


class CardSchema(BaseModel):
    id: int
    name: str
    brand: str
    image: str
    selected: bool

    @staticmethod
    def from_view(card: CardView) -> "CardSchema":
        return CardSchema(id=card.id, name=card.name, brand=card.brand, image=card.image, selected=card.selected)


class CatalogResponseSchema(BaseModel):
    category: str | None
    cards: list[CardSchema] = Field(default_factory=list)
    placeholder: str | None = None
    stale: bool = False

    @staticmethod
    def from_view(view: CatalogView) -> "CatalogResponseSchema":
        return CatalogResponseSchema(
            category=view.category,
            cards=[CardSchema.from_view(c) for c in view.cards],
            placeholder=view.placeholder,
            stale=view.stale,
        )


class ChipSchema(BaseModel):
    id: int
    label: str
    brand: str
    remove_label: str


class SelectionResponseSchema(BaseModel):
    chips: list[ChipSchema] = Field(default_factory=list)
    placeholder: str | None = None

    @staticmethod
    def from_view(view: SelectionView) -> "SelectionResponseSchema":
        return SelectionResponseSchema(
            chips=[ChipSchema(id=c.id, label=c.label, brand=c.brand, remove_label=c.remove_label) for c in view.chips],
            placeholder=view.placeholder,
        )


class SelectionUpdateResponseSchema(BaseModel):
    selection: SelectionResponseSchema
    cards: list[CardSchema] = Field(default_factory=list)
    changed: bool

    @staticmethod
    def from_update(update: SelectionUpdate) -> "SelectionUpdateResponseSchema":
        return SelectionUpdateResponseSchema(
            selection=SelectionResponseSchema.from_view(update.selection),
            cards=[CardSchema.from_view(c) for c in update.cards],
            changed=update.changed,
        )


class RectSchema(BaseModel):
    top: float
    left: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class SizeSchema(BaseModel):
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class ViewportSchema(BaseModel):
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    scroll_x: float = 0.0
    scroll_y: float = 0.0


class TooltipRequestSchema(BaseModel):
    product_id: int
    card: RectSchema
    tooltip: SizeSchema
    viewport: ViewportSchema

    def geometry(self) -> tuple[Rect, Size, Viewport]:
        return (
            Rect(**self.card.model_dump()),
            Size(**self.tooltip.model_dump()),
            Viewport(**self.viewport.model_dump()),
        )


class TooltipResponseSchema(BaseModel):
    visible: bool
    product_id: int | None = None
    text: str = ""
    top: int = 0
    left: int = 0
    placement: str | None = None

    @staticmethod
    def from_view(view: TooltipView) -> "TooltipResponseSchema":
        return TooltipResponseSchema(
            visible=view.visible,
            product_id=view.product_id,
            text=view.text,
            top=view.top,
            left=view.left,
            placement=view.placement,
        )


class ChatRequestSchema(BaseModel):
    text: str = ""


class TranscriptEntrySchema(BaseModel):
    id: int
    role: str
    text: str
    status: EntryStatus

    @staticmethod
    def from_entry(entry: TranscriptEntry) -> "TranscriptEntrySchema":
        return TranscriptEntrySchema(id=entry.id, role=entry.role, text=entry.text, status=entry.status)


class TranscriptResponseSchema(BaseModel):
    entries: list[TranscriptEntrySchema]
    submit_enabled: bool

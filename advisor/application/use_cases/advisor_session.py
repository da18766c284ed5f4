from __future__ import annotations

import logging

from advisor.application.ports.catalog import CatalogPort
from advisor.application.ports.completion import CompletionPort
from advisor.application.ports.selection_store import SelectionStorePort
from advisor.application.use_cases.catalog_display import CatalogDisplayUseCase
from advisor.application.use_cases.chat_pipeline import ChatPipeline
from advisor.application.use_cases.projection import SelectionProjector
from advisor.application.use_cases.selection import SelectionUpdate, SelectionUseCase
from advisor.application.use_cases.tooltip import TooltipController
from advisor.domain.entities.conversation_state import ConversationLog
from advisor.domain.entities.displayed_set import DisplayedSet
from advisor.domain.entities.selection_state import SelectionState
from advisor.domain.entities.transcript import Transcript, TranscriptEntry
from advisor.domain.entities.views import CatalogView, Rect, SelectionView, Size, TooltipView, Viewport


class AdvisorSession:
    """Owns the mutable state of one user session and routes control events to use cases."""

    def __init__(
        self,
        session_id: str,
        catalog: CatalogPort,
        completion: CompletionPort,
        selection_store: SelectionStorePort,
        system_instruction: str,
        tooltip_grace_seconds: float = 0.2,
    ) -> None:
        self.session_id = session_id
        self.selection = SelectionState()
        self.displayed = DisplayedSet()
        self.conversation = ConversationLog(system_instruction)
        self.transcript = Transcript()

        projector = SelectionProjector()
        self._selection = SelectionUseCase(
            state=self.selection,
            displayed=self.displayed,
            persistence=selection_store,
            projector=projector,
        )
        self._catalog = CatalogDisplayUseCase(
            catalog=catalog,
            state=self.selection,
            displayed=self.displayed,
            projector=projector,
        )
        self._chat = ChatPipeline(completion=completion, conversation=self.conversation, transcript=self.transcript)
        self._tooltip = TooltipController(displayed=self.displayed, grace_seconds=tooltip_grace_seconds)
        self._logger = logging.getLogger(__name__)

    def start(self) -> SelectionView:
        self._logger.info("Session started", extra={"session_id": self.session_id})
        return self._selection.restore()

    @property
    def selection_view(self) -> SelectionView:
        return self._selection.view

    @property
    def catalog_view(self) -> CatalogView:
        return self._catalog.current()

    @property
    def tooltip_view(self) -> TooltipView:
        return self._tooltip.view

    @property
    def submit_enabled(self) -> bool:
        return self._chat.submit_enabled

    async def categories(self) -> list[str]:
        return await self._catalog.categories()

    async def change_category(self, category: str) -> CatalogView:
        return await self._catalog.display(category)

    def toggle(self, product_id: int) -> SelectionUpdate:
        return self._selection.toggle(product_id)

    def remove(self, product_id: int) -> SelectionUpdate:
        return self._selection.remove(product_id)

    def hover(self, product_id: int, card: Rect, tooltip: Size, viewport: Viewport) -> TooltipView:
        return self._tooltip.enter(product_id, card, tooltip, viewport)

    async def unhover(self) -> TooltipView:
        return await self._tooltip.leave()

    async def send_message(self, text: str) -> TranscriptEntry | None:
        return await self._chat.submit(text)

    async def generate_routine(self) -> TranscriptEntry:
        return await self._chat.generate_routine(self._selection.snapshot())

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from advisor.application.exceptions import SubmissionInProgressError
from advisor.application.ports.completion import CompletionPort
from advisor.application.utils.prompts import (
    EMPTY_SELECTION_ADVISORY,
    THINKING_PLACEHOLDER,
    build_routine_instruction,
    routine_summary,
)
from advisor.domain.entities.conversation_state import ROLE_ASSISTANT, ROLE_USER, ConversationLog
from advisor.domain.entities.product import Product
from advisor.domain.entities.transcript import EntryStatus, Transcript, TranscriptEntry


class ChatPipeline:
    """
    Submit a turn to the completion service and reconcile the provisional reply.

    Per submission: the user turn goes into the conversation log, a pending
    assistant entry goes into the transcript, the whole log is sent, and the
    pending entry is resolved with the reply or failed with an error message.
    Failed exchanges never add an assistant turn to the log.
    """

    def __init__(self, completion: CompletionPort, conversation: ConversationLog, transcript: Transcript) -> None:
        self._completion = completion
        self._conversation = conversation
        self._transcript = transcript
        self._in_flight = False
        self._logger = logging.getLogger(__name__)

    @property
    def submit_enabled(self) -> bool:
        return not self._in_flight

    async def submit(self, text: str) -> TranscriptEntry | None:
        """Send a chat message. Blank input is ignored and returns None."""
        content = (text or "").strip()
        if not content:
            return None
        return await self._exchange(user_content=content, visible_text=content, error_prefix="Error")

    async def generate_routine(self, products: Iterable[Product]) -> TranscriptEntry:
        """Ask for a routine built from the selected products."""
        self._ensure_idle()
        items = tuple(products)
        if not items:
            self._logger.info("Routine skipped", extra={"reason": "empty_selection"})
            return self._transcript.append(ROLE_ASSISTANT, EMPTY_SELECTION_ADVISORY)

        return await self._exchange(
            user_content=build_routine_instruction(items),
            visible_text=routine_summary(len(items)),
            error_prefix="Error generating routine",
        )

    def _ensure_idle(self) -> None:
        if self._in_flight:
            raise SubmissionInProgressError("A message is already being sent; wait for the reply.")

    async def _exchange(self, user_content: str, visible_text: str, error_prefix: str) -> TranscriptEntry:
        self._ensure_idle()

        self._in_flight = True
        try:
            self._conversation.append_user(user_content)
            self._transcript.append(ROLE_USER, visible_text)
            pending = self._transcript.append(ROLE_ASSISTANT, THINKING_PLACEHOLDER, status=EntryStatus.pending)

            try:
                reply = await self._completion.complete(self._conversation.to_messages())
            except asyncio.CancelledError:
                self._logger.warning("Completion cancelled", extra={"turn_id": pending.id, "status": "failed"})
                pending.fail(f"{error_prefix}: request cancelled")
                raise
            except Exception as e:
                self._logger.error(
                    "Completion failed",
                    extra={"turn_id": pending.id, "status": "failed", "reason": str(e)},
                )
                pending.fail(f"{error_prefix}: {e}")
                return pending

            pending.resolve(reply)
            self._conversation.append_assistant(reply)
            self._logger.info(
                "Completion received",
                extra={"turn_id": pending.id, "status": "resolved", "log_length": len(self._conversation)},
            )
            return pending
        finally:
            self._in_flight = False

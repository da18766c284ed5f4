from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from advisor.application.exceptions import CompletionContractError, CompletionUpstreamError
from advisor.application.ports.completion import CompletionPort
from advisor.core.config import settings


class OpenAICompletion(CompletionPort):
    """
    OpenAI-backed adapter implementing CompletionPort.

    Raises:
        CompletionUpstreamError: networking/provider failures
        CompletionContractError: empty reply
    """

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        self.client = client or AsyncOpenAI(api_key=settings.OPENAI_API_KEY)

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=messages,
                temperature=settings.OPENAI_TEMPERATURE,
                max_tokens=settings.OPENAI_MAX_TOKENS,
            )
        except Exception as e:
            raise CompletionUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise CompletionContractError("LLM returned empty response text.")

        return content

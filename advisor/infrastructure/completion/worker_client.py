from __future__ import annotations

import logging
from typing import Any

import httpx

from advisor.application.exceptions import CompletionContractError, CompletionUpstreamError
from advisor.application.ports.completion import CompletionPort


class WorkerCompletionClient(CompletionPort):
    """
    Completion proxy speaking the worker contract.

    Request body: {"messages": [...]}; success body: {"content": "..."}.
    Non-success responses surface their status and body verbatim.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self._endpoint, json={"messages": messages})
        except httpx.HTTPError as e:
            raise CompletionUpstreamError(f"Worker request failed: {e}") from e

        if resp.is_error:
            error_body = resp.text
            self._logger.error(
                "Worker returned error",
                extra={"status": resp.status_code, "reason": error_body[:200]},
            )
            raise CompletionUpstreamError(
                f"Worker error: {resp.status_code} {error_body}",
                status_code=resp.status_code,
                body=error_body,
            )

        try:
            data = resp.json()
        except ValueError:
            snippet = resp.text[:200].replace("\n", " ")
            raise CompletionContractError(f"Worker: invalid JSON. Snippet: {snippet!r}")

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, str):
            raise CompletionContractError("Worker: response has no 'content' string.")
        return content

from abc import ABC, abstractmethod
from typing import Any


class CompletionPort(ABC):
    @abstractmethod
    async def complete(self, messages: list[dict[str, Any]]) -> str:
        """
        Send the full conversation and return the assistant reply text.

        Args:
            messages: Every turn in order, starting with the system instruction.
                Each item is {"role": ..., "content": ...}.

        Returns:
            Assistant reply text

        Raises:
            CompletionUpstreamError: network failure or non-success response
            CompletionContractError: response without a usable content string
        """
        raise NotImplementedError

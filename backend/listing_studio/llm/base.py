from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_studio.llm.events import EventSink
    from listing_studio.schemas.generation import CompletionResult


class CompletionClient(ABC):
    @abstractmethod
    async def complete(
        self, system_prompt: str, user_prompt: str, max_tokens: int
    ) -> CompletionResult: ...

    @abstractmethod
    async def stream(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        sink: EventSink,
    ) -> CompletionResult: ...

    @property
    @abstractmethod
    def model_name(self) -> str: ...

    async def aclose(self) -> None:
        """Release transport resources. Clients without any can keep this no-op."""
        return None

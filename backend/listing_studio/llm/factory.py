from __future__ import annotations

from listing_studio.llm.base import CompletionClient

_client_instance: CompletionClient | None = None


def get_completion_client() -> CompletionClient:
    """Process-wide client, so all generations share one connection pool."""
    global _client_instance
    if _client_instance is None:
        from listing_studio.llm.claude_client import ClaudeClient

        _client_instance = ClaudeClient()
    return _client_instance


async def close_completion_client() -> None:
    global _client_instance
    if _client_instance is not None:
        await _client_instance.aclose()
        _client_instance = None

from __future__ import annotations

from fastapi import HTTPException

from listing_studio.config import settings
from listing_studio.llm.base import CompletionClient
from listing_studio.llm.factory import get_completion_client
from listing_studio.schemas.generation import AgentInfo
from listing_studio.utils.exceptions import MissingApiKeyError


def get_client() -> CompletionClient:
    try:
        return get_completion_client()
    except MissingApiKeyError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def get_agent_info() -> AgentInfo:
    return AgentInfo(
        name=settings.agent_name,
        phone=settings.agent_phone,
        email=settings.agent_email,
        brokerage=settings.brokerage_name,
    )

"""Reasoning-engine boundary.

The driver only depends on ``ReasoningEngine``. ``ChatModelEngine`` adapts any
langchain chat model; ``build_chat_model`` builds the default OpenAI-compatible
client from settings.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_openai import ChatOpenAI

from shared.capabilities.base import CatalogEntry
from shared.config.settings import EngineSettings
from shared.errors import AgentError, TransportError

LOGGER = logging.getLogger(__name__)


class ReasoningEngine(Protocol):
    """Request/response boundary to the language model service."""

    async def respond(
        self,
        system_prompt: str,
        messages: Sequence[BaseMessage],
        catalog: Sequence[CatalogEntry],
    ) -> AIMessage:
        ...


class ChatModelEngine:
    """Adapter from a langchain ``BaseChatModel`` to ``ReasoningEngine``."""

    def __init__(self, model: BaseChatModel):
        self.model = model

    async def respond(
        self,
        system_prompt: str,
        messages: Sequence[BaseMessage],
        catalog: Sequence[CatalogEntry],
    ) -> AIMessage:
        to_send: List[BaseMessage] = [SystemMessage(content=system_prompt), *messages]
        tools = [entry.to_openai_tool() for entry in catalog]
        try:
            runnable = self.model.bind_tools(tools) if tools else self.model
            response = await runnable.ainvoke(to_send)
        except Exception as e:
            LOGGER.error(f"Reasoning engine request failed: {type(e).__name__}: {e}")
            raise TransportError(
                f"Reasoning engine request failed: {e}",
                user_message="Failed to reach the language model service",
            ) from e

        if not isinstance(response, AIMessage):
            raise TransportError(f"Unexpected response type from engine: {type(response).__name__}")
        return response


def _chat_kwargs(settings: EngineSettings) -> Dict[str, Any]:
    if not settings.api_key:
        raise AgentError(
            f"Missing API key for model {settings.model}",
            user_message="Set MODEL_API_KEY (or CLAUDE_API_KEY) in .env",
        )
    kwargs: Dict[str, Any] = {
        "model": settings.model,
        "api_key": settings.api_key,
        "max_tokens": settings.max_tokens,
        "temperature": settings.temperature,
        "timeout": settings.timeout_seconds,
    }
    if settings.base_url:
        kwargs["base_url"] = settings.base_url
    return kwargs


def build_chat_model(settings: EngineSettings) -> ChatOpenAI:
    """Construct the OpenAI-compatible chat client for ``settings``."""
    return ChatOpenAI(**_chat_kwargs(settings))


def build_engine(settings: EngineSettings) -> ChatModelEngine:
    return ChatModelEngine(build_chat_model(settings))

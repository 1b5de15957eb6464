"""Conversation driver, tool dispatcher and reasoning-engine boundary."""

from .blocks import ToolCall, ToolResult, extract_text, parse_response
from .dispatcher import ToolDispatcher
from .driver import (
    COMPLETION_NOTICE,
    DEFAULT_MAX_ROUNDS,
    ConversationDriver,
    ConversationState,
    DriverState,
)
from .engine import ChatModelEngine, ReasoningEngine, build_chat_model, build_engine

__all__ = [
    "ToolCall",
    "ToolResult",
    "extract_text",
    "parse_response",
    "ToolDispatcher",
    "COMPLETION_NOTICE",
    "DEFAULT_MAX_ROUNDS",
    "ConversationDriver",
    "ConversationState",
    "DriverState",
    "ChatModelEngine",
    "ReasoningEngine",
    "build_chat_model",
    "build_engine",
]

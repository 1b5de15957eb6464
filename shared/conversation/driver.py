"""Round-trip conversation driver.

Explicit state machine::

    SENDING -> AWAITING_RESPONSE -> DISPATCHING -> SENDING ...
                                 \\-> DONE

The same driver serves capability agents (tools) and orchestration agents
(sub-agents); only the registry contents differ.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, messages_to_dict

from shared.audit.session import AuditSession
from shared.capabilities.registry import CapabilityRegistry
from shared.context.compactor import ContextCompactor
from shared.conversation.blocks import ToolCall, parse_response
from shared.conversation.dispatcher import ToolDispatcher
from shared.conversation.engine import ReasoningEngine
from shared.utils.logging_utils import log_round

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 100
COMPLETION_NOTICE = "Task completed successfully"


class DriverState(enum.Enum):
    SENDING = "sending"
    AWAITING_RESPONSE = "awaiting_response"
    DISPATCHING = "dispatching"
    DONE = "done"


@dataclass
class ConversationState:
    """Mutable per-task state; owned by one driver for one task."""

    messages: List[BaseMessage]
    state: DriverState = DriverState.SENDING
    rounds: int = 0
    last_text: Optional[str] = None
    response: Optional[AIMessage] = None
    pending: List[ToolCall] = field(default_factory=list)
    final_text: Optional[str] = None

    @classmethod
    def for_task(cls, task: str) -> "ConversationState":
        return cls(messages=[HumanMessage(content=task)])


class ConversationDriver:
    """Drives one task through the reasoning engine until it returns plain text."""

    def __init__(
        self,
        name: str,
        engine: ReasoningEngine,
        registry: CapabilityRegistry,
        system_prompt: str,
        session: AuditSession,
        compactor: Optional[ContextCompactor] = None,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        self.name = name
        self.engine = engine
        self.registry = registry
        self.system_prompt = system_prompt
        self.session = session
        self.max_rounds = max_rounds
        self.dispatcher = ToolDispatcher(registry, session, compactor)
        self.catalog = registry.catalog()

    async def execute(self, task: str) -> str:
        """Run ``task`` to completion and return the final text.

        Raises:
            TransportError: the reasoning engine failed
            ContractViolation: the engine response broke the call-id contract
        """
        LOGGER.info(f"[{self.name}] Starting task: {task[:200]}")
        state = ConversationState.for_task(task)
        while state.state is not DriverState.DONE:
            await self.step(state)
        LOGGER.info(f"[{self.name}] Finished after {state.rounds} round(s)")
        return state.final_text or COMPLETION_NOTICE

    async def step(self, state: ConversationState) -> ConversationState:
        """Advance ``state`` by one transition."""
        if state.state is DriverState.SENDING:
            if state.rounds >= self.max_rounds:
                LOGGER.warning(
                    f"[{self.name}] Round ceiling reached ({self.max_rounds}); stopping"
                )
                state.final_text = state.last_text or COMPLETION_NOTICE
                state.state = DriverState.DONE
            else:
                state.state = DriverState.AWAITING_RESPONSE

        elif state.state is DriverState.AWAITING_RESPONSE:
            state.rounds += 1
            log_round(LOGGER, self.name, state.rounds, self.max_rounds, len(state.messages))
            response = await self.engine.respond(self.system_prompt, state.messages, self.catalog)
            self.session.write(self.name, {"round": state.rounds, **messages_to_dict([response])[0]})

            calls, text = parse_response(response)
            if text is not None:
                state.last_text = text
            state.response = response
            if calls:
                # Text sent alongside tool calls is kept only as a fallback
                state.pending = calls
                state.state = DriverState.DISPATCHING
            else:
                state.final_text = text or state.last_text or COMPLETION_NOTICE
                state.state = DriverState.DONE

        elif state.state is DriverState.DISPATCHING:
            results = await self.dispatcher.dispatch(state.pending)
            state.messages.append(state.response)
            state.messages.extend(result.to_message() for result in results)
            state.pending = []
            state.response = None
            state.state = DriverState.SENDING

        return state

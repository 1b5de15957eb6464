"""Orchestrator: a conversation driver whose capabilities are sub-agents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from shared.audit.session import AuditSession
from shared.capabilities.base import SubAgent
from shared.capabilities.registry import CapabilityRegistry
from shared.config.settings import ContextSettings, GovernanceSettings
from shared.context.compactor import ContextCompactor
from shared.conversation.driver import ConversationDriver
from shared.conversation.engine import ReasoningEngine
from shared.utils.prompt_builder import PromptBuilder

LOGGER = logging.getLogger(__name__)

PROMPT_TEMPLATE = Path(__file__).parent / "prompt_templates" / "orchestrator.jinja2"


class OrchestratorAgent:
    """Routes a task to the registered sub-agents and returns the final answer."""

    name = "orchestrator"

    def __init__(
        self,
        engine: ReasoningEngine,
        session: AuditSession,
        agents: Iterable[SubAgent],
        governance: Optional[GovernanceSettings] = None,
        context: Optional[ContextSettings] = None,
    ):
        governance = governance or GovernanceSettings()
        self.registry: CapabilityRegistry[SubAgent] = CapabilityRegistry(agents)
        self.driver = ConversationDriver(
            name=self.name,
            engine=engine,
            registry=self.registry,
            system_prompt=PromptBuilder(PROMPT_TEMPLATE).render(self.registry.catalog()),
            session=session,
            compactor=ContextCompactor(context or ContextSettings()),
            max_rounds=governance.max_rounds,
        )
        LOGGER.info(f"Orchestrator ready with agents: {self.registry.names()}")

    async def execute(self, task: str) -> str:
        return await self.driver.execute(task)

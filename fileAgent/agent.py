"""File agent: a sub-agent that runs its own conversation over the file tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fileAgent.tools import build_file_tools
from shared.audit.session import AuditSession
from shared.capabilities.base import SubAgent
from shared.capabilities.registry import CapabilityRegistry
from shared.config.settings import ContextSettings, GovernanceSettings
from shared.context.compactor import ContextCompactor
from shared.conversation.driver import ConversationDriver
from shared.conversation.engine import ReasoningEngine
from shared.utils.prompt_builder import PromptBuilder

LOGGER = logging.getLogger(__name__)

PROMPT_TEMPLATE = Path(__file__).parent / "prompt_templates" / "file_agent.jinja2"


class FileAgent(SubAgent):
    """Delegation target for everything that touches the filesystem or shell."""

    name = "file_agent"
    description = (
        "Handles file operations: reading, writing and editing files, listing "
        "directories, searching file contents and running shell commands."
    )
    task_description = "The file operation task to perform"

    def __init__(
        self,
        engine: ReasoningEngine,
        session: AuditSession,
        governance: Optional[GovernanceSettings] = None,
        context: Optional[ContextSettings] = None,
    ):
        governance = governance or GovernanceSettings()
        context = context or ContextSettings()
        self.registry = CapabilityRegistry(build_file_tools(session, governance, context))
        self.driver = ConversationDriver(
            name=self.name,
            engine=engine,
            registry=self.registry,
            system_prompt=PromptBuilder(PROMPT_TEMPLATE).render(self.registry.catalog()),
            session=session,
            compactor=ContextCompactor(context),
            max_rounds=governance.max_rounds,
        )

    async def execute(self, task: str) -> str:
        LOGGER.info(f"FileAgent executing task: {task[:200]}")
        return await self.driver.execute(task)

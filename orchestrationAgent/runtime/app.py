"""Application assembly for the orchestrator.

Builds the reasoning engine, the audit session, the file agent and the
orchestrator from settings, and exposes ``process_message`` as the single
entry point for one task.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from fileAgent.agent import FileAgent
from orchestrationAgent.agent import OrchestratorAgent
from shared.audit.session import AuditSession
from shared.config.settings import Settings, get_settings
from shared.conversation.engine import ReasoningEngine, build_engine
from shared.errors import AgentError
from shared.utils.logging_utils import log_error

LOGGER = logging.getLogger(__name__)


def build_orchestrator(
    settings: Optional[Settings] = None,
    engine: Optional[ReasoningEngine] = None,
    session: Optional[AuditSession] = None,
) -> OrchestratorAgent:
    """Wire the orchestrator and its file agent.

    Args:
        settings: Application settings (loaded from .env if None)
        engine: Reasoning engine shared by both agents (built from settings if None)
        session: Audit session (built from settings if None)
    """
    settings = settings or get_settings()
    engine = engine or build_engine(settings.engine)
    session = session or AuditSession.from_settings(settings.audit)

    file_agent = FileAgent(engine, session, settings.governance, settings.context)
    return OrchestratorAgent(
        engine,
        session,
        [file_agent],
        governance=settings.governance,
        context=settings.context,
    )


async def process_message(
    task: str,
    settings: Optional[Settings] = None,
    engine: Optional[ReasoningEngine] = None,
    session: Optional[AuditSession] = None,
    context: Optional[Dict[str, Any]] = None,
) -> str:
    """Run one task end to end and return the user-visible result.

    The audit session is wiped before the task starts. Fatal errors are
    returned as their message text rather than raised.
    """
    settings = settings or get_settings()
    context = context or {"session_id": "standalone", "space": "default"}
    LOGGER.info(f"Processing message (context: {context})")

    try:
        session = session or AuditSession.from_settings(settings.audit)
        session.start_task()
        orchestrator = build_orchestrator(settings, engine, session)
        result = await orchestrator.execute(task)
    except AgentError as e:
        log_error(LOGGER, e, context="process_message")
        return str(e)

    LOGGER.info("Task completed successfully")
    return result


def process_message_sync(task: str, context: Optional[Dict[str, Any]] = None) -> str:
    """Blocking wrapper around ``process_message`` for embedding hosts."""
    return asyncio.run(process_message(task, context=context))

"""Concurrent, order-preserving tool dispatch.

All calls of one round start together and are joined before the round ends.
A failing call never affects its siblings: its outcome becomes a sentinel
ToolResult instead of a dispatcher-level error.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from shared.audit.session import AuditSession
from shared.capabilities.registry import CapabilityRegistry
from shared.context.compactor import ContextCompactor
from shared.conversation.blocks import ToolCall, ToolResult
from shared.errors import CapabilityNotFound

LOGGER = logging.getLogger(__name__)

EXECUTION_FAILED = "Execution failed: {}"


class ToolDispatcher:
    """Runs a batch of ToolCalls against a registry."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        session: AuditSession,
        compactor: Optional[ContextCompactor] = None,
    ):
        self.registry = registry
        self.session = session
        self.compactor = compactor or ContextCompactor()

    async def dispatch(self, calls: Sequence[ToolCall]) -> List[ToolResult]:
        """Return one ToolResult per call, in the order the calls were issued."""
        if not calls:
            return []
        LOGGER.info(f"Dispatching {len(calls)} tool call(s): {[c.name for c in calls]}")
        # gather() keeps argument order regardless of completion order
        outputs = await asyncio.gather(*(self._run_one(call) for call in calls))
        return [
            ToolResult(
                id=call.id,
                name=call.name,
                raw_output=output,
                compacted_output=self.compactor.compact(call.name, output),
            )
            for call, output in zip(calls, outputs)
        ]

    async def _run_one(self, call: ToolCall) -> str:
        record: Dict[str, Any] = {
            "tool": call.name,
            "tool_use_id": call.id,
            "arguments": call.payload,
            "timestamp": datetime.now().isoformat(),
        }

        capability = self.registry.get(call.name)
        if capability is None:
            output = str(CapabilityNotFound(call.name))
            LOGGER.warning(output)
            record["error"] = output
        else:
            try:
                output = await capability.call(call.payload)
                record["result"] = output
            except Exception as e:
                output = EXECUTION_FAILED.format(e)
                record["error"] = output

        self.session.write(call.name, record)
        return output

"""OrchestrationAgent - task routing and delegation.

The orchestrator does not execute concrete work. It receives a task,
delegates it to sub-agents (currently the file agent) through the same
conversation driver the sub-agents use, and reports the final answer.
"""

from .agent import OrchestratorAgent

__all__ = ["OrchestratorAgent"]

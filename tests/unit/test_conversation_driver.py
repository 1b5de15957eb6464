"""Unit tests for ConversationDriver with scripted engines."""

import asyncio

import pytest
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage
from pydantic import BaseModel

from conftest import ScriptedEngine, ai_calls, ai_text
from shared.capabilities.base import Tool
from shared.capabilities.registry import CapabilityRegistry
from shared.conversation.driver import (
    COMPLETION_NOTICE,
    ConversationDriver,
    ConversationState,
    DriverState,
)
from shared.errors import ContractViolation, TransportError


class DelayArgs(BaseModel):
    label: str
    delay: float = 0.0


class DelayTool(Tool):
    name = "delay"
    description = "Returns its label after a delay"
    args_model = DelayArgs

    async def execute(self, params):
        await asyncio.sleep(params.delay)
        return f"done {params.label}"


def make_driver(engine, session, max_rounds=100):
    return ConversationDriver(
        name="file_agent",
        engine=engine,
        registry=CapabilityRegistry([DelayTool()]),
        system_prompt="system",
        session=session,
        max_rounds=max_rounds,
    )


class TestTermination:
    @pytest.mark.asyncio
    async def test_plain_text_returns_immediately(self, session):
        engine = ScriptedEngine([ai_text("All done")])
        assert await make_driver(engine, session).execute("do it") == "All done"
        assert engine.calls == 1

    @pytest.mark.asyncio
    async def test_round_ceiling_returns_completion_notice(self, session):
        engine = ScriptedEngine([ai_calls(("delay", {"label": "x"}, "call_1"))])

        result = await make_driver(engine, session, max_rounds=100).execute("loop forever")

        assert result == COMPLETION_NOTICE
        assert engine.calls == 100

    @pytest.mark.asyncio
    async def test_round_ceiling_prefers_last_seen_text(self, session):
        engine = ScriptedEngine([ai_calls(("delay", {"label": "x"}, "call_1"), text="working on it")])
        result = await make_driver(engine, session, max_rounds=3).execute("task")
        assert result == "working on it"
        assert engine.calls == 3

    @pytest.mark.asyncio
    async def test_empty_response_ends_with_notice(self, session):
        engine = ScriptedEngine([AIMessage(content="")])
        assert await make_driver(engine, session).execute("task") == COMPLETION_NOTICE


class TestRounds:
    @pytest.mark.asyncio
    async def test_results_fed_back_in_call_order(self, session):
        engine = ScriptedEngine(
            [
                ai_calls(
                    ("delay", {"label": "c1", "delay": 0.05}, "id1"),
                    ("delay", {"label": "c2", "delay": 0.0}, "id2"),
                    ("delay", {"label": "c3", "delay": 0.02}, "id3"),
                ),
                ai_text("finished"),
            ]
        )

        assert await make_driver(engine, session).execute("task") == "finished"

        second = engine.requests[1]["messages"]
        assert isinstance(second[0], HumanMessage)
        assert isinstance(second[1], AIMessage)
        tool_messages = second[2:]
        assert all(isinstance(m, ToolMessage) for m in tool_messages)
        assert [m.tool_call_id for m in tool_messages] == ["id1", "id2", "id3"]
        assert [m.content for m in tool_messages] == ["done c1", "done c2", "done c3"]

    @pytest.mark.asyncio
    async def test_generated_call_id_pairs_with_tool_result(self, session):
        engine = ScriptedEngine(
            [ai_calls(("delay", {"label": "c1"}, None)), ai_text("finished")]
        )

        assert await make_driver(engine, session).execute("task") == "finished"

        assistant, result = engine.requests[1]["messages"][1:3]
        assert assistant.tool_calls[0]["id"]
        assert result.tool_call_id == assistant.tool_calls[0]["id"]

    @pytest.mark.asyncio
    async def test_text_alongside_tool_calls_is_not_returned(self, session):
        engine = ScriptedEngine(
            [
                ai_calls(("delay", {"label": "a"}, "id1"), text="Let me check"),
                ai_text("Final answer"),
            ]
        )
        assert await make_driver(engine, session).execute("task") == "Final answer"
        assert engine.calls == 2

    @pytest.mark.asyncio
    async def test_unknown_capability_is_not_fatal(self, session):
        engine = ScriptedEngine([ai_calls(("teleport", {}, "id1")), ai_text("recovered")])

        assert await make_driver(engine, session).execute("task") == "recovered"

        fed_back = engine.requests[1]["messages"][-1]
        assert fed_back.content == "Capability not found: teleport"

    @pytest.mark.asyncio
    async def test_catalog_sent_every_round(self, session):
        engine = ScriptedEngine([ai_calls(("delay", {"label": "a"}, "id1")), ai_text("ok")])
        await make_driver(engine, session).execute("task")
        assert [r["catalog"] for r in engine.requests] == [["delay"], ["delay"]]

    @pytest.mark.asyncio
    async def test_engine_responses_are_audited(self, session, audit_sink):
        engine = ScriptedEngine([ai_calls(("delay", {"label": "a"}, "id1")), ai_text("ok")])
        await make_driver(engine, session).execute("task")
        assert audit_sink.sources() == ["file_agent", "delay", "file_agent"]


class TestFatalErrors:
    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, session):
        class BrokenEngine:
            async def respond(self, system_prompt, messages, catalog):
                raise TransportError("connection refused")

        with pytest.raises(TransportError):
            await make_driver(BrokenEngine(), session).execute("task")

    @pytest.mark.asyncio
    async def test_duplicate_call_ids_violate_contract(self, session):
        engine = ScriptedEngine(
            [ai_calls(("delay", {"label": "a"}, "same"), ("delay", {"label": "b"}, "same"))]
        )
        with pytest.raises(ContractViolation):
            await make_driver(engine, session).execute("task")


class TestStateMachine:
    @pytest.mark.asyncio
    async def test_step_transitions(self, session):
        engine = ScriptedEngine([ai_calls(("delay", {"label": "a"}, "id1")), ai_text("ok")])
        driver = make_driver(engine, session)
        state = ConversationState.for_task("task")

        assert (await driver.step(state)).state is DriverState.AWAITING_RESPONSE
        assert (await driver.step(state)).state is DriverState.DISPATCHING
        assert [c.id for c in state.pending] == ["id1"]
        assert (await driver.step(state)).state is DriverState.SENDING
        assert len(state.messages) == 3
        await driver.step(state)
        assert (await driver.step(state)).state is DriverState.DONE
        assert state.final_text == "ok"
        assert state.rounds == 2

"""Unit tests for the audit session and sinks."""

import json

from shared.audit.session import AuditSession, FileAuditSink, MemoryAuditSink, message_filename
from shared.config.settings import AuditSettings


class TestSequencing:
    def test_sequence_increases_across_sources(self, session, audit_sink):
        assert session.write("orchestrator", {"a": 1}) == 1
        assert session.write("read", {"b": 2}) == 2
        assert session.write("file_agent", {"c": 3}) == 3
        assert [seq for seq, _, _ in audit_sink.entries] == [1, 2, 3]
        assert audit_sink.sources() == ["orchestrator", "read", "file_agent"]

    def test_start_task_resets_and_clears(self, session, audit_sink):
        session.write("orchestrator", {})
        session.write("orchestrator", {})

        session.start_task()

        assert audit_sink.entries == []
        assert session.write("orchestrator", {}) == 1


class TestFileSink:
    def test_filename_format(self):
        assert message_filename("file_agent", 7) == "007_file_agent_message.json"

    def test_records_written_as_json(self, tmp_path):
        session = AuditSession(FileAuditSink(tmp_path / "bin"))
        session.start_task()

        session.write("grep", {"tool": "grep", "result": "ok"})

        path = tmp_path / "bin" / "messages" / "grep" / "001_grep_message.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"tool": "grep", "result": "ok"}

    def test_start_task_wipes_previous_records(self, tmp_path):
        root = tmp_path / "bin"
        session = AuditSession(FileAuditSink(root))
        session.start_task()
        session.write("orchestrator", {"round": 1})

        session.start_task()

        assert not list((root / "messages" / "orchestrator").iterdir())
        assert (root / "messages" / "file_agent").is_dir()

    def test_from_settings(self, tmp_path):
        enabled = AuditSession.from_settings(AuditSettings(enabled=True, root_dir=str(tmp_path)))
        disabled = AuditSession.from_settings(AuditSettings(enabled=False))
        assert isinstance(enabled.sink, FileAuditSink)
        assert isinstance(disabled.sink, MemoryAuditSink)

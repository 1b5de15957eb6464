"""Unit tests for the text mutation engine."""

import pytest

from fileAgent.editing.engine import (
    EditOperation,
    apply_edit,
    apply_edits,
    edit_file,
    find_matches,
    multi_edit_file,
)
from shared.errors import (
    AmbiguousMatch,
    EmptyPattern,
    MultiEditFailed,
    NoOpEdit,
    NotFound,
    PostconditionFailed,
    TooManyEdits,
    ValidationError,
)


class TestFindMatches:
    def test_line_numbers_are_one_based(self):
        spans = find_matches("alpha\nbeta\nalpha beta\n", "beta")
        assert [s.line_number for s in spans] == [2, 3]
        assert spans[0].start == 6
        assert spans[0].end == 10

    def test_scan_resumes_one_past_match_start(self):
        # "aa" occurs at offsets 0, 1 and 2 in "aaaa"
        spans = find_matches("aaaa", "aa")
        assert [s.start for s in spans] == [0, 1, 2]

    def test_no_matches(self):
        assert find_matches("hello", "xyz") == []


class TestApplyEdit:
    def test_unique_replacement(self):
        content = "def foo():\n    return 1\n"
        outcome = apply_edit(content, EditOperation("return 1", "return 2"))
        assert outcome.content == "def foo():\n    return 2\n"
        assert outcome.replacements == 1
        assert "return 1" not in outcome.content
        assert outcome.content.count("return 2") == 1
        assert outcome.content.index("return 2") == content.index("return 1")

    def test_empty_pattern(self):
        with pytest.raises(EmptyPattern):
            apply_edit("abc", EditOperation("", "x"))

    def test_noop_edit(self):
        with pytest.raises(NoOpEdit):
            apply_edit("abc", EditOperation("abc", "abc"))

    def test_not_found(self):
        with pytest.raises(NotFound) as exc:
            apply_edit("abc", EditOperation("zzz", "x"))
        assert "old_string not found" in str(exc.value)

    def test_ambiguous_match_lists_every_line(self):
        content = "foo\nbar\nfoo\nbaz\nfoo\n"
        with pytest.raises(AmbiguousMatch) as exc:
            apply_edit(content, EditOperation("foo", "qux"))
        assert exc.value.line_numbers == [1, 3, 5]
        assert "Found at lines: 1, 3, 5" in str(exc.value)

    def test_replace_all(self):
        outcome = apply_edit("x = a\ny = a\n", EditOperation("a", "b", replace_all=True))
        assert outcome.content == "x = b\ny = b\n"
        assert outcome.replacements == 2

    def test_replacement_containing_pattern_fails_postcondition(self):
        with pytest.raises(PostconditionFailed):
            apply_edit("value\n", EditOperation("value", "value_value"))

    def test_replace_all_leaving_pattern_fails_postcondition(self):
        with pytest.raises(PostconditionFailed) as exc:
            apply_edit("ab ab\n", EditOperation("ab", "aab", replace_all=True))
        assert "still remain" in str(exc.value)


class TestApplyEdits:
    def test_sequential_application(self):
        final, counts = apply_edits("A", [EditOperation("A", "B"), EditOperation("B", "C")])
        assert final == "C"
        assert counts == [1, 1]

    def test_failure_reports_index(self):
        with pytest.raises(MultiEditFailed) as exc:
            apply_edits("one two", [EditOperation("one", "1"), EditOperation("three", "3")])
        assert exc.value.index == 2
        assert isinstance(exc.value.cause, NotFound)
        assert "No modifications made" in str(exc.value)

    def test_empty_batch(self):
        with pytest.raises(ValidationError):
            apply_edits("abc", [])

    def test_too_many_edits(self):
        operations = [EditOperation(f"k{i}", f"v{i}") for i in range(51)]
        with pytest.raises(TooManyEdits):
            apply_edits("abc", operations)

    def test_noop_in_batch_rejected_up_front(self):
        with pytest.raises(ValidationError) as exc:
            apply_edits("abc", [EditOperation("a", "x"), EditOperation("b", "b")])
        assert "Edit #2" in str(exc.value)


class TestFileBoundary:
    def test_edit_file_writes_result(self, tmp_path):
        target = tmp_path / "config.txt"
        target.write_text("port = 8080\n", encoding="utf-8")

        path, original, outcome = edit_file(str(target), EditOperation("8080", "3000"))

        assert path == target
        assert original == "port = 8080\n"
        assert target.read_text(encoding="utf-8") == "port = 3000\n"

    def test_edit_file_preserves_crlf(self, tmp_path):
        target = tmp_path / "win.txt"
        target.write_bytes(b"a\r\nb\r\n")

        edit_file(str(target), EditOperation("b", "c"))

        assert target.read_bytes() == b"a\r\nc\r\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError) as exc:
            edit_file(str(tmp_path / "missing.txt"), EditOperation("a", "b"))
        assert "does not exist" in str(exc.value)

    def test_failed_batch_leaves_file_byte_identical(self, tmp_path):
        target = tmp_path / "module.py"
        original = b"first line\nsecond line\n"
        target.write_bytes(original)

        with pytest.raises(MultiEditFailed):
            multi_edit_file(
                str(target),
                [EditOperation("first", "1st"), EditOperation("missing", "x")],
            )

        assert target.read_bytes() == original

    def test_successful_batch_writes_once(self, tmp_path):
        target = tmp_path / "module.py"
        target.write_text("a = 1\nb = 2\n", encoding="utf-8")

        _, _, final, counts = multi_edit_file(
            str(target),
            [EditOperation("a = 1", "a = 7"), EditOperation("b = 2", "b = 9")],
        )

        assert final == "a = 7\nb = 9\n"
        assert counts == [1, 1]
        assert target.read_text(encoding="utf-8") == final

    def test_replacement_reintroducing_pattern_aborts_batch(self, tmp_path):
        target = tmp_path / "module.py"
        original = b"a = 1\nb = 2\n"
        target.write_bytes(original)

        with pytest.raises(MultiEditFailed) as exc:
            multi_edit_file(
                str(target),
                [EditOperation("b = 2", "b = 9"), EditOperation("a = 1", "a = 10")],
            )

        assert exc.value.index == 2
        assert isinstance(exc.value.cause, PostconditionFailed)
        assert target.read_bytes() == original

    def test_home_relative_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "notes.txt").write_text("draft\n", encoding="utf-8")

        path, _, _ = edit_file("~/notes.txt", EditOperation("draft", "final"))

        assert path == tmp_path / "notes.txt"
        assert path.read_text(encoding="utf-8") == "final\n"

"""Unit tests for ContextCompactor.

Covers pass-through below each threshold, the shape-specific windows and the
flat character cap.
"""

import pytest

from shared.config.settings import ContextSettings
from shared.context.compactor import ContextCompactor, ResultShape, count_sources


@pytest.fixture
def compactor():
    return ContextCompactor(ContextSettings())


def numbered(count, template="line {}"):
    return "\n".join(template.format(i) for i in range(1, count + 1))


class TestPassThrough:
    @pytest.mark.parametrize(
        "name, lines",
        [("grep", 30), ("read", 2000), ("ls", 100), ("glob", 100), ("bash", 5000)],
    )
    def test_under_threshold_is_unchanged(self, compactor, name, lines):
        text = numbered(lines, "src/f{}.py:match")
        text = text[:30_000]
        assert compactor.compact(name, text) == text

    def test_unknown_capability_is_other_shape(self, compactor):
        assert compactor.shape_of("todo_write") is ResultShape.OTHER


class TestSearchCompaction:
    def test_summary_with_head_and_tail(self, compactor):
        lines = [f"src/file{i % 7}.py:{i}: hit" for i in range(1, 121)]
        result = compactor.compact("grep", "\n".join(lines))

        assert result.startswith("Found 120 matches across 7 files.")
        assert "First 50 matches:" in result
        assert "... [TRUNCATED] ..." in result
        assert "Last 10 matches:" in result
        assert lines[49] in result
        assert lines[50] not in result.split("[TRUNCATED]")[0]
        assert result.rstrip().endswith(lines[-1])

    def test_count_sources(self):
        assert count_sources(["a.py:1:x", "a.py:2:y", "b.py:1:z"]) == 2

    def test_bare_paths_count_as_sources(self):
        assert count_sources(["src/a.py", "src/b.py", "src/a.py", ""]) == 2

    def test_files_only_listing_summary(self, compactor):
        paths = [f"/repo/src/module{i}.py" for i in range(40)]
        result = compactor.compact("grep", "\n".join(paths))
        assert result.startswith("Found 40 matches across 40 files.")


class TestFileCompaction:
    def test_three_windows(self, compactor):
        text = numbered(3000)
        result = compactor.compact("read", text)

        assert result.startswith("=== FILE PREVIEW (Large file: 3000 lines) ===")
        assert "BEGINNING (lines 1-50):" in result
        # Middle window is centred on line index 1500
        assert "MIDDLE (around line 1500, starting at line 1476):" in result
        assert "line 1476\n" in result
        assert "line 1525\n" in result
        assert "line 1526\n" not in result
        assert "END (last 50 lines, starting at line 2951):" in result
        assert result.endswith("line 3000")


class TestListingCompaction:
    def test_ls_listing(self, compactor):
        result = compactor.compact("ls", numbered(250, "entry{}"))
        assert result.startswith("Large directory listing (250 items):")
        assert "First 50 items:" in result
        assert "Last 10 items:" in result
        assert "entry241" in result
        assert "entry100\n" not in result

    def test_glob_listing(self, compactor):
        result = compactor.compact("glob", numbered(101, "file{}.py"))
        assert result.startswith("Found 101 matching files:")
        assert "Last 10 files:" in result


class TestFlatCap:
    def test_truncates_any_result(self):
        compactor = ContextCompactor(ContextSettings(tool_output_limit=100))
        result = compactor.compact("bash", "x" * 250)
        assert result.startswith("x" * 100)
        assert "150 characters removed" in result

    def test_cap_applies_after_shape_compaction(self):
        compactor = ContextCompactor(ContextSettings(tool_output_limit=200))
        result = compactor.compact("grep", numbered(100, "a.py:{}:" + "y" * 40))
        assert result.startswith("Found 100 matches across 1 files.")
        assert "characters removed" in result

    def test_multibyte_text_cut_on_character_boundary(self):
        compactor = ContextCompactor(ContextSettings(tool_output_limit=5))
        text = "héllo wörld ✓✓✓"
        result = compactor.truncate(text)
        assert result.startswith("héllo")
        assert result.encode("utf-8").decode("utf-8") == result
        assert f"{len(text) - 5} characters removed" in result

    def test_under_limit_unchanged(self):
        compactor = ContextCompactor(ContextSettings(tool_output_limit=10))
        assert compactor.truncate("short") == "short"


def read_output(count, header="File: /repo/big.txt (TXT) - Size: 20.0 KB"):
    body = "\n".join(f"{i:>5}→line {i}" for i in range(1, count + 1))
    return f"{header}\n\n{body}"


class TestFileHeader:
    @pytest.mark.parametrize("count", [1999, 2000])
    def test_header_does_not_count_toward_threshold(self, count):
        compactor = ContextCompactor(ContextSettings(tool_output_limit=100_000))
        text = read_output(count)
        assert compactor.compact("read", text) == text

    def test_windows_use_file_line_numbers(self, compactor):
        result = compactor.compact("read", read_output(3000))

        assert result.startswith("File: /repo/big.txt (TXT) - Size: 20.0 KB\n\n=== FILE PREVIEW")
        assert "=== FILE PREVIEW (Large file: 3000 lines) ===" in result
        beginning = result.split("BEGINNING (lines 1-50):\n", 1)[1]
        assert beginning.startswith("    1→line 1\n")
        assert "MIDDLE (around line 1500, starting at line 1476):\n 1476→line 1476" in result
        assert "END (last 50 lines, starting at line 2951):\n 2951→line 2951" in result
        assert result.endswith(" 3000→line 3000")

"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from chunklab import __version__
from chunklab.cli import main

pytestmark = pytest.mark.integration


class TestChunkCommand:
    """Test ``chunklab chunk``."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_paragraph_strategy(self, text_file):
        result = self.runner.invoke(main, ["chunk", str(text_file), "--strategy", "paragraph"])
        assert result.exit_code == 0
        assert "Strategy: paragraph" in result.output
        assert "Chunks: 3 (3 retrievable, 0 parents)" in result.output
        assert "[1] chunk-0-" in result.output

    def test_parent_child(self, text_file):
        result = self.runner.invoke(main, [
            "chunk", str(text_file), "--chunk-size", "60", "--parent-size", "150", "--validate",
        ])
        assert result.exit_code == 0
        assert "(parent," in result.output
        assert "parent=parent-0-" in result.output
        assert "Validation passed" in result.output

    def test_summary_only(self, text_file):
        result = self.runner.invoke(main, ["chunk", str(text_file), "--summary-only"])
        assert result.exit_code == 0
        assert "[1]" not in result.output
        assert "Strategy: recursive" in result.output

    def test_config_file(self, text_file, tmp_path):
        config = tmp_path / "chunking.yaml"
        config.write_text("chunking:\n  strategy: sentence\n  chunk_size: 80\n", encoding="utf-8")
        result = self.runner.invoke(main, ["chunk", str(text_file), "--config", str(config)])
        assert result.exit_code == 0
        assert "Strategy: sentence" in result.output

    def test_command_line_overrides_config(self, text_file, tmp_path):
        config = tmp_path / "chunking.yaml"
        config.write_text("strategy: sentence\n", encoding="utf-8")
        result = self.runner.invoke(main, [
            "chunk", str(text_file), "--config", str(config), "--strategy", "paragraph",
        ])
        assert "Strategy: paragraph" in result.output

    def test_separator_escapes(self, tmp_path):
        path = tmp_path / "list.txt"
        path.write_text("A. B. C.", encoding="utf-8")
        result = self.runner.invoke(main, [
            "chunk", str(path), "--chunk-size", "2", "--separator", ". ", "--summary-only",
        ])
        assert result.exit_code == 0
        assert "Chunks: 3" in result.output

    def test_non_ascii_separator(self, tmp_path):
        """Separators outside ASCII are used as typed."""
        path = tmp_path / "cjk.txt"
        path.write_text("一句。二句。三句", encoding="utf-8")
        result = self.runner.invoke(main, [
            "chunk", str(path), "--chunk-size", "3", "--separator", "。", "--full",
        ])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        for expected in ("一句", "二句", "三句"):
            assert expected in lines
        assert "一句。" not in lines
        assert "Chunks: 3" in result.output

    def test_escaped_newline_separator(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("first line\nsecond line", encoding="utf-8")
        result = self.runner.invoke(main, [
            "chunk", str(path), "--chunk-size", "12", "--separator", "\\n", "--full",
        ])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "first line" in lines
        assert "second line" in lines

    def test_ai_strategy_is_an_error(self, text_file):
        result = self.runner.invoke(main, ["chunk", str(text_file), "--strategy", "semantic"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_unknown_strategy_rejected(self, text_file):
        result = self.runner.invoke(main, ["chunk", str(text_file), "--strategy", "telepathic"])
        assert result.exit_code == 2

    def test_missing_file(self, tmp_path):
        result = self.runner.invoke(main, ["chunk", str(tmp_path / "missing.txt")])
        assert result.exit_code == 2

    def test_invalid_regex_warns(self, text_file):
        result = self.runner.invoke(main, ["chunk", str(text_file), "--strategy", "regex", "--regex", "("])
        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert "Chunks: 1" in result.output


class TestStrategiesCommand:
    """Test ``chunklab strategies``."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_lists_all(self):
        result = self.runner.invoke(main, ["strategies"])
        assert result.exit_code == 0
        assert "semantic" in result.output
        assert "sliding_window" in result.output

    def test_ai_only(self):
        result = self.runner.invoke(main, ["strategies", "--ai"])
        lines = [line for line in result.output.splitlines() if " yes " in line]
        assert len(lines) == 3
        assert "recursive" not in result.output

    def test_details(self):
        result = self.runner.invoke(main, ["strategies", "--no-ai", "--show-details"])
        assert "Best for:" in result.output
        assert "llm" not in result.output.split()


class TestRankCommand:
    """Test ``chunklab rank``."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_rank(self, text_file):
        result = self.runner.invoke(main, [
            "rank", str(text_file), "--query", "retrieval quality", "--strategy", "paragraph",
        ])
        assert result.exit_code == 0
        assert "#1 chunk-1-" in result.output
        assert "keyword=1.000" in result.output

    def test_top_limits_output(self, text_file):
        result = self.runner.invoke(main, [
            "rank", str(text_file), "-q", "paragraph", "--strategy", "paragraph", "--top", "1",
        ])
        assert "#1 " in result.output
        assert "#2 " not in result.output

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("   ", encoding="utf-8")
        result = self.runner.invoke(main, ["rank", str(path), "-q", "anything"])
        assert result.exit_code == 0
        assert "No chunks to rank" in result.output


class TestGlobalOptions:
    """Test group-level options."""

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert __version__ in result.output

    def test_log_file(self, text_file, tmp_path):
        log_file = tmp_path / "run.log"
        result = CliRunner().invoke(main, ["--log-file", str(log_file), "chunk", str(text_file)])
        assert result.exit_code == 0
        assert "Processing complete" in log_file.read_text(encoding="utf-8")

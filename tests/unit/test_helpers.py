"""Tests for file and logging helpers."""

from loguru import logger
import pytest

from suffixpy.utils import (
    expand_file_path,
    format_time,
    load_pattern_list,
    read_text_file,
    write_file_safely,
)
from suffixpy.utils.logging import add_log_file_handler, is_debug_enabled, setup_logger


class TestFileHelpers:
    """Tests for reading inputs and writing outputs."""

    def test_pattern_list_skips_blank_lines(self, tmp_path):
        """Blank lines separate nothing."""
        pattern_file = tmp_path / "patterns.txt"
        pattern_file.write_text("ana\n\n  \nna\n", encoding="utf-8")
        assert load_pattern_list(str(pattern_file)) == ["ana", "na"]

    def test_pattern_list_keeps_inner_spaces(self, tmp_path):
        """Spaces inside a line belong to the pattern."""
        pattern_file = tmp_path / "patterns.txt"
        pattern_file.write_text("E \n", encoding="utf-8")
        assert load_pattern_list(str(pattern_file)) == ["E "]

    def test_no_pattern_file(self):
        """Without a file there are no patterns."""
        assert load_pattern_list(None) == []

    def test_missing_text_file(self, tmp_path):
        """Missing inputs are re-raised after logging."""
        with pytest.raises(FileNotFoundError):
            read_text_file(str(tmp_path / "missing.txt"))

    def test_non_utf8_text_file(self, tmp_path):
        """Inputs must be UTF-8."""
        text_file = tmp_path / "latin1.txt"
        text_file.write_bytes("café".encode("latin-1"))
        with pytest.raises(UnicodeDecodeError):
            read_text_file(str(text_file))

    def test_write_creates_parent_directories(self, tmp_path):
        """Output directories are created on demand."""
        output = tmp_path / "nested" / "out.tsv"
        write_file_safely(output, lambda f: f.write("x\n"))
        assert output.read_text(encoding="utf-8") == "x\n"

    def test_output_under_a_file_is_reported(self, tmp_path):
        """A match file cannot be placed beneath an existing file."""
        blocker = tmp_path / "matches.tsv"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OSError):
            write_file_safely(blocker / "out.tsv", lambda f: f.write("x\n"))

    def test_failed_write_logs_the_output_hint(self, tmp_path):
        """The error log names what was being written."""
        blocker = tmp_path / "matches.tsv"
        blocker.mkdir()
        messages = []
        handler_id = logger.add(messages.append, format="{message}")
        try:
            with pytest.raises(OSError):
                write_file_safely(blocker, lambda f: f.write("x\n"))
        finally:
            logger.remove(handler_id)
        assert "match file" in "".join(messages)

    def test_home_is_expanded(self, monkeypatch):
        """A leading tilde resolves to the home directory."""
        monkeypatch.setenv("HOME", "/home/reader")
        assert expand_file_path("~/out.tsv") == "/home/reader/out.tsv"

    def test_empty_path_is_unset(self):
        """An empty path means no file."""
        assert expand_file_path("") is None

    @pytest.mark.parametrize(
        "seconds,expected", [(0.25, "250.0ms"), (2.5, "2.50s"), (125.0, "2m 5.00s")]
    )
    def test_format_time(self, seconds, expected):
        """Durations are shown in the most readable unit."""
        assert format_time(seconds) == expected


class TestLogging:
    """Tests for loguru configuration."""

    def test_debug_flag_enables_debug(self):
        """The debug flag lowers the level to DEBUG."""
        setup_logger(debug=True)
        assert is_debug_enabled() is True

    def test_verbose_flag_stays_above_debug(self):
        """Verbose alone does not log DEBUG messages."""
        setup_logger(verbose=True)
        assert is_debug_enabled() is False

    def test_log_file_receives_messages(self, tmp_path):
        """An extra file handler writes alongside stderr."""
        setup_logger(verbose=True)
        log_file = tmp_path / "logs" / "run.log"
        handler_id = add_log_file_handler(log_file, verbose=True)
        logger.info("indexed")
        logger.remove(handler_id)
        assert "indexed" in log_file.read_text(encoding="utf-8")

"""Integration tests for the file-driven search pipeline."""

import pytest

from suffixpy.core import Config
from suffixpy.processing import run_search

DECLARATION = "WE HOLD THESE TRUTHS TO BE SELF EVIDENT"


@pytest.fixture
def panama_files(tmp_path):
    """Text and pattern files for the panamabanana examples."""
    text_file = tmp_path / "text.txt"
    text_file.write_text("panamabanana\n", encoding="utf-8")
    pattern_file = tmp_path / "patterns.txt"
    pattern_file.write_text("ana\n\nban\n", encoding="utf-8")
    return text_file, pattern_file


def _run(text_file, pattern_file, tmp_path, **overrides):
    output = tmp_path / "out" / "matches.tsv"
    config = Config(
        text=str(text_file),
        patterns=str(pattern_file),
        output=str(output),
        jobs=2,
        **overrides,
    )
    result = run_search(config)
    return result, output.read_text(encoding="utf-8").splitlines()


class TestPipelineIntegration:
    """Integration tests verifying the complete pipeline behavior."""

    def test_exact_output_lines(self, panama_files, tmp_path):
        """Exact mode writes one line per match in pattern order."""
        _, lines = _run(*panama_files, tmp_path)
        assert lines == ["ana\t1\t3", "ana\t7\t3", "ana\t9\t3", "ban\t6\t3"]

    def test_suffix_array_mode_matches_exact(self, panama_files, tmp_path):
        """Suffix array search produces the same file."""
        _, exact_lines = _run(*panama_files, tmp_path)
        _, array_lines = _run(*panama_files, tmp_path, mode="suffix-array")
        assert array_lines == exact_lines

    def test_approximate_mode(self, panama_files, tmp_path):
        """One mismatch widens the matches of each pattern."""
        result, _ = _run(*panama_files, tmp_path, mode="approximate", max_errors=1)
        assert [match.start for match in result.matches["ban"]] == [0, 6, 8]

    def test_parallel_mode_is_sorted(self, panama_files, tmp_path):
        """Parallel results are written in the same order as sequential ones."""
        _, sequential = _run(*panama_files, tmp_path, mode="approximate", max_errors=1)
        _, parallel = _run(*panama_files, tmp_path, mode="parallel", max_errors=1)
        assert parallel == sequential

    def test_trailing_newline_is_not_indexed(self, panama_files, tmp_path):
        """Only a single trailing newline is stripped from the text."""
        result, _ = _run(*panama_files, tmp_path)
        assert result.input_data.text == "panamabanana"

    def test_inline_patterns_are_appended(self, panama_files, tmp_path):
        """Inline patterns follow those from the file, without duplicates."""
        result, _ = _run(*panama_files, tmp_path, pattern=["na", "ana"])
        assert result.input_data.patterns == ["ana", "ban", "na"]

    def test_case_insensitive_search(self, tmp_path):
        """Case folding applies to both text and patterns."""
        text_file = tmp_path / "text.txt"
        text_file.write_text(DECLARATION.lower(), encoding="utf-8")
        pattern_file = tmp_path / "patterns.txt"
        pattern_file.write_text("TRUTH\n", encoding="utf-8")
        _, lines = _run(text_file, pattern_file, tmp_path, case_insensitive=True)
        assert lines == ["TRUTH\t14\t5"]

    def test_rotation_algorithm(self, panama_files, tmp_path):
        """The rotation sort builds an equivalent index."""
        result, _ = _run(*panama_files, tmp_path, suffix_array_algorithm="rotation")
        assert result.index_result.index.suffix_array == [12, 11, 5, 3, 9, 1, 7, 6, 4, 10, 2, 8, 0]

    def test_stage_timings_are_recorded(self, panama_files, tmp_path):
        """Every stage reports a non-negative elapsed time."""
        result, _ = _run(*panama_files, tmp_path)
        assert result.elapsed_time >= result.index_result.elapsed_time >= 0

    def test_summary_without_output_file(self, panama_files):
        """Without an output file the run still returns its matches."""
        text_file, pattern_file = panama_files
        result = run_search(Config(text=str(text_file), patterns=str(pattern_file)))
        assert result.query_result.match_count == 4

    def test_sentinel_in_text_is_rejected(self, tmp_path):
        """A text containing the sentinel cannot be indexed."""
        text_file = tmp_path / "text.txt"
        text_file.write_text("cost: $5", encoding="utf-8")
        with pytest.raises(ValueError):
            run_search(Config(text=str(text_file), pattern=["5"]))

    def test_custom_sentinel_allows_dollar_text(self, tmp_path):
        """Choosing another sentinel makes the dollar searchable."""
        text_file = tmp_path / "text.txt"
        text_file.write_text("cost: $5", encoding="utf-8")
        result = run_search(Config(text=str(text_file), pattern=["$5"], sentinel="\x00"))
        assert [match.start for match in result.matches["$5"]] == [6]

    def test_trailing_sentinel_in_text_is_rejected(self, tmp_path):
        """A sentinel at the end of the file is content, so it is rejected too."""
        text_file = tmp_path / "text.txt"
        text_file.write_text("cost 5$\n", encoding="utf-8")
        with pytest.raises(ValueError):
            run_search(Config(text=str(text_file), pattern=["5$"]))

    def test_trailing_dollar_found_with_other_sentinel(self, tmp_path):
        """With another sentinel a trailing dollar is searchable."""
        text_file = tmp_path / "text.txt"
        text_file.write_text("cost 5$\n", encoding="utf-8")
        result = run_search(Config(text=str(text_file), pattern=["5$"], sentinel="\x00"))
        assert [match.start for match in result.matches["5$"]] == [5]

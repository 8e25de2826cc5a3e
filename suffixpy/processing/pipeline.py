"""File-driven search pipeline used by the command line."""

import time

from loguru import logger

from suffixpy.core import Config, InvalidArgumentError, SearchMode, SuffixArrayAlgorithm
from suffixpy.core.types import Match
from suffixpy.index.builder import SuffixIndex, build_index
from suffixpy.processing.data_models import (
    IndexBuildResult,
    InputData,
    QueryResult,
    SearchRunResult,
)
from suffixpy.utils import Constants, format_time, load_pattern_list, read_text_file, write_file_safely
from suffixpy.utils.logging import is_debug_enabled


def _strip_trailing_newline(content: str) -> str:
    if content.endswith("\r\n"):
        return content[:-2]
    if content.endswith("\n"):
        return content[:-1]
    return content


def load_inputs(config: Config) -> InputData:
    """Stage 1: read the text and collect patterns from file and command line.

    Duplicate patterns are searched once; the first occurrence fixes the order.
    """
    start_time = time.time()

    text = _strip_trailing_newline(read_text_file(config.text, "text file")) if config.text else ""
    patterns = list(dict.fromkeys(load_pattern_list(config.patterns) + list(config.pattern)))

    if config.verbose:
        logger.info(f"  Loaded text of {len(text)} characters")
        logger.info(f"  Loaded {len(patterns)} patterns")

    return InputData(text=text, patterns=patterns, elapsed_time=time.time() - start_time)


def build_text_index(input_data: InputData, config: Config) -> IndexBuildResult:
    """Stage 2: build the suffix array, LCP array and suffix tree."""
    start_time = time.time()

    # A trailing sentinel in the file is a real symbol, not a terminator
    position = input_data.text.find(config.sentinel)
    if position != -1:
        logger.error(f"✗ Sentinel {config.sentinel!r} occurs in the text at offset {position}")
        logger.error("  Please choose another symbol with --sentinel")
        raise InvalidArgumentError(
            f"Sentinel {config.sentinel!r} must not occur in the text (found at offset {position})"
        )

    algorithm = SuffixArrayAlgorithm(config.suffix_array_algorithm)
    if (
        algorithm is SuffixArrayAlgorithm.ROTATION
        and len(input_data.text) > Constants.ROTATION_SORT_WARNING_LENGTH
    ):
        logger.warning(
            f"⚠️  Rotation sort on {len(input_data.text)} characters may be slow; "
            "consider --suffix-array-algorithm doubling"
        )

    index = build_index(
        input_data.text,
        sentinel=config.sentinel,
        key=str.lower if config.case_insensitive else None,
        algorithm=algorithm,
        verbose=config.verbose,
    )

    elapsed_time = time.time() - start_time
    if config.verbose:
        logger.info(
            f"  Built index with {index.tree.node_count} nodes in {format_time(elapsed_time)}"
        )
    return IndexBuildResult(index=index, elapsed_time=elapsed_time)


def _group_by_pattern(patterns: list[str], matches: list) -> dict[str, list[Match]]:
    grouped: dict[str, list[Match]] = {pattern: [] for pattern in patterns}
    by_symbols = {tuple(pattern): pattern for pattern in patterns}
    for match in matches:
        grouped[by_symbols[match.pattern]].append(match)
    for found in grouped.values():
        found.sort()
    return grouped


def run_queries(index: SuffixIndex, patterns: list[str], config: Config) -> QueryResult:
    """Stage 3: search the index with the configured strategy."""
    start_time = time.time()
    mode = SearchMode(config.mode)

    if mode is SearchMode.EXACT:
        matches = {pattern: index.search([pattern]) for pattern in patterns}
    elif mode is SearchMode.SUFFIX_ARRAY:
        matches = {pattern: index.search_suffix_array([pattern]) for pattern in patterns}
    elif mode is SearchMode.APPROXIMATE:
        matches = _group_by_pattern(patterns, index.search_approximate(patterns, config.max_errors))
    else:
        matches = _group_by_pattern(
            patterns, index.search_parallel(patterns, config.max_errors, jobs=config.jobs)
        )

    if is_debug_enabled():
        for pattern, found in matches.items():
            logger.debug(f"  {pattern!r}: {len(found)} matches")

    return QueryResult(matches=matches, elapsed_time=time.time() - start_time)


def write_matches(query_result: QueryResult, output_path: str) -> None:
    """Stage 4: write one ``pattern<TAB>start<TAB>length`` line per match."""
    separator = Constants.OUTPUT_SEPARATOR

    def writer(f):
        for pattern, found in query_result.matches.items():
            for match in found:
                f.write(f"{pattern}{separator}{match.start}{separator}{match.length}\n")

    write_file_safely(output_path, writer, "match file")


def run_search(config: Config) -> SearchRunResult:
    """Run the whole pipeline: load inputs, build the index, search, write.

    Args:
        config: Configuration object containing all settings

    Returns:
        SearchRunResult with every stage's output and timing
    """
    start_time = time.time()
    verbose = config.verbose

    if verbose:
        logger.info("Loading inputs...")
    input_data = load_inputs(config)

    if verbose:
        logger.info("Building index...")
    index_result = build_text_index(input_data, config)

    if verbose:
        logger.info(f"Searching ({config.mode})...")
    query_result = run_queries(index_result.index, input_data.patterns, config)

    if config.output:
        write_matches(query_result, config.output)
        if verbose:
            logger.info(f"  Wrote {query_result.match_count} matches to {config.output}")
    else:
        logger.info(
            f"Found {query_result.match_count} matches for {len(query_result.matches)} patterns"
        )

    elapsed_time = time.time() - start_time
    if verbose:
        logger.info(f"Total time: {format_time(elapsed_time)}")

    return SearchRunResult(
        input_data=input_data,
        index_result=index_result,
        query_result=query_result,
        output_path=config.output,
        elapsed_time=elapsed_time,
    )

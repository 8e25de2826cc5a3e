"""Index build entry point and the read-only ``SuffixIndex`` facade."""

from collections.abc import Hashable, Iterable, Sequence
import time

from loguru import logger
from tqdm import tqdm

from suffixpy.core.text import SymbolKey, Text
from suffixpy.core.types import ApproximateMatch, Match, SuffixArrayAlgorithm
from suffixpy.index import burrows_wheeler
from suffixpy.index.lcp_array import build_lcp_array
from suffixpy.index.suffix_array import build_suffix_array, build_suffix_array_fast
from suffixpy.index.suffix_tree import SuffixTree
from suffixpy.search import exact, suffix_array_search
from suffixpy.search.approximate import search_approximate
from suffixpy.search.parallel import search_parallel

_BUILD_STEPS = ("text", "suffix array", "LCP array", "suffix tree")


class SuffixIndex:
    """Suffix array, LCP array and suffix tree over one text.

    Built once by ``build_index`` and read-only afterwards, so a single index
    can serve any number of concurrent queries.
    """

    def __init__(self, text: Text, suffix_array: list[int], lcp_array: list[int], tree: SuffixTree):
        self.text = text
        self.suffix_array = suffix_array
        self.lcp_array = lcp_array
        self.tree = tree

    def __len__(self) -> int:
        return len(self.text)

    def search(self, patterns: Iterable[Sequence] | None) -> list[Match]:
        """Exact occurrences of each pattern, found by tree descent."""
        return exact.search(self.tree, patterns)

    def search_suffix_array(self, patterns: Iterable[Sequence] | None) -> list[Match]:
        """Exact occurrences of each pattern, found by suffix array binary search."""
        return suffix_array_search.search(self.text, self.suffix_array, patterns)

    def search_approximate(
        self, patterns: Iterable[Sequence] | None, max_errors: int
    ) -> list[ApproximateMatch]:
        """Occurrences within ``max_errors`` substitutions, searched sequentially."""
        return search_approximate(self.tree, patterns, max_errors)

    def search_parallel(
        self,
        patterns: Iterable[Sequence] | None,
        max_errors: int,
        pool=None,
        jobs: int | None = None,
    ) -> list[ApproximateMatch]:
        """Occurrences within ``max_errors`` substitutions, searched on a worker pool."""
        return search_parallel(self.tree, patterns, max_errors, pool=pool, jobs=jobs)

    def burrows_wheeler(self) -> list:
        """Burrows-Wheeler transform of the text, read off the suffix array."""
        return burrows_wheeler.transform(self.text, self.suffix_array)

    def count(self, patterns: Iterable[Sequence]) -> list[int]:
        """Number of occurrences of each pattern by backward search.

        Unlike the search methods, occurrences that run into the sentinel are
        counted when the pattern itself contains the sentinel.
        """
        return burrows_wheeler.count_matches(
            self.burrows_wheeler(), patterns, self.text.sentinel, self.text.sort_key.key
        )


def build_index(
    text: Sequence | None,
    sentinel: Hashable = "$",
    key: SymbolKey | None = None,
    algorithm: SuffixArrayAlgorithm | str = SuffixArrayAlgorithm.DOUBLING,
    verbose: bool = False,
) -> SuffixIndex:
    """Build the full index for a text.

    Args:
        text: Text symbols; empty means "just the sentinel"
        sentinel: Terminating symbol, appended when missing
        key: Optional key function ordering the non-sentinel symbols
        algorithm: Suffix array algorithm ("doubling" or "rotation")
        verbose: Whether to show a progress bar

    Returns:
        SuffixIndex instance

    Raises:
        InvalidArgumentError: If text is None or misuses the sentinel
    """
    algorithm = SuffixArrayAlgorithm(algorithm)

    build_bar = None
    if verbose:
        build_bar = tqdm(
            total=len(_BUILD_STEPS),
            desc="    Building index",
            unit="step",
            leave=False,
        )

    def step_done(name: str, started: float) -> None:
        logger.debug(f"  Built {name} in {time.time() - started:.3f}s")
        if build_bar is not None:
            build_bar.set_postfix_str(name)
            build_bar.update(1)

    try:
        started = time.time()
        model = Text(text, sentinel, key)
        step_done(_BUILD_STEPS[0], started)

        started = time.time()
        if algorithm is SuffixArrayAlgorithm.ROTATION:
            suffix_array = build_suffix_array(model)
        else:
            suffix_array = build_suffix_array_fast(model)
        step_done(_BUILD_STEPS[1], started)

        started = time.time()
        lcp_array = build_lcp_array(model, suffix_array)
        step_done(_BUILD_STEPS[2], started)

        started = time.time()
        tree = SuffixTree.from_arrays(model, suffix_array, lcp_array)
        step_done(_BUILD_STEPS[3], started)
    finally:
        if build_bar is not None:
            build_bar.close()

    logger.debug(f"Index ready: n={len(model)}, alphabet={model.alphabet_size}, nodes={tree.node_count}")
    return SuffixIndex(model, suffix_array, lcp_array, tree)

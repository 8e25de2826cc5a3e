"""LCP array construction (Kasai et al.)."""

from loguru import logger

from suffixpy.core.text import Text
from suffixpy.index.suffix_array import invert_suffix_array


def build_lcp_array(text: Text, suffix_array: list[int]) -> list[int]:
    """Compute longest common prefixes of lexicographically adjacent suffixes.

    Offsets are visited in text order. Moving from suffix ``i`` to ``i + 1``
    removes one leading symbol, so the common prefix with the next-ranked
    suffix shrinks by at most one and the carried value never restarts from
    zero. Runs in O(n) amortized time.

    Args:
        text: Sentinel-terminated text
        suffix_array: Suffix array of ``text``

    Returns:
        List of n - 1 values; entry ``i`` is the LCP of the suffixes at sorted
        positions ``i`` and ``i + 1``
    """
    ranks = text.ranks
    n = len(ranks)
    lcp_array = [0] * (n - 1)
    rank = invert_suffix_array(suffix_array)

    carried = 0
    for suffix in range(n):
        order_index = rank[suffix]
        if order_index == n - 1:
            # The largest suffix has no successor
            carried = 0
            continue

        next_suffix = suffix_array[order_index + 1]
        while (
            suffix + carried < n
            and next_suffix + carried < n
            and ranks[suffix + carried] == ranks[next_suffix + carried]
        ):
            carried += 1
        lcp_array[order_index] = carried
        if carried > 0:
            carried -= 1

    logger.debug(f"Computed LCP array of {len(lcp_array)} entries")
    return lcp_array

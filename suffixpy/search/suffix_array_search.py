"""Exact pattern search by binary search over the suffix array."""

from collections.abc import Iterable, Sequence

from loguru import logger

from suffixpy.core.text import Text
from suffixpy.core.types import Match


def _compare(text: Text, pattern_keys: tuple, start: int) -> int:
    """Compare a pattern with the same-length prefix of the suffix at ``start``.

    Returns:
        Negative if the pattern sorts before the prefix, zero if equal,
        positive if after
    """
    keys = text.keys
    for offset, pattern_key in enumerate(pattern_keys):
        if start + offset >= len(keys):
            return 1
        text_key = keys[start + offset]
        if pattern_key != text_key:
            return -1 if pattern_key < text_key else 1
    return 0


def _lower_bound(text: Text, suffix_array: list[int], pattern_keys: tuple) -> int:
    low, high = 0, len(suffix_array)
    while low < high:
        middle = (low + high) // 2
        if _compare(text, pattern_keys, suffix_array[middle]) > 0:
            low = middle + 1
        else:
            high = middle
    return low


def _upper_bound(text: Text, suffix_array: list[int], pattern_keys: tuple, low: int) -> int:
    high = len(suffix_array)
    while low < high:
        middle = (low + high) // 2
        if _compare(text, pattern_keys, suffix_array[middle]) >= 0:
            low = middle + 1
        else:
            high = middle
    return low


def find_occurrences(text: Text, suffix_array: list[int], pattern: Sequence) -> list[Match]:
    """Return every occurrence of one pattern, in ascending start order."""
    pattern = tuple(pattern)
    pattern_keys = text.pattern_keys(pattern)

    first = _lower_bound(text, suffix_array, pattern_keys)
    last = _upper_bound(text, suffix_array, pattern_keys, first)

    starts = sorted(
        start
        for start in suffix_array[first:last]
        if not text.overlaps_sentinel(start, len(pattern))
    )
    return [Match(start, len(pattern)) for start in starts]


def search(
    text: Text, suffix_array: list[int], patterns: Iterable[Sequence] | None
) -> list[Match]:
    """Find all exact occurrences of a batch of patterns.

    Args:
        text: Sentinel-terminated text
        suffix_array: Suffix array of ``text``
        patterns: Patterns to search for; None is treated as no patterns

    Returns:
        Matches grouped by pattern in input order, each group sorted by start
    """
    if patterns is None:
        return []

    matches: list[Match] = []
    for pattern in patterns:
        matches.extend(find_occurrences(text, suffix_array, pattern))

    logger.debug(f"Suffix array search found {len(matches)} matches")
    return matches

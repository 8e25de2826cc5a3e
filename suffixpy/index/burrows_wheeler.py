"""Burrows-Wheeler transform, its inverse, and backward-search match counting."""

from collections import Counter
from collections.abc import Hashable, Iterable, Sequence

from suffixpy.core.text import SentinelFirstKey, SymbolKey, Text
from suffixpy.index.suffix_array import build_suffix_array_fast


def transform(text: Text, suffix_array: list[int] | None = None) -> list:
    """Return the last column of the sorted rotation matrix.

    Row ``i`` of the matrix is the rotation starting at ``suffix_array[i]``,
    so its last symbol is the one preceding that suffix.

    Args:
        text: Sentinel-terminated text
        suffix_array: Precomputed suffix array, built when omitted

    Returns:
        The transformed symbols
    """
    if suffix_array is None:
        suffix_array = build_suffix_array_fast(text)
    symbols = text.symbols
    return [symbols[start - 1] for start in suffix_array]


def _first_occurrences(last_column: Sequence, sort_key: SentinelFirstKey) -> dict:
    """Map each symbol key to its first row in the (sorted) first column."""
    counts = Counter(sort_key(symbol) for symbol in last_column)
    first_occurrence = {}
    position = 0
    for symbol_key in sorted(counts):
        first_occurrence[symbol_key] = position
        position += counts[symbol_key]
    return first_occurrence


def inverse_transform(
    transformation: Sequence, sentinel: Hashable = "$", key: SymbolKey | None = None
) -> list:
    """Rebuild the original text from its transform.

    Args:
        transformation: Last column of the sorted rotation matrix
        sentinel: Terminating symbol of the original text
        key: Optional key function ordering the non-sentinel symbols

    Returns:
        The original symbols, ending with the sentinel
    """
    if not transformation:
        return []

    sort_key = SentinelFirstKey(sentinel, key)
    first_occurrence = _first_occurrences(transformation, sort_key)

    seen: Counter = Counter()
    last_to_first = []
    for symbol in transformation:
        symbol_key = sort_key(symbol)
        last_to_first.append(first_occurrence[symbol_key] + seen[symbol_key])
        seen[symbol_key] += 1

    # Row 0 starts with the sentinel; walking last-to-first spells the text backwards
    original = [sentinel] * len(transformation)
    row = 0
    for i in range(len(transformation) - 2, -1, -1):
        original[i] = transformation[row]
        row = last_to_first[row]
    return original


def count_matches(
    transformation: Sequence,
    patterns: Iterable[Sequence],
    sentinel: Hashable = "$",
    key: SymbolKey | None = None,
) -> list[int]:
    """Count occurrences of each pattern by backward search over the transform.

    Args:
        transformation: Last column of the sorted rotation matrix
        patterns: Patterns to count
        sentinel: Terminating symbol of the original text
        key: Optional key function ordering the non-sentinel symbols

    Returns:
        Number of occurrences of each pattern, in input order
    """
    sort_key = SentinelFirstKey(sentinel, key)
    first_occurrence = _first_occurrences(transformation, sort_key)

    # occurrences[k][i] = number of symbols with key k in transformation[:i]
    occurrences = {symbol_key: [0] * (len(transformation) + 1) for symbol_key in first_occurrence}
    for i, symbol in enumerate(transformation):
        for symbol_key, counts in occurrences.items():
            counts[i + 1] = counts[i]
        occurrences[sort_key(symbol)][i + 1] += 1

    return [
        _count_pattern(len(transformation), sort_key, pattern, first_occurrence, occurrences)
        for pattern in patterns
    ]


def _count_pattern(
    size: int,
    sort_key: SentinelFirstKey,
    pattern: Sequence,
    first_occurrence: dict,
    occurrences: dict,
) -> int:
    top, bottom = 0, size - 1
    for symbol in reversed(pattern):
        counts = occurrences.get(sort_key(symbol))
        if counts is None or counts[top] == counts[bottom + 1]:
            return 0
        top = first_occurrence[sort_key(symbol)] + counts[top]
        bottom = first_occurrence[sort_key(symbol)] + counts[bottom + 1] - 1
    return max(0, bottom - top + 1)

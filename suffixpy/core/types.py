"""Type definitions for SuffixPy."""

from dataclasses import dataclass
from enum import Enum


class SearchMode(Enum):
    """Query strategy used by the pipeline."""

    EXACT = "exact"  # Suffix tree descent
    SUFFIX_ARRAY = "suffix-array"  # Binary search over the suffix array
    APPROXIMATE = "approximate"  # Sequential mismatch-tolerant tree walk
    PARALLEL = "parallel"  # Mismatch-tolerant tree walk on a worker pool


class SuffixArrayAlgorithm(Enum):
    """Algorithm used to sort the suffixes."""

    DOUBLING = "doubling"  # Prefix doubling, O(n log n)
    ROTATION = "rotation"  # Comparison sort of cyclic rotations


@dataclass(frozen=True, order=True)
class Match:
    """An occurrence of a pattern in the text.

    Attributes:
        start: Offset of the first matched symbol
        length: Number of matched symbols (the pattern length)
    """

    start: int
    length: int


@dataclass(frozen=True, order=True)
class ApproximateMatch(Match):
    """An occurrence within the mismatch budget.

    The pattern that produced the match is kept for symbol-level inspection.
    """

    pattern: tuple = ()

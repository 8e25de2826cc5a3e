"""SuffixPy: suffix arrays, suffix trees and mismatch-tolerant pattern search."""

from suffixpy.core import (
    ApproximateMatch,
    InvalidArgumentError,
    Match,
    SearchTaskError,
    SuffixPyError,
    Text,
)
from suffixpy.index.builder import SuffixIndex, build_index
from suffixpy.search import InlinePool

__version__ = "0.1.0"

__all__ = [
    "ApproximateMatch",
    "InlinePool",
    "InvalidArgumentError",
    "Match",
    "SearchTaskError",
    "SuffixIndex",
    "SuffixPyError",
    "Text",
    "build_index",
]

"""Core domain types for SuffixPy."""

from .config import Config, load_config
from .errors import InvalidArgumentError, SearchTaskError, SuffixPyError
from .text import SentinelFirstKey, Text
from .types import ApproximateMatch, Match, SearchMode, SuffixArrayAlgorithm

__all__ = [
    "ApproximateMatch",
    "Config",
    "InvalidArgumentError",
    "Match",
    "SearchMode",
    "SearchTaskError",
    "SentinelFirstKey",
    "SuffixArrayAlgorithm",
    "SuffixPyError",
    "Text",
    "load_config",
]

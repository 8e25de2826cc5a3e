"""Exception types raised by SuffixPy."""


class SuffixPyError(Exception):
    """Base class for all SuffixPy errors."""


class InvalidArgumentError(SuffixPyError, ValueError):
    """Raised when a build or query argument is absent or out of range."""


class SearchTaskError(SuffixPyError, RuntimeError):
    """Raised when a unit of work in the parallel search failed."""

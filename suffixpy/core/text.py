"""Immutable sentinel-terminated text shared by every index structure.

All downstream structures (suffix array, LCP array, suffix tree edges) refer
to positions in a ``Text`` by offset and length and never copy substrings.
"""

from collections.abc import Callable, Hashable, Sequence
from typing import Any

from suffixpy.core.errors import InvalidArgumentError

SymbolKey = Callable[[Any], Any]


class SentinelFirstKey:
    """Sort key that places the sentinel before every other symbol.

    Other symbols are ordered by ``key(symbol)``, or by the symbol itself
    when no key is given. Two symbols are considered equal for matching
    purposes when their sort keys are equal.
    """

    __slots__ = ("sentinel", "key")

    def __init__(self, sentinel: Hashable, key: SymbolKey | None = None):
        self.sentinel = sentinel
        self.key = key

    def __call__(self, symbol) -> tuple:
        if symbol == self.sentinel:
            return (0,)
        if self.key is None:
            return (1, symbol)
        return (1, self.key(symbol))


class Text:
    """A fixed, sentinel-terminated sequence of symbols.

    Attributes:
        symbols: The symbols including the trailing sentinel
        sentinel: The terminating symbol, unique and smallest
        sort_key: Sentinel-first key function used for ordering and equality
        keys: Sort key of each position
        ranks: Dense integer rank of each position's key (the sentinel is 0)
    """

    __slots__ = ("symbols", "sentinel", "sort_key", "keys", "ranks", "alphabet_size")

    def __init__(self, symbols: Sequence | None, sentinel: Hashable = "$", key: SymbolKey | None = None):
        """Build the text, appending the sentinel when it is missing.

        Args:
            symbols: Text symbols; an empty sequence is just the sentinel
            sentinel: Terminating symbol
            key: Optional key function ordering the non-sentinel symbols

        Raises:
            InvalidArgumentError: If symbols is None or the sentinel occurs
                anywhere but the last position
        """
        if symbols is None:
            raise InvalidArgumentError("Text must not be None")

        items = tuple(symbols)
        if not items or items[-1] != sentinel:
            items = items + (sentinel,)
        if sentinel in items[:-1]:
            position = items.index(sentinel)
            raise InvalidArgumentError(
                f"Sentinel {sentinel!r} must only terminate the text (found at offset {position})"
            )

        self.symbols: tuple = items
        self.sentinel = sentinel
        self.sort_key = SentinelFirstKey(sentinel, key)
        self.keys: tuple = tuple(self.sort_key(symbol) for symbol in items)

        distinct = sorted(set(self.keys))
        rank_of = {k: rank for rank, k in enumerate(distinct)}
        self.ranks: tuple[int, ...] = tuple(rank_of[k] for k in self.keys)
        self.alphabet_size = len(distinct)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index):
        return self.symbols[index]

    def __repr__(self) -> str:
        preview = self.symbols[:20]
        if all(isinstance(s, str) for s in preview):
            body = "".join(preview)
        else:
            body = repr(preview)
        suffix = "..." if len(self.symbols) > 20 else ""
        return f"Text({body!r}{suffix}, n={len(self.symbols)})"

    def pattern_keys(self, pattern: Sequence) -> tuple:
        """Return the sort keys of a pattern's symbols."""
        return tuple(self.sort_key(symbol) for symbol in pattern)

    def suffix(self, start: int) -> tuple:
        """Materialize the suffix starting at ``start`` (for display and tests)."""
        return self.symbols[start:]

    def overlaps_sentinel(self, start: int, length: int) -> bool:
        """Check whether a match of ``length`` at ``start`` would reach the sentinel."""
        last = len(self.symbols) - 1
        return not (start < last and start + length <= last)

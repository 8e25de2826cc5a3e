"""Shared state for the parallel search without global variables."""

import threading
from dataclasses import dataclass
from typing import Any

from suffixpy.core.types import ApproximateMatch
from suffixpy.index.suffix_tree import SuffixTree


class ResultBag:
    """Lock-protected, unordered collection of matches."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[ApproximateMatch] = []

    def extend(self, matches: list[ApproximateMatch]) -> None:
        if not matches:
            return
        with self._lock:
            self._items.extend(matches)

    def snapshot(self) -> list[ApproximateMatch]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class OutstandingWork:
    """Counter of dispatched but unfinished units of work.

    The counter is incremented before a unit is dispatched and decremented
    when it finishes. ``wait`` blocks until it drops to zero; the last
    finishing unit wakes the waiter. The first failure reported by a unit is
    kept so the waiting caller can re-raise it.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._count = 0
        self._failure: BaseException | None = None

    def increment(self) -> None:
        with self._condition:
            self._count += 1

    def decrement(self) -> None:
        with self._condition:
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def fail(self, error: BaseException) -> None:
        with self._condition:
            if self._failure is None:
                self._failure = error

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no work is outstanding.

        Returns:
            False if the timeout expired first, True otherwise
        """
        with self._condition:
            return self._condition.wait_for(lambda: self._count == 0, timeout=timeout)

    @property
    def pending(self) -> int:
        with self._condition:
            return self._count

    @property
    def failure(self) -> BaseException | None:
        with self._condition:
            return self._failure


@dataclass(frozen=True)
class SearchContext:
    """Immutable bundle of everything a unit of work needs.

    Attributes:
        tree: Suffix tree being searched (read-only)
        pool: Worker pool that receives follow-up tasks
        results: Shared result collection
        outstanding: Shared completion counter
    """

    tree: SuffixTree
    pool: Any
    results: ResultBag
    outstanding: OutstandingWork

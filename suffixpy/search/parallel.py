"""Parallel mismatch-tolerant search with dynamic task fan-out.

Every partial match is submitted to a worker pool as an independent unit of
work. Units spawn follow-up units instead of recursing, and the caller blocks
on a shared outstanding-work counter rather than on individual task handles.
Units are never cancelled; branches end only by budget pruning.
"""

from collections import deque
from collections.abc import Iterable, Sequence
from multiprocessing import cpu_count
from multiprocessing.pool import ThreadPool

from loguru import logger

from suffixpy.core.errors import InvalidArgumentError, SearchTaskError
from suffixpy.core.types import ApproximateMatch
from suffixpy.index.suffix_tree import SuffixTree
from suffixpy.search.approximate import (
    SearchTask,
    collect_matches,
    expand_task,
    validate_max_errors,
)
from suffixpy.search.task_context import OutstandingWork, ResultBag, SearchContext


class InlinePool:
    """Single-threaded stand-in for a worker pool.

    Submitted work is queued and drained in the submitting thread, so nested
    submissions run after the current unit instead of recursing. Not safe for
    use from several threads.
    """

    def __init__(self) -> None:
        self._queue: deque = deque()
        self._draining = False
        self.submitted = 0

    def apply_async(self, func, args=(), kwds=None, callback=None, error_callback=None):
        self._queue.append((func, args, kwds or {}, callback, error_callback))
        self.submitted += 1
        if self._draining:
            return None

        self._draining = True
        try:
            while self._queue:
                queued_func, queued_args, queued_kwds, on_result, on_error = self._queue.popleft()
                try:
                    result = queued_func(*queued_args, **queued_kwds)
                except Exception as e:  # pylint: disable=broad-exception-caught
                    if on_error is None:
                        raise
                    on_error(e)
                    continue
                if on_result is not None:
                    on_result(result)
        finally:
            self._draining = False
        return None


def _dispatch(
    context: SearchContext, pattern: tuple, pattern_keys: tuple, task: SearchTask
) -> None:
    context.outstanding.increment()

    def on_error(error: BaseException) -> None:
        # The pool failed before or outside _run_task, e.g. while pickling the task
        context.outstanding.fail(error)
        context.outstanding.decrement()

    try:
        context.pool.apply_async(
            _run_task, (context, pattern, pattern_keys, task), error_callback=on_error
        )
    except Exception:
        context.outstanding.decrement()
        raise


def _run_task(
    context: SearchContext, pattern: tuple, pattern_keys: tuple, task: SearchTask
) -> None:
    """Process one partial match; always releases its slot in the counter."""
    try:
        found, follow_ups = expand_task(context.tree, pattern_keys, task)
        for node in found:
            context.results.extend(collect_matches(context.tree, node, pattern))
        for follow_up in follow_ups:
            _dispatch(context, pattern, pattern_keys, follow_up)
    except Exception as e:  # pylint: disable=broad-exception-caught
        # Re-raised by the waiting caller
        context.outstanding.fail(e)
    finally:
        context.outstanding.decrement()


def _search_with_pool(
    tree: SuffixTree, patterns: Iterable[Sequence], max_errors: int, pool
) -> list[ApproximateMatch]:
    context = SearchContext(
        tree=tree,
        pool=pool,
        results=ResultBag(),
        outstanding=OutstandingWork(),
    )

    dispatched = 0
    for pattern in patterns:
        pattern = tuple(pattern)
        root_task = SearchTask(tree.root, 0, max_errors)
        _dispatch(context, pattern, tree.text.pattern_keys(pattern), root_task)
        dispatched += 1

    context.outstanding.wait()

    failure = context.outstanding.failure
    if failure is not None:
        raise SearchTaskError(f"Parallel search task failed: {failure}") from failure

    matches = context.results.snapshot()
    logger.debug(
        f"Parallel search over {dispatched} patterns "
        f"(max_errors={max_errors}) found {len(matches)} matches"
    )
    return matches


def search_parallel(
    tree: SuffixTree,
    patterns: Iterable[Sequence] | None,
    max_errors: int,
    pool=None,
    jobs: int | None = None,
) -> list[ApproximateMatch]:
    """Find all occurrences within ``max_errors`` substitutions on a worker pool.

    Args:
        tree: Suffix tree over the text
        patterns: Patterns to search for; None is treated as no patterns
        max_errors: Maximum number of mismatching symbols per match
        pool: Object with ``apply_async(func, args, error_callback=...)``,
            such as a ``multiprocessing.pool.ThreadPool`` or ``InlinePool``.
            When omitted, a ThreadPool is created for the duration of the call.
        jobs: Worker count for the pool created when ``pool`` is omitted
            (default: CPU count)

    Returns:
        Matches in no particular order

    Raises:
        InvalidArgumentError: If max_errors is invalid or pool lacks apply_async
        SearchTaskError: If a unit of work raised or the pool could not run it
    """
    validate_max_errors(max_errors)
    if patterns is None:
        return []

    if pool is not None:
        if not callable(getattr(pool, "apply_async", None)):
            raise InvalidArgumentError("pool must provide an apply_async(func, args) method")
        return _search_with_pool(tree, patterns, max_errors, pool)

    processes = cpu_count() if jobs is None else jobs
    if processes < 1:
        raise InvalidArgumentError(f"jobs must be at least 1, got {processes}")
    with ThreadPool(processes=processes) as owned_pool:
        return _search_with_pool(tree, patterns, max_errors, owned_pool)

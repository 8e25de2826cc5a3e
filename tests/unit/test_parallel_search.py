"""Tests for the parallel search machinery."""

import multiprocessing
import pickle
import threading
from multiprocessing.pool import ThreadPool

import pytest

from suffixpy import InlinePool, InvalidArgumentError, SearchTaskError, build_index
from suffixpy.core.types import ApproximateMatch
from suffixpy.search import OutstandingWork, ResultBag
from suffixpy.search import parallel


class _UnpicklablePool:
    """Pool that fails every task before it starts, as a process pool does
    when the arguments cannot be pickled."""

    def apply_async(self, func, args=(), kwds=None, callback=None, error_callback=None):
        threading.Thread(
            target=error_callback, args=(pickle.PicklingError("cannot pickle task"),)
        ).start()


@pytest.fixture(scope="module")
def panama():
    return build_index("panamabanana")


class TestOutstandingWork:
    """Tests for the completion counter."""

    def test_wait_returns_immediately_when_idle(self):
        """No outstanding work means the barrier is open."""
        assert OutstandingWork().wait(timeout=0) is True

    def test_wait_times_out_while_work_is_pending(self):
        """The barrier stays closed until the count drops to zero."""
        work = OutstandingWork()
        work.increment()
        assert work.wait(timeout=0.01) is False

    def test_decrement_to_zero_releases_waiter(self):
        """The last finishing unit wakes the waiting thread."""
        work = OutstandingWork()
        work.increment()
        timer = threading.Timer(0.01, work.decrement)
        timer.start()
        released = work.wait(timeout=5)
        timer.join()
        assert released is True

    def test_pending_counts_increments(self):
        """Pending reflects dispatched but unfinished units."""
        work = OutstandingWork()
        work.increment()
        work.increment()
        work.decrement()
        assert work.pending == 1

    def test_first_failure_is_kept(self):
        """Later failures do not replace the first one."""
        work = OutstandingWork()
        first = ValueError("first")
        work.fail(first)
        work.fail(KeyError("second"))
        assert work.failure is first


class TestResultBag:
    """Tests for the shared result collection."""

    def test_extend_from_many_threads(self):
        """Concurrent extends lose nothing."""
        bag = ResultBag()
        threads = [
            threading.Thread(target=bag.extend, args=([ApproximateMatch(i, 1)] * 10,))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(bag) == 80

    def test_snapshot_is_a_copy(self):
        """Mutating a snapshot does not touch the bag."""
        bag = ResultBag()
        bag.extend([ApproximateMatch(0, 1)])
        bag.snapshot().clear()
        assert len(bag) == 1


class TestParallelSearch:
    """Tests for pool handling and failure propagation."""

    def test_inline_pool_runs_every_task(self, panama):
        """Each partial match is submitted as its own unit of work."""
        pool = InlinePool()
        panama.search_parallel(["ana"], 1, pool=pool)
        assert pool.submitted > 1

    def test_owned_thread_pool(self, panama):
        """Without a pool the call creates and closes its own."""
        matches = panama.search_parallel(["ana"], 0, jobs=2)
        assert sorted(match.start for match in matches) == [1, 7, 9]

    def test_shared_thread_pool_serves_several_calls(self, panama):
        """A caller-owned pool can be reused across searches."""
        with ThreadPool(processes=3) as pool:
            first = panama.search_parallel(["na"], 0, pool=pool)
            second = panama.search_parallel(["na"], 0, pool=pool)
        assert sorted(first) == sorted(second)

    def test_pool_without_apply_async_is_rejected(self, panama):
        """The pool must follow the multiprocessing pool interface."""
        with pytest.raises(InvalidArgumentError):
            panama.search_parallel(["ana"], 1, pool=object())

    def test_negative_jobs_is_rejected(self, panama):
        """An owned pool needs at least one worker."""
        with pytest.raises(InvalidArgumentError):
            panama.search_parallel(["ana"], 1, jobs=-1)

    def test_task_failure_is_reraised(self, panama, monkeypatch):
        """A unit of work that raises fails the whole search."""

        def broken(*_args):
            raise RuntimeError("boom")

        monkeypatch.setattr(parallel, "expand_task", broken)
        with pytest.raises(SearchTaskError):
            panama.search_parallel(["ana"], 1, pool=InlinePool())

    def test_task_failure_keeps_cause(self, panama, monkeypatch):
        """The original exception is chained as the cause."""

        def broken(*_args):
            raise RuntimeError("boom")

        monkeypatch.setattr(parallel, "expand_task", broken)
        with pytest.raises(SearchTaskError) as exc_info:
            with ThreadPool(processes=2) as pool:
                panama.search_parallel(["ana"], 1, pool=pool)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_failed_search_still_drains_counter(self, panama, monkeypatch):
        """Units that fail still release their slot so the caller returns."""
        calls = []
        original = parallel.expand_task

        def flaky(tree, pattern_keys, task):
            calls.append(task)
            if len(calls) == 2:
                raise RuntimeError("second unit fails")
            return original(tree, pattern_keys, task)

        monkeypatch.setattr(parallel, "expand_task", flaky)
        with pytest.raises(SearchTaskError):
            panama.search_parallel(["ana"], 1, pool=InlinePool())
        assert len(calls) > 2

    def test_zero_jobs_is_rejected(self, panama):
        """Zero workers is not silently replaced by the CPU count."""
        with pytest.raises(InvalidArgumentError):
            panama.search_parallel(["ana"], 1, jobs=0)

    def test_pool_error_before_task_runs_is_reraised(self, panama):
        """A pool that reports failure through error_callback does not hang the caller."""
        with pytest.raises(SearchTaskError):
            panama.search_parallel(["ana"], 1, pool=_UnpicklablePool())

    def test_inline_pool_routes_errors_to_callback(self):
        """InlinePool hands exceptions to error_callback like multiprocessing pools."""
        errors = []

        def broken():
            raise RuntimeError("boom")

        InlinePool().apply_async(broken, error_callback=errors.append)
        assert isinstance(errors[0], RuntimeError)

    @pytest.mark.slow
    def test_process_pool_fails_instead_of_hanging(self, panama):
        """Process pools cannot receive the shared context; the search fails fast."""
        outcome = []

        def run():
            try:
                with multiprocessing.Pool(processes=2) as pool:
                    panama.search_parallel(["ana"], 1, pool=pool)
            except SearchTaskError as e:
                outcome.append(e)

        worker = threading.Thread(target=run, daemon=True)
        worker.start()
        worker.join(timeout=30)
        assert len(outcome) == 1

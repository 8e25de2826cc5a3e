"""Query-time search over a built index."""

from .approximate import SearchTask, search_approximate
from .parallel import InlinePool, search_parallel
from .task_context import OutstandingWork, ResultBag, SearchContext

__all__ = [
    "InlinePool",
    "OutstandingWork",
    "ResultBag",
    "SearchContext",
    "SearchTask",
    "search_approximate",
    "search_parallel",
]

"""Mismatch-tolerant pattern search over the suffix tree.

Only substitutions are counted: each edge is compared symbol by symbol against
the next pattern symbols, stopping at whichever runs out first. A branch whose
mismatches exceed the remaining budget is pruned.
"""

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from suffixpy.core.errors import InvalidArgumentError
from suffixpy.core.types import ApproximateMatch
from suffixpy.index.suffix_tree import SuffixTree, SuffixTreeEdge, SuffixTreeNode


@dataclass(frozen=True)
class SearchTask:
    """A partial match waiting to be extended.

    Attributes:
        node: Tree node reached so far
        pattern_index: Number of pattern symbols already consumed
        errors_left: Mismatches still allowed
    """

    node: SuffixTreeNode
    pattern_index: int
    errors_left: int


def validate_max_errors(max_errors: int) -> None:
    """Reject a mismatch budget that is not a non-negative integer."""
    if isinstance(max_errors, bool) or not isinstance(max_errors, int):
        raise InvalidArgumentError(f"max_errors must be an integer, got {max_errors!r}")
    if max_errors < 0:
        raise InvalidArgumentError(f"max_errors must be non-negative, got {max_errors}")


def match_edge(
    text_keys: tuple,
    edge: SuffixTreeEdge,
    pattern_keys: tuple,
    pattern_index: int,
    budget: int,
) -> tuple[int, int]:
    """Compare an edge label with the pattern from ``pattern_index``.

    Args:
        text_keys: Sort keys of the text
        edge: Edge to compare
        pattern_keys: Sort keys of the pattern
        pattern_index: First unconsumed pattern position
        budget: Mismatches allowed; comparison stops once it is exceeded

    Returns:
        Tuple of (symbols compared, mismatches found)
    """
    compare_length = min(edge.length, len(pattern_keys) - pattern_index)
    mismatches = 0
    for offset in range(compare_length):
        if text_keys[edge.start + offset] != pattern_keys[pattern_index + offset]:
            mismatches += 1
            if mismatches > budget:
                break
    return compare_length, mismatches


def expand_task(
    tree: SuffixTree, pattern_keys: tuple, task: SearchTask
) -> tuple[list[SuffixTreeNode], list[SearchTask]]:
    """Extend a partial match across every outgoing edge of its node.

    Returns:
        Tuple of (nodes whose subtrees are full matches, follow-up tasks)
    """
    if task.pattern_index >= len(pattern_keys):
        return [task.node], []

    found: list[SuffixTreeNode] = []
    follow_ups: list[SearchTask] = []
    for edge in task.node.edges.values():
        compared, mismatches = match_edge(
            tree.text.keys, edge, pattern_keys, task.pattern_index, task.errors_left
        )
        if mismatches > task.errors_left:
            continue

        next_index = task.pattern_index + compared
        if next_index >= len(pattern_keys):
            found.append(edge.child)
        else:
            follow_ups.append(SearchTask(edge.child, next_index, task.errors_left - mismatches))
    return found, follow_ups


def collect_matches(
    tree: SuffixTree, node: SuffixTreeNode, pattern: tuple
) -> list[ApproximateMatch]:
    """Turn every leaf beneath ``node`` into a match, skipping sentinel overlaps."""
    text = tree.text
    return [
        ApproximateMatch(start, len(pattern), pattern)
        for start in tree.leaf_starts(node)
        if not text.overlaps_sentinel(start, len(pattern))
    ]


def find_approximate_occurrences(
    tree: SuffixTree, pattern: Sequence, max_errors: int
) -> list[ApproximateMatch]:
    """Breadth-first search for one pattern; results sorted by start."""
    pattern = tuple(pattern)
    pattern_keys = tree.text.pattern_keys(pattern)

    queue = deque([SearchTask(tree.root, 0, max_errors)])
    matches: list[ApproximateMatch] = []
    while queue:
        found, follow_ups = expand_task(tree, pattern_keys, queue.popleft())
        for node in found:
            matches.extend(collect_matches(tree, node, pattern))
        queue.extend(follow_ups)

    matches.sort(key=lambda match: match.start)
    return matches


def search_approximate(
    tree: SuffixTree, patterns: Iterable[Sequence] | None, max_errors: int
) -> list[ApproximateMatch]:
    """Find all occurrences within ``max_errors`` substitutions, sequentially.

    Args:
        tree: Suffix tree over the text
        patterns: Patterns to search for; None is treated as no patterns
        max_errors: Maximum number of mismatching symbols per match

    Returns:
        Matches grouped by pattern in input order, each group sorted by start

    Raises:
        InvalidArgumentError: If max_errors is negative or not an integer
    """
    validate_max_errors(max_errors)
    if patterns is None:
        return []

    matches: list[ApproximateMatch] = []
    for pattern in patterns:
        matches.extend(find_approximate_occurrences(tree, pattern, max_errors))

    logger.debug(f"Approximate search (max_errors={max_errors}) found {len(matches)} matches")
    return matches

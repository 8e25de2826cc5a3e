"""Exact pattern search by descending the suffix tree."""

from collections.abc import Iterable, Sequence

from loguru import logger

from suffixpy.core.types import Match
from suffixpy.index.suffix_tree import SuffixTree, SuffixTreeNode


def find_pattern_node(tree: SuffixTree, pattern_keys: tuple) -> SuffixTreeNode | None:
    """Descend from the root along the pattern.

    Args:
        tree: Suffix tree to search
        pattern_keys: Sort keys of the pattern symbols

    Returns:
        The node whose subtree holds every occurrence (the child of the edge
        on which the pattern ends), or None when the pattern does not occur
    """
    if not pattern_keys:
        return tree.root

    text_keys = tree.text.keys
    node = tree.root
    index = 0
    while True:
        edge = node.edges.get(pattern_keys[index])
        if edge is None:
            return None

        compare_length = min(edge.length, len(pattern_keys) - index)
        for offset in range(1, compare_length):
            if text_keys[edge.start + offset] != pattern_keys[index + offset]:
                return None

        index += compare_length
        if index >= len(pattern_keys):
            return edge.child
        node = edge.child


def find_occurrences(tree: SuffixTree, pattern: Sequence) -> list[Match]:
    """Return every occurrence of one pattern, in ascending start order."""
    pattern = tuple(pattern)
    node = find_pattern_node(tree, tree.text.pattern_keys(pattern))
    if node is None:
        return []

    text = tree.text
    starts = sorted(
        start
        for start in tree.leaf_starts(node)
        if not text.overlaps_sentinel(start, len(pattern))
    )
    return [Match(start, len(pattern)) for start in starts]


def search(tree: SuffixTree, patterns: Iterable[Sequence] | None) -> list[Match]:
    """Find all exact occurrences of a batch of patterns.

    Args:
        tree: Suffix tree over the text
        patterns: Patterns to search for; None is treated as no patterns

    Returns:
        Matches grouped by pattern in input order, each group sorted by start
    """
    if patterns is None:
        return []

    matches: list[Match] = []
    for pattern in patterns:
        matches.extend(find_occurrences(tree, pattern))

    logger.debug(f"Exact search found {len(matches)} matches")
    return matches

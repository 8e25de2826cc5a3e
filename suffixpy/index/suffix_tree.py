"""Compressed suffix tree built from a suffix array and LCP array.

Edges reference their label as (start, length) into the shared ``Text``;
splitting an edge only relabels offsets. Nodes are stored in an arena owned by
the tree, and each node keeps the arena index of its parent as a non-owning
back-reference used for the upward walks during construction.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from suffixpy.core.text import Text


@dataclass
class SuffixTreeEdge:
    """Edge labelled by ``length`` text symbols starting at ``start``."""

    start: int
    length: int
    child: "SuffixTreeNode"


@dataclass(eq=False)
class SuffixTreeNode:
    """Node of a suffix tree.

    Attributes:
        index: Position of the node in the tree's arena
        string_depth: Length of the path label from the root
        suffix_start: Start offset of the suffix ending here (leaves only)
        parent: Arena index of the parent node, None for the root
        in_edge_key: Key of the parent edge leading here, None for the root
        edges: Outgoing edges keyed by the sort key of their first symbol
    """

    index: int
    string_depth: int
    suffix_start: int | None = None
    parent: int | None = None
    in_edge_key: Any = None
    edges: dict = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return self.suffix_start is not None and not self.edges


class SuffixTree:
    """Compressed trie over all suffixes of a sentinel-terminated text."""

    def __init__(self, text: Text):
        self.text = text
        self.nodes: list[SuffixTreeNode] = []
        self._new_node(string_depth=0)

    @property
    def root(self) -> SuffixTreeNode:
        return self.nodes[0]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def leaf_count(self) -> int:
        return sum(1 for node in self.nodes if node.suffix_start is not None)

    @classmethod
    def from_arrays(cls, text: Text, suffix_array: list[int], lcp_array: list[int]) -> "SuffixTree":
        """Insert suffixes in sorted order, branching off the previous leaf.

        For each suffix, walk up from the previously inserted leaf to the
        deepest node whose string depth does not exceed the LCP with the
        previous suffix. Attach the new leaf there, splitting the edge below
        first when the LCP ends in the middle of it.

        Args:
            text: Sentinel-terminated text
            suffix_array: Suffix array of ``text``
            lcp_array: LCP array matching ``suffix_array``

        Returns:
            The built suffix tree
        """
        tree = cls(text)
        n = len(text)
        current = tree.root
        lcp_previous = 0

        for i, suffix_start in enumerate(suffix_array):
            while current.string_depth > lcp_previous:
                current = tree.nodes[current.parent]

            if current.string_depth == lcp_previous:
                current = tree._add_leaf(current, suffix_start)
            else:
                offset = lcp_previous - current.string_depth
                edge_start = suffix_array[i - 1] + current.string_depth
                middle = tree._split_edge(current, text.keys[edge_start], offset)
                current = tree._add_leaf(middle, suffix_start)

            lcp_previous = lcp_array[i] if i < n - 1 else 0

        logger.debug(f"Built suffix tree with {tree.node_count} nodes over n={n}")
        return tree

    @classmethod
    def naive(cls, text: Text) -> "SuffixTree":
        """Build the tree by inserting every suffix from the root in O(n^2)."""
        tree = cls(text)
        for suffix_start in range(len(text)):
            tree._insert_suffix(suffix_start)
        return tree

    def _new_node(
        self,
        string_depth: int,
        parent: int | None = None,
        suffix_start: int | None = None,
        in_edge_key=None,
    ) -> SuffixTreeNode:
        node = SuffixTreeNode(
            index=len(self.nodes),
            string_depth=string_depth,
            suffix_start=suffix_start,
            parent=parent,
            in_edge_key=in_edge_key,
        )
        self.nodes.append(node)
        return node

    def _add_leaf(self, node: SuffixTreeNode, suffix_start: int) -> SuffixTreeNode:
        n = len(self.text)
        edge_start = node.string_depth + suffix_start
        first_key = self.text.keys[edge_start]
        leaf = self._new_node(
            n - suffix_start, parent=node.index, suffix_start=suffix_start, in_edge_key=first_key
        )
        node.edges[first_key] = SuffixTreeEdge(edge_start, n - edge_start, leaf)
        return leaf

    def _split_edge(self, node: SuffixTreeNode, first_key, offset: int) -> SuffixTreeNode:
        """Insert an internal node ``offset`` symbols down the edge at ``first_key``."""
        old_edge = node.edges[first_key]
        middle = self._new_node(node.string_depth + offset, parent=node.index, in_edge_key=first_key)

        lower = SuffixTreeEdge(old_edge.start + offset, old_edge.length - offset, old_edge.child)
        node.edges[first_key] = SuffixTreeEdge(old_edge.start, offset, middle)
        lower_key = self.text.keys[lower.start]
        middle.edges[lower_key] = lower
        old_edge.child.parent = middle.index
        old_edge.child.in_edge_key = lower_key
        return middle

    def _insert_suffix(self, suffix_start: int) -> None:
        keys = self.text.keys
        n = len(keys)
        node = self.root
        index = suffix_start

        while True:
            first_key = keys[index]
            edge = node.edges.get(first_key)
            if edge is None:
                leaf = self._new_node(
                    node.string_depth + n - index,
                    parent=node.index,
                    suffix_start=suffix_start,
                    in_edge_key=first_key,
                )
                node.edges[first_key] = SuffixTreeEdge(index, n - index, leaf)
                return

            matched = 0
            while (
                matched < edge.length
                and index + matched < n
                and keys[edge.start + matched] == keys[index + matched]
            ):
                matched += 1

            if matched < edge.length:
                node = self._split_edge(node, first_key, matched)
            else:
                node = edge.child
            index += matched

    def parent_of(self, node: SuffixTreeNode) -> SuffixTreeNode | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def parent_edge(self, node: SuffixTreeNode) -> SuffixTreeEdge | None:
        """Return the edge leading into ``node``, None for the root."""
        parent = self.parent_of(node)
        if parent is None:
            return None
        return parent.edges[node.in_edge_key]

    def edge_label(self, edge: SuffixTreeEdge) -> tuple:
        """Materialize an edge label (display and testing only)."""
        return self.text.symbols[edge.start : edge.start + edge.length]

    def walk(self) -> Iterator[tuple[SuffixTreeNode, SuffixTreeEdge]]:
        """Yield every (parent node, outgoing edge) pair depth-first."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            for edge in node.edges.values():
                yield node, edge
                stack.append(edge.child)

    def leaf_starts(self, node: SuffixTreeNode) -> Iterator[int]:
        """Yield the suffix starts of all leaves beneath ``node``.

        The traversal only visits the subtree, so its cost is bounded by the
        number of leaves found.
        """
        stack = [node]
        while stack:
            current = stack.pop()
            if current.suffix_start is not None:
                yield current.suffix_start
            stack.extend(edge.child for edge in reversed(current.edges.values()))

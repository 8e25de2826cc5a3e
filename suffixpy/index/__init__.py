"""Build-time index structures.

The ``SuffixIndex`` facade lives in ``suffixpy.index.builder`` and is
re-exported from the top-level package.
"""

from .lcp_array import build_lcp_array
from .suffix_array import build_suffix_array, build_suffix_array_fast, invert_suffix_array
from .suffix_tree import SuffixTree, SuffixTreeEdge, SuffixTreeNode

__all__ = [
    "SuffixTree",
    "SuffixTreeEdge",
    "SuffixTreeNode",
    "build_lcp_array",
    "build_suffix_array",
    "build_suffix_array_fast",
    "invert_suffix_array",
]

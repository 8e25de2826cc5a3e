"""Suffix array construction for sentinel-terminated texts.

Because the sentinel is unique and sorts first, ordering the cyclic rotations
of the text orders its suffixes: two rotations always differ at or before the
sentinel position, so the rotation order is a strict total order.
"""

import functools

from loguru import logger

from suffixpy.core.text import Text


def _compare_rotations(ranks: tuple[int, ...], first: int, second: int) -> int:
    """Compare two cyclic rotations of the text symbol by symbol."""
    n = len(ranks)
    for offset in range(n):
        a = ranks[(first + offset) % n]
        b = ranks[(second + offset) % n]
        if a != b:
            return -1 if a < b else 1
    return 0


def build_suffix_array(text: Text) -> list[int]:
    """Sort the cyclic rotations of the text with a comparison sort.

    Args:
        text: Sentinel-terminated text

    Returns:
        Suffix start offsets in ascending lexicographic order of the suffixes
    """
    ranks = text.ranks
    compare = functools.partial(_compare_rotations, ranks)
    order = sorted(range(len(ranks)), key=functools.cmp_to_key(compare))
    logger.debug(f"Sorted {len(order)} rotations by comparison")
    return order


def _sort_characters(ranks: tuple[int, ...], alphabet_size: int) -> list[int]:
    """Counting sort of positions by their single-symbol rank."""
    counts = [0] * alphabet_size
    for rank in ranks:
        counts[rank] += 1
    for i in range(1, alphabet_size):
        counts[i] += counts[i - 1]

    order = [0] * len(ranks)
    for i in range(len(ranks) - 1, -1, -1):
        counts[ranks[i]] -= 1
        order[counts[ranks[i]]] = i
    return order


def _character_classes(ranks: tuple[int, ...], order: list[int]) -> list[int]:
    classes = [0] * len(ranks)
    for i in range(1, len(order)):
        same = ranks[order[i]] == ranks[order[i - 1]]
        classes[order[i]] = classes[order[i - 1]] + (0 if same else 1)
    return classes


def _sort_doubled(order: list[int], classes: list[int], length: int) -> list[int]:
    """Sort rotations of length 2L given the order of rotations of length L.

    A rotation of length 2L starting at ``i - L`` is the pair
    (rotation at ``i - L``, rotation at ``i``); the second half is already
    sorted, so a stable counting sort by the first half's class suffices.
    """
    n = len(order)
    counts = [0] * n
    for eq_class in classes:
        counts[eq_class] += 1
    for i in range(1, n):
        counts[i] += counts[i - 1]

    new_order = [0] * n
    for i in range(n - 1, -1, -1):
        start = (order[i] - length) % n
        eq_class = classes[start]
        counts[eq_class] -= 1
        new_order[counts[eq_class]] = start
    return new_order


def _update_classes(order: list[int], classes: list[int], length: int) -> list[int]:
    n = len(order)
    new_classes = [0] * n
    for i in range(1, n):
        current, previous = order[i], order[i - 1]
        mid, previous_mid = (current + length) % n, (previous + length) % n
        if classes[current] != classes[previous] or classes[mid] != classes[previous_mid]:
            new_classes[current] = new_classes[previous] + 1
        else:
            new_classes[current] = new_classes[previous]
    return new_classes


def build_suffix_array_fast(text: Text) -> list[int]:
    """Build the suffix array by prefix doubling in O(n log n).

    Produces the same permutation as ``build_suffix_array``.

    Args:
        text: Sentinel-terminated text

    Returns:
        Suffix start offsets in ascending lexicographic order of the suffixes
    """
    ranks = text.ranks
    order = _sort_characters(ranks, text.alphabet_size)
    classes = _character_classes(ranks, order)

    length = 1
    rounds = 0
    while length < len(ranks):
        order = _sort_doubled(order, classes, length)
        classes = _update_classes(order, classes, length)
        length *= 2
        rounds += 1

    logger.debug(f"Prefix doubling finished after {rounds} rounds for n={len(ranks)}")
    return order


def invert_suffix_array(suffix_array: list[int]) -> list[int]:
    """Map each text offset to its position in sorted order."""
    rank = [0] * len(suffix_array)
    for position, start in enumerate(suffix_array):
        rank[start] = position
    return rank

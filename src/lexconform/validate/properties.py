"""
Property helpers for lexicographical-comparison checks.

These work for any element type that can be ordered with `<` (or a
comparator): equality is always derived as "neither orders before the
other", so they are safe for `LessThanOnly` values.

Public API (stable):
    equivalent(x, y, comp=None) -> bool
    first_difference_index(xs, ys, comp=None) -> int | None
    lexicographically_equal(xs, ys, comp=None) -> bool
    assert_no_mutation(before, after, comp=None) -> None
    assert_canonical(seq) -> None
"""

from __future__ import annotations

from typing import Any, Optional, Sequence as SequenceT

from lexconform.datasets.generators import Sequence
from lexconform.ordering import Comparator
from lexconform.validate.oracle import lexicographical_compare

__all__ = [
    "equivalent",
    "first_difference_index",
    "lexicographically_equal",
    "assert_no_mutation",
    "assert_canonical",
]


def equivalent(x: Any, y: Any, comp: Optional[Comparator] = None) -> bool:
    if comp is None:
        return not (x < y) and not (y < x)
    return not comp(x, y) and not comp(y, x)


def first_difference_index(xs: SequenceT[Any], ys: SequenceT[Any], comp: Optional[Comparator] = None) -> Optional[int]:
    """
    Return the first index i < min(len) where xs[i] and ys[i] are not
    equivalent, or None if the common prefix is equivalent throughout.
    """
    for i in range(min(len(xs), len(ys))):
        if not equivalent(xs[i], ys[i], comp):
            return i
    return None


def lexicographically_equal(xs: SequenceT[Any], ys: SequenceT[Any], comp: Optional[Comparator] = None) -> bool:
    """Neither range is less than the other."""
    return not lexicographical_compare(xs, ys, comp) and not lexicographical_compare(ys, xs, comp)


def assert_no_mutation(before: SequenceT[Any], after: SequenceT[Any], comp: Optional[Comparator] = None) -> None:
    """
    Assert two buffers hold equivalent contents element-wise.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    i = first_difference_index(before, after, comp)
    if i is not None:
        raise AssertionError(
            f"Input mutated at index {i}: before={before[i]!r}, after={after[i]!r}"
        )


def assert_canonical(seq: Sequence) -> None:
    """Assert `seq` still holds exactly its generator-defined contents."""
    assert_no_mutation(seq.etype.generate(len(seq)), seq.data)

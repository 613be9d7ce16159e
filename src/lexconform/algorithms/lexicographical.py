"""
Policy-parameterized lexicographical comparison (the default algorithm under test).

    lexicographical_compare(policy, first, second, comp=None) -> bool

Returns True iff `first` is lexicographically less than `second` under `comp`
(natural `<` when omitted). The two inputs may hold different element types.

How each policy finds the first position where the ranges differ:
- seq        one element at a time
- unseq      NumPy blocks via `comp.block`, stopping at the first block that differs
- par        the common prefix is split into chunks searched on a thread pool;
             chunks that start past an already-found difference are skipped
- par_unseq  parallel chunks, each searched block-wise

Inputs shorter than `policy.grain` are searched serially by every policy.
The inputs are only read, never written.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

import numpy as np

from lexconform.algorithms.policies import ExecutionPolicy, default_workers
from lexconform.ordering import Comparator, resolve

__all__ = ["lexicographical_compare"]

_BLOCK = 4096

Brick = Callable[[np.ndarray, np.ndarray, Comparator, int, int], Optional[int]]


def lexicographical_compare(
    policy: ExecutionPolicy,
    first: Any,
    second: Any,
    comp: Optional[Comparator] = None,
) -> bool:
    a = np.asarray(first)
    b = np.asarray(second)
    less = resolve(comp)
    m = min(len(a), len(b))

    brick: Brick = _mismatch_block if policy.vectorized else _mismatch_serial
    if policy.parallel and m >= policy.grain:
        i = _mismatch_parallel(a, b, less, m, brick, policy)
    else:
        i = brick(a, b, less, 0, m)

    if i is None:
        # Common prefix is equal: the shorter range is less.
        return len(a) < len(b)
    return less(a[i], b[i])


# ------------------------- bricks ------------------------- #


def _mismatch_serial(a: np.ndarray, b: np.ndarray, less: Comparator, lo: int, hi: int) -> Optional[int]:
    for i in range(lo, hi):
        x, y = a[i], b[i]
        if less(x, y) or less(y, x):
            return i
    return None


def _mismatch_block(a: np.ndarray, b: np.ndarray, less: Comparator, lo: int, hi: int) -> Optional[int]:
    for start in range(lo, hi, _BLOCK):
        stop = min(start + _BLOCK, hi)
        xs, ys = a[start:stop], b[start:stop]
        differs = less.block(xs, ys) | less.block(ys, xs)
        if differs.any():
            return start + int(np.argmax(differs))
    return None


# ------------------------- parallel driver ------------------------- #


class _FirstIndex:
    """Smallest mismatch index reported by any chunk so far."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.value: Optional[int] = None

    def offer(self, i: int) -> None:
        with self._lock:
            if self.value is None or i < self.value:
                self.value = i

    def precedes(self, lo: int) -> bool:
        v = self.value
        return v is not None and v < lo


def _mismatch_parallel(
    a: np.ndarray,
    b: np.ndarray,
    less: Comparator,
    m: int,
    brick: Brick,
    policy: ExecutionPolicy,
) -> Optional[int]:
    workers = policy.workers or default_workers()
    chunk = max(policy.grain, -(-m // (workers * 4)))
    found = _FirstIndex()

    def search(lo: int) -> None:
        # A chunk past a known difference cannot hold the first one.
        if found.precedes(lo):
            return
        i = brick(a, b, less, lo, min(lo + chunk, m))
        if i is not None:
            found.offer(i)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(search, lo) for lo in range(0, m, chunk)]
        for f in futures:
            f.result()
    return found.value

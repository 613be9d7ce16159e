"""
Scenario enumeration for lexicographical-comparison conformance.

Families, in the order they are produced:
- "plain":            no predicate; first range vs. a sub-window of the longer second buffer
- "prefix_*":         one range is a strict prefix (or window) of the other's element stream
- "equal":            same length n, equal content
- "second_less":      same length n, second range overridden at n // 2 with the sentinel
- "first_less":       same length n, first range overridden at n // 5 with the sentinel

The names state intent, not a guaranteed relation: the uint16 sentinel wraps
to 65535 and -1 sorts last under Greater(float32), so the overridden range
is not always the lesser one.

Sizes follow `size_schedule`: every n in 0..exhaustive_limit + 1, where
off-by-one errors live, then geometric growth up to max_n.

Scenarios are produced lazily. A single-difference scenario holds its
override across the `yield`: the buffer is restored only when the consumer
asks for the next scenario (or closes the iterator), so the consumer must
finish every check on a scenario before advancing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from lexconform.datasets.generators import RangeView, Sequence
from lexconform.ordering import Comparator

__all__ = [
    "Scenario",
    "size_schedule",
    "iter_scenarios",
    "iter_text_scenarios",
    "DEFAULT_GROWTH",
    "DEFAULT_EXHAUSTIVE_LIMIT",
]

DEFAULT_GROWTH = 3.1415
DEFAULT_EXHAUSTIVE_LIMIT = 16


@dataclass(frozen=True)
class Scenario:
    family: str
    first: RangeView
    second: RangeView
    comp: Optional[Comparator]
    n: Optional[int] = None

    def describe(self) -> str:
        size = f" n={self.n}" if self.n is not None else ""
        return f"{self.family}{size}: {self.first} vs {self.second}"


def size_schedule(
    max_n: int,
    *,
    exhaustive_limit: int = DEFAULT_EXHAUSTIVE_LIMIT,
    growth: float = DEFAULT_GROWTH,
) -> Iterator[int]:
    """Yield 0, 1, ..., exhaustive_limit + 1, then int(growth * n) while n <= max_n."""
    if growth <= 1.0:
        raise ValueError(f"growth must be > 1; got {growth}")
    if exhaustive_limit < 0:
        raise ValueError(f"exhaustive_limit must be nonnegative; got {exhaustive_limit}")
    n = 0
    while n <= max_n:
        yield n
        n = n + 1 if n <= exhaustive_limit else int(growth * n)


def iter_scenarios(
    in1: Sequence,
    in2: Sequence,
    max_n: int,
    comp: Optional[Comparator],
    *,
    sizes: Optional[Iterable[int]] = None,
) -> Iterator[Scenario]:
    """
    Scenarios for one element-type pair.

    `in1` must hold at least max_n elements and `in2` at least 2 * max_n.
    """
    _require_length(in1, max_n, "in1")
    _require_length(in2, 2 * max_n, "in2")
    if sizes is None:
        sizes = size_schedule(max_n)

    yield Scenario("plain", in1.view(0, max_n), in2.view(3 * max_n // 10, 5 * max_n // 10), None)

    short = max_n // 10
    yield Scenario("prefix_second_short", in1.view(0, max_n), in2.view(0, short), comp)
    yield Scenario("prefix_second_window", in1.view(0, max_n), in2.view(short, 3 * short), comp)
    yield Scenario("prefix_first_short", in1.view(0, max_n), in2.view(0, 2 * max_n), comp)

    for n in sizes:
        yield from _same_length(in1, in2, n, comp)


def iter_text_scenarios(
    text1: Sequence,
    text2: Sequence,
    max_n: int,
    comp: Optional[Comparator],
    *,
    sizes: Optional[Iterable[int]] = None,
) -> Iterator[Scenario]:
    """
    Scenarios for the character specialization.

    Text buffers are one longer than the generic ones (max_n + 1 and
    2 * max_n + 1), so sizes run up to and including max_n. The plain
    no-predicate call comes last.
    """
    _require_length(text1, max_n + 1, "text1")
    _require_length(text2, 2 * max_n + 1, "text2")
    if sizes is None:
        sizes = size_schedule(max_n)

    for n in sizes:
        yield from _same_length(text1, text2, n, comp)

    yield Scenario("plain", text1.view(0, max_n), text2.view(3 * max_n // 10, 5 * max_n // 10), None)


def _same_length(in1: Sequence, in2: Sequence, n: int, comp: Optional[Comparator]) -> Iterator[Scenario]:
    yield Scenario("equal", in1.view(0, n), in2.view(0, n), comp, n)
    if n == 0:
        # No position exists to differ at.
        return
    with in2.override(n // 2, in2.etype.sentinel):
        yield Scenario("second_less", in1.view(0, n), in2.view(0, n), comp, n)
    with in1.override(n // 5, in1.etype.sentinel):
        yield Scenario("first_less", in1.view(0, n), in2.view(0, n), comp, n)


def _require_length(seq: Sequence, needed: int, label: str) -> None:
    if len(seq) < needed:
        raise ValueError(f"{label} must hold at least {needed} elements; got {len(seq)}")

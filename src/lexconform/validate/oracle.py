"""
Oracle for lexicographical-comparison conformance.

The sequential reference below is the ground truth: a plain element-by-element
walk that orders values only through `comp(x, y)` / `comp(y, x)` (or `<` when
no predicate is given). Every execution policy must reproduce its answer.

Public API (stable):
    ORACLE_NAME
    lexicographical_compare(first, second, comp=None) -> bool
    bind_policies(algorithm, policies) -> list[PolicyBinding]
    invoke_on_all_policies(reporter, first, second, comp=None, *, bindings, case, scenario) -> bool

Conventions:
- The reference never mutates its inputs.
- The oracle hands every policy read-only views, so an algorithm that writes
  to its inputs fails loudly instead of corrupting later scenarios.
- A mismatch is reported, not raised: the oracle always goes on to the next
  policy.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from lexconform.algorithms.policies import ExecutionPolicy
from lexconform.datasets.generators import RangeView
from lexconform.ordering import Comparator

ORACLE_NAME: str = "sequential_lexicographical_compare"

MESSAGE_WITH_PREDICATE = "wrong return result from lexicographical compare with predicate"
MESSAGE_WITHOUT_PREDICATE = "wrong return result from lexicographical compare without predicate"

__all__ = [
    "ORACLE_NAME",
    "MESSAGE_WITH_PREDICATE",
    "MESSAGE_WITHOUT_PREDICATE",
    "PolicyBinding",
    "lexicographical_compare",
    "bind_policies",
    "invoke_on_all_policies",
]

Algorithm = Callable[..., bool]


def lexicographical_compare(first: Any, second: Any, comp: Optional[Comparator] = None) -> bool:
    """
    Return True iff `first` is lexicographically less than `second`.

    Corresponding elements are compared until one orders before the other;
    if one range runs out first, the shorter range is less.
    """
    for x, y in zip(first, second):
        if comp is None:
            if x < y:
                return True
            if y < x:
                return False
        else:
            if comp(x, y):
                return True
            if comp(y, x):
                return False
    return len(first) < len(second)


@dataclass(frozen=True)
class PolicyBinding:
    """An execution policy paired with the adapter that runs the algorithm under it."""

    policy: ExecutionPolicy
    invoke: Callable[[Any, Any, Optional[Comparator]], bool]

    @property
    def name(self) -> str:
        return self.policy.name


def bind_policies(algorithm: Algorithm, policies: Iterable[ExecutionPolicy]) -> List[PolicyBinding]:
    return [PolicyBinding(p, functools.partial(algorithm, p)) for p in policies]


def invoke_on_all_policies(
    reporter: Any,
    first: RangeView,
    second: RangeView,
    comp: Optional[Comparator] = None,
    *,
    bindings: Iterable[PolicyBinding],
    case: str = "",
    scenario: str = "",
) -> bool:
    """
    Check every bound policy against the sequential reference.

    Returns True iff all policies agreed. Each comparison goes through
    `reporter.expect_true`, which records it and never raises.
    """
    xs = first.as_readonly().array
    ys = second.as_readonly().array
    expected = lexicographical_compare(xs, ys, comp)
    message = MESSAGE_WITHOUT_PREDICATE if comp is None else MESSAGE_WITH_PREDICATE

    all_ok = True
    for binding in bindings:
        if comp is None:
            actual = binding.invoke(xs, ys)
        else:
            actual = binding.invoke(xs, ys, comp)
        ok = reporter.expect_true(
            actual == expected,
            message,
            case=case,
            scenario=scenario or f"{first} vs {second}",
            policy=binding.name,
            with_predicate=comp is not None,
            expected=bool(expected),
            actual=bool(actual),
        )
        all_ok = all_ok and ok
    return all_ok

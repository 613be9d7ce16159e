"""
Orderings used by the conformance harness.

A comparator is a capability object exposing one ordering call:

    comp(x, y) -> bool                  # "x is ordered before y"
    comp.block(xs, ys) -> np.ndarray    # the same relation, element-wise

`block` must agree element-wise with the scalar call; the vectorized
execution policies rely on it while the sequential reference only ever uses
the scalar form.

Kinds exercised by the harness:
- None                      natural `<` (see `NATURAL`)
- Less(dtype)/Greater(dtype) standard ascending / descending order after
                            converting both operands to `dtype`
- Predicate(fn)             arbitrary user predicate

`LessThanOnly` is the user-defined element type whose only capability is `<`.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Optional

import numpy as np

__all__ = [
    "Comparator",
    "Predicate",
    "Less",
    "Greater",
    "NATURAL",
    "LessThanOnly",
    "resolve",
]


class Comparator:
    """Binary ordering predicate with an element-wise block form."""

    name: str = "comparator"

    def __call__(self, x: Any, y: Any) -> bool:
        raise NotImplementedError

    def block(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        # Generic fallback: apply the scalar call pairwise.
        if len(xs) == 0:
            return np.zeros(0, dtype=bool)
        return np.frompyfunc(self.__call__, 2, 1)(xs, ys).astype(bool)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class Predicate(Comparator):
    def __init__(
        self,
        fn: Callable[[Any, Any], bool],
        *,
        block: Optional[Callable[[np.ndarray, np.ndarray], np.ndarray]] = None,
        name: str = "predicate",
    ) -> None:
        self._fn = fn
        self._block = block
        self.name = name

    def __call__(self, x: Any, y: Any) -> bool:
        return bool(self._fn(x, y))

    def block(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        if self._block is None:
            return super().block(xs, ys)
        return np.asarray(self._block(xs, ys), dtype=bool)


class _StandardOrder(Comparator):
    _op: Callable[[Any, Any], Any] = operator.lt

    def __init__(self, dtype: Any) -> None:
        self.dtype = np.dtype(dtype)
        self.name = f"{type(self).__name__.lower()}<{self.dtype.name}>"

    def __call__(self, x: Any, y: Any) -> bool:
        cast = self.dtype.type
        return bool(type(self)._op(cast(x), cast(y)))

    def block(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return type(self)._op(xs.astype(self.dtype), ys.astype(self.dtype))


class Less(_StandardOrder):
    """Ascending order in `dtype` (std::less<T> semantics)."""

    _op = operator.lt


class Greater(_StandardOrder):
    """Descending order in `dtype` (std::greater<T> semantics)."""

    _op = operator.gt


class _Natural(Comparator):
    name = "natural"

    def __call__(self, x: Any, y: Any) -> bool:
        return bool(x < y)

    def block(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        if xs.dtype == object or ys.dtype == object:
            return super().block(xs, ys)
        return np.asarray(xs < ys, dtype=bool)


NATURAL: Comparator = _Natural()


def resolve(comp: Optional[Comparator]) -> Comparator:
    """Map the "no predicate" form onto the natural ordering."""
    return NATURAL if comp is None else comp


class LessThanOnly:
    """
    Element type whose only capability is a less-than relation.

    Equality is deliberately unavailable: comparing two instances with `==`
    raises TypeError, and instances are unhashable. Code that orders these
    values must do so through `<` alone.
    """

    __slots__ = ("_value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self._value = int(value)

    def __lt__(self, other: "LessThanOnly") -> bool:
        if not isinstance(other, LessThanOnly):
            return NotImplemented
        return self._value < other._value

    def __eq__(self, other: object) -> bool:
        raise TypeError("LessThanOnly supports only '<'")

    def __ne__(self, other: object) -> bool:
        raise TypeError("LessThanOnly supports only '<'")

    def __repr__(self) -> str:
        return f"LessThanOnly({self._value})"

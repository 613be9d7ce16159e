"""
Deterministic, index-addressable test data for the conformance harness.

Element types (registry `ELEMENT_TYPES`):
- "uint16", "int32":
    Integers T(k). Narrow types wrap modulo 2**bits, like a C cast.
- "float32", "float64":
    Floating point T(k).
- "wrapped_int32":
    `LessThanOnly(int32(k))`, a type that can only be ordered with `<`.
- "char":
    Single characters chr(k mod 256); used for the text specialization.

Public API (stable):
    element_type(name: str) -> ElementType
    Sequence(n: int, etype: ElementType)
    Sequence.replace / restore / override      # mutation utility
    Sequence.view / cview -> RangeView         # half-open range views

Conventions:
- A Sequence is filled exactly once from `etype.generate(n)`; for a fixed
  type and n its contents are reproducible across runs.
- Buffers are large (the harness uses up to 2,000,000 elements) and are
  reused across sub-cases: callers alter single positions through
  `override(...)`, which always puts the generator-defined value back.
- Range views never copy. `cview` returns a view with NumPy's writeable flag
  cleared so anything handed one cannot modify the buffer.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator

import numpy as np

from lexconform.ordering import LessThanOnly

__all__ = [
    "ElementType",
    "ELEMENT_TYPES",
    "element_type",
    "Sequence",
    "RangeView",
]


@dataclass(frozen=True, eq=False)
class ElementType:
    name: str
    dtype: np.dtype
    convert: Callable[[np.ndarray], np.ndarray]  # int64 index array -> values
    sentinel: Any

    def generate(self, n: int) -> np.ndarray:
        _validate_n(n)
        return self.convert(np.arange(n, dtype=np.int64))

    def value(self, k: int) -> Any:
        """The generator-defined value at index `k`."""
        return self.convert(np.array([k], dtype=np.int64))[0]


def _numeric(name: str, dtype: Any) -> ElementType:
    dt = np.dtype(dtype)

    def convert(idx: np.ndarray) -> np.ndarray:
        # astype wraps out-of-range integers, matching T(k) for narrow types
        return idx.astype(dt)

    return ElementType(name, dt, convert, convert(np.array([-1], dtype=np.int64))[0])


def _wrapped(idx: np.ndarray) -> np.ndarray:
    out = np.empty(len(idx), dtype=object)
    out[:] = [LessThanOnly(v) for v in idx.astype(np.int32).tolist()]
    return out


def _chars(idx: np.ndarray) -> np.ndarray:
    # UCS4 code points reinterpreted as one-character strings
    return (idx % 256).astype(np.uint32).view("U1")


ELEMENT_TYPES: Dict[str, ElementType] = {
    et.name: et
    for et in (
        _numeric("uint16", np.uint16),
        _numeric("int32", np.int32),
        _numeric("float32", np.float32),
        _numeric("float64", np.float64),
        ElementType("wrapped_int32", np.dtype(object), _wrapped, LessThanOnly(-1)),
        ElementType("char", np.dtype("U1"), _chars, "a"),
    )
}


def element_type(name: str) -> ElementType:
    if name not in ELEMENT_TYPES:
        raise ValueError(
            f"Unsupported element type: {name!r}. Supported: {sorted(ELEMENT_TYPES)}"
        )
    return ELEMENT_TYPES[name]


@dataclass(frozen=True)
class RangeView:
    """Half-open window [begin, end) into a Sequence; owns no memory."""

    source: "Sequence"
    begin: int
    end: int
    readonly: bool = False

    def __post_init__(self) -> None:
        if not (0 <= self.begin <= self.end <= len(self.source)):
            raise ValueError(
                f"range [{self.begin}, {self.end}) out of bounds for length {len(self.source)}"
            )

    def __len__(self) -> int:
        return self.end - self.begin

    @property
    def array(self) -> np.ndarray:
        arr = self.source.data[self.begin : self.end]
        if self.readonly:
            arr = arr.view()
            arr.flags.writeable = False
        return arr

    def as_readonly(self) -> "RangeView":
        if self.readonly:
            return self
        return RangeView(self.source, self.begin, self.end, readonly=True)

    def __str__(self) -> str:
        return f"{self.source.etype.name}[{self.begin}:{self.end}]"


class Sequence:
    """Owned, contiguous, mutable buffer with `data[i] == etype.value(i)`."""

    def __init__(self, n: int, etype: ElementType) -> None:
        self.etype = etype
        self.data = etype.generate(n)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, i: int) -> Any:
        return self.data[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self.data[i] = value

    def generated(self, i: int) -> Any:
        return self.etype.value(i)

    # ------------------------- mutation ------------------------- #

    def replace(self, i: int, value: Any) -> Any:
        """Overwrite position `i` and return the value it held."""
        prior = self.data[i]
        self.data[i] = value
        return prior

    def restore(self, i: int) -> None:
        self.data[i] = self.generated(i)

    @contextmanager
    def override(self, i: int, value: Any) -> Iterator[Any]:
        """
        Temporarily set position `i` to `value`.

        Yields the prior value. The prior value is written back on every
        exit path, including exceptions raised by the body and the close of
        a suspended generator that holds the override.
        """
        prior = self.replace(i, value)
        try:
            yield prior
        finally:
            self.data[i] = prior

    # ------------------------- views ------------------------- #

    def view(self, begin: int, end: int) -> RangeView:
        return RangeView(self, begin, end)

    def cview(self, begin: int, end: int) -> RangeView:
        return RangeView(self, begin, end, readonly=True)

    def __repr__(self) -> str:
        return f"Sequence({len(self)}, {self.etype.name})"


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")

"""
Execution policy tags understood by the built-in algorithm.

The harness never branches on these; it only enumerates them (see
`lexconform.validate.oracle.bind_policies`).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import psutil

__all__ = [
    "ExecutionPolicy",
    "SEQ",
    "UNSEQ",
    "PAR",
    "PAR_UNSEQ",
    "POLICIES",
    "resolve_policies",
    "default_workers",
]

DEFAULT_GRAIN = 2048


def default_workers() -> int:
    return psutil.cpu_count(logical=True) or 1


@dataclass(frozen=True)
class ExecutionPolicy:
    name: str
    parallel: bool
    vectorized: bool
    workers: Optional[int] = None  # None -> logical CPU count
    grain: int = DEFAULT_GRAIN  # inputs shorter than this run serially

    def configured(self, *, workers: Optional[int] = None, grain: Optional[int] = None) -> "ExecutionPolicy":
        changes = {}
        if workers is not None:
            changes["workers"] = workers
        if grain is not None:
            changes["grain"] = grain
        return dataclasses.replace(self, **changes)

    def __str__(self) -> str:
        return self.name


SEQ = ExecutionPolicy("seq", parallel=False, vectorized=False)
UNSEQ = ExecutionPolicy("unseq", parallel=False, vectorized=True)
PAR = ExecutionPolicy("par", parallel=True, vectorized=False)
PAR_UNSEQ = ExecutionPolicy("par_unseq", parallel=True, vectorized=True)

POLICIES: Dict[str, ExecutionPolicy] = {p.name: p for p in (SEQ, UNSEQ, PAR, PAR_UNSEQ)}


def resolve_policies(
    names: Iterable[str],
    *,
    workers: Optional[int] = None,
    grain: Optional[int] = None,
) -> List[ExecutionPolicy]:
    out: List[ExecutionPolicy] = []
    for name in names:
        if name not in POLICIES:
            raise ValueError(f"Unknown execution policy: {name!r}. Supported: {sorted(POLICIES)}")
        out.append(POLICIES[name].configured(workers=workers, grain=grain))
    return out

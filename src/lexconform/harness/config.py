"""
Harness configuration, loaded from YAML.

Example (every key optional; defaults shown):

    max_n: 1000000             # generic cases: in1 holds max_n, in2 2 * max_n
    text_max_n: 1000000        # text case: buffers of max_n + 1 and 2 * max_n + 1
    exhaustive_limit: 16       # every size up to here is checked
    growth: 3.1415             # geometric step past exhaustive_limit
    policies: [seq, unseq, par, par_unseq]
    workers: null              # null -> logical CPU count
    grain: 2048                # shorter inputs run serially under every policy
    cases: [uint16_float64, float32_int32, float64_int32, wrapped_int32, text]
    algorithm: null            # "package.module:function" to test another implementation
    verify_canonical: false    # check buffers are unchanged after each case
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from lexconform.algorithms.policies import DEFAULT_GRAIN, POLICIES
from lexconform.harness.scenarios import DEFAULT_EXHAUSTIVE_LIMIT, DEFAULT_GROWTH

__all__ = ["HarnessConfig", "load_config", "parse_config", "CASE_NAMES"]

CASE_NAMES = ["uint16_float64", "float32_int32", "float64_int32", "wrapped_int32", "text"]


@dataclass
class HarnessConfig:
    max_n: int = 1_000_000
    text_max_n: int = 1_000_000
    exhaustive_limit: int = DEFAULT_EXHAUSTIVE_LIMIT
    growth: float = DEFAULT_GROWTH
    policies: List[str] = field(default_factory=lambda: list(POLICIES))
    workers: Optional[int] = None
    grain: int = DEFAULT_GRAIN
    cases: List[str] = field(default_factory=lambda: list(CASE_NAMES))
    algorithm: Optional[str] = None
    verify_canonical: bool = False


def load_config(path: Path) -> HarnessConfig:
    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return parse_config(raw or {})


def parse_config(raw: Dict[str, Any]) -> HarnessConfig:
    if not isinstance(raw, dict):
        raise ValueError("config must be a mapping")

    known = {f.name for f in fields(HarnessConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    cfg = HarnessConfig(**raw)

    for key in ("max_n", "text_max_n", "exhaustive_limit", "grain"):
        val = getattr(cfg, key)
        if not _is_int(val) or val < 0:
            raise ValueError(f"{key} must be a nonnegative integer; got {val!r}")
    if cfg.grain < 1:
        raise ValueError(f"grain must be >= 1; got {cfg.grain}")

    try:
        cfg.growth = float(cfg.growth)
    except (TypeError, ValueError) as e:
        raise ValueError(f"growth must be a number > 1; got {cfg.growth!r}") from e
    if cfg.growth <= 1.0:
        raise ValueError(f"growth must be > 1; got {cfg.growth}")

    if cfg.workers is not None and (not _is_int(cfg.workers) or cfg.workers < 1):
        raise ValueError(f"workers must be a positive integer or null; got {cfg.workers!r}")

    cfg.policies = _parse_names(cfg.policies, "policies", sorted(POLICIES))
    cfg.cases = _parse_names(cfg.cases, "cases", CASE_NAMES)

    if cfg.algorithm is not None and (not isinstance(cfg.algorithm, str) or ":" not in cfg.algorithm):
        raise ValueError(f"algorithm must look like 'package.module:function'; got {cfg.algorithm!r}")
    if not isinstance(cfg.verify_canonical, bool):
        raise ValueError("verify_canonical must be a boolean")
    return cfg


# ------------------------- helpers ------------------------- #


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _parse_names(val: Any, key: str, supported: List[str]) -> List[str]:
    if not isinstance(val, list) or not val:
        raise ValueError(f"{key} must be a non-empty list")
    bad = [v for v in val if v not in supported]
    if bad:
        raise ValueError(f"Unsupported {key}: {bad}. Supported: {supported}")
    if len(set(val)) != len(val):
        raise ValueError(f"Duplicate entries in {key}: {val}")
    return list(val)

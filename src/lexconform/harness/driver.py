"""
Conformance driver: runs the scenario matrix for every element-type case.

Usage (from repo root):
    python -m lexconform.harness.driver                 # built-in defaults
    python -m lexconform.harness.driver configs/quick.yaml

Cases (element types of range 1 / range 2, comparator):
    uint16_float64   uint16 / float64,           Less(float64)
    float32_int32    float32 / int32,            Greater(float32)
    float64_int32    float64 / int32,            x*x < y*y
    wrapped_int32    LessThanOnly / LessThanOnly, x < y
    text             char / char,                x < y  (own size schedule)

Exit status is 0 iff no policy disagreed with the sequential reference.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence as SequenceT

import numpy as np
from rich.console import Console
from tqdm import tqdm

from lexconform.algorithms import lexicographical_compare, resolve_policies
from lexconform.datasets import Sequence, element_type
from lexconform.harness.config import HarnessConfig, load_config, parse_config
from lexconform.harness.scenarios import Scenario, iter_scenarios, iter_text_scenarios, size_schedule
from lexconform.ordering import Comparator, Greater, Less, Predicate
from lexconform.validate import ORACLE_NAME, Reporter, assert_canonical, bind_policies, invoke_on_all_policies

_console = Console()


# ------------------------- data structures ------------------------- #


@dataclass(frozen=True)
class CaseSpec:
    name: str
    first: str  # element type names
    second: str
    comp: Comparator
    text: bool = False


def _squares_less(x: Any, y: Any) -> bool:
    return float(x) * float(x) < float(y) * float(y)


def _squares_less_block(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    return np.square(xs.astype(np.float64)) < np.square(ys.astype(np.float64))


def _less_than(x: Any, y: Any) -> bool:
    return x < y


CASES: Dict[str, CaseSpec] = {
    c.name: c
    for c in (
        CaseSpec("uint16_float64", "uint16", "float64", Less(np.float64)),
        CaseSpec("float32_int32", "float32", "int32", Greater(np.float32)),
        CaseSpec(
            "float64_int32",
            "float64",
            "int32",
            Predicate(_squares_less, block=_squares_less_block, name="squares_less"),
        ),
        CaseSpec("wrapped_int32", "wrapped_int32", "wrapped_int32", Predicate(_less_than, name="wrapper_less")),
        CaseSpec("text", "char", "char", Predicate(_less_than, name="char_less"), text=True),
    )
}


# ------------------------- helpers ------------------------- #


def _resolve_algorithm(ref: Optional[str]) -> Callable[..., bool]:
    if ref is None:
        return lexicographical_compare
    module_name, _, attr = ref.partition(":")
    try:
        mod = importlib.import_module(module_name)
    except Exception as e:
        raise ImportError(f"Could not import algorithm module {module_name!r}: {e!r}") from e
    fn = getattr(mod, attr, None)
    if not callable(fn):
        raise AttributeError(
            f"Algorithm module {module_name!r} must define a callable `{attr}(policy, first, second, comp=None)`"
        )
    return fn


# ------------------------- core runner ------------------------- #


def run_case(
    case: CaseSpec,
    cfg: HarnessConfig,
    reporter: Reporter,
    bindings: SequenceT[Any],
) -> None:
    """Build the case's buffers once and check every scenario against every policy."""
    et1, et2 = element_type(case.first), element_type(case.second)
    if case.text:
        max_n = cfg.text_max_n
        in1, in2 = Sequence(max_n + 1, et1), Sequence(2 * max_n + 1, et2)
        enumerate_scenarios = iter_text_scenarios
    else:
        max_n = cfg.max_n
        in1, in2 = Sequence(max_n, et1), Sequence(2 * max_n, et2)
        enumerate_scenarios = iter_scenarios

    sizes = size_schedule(max_n, exhaustive_limit=cfg.exhaustive_limit, growth=cfg.growth)
    scenarios = enumerate_scenarios(in1, in2, max_n, case.comp, sizes=sizes)
    with closing(scenarios):
        for scenario in tqdm(scenarios, desc=case.name, unit="scenario", leave=False):
            _check(reporter, case, scenario, bindings)

    if cfg.verify_canonical:
        assert_canonical(in1)
        assert_canonical(in2)


def _check(reporter: Reporter, case: CaseSpec, scenario: Scenario, bindings: SequenceT[Any]) -> None:
    invoke_on_all_policies(
        reporter,
        scenario.first,
        scenario.second,
        scenario.comp,
        bindings=bindings,
        case=case.name,
        scenario=scenario.describe(),
    )


def run_conformance(cfg: HarnessConfig, reporter: Optional[Reporter] = None) -> Reporter:
    reporter = reporter or Reporter(_console)
    console = reporter.console

    algorithm = _resolve_algorithm(cfg.algorithm)
    policies = resolve_policies(cfg.policies, workers=cfg.workers, grain=cfg.grain)
    bindings = bind_policies(algorithm, policies)

    console.print(f"[bold]Algorithm:[/bold] {cfg.algorithm or 'lexconform.algorithms:lexicographical_compare'}")
    console.print(f"[bold]Reference:[/bold] {ORACLE_NAME}")
    console.print(f"[bold]Policies:[/bold] {', '.join(p.name for p in policies)}")
    console.print(f"[bold]Cases:[/bold] {', '.join(cfg.cases)}")
    console.print()

    for name in cfg.cases:
        run_case(CASES[name], cfg, reporter, bindings)

    reporter.print_summary()

    if reporter.ok:
        console.print(f"[bold green]{reporter.done()}[/bold green]")
    else:
        console.print(f"[bold red]{len(reporter.failures)} mismatch(es).[/bold red] {reporter.done()}")
    return reporter


# ------------------------- CLI ------------------------- #


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Check a parallel lexicographical compare against the sequential reference."
    )
    p.add_argument("config", nargs="?", default=None, help="Optional path to a YAML harness config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.config is None:
        cfg = parse_config({})
    else:
        config_path = Path(args.config).resolve()
        if not config_path.exists():
            raise SystemExit(f"Config file not found: {config_path}")
        cfg = load_config(config_path)
    try:
        reporter = run_conformance(cfg)
    except Exception as e:
        _console.print(f"[bold red]Harness failed:[/bold red] {e!r}")
        raise
    return 0 if reporter.ok else 1


if __name__ == "__main__":
    sys.exit(main())

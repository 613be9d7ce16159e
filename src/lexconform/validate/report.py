"""
Pass/fail recording for conformance checks.

Every policy check is kept as an `Outcome`. Mismatches are printed as they
happen and never abort the run; `Reporter.ok` tells whether any was seen.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table

__all__ = ["Outcome", "Reporter", "DONE"]

DONE = "done"

_SUMMARY_COLUMNS = ["case", "policy", "checks", "failures"]


@dataclass(frozen=True)
class Outcome:
    case: str
    scenario: str
    policy: str
    with_predicate: bool
    expected: Optional[bool]
    actual: Optional[bool]
    message: str
    ok: bool

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


class Reporter:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.outcomes: List[Outcome] = []

    def expect_true(
        self,
        condition: bool,
        message: str,
        *,
        case: str = "",
        scenario: str = "",
        policy: str = "",
        with_predicate: bool = False,
        expected: Optional[bool] = None,
        actual: Optional[bool] = None,
    ) -> bool:
        ok = bool(condition)
        outcome = Outcome(case, scenario, policy, with_predicate, expected, actual, message, ok)
        self.outcomes.append(outcome)
        if not ok:
            self.console.print(
                f"[bold red]FAIL[/bold red] {message} "
                f"(case={case}, scenario={scenario}, policy={policy}, "
                f"expected={expected}, actual={actual})",
                highlight=False,
            )
        return ok

    @property
    def failures(self) -> List[Outcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> pd.DataFrame:
        """Checks and failures per (case, policy)."""
        if not self.outcomes:
            return pd.DataFrame(columns=_SUMMARY_COLUMNS)
        df = pd.DataFrame([o.to_record() for o in self.outcomes])
        df["failed"] = ~df["ok"]
        agg = (
            df.groupby(["case", "policy"], as_index=False, sort=False)
            .agg(checks=("ok", "size"), failures=("failed", "sum"))
        )
        agg["failures"] = agg["failures"].astype("int64")
        return agg[_SUMMARY_COLUMNS]

    def print_summary(self) -> None:
        summary = self.summary()
        table = Table(title="Conformance Summary (failures / checks)")
        table.add_column("Case", style="bold")
        policies = list(dict.fromkeys(summary["policy"])) if not summary.empty else []
        for p in policies:
            table.add_column(p, justify="right")
        for case in dict.fromkeys(summary["case"]):
            row = [str(case)]
            for p in policies:
                s = summary[(summary["case"] == case) & (summary["policy"] == p)]
                if s.empty:
                    row.append("—")
                    continue
                fails = int(s["failures"].values[0])
                checks = int(s["checks"].values[0])
                style = "red" if fails else "green"
                row.append(f"[{style}]{fails} / {checks}[/{style}]")
            table.add_row(*row)
        self.console.print()
        self.console.print(table)
        self.console.print()

    def done(self) -> str:
        return DONE

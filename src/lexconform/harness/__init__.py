"""
Harness package public API.

    from lexconform.harness import HarnessConfig, size_schedule, iter_scenarios

The driver lives in `lexconform.harness.driver` (run it with `python -m`).
"""

from .config import HarnessConfig, load_config, parse_config
from .scenarios import Scenario, iter_scenarios, iter_text_scenarios, size_schedule

__all__ = [
    "HarnessConfig",
    "load_config",
    "parse_config",
    "Scenario",
    "iter_scenarios",
    "iter_text_scenarios",
    "size_schedule",
]

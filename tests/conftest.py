"""
Shared test setup.

Inserts the project `src/` onto sys.path so tests run without installing the package.
"""

from __future__ import annotations

import io
import pathlib
import sys

import pytest

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from rich.console import Console  # noqa: E402

from lexconform.validate import Reporter  # noqa: E402


@pytest.fixture
def reporter() -> Reporter:
    """Reporter whose console output is captured instead of printed."""
    return Reporter(Console(file=io.StringIO(), width=200))

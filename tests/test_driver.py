"""
End-to-end tests for the conformance driver and its configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from lexconform.harness.config import CASE_NAMES, HarnessConfig, load_config, parse_config
from lexconform.harness.driver import main, run_conformance
from lexconform.validate import ORACLE_NAME, Reporter

SMALL = {"max_n": 200, "text_max_n": 200, "workers": 2, "grain": 16, "verify_canonical": True}


def always_false(policy, first, second, comp=None) -> bool:
    return False


# ------------------------- configuration ------------------------- #

def test_defaults_match_reference_sizes() -> None:
    cfg = parse_config({})
    assert cfg.max_n == 1_000_000
    assert cfg.text_max_n == 1_000_000
    assert cfg.exhaustive_limit == 16
    assert cfg.growth == pytest.approx(3.1415)
    assert cfg.policies == ["seq", "unseq", "par", "par_unseq"]
    assert cfg.cases == CASE_NAMES


@pytest.mark.parametrize(
    "raw, match",
    [
        ({"max_n": -1}, "max_n"),
        ({"max_n": "10"}, "max_n"),
        ({"grain": 0}, "grain"),
        ({"growth": 1.0}, "growth"),
        ({"growth": "fast"}, "growth"),
        ({"workers": 0}, "workers"),
        ({"policies": ["seq", "gpu"]}, "policies"),
        ({"policies": []}, "policies"),
        ({"cases": ["text", "text"]}, "Duplicate"),
        ({"algorithm": "no_colon"}, "algorithm"),
        ({"verify_canonical": "yes"}, "verify_canonical"),
        ({"timeout": 3}, "Unknown config keys"),
        ({"output_dir": "runs"}, "Unknown config keys"),
    ],
)
def test_invalid_config(raw, match) -> None:
    with pytest.raises(ValueError, match=match):
        parse_config(raw)


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({"max_n": 50, "policies": ["seq", "par"]}), encoding="utf-8")
    cfg = load_config(path)
    assert isinstance(cfg, HarnessConfig)
    assert (cfg.max_n, cfg.policies) == (50, ["seq", "par"])


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == HarnessConfig()


# ------------------------- runs ------------------------- #

def test_full_matrix_passes(reporter: Reporter) -> None:
    result = run_conformance(parse_config(SMALL), reporter)
    assert result is reporter
    assert reporter.ok, [o.scenario for o in reporter.failures]
    assert {o.case for o in reporter.outcomes} == set(CASE_NAMES)
    assert {o.policy for o in reporter.outcomes} == {"seq", "unseq", "par", "par_unseq"}
    assert any(o.with_predicate for o in reporter.outcomes)
    assert any(not o.with_predicate for o in reporter.outcomes)
    assert "done" in reporter.console.file.getvalue()


def test_run_persists_nothing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, reporter: Reporter) -> None:
    monkeypatch.chdir(tmp_path)
    run_conformance(parse_config({**SMALL, "cases": ["float32_int32", "text"]}), reporter)
    assert list(tmp_path.iterdir()) == []

    summary = reporter.summary()
    assert len(summary) == 2 * 4
    assert summary["failures"].sum() == 0


def test_run_header_names_reference(reporter: Reporter) -> None:
    run_conformance(parse_config({**SMALL, "cases": ["float64_int32"]}), reporter)
    out = reporter.console.file.getvalue()
    assert f"Reference: {ORACLE_NAME}" in out
    assert "Algorithm: lexconform.algorithms:lexicographical_compare" in out


def test_mismatches_do_not_stop_the_run(reporter: Reporter) -> None:
    cfg = parse_config({**SMALL, "cases": ["uint16_float64", "text"], "algorithm": f"{__name__}:always_false"})
    run_conformance(cfg, reporter)
    assert not reporter.ok
    # both cases still ran to completion
    assert {o.case for o in reporter.failures} == {"uint16_float64", "text"}
    assert len(reporter.outcomes) > len(reporter.failures)


def test_unknown_algorithm_module(reporter: Reporter) -> None:
    cfg = parse_config({**SMALL, "algorithm": "no_such_module_here:compare"})
    with pytest.raises(ImportError):
        run_conformance(cfg, reporter)


def test_main_exit_status(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    good.write_text(yaml.safe_dump({**SMALL, "cases": ["float64_int32"]}), encoding="utf-8")
    assert main([str(good)]) == 0

    bad = tmp_path / "bad.yaml"
    bad.write_text(
        yaml.safe_dump({**SMALL, "cases": ["wrapped_int32"], "algorithm": f"{__name__}:always_false"}),
        encoding="utf-8",
    )
    assert main([str(bad)]) == 1


def test_main_missing_config(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.yaml")])

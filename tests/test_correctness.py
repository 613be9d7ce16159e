"""
Correctness tests for the policy-parameterized lexicographical compare against the
oracle (the sequential reference).

What we check:
- Every policy matches the reference exactly (strongest guarantee)
- Prefix, equality and single-difference laws hold under every policy
- Heterogeneous element types and every comparator kind
- No input mutation (API contract)

Policies are configured with a tiny grain so the parallel chunking is exercised
on short inputs.
"""

from __future__ import annotations

from typing import List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from lexconform.algorithms import POLICIES, lexicographical_compare
from lexconform.datasets import Sequence, element_type
from lexconform.harness.driver import CASES
from lexconform.ordering import Greater, Less, LessThanOnly, Predicate
from lexconform.validate import lexicographical_compare as reference

POLICY_LIST = [p.configured(workers=3, grain=4) for p in POLICIES.values()]
POLICY_IDS = [p.name for p in POLICY_LIST]

COMPARATORS = [
    None,
    Less(np.float64),
    Greater(np.float32),
    CASES["float64_int32"].comp,
    Predicate(lambda x, y: x < y, name="unvectorized"),
]
COMPARATOR_IDS = ["natural", "less_f64", "greater_f32", "squares", "predicate"]


# ------------------------- helpers ------------------------- #

def _check_one(policy, a: np.ndarray, b: np.ndarray, comp=None) -> None:
    """Common assertion bundle for one pair of inputs."""
    a_before, b_before = a.copy(), b.copy()
    expected = reference(a, b, comp)
    assert lexicographical_compare(policy, a, b, comp) == expected
    assert lexicographical_compare(policy, b, a, comp) == reference(b, a, comp)
    assert np.array_equal(a, a_before) and np.array_equal(b, b_before), "inputs must not be mutated"


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("policy", POLICY_LIST, ids=POLICY_IDS)
@pytest.mark.parametrize(
    "a, b, expected",
    [
        ([], [], False),
        ([], [0], True),
        ([0], [], False),
        ([0, 1, 2], [0, 1, 2, 3], True),
        ([0, 1, 2, 3], [0, 1, 2], False),
        ([0, 1, 2, 3, 4], [0, 1, -1, 3, 4], False),
        ([0, 1, -1, 3, 4], [0, 1, 2, 3, 4], True),
        (list(range(50)), list(range(50)), False),
        (list(range(50)) + [-1], list(range(51)), True),
    ],
)
def test_unit_cases(policy, a: List[int], b: List[int], expected: bool) -> None:
    x, y = np.array(a, dtype=np.int32), np.array(b, dtype=np.float64)
    assert lexicographical_compare(policy, x, y) is expected
    _check_one(policy, x, y)


@pytest.mark.parametrize("policy", POLICY_LIST, ids=POLICY_IDS)
@pytest.mark.parametrize("n", [0, 1, 3, 4, 5, 17, 100, 1000])
def test_laws_over_sizes(policy, n: int) -> None:
    a = Sequence(n, element_type("int32"))
    b = Sequence(n + 1, element_type("int32"))

    # equality
    assert not lexicographical_compare(policy, a.data, b.data[:n])
    assert not lexicographical_compare(policy, b.data[:n], a.data)
    # prefix
    assert lexicographical_compare(policy, a.data, b.data)
    assert not lexicographical_compare(policy, b.data, a.data)
    # single difference
    if n:
        for i in {n // 5, n // 2, n - 1}:
            with a.override(i, -1):
                assert lexicographical_compare(policy, a.data, b.data[:n])
                assert not lexicographical_compare(policy, b.data[:n], a.data)


@pytest.mark.parametrize("policy", POLICY_LIST, ids=POLICY_IDS)
def test_less_than_only_elements(policy) -> None:
    a = Sequence(64, element_type("wrapped_int32"))
    b = Sequence(64, element_type("wrapped_int32"))
    assert not lexicographical_compare(policy, a.data, b.data)
    with b.override(40, LessThanOnly(-1)):
        assert lexicographical_compare(policy, b.data, a.data)
        assert lexicographical_compare(policy, b.data, a.data, CASES["wrapped_int32"].comp)
        assert not lexicographical_compare(policy, a.data, b.data)


@pytest.mark.parametrize("policy", POLICY_LIST, ids=POLICY_IDS)
@pytest.mark.parametrize("comp", [None, CASES["text"].comp], ids=["natural", "predicate"])
def test_characters(policy, comp) -> None:
    a = Sequence(300, element_type("char"))
    b = Sequence(301, element_type("char"))
    assert lexicographical_compare(policy, a.data, b.data, comp)
    with b.override(150, "a"):
        # "a" orders before chr(150)
        assert lexicographical_compare(policy, b.data, a.data, comp)
        assert not lexicographical_compare(policy, a.data, b.data, comp)
        assert lexicographical_compare(policy, b.data, a.data, comp) is reference(b.data, a.data, comp)


@pytest.mark.parametrize("policy", POLICY_LIST, ids=POLICY_IDS)
def test_difference_past_first_chunk(policy) -> None:
    # Several chunks differ; only the earliest one decides.
    a = np.zeros(400, dtype=np.int32)
    b = np.zeros(400, dtype=np.int32)
    b[37], a[200], b[350] = 1, 5, -5
    assert lexicographical_compare(policy, a, b) is True
    assert lexicographical_compare(policy, b, a) is False


def test_large_input_uses_default_grain() -> None:
    a = Sequence(50_000, element_type("float32"))
    b = Sequence(50_000, element_type("int32"))
    for p in POLICIES.values():
        with b.override(30_000, -1):
            _check_one(p.configured(workers=2), a.data, b.data, Greater(np.float32))


# ------------------------- property-based tests (randomized) ------------------------- #

# Small alphabets make long common prefixes likely.
small_ints = st.integers(min_value=-3, max_value=3)
prefix_pairs = st.tuples(
    st.lists(small_ints, max_size=30),
    st.lists(small_ints, max_size=8),
    st.lists(small_ints, max_size=8),
)


@settings(deadline=None, max_examples=60)
@given(prefix_pairs, st.sampled_from(list(zip(COMPARATOR_IDS, COMPARATORS))))
def test_property_matches_reference(parts, named_comp) -> None:
    common, tail_a, tail_b = parts
    _, comp = named_comp
    a = np.array(common + tail_a, dtype=np.float64)
    b = np.array(common + tail_b, dtype=np.int32)
    for policy in POLICY_LIST:
        _check_one(policy, a, b, comp)


@settings(deadline=None, max_examples=40)
@given(st.lists(st.integers(min_value=0, max_value=65_535), max_size=60), st.data())
def test_property_single_override(values, data) -> None:
    a = np.array(values, dtype=np.uint16)
    b = a.astype(np.float64)
    if len(values):
        i = data.draw(st.integers(min_value=0, max_value=len(values) - 1))
        b[i] = -1.0
    for policy in POLICY_LIST:
        _check_one(policy, a, b, Less(np.float64))
        _check_one(policy, a, b)

"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        lexicographical_compare
        PolicyBinding
        bind_policies
        invoke_on_all_policies

    - Reporting:
        Outcome
        Reporter

    - Property checks:
        equivalent
        first_difference_index
        lexicographically_equal
        assert_no_mutation
        assert_canonical
"""

from .oracle import (
    ORACLE_NAME,
    PolicyBinding,
    bind_policies,
    invoke_on_all_policies,
    lexicographical_compare,
)
from .properties import (
    assert_canonical,
    assert_no_mutation,
    equivalent,
    first_difference_index,
    lexicographically_equal,
)
from .report import Outcome, Reporter

__all__ = [
    "ORACLE_NAME",
    "lexicographical_compare",
    "PolicyBinding",
    "bind_policies",
    "invoke_on_all_policies",
    "Outcome",
    "Reporter",
    "equivalent",
    "first_difference_index",
    "lexicographically_equal",
    "assert_no_mutation",
    "assert_canonical",
]

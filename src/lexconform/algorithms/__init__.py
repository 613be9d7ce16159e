"""
Algorithms package public API.

    from lexconform.algorithms import lexicographical_compare, POLICIES
"""

from .lexicographical import lexicographical_compare
from .policies import PAR, PAR_UNSEQ, POLICIES, SEQ, UNSEQ, ExecutionPolicy, resolve_policies

__all__ = [
    "lexicographical_compare",
    "ExecutionPolicy",
    "SEQ",
    "UNSEQ",
    "PAR",
    "PAR_UNSEQ",
    "POLICIES",
    "resolve_policies",
]

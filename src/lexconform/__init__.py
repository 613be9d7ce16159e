"""Conformance harness for policy-parameterized lexicographical comparison."""

__version__ = "0.1.0"

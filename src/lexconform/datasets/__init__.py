"""
Datasets package public API.

Re-export the sequence generator so callers can write:
    from lexconform.datasets import Sequence, element_type, ELEMENT_TYPES
"""

from .generators import ELEMENT_TYPES, ElementType, RangeView, Sequence, element_type

__all__ = ["ELEMENT_TYPES", "ElementType", "RangeView", "Sequence", "element_type"]

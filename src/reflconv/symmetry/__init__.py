"""
Crystallographic symmetry helpers.
"""

from reflconv.symmetry.asu import AsuReducer, GemmiAsuReducer, Miller

__all__ = ["AsuReducer", "GemmiAsuReducer", "Miller"]

"""
File parsers for reflection data.

Provides:
- mmCIF reflection blocks (gemmi)
- value-token predicates
"""

from reflconv.parsers.cif_parser import CifReflnParser, ReflnTable
from reflconv.parsers.values import as_int, as_number, is_null

__all__ = [
    "CifReflnParser",
    "ReflnTable",
    "as_int",
    "as_number",
    "is_null",
]

"""
Predicates and converters for mmCIF value tokens.

Thin wrappers over gemmi.cif so the conversion engine never touches
the CIF library directly.
"""

from gemmi import cif


def is_null(value: str) -> bool:
    """True for the CIF missing/inapplicable markers '?' and '.'."""
    return cif.is_null(value)


def as_number(value: str) -> float:
    """Parse a CIF number (standard uncertainty allowed); NaN if not a number."""
    return cif.as_number(value)


def as_int(value: str) -> int:
    """
    Parse a CIF integer.

    Raises:
        ValueError: If the token is not an integer
    """
    try:
        return cif.as_int(value)
    except (RuntimeError, ValueError) as e:
        raise ValueError(f"not an integer: {value!r}") from e

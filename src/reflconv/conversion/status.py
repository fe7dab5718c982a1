"""
Free-flag status encoding.
"""

import math


def status_to_freeflag(token: str) -> float:
    """
    Encode an mmCIF _refln.status token as an MTZ free-flag value.

    'o' (working set) -> 1.0, 'f' (free set) -> 0.0, anything else -> NaN.
    One layer of surrounding quotes is ignored.
    """
    c = token[:1]
    if c in ("'", '"'):
        c = token[1:2]
    if c == "o":
        return 1.0
    if c == "f":
        return 0.0
    return math.nan

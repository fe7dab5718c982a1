"""
Reduction of Miller indices to the reciprocal-space asymmetric unit.
"""

import logging
from typing import Optional, Protocol, Sequence

import gemmi

logger = logging.getLogger(__name__)

Miller = tuple[int, int, int]


class AsuReducer(Protocol):
    """Maps an index triple to its ASU representative and symmetry-operator tag."""

    def reduce(self, hkl: Sequence[int]) -> tuple[Miller, int]: ...


class GemmiAsuReducer:
    """
    AsuReducer backed by gemmi's ReciprocalAsu.

    The operator tag is the MTZ M/ISYM value: odd for the operator
    applied to hkl, even for its Friedel mate.

    Example:
        reducer = GemmiAsuReducer("P 1 21 1")
        (h, k, l), isym = reducer.reduce((-1, 0, 0))
    """

    def __init__(self, spacegroup: Optional[str]):
        if spacegroup is None:
            logger.warning("No space group in the block, reducing indices in P 1")
            spacegroup = "P 1"
        self.spacegroup = gemmi.SpaceGroup(spacegroup)
        self._asu = gemmi.ReciprocalAsu(self.spacegroup)
        self._ops = self.spacegroup.operations()

    def reduce(self, hkl: Sequence[int]) -> tuple[Miller, int]:
        reduced, isym = self._asu.to_asu(list(hkl), self._ops)
        h, k, l = (int(x) for x in reduced)
        return (h, k, l), int(isym)

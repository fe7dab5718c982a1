"""
Conversion workflow: reflection loops to MTZ/Parquet datasets.

Module structure:
- status.py: free-flag status encoding
- resolver.py: ColumnResolver (spec entries -> output columns)
- engine.py: CifToMtz conversion engine
- result.py: ConversionResult and BatchReport
- batch.py: BatchDriver (single block or whole file)
"""

from .batch import BatchDriver, select_block
from .engine import CifToMtz
from .resolver import ColumnResolver, ResolvedColumns
from .result import BatchReport, ConversionResult
from .status import status_to_freeflag

__all__ = [
    "BatchDriver",
    "BatchReport",
    "CifToMtz",
    "ColumnResolver",
    "ConversionResult",
    "ResolvedColumns",
    "select_block",
    "status_to_freeflag",
]

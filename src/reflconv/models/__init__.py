"""
Data models for conversion output.
"""

from reflconv.models.base import ReflconvModel
from reflconv.models.column import OutputColumn
from reflconv.models.dataset import (
    UNMERGED_LABELS,
    BatchHeader,
    DatasetInfo,
    OutputDataset,
    UnitCell,
)

__all__ = [
    "ReflconvModel",
    "OutputColumn",
    "OutputDataset",
    "DatasetInfo",
    "BatchHeader",
    "UnitCell",
    "UNMERGED_LABELS",
]

"""
Output dataset model.

An OutputDataset is built once per input block, fully populated,
handed to a writer and then discarded.
"""

from typing import Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import Field

from reflconv.models.base import ReflconvModel
from reflconv.models.column import OutputColumn

UNMERGED_LABELS = ("M/ISYM", "BATCH")


class UnitCell(ReflconvModel):
    """Unit cell parameters (Å and degrees)."""

    a: float = 1.0
    b: float = 1.0
    c: float = 1.0
    alpha: float = 90.0
    beta: float = 90.0
    gamma: float = 90.0

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.alpha, self.beta, self.gamma)

    def __str__(self) -> str:
        return (
            f"{self.a:.3f} {self.b:.3f} {self.c:.3f} "
            f"{self.alpha:.2f} {self.beta:.2f} {self.gamma:.2f}"
        )


class DatasetInfo(ReflconvModel):
    """A named MTZ dataset (crystal/experiment grouping of columns)."""

    id: int = Field(..., ge=0)
    name: str
    wavelength: float = 0.0


class BatchHeader(ReflconvModel):
    """Observation batch record for unmerged data."""

    number: int = 1
    cell: UnitCell = Field(default_factory=UnitCell)
    dataset_id: int = 1


class OutputDataset(ReflconvModel):
    """
    Header metadata, ordered columns and a row-major float buffer.

    Attributes:
        name: Source block name
        title: MTZ title
        history: Free-text history lines
        cell: Unit cell of the block
        spacegroup: Hermann-Mauguin symbol, None if unknown
        datasets: Named datasets; columns refer to them by id
        batches: Batch headers (unmerged data only)
        columns: Output columns in final order
        data: float32 array of shape (rows, len(columns))
    """

    name: str = ""
    title: str = ""
    history: list[str] = Field(default_factory=list)
    cell: UnitCell = Field(default_factory=UnitCell)
    spacegroup: Optional[str] = None
    datasets: list[DatasetInfo] = Field(default_factory=list)
    batches: list[BatchHeader] = Field(default_factory=list)
    columns: list[OutputColumn] = Field(default_factory=list)
    data: np.ndarray = Field(
        default_factory=lambda: np.zeros((0, 0), dtype=np.float32)
    )

    @property
    def nreflections(self) -> int:
        """Number of rows."""
        return int(self.data.shape[0])

    @property
    def is_unmerged(self) -> bool:
        """True when the unmerged bookkeeping columns are present."""
        return len(self.batches) > 0

    @property
    def column_labels(self) -> list[str]:
        return [col.label for col in self.columns]

    def add_dataset(self, name: str, wavelength: float = 0.0) -> DatasetInfo:
        dataset = DatasetInfo(id=len(self.datasets), name=name, wavelength=wavelength)
        self.datasets.append(dataset)
        return dataset

    def column(self, label: str) -> OutputColumn:
        """Look up a column by label."""
        for col in self.columns:
            if col.label == label:
                return col
        raise KeyError(f"No column labelled {label!r}")

    def column_values(self, label: str) -> NDArray[np.float32]:
        """All values of one column, as a view into the buffer."""
        return self.data[:, self.column(label).position]

    def __str__(self) -> str:
        kind = "unmerged" if self.is_unmerged else "merged"
        return (
            f"Dataset {self.name or '?'}: {self.nreflections} reflections, "
            f"{len(self.columns)} columns ({kind})"
        )

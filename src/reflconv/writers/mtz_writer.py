"""
MTZ file writer.

Translates an OutputDataset into a gemmi.Mtz object and writes it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import gemmi

from reflconv.models import OutputDataset

logger = logging.getLogger(__name__)


class MtzWriter:
    """
    Writes an OutputDataset as an MTZ file.

    Example:
        writer = MtzWriter()
        writer.write(dataset, "/data/out/r1abcsf.mtz")
    """

    def to_mtz(self, dataset: OutputDataset) -> gemmi.Mtz:
        """Build a gemmi.Mtz with header, columns and data."""
        mtz = gemmi.Mtz()
        if dataset.title:
            mtz.title = dataset.title
        if dataset.history:
            mtz.history = list(mtz.history) + list(dataset.history)
        if dataset.spacegroup:
            mtz.spacegroup = gemmi.SpaceGroup(dataset.spacegroup)

        cell = gemmi.UnitCell(*dataset.cell.as_tuple())
        for info in dataset.datasets:
            ds = mtz.add_dataset(info.name)
            ds.wavelength = info.wavelength
        mtz.set_cell_for_all(cell)

        for col in dataset.columns:
            mtz.add_column(col.label, col.type_code, dataset_id=col.dataset_id)

        for header in dataset.batches:
            batch = gemmi.Mtz.Batch()
            batch.number = header.number
            batch.dataset_id = header.dataset_id
            batch.cell = gemmi.UnitCell(*header.cell.as_tuple())
            mtz.batches.append(batch)

        mtz.set_data(dataset.data)
        return mtz

    def write(self, dataset: OutputDataset, path: str | Path) -> Path:
        """
        Write a dataset to an MTZ file.

        Args:
            dataset: The populated dataset
            path: Output file path

        Returns:
            Path to the written file
        """
        output_path = Path(path)
        self.to_mtz(dataset).write_to_file(str(output_path))
        return output_path

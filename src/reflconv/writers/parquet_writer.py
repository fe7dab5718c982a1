"""
Parquet file writer for converted reflection data.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from reflconv.models import OutputDataset

from .schemas import build_schema

logger = logging.getLogger(__name__)


class ParquetWriter:
    """
    Writes an OutputDataset as a single Parquet file.

    Missing values (NaN) in integer columns are stored as nulls. An
    integer-typed column holding fractional values is kept as float32.

    Example:
        writer = ParquetWriter()
        writer.write(dataset, "/data/out/r1abcsf.parquet")
    """

    def to_table(self, dataset: OutputDataset) -> pa.Table:
        """Build an Arrow table from the dataset buffer."""
        schema = build_schema(dataset)
        fields = []
        arrays = []
        for i, schema_field in enumerate(schema):
            values = dataset.data[:, i]
            if pa.types.is_integer(schema_field.type):
                missing = np.isnan(values)
                present = values[~missing]
                if np.any(present != np.round(present)):
                    logger.warning(
                        f"Column {schema_field.name} has type "
                        f"{schema_field.metadata[b'mtz_type'].decode()} but holds "
                        f"non-integer values, writing it as float32"
                    )
                    schema_field = schema_field.with_type(pa.float32())
                    arrays.append(pa.array(values, type=pa.float32()))
                else:
                    ints = np.where(missing, 0, values).astype(np.int32)
                    arrays.append(pa.array(ints, type=schema_field.type, mask=missing))
            else:
                arrays.append(pa.array(values, type=schema_field.type))
            fields.append(schema_field)
        return pa.Table.from_arrays(arrays, schema=pa.schema(fields, metadata=schema.metadata))

    def write(self, dataset: OutputDataset, path: str | Path) -> Path:
        """
        Write a dataset to Parquet.

        Args:
            dataset: The populated dataset
            path: Output file path

        Returns:
            Path to the written file
        """
        output_path = Path(path)
        pq.write_table(self.to_table(dataset), output_path)
        return output_path

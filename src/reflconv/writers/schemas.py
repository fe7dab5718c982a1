"""
PyArrow schema construction for converted datasets.

Integer-like MTZ column types become nullable int32 columns; every
other type is float32, as in the MTZ buffer.
"""

import json

import pyarrow as pa

from reflconv.models import OutputDataset

# MTZ column types holding integers: indices, batch, M/ISYM, integer flags
INTEGER_TYPES = frozenset("HBYI")


def arrow_type_for(type_code: str) -> pa.DataType:
    """Arrow type for an MTZ column type."""
    return pa.int32() if type_code in INTEGER_TYPES else pa.float32()


def build_schema(dataset: OutputDataset) -> pa.Schema:
    """
    Build the Parquet schema for a dataset.

    Column metadata records the MTZ type and dataset id; schema metadata
    carries the header (title, history, cell, space group, datasets).

    Args:
        dataset: The populated dataset

    Returns:
        PyArrow schema with one field per output column
    """
    fields = [
        pa.field(
            col.label,
            arrow_type_for(col.type_code),
            metadata={
                b"mtz_type": col.type_code.encode(),
                b"dataset_id": str(col.dataset_id).encode(),
            },
        )
        for col in dataset.columns
    ]
    metadata = {
        b"block": dataset.name.encode(),
        b"title": dataset.title.encode(),
        b"history": json.dumps(dataset.history).encode(),
        b"cell": json.dumps(list(dataset.cell.as_tuple())).encode(),
        b"spacegroup": (dataset.spacegroup or "").encode(),
        b"datasets": json.dumps(
            [{"id": d.id, "name": d.name, "wavelength": d.wavelength} for d in dataset.datasets]
        ).encode(),
        b"batches": json.dumps([b.number for b in dataset.batches]).encode(),
    }
    return pa.schema(fields, metadata=metadata)

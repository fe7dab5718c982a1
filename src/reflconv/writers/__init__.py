"""
Writers module for outputting converted datasets.

Module structure:
- schemas.py: PyArrow schema construction
- parquet_writer.py: ParquetWriter class
- mtz_writer.py: MtzWriter class (gemmi)
"""

import logging
from pathlib import Path

from reflconv.enums import OutputFormat
from reflconv.errors import WriteError
from reflconv.models import OutputDataset

from .mtz_writer import MtzWriter
from .parquet_writer import ParquetWriter
from .schemas import arrow_type_for, build_schema

logger = logging.getLogger(__name__)

__all__ = [
    "MtzWriter",
    "ParquetWriter",
    "arrow_type_for",
    "build_schema",
    "get_writer",
    "write_dataset",
]


def get_writer(fmt: OutputFormat) -> MtzWriter | ParquetWriter:
    """Writer instance for a concrete output format."""
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.PARQUET:
        return ParquetWriter()
    if fmt is OutputFormat.MTZ:
        return MtzWriter()
    raise ValueError(f"Output format must be resolved before writing, got {fmt.value}")


def write_dataset(dataset: OutputDataset, path: str | Path, fmt: OutputFormat) -> Path:
    """
    Write a dataset, removing any partial file on failure.

    Args:
        dataset: The populated dataset
        path: Output file path
        fmt: MTZ or PARQUET

    Returns:
        Path to the written file

    Raises:
        WriteError: If the file could not be written
    """
    output_path = Path(path)
    writer = get_writer(fmt)
    logger.info(f"Writing {output_path} ...")
    try:
        return writer.write(dataset, output_path)
    except Exception as e:
        _remove_partial(output_path)
        raise WriteError(str(output_path), str(e)) from e


def _remove_partial(path: Path) -> None:
    """Delete a partially written file; directories and missing paths are left alone."""
    if not path.is_file():
        return
    try:
        path.unlink()
    except OSError as e:
        logger.warning(f"Could not remove partial file {path}: {e}")

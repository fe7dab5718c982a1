"""
Driving conversions over the blocks of one input file.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from reflconv.errors import BlockNotFound, ReflconvError
from reflconv.parsers import ReflnTable

from .engine import CifToMtz
from .result import BatchReport, ConversionResult

logger = logging.getLogger(__name__)


def select_block(tables: Sequence[ReflnTable], name: Optional[str] = None) -> ReflnTable:
    """
    Pick the block to convert in single-target mode.

    Args:
        tables: All blocks of the input
        name: Block name, or None for the first block

    Raises:
        BlockNotFound: If the named block is absent, or there are no blocks
    """
    if name is None:
        if not tables:
            raise BlockNotFound(None)
        return tables[0]
    for table in tables:
        if table.block_name == name:
            return table
    raise BlockNotFound(name)


class BatchDriver:
    """
    Converts one named block, or every block of an input.

    In single-target mode any error propagates to the caller. In
    directory mode a failing block is logged and recorded, and the
    remaining blocks are still converted.

    Example:
        driver = BatchDriver(CifToMtz())
        report = driver.convert_all(tables, "/data/mtz")
        if not report.ok:
            print(f"{len(report.failures)} block(s) failed")
    """

    def __init__(self, engine: CifToMtz):
        self.engine = engine

    def convert_one(
        self,
        tables: Sequence[ReflnTable],
        output_path: str | Path,
        block_name: Optional[str] = None,
    ) -> ConversionResult:
        """
        Convert a single block to the given path.

        Raises:
            BlockNotFound: If the requested block is absent
            ReflconvError: For any conversion or write failure
        """
        table = select_block(tables, block_name)
        return self.engine.convert_block(table, output_path)

    def output_path_for(self, output_dir: Path, table: ReflnTable) -> Path:
        """Output file for a block in directory mode: DIR/<block-name>.<ext>."""
        return output_dir / f"{table.block_name}{self.engine.options.file_suffix}"

    def convert_all(self, tables: Sequence[ReflnTable], output_dir: str | Path) -> BatchReport:
        """
        Convert every block into its own file in output_dir.

        Args:
            tables: All blocks of the input
            output_dir: Directory for output files (created if missing)

        Returns:
            BatchReport with successes and per-block failures
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        report = BatchReport()
        for table in tables:
            path = self.output_path_for(output_dir, table)
            try:
                result = self.engine.convert_block(table, path)
            except ReflconvError as e:
                logger.error(f"ERROR: {e}")
                report.failures[table.block_name] = e
                continue
            except Exception as e:
                logger.exception(f"Unexpected error converting block {table.block_name}: {e}")
                report.failures[table.block_name] = e
                continue
            report.results.append(result)

        logger.info(
            f"Converted {len(report.results)} of {len(tables)} block(s)"
            + (f", {len(report.failures)} failed" if report.failures else "")
        )
        return report

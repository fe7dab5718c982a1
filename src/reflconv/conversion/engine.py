"""
Conversion of one reflection block into an OutputDataset.

The main orchestrator of the conversion workflow.
"""

import logging
import math
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from reflconv.config import ConversionOptions
from reflconv.enums import ColumnKind
from reflconv.errors import (
    DatasetValidationError,
    MalformedIndexValue,
    MalformedNumericValue,
)
from reflconv.models import BatchHeader, OutputColumn, OutputDataset
from reflconv.parsers import ReflnTable, as_int, as_number, is_null
from reflconv.spec import ConversionSpec, default_spec
from reflconv.symmetry import AsuReducer, GemmiAsuReducer
from reflconv.validation import DatasetValidator
from reflconv.writers import write_dataset

from .resolver import ColumnResolver, ResolvedColumns
from .result import ConversionResult
from .status import status_to_freeflag

logger = logging.getLogger(__name__)

ReducerFactory = Callable[[Optional[str]], AsuReducer]
Writer = Callable[..., Path]

BATCH_NUMBER = 1
FALLBACK_SPACEGROUP = "P 1"


class CifToMtz:
    """
    Converts reflection loops into MTZ-like datasets.

    Workflow for one block:
    1. Resolve spec entries against the loop tags
    2. For unmerged data, insert M/ISYM and BATCH after H K L
    3. Encode every row into the float32 buffer
    4. Validate and write

    Example:
        engine = CifToMtz(default_spec(), ConversionOptions(title="demo"))
        result = engine.convert_block(table, "out.mtz")
        print(result.summary())
    """

    def __init__(
        self,
        spec: Optional[ConversionSpec] = None,
        options: Optional[ConversionOptions] = None,
        reducer_factory: ReducerFactory = GemmiAsuReducer,
        writer: Writer = write_dataset,
    ):
        self.spec = spec if spec is not None else default_spec()
        self.options = options if options is not None else ConversionOptions()
        self.reducer_factory = reducer_factory
        self.writer = writer
        self.resolver = ColumnResolver(self.spec)
        self.validator = DatasetValidator()

    def is_unmerged(self, table: ReflnTable) -> bool:
        """Unmerged if forced, or if the loop is not the merged _refln loop."""
        return self.options.force_unmerged or not table.is_merged

    def build_dataset(self, table: ReflnTable) -> ConversionResult:
        """
        Build a fully populated dataset for one block (nothing is written).

        Args:
            table: The block's reflection loop

        Returns:
            ConversionResult with the dataset and per-value diagnostics

        Raises:
            MissingReflectionLoop: If the block has no reflection loop
            MissingMandatoryColumn: If a Miller index tag is absent
            MalformedIndexValue: If a Miller index value is not an integer
        """
        unmerged = self.is_unmerged(table)
        resolved = self.resolver.resolve(table, unmerged)

        spacegroup = table.spacegroup
        if spacegroup is None:
            logger.warning(
                f"No space group in block {table.block_name}, using {FALLBACK_SPACEGROUP}"
            )
            spacegroup = FALLBACK_SPACEGROUP

        dataset = OutputDataset(
            name=table.block_name,
            title=self.options.title or "",
            history=list(self.options.history),
            cell=table.cell,
            spacegroup=spacegroup,
        )
        dataset.add_dataset("HKL_base")
        dataset.add_dataset("unknown", wavelength=table.wavelength)

        columns = list(resolved.columns)
        reducer: Optional[AsuReducer] = None
        if unmerged:
            logger.info("Adding columns M/ISYM and BATCH for unmerged data...")
            columns[3:3] = [
                OutputColumn(label="M/ISYM", type_code="Y", dataset_id=1),
                OutputColumn(label="BATCH", type_code="B", dataset_id=1),
            ]
            dataset.batches.append(
                BatchHeader(number=BATCH_NUMBER, cell=table.cell, dataset_id=1)
            )
            reducer = self.reducer_factory(spacegroup)
        for i, col in enumerate(columns):
            col.position = i
        dataset.columns = columns

        result = ConversionResult(block_name=table.block_name, dataset=dataset)
        dataset.data = self._encode_rows(table, resolved, len(columns), reducer, result)
        return result

    def _encode_rows(
        self,
        table: ReflnTable,
        resolved: ResolvedColumns,
        ncols: int,
        reducer: Optional[AsuReducer],
        result: ConversionResult,
    ) -> np.ndarray:
        """Encode every loop row into a (rows, ncols) float32 buffer."""
        nrows = table.length
        width = table.width
        values = table.values
        sources = resolved.source_indices
        data = np.empty((nrows, ncols), dtype=np.float32)

        for n in range(nrows):
            base = n * width
            row = data[n]
            hkl = self._read_index(values, base, sources, n, table.block_name)
            if reducer is not None:
                reduced, isym = reducer.reduce(hkl)
                row[0:3] = reduced
                row[3] = isym
                row[4] = BATCH_NUMBER
                k = 5
            else:
                row[0:3] = hkl
                k = 3

            for j in range(3, len(sources)):
                value_index = base + sources[j]
                token = values[value_index]
                kind = resolved.kinds[j]
                if kind is ColumnKind.STATUS_FLAG:
                    row[k] = status_to_freeflag(token)
                elif is_null(token):
                    row[k] = math.nan
                else:
                    number = as_number(token)
                    row[k] = number
                    if math.isnan(number):
                        diagnostic = MalformedNumericValue(
                            row=n,
                            column=resolved.columns[j].label,
                            value_index=value_index,
                            value=token,
                        )
                        logger.warning(str(diagnostic))
                        result.diagnostics.append(diagnostic)
                k += 1
        return data

    @staticmethod
    def _read_index(
        values: list[str], base: int, sources: list[int], n: int, block: str
    ) -> list[int]:
        hkl = []
        for j in range(3):
            token = values[base + sources[j]]
            try:
                hkl.append(as_int(token))
            except ValueError:
                raise MalformedIndexValue(n, token, block) from None
        return hkl

    def validate(self, result: ConversionResult) -> None:
        """
        Run pre-write checks on a built dataset.

        Raises:
            DatasetValidationError: If any error-level issue is found
        """
        validation = self.validator.validate(result.dataset)
        result.warnings.extend(f"{i.field}: {i.message}" for i in validation.warnings)
        if not validation.is_valid:
            raise DatasetValidationError(validation.errors)

    def convert_block(self, table: ReflnTable, output_path: str | Path) -> ConversionResult:
        """
        Convert one block and write it.

        Args:
            table: The block's reflection loop
            output_path: Destination file

        Returns:
            ConversionResult with the written path

        Raises:
            ReflconvError: For block-level failures (WriteError if writing failed)
        """
        result = self.build_dataset(table)
        if not self.options.skip_validation:
            self.validate(result)
        fmt = self.options.resolve_format(output_path)
        result.output_path = self.writer(result.dataset, output_path, fmt)
        return result

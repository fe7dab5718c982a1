"""
Validation utilities for converted datasets.

Structural checks run on a fully populated OutputDataset before it is
handed to a writer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from reflconv.models import UNMERGED_LABELS, OutputDataset

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single validation issue."""

    field: str
    message: str
    severity: str  # "error", "warning"
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Result of validating a dataset."""

    is_valid: bool = True
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "warning"]

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="error", value=value)
        )
        self.is_valid = False

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="warning", value=value)
        )


class DatasetValidator:
    """
    Validates an OutputDataset before writing.

    Checks:
    - buffer shape is rows x columns
    - the first three columns are Miller indices
    - labels are unique and dataset ids refer to existing datasets
    - unmerged data carries M/ISYM and BATCH at positions 3 and 4
    - data columns that are entirely missing (warning)
    """

    def validate(self, dataset: OutputDataset) -> ValidationResult:
        result = ValidationResult()
        self._validate_shape(dataset, result)
        self._validate_columns(dataset, result)
        if dataset.is_unmerged:
            self._validate_unmerged(dataset, result)
        if result.is_valid:
            self._check_empty_columns(dataset, result)

        for issue in result.issues:
            log = logger.error if issue.severity == "error" else logger.warning
            log(f"{dataset.name}: {issue.field}: {issue.message}")
        return result

    def _validate_shape(self, dataset: OutputDataset, result: ValidationResult) -> None:
        data = dataset.data
        if data.ndim != 2 or data.shape[1] != len(dataset.columns):
            result.add_error(
                "data",
                f"buffer shape {data.shape} does not match {len(dataset.columns)} columns",
            )
        if data.dtype != np.float32:
            result.add_error("data", f"buffer dtype must be float32, got {data.dtype}")

    def _validate_columns(self, dataset: OutputDataset, result: ValidationResult) -> None:
        types = [col.type_code for col in dataset.columns[:3]]
        if types != ["H", "H", "H"]:
            result.add_error("columns", "first three columns must be Miller indices", types)

        seen: set[str] = set()
        dataset_ids = {d.id for d in dataset.datasets}
        for i, col in enumerate(dataset.columns):
            if col.label in seen:
                result.add_error(col.label, "duplicate column label")
            seen.add(col.label)
            if col.position != i:
                result.add_error(col.label, f"position {col.position} != index {i}")
            if dataset_ids and col.dataset_id not in dataset_ids:
                result.add_error(col.label, f"unknown dataset id {col.dataset_id}")

    def _validate_unmerged(self, dataset: OutputDataset, result: ValidationResult) -> None:
        labels = tuple(dataset.column_labels[3:5])
        if labels != UNMERGED_LABELS:
            result.add_error(
                "columns", "unmerged data needs M/ISYM and BATCH after H K L", labels
            )

    def _check_empty_columns(self, dataset: OutputDataset, result: ValidationResult) -> None:
        if dataset.nreflections == 0:
            result.add_warning("data", "no reflections")
            return
        missing = np.isnan(dataset.data).all(axis=0)
        for col, all_missing in zip(dataset.columns, missing):
            if all_missing:
                result.add_warning(col.label, "all values are missing")

"""
refln-converter - SF-mmCIF reflection data to MTZ conversion.

This package converts the reflection loops of structure-factor mmCIF
files into MTZ (or Parquet) datasets, following a tag-to-column spec.
"""

__version__ = "0.1.0"

from reflconv.config import ConversionOptions
from reflconv.conversion import (
    BatchDriver,
    BatchReport,
    CifToMtz,
    ColumnResolver,
    ConversionResult,
    status_to_freeflag,
)
from reflconv.errors import (
    BlockNotFound,
    DatasetValidationError,
    MalformedIndexValue,
    MalformedNumericValue,
    MissingMandatoryColumn,
    MissingReflectionLoop,
    ReflconvError,
    SpecSyntaxError,
    WriteError,
)
from reflconv.models import OutputColumn, OutputDataset
from reflconv.parsers import CifReflnParser, ReflnTable
from reflconv.spec import ConversionSpec, SpecEntry, default_spec, load_spec
from reflconv.validation import DatasetValidator, ValidationResult
from reflconv.writers import MtzWriter, ParquetWriter, write_dataset

__all__ = [
    # Spec
    "SpecEntry",
    "ConversionSpec",
    "default_spec",
    "load_spec",
    # Input
    "CifReflnParser",
    "ReflnTable",
    # Conversion
    "ConversionOptions",
    "ColumnResolver",
    "CifToMtz",
    "BatchDriver",
    "ConversionResult",
    "BatchReport",
    "status_to_freeflag",
    # Output
    "OutputColumn",
    "OutputDataset",
    "MtzWriter",
    "ParquetWriter",
    "write_dataset",
    # Validation
    "DatasetValidator",
    "ValidationResult",
    # Errors
    "ReflconvError",
    "SpecSyntaxError",
    "MissingMandatoryColumn",
    "MissingReflectionLoop",
    "MalformedIndexValue",
    "BlockNotFound",
    "WriteError",
    "DatasetValidationError",
    "MalformedNumericValue",
]

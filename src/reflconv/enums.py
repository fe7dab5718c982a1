"""
Enums for conversion metadata.

These enums define the valid values for column kinds, output formats
and process exit codes.
"""

from enum import Enum, IntEnum


class ColumnKind(str, Enum):
    """
    How a spec entry is encoded into the output buffer.

    Attributes:
        INDEX: Mandatory Miller index column (MTZ type 'H')
        STATUS_FLAG: Free-flag status token, written as MTZ type 'I'
        NUMERIC: Any other numeric column
    """

    INDEX = "index"
    STATUS_FLAG = "status_flag"
    NUMERIC = "numeric"

    @classmethod
    def from_type_code(cls, type_code: str) -> "ColumnKind":
        """Resolve a single-character spec type code."""
        if type_code == "H":
            return cls.INDEX
        if type_code == "s":
            return cls.STATUS_FLAG
        return cls.NUMERIC


class OutputFormat(str, Enum):
    """Output file formats."""

    AUTO = "auto"
    MTZ = "mtz"
    PARQUET = "parquet"


class ExitCode(IntEnum):
    """Process exit codes."""

    OK = 0
    BLOCK_ERROR = 1
    SPEC_ERROR = 2
    WRITE_ERROR = 3

"""
Run configuration for conversions.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field

from reflconv.enums import OutputFormat
from reflconv.models.base import ReflconvModel


class ConversionOptions(ReflconvModel):
    """
    Options shared by every block of one run.

    Attributes:
        title: MTZ title (library default if None)
        history: History lines appended to the output header
        force_unmerged: Convert as unmerged even if a merged loop exists
        skip_validation: Do not run pre-write dataset checks
        output_format: File format; AUTO picks by output suffix
    """

    title: Optional[str] = Field(default=None, description="MTZ title")
    history: list[str] = Field(default_factory=list, description="History lines")
    force_unmerged: bool = Field(default=False, description="Write unmerged data")
    skip_validation: bool = Field(default=False, description="Skip dataset checks")
    output_format: OutputFormat = Field(default=OutputFormat.AUTO)

    def resolve_format(self, path: str | Path) -> OutputFormat:
        """The concrete output format for a given path."""
        fmt = OutputFormat(self.output_format)
        if fmt is not OutputFormat.AUTO:
            return fmt
        if Path(path).suffix.lower() == ".parquet":
            return OutputFormat.PARQUET
        return OutputFormat.MTZ

    @property
    def file_suffix(self) -> str:
        """Suffix for generated file names in directory mode."""
        if OutputFormat(self.output_format) is OutputFormat.PARQUET:
            return ".parquet"
        return ".mtz"

"""
Exception types for the conversion workflow.

Each exception carries the structured context of the failure so that
callers can branch on the kind of error instead of parsing messages.
"""

from dataclasses import dataclass
from typing import Optional


class ReflconvError(Exception):
    """Base class for all conversion errors."""


class SpecSyntaxError(ReflconvError):
    """A line of a conversion spec is malformed."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"spec line {line_number}: {reason}: {line.strip()!r}")


class MissingMandatoryColumn(ReflconvError):
    """The Miller index columns are absent or not the first three columns."""

    def __init__(
        self,
        tag: Optional[str],
        block: Optional[str] = None,
        reason: str = "Miller index tag not found",
    ):
        self.tag = tag
        self.block = block
        self.reason = reason
        where = f" in block {block}" if block else ""
        what = f": {tag}" if tag else ""
        super().__init__(f"{reason}{where}{what}")


class MissingReflectionLoop(ReflconvError):
    """A block has neither a _refln nor a _diffrn_refln loop."""

    def __init__(self, block: str):
        self.block = block
        super().__init__(f"_refln category not found in mmCIF block: {block}")


class BlockNotFound(ReflconvError):
    """The requested block is not present in the input."""

    def __init__(self, name: Optional[str]):
        self.name = name
        if name is None:
            super().__init__("no reflection blocks in the input")
        else:
            super().__init__(f"block not found: {name}")


class WriteError(ReflconvError):
    """The output file could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"error writing {path}: {reason}")


class DatasetValidationError(ReflconvError):
    """A populated dataset failed the pre-write structural checks."""

    def __init__(self, issues: list):
        self.issues = issues
        messages = "; ".join(f"{i.field}: {i.message}" for i in issues)
        super().__init__(f"dataset validation failed: {messages}")


@dataclass(frozen=True)
class MalformedNumericValue:
    """
    A value that is present but not a number.

    Not raised: the cell is written as NaN and this record is kept
    as a diagnostic.

    Attributes:
        row: 0-based row in the reflection loop
        column: Output column label
        value_index: Index of the token in the flat loop value list
        value: The raw token
    """

    row: int
    column: str
    value_index: int
    value: str

    def __str__(self) -> str:
        return (
            f"Value #{self.value_index} in the loop is not a number: {self.value} "
            f"(row {self.row}, column {self.column})"
        )


class MalformedIndexValue(ReflconvError):
    """A Miller index value is not an integer (fatal for the block)."""

    def __init__(self, row: int, value: str, block: Optional[str] = None):
        self.row = row
        self.value = value
        self.block = block
        where = f" in block {block}" if block else ""
        super().__init__(f"Miller index in row {row}{where} is not an integer: {value!r}")

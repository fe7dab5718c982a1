"""
Conversion result dataclasses.

Hold the output of converting one block and of a whole batch run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from reflconv.enums import ExitCode
from reflconv.errors import MalformedNumericValue
from reflconv.models import OutputDataset


@dataclass
class ConversionResult:
    """
    Result of converting one reflection block.

    Attributes:
        block_name: Source block name
        dataset: The populated dataset (None if conversion failed early)
        output_path: Where the dataset was written (None if not written)
        diagnostics: Malformed numeric values, one per occurrence
        warnings: Non-fatal issues (validation warnings and the like)
    """

    block_name: str
    dataset: Optional[OutputDataset] = None
    output_path: Optional[Path] = None
    diagnostics: list[MalformedNumericValue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_written(self) -> bool:
        return self.output_path is not None

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Block {self.block_name}:"]
        if self.dataset is not None:
            ds = self.dataset
            kind = "unmerged" if ds.is_unmerged else "merged"
            lines.append(f"  Reflections: {ds.nreflections} ({kind})")
            lines.append(f"  Columns: {' '.join(ds.column_labels)}")
            if ds.spacegroup:
                lines.append(f"  Space group: {ds.spacegroup}")
        if self.output_path is not None:
            lines.append(f"  Written: {self.output_path}")
        if self.diagnostics:
            lines.append(f"  Non-numeric values: {len(self.diagnostics)}")
        for w in self.warnings[:5]:  # Limit to first 5
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)


@dataclass
class BatchReport:
    """
    Result of converting several blocks.

    Attributes:
        results: Successful conversions, in input order
        failures: Block name -> the error that stopped it
    """

    results: list[ConversionResult] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when every block was converted and written."""
        return not self.failures

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.OK if self.ok else ExitCode.BLOCK_ERROR

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "blocks": [
                {
                    "block": r.block_name,
                    "output": str(r.output_path) if r.output_path else None,
                    "reflections": r.dataset.nreflections if r.dataset else 0,
                    "columns": r.dataset.column_labels if r.dataset else [],
                    "non_numeric_values": len(r.diagnostics),
                    "warnings": r.warnings,
                }
                for r in self.results
            ],
            "failures": {name: str(e) for name, e in self.failures.items()},
        }

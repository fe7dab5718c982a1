"""
Conversion spec: which mmCIF reflection tags become which MTZ columns.

Each line of a spec contains four words:
- tag (without category) from _refln or _diffrn_refln
- MTZ column label
- MTZ column type
- MTZ dataset for the column (must be 0 or 1)

Alternative mmCIF tags for the same MTZ label must be consecutive;
the first one found in a block wins.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from reflconv.enums import ColumnKind
from reflconv.errors import SpecSyntaxError

logger = logging.getLogger(__name__)

SPEC_HEADER = (
    "# Each line in the spec contains four words:\n"
    "# - tag (without category) from _refln or _diffrn_refln\n"
    "# - MTZ column label\n"
    "# - MTZ column type\n"
    "# - MTZ dataset for the column (must be 0 or 1)\n"
)

# 's' is a pseudo-type: status flag written as an 'I' column
DEFAULT_SPEC_LINES: tuple[str, ...] = (
    "index_h H H 0",
    "index_k K H 0",
    "index_l L H 0",
    "pdbx_r_free_flag FreeR_flag I 0",
    "status FreeR_flag s 0",
    "intensity_meas I J 1",
    "intensity_net I J 1",
    "intensity_sigma SIGI Q 1",
    "pdbx_I_plus I(+) K 1",
    "pdbx_I_plus_sigma SIGI(+) M 1",
    "pdbx_I_minus I(-) K 1",
    "pdbx_I_minus_sigma SIGI(-) M 1",
    "F_meas_au FP F 1",
    "F_meas_sigma_au SIGFP Q 1",
    "pdbx_F_plus F(+) G 1",
    "pdbx_F_plus_sigma SIGF(+) L 1",
    "pdbx_F_minus F(-) G 1",
    "pdbx_F_minus_sigma SIGF(-) L 1",
    "pdbx_anom_difference DP D 1",
    "pdbx_anom_difference_sigma SIGDP Q 1",
    "F_calc FC F 1",
    "phase_calc PHIC P 1",
    "fom FOM W 1",
    "weight FOM W 1",
    "pdbx_HL_A_iso HLA A 1",
    "pdbx_HL_B_iso HLB A 1",
    "pdbx_HL_C_iso HLC A 1",
    "pdbx_HL_D_iso HLD A 1",
    "pdbx_FWT FWT F 1",
    "pdbx_PHWT PHWT P 1",
    "pdbx_DELFWT DELFWT F 1",
    "pdbx_DELPHWT DELPHWT P 1",
)


@dataclass(frozen=True)
class SpecEntry:
    """
    One mapping from an mmCIF tag to an MTZ column.

    Attributes:
        source_tag: Tag without the category prefix (e.g. 'intensity_meas')
        target_label: MTZ column label
        type_code: MTZ column type as written in the spec ('s' for status)
        dataset_id: MTZ dataset, 0 or 1
        kind: Encoding variant, resolved from type_code at load time
    """

    source_tag: str
    target_label: str
    type_code: str
    dataset_id: int
    kind: ColumnKind

    @property
    def column_type(self) -> str:
        """MTZ type of the output column ('s' is stored as 'I')."""
        return "I" if self.kind is ColumnKind.STATUS_FLAG else self.type_code

    def as_line(self) -> str:
        return f"{self.source_tag} {self.target_label} {self.type_code} {self.dataset_id}"


@dataclass(frozen=True)
class ConversionSpec:
    """Ordered, immutable list of spec entries."""

    entries: tuple[SpecEntry, ...]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def labels(self) -> list[str]:
        """Distinct target labels in spec order."""
        seen: list[str] = []
        for entry in self.entries:
            if not seen or seen[-1] != entry.target_label:
                seen.append(entry.target_label)
        return seen

    def format(self) -> str:
        """Render the spec in the file format, with the explanatory header."""
        return SPEC_HEADER + "".join(f"{e.as_line()}\n" for e in self.entries)


def parse_spec_line(line: str, line_number: int = 1) -> SpecEntry:
    """
    Parse one spec line.

    Args:
        line: Line with four whitespace-separated words
        line_number: 1-based line number, used in error messages

    Returns:
        The parsed SpecEntry

    Raises:
        SpecSyntaxError: If the line does not have exactly four words,
            the type is not a single character or the dataset is not 0 or 1
    """
    tokens = line.split()
    if len(tokens) != 4:
        raise SpecSyntaxError(line_number, line, "line should have 4 words")
    source_tag, target_label, type_code, dataset = tokens
    if len(type_code) != 1:
        raise SpecSyntaxError(line_number, line, "column type must be one character")
    if dataset not in ("0", "1"):
        raise SpecSyntaxError(line_number, line, "dataset must be 0 or 1")
    return SpecEntry(
        source_tag=source_tag,
        target_label=target_label,
        type_code=type_code,
        dataset_id=int(dataset),
        kind=ColumnKind.from_type_code(type_code),
    )


def parse_spec_lines(lines: Iterable[str]) -> ConversionSpec:
    """
    Parse spec text lines into a ConversionSpec.

    Blank lines and lines starting with '#' are skipped. Any bad line
    aborts the whole parse.

    Raises:
        SpecSyntaxError: On the first malformed line
    """
    entries: list[SpecEntry] = []
    closed_labels: set[str] = set()
    for line_number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entry = parse_spec_line(stripped, line_number)
        previous = entries[-1].target_label if entries else None
        if entry.target_label != previous:
            if entry.target_label in closed_labels:
                raise SpecSyntaxError(
                    line_number,
                    line,
                    f"alternative tags for {entry.target_label} must be consecutive",
                )
            if previous is not None:
                closed_labels.add(previous)
        entries.append(entry)
    return ConversionSpec(entries=tuple(entries))


@lru_cache(maxsize=None)
def default_spec() -> ConversionSpec:
    """The built-in spec, parsed once per process."""
    return parse_spec_lines(DEFAULT_SPEC_LINES)


def load_spec(path: str | Path) -> ConversionSpec:
    """
    Load a spec from a UTF-8 text file.

    Args:
        path: Path to the spec file

    Returns:
        Parsed ConversionSpec

    Raises:
        FileNotFoundError: If the file doesn't exist
        SpecSyntaxError: If any line is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Spec file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        spec = parse_spec_lines(f.read().splitlines())

    logger.info(f"Loaded {len(spec)} spec entries from {path}")
    return spec

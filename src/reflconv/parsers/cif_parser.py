"""
Parser for reflection data in mmCIF (SF-mmCIF) files.

Reads every data block with gemmi and exposes its reflection loop as
a ReflnTable: ordered tags plus the flat list of value tokens.
"""

import logging
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import gemmi
from gemmi import cif

from reflconv.models import UnitCell

logger = logging.getLogger(__name__)

MERGED_CATEGORY = "_refln."
UNMERGED_CATEGORY = "_diffrn_refln."


@dataclass
class ReflnTable:
    """
    The reflection loop of one mmCIF block.

    Attributes:
        block_name: Name of the data block
        tags: Full tags of the loop, all sharing one category prefix
        values: Flat list of tokens, row-major, len(values) == rows * len(tags)
        cell: Unit cell of the block
        spacegroup: Hermann-Mauguin symbol, None if not given
        wavelength: Wavelength in Å, 0 if not given
        is_merged: True if the loop is the merged _refln category
    """

    block_name: str
    tags: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)
    cell: UnitCell = field(default_factory=UnitCell)
    spacegroup: Optional[str] = None
    wavelength: float = 0.0
    is_merged: bool = True

    def __post_init__(self) -> None:
        self._lookup = {tag.lower(): i for i, tag in enumerate(self.tags)}

    @property
    def has_loop(self) -> bool:
        return len(self.tags) > 0

    @property
    def width(self) -> int:
        return len(self.tags)

    @property
    def length(self) -> int:
        """Number of rows."""
        if not self.tags:
            return 0
        return len(self.values) // len(self.tags)

    @property
    def category(self) -> str:
        """Category prefix shared by all tags, including the trailing dot."""
        if not self.tags:
            return ""
        first = self.tags[0]
        return first[: first.find(".") + 1]

    def find_tag(self, tag: str) -> Optional[int]:
        """Column index of a full tag (case-insensitive), None if absent."""
        return self._lookup.get(tag.lower())


class CifReflnParser:
    """
    Parser for SF-mmCIF files.

    Handles plain and gzipped files, and '-' for standard input.
    Every block of the file becomes one ReflnTable; blocks without a
    reflection loop are kept (with no tags) so that callers can report
    them.

    Usage:
        parser = CifReflnParser()
        tables = parser.parse("/path/to/r1abcsf.ent.gz")

        for table in tables:
            print(f"{table.block_name}: {table.length} reflections")
    """

    def parse(self, file_path: str | Path) -> list[ReflnTable]:
        """
        Parse an mmCIF file.

        Args:
            file_path: Path to the file, or '-' for stdin

        Returns:
            One ReflnTable per data block

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not valid CIF
        """
        if str(file_path) == "-":
            return self.parse_content(sys.stdin.read(), "<stdin>")

        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            doc = cif.read(str(file_path))
        except (RuntimeError, ValueError) as e:
            raise ValueError(f"Cannot read {file_path}: {e}") from e
        return self._tables_from_document(doc)

    def parse_content(self, content: str, source: str = "") -> list[ReflnTable]:
        """
        Parse mmCIF text.

        Args:
            content: File content as string
            source: Optional name for messages

        Returns:
            One ReflnTable per data block
        """
        try:
            doc = cif.read_string(content)
        except (RuntimeError, ValueError) as e:
            raise ValueError(f"Cannot parse {source or 'CIF content'}: {e}") from e
        return self._tables_from_document(doc)

    def _tables_from_document(self, doc: cif.Document) -> list[ReflnTable]:
        tables = []
        for rb in gemmi.as_refln_blocks(doc):
            table = self._table_from_block(rb)
            logger.debug(
                f"Block {table.block_name}: {table.category or 'no reflection loop'}, "
                f"{table.length} rows"
            )
            tables.append(table)
        return tables

    def _table_from_block(self, rb) -> ReflnTable:
        merged_loop = None
        unmerged_loop = None
        for item in rb.block:
            loop = item.loop
            if loop is None or not loop.tags:
                continue
            first = loop.tags[0].lower()
            if first.startswith(MERGED_CATEGORY) and merged_loop is None:
                merged_loop = loop
            elif first.startswith(UNMERGED_CATEGORY) and unmerged_loop is None:
                unmerged_loop = loop

        loop = merged_loop if merged_loop is not None else unmerged_loop
        spacegroup = rb.spacegroup.xhm() if rb.spacegroup is not None else None
        cell = rb.cell
        return ReflnTable(
            block_name=rb.block.name,
            tags=list(loop.tags) if loop is not None else [],
            values=list(loop.values) if loop is not None else [],
            cell=UnitCell(
                a=cell.a, b=cell.b, c=cell.c,
                alpha=cell.alpha, beta=cell.beta, gamma=cell.gamma,
            ),
            spacegroup=spacegroup,
            wavelength=0.0 if math.isnan(rb.wavelength) else rb.wavelength,
            is_merged=merged_loop is not None,
        )

"""
Matching of spec entries against the tags of a reflection loop.
"""

import logging
from dataclasses import dataclass, field

from reflconv.enums import ColumnKind
from reflconv.errors import MissingMandatoryColumn, MissingReflectionLoop
from reflconv.models import OutputColumn
from reflconv.parsers import ReflnTable
from reflconv.spec import ConversionSpec

logger = logging.getLogger(__name__)


@dataclass
class ResolvedColumns:
    """
    Output columns found in one loop, in spec order.

    Attributes:
        columns: Output columns (positions not yet assigned)
        source_indices: For each column, the loop column to read from
        kinds: For each column, how its values are encoded
    """

    columns: list[OutputColumn] = field(default_factory=list)
    source_indices: list[int] = field(default_factory=list)
    kinds: list[ColumnKind] = field(default_factory=list)

    @property
    def uses_status(self) -> bool:
        """True if a column is derived from a status flag."""
        return ColumnKind.STATUS_FLAG in self.kinds

    def __len__(self) -> int:
        return len(self.columns)


class ColumnResolver:
    """
    Resolves which spec entries apply to a given reflection loop.

    For each entry, in spec order, the entry's tag is appended to the
    loop's category prefix and looked up. Missing Miller index tags are
    fatal; other missing tags are skipped. When several consecutive
    entries map to the same label, the first one present wins. Status
    flags are dropped for unmerged data.

    Example:
        resolver = ColumnResolver(default_spec())
        resolved = resolver.resolve(table, unmerged=False)
        print([c.label for c in resolved.columns])
    """

    def __init__(self, spec: ConversionSpec):
        self.spec = spec

    def resolve(self, table: ReflnTable, unmerged: bool) -> ResolvedColumns:
        """
        Resolve output columns for one table.

        Args:
            table: The reflection loop
            unmerged: Whether the block is converted as unmerged data

        Returns:
            ResolvedColumns in spec order

        Raises:
            MissingReflectionLoop: If the table has no tags
            MissingMandatoryColumn: If a Miller index tag is absent
        """
        if not table.has_loop:
            raise MissingReflectionLoop(table.block_name)

        logger.info("Searching tags with known MTZ equivalents ...")
        prefix = table.category
        resolved = ResolvedColumns()
        for entry in self.spec:
            tag = prefix + entry.source_tag
            index = table.find_tag(tag)
            if index is None:
                if entry.kind is ColumnKind.INDEX:
                    raise MissingMandatoryColumn(tag, table.block_name)
                continue
            if resolved.columns and resolved.columns[-1].label == entry.target_label:
                continue
            # Some early unmerged depositions have _refln.status (always 'o')
            if unmerged and entry.kind is ColumnKind.STATUS_FLAG:
                continue
            resolved.columns.append(
                OutputColumn(
                    label=entry.target_label,
                    type_code=entry.column_type,
                    dataset_id=entry.dataset_id,
                )
            )
            resolved.source_indices.append(index)
            resolved.kinds.append(entry.kind)
            logger.info(f"  {tag} -> {entry.target_label}")

        for j in range(3):
            if j >= len(resolved):
                raise MissingMandatoryColumn(
                    None, table.block_name, reason="fewer than three Miller index columns"
                )
            if resolved.kinds[j] is not ColumnKind.INDEX:
                raise MissingMandatoryColumn(
                    table.tags[resolved.source_indices[j]],
                    table.block_name,
                    reason=f"Miller index expected in column {j + 1}",
                )
        return resolved

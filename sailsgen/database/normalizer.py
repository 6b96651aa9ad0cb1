"""Column normalization: catalog rows to NormalizedColumn."""

import re
from typing import Dict, Iterable, List, Optional

from .enum_parser import parse_enum_values
from .models import CatalogColumnRow, NormalizedColumn
from .type_mappers import PassthroughTypeMapper, TypeMapper

AUTO_INCREMENT_MARKER = "auto_increment"

_SIZE_PATTERN = re.compile(r"\((\d+)\)")


class ColumnNormalizer:
    """Turns catalog column rows into normalized column descriptors."""

    def __init__(self, type_mapper: Optional[TypeMapper] = None):
        self.type_mapper = type_mapper or PassthroughTypeMapper()

    def normalize(self, row: CatalogColumnRow) -> NormalizedColumn:
        """Normalize a single catalog row."""
        required = not row.nullable
        column_type = self.type_mapper.map_type(
            row.data_type, column=row.column_name, table=row.table_name
        )

        column = NormalizedColumn(
            name=row.column_name,
            type=column_type,
            required=required,
            allow_null=row.nullable,
            key_role=row.column_key,
            auto_increment=AUTO_INCREMENT_MARKER in row.extra.lower(),
        )

        if row.data_type.lower() == "enum":
            column.enum_values = parse_enum_values(row.column_type)

        if self.type_mapper.is_sized(column_type):
            size = _SIZE_PATTERN.search(row.column_type)
            if size:
                column.size = int(size.group(1))

        # A required column without a catalog default gets no default at all
        if not (row.column_default is None and required):
            column.has_default = True
            column.default = row.column_default

        if row.referenced_table_name:
            column.references = row.referenced_table_name

        return column

    def normalize_rows(self, rows: Iterable[CatalogColumnRow]) -> List[NormalizedColumn]:
        """Normalize rows, collapsing duplicates of the same column in first-seen order."""
        columns: Dict[str, NormalizedColumn] = {}
        for row in rows:
            column = self.normalize(row)
            existing = columns.get(column.name)
            columns[column.name] = column if existing is None else merge_columns(existing, column)
        return list(columns.values())


def merge_columns(existing: NormalizedColumn, incoming: NormalizedColumn) -> NormalizedColumn:
    """Merge a duplicate row's column into the one already seen.

    The incoming column only contributes a reference target the existing
    one lacks; key role, unique flag and default are never overwritten.
    """
    if existing.references is None and incoming.references is not None:
        existing.references = incoming.references
    return existing

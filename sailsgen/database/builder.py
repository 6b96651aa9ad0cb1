"""Model builder: assembles one table's rows into a Model."""

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import EmptyTableRowsError, InconsistentTableRowsError
from .models import CatalogColumnRow, Model, NormalizedColumn, TableType
from .naming import normalize_identity
from .normalizer import ColumnNormalizer
from .relationship import RelationshipResolver
from .type_mappers import TypeMapper

logger = logging.getLogger(__name__)

SYNTHETIC_ID = "id"


class ModelBuilder:
    """Builds a Model from the catalog rows of a single table.

    Any column that fails to normalize aborts the whole table; no partial
    model is ever returned.
    """

    def __init__(self, type_mapper: Optional[TypeMapper] = None):
        self.normalizer = ColumnNormalizer(type_mapper)
        self.resolver = RelationshipResolver()

    def build(self, rows: Sequence[CatalogColumnRow]) -> Model:
        if not rows:
            raise EmptyTableRowsError()

        table_names = list(dict.fromkeys(row.table_name for row in rows))
        if len(table_names) > 1:
            raise InconsistentTableRowsError(table_names)
        table_name = table_names[0]

        is_view = any(row.table_type == TableType.VIEW for row in rows)
        normalized = self.normalizer.normalize_rows(rows)

        columns: Dict[str, NormalizedColumn] = {}
        synthetic = self._synthetic_id() if is_view else None
        if synthetic is not None:
            columns[SYNTHETIC_ID] = synthetic

        for column in normalized:
            key = normalize_identity(column.name)
            existing = columns.get(key)
            # A view's own id column replaces the synthetic one
            if existing is not None and existing is not synthetic:
                logger.warning(
                    "Column %s.%s collides with %s as '%s'; keeping storage name as attribute name",
                    table_name, column.name, existing.name, key,
                )
                key = column.name
                suffix = 2
                while key in columns:
                    key = f"{column.name}{suffix}"
                    suffix += 1
            columns[key] = column

        primary_key = None if is_view else self._primary_key(table_name, columns)
        relationships = self.resolver.resolve(normalized)

        logger.debug(
            "Built model for %s: %d columns, %d relationships",
            table_name, len(columns), len(relationships),
        )

        return Model(
            identity=normalize_identity(table_name),
            table_name=table_name,
            is_view=is_view,
            primary_key=primary_key,
            columns=columns,
            relationships=relationships,
        )

    def _synthetic_id(self) -> NormalizedColumn:
        return NormalizedColumn(name=SYNTHETIC_ID, type="integer", required=True, allow_null=False)

    def _primary_key(self, table_name: str, columns: Dict[str, NormalizedColumn]) -> Optional[str]:
        candidates: List[str] = [key for key, column in columns.items() if column.is_primary_key_candidate]
        if len(candidates) > 1:
            logger.warning(
                "Table %s has a composite primary key (%s); using '%s'",
                table_name, ", ".join(candidates), candidates[0],
            )
        return candidates[0] if candidates else None

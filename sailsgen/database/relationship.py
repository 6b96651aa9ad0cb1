"""Relationship resolution from foreign-key columns."""

from typing import FrozenSet, Iterable, Iterator

from .models import NormalizedColumn, Relationship
from .naming import normalize_identity


class RelationshipResolver:
    """Collapses foreign-key columns into one relationship per target table."""

    def referencing_columns(self, columns: Iterable[NormalizedColumn]) -> Iterator[NormalizedColumn]:
        """Yield the columns that reference another table.

        Args:
            columns: Normalized columns of one table

        Returns:
            Iterator over the foreign-key columns, in input order
        """
        return (column for column in columns if column.references)

    def resolve(self, columns: Iterable[NormalizedColumn]) -> FrozenSet[Relationship]:
        """Return the distinct relationships declared by the given columns."""
        relationships = set()
        for column in self.referencing_columns(columns):
            relationships.add(Relationship(
                target=normalize_identity(column.references),
                target_table=column.references,
            ))
        return frozenset(relationships)

"""Data models for catalog rows and the generated Sails models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .naming import model_file_name


class TableType(str, Enum):
    """Kind of catalog relation."""
    TABLE = "table"
    VIEW = "view"

    @classmethod
    def from_catalog(cls, value: Optional[str]) -> "TableType":
        """Map information_schema TABLE_TYPE ('BASE TABLE', 'VIEW', 'SYSTEM VIEW')."""
        if value and "VIEW" in value.upper():
            return cls.VIEW
        return cls.TABLE


class KeyRole(str, Enum):
    """COLUMN_KEY codes reported by the catalog."""
    NONE = ""
    INDEX = "MUL"
    PRIMARY = "PRI"
    UNIQUE = "UNI"

    @classmethod
    def from_catalog(cls, value: Optional[str]) -> "KeyRole":
        try:
            return cls((value or "").upper())
        except ValueError:
            return cls.NONE


@dataclass
class CatalogColumnRow:
    """One row of the column/key-usage catalog query.

    A column that takes part in several key usages (e.g. primary key and
    foreign key) shows up once per usage.
    """
    table_name: str
    column_name: str
    data_type: str
    column_type: str = ""
    table_type: TableType = TableType.TABLE
    extra: str = ""
    column_key: KeyRole = KeyRole.NONE
    nullable: bool = True
    column_default: Optional[str] = None
    referenced_table_name: Optional[str] = None

    @classmethod
    def from_catalog(cls, row: Mapping[str, Any]) -> "CatalogColumnRow":
        """Build from a result row keyed by lower-case information_schema names."""
        return cls(
            table_name=row["table_name"],
            table_type=TableType.from_catalog(row.get("table_type")),
            column_name=row["column_name"],
            data_type=(row["data_type"] or "").lower(),
            column_type=row.get("column_type") or "",
            extra=row.get("extra") or "",
            column_key=KeyRole.from_catalog(row.get("column_key")),
            nullable=str(row.get("is_nullable", "YES")).upper() == "YES",
            column_default=row.get("column_default"),
            referenced_table_name=row.get("referenced_table_name") or None,
        )


@dataclass
class NormalizedColumn:
    """Normalized description of one physical column."""
    name: str  # storage column name
    type: str
    required: bool = False
    allow_null: bool = True
    key_role: KeyRole = KeyRole.NONE
    auto_increment: bool = False
    enum_values: Optional[List[str]] = None
    size: Optional[int] = None
    has_default: bool = False
    default: Optional[str] = None
    references: Optional[str] = None  # physical name of the referenced table

    @property
    def unique(self) -> bool:
        return self.key_role == KeyRole.UNIQUE

    @property
    def index(self) -> bool:
        return self.key_role == KeyRole.INDEX

    @property
    def is_primary_key_candidate(self) -> bool:
        return self.key_role == KeyRole.PRIMARY


@dataclass(frozen=True)
class Relationship:
    """Reference from a model to another table, one per target identity."""
    target: str
    target_table: str = field(default="", compare=False)


@dataclass
class Model:
    """Normalized model for one table or view."""
    identity: str
    table_name: str
    is_view: bool = False
    primary_key: Optional[str] = None
    columns: Dict[str, NormalizedColumn] = field(default_factory=dict)
    relationships: FrozenSet[Relationship] = field(default_factory=frozenset)
    schema: bool = True
    migrate: str = "safe"

    def get_class_name(self) -> str:
        """Identity with its first letter upper-cased (file and controller stem)."""
        return model_file_name(self.identity)

    def get_column(self, column_name: str) -> Optional[NormalizedColumn]:
        """Find a column by its storage name."""
        for column in self.columns.values():
            if column.name == column_name:
                return column
        return None

    def relationship_targets(self) -> List[str]:
        """Sorted target identities."""
        return sorted(rel.target for rel in self.relationships)

"""Catalog type mapping strategies."""

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Optional

from ..errors import ConfigurationError, UnrecognizedTypeError

INTEGER_TYPES = ("mediumint", "bigint", "smallint", "tinyint", "timestamp", "int")
STRING_TYPES = ("char", "enum", "varchar", "tinytext")
PASSTHROUGH_TYPES = (
    "json", "longtext", "mediumtext", "datetime", "float", "double",
    "tinyblob", "blob", "mediumblob", "longblob", "date", "text", "time",
    "decimal",
)

RECOGNIZED_TYPES: FrozenSet[str] = frozenset(
    ("bool",) + INTEGER_TYPES + STRING_TYPES + PASSTHROUGH_TYPES
)


class TypeMapper(ABC):
    """Abstract base class for catalog type mapping.

    Both policies recognize the same catalog names and reject anything else
    with UnrecognizedTypeError.
    """

    # Abstract types that carry a size hint from the column type string
    SIZED_TYPES: FrozenSet[str] = frozenset()

    @abstractmethod
    def _mapping(self) -> Dict[str, str]:
        """Catalog name -> abstract type."""
        pass

    def map_type(self, data_type: str, column: Optional[str] = None, table: Optional[str] = None) -> str:
        """Convert a catalog data type name to an abstract type."""
        try:
            return self._mapping()[data_type.lower()]
        except KeyError:
            raise UnrecognizedTypeError(data_type, column=column, table=table) from None

    def is_sized(self, abstract_type: str) -> bool:
        """Whether attributes of this abstract type carry a size.

        Args:
            abstract_type: Type returned by map_type

        Returns:
            True when the emitter should render the column length
        """
        return abstract_type in self.SIZED_TYPES


class PassthroughTypeMapper(TypeMapper):
    """integer/string/boolean tags, everything else keeps its catalog name."""

    SIZED_TYPES = frozenset({"integer", "string"})

    def __init__(self):
        mapping = {"bool": "boolean"}
        mapping.update({t: "integer" for t in INTEGER_TYPES})
        mapping.update({t: "string" for t in STRING_TYPES})
        mapping.update({t: t for t in PASSTHROUGH_TYPES})
        self._types = mapping

    def _mapping(self) -> Dict[str, str]:
        return self._types


class LegacyTypeMapper(TypeMapper):
    """Older mapping: integers become 'number', text and temporal types 'string'."""

    SIZED_TYPES = frozenset({"number", "string"})

    STRING_PASSTHROUGH = ("longtext", "mediumtext", "text", "datetime", "date", "time")

    def __init__(self):
        mapping = {"bool": "boolean"}
        mapping.update({t: "number" for t in INTEGER_TYPES})
        mapping.update({t: "string" for t in STRING_TYPES})
        for t in PASSTHROUGH_TYPES:
            mapping[t] = "string" if t in self.STRING_PASSTHROUGH else t
        self._types = mapping

    def _mapping(self) -> Dict[str, str]:
        return self._types


TYPE_POLICIES = {
    "passthrough": PassthroughTypeMapper,
    "legacy": LegacyTypeMapper,
}


def get_type_mapper(policy: str = "passthrough") -> TypeMapper:
    """Return the mapper for a configured type policy name."""
    try:
        return TYPE_POLICIES[policy.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown type policy '{policy}'",
            details={"available": sorted(TYPE_POLICIES)},
        ) from None

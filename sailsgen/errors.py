"""Error types for sailsgen."""

from typing import Optional, Dict, Any, List


class SailsGenError(Exception):
    """Base exception for model generation errors."""

    def __init__(self, message: str, code: str = "SAILSGEN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnrecognizedTypeError(SailsGenError):
    """The catalog reported a data type with no known mapping."""

    def __init__(self, data_type: str, column: Optional[str] = None, table: Optional[str] = None):
        where = ""
        if table and column:
            where = f" for column {table}.{column}"
        elif column:
            where = f" for column {column}"
        super().__init__(
            f'Unknown column type "{data_type}" provided{where}.',
            code="UNRECOGNIZED_TYPE",
            details={"type": data_type, "column": column, "table": table},
        )
        self.data_type = data_type


class MalformedEnumDefinitionError(SailsGenError):
    """An enum column type string could not be parsed into literals."""

    def __init__(self, column_type: str, reason: str, position: Optional[int] = None):
        super().__init__(
            f"Malformed enum definition {column_type!r}: {reason}",
            code="MALFORMED_ENUM",
            details={"column_type": column_type, "position": position},
        )
        self.column_type = column_type
        self.position = position


class InconsistentTableRowsError(SailsGenError):
    """A single-table build received rows for more than one table."""

    def __init__(self, table_names: List[str]):
        super().__init__(
            f"Expected rows for a single table, got: {', '.join(table_names)}",
            code="INCONSISTENT_TABLE_ROWS",
            details={"tables": table_names},
        )
        self.table_names = table_names


class EmptyTableRowsError(SailsGenError):
    """The catalog returned no column rows for the requested table."""

    def __init__(self, table: Optional[str] = None, schema: Optional[str] = None):
        target = f"{schema}.{table}" if schema and table else (table or "<unknown>")
        super().__init__(
            f"No columns found for table {target}",
            code="EMPTY_TABLE_ROWS",
            details={"table": table, "schema": schema},
        )


class ConfigurationError(SailsGenError):
    """Invalid configuration (connection URL, type policy, ...)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class IdentityCollisionError(SailsGenError):
    """Two tables normalize to the same model identity."""

    def __init__(self, identity: str, table: str, existing_table: str, schema: Optional[str] = None):
        super().__init__(
            f"Table {table} maps to model '{identity}', already taken by table {existing_table}",
            code="IDENTITY_COLLISION",
            details={"identity": identity, "table": table, "existing_table": existing_table, "schema": schema},
        )
        self.identity = identity
        self.table = table
        self.existing_table = existing_table

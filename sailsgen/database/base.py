"""Abstract base class for catalog readers."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import CatalogColumnRow


class CatalogReader(ABC):
    """Reads table and column metadata from a database catalog.

    Readers are async context managers: the connection is acquired on
    entry and always released on exit, including after a failure.
    """

    # Override in subclasses to exclude system schemas
    EXCLUDED_SCHEMAS: set = {'information_schema'}

    @abstractmethod
    async def connect(self):
        """Acquire the underlying connection or pool."""
        pass

    @abstractmethod
    async def close(self):
        """Release the underlying connection or pool."""
        pass

    @abstractmethod
    async def list_schemas(self) -> List[str]:
        """Get all user schemas (excluding system schemas).

        Returns:
            Schema names
        """
        pass

    @abstractmethod
    async def list_tables(self, schema: str) -> List[str]:
        """Get all table and view names in a schema.

        Args:
            schema: Schema name

        Returns:
            Table and view names
        """
        pass

    @abstractmethod
    async def list_columns(self, schema: str, table: Optional[str] = None) -> List[CatalogColumnRow]:
        """Get column rows for one table, or for every table when table is None.

        Args:
            schema: Schema name
            table: Table name, or None for every table in the schema

        Returns:
            Rows ordered by table name then ordinal position
        """
        pass

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

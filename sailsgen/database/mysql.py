"""MySQL catalog reader."""

import logging
from typing import Any, Dict, List, Optional

import aiomysql

from ..config import ConnectionParams
from .base import CatalogReader
from .models import CatalogColumnRow

logger = logging.getLogger(__name__)

COLUMNS_QUERY = """
    SELECT
        col.table_name AS table_name,
        tbl.table_type AS table_type,
        col.column_name AS column_name,
        col.data_type AS data_type,
        col.column_type AS column_type,
        col.extra AS extra,
        col.column_key AS column_key,
        col.is_nullable AS is_nullable,
        col.column_default AS column_default,
        usg.referenced_table_name AS referenced_table_name
    FROM information_schema.columns AS col
    JOIN information_schema.tables AS tbl
      ON tbl.table_schema = col.table_schema
      AND tbl.table_name = col.table_name
    LEFT JOIN information_schema.key_column_usage AS usg
      ON usg.table_schema = col.table_schema
      AND usg.table_name = col.table_name
      AND usg.column_name = col.column_name
    WHERE col.table_schema = %s
"""

COLUMNS_ORDER = " ORDER BY col.table_name, col.ordinal_position"


class MySQLCatalogReader(CatalogReader):
    """Reads information_schema through an aiomysql pool."""

    EXCLUDED_SCHEMAS = {'information_schema', 'mysql', 'performance_schema', 'sys'}

    def __init__(self, params: ConnectionParams, max_connections: int = 8):
        self.params = params
        self.max_connections = max_connections
        self._pool: Optional[aiomysql.Pool] = None

    async def connect(self):
        if self._pool is None:
            logger.debug("Connecting to MySQL at %s:%s", self.params.host, self.params.port)
            self._pool = await aiomysql.create_pool(
                host=self.params.host,
                port=self.params.port,
                user=self.params.user,
                password=self.params.password or "",
                db=self.params.database or "information_schema",
                maxsize=self.max_connections,
                autocommit=True,
                cursorclass=aiomysql.DictCursor,
            )
        return self._pool

    async def close(self):
        if self._pool is not None:
            self._pool.close()
            await self._pool.wait_closed()
            self._pool = None

    async def _fetch(self, sql: str, args: tuple = ()) -> List[Dict[str, Any]]:
        pool = await self.connect()
        async with pool.acquire() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, args)
                return list(await cur.fetchall())

    async def list_schemas(self) -> List[str]:
        """Get all user schemas, excluding the system schemas.

        Returns:
            Schema names, sorted
        """
        rows = await self._fetch(
            "SELECT schema_name AS schema_name FROM information_schema.schemata ORDER BY schema_name"
        )
        schemas = [row["schema_name"] for row in rows]
        return [s for s in schemas if s.lower() not in self.EXCLUDED_SCHEMAS]

    async def list_tables(self, schema: str) -> List[str]:
        """Get the table and view names of a schema.

        Args:
            schema: Schema name

        Returns:
            Table names, sorted
        """
        rows = await self._fetch(
            "SELECT table_name AS table_name FROM information_schema.tables "
            "WHERE table_schema = %s ORDER BY table_name",
            (schema,),
        )
        return [row["table_name"] for row in rows]

    async def list_columns(self, schema: str, table: Optional[str] = None) -> List[CatalogColumnRow]:
        """Get catalog column rows for one table or a whole schema.

        Args:
            schema: Schema name
            table: Table name, or None for every table in the schema

        Returns:
            Rows ordered by table name then ordinal position
        """
        sql = COLUMNS_QUERY
        args: tuple = (schema,)
        if table is not None:
            sql += "  AND col.table_name = %s\n"
            args = (schema, table)
        rows = await self._fetch(sql + COLUMNS_ORDER, args)
        return [CatalogColumnRow.from_catalog(row) for row in rows]

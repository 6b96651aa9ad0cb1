"""Building models for one table, a whole schema or every schema."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import EmptyTableRowsError, IdentityCollisionError
from .base import CatalogReader
from .builder import ModelBuilder
from .models import Model
from .naming import normalize_identity
from .type_mappers import TypeMapper

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Per-table outcome of a multi-table build, keyed by table identity.

    Every table of the batch has exactly one entry, either in models or in
    errors. A table whose identity is already taken is recorded as an
    IdentityCollisionError under its physical name.
    """
    schema: str
    models: Dict[str, Model] = field(default_factory=dict)
    errors: Dict[str, Exception] = field(default_factory=dict)
    tables: Dict[str, str] = field(default_factory=dict)  # key -> physical table name

    @property
    def ok(self) -> bool:
        return not self.errors

    def outcome(self, identity: str):
        """The Model or the exception recorded for a table identity."""
        if identity in self.models:
            return self.models[identity]
        return self.errors.get(identity)

    def is_taken(self, key: str) -> bool:
        return key in self.models or key in self.errors

    def free_key(self, name: str) -> str:
        """First unused key derived from name (name, name2, name3, ...)."""
        key = name
        suffix = 2
        while self.is_taken(key):
            key = f"{name}{suffix}"
            suffix += 1
        return key

    def add_model(self, model: Model):
        self.models[model.identity] = model
        self.tables[model.identity] = model.table_name

    def add_error(self, table: str, error: Exception) -> str:
        """Record a table's failure; returns the key it was stored under."""
        identity = normalize_identity(table)
        key = identity if not self.is_taken(identity) else self.free_key(table)
        self.errors[key] = error
        self.tables[key] = table
        return key

    def remove_model(self, identity: str) -> Model:
        self.tables.pop(identity, None)
        return self.models.pop(identity)


class ModelService:
    """Runs catalog queries through a reader and builds models from the rows.

    With fail_fast set, the first failing table aborts the whole batch and
    cancels the rest. Otherwise every table is attempted and failures are
    collected in BatchResult.errors.
    """

    def __init__(
        self,
        reader: CatalogReader,
        type_mapper: Optional[TypeMapper] = None,
        fail_fast: bool = False,
        max_concurrency: int = 8,
    ):
        """Initialize the service.

        Args:
            reader: Catalog reader, already entered or entered by the caller
            type_mapper: Type policy for column types (default: passthrough)
            fail_fast: Abort a batch on the first failing table
            max_concurrency: Maximum tables read at the same time
        """
        self.reader = reader
        self.builder = ModelBuilder(type_mapper)
        self.fail_fast = fail_fast
        self.max_concurrency = max(1, max_concurrency)

    async def build_model(self, schema: str, table: str) -> Model:
        """Build the model for a single table.

        Args:
            schema: Schema name
            table: Physical table name

        Returns:
            Model for the table

        Raises:
            EmptyTableRowsError: The catalog has no columns for the table
            SailsGenError: Any normalization failure; no partial model is returned
        """
        rows = await self.reader.list_columns(schema, table)
        if not rows:
            raise EmptyTableRowsError(table, schema)
        return self.builder.build(rows)

    async def build_all(self, schema: str, tables: Optional[List[str]] = None) -> BatchResult:
        """Build a model for every table of a schema, concurrently.

        Args:
            schema: Schema name
            tables: Tables to build (default: every table in the schema)

        Returns:
            BatchResult with one entry per table

        Raises:
            SailsGenError: With fail_fast, the first table failure or identity collision
        """
        if tables is None:
            tables = await self.reader.list_tables(schema)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def build_one(table: str) -> Model:
            async with semaphore:
                return await self.build_model(schema, table)

        tasks = [asyncio.ensure_future(build_one(table)) for table in tables]
        result = BatchResult(schema=schema)

        if self.fail_fast:
            models = await _gather_or_cancel(tasks)
            for model in models:
                collision = self._collision(result, model)
                if collision is not None:
                    raise collision
                result.add_model(model)
            return result

        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for table, outcome in zip(tables, outcomes):
            if isinstance(outcome, Model):
                collision = self._collision(result, outcome)
                if collision is None:
                    result.add_model(outcome)
                    continue
                outcome = collision
            if isinstance(outcome, Exception):
                logger.warning("Failed to build model for %s.%s: %s", schema, table, outcome)
                result.add_error(table, outcome)
            else:
                raise outcome

        logger.info(
            "Built %d models for schema %s (%d failed)",
            len(result.models), schema, len(result.errors),
        )
        return result

    async def build_all_schemas(self) -> Dict[str, BatchResult]:
        """Build models for every user schema, keyed by schema name.

        All schemas share one models directory, so a model whose identity
        was already produced by an earlier schema (in schema order) is
        moved to that schema's errors as an IdentityCollisionError.

        Returns:
            Mapping of schema name to its BatchResult

        Raises:
            SailsGenError: With fail_fast, the first failure; other schemas are cancelled
        """
        schemas = await self.reader.list_schemas()
        tasks = [asyncio.ensure_future(self.build_all(schema)) for schema in schemas]
        results = dict(zip(schemas, await _gather_or_cancel(tasks)))

        claimed: Dict[str, str] = {}
        for schema, result in results.items():
            for identity, model in list(result.models.items()):
                qualified = f"{schema}.{model.table_name}"
                if identity not in claimed:
                    claimed[identity] = qualified
                    continue
                error = IdentityCollisionError(identity, qualified, claimed[identity], schema)
                if self.fail_fast:
                    raise error
                logger.warning("Skipping %s: %s", qualified, error.message)
                result.remove_model(identity)
                result.add_error(model.table_name, error)
        return results

    def _collision(self, result: BatchResult, model: Model) -> Optional[IdentityCollisionError]:
        if not result.is_taken(model.identity):
            return None
        return IdentityCollisionError(
            model.identity,
            model.table_name,
            result.tables.get(model.identity, model.identity),
            result.schema,
        )


async def _gather_or_cancel(tasks: List["asyncio.Future"]) -> list:
    """Gather tasks; on the first failure cancel and drain the rest, then re-raise."""
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

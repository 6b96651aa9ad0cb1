"""Model commands - read the MySQL catalog and write Sails models."""

import asyncio
import json
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import settings
from ..database import BatchResult, ModelService, get_type_mapper, normalize_identity
from ..database.mysql import MySQLCatalogReader
from ..errors import SailsGenError
from ..sails import SailsModelGenerator

app = typer.Typer(help="Generate Sails models from a MySQL schema")
console = Console()


def _resolve_schema(schema: Optional[str]) -> str:
    try:
        schema = schema or settings.connection_params().database
    except SailsGenError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    if not schema:
        console.print("[red]No schema given (use --schema or set SAILSGEN_MYSQL_DATABASE)[/red]")
        raise typer.Exit(1)
    return schema


def _reader() -> MySQLCatalogReader:
    return MySQLCatalogReader(settings.connection_params(), max_connections=settings.max_concurrency)


def _print_batch(result: BatchResult):
    table = Table(title=f"Schema {result.schema}")
    table.add_column("Model", style="cyan")
    table.add_column("Table")
    table.add_column("Columns", justify="right")
    table.add_column("Relationships", style="green")
    table.add_column("Status")

    for identity, model in sorted(result.models.items()):
        table.add_row(
            identity,
            model.table_name,
            str(len(model.columns)),
            ", ".join(model.relationship_targets()),
            "[yellow]view[/yellow]" if model.is_view else "[green]ok[/green]",
        )
    for identity, error in sorted(result.errors.items()):
        table.add_row(identity, result.tables.get(identity, ""), "", "", f"[red]{error}[/red]")
    console.print(table)


@app.command("tables")
def list_tables(
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema to list (default: configured database)"),
):
    """List the tables and views in a schema."""
    schema = _resolve_schema(schema)

    async def run():
        async with _reader() as reader:
            return await reader.list_tables(schema)

    try:
        tables = asyncio.run(run())
    except Exception as e:
        console.print(f"[red]Error reading catalog: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Tables in {schema}")
    table.add_column("Table", style="cyan")
    table.add_column("Model")
    for name in tables:
        table.add_row(name, normalize_identity(name))
    console.print(table)
    console.print(f"[bold]Total: {len(tables)} tables[/bold]")


@app.command("show")
def show_model(
    table: str = typer.Argument(..., help="Table to build a model for"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema (default: configured database)"),
    type_policy: Optional[str] = typer.Option(None, "--type-policy", help="passthrough or legacy"),
):
    """Print the Sails model definition for one table as JSON."""
    schema = _resolve_schema(schema)

    async def run():
        async with _reader() as reader:
            service = ModelService(reader, get_type_mapper(type_policy or settings.type_policy))
            return await service.build_model(schema, table)

    try:
        model = asyncio.run(run())
    except SailsGenError as e:
        console.print(f"[red]{e.code}: {e.message}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error reading catalog: {e}[/red]")
        raise typer.Exit(1)

    generator = SailsModelGenerator()
    console.print_json(json.dumps(generator.model_definition(model)))


@app.command("generate")
def generate(
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Single table to generate (default: all)"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema (default: configured database)"),
    all_schemas: bool = typer.Option(False, "--all-schemas", help="Generate models for every user schema"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Sails project root (default: SAILSGEN_SAILS_PATH)"),
    controller: Optional[bool] = typer.Option(None, "--controller/--no-controller", help="Also write controllers"),
    fail_fast: Optional[bool] = typer.Option(None, "--fail-fast/--keep-going", help="Abort on the first failing table"),
    type_policy: Optional[str] = typer.Option(None, "--type-policy", help="passthrough or legacy"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Build models but don't write files"),
):
    """
    Build Sails models from the catalog and write them to api/models.

    Examples:
        sailsgen model generate --schema shop
        sailsgen model generate --schema shop --table users --no-controller
        sailsgen model generate --all-schemas --fail-fast
    """
    try:
        type_mapper = get_type_mapper(type_policy or settings.type_policy)
    except SailsGenError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)

    generator = SailsModelGenerator(
        project_path=path or settings.sails_path,
        controllers=settings.generate_controllers if controller is None else controller,
    )
    stop_on_error = settings.fail_fast if fail_fast is None else fail_fast
    if not all_schemas:
        schema = _resolve_schema(schema)

    async def run() -> Dict[str, BatchResult]:
        async with _reader() as reader:
            service = ModelService(
                reader,
                type_mapper,
                fail_fast=stop_on_error,
                max_concurrency=settings.max_concurrency,
            )
            if all_schemas:
                results = await service.build_all_schemas()
            elif table:
                result = BatchResult(schema=schema)
                try:
                    model = await service.build_model(schema, table)
                    result.add_model(model)
                except SailsGenError as e:
                    if stop_on_error:
                        raise
                    result.add_error(table, e)
                results = {schema: result}
            else:
                results = {schema: await service.build_all(schema)}

        if not dry_run:
            for result in results.values():
                await generator.write_models(result.models.values())
        return results

    try:
        results = asyncio.run(run())
    except SailsGenError as e:
        console.print(f"[red]{e.code}: {e.message}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error generating models: {e}[/red]")
        raise typer.Exit(1)

    for result in results.values():
        _print_batch(result)

    failed = sum(len(r.errors) for r in results.values())
    built = sum(len(r.models) for r in results.values())
    if dry_run:
        console.print(f"[yellow]Dry run - {built} models built, nothing written[/yellow]")
    else:
        console.print(f"[green]{built} models written to {generator.model_dir}[/green]")

    if failed:
        console.print(f"[red]{failed} table(s) failed[/red]")
        raise typer.Exit(1)
    console.print("> All done! Have fun with your models. :)")

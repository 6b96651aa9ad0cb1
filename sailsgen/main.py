"""sailsgen - Main entry point."""

import logging

import typer
from rich.console import Console

from .commands import model
from .config import settings

app = typer.Typer(
    name="sailsgen",
    help="Generate Sails.js models from a MySQL catalog",
    add_completion=False,
)

app.add_typer(model.app, name="model")

console = Console()


@app.command()
def config():
    """Show current configuration."""
    params = settings.connection_params()
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  MySQL: {params.user or '-'}@{params.host}:{params.port}")
    console.print(f"  Password configured: {'Yes' if params.password else 'No'}")
    console.print(f"  Default Schema: {params.database or 'Not set'}")
    console.print(f"  Sails Path: {settings.sails_path}")
    console.print(f"  Controllers: {'Yes' if settings.generate_controllers else 'No'}")
    console.print(f"  Type Policy: {settings.type_policy}")
    console.print(f"  Fail Fast: {'Yes' if settings.fail_fast else 'No'}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    sailsgen - Generate Sails.js models from a MySQL catalog.

    Examples:

        sailsgen model generate --schema shop

        sailsgen model show users --schema shop

        sailsgen config
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()

"""Config management commands for ReactGraph CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import config
from .config_manager import coerce_value, load_config, save_config

console = Console()

config_app = typer.Typer(help="⚙️ Show or change output settings", no_args_is_help=True)


@config_app.command("show")
def show_config():
    """Show the current output settings."""
    settings = load_config()
    table = Table(title=f"Config ({config.CONFIG_FILE})")
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in settings.items():
        table.add_row(key, str(value))
    console.print(table)


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Setting name: format, show_trace or max_trace_lines."),
    value: str = typer.Argument(..., help="New value."),
):
    """Change one output setting."""
    try:
        coerced = coerce_value(key, value)
    except KeyError:
        known = ", ".join(config.DEFAULT_OUTPUT_CONFIG)
        typer.echo(f"Unknown setting '{key}'. Known settings: {known}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"Invalid value: {exc}", err=True)
        raise typer.Exit(code=1)

    save_config(**{key: coerced})
    typer.echo(f"Set {key} = {coerced}")

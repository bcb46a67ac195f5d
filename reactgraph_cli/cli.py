"""Typer-based CLI for ReactGraph component analysis."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__, config
from .analyzer import ComponentAnalyzer
from .cli_config import config_app
from .config_manager import load_config
from .graph_export import export_dot, export_json
from .models import AnalysisResult, DataFlow

console = Console()

app = typer.Typer(
    help="⚛️ ReactGraph CLI: map React component state, props and data flows.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register config management commands
app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ReactGraph CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
):
    """ReactGraph CLI: static analysis of React component graphs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _run_analysis(path: Path) -> AnalysisResult:
    try:
        return ComponentAnalyzer().analyze(path)
    except FileNotFoundError as exc:
        console.print(f"[red]❌ {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)


def _components_table(result: AnalysisResult) -> Table:
    table = Table(title="Components", show_lines=False)
    table.add_column("Component", style="bold cyan")
    table.add_column("File", style="dim")
    table.add_column("Items", justify="right")
    table.add_column("Kinds")
    for comp in result.components:
        kinds = sorted({item.kind for item in comp.items})
        table.add_row(comp.name, Path(comp.file_path).name, str(len(comp.items)), ", ".join(kinds))
    return table


def _flows_table(flows: List[DataFlow]) -> Table:
    table = Table(title="Data Flows")
    table.add_column("Flow", style="bold")
    table.add_column("From", style="green")
    table.add_column("To", style="yellow")
    table.add_column("Type", style="magenta")
    for flow in flows:
        table.add_row(flow.flow_id, flow.from_item, flow.to_item, flow.flow_type)
    return table


def _conflicts_table(result: AnalysisResult) -> Table:
    table = Table(title="Conflicts")
    table.add_column("Conflict", style="bold red")
    table.add_column("Description")
    table.add_column("Items", style="dim")
    for conflict in result.conflicts:
        table.add_row(conflict.conflict_id, conflict.description, ", ".join(conflict.items))
    return table


def _print_trace(result: AnalysisResult, max_lines: int) -> None:
    log = result.diagnostics.analysis_log
    console.print(f"\n[bold]Analysis trace[/bold] ({len(log)} lines)")
    for line in log[:max_lines]:
        console.print(line, markup=False, highlight=False, soft_wrap=True)
    if len(log) > max_lines:
        console.print(f"[dim]... {len(log) - max_lines} more lines[/dim]")


@app.command("analyze")
def analyze(
    path: Path = typer.Argument(..., help="React project directory or single source file."),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table or json."),
    trace: Optional[bool] = typer.Option(None, "--trace/--no-trace", help="Print the analysis trace."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON result to this file."),
):
    """Analyze components, data flows and conflicts under PATH."""
    settings = load_config()
    fmt = output_format or settings["format"]
    if fmt not in config.OUTPUT_FORMATS:
        raise typer.BadParameter(f"Unknown format '{fmt}'. Use one of: {', '.join(config.OUTPUT_FORMATS)}.")
    show_trace = settings["show_trace"] if trace is None else trace

    result = _run_analysis(path)

    if output is not None:
        export_json(result, output)
        console.print(f"[green]✓[/green] Wrote analysis to {output}")

    if fmt == "json":
        if output is None:
            typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    diag = result.diagnostics
    console.print(
        f"[bold]📊 {len(diag.files_analyzed)} files[/bold] | "
        f"{len(result.components)} components | {len(result.flows)} flows | "
        f"{len(result.conflicts)} conflicts"
    )
    if result.components:
        console.print(_components_table(result))
    if result.flows:
        console.print(_flows_table(list(result.flows)))
    if result.conflicts:
        console.print(_conflicts_table(result))
    if diag.parse_errors:
        console.print("\n[bold yellow]⚠️  Parse errors[/bold yellow]")
        for error in diag.parse_errors:
            console.print(f"  {error}", markup=False, highlight=False, soft_wrap=True)
    if show_trace:
        _print_trace(result, int(settings["max_trace_lines"]))


@app.command("components")
def list_components(
    path: Path = typer.Argument(..., help="React project directory or single source file."),
):
    """List discovered components with their files and item counts."""
    result = _run_analysis(path)
    if not result.components:
        typer.echo("No React components found.")
        raise typer.Exit(code=0)
    console.print(_components_table(result))


@app.command("flows")
def list_flows(
    path: Path = typer.Argument(..., help="React project directory or single source file."),
    flow_id: Optional[str] = typer.Option(None, "--flow-id", help="Only show flows with this id."),
):
    """List inferred data flows between components."""
    result = _run_analysis(path)
    flows = [f for f in result.flows if flow_id is None or f.flow_id == flow_id]
    if not flows:
        typer.echo("No data flows found.")
        raise typer.Exit(code=0)
    console.print(_flows_table(flows))


@app.command("conflicts")
def list_conflicts(
    path: Path = typer.Argument(..., help="React project directory or single source file."),
):
    """List props that duplicate a context value."""
    result = _run_analysis(path)
    if not result.conflicts:
        typer.echo("No conflicts found.")
        raise typer.Exit(code=0)
    console.print(_conflicts_table(result))


@app.command("export")
def export_graph(
    path: Path = typer.Argument(..., help="React project directory or single source file."),
    export_format: str = typer.Option("json", "--format", "-f", help="Export format: json or dot."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
    focus: str = typer.Option("", "--focus", help="Only components whose name contains this text, plus neighbours."),
):
    """Export the component graph as JSON or Graphviz DOT."""
    fmt = export_format.lower()
    if fmt not in config.EXPORT_FORMATS:
        raise typer.BadParameter(f"Unknown format '{export_format}'. Use one of: {', '.join(config.EXPORT_FORMATS)}.")

    result = _run_analysis(path)
    target = output or Path.cwd() / f"reactgraph.{fmt}"

    if fmt == "dot":
        export_dot(result, target, focus=focus)
    else:
        export_json(result, target)
    typer.echo(f"Exported {fmt.upper()} graph to {target}")


if __name__ == "__main__":
    app()

"""Typer CLI exposing the configuration phase."""

from __future__ import annotations

import shutil
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from buildwire.container import ServiceContainer
from buildwire.domain import BuildPlan
from buildwire.exceptions import BuildwireError

from .deps import get_container

app = typer.Typer(help="buildwire command-line interface")
console = Console()


def _container() -> ServiceContainer:
    try:
        return get_container()
    except BuildwireError as exc:
        typer.echo(f"Configuration failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _plan() -> BuildPlan:
    container = _container()
    try:
        return container.plan()
    except BuildwireError as exc:
        typer.echo(f"Configuration failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings and registered versions."""

    container = _container()
    settings = container.settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Project File:\t" + str(settings.project_file))
    typer.echo("Build Offset:\t" + container.output_paths.offset)
    for key, value in container.version_registry.snapshot().items():
        typer.echo(f"{key}:\t{value}")


@app.command("order")
def order(
    levels: bool = typer.Option(False, "--levels", help="Group modules that may run concurrently"),
) -> None:
    """Show the module evaluation order."""

    container = _container()
    try:
        if levels:
            for index, level in enumerate(container.module_graph.compute_levels(), start=1):
                typer.echo(f"{index}\t" + ", ".join(level))
            return
        for name in container.module_graph.compute_order():
            typer.echo(name)
    except BuildwireError as exc:
        typer.echo(f"Configuration failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("paths")
def paths() -> None:
    """Show the root and per-module output directories."""

    plan = _plan()
    typer.echo(f"<root>\t{plan.root_output_dir}")
    for module in plan.modules:
        typer.echo(f"{module.name}\t{module.output_dir}")


@app.command("resolve")
def resolve(
    module: str,
    variant: str = typer.Option("debug", help="Build variant to resolve"),
) -> None:
    """Show a module's resolved dependency graph with overrides applied."""

    container = _container()
    try:
        definition = container.project.module(module)
        graph = container.resolution_engine.resolve(definition, variant)
    except BuildwireError as exc:
        typer.echo(f"Configuration failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not graph.artifacts:
        typer.echo(f"No dependencies for {module}/{variant}")
        return

    table = Table(title=f"{module} ({variant})")
    table.add_column("Artifact", style="cyan")
    table.add_column("Requested")
    table.add_column("Selected", style="green")
    table.add_column("Forced")
    for node in graph.artifacts:
        table.add_row(
            node.artifact,
            ", ".join(node.requested),
            node.version,
            "yes" if node.forced else "",
        )
    console.print(table)


@app.command("plan")
def plan(
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the plan to a file"),
) -> None:
    """Run the configuration phase and emit the build plan as JSON."""

    build_plan = _plan()
    payload = build_plan.model_dump_json(indent=2)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    typer.echo(f"Wrote build plan for {build_plan.project} to {output}")


@app.command("clean")
def clean(
    dry_run: bool = typer.Option(False, "--dry-run", help="Only report what would be removed"),
) -> None:
    """Delete the shared root output directory."""

    build_plan = _plan()
    root = build_plan.root_output_dir
    if not root.exists():
        typer.echo(f"Nothing to clean at {root}")
        return
    if dry_run:
        typer.echo(f"Would remove {root}")
        return
    shutil.rmtree(root)
    typer.echo(f"Removed {root}")

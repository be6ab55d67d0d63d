"""Command-line interface for critpath."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .exceptions import CritpathError
from .formatting import format_json, format_text
from .loader import load_scheduling_config, load_snapshot
from .logger import setup_logger
from .models import ProjectSnapshot, ScheduleWarning
from .scheduler import (
    CriticalPathEngine,
    CycleDetected,
    RelationMode,
    SchedulingConfig,
    build_task_graph,
    find_cycle_path,
    topological_sort,
)

app = typer.Typer(
    name="critpath",
    help="Critical path scheduling for Gantt-style project plans",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Output formats for the schedule command."""

    TEXT = "text"
    JSON = "json"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=changes, 2=per-task checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: critpath_config.yaml next to the snapshot)",
        ),
    ] = None,
) -> None:
    """Global options for critpath commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _load(file: Path) -> tuple[ProjectSnapshot, SchedulingConfig]:
    try:
        return load_snapshot(file), load_scheduling_config(file)
    except CritpathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _echo_warnings(warnings: tuple[ScheduleWarning, ...] | list[ScheduleWarning]) -> None:
    if warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command()
def schedule(
    file: Annotated[Path, typer.Argument(help="Path to the snapshot YAML file")] = Path(
        "project.yaml"
    ),
    *,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    relation_mode: Annotated[
        RelationMode | None,
        typer.Option(
            "--relation-mode",
            help="Override how relation types are scheduled (typed or finish_to_start)",
        ),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Compute earliest/latest times, slack and the critical path."""
    snapshot, config = _load(file)
    if relation_mode is not None:
        config = config.model_copy(update={"relation_mode": relation_mode})

    result = CriticalPathEngine(config).schedule(snapshot.tasks, snapshot.dependencies)

    if output_format == OutputFormat.JSON:
        report = format_json(snapshot, result)
    else:
        report = format_text(snapshot, result)

    if output:
        output.write_text(report + "\n", encoding="utf-8")
        typer.echo(f"Schedule written to {output}")
    else:
        typer.echo(report)

    _echo_warnings(result.warnings)


@app.command()
def order(
    file: Annotated[Path, typer.Argument(help="Path to the snapshot YAML file")] = Path(
        "project.yaml"
    ),
) -> None:
    """Print tasks in dependency order, or the cycle that prevents one."""
    snapshot, config = _load(file)
    graph = build_task_graph(snapshot.tasks, snapshot.dependencies, config)
    outcome = topological_sort(
        graph.task_ids, {task_id: graph.predecessors(task_id) for task_id in graph.task_ids}
    )

    if isinstance(outcome, CycleDetected):
        typer.echo(f"Cycle: {' -> '.join(outcome.cycle)}", err=True)
        raise typer.Exit(1)

    for task_id in outcome.order:
        typer.echo(task_id)
    _echo_warnings(graph.warnings)


@app.command("check-edge")
def check_edge(
    file: Annotated[Path, typer.Argument(help="Path to the snapshot YAML file")],
    predecessor: Annotated[str, typer.Argument(help="Predecessor task id")],
    successor: Annotated[str, typer.Argument(help="Successor task id")],
) -> None:
    """Check whether a new dependency can be added without creating a cycle."""
    snapshot, _config = _load(file)

    for task_id in (predecessor, successor):
        if snapshot.get_task(task_id) is None:
            typer.echo(f"Warning: task '{task_id}' is not in {file}", err=True)

    cycle = find_cycle_path(snapshot.dependencies, predecessor, successor)
    if cycle is not None:
        typer.echo(
            f"Refused: {predecessor} -> {successor} would create a cycle: {' -> '.join(cycle)}"
        )
        raise typer.Exit(1)

    typer.echo(f"OK: {predecessor} -> {successor} can be added")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

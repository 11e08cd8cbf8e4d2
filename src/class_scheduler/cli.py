"""CLI entry point for the class scheduler."""

import logging
from collections import Counter
from dataclasses import replace
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .exceptions import ConfigurationError, InvalidInputError, SearchFailure
from .exporters import get_exporter
from .loaders import load_json, load_request
from .scheduler import ExecutionMode, generate_schedule
from .scheduler.schedule import Schedule

app = typer.Typer(
    name="class-scheduler",
    help="Schedule class sessions with simulated annealing",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _score_table(score: dict) -> Table:
    table = Table(title="Score", show_header=False)
    table.add_column("Component", style="cyan")
    table.add_column("Value", style="green")
    for name, value in score.items():
        table.add_row(name, f"{value:.4f}" if isinstance(value, float) else str(value))
    return table


@app.command()
def schedule(
    input_file: Annotated[
        Path,
        typer.Argument(help="Scheduling request JSON file"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", help="Number of annealing runs (max 8)"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible runs"),
    ] = None,
    mode: Annotated[
        ExecutionMode,
        typer.Option("--mode", "-m", help="How runs are executed"),
    ] = ExecutionMode.SEQUENTIAL,
    max_iterations: Annotated[
        Optional[int],
        typer.Option("--max-iterations", help="Iteration budget per run"),
    ] = None,
    weeks_from: Annotated[
        Optional[datetime],
        typer.Option("--weeks-from", formats=["%Y-%m-%d"], help="Export only weeks starting on or after this date (csv, excel)"),
    ] = None,
    weeks_to: Annotated[
        Optional[datetime],
        typer.Option("--weeks-to", formats=["%Y-%m-%d"], help="Export only weeks ending on or before this date (csv, excel)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a schedule from a request file."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    _setup_logging(verbose)

    try:
        request = load_request(input_file)
    except InvalidInputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    search = request.search
    if seed is not None:
        search = replace(search, seed=seed)
    if max_iterations is not None:
        search = replace(search, max_iterations=max_iterations)

    console.print(f"\n[bold]Schedule Generation for:[/bold] {input_file.name}")
    console.print(f"  Classes: {len(request.classes)}")
    console.print(f"  Start date: {request.start_date.isoformat()}")

    try:
        with console.status("[bold green]Searching..."):
            result = generate_schedule(
                request.classes,
                request.start_date,
                request.constraints,
                request.preferences,
                request.blackout_periods,
                worker_count=workers if workers is not None else request.workers,
                config=search,
                mode=mode,
            )
    except (ConfigurationError, InvalidInputError, SearchFailure) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _show_schedule_summary(result)

    output_path = output or Path(f"output/schedule.{'xlsx' if format == OutputFormat.excel else format.value}")
    options = {}
    if weeks_from is not None or weeks_to is not None:
        if format == OutputFormat.json:
            console.print("[yellow]Week range applies to csv and excel output only; exporting all weeks[/yellow]")
        else:
            start = weeks_from.date() if weeks_from else date.min
            end = weeks_to.date() if weeks_to else date.max
            options["week_range"] = (start, end)
    exporter = get_exporter(format.value, **options)
    with console.status(f"[bold green]Exporting to {output_path}..."):
        exporter.export(result, output_path)
    console.print(f"\n[bold green]✓[/bold green] Schedule exported to: {output_path}")


def _show_schedule_summary(result: Schedule) -> None:
    console.print("\n[bold]Results:[/bold]")
    console.print(
        f"  Scheduled: {result.get_scheduled_class_count()}/{result.get_total_class_count()}"
    )
    console.print(f"  Period: {result.start_date.isoformat()} - {result.end_date.isoformat()}")
    console.print(_score_table(result.score.to_dict()))

    unscheduled = result.get_unscheduled_classes()
    if unscheduled:
        console.print(f"\n[bold yellow]Unscheduled classes ({len(unscheduled)}):[/bold yellow]")
        for item in unscheduled[:10]:
            console.print(f"  [yellow]- {item.id}[/yellow]")
        if len(unscheduled) > 10:
            console.print(f"  [yellow]... and {len(unscheduled) - 10} more[/yellow]")

    if result.dates():
        day_table = Table(title="Classes by Day")
        day_table.add_column("Date", style="cyan")
        day_table.add_column("Count", style="green")
        day_table.add_column("Classes", style="magenta")
        for day in result.dates():
            entries = result.classes_on_date(day)
            day_table.add_row(
                day.isoformat(),
                str(len(entries)),
                ", ".join(f"P{e.period}:{e.id}" for e in entries),
            )
        console.print(day_table)


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Scheduling request JSON file"),
    ],
) -> None:
    """Validate a request file without running the search."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    errors: list[str] = []
    request = None
    try:
        request = load_request(input_file)
    except InvalidInputError as e:
        errors.append(str(e))

    if request is not None:
        for check in (request.constraints.validate, request.search.validate):
            try:
                check()
            except ConfigurationError as e:
                errors.append(str(e))
        ids = Counter(c.id for c in request.classes)
        duplicates = sorted(i for i, n in ids.items() if n > 1)
        if duplicates:
            errors.append(f"Duplicate class ids: {', '.join(duplicates)}")
        if not request.classes:
            errors.append("No classes to schedule")

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")
    if errors:
        console.print("[bold red]✗ Request has issues[/bold red]")
        for error in errors:
            console.print(f"  [red]• {error}[/red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Request is valid[/bold green]")
    console.print(f"  Classes: {len(request.classes)}")
    console.print(f"  Blackout periods: {len(request.blackout_periods)}")


@app.command()
def stats(
    schedule_file: Annotated[
        Path,
        typer.Argument(help="Schedule JSON file produced by the schedule command", exists=True, readable=True),
    ],
) -> None:
    """Show statistics for an exported schedule."""
    try:
        data = load_json(schedule_file)
    except InvalidInputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    classes = data.get("classes", [])
    console.print(f"\n[bold]Statistics for:[/bold] {schedule_file.name}")
    console.print(f"  Period: {data.get('start_date')} - {data.get('end_date')}")
    console.print(f"  Scheduled classes: {len(classes)}")

    if data.get("score"):
        console.print(_score_table(data["score"]))

    by_day = Counter(c["date"] for c in classes)
    if by_day:
        day_table = Table(title="Classes by Day")
        day_table.add_column("Date", style="cyan")
        day_table.add_column("Count", style="green")
        for day, count in sorted(by_day.items()):
            day_table.add_row(day, str(count))
        console.print(day_table)

    unscheduled = data.get("unscheduled_class_ids", [])
    if unscheduled:
        console.print(f"\n[bold yellow]Unscheduled ({len(unscheduled)}):[/bold yellow] {', '.join(unscheduled)}")


if __name__ == "__main__":
    app()

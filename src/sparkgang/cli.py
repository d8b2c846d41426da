"""sparkgang CLI.

Previews what a batch scheduler backend does to a SparkApplication before
submission: the minimum resources of each pod role and the mutated manifest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sparkgang import __version__
from sparkgang._constants import DEFAULT_BATCH_SCHEDULER
from sparkgang.batchscheduler import BatchSchedulerError, get_scheduler
from sparkgang.config import (
    ConfigError,
    SparkApplication,
    dump_application_yaml,
    load_application,
    save_application,
)
from sparkgang.resources import (
    ParseError,
    driver_pod_resource_usage,
    executor_pod_resource_usage,
    get_initial_executors,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sparkgang",
    help="Compute gang-scheduling task groups for Spark applications",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


# =============================================================================
# Helper Functions
# =============================================================================


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]ERROR[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]WARN[/yellow] {message}")


def _load(manifest: Path) -> SparkApplication:
    """Load a manifest, exiting with an error message on failure."""
    try:
        return load_application(manifest)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# =============================================================================
# CLI Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"sparkgang version {__version__}")


@app.command()
def resources(
    manifest: Annotated[
        Path,
        typer.Argument(help="SparkApplication manifest (YAML)"),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Show minimum driver and executor resources for a SparkApplication."""
    _configure_logging(verbose)
    spark_app = _load(manifest)

    initial_executors = get_initial_executors(spark_app)
    try:
        driver = driver_pod_resource_usage(spark_app)
        executor = executor_pod_resource_usage(spark_app) if initial_executors > 0 else None
    except ParseError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904

    table = Table(title=spark_app.name or str(manifest))
    table.add_column("Role", style="cyan")
    table.add_column("Members", justify="right")
    table.add_column("CPU", justify="right")
    table.add_column("Memory", justify="right")

    table.add_row("driver", "1", driver["cpu"], driver["memory"])
    if executor is not None:
        table.add_row("executor", str(initial_executors), executor["cpu"], executor["memory"])
    else:
        table.add_row("executor", "0", "[dim]-[/dim]", "[dim]-[/dim]")
    console.print(table)
    if executor is None:
        print_warning("No initial executors: executor task group will be omitted")


@app.command()
def render(
    manifest: Annotated[
        Path,
        typer.Argument(help="SparkApplication manifest (YAML)"),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the rendered manifest here instead of stdout",
        ),
    ] = None,
    scheduler: Annotated[
        str | None,
        typer.Option(
            "--scheduler",
            "-s",
            help="Batch scheduler backend (default: spec.batchScheduler or yunikorn)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Apply a batch scheduler's submission hook and print the manifest.

    Examples:

        sparkgang render spark-pi.yaml

        sparkgang render spark-pi.yaml -o spark-pi.scheduled.yaml
    """
    _configure_logging(verbose)
    spark_app = _load(manifest)

    backend_name = scheduler or spark_app.spec.batch_scheduler or DEFAULT_BATCH_SCHEDULER
    try:
        backend = get_scheduler(backend_name)
        if backend.should_schedule(spark_app):
            backend.do_batch_scheduling_on_submission(spark_app)
        else:
            print_warning(f"{backend.name()} does not handle {spark_app.name}, manifest unchanged")
    except BatchSchedulerError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904

    if output is not None:
        save_application(spark_app, output)
        print_success(f"Wrote {output}")
    else:
        typer.echo(dump_application_yaml(spark_app), nl=False)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()

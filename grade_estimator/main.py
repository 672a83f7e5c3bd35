"""CLI entry point for Grade Estimator."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import DEFAULT_CONCURRENCY, DEFAULT_DATA_PATH, DEFAULT_RECENCY_CURVE, DEFAULT_SEASON, RECENCY_CURVES
from .engine import BoundaryResolver, GradeEstimator, estimate_concurrently, parse_request
from .errors import EstimatorError
from .models import EngineConfig, parse_season
from .output import export_to_csv, format_boundary_table, format_json, format_subjects, format_table
from .reference import CachingProvider, JsonReferenceProvider

app = typer.Typer(
    name="grade-estimator",
    help="Estimate exam grades from component marks and historical grade boundaries.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("grade_estimator")


def setup_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_provider(data: str) -> CachingProvider:
    """Load the reference dataset, exiting on a missing file."""
    data_path = Path(data)
    if not data_path.exists():
        console.print(f"[red]Reference data not found: {data}[/red]")
        raise typer.Exit(1)

    logger.debug("Loading reference data from %s", data_path)
    return CachingProvider(JsonReferenceProvider.from_file(data_path))


def build_config(decay: str) -> EngineConfig:
    decay = decay.strip().lower()
    if decay not in RECENCY_CURVES:
        console.print(f"[red]Invalid decay curve: {decay}[/red]")
        console.print(f"Available curves: {', '.join(RECENCY_CURVES)}")
        raise typer.Exit(1)
    return EngineConfig(recency_curve=decay)


def fail(error: EstimatorError, output_format: str = "table") -> None:
    """Report an engine error and exit."""
    logger.debug("Estimate failed: %s", error.to_dict())
    if output_format == "json":
        console.print_json(json.dumps({"error": error.to_dict()}))
    else:
        console.print(f"[red]{error.kind.value}: {escape(error.message)}[/red]")
    raise typer.Exit(1)


@app.command()
def estimate(
    request_file: str = typer.Argument(..., help="JSON request file with 'entries' and optional 'season'"),
    season: Optional[str] = typer.Option(
        None,
        "--season",
        "-s",
        help="Override the request season: FM, MJ or ON",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (CSV format)",
    ),
    data: str = typer.Option(
        str(DEFAULT_DATA_PATH),
        "--data",
        "-d",
        help="Reference dataset (JSON)",
    ),
    decay: str = typer.Option(
        DEFAULT_RECENCY_CURVE,
        "--decay",
        help=f"Recency weighting curve. Available: {', '.join(RECENCY_CURVES)}",
    ),
    concurrency: int = typer.Option(
        DEFAULT_CONCURRENCY,
        "--concurrency",
        help="Number of subjects evaluated concurrently (1 = sequential)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Estimate grades for the subjects in a request file."""
    setup_logging(verbose)

    request_path = Path(request_file)
    if not request_path.exists():
        console.print(f"[red]File not found: {request_file}[/red]")
        raise typer.Exit(1)

    try:
        payload = json.loads(request_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {request_file}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read {request_file}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    config = build_config(decay)

    try:
        provider = load_provider(data)
        entries, request_season = parse_request(payload)
        chosen_season = parse_season(season) if season else request_season
        estimator = GradeEstimator(provider, config)

        logger.info("Estimating %d subject(s) for season %s", len(entries), chosen_season)
        if concurrency > 1:
            results = asyncio.run(
                estimate_concurrently(estimator, entries, chosen_season, concurrency=concurrency)
            )
        else:
            results = estimator.estimate(entries, chosen_season)
    except EstimatorError as e:
        fail(e, output_format)

    for result in results:
        if result.degraded:
            logger.warning("No boundary history for %s in %s; graded U", result.subject_id, chosen_season)
        elif result.adjusted:
            logger.info("Boundaries for %s were adjusted to stay monotonic", result.subject_id)
    logger.debug("Reference cache: %s", provider.stats())

    if output:
        export_to_csv(results, output, chosen_season)
        console.print(f"[green]Results saved to {output}[/green]")
    elif output_format == "json":
        format_json(results, console)
    else:
        format_table(results, chosen_season, console)


@app.command()
def subjects(
    data: str = typer.Option(
        str(DEFAULT_DATA_PATH),
        "--data",
        "-d",
        help="Reference dataset (JSON)",
    ),
) -> None:
    """List the subjects and components in the reference dataset."""
    setup_logging(False)
    try:
        provider = load_provider(data)
    except EstimatorError as e:
        fail(e)
    format_subjects(provider.list_subjects(), console)


@app.command()
def boundaries(
    subject_id: str = typer.Argument(..., help="Syllabus code (e.g., 0580)"),
    season: str = typer.Option(
        DEFAULT_SEASON,
        "--season",
        "-s",
        help="Season: FM, MJ or ON",
    ),
    data: str = typer.Option(
        str(DEFAULT_DATA_PATH),
        "--data",
        "-d",
        help="Reference dataset (JSON)",
    ),
    decay: str = typer.Option(
        DEFAULT_RECENCY_CURVE,
        "--decay",
        help=f"Recency weighting curve. Available: {', '.join(RECENCY_CURVES)}",
    ),
) -> None:
    """Show the effective grade boundaries for a subject and season."""
    setup_logging(False)
    config = build_config(decay)

    try:
        provider = load_provider(data)
        table = BoundaryResolver(provider, config).resolve(subject_id, parse_season(season))
    except EstimatorError as e:
        fail(e)

    format_boundary_table(table, console)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"grade-estimator version {__version__}")


if __name__ == "__main__":
    app()

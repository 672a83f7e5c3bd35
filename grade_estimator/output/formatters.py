"""Output formatters for estimate results."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import GRADE_COLORS, RESULT_DECIMALS, SEASONS
from ..models import EffectiveBoundaryTable, EstimateResult, Syllabus
from ..engine import summarize_results


def format_table(results: list[EstimateResult], season: str, console: Console) -> None:
    """Format and print results as a rich table."""
    summary = summarize_results(results)

    header = Text()
    header.append(f"Grade Estimate: {SEASONS.get(season, season)} session\n", style="bold cyan")
    header.append(f"Subjects: {summary['subject_count']}  |  Best Grade: {summary['best_grade'] or '-'}")
    if summary["mean_normalized_mark"] is not None:
        header.append(f"  |  Mean Mark: {summary['mean_normalized_mark']:.1%}")

    console.print(Panel(header, title="[bold]Estimate Results[/bold]", border_style="cyan"))
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", width=3)
    table.add_column("Subject", style="cyan", width=10)
    table.add_column("Mark", justify="right", width=8)
    table.add_column("Grade", justify="center", width=6)
    table.add_column("Years", justify="right", width=6)
    table.add_column("Notes", width=40)

    for index, result in enumerate(results, start=1):
        color = GRADE_COLORS.get(result.estimated_grade, "white")
        notes = []
        if result.degraded:
            notes.append("[yellow]No boundary history for this season[/yellow]")
        if result.adjusted:
            notes.append("[yellow]Boundaries adjusted (reduced confidence)[/yellow]")

        table.add_row(
            str(index),
            result.subject_id,
            f"{result.normalized_mark:.1%}",
            f"[{color}]{result.estimated_grade}[/{color}]",
            str(result.years_used),
            "\n".join(notes) or "[dim]-[/dim]",
        )

    console.print(table)
    console.print()

    counts = " ".join(
        f"{grade}:{count}" for grade, count in summary["grade_counts"].items() if count
    )
    console.print(f"[dim]Distribution: {counts}[/dim]")
    if summary["degraded_count"]:
        console.print(
            f"[yellow]{summary['degraded_count']} subject(s) had no boundary data and were graded U[/yellow]"
        )


def format_json(results: list[EstimateResult], console: Console) -> None:
    """Format and print results as JSON."""
    payload = [_rounded(result.to_dict()) for result in results]
    console.print_json(json.dumps(payload))


def format_boundary_table(table: EffectiveBoundaryTable, console: Console) -> None:
    """Print an effective boundary table with its metadata."""
    grid = Table(show_header=True, header_style="bold")
    grid.add_column("Grade", justify="center", width=6)
    grid.add_column("Threshold", justify="right", width=10)

    for grade, threshold in table.thresholds.items():
        color = GRADE_COLORS.get(grade, "white")
        grid.add_row(f"[{color}]{grade}[/{color}]", f"{threshold:.1%}")

    years = ", ".join(str(y) for y in table.years)
    title = f"[bold]{table.subject_id} / {SEASONS.get(table.season, table.season)}[/bold]"
    console.print(Panel(grid, title=title, border_style="cyan"))
    console.print(f"Years used: {table.years_used} ({years})")
    if table.adjusted:
        console.print("[yellow]Thresholds were adjusted to keep grades in order[/yellow]")


def format_subjects(syllabuses: list[Syllabus], console: Console) -> None:
    """Print available syllabuses and their components."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Code", style="cyan", no_wrap=True, min_width=6)
    table.add_column("Subject", min_width=12)
    table.add_column("Components")

    for syllabus in syllabuses:
        components = ", ".join(
            f"{c.code} (/{c.max_mark:g}, {c.weight:.0%})" for c in syllabus.components
        )
        table.add_row(syllabus.code, syllabus.name, components)

    console.print(table)


def _rounded(data: dict) -> dict:
    data["normalized_mark"] = round(data["normalized_mark"], RESULT_DECIMALS)
    return data

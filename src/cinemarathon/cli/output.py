"""Rendering of command results as rich tables or JSON."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from cinemarathon.cli.common.error_handler import format_json_output
from cinemarathon.core.marathon import format_minutes
from cinemarathon.shared.models import (
    EnrichedMovie,
    Movie,
    Plan,
    PlanReport,
    TrailerRef,
    UnificationReport,
    VideoStatistics,
)

console = Console()


def emit_json(command: str, data: Any) -> None:
    typer.echo(format_json_output(command, success=True, data=data))


def render_movies(movies: Sequence[Movie], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Rating", justify="right")
    table.add_column("Released")
    table.add_column("Genres")

    for movie in movies:
        table.add_row(
            str(movie.id),
            movie.title,
            f"{movie.rating:.1f}",
            movie.release_date,
            ", ".join(movie.genres),
        )

    console.print(table)


def render_enriched(movies: Sequence[EnrichedMovie], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Rating", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Trailer")

    for movie in movies:
        table.add_row(
            str(movie.id),
            movie.title or "",
            f"{movie.rating or 0:.1f}",
            format_minutes(movie.duration),
            movie.trailer.url if movie.trailer else "-",
        )

    console.print(table)


def render_unification(report: UnificationReport) -> None:
    console.print(
        f"Trailers {report.with_trailer}/{report.total} "
        f"({report.trailer_rate:.0%}), completeness {report.completeness:.0%}"
    )


def render_trailers(trailers: Sequence[TrailerRef]) -> None:
    table = Table(title="Trailers")
    table.add_column("Title", style="bold")
    table.add_column("Channel")
    table.add_column("URL")
    for trailer in trailers:
        table.add_row(trailer.title, trailer.channel, trailer.url)
    console.print(table)


def render_stats(video_id: str, stats: VideoStatistics | None) -> None:
    if stats is None:
        console.print(f"No statistics available for {video_id}")
        return
    table = Table(title=f"Statistics for {video_id}")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Duration", justify="right")
    minutes, seconds = divmod(stats.duration_seconds, 60)
    table.add_row(f"{stats.views:,}", f"{stats.likes:,}", f"{stats.comments:,}", f"{minutes}:{seconds:02d}")
    console.print(table)


def render_plan(plan: Plan, report: PlanReport, heading: str) -> None:
    console.print(f"[bold]{heading}[/bold]")
    console.print(plan.description)

    if not plan.is_empty:
        table = Table()
        table.add_column("#", justify="right", style="dim")
        table.add_column("Title", style="bold")
        table.add_column("Rating", justify="right")
        table.add_column("Duration", justify="right")
        for position, item in enumerate(plan.items, start=1):
            table.add_row(
                str(position),
                item.title or "",
                f"{item.rating or 0:.1f}",
                format_minutes(item.duration),
            )
        console.print(table)

    console.print(
        f"Utilization {report.utilization_label} | "
        f"Free time {report.free_time} | "
        f"Excellent movies {report.excellent_count} | "
        f"Quality {report.quality}"
    )


def render_presets(presets: Mapping[str, int]) -> None:
    table = Table(title="Marathon presets")
    table.add_column("Preset", style="bold")
    table.add_column("Minutes", justify="right")
    table.add_column("Duration", justify="right")
    for name, minutes in presets.items():
        table.add_row(name, str(minutes), format_minutes(minutes))
    console.print(table)

"""
CineMarathon Typer CLI Application

Command-line front end over MarathonService: catalog listings, trailer
lookup and marathon planning, rendered as rich tables or as JSON.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import typer

from cinemarathon import __version__
from cinemarathon.cli import output
from cinemarathon.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from cinemarathon.cli.common.error_handler import handle_cli_error, handle_cli_errors
from cinemarathon.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    max_count_option,
    min_rating_option,
    prefer_recent_option,
    verbose_option,
    version_option,
)
from cinemarathon.config import get_config, reload_config
from cinemarathon.config.models.settings import Settings
from cinemarathon.core.marathon import MARATHON_PRESETS, get_preset_budget
from cinemarathon.services.enricher import MovieEnricher
from cinemarathon.services.marathon_service import MarathonService
from cinemarathon.shared.errors import ApplicationError, ErrorCode, ErrorContext
from cinemarathon.shared.logging import setup_structured_logger
from cinemarathon.shared.models import MarathonOptions, Plan, PlanReport

T = TypeVar("T")

app = typer.Typer(
    name="cinemarathon",
    help="Plan movie marathons from TMDB listings enriched with YouTube trailers.",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
    invoke_without_command=True,
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"CineMarathon {__version__}")
        raise typer.Exit


@app.callback()
def main(
    verbose: int = verbose_option,
    log_level: LogLevel | None = log_level_option,
    json_output: bool = json_output_option,
    config_path: Path | None = config_option,
    version: bool = version_option,
) -> None:
    """Process the common options before any command runs."""
    try:
        if version:
            version_callback(value=True)

        context = CliContext(
            verbose=verbose,
            log_level=log_level,
            json_output=json_output,
            config_path=config_path,
        )
        set_cli_context(context)
        configure_logging(load_cli_settings())
    except typer.Exit:
        raise
    except Exception as e:
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


def load_cli_settings() -> Settings:
    """Load settings from the ``--config`` file or the default locations."""
    context = get_cli_context()
    if context.config_path is not None:
        return reload_config(context.config_path)
    return get_config()


def configure_logging(settings: Settings) -> None:
    """Set up logging from the command-line options and ``[logging]`` settings."""
    context = get_cli_context()
    setup_structured_logger(
        level=context.resolve_log_level(settings.logging.level),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )


def create_service(settings: Settings) -> MarathonService:
    return MarathonService.from_settings(settings)


def run_with_service(
    operation: Callable[[MarathonService], Awaitable[T]],
    settings: Settings | None = None,
) -> T:
    """Run ``operation`` against a started service and close it afterwards."""
    service = create_service(settings or get_config())

    async def runner() -> T:
        async with service:
            return await operation(service)

    return asyncio.run(runner())


def resolve_budget(value: str) -> int:
    """Parse a budget given either in minutes or as a preset name."""
    text = value.strip()
    if text.lstrip("-").isdigit():
        minutes = int(text)
        if minutes <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Budget must be a positive number of minutes, got {minutes}",
                context=ErrorContext(operation="resolve_budget", additional_data={"budget": text}),
            )
        return minutes
    return get_preset_budget(text)


def build_options(
    settings: Settings,
    min_rating: float | None,
    max_count: int | None,
    prefer_recent: bool,
) -> MarathonOptions:
    defaults = settings.marathon
    return MarathonOptions(
        min_rating=defaults.min_rating if min_rating is None else min_rating,
        max_count=defaults.max_count if max_count is None else max_count,
        prefer_recent=prefer_recent or defaults.prefer_recent,
        max_optimizer_input=defaults.max_optimizer_input,
    )


def _emit_plan(command: str, plan: Plan, report: PlanReport, heading: str) -> None:
    if get_cli_context().json_output:
        output.emit_json(command, {"plan": plan.to_dict(), "report": report.to_dict()})
    else:
        output.render_plan(plan, report, heading)


def _emit_listing(command: str, movies: list[Any], title: str, *, enriched: bool) -> None:
    if get_cli_context().json_output:
        output.emit_json(command, [movie.to_dict() for movie in movies])
    elif enriched:
        output.render_enriched(movies, title)
    else:
        output.render_movies(movies, title)


@app.command("popular")
@handle_cli_errors("popular")
def popular_command(
    enrich: bool = typer.Option(False, "--enrich", help="Add runtime, cast and trailers to each movie."),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of movies to show."),
) -> None:
    """List popular movies."""
    if enrich:
        movies: list[Any] = run_with_service(lambda service: service.get_popular_enriched(limit))
    else:
        movies = run_with_service(lambda service: service.get_popular())[:limit]
    _emit_listing("popular", movies, "Popular movies", enriched=enrich)
    if enrich and not get_cli_context().json_output:
        output.render_unification(MovieEnricher.analyze_unification(movies))


@app.command("top-rated")
@handle_cli_errors("top-rated")
def top_rated_command(
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of movies to show."),
) -> None:
    """List the best rated movies."""
    movies = run_with_service(lambda service: service.get_top_rated())[:limit]
    _emit_listing("top-rated", movies, "Top rated movies", enriched=False)


@app.command("search")
@handle_cli_errors("search")
def search_command(
    term: str = typer.Argument(..., help="Title to search for."),
    enrich: bool = typer.Option(False, "--enrich", help="Add runtime, cast and trailers to each result."),
    limit: int = typer.Option(5, "--limit", "-n", min=1, help="Number of results to show."),
) -> None:
    """Search movies by title."""
    if enrich:
        movies: list[Any] = run_with_service(lambda service: service.search_enriched(term, limit))
    else:
        movies = run_with_service(lambda service: service.search(term))[:limit]
    _emit_listing("search", movies, f"Results for '{term}'", enriched=enrich)


@app.command("trailers")
@handle_cli_errors("trailers")
def trailers_command(
    title: str = typer.Argument(..., help="Movie title."),
    year: int | None = typer.Option(None, "--year", "-y", help="Release year to narrow the search."),
    limit: int = typer.Option(3, "--limit", "-n", min=1, help="Number of trailers to show."),
) -> None:
    """Find trailer videos for a movie."""
    found = run_with_service(lambda service: service.find_trailers(title, year, limit))
    if get_cli_context().json_output:
        output.emit_json("trailers", [trailer.to_dict() for trailer in found])
    else:
        output.render_trailers(found)


@app.command("stats")
@handle_cli_errors("stats")
def stats_command(
    video_id: str = typer.Argument(..., help="Video identifier, e.g. from the trailers command."),
) -> None:
    """Show views, likes, comments and duration of a trailer video."""
    stats = run_with_service(lambda service: service.video_stats(video_id))
    if get_cli_context().json_output:
        output.emit_json("stats", stats.to_dict() if stats is not None else None)
    else:
        output.render_stats(video_id, stats)


@app.command("plan")
@handle_cli_errors("plan")
def plan_command(
    budget: str = typer.Argument(..., help="Time budget in minutes or a preset name."),
    min_rating: float | None = min_rating_option,
    max_count: int | None = max_count_option,
    prefer_recent: bool = prefer_recent_option,
) -> None:
    """Plan a marathon from popular movies."""
    minutes = resolve_budget(budget)
    settings = get_config()
    options = build_options(settings, min_rating, max_count, prefer_recent)
    plan, report = run_with_service(lambda service: service.plan_from_popular(minutes, options), settings)
    _emit_plan("plan", plan, report, "Marathon plan")


@app.command("thematic")
@handle_cli_errors("thematic")
def thematic_command(
    budget: str = typer.Argument(..., help="Time budget in minutes or a preset name."),
    genre: list[str] = typer.Option(..., "--genre", "-g", help="Genre to include; repeat for several."),
    min_rating: float | None = min_rating_option,
    max_count: int | None = max_count_option,
    prefer_recent: bool = prefer_recent_option,
) -> None:
    """Plan a marathon restricted to some genres."""
    minutes = resolve_budget(budget)
    settings = get_config()
    options = build_options(settings, min_rating, max_count, prefer_recent)
    plan, report = run_with_service(
        lambda service: service.plan_thematic_from_popular(minutes, genre, options),
        settings,
    )
    _emit_plan("thematic", plan, report, f"Thematic marathon: {', '.join(genre)}")


@app.command("decade")
@handle_cli_errors("decade")
def decade_command(
    decade: int = typer.Argument(..., help="First year of the decade, e.g. 1990."),
    budget: str = typer.Argument(..., help="Time budget in minutes or a preset name."),
    min_rating: float | None = min_rating_option,
    max_count: int | None = max_count_option,
    prefer_recent: bool = prefer_recent_option,
) -> None:
    """Plan a marathon of movies released in one decade."""
    if decade % 10 != 0:
        raise ApplicationError(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Decade must be a multiple of ten, got {decade}",
            context=ErrorContext(operation="decade_command", additional_data={"decade": decade}),
        )
    minutes = resolve_budget(budget)
    settings = get_config()
    options = build_options(settings, min_rating, max_count, prefer_recent)
    plan, report = run_with_service(lambda service: service.plan_from_decade(decade, minutes, options), settings)
    _emit_plan("decade", plan, report, f"{decade}s marathon")


@app.command("presets")
@handle_cli_errors("presets")
def presets_command() -> None:
    """Show the named time budgets."""
    if get_cli_context().json_output:
        output.emit_json("presets", dict(MARATHON_PRESETS))
    else:
        output.render_presets(MARATHON_PRESETS)


if __name__ == "__main__":
    app()

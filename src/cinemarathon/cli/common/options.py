"""
Reusable Typer Options Module

Common option definitions shared by the main callback and the commands.
"""

from __future__ import annotations

import typer

verbose_option = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

log_level_option = typer.Option(
    None,
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to the configured level.",
)

json_output_option = typer.Option(
    False,
    "--json",
    help="Enable machine-readable JSON output instead of tables.",
)

version_option = typer.Option(
    False,
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)

config_option = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a TOML configuration file.",
    exists=True,
    dir_okay=False,
)

min_rating_option = typer.Option(
    None,
    "--min-rating",
    min=0.0,
    max=10.0,
    help="Minimum rating of selected movies (default from configuration).",
)

max_count_option = typer.Option(
    None,
    "--max-count",
    min=0,
    help="Maximum number of movies in the plan (default from configuration).",
)

prefer_recent_option = typer.Option(
    False,
    "--prefer-recent",
    help="Favor recent releases when ratings per minute are equal.",
)

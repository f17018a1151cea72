"""Human-readable rendering of durations."""

from __future__ import annotations


def format_minutes(minutes: int) -> str:
    """Render minutes as "Hh Mm", e.g. 150 -> "2h 30m". Negative values render as 0."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}h {minutes % 60}m"

"""Marathon optimizer.

Selects the subset of enriched movies with the highest total rating whose
combined duration fits a time budget. This is a 0/1 knapsack solved
exactly by a top-down search memoized on (index, remaining budget).

Candidates are pre-sorted by value density (rating per minute) and the
search input is capped, which keeps the state space small. For identical
input the selection is always identical: on equal totals the branch that
includes the earlier candidate wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cinemarathon.shared.constants import MarathonDefaults, MarathonMessages
from cinemarathon.shared.models import EnrichedMovie, MarathonOptions, Plan

from .filters import filter_by_decade, filter_by_genres, filter_by_min_rating, filter_valid
from .formatting import format_minutes

logger = logging.getLogger(__name__)


def plan_marathon(
    candidates: Sequence[EnrichedMovie],
    budget_minutes: int,
    options: MarathonOptions | None = None,
) -> Plan:
    """Build the best plan that fits ``budget_minutes``.

    Args:
        candidates: Enriched movies to choose from
        budget_minutes: Available time in minutes
        options: Optimizer options, defaults when None

    Returns:
        Plan in selection order. An infeasible request gives an empty plan,
        never an error.
    """
    options = options or MarathonOptions()

    if budget_minutes <= 0 or options.max_count == 0:
        return build_plan((), budget_minutes)

    pool = filter_by_min_rating(options.min_rating, filter_valid(candidates))
    pool = _order_candidates(pool, prefer_recent=options.prefer_recent)
    pool = pool[: min(options.max_count, options.max_optimizer_input)]

    selection = _solve(pool, budget_minutes)[: options.max_count]

    logger.debug(
        "Selected %d of %d candidates for a %d minute budget",
        len(selection),
        len(candidates),
        budget_minutes,
    )
    return build_plan(tuple(selection), budget_minutes)


def plan_thematic_marathon(
    candidates: Sequence[EnrichedMovie],
    budget_minutes: int,
    genres: Sequence[str],
    options: MarathonOptions | None = None,
) -> Plan:
    """Plan a marathon restricted to movies sharing one of ``genres``."""
    return plan_marathon(filter_by_genres(genres, candidates), budget_minutes, options)


def plan_decade_marathon(
    candidates: Sequence[EnrichedMovie],
    budget_minutes: int,
    decade: int,
    options: MarathonOptions | None = None,
) -> Plan:
    """Plan a marathon restricted to movies released in one decade."""
    return plan_marathon(filter_by_decade(decade, candidates), budget_minutes, options)


def build_plan(items: tuple[EnrichedMovie, ...], budget_minutes: int) -> Plan:
    """Compute the totals and description of a selection."""
    if not items:
        return Plan(
            items=(),
            total_duration=0,
            budget=budget_minutes,
            remaining=budget_minutes,
            average_rating=0.0,
            description=MarathonMessages.EMPTY_PLAN,
        )

    total_duration = sum(item.duration for item in items)
    average = sum(item.rating or 0.0 for item in items) / len(items)
    titles = ", ".join(f'"{item.title}"' for item in items)

    return Plan(
        items=items,
        total_duration=total_duration,
        budget=budget_minutes,
        remaining=budget_minutes - total_duration,
        average_rating=round(average, 2),
        description=MarathonMessages.PLAN_TEMPLATE.format(
            count=len(items),
            duration=format_minutes(total_duration),
            rating=average,
            titles=titles,
        ),
    )


def _order_candidates(pool: list[EnrichedMovie], *, prefer_recent: bool) -> list[EnrichedMovie]:
    if prefer_recent:
        dated = [item for item in pool if item.release_year is not None]
        undated = [item for item in pool if item.release_year is None]
        pool = sorted(dated, key=lambda item: item.release_date, reverse=True) + undated

    # Stable: earlier order breaks density ties
    return sorted(pool, key=lambda item: (item.rating or 0.0) / item.duration, reverse=True)


def _solve(pool: Sequence[EnrichedMovie], budget: int) -> list[EnrichedMovie]:
    """Exact knapsack over ``pool`` maximizing total rating within ``budget``."""
    memo: dict[tuple[int, int], tuple[float, tuple[int, ...]]] = {}

    def best(index: int, remaining: int) -> tuple[float, tuple[int, ...]]:
        if index >= len(pool) or remaining <= 0:
            return 0.0, ()

        key = (index, remaining)
        if key in memo:
            return memo[key]

        skip = best(index + 1, remaining)
        item = pool[index]
        outcome = skip
        if item.duration <= remaining:
            rest_total, rest_picks = best(index + 1, remaining - item.duration)
            take_total = (item.rating or 0.0) + rest_total
            # Including wins unless skipping is strictly better
            if take_total >= skip[0] - MarathonDefaults.RATING_TOLERANCE:
                outcome = (take_total, (index, *rest_picks))

        memo[key] = outcome
        return outcome

    _, picks = best(0, budget)
    return [pool[index] for index in picks]

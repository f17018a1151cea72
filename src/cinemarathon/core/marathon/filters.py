"""Candidate filters for marathon planning.

All filters are pure and order-preserving; they return new lists and
never mutate their input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from cinemarathon.shared.protocols import PlannableItem

ItemT = TypeVar("ItemT", bound=PlannableItem)


def is_plannable(item: PlannableItem) -> bool:
    """Whether an item has an id, a title, a rating and a positive duration."""
    return (
        item.id is not None
        and bool(item.title)
        and item.rating is not None
        and item.duration is not None
        and item.duration > 0
    )


def filter_valid(candidates: Iterable[ItemT]) -> list[ItemT]:
    return [item for item in candidates if is_plannable(item)]


def filter_by_min_rating(threshold: float, candidates: Iterable[ItemT]) -> list[ItemT]:
    return [item for item in candidates if item.rating is not None and item.rating >= threshold]


def filter_by_genres(genres: Sequence[str], candidates: Iterable[ItemT]) -> list[ItemT]:
    """Keep items sharing at least one genre with ``genres``, ignoring case."""
    wanted = {genre.casefold() for genre in genres}
    return [item for item in candidates if any(genre.casefold() in wanted for genre in item.genres)]


def filter_by_decade(decade: int, candidates: Iterable[ItemT]) -> list[ItemT]:
    """Keep items released between ``decade`` and ``decade + 9`` inclusive."""
    return [
        item
        for item in candidates
        if item.release_year is not None and decade <= item.release_year <= decade + 9
    ]

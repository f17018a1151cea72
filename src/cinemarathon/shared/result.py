"""Either-style result values returned by external sources.

Sources never raise on the enrichment path. A call produces either a
``Success`` carrying the value or a ``Failure`` carrying a
``CineMarathonError``, and call sites branch with ``isinstance``.

Example:
    >>> result = await catalog.fetch_detail(550, ["credits", "videos"])
    >>> if isinstance(result, Success):
    ...     print(result.value["title"])
    ... else:
    ...     print(result.error.code)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from cinemarathon.shared.errors import CineMarathonError, QuotaExceededError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome holding a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed outcome holding the error that caused it."""

    error: CineMarathonError

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_quota_exceeded(self) -> bool:
        """Whether the source refused the call because its quota is spent."""
        return isinstance(self.error, QuotaExceededError)


Result = Union[Success[T], Failure]


__all__ = ["Failure", "Result", "Success"]

"""Cache key helpers for outbound source lookups.

Identical lookups must map to the same cache entry regardless of parameter
order or letter case, so keys are built from a canonical serialization.

Example:
    >>> generate_cache_key("detail", 550, {"fields": "credits,videos"})
    'detail:550:fields=credits,videos'
    >>> generate_cache_key("video_search", None, {"q": "Heat 1995 official trailer"})
    'video_search:q=heat 1995 official trailer'
"""

from __future__ import annotations

from typing import Any


def canonical_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize parameters for consistent cache key generation.

    Normalization rules:
        1. Remove None and empty string values
        2. Convert keys to lowercase
        3. Convert string values to lowercase
        4. Join list and tuple values with commas

    Args:
        params: Query parameters dictionary. Can be None.

    Returns:
        Normalized parameters dictionary. Empty dict if params is None.

    Example:
        >>> canonical_params({"Lang": "EN", "query": None, "page": 1})
        {'lang': 'en', 'page': 1}
    """
    if not params:
        return {}

    normalized: dict[str, Any] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        normalized[key.lower()] = value.lower() if isinstance(value, str) else value

    return normalized


def generate_cache_key(
    object_type: str,
    object_id: str | int | None = None,
    params: dict[str, Any] | None = None,
) -> str:
    """Generate a canonical cache key for a source lookup.

    Cache key format:
        - With ID: "{object_type}:{object_id}:{sorted_params}"
        - Without ID: "{object_type}:{sorted_params}"

    Args:
        object_type: Lookup kind. Must be non-empty.
            Examples: "detail", "search", "popular", "video_search"
        object_id: Source object ID, when the lookup targets one record
        params: Query parameters

    Returns:
        Human-readable key with sorted parameters

    Raises:
        ValueError: If object_type is empty or None
    """
    if not object_type:
        raise ValueError("object_type cannot be empty or None")

    parts = [object_type]

    if object_id is not None:
        parts.append(str(object_id))

    normalized = canonical_params(params)
    if normalized:
        parts.append(":".join(f"{k}={v}" for k, v in sorted(normalized.items())))

    return ":".join(parts)

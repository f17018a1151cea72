"""Named marathon time budgets."""

from __future__ import annotations

from cinemarathon.shared.constants import MARATHON_PRESETS
from cinemarathon.shared.errors import ApplicationError, ErrorCode, ErrorContext


def get_preset_budget(name: str) -> int:
    """Return the budget in minutes of a named preset.

    Raises:
        ApplicationError: If the preset does not exist
    """
    key = name.strip().lower().replace("-", "_")
    if key not in MARATHON_PRESETS:
        raise ApplicationError(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Unknown marathon preset '{name}'. Available: {', '.join(MARATHON_PRESETS)}",
            context=ErrorContext(operation="get_preset_budget", additional_data={"preset": name}),
        )
    return MARATHON_PRESETS[key]


__all__ = ["MARATHON_PRESETS", "get_preset_budget"]

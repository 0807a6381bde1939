"""Duration parsing, formatting and estimation helpers."""

import re

from command_orchestrator.domain.entities.command import ActionType, TestType
from command_orchestrator.domain.entities.registry import ContextRegistry

DEFAULT_STEP_MINUTES = 5

_RANGE_PATTERN = re.compile(r"^\s*\d+\s*-\s*(\d+)")
_TIMEOUT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def format_duration(minutes: int) -> str:
    """Render minutes as "N minutes", "H hour(s)" or "H hour(s) M minutes"."""
    if minutes < 60:
        return f"{minutes} minutes"
    hours, remaining = divmod(minutes, 60)
    hour_label = f"{hours} hour{'s' if hours > 1 else ''}"
    if remaining == 0:
        return hour_label
    return f"{hour_label} {remaining} minutes"


def parse_range_upper_bound(label: str | None) -> int:
    """Upper bound of a "5-15 minutes" style label, 5 when unparseable."""
    if not label:
        return DEFAULT_STEP_MINUTES
    match = _RANGE_PATTERN.match(label)
    if match is None:
        return DEFAULT_STEP_MINUTES
    return int(match.group(1))


def parse_duration_seconds(value: object, default: float) -> float:
    """Convert a timeout parameter to seconds.

    Accepts numbers (seconds) and strings such as "300s", "5m", "2h",
    "1500ms" or "45". Anything else, including non-positive values, falls
    back to default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else default
    if isinstance(value, str):
        match = _TIMEOUT_PATTERN.match(value)
        if match:
            amount = float(match.group(1))
            unit = (match.group(2) or "s").lower()
            seconds = amount * _UNIT_SECONDS[unit]
            if seconds > 0:
                return seconds
    return default


class DurationEstimator:
    """Estimates total command duration from the registry.

    total = sum of test type upper bounds x number of services x number of actions.
    Test types without a registry entry contribute nothing.
    """

    def __init__(self, registry: ContextRegistry):
        self._registry = registry

    def estimate_minutes(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> int:
        per_combination = 0
        for test_type in test_types:
            context = self._registry.test_type(test_type)
            if context is not None:
                per_combination += context.execution_time.max_minutes
        return per_combination * len(services) * len(actions)

    def estimate(
        self,
        test_types: list[TestType],
        services: list[str],
        actions: list[ActionType],
    ) -> str:
        return format_duration(self.estimate_minutes(test_types, services, actions))

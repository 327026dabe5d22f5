"""Human-readable renderings of assertion paths, targets and conditions."""

from __future__ import annotations

from typing import assert_never

from loadgate.assertions.base import (
    Assertion,
    Between,
    Condition,
    CountMetric,
    CountSelection,
    CountTarget,
    DetailsPath,
    ForAllPath,
    GlobalPath,
    GreaterThan,
    In,
    Is,
    LessThan,
    MeanRequestsPerSecondTarget,
    Path,
    Target,
    TimeMetric,
    TimeSelection,
    TimeTarget,
)
from loadgate.config import PercentilesConfig

_COUNT_METRICS = {
    CountMetric.ALL_REQUESTS: "all requests",
    CountMetric.FAILED_REQUESTS: "failed requests",
    CountMetric.SUCCESSFUL_REQUESTS: "successful requests",
}

_COUNT_SELECTIONS = {
    CountSelection.COUNT: "count",
    CountSelection.PERCENT: "percentage",
}

_TIME_METRICS = {
    TimeMetric.RESPONSE_TIME: "response time",
}

_TIME_SELECTIONS = {
    TimeSelection.MIN: "min",
    TimeSelection.MAX: "max",
    TimeSelection.MEAN: "mean",
    TimeSelection.STANDARD_DEVIATION: "standard deviation",
}


def ordinal(n: int) -> str:
    """Render ``n`` as an English ordinal: 1st, 2nd, 3rd, 11th, 95th."""
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def printable_path(path: Path) -> str:
    if isinstance(path, GlobalPath):
        return "Global"
    elif isinstance(path, ForAllPath):
        return "For all requests"
    elif isinstance(path, DetailsPath):
        return " / ".join(path.parts) if path.parts else "Global"
    else:
        assert_never(path)


def _printable_time_selection(
    selection: TimeSelection, percentiles: PercentilesConfig
) -> str:
    if selection in _TIME_SELECTIONS:
        return _TIME_SELECTIONS[selection]
    rank = {
        TimeSelection.PERCENTILES_1: percentiles.percentile1,
        TimeSelection.PERCENTILES_2: percentiles.percentile2,
        TimeSelection.PERCENTILES_3: percentiles.percentile3,
        TimeSelection.PERCENTILES_4: percentiles.percentile4,
    }[selection]
    return f"{ordinal(rank)} percentile"


def printable_target(target: Target, percentiles: PercentilesConfig) -> str:
    if isinstance(target, MeanRequestsPerSecondTarget):
        return "mean requests per second"
    elif isinstance(target, CountTarget):
        return f"{_COUNT_SELECTIONS[target.selection]} of {_COUNT_METRICS[target.metric]}"
    elif isinstance(target, TimeTarget):
        selection = _printable_time_selection(target.selection, percentiles)
        return f"{selection} of {_TIME_METRICS[target.metric]}"
    else:
        assert_never(target)


def printable_condition(condition: Condition) -> str:
    if isinstance(condition, LessThan):
        return "is less than"
    elif isinstance(condition, GreaterThan):
        return "is greater than"
    elif isinstance(condition, Is):
        return "is"
    elif isinstance(condition, Between):
        return "is between"
    elif isinstance(condition, In):
        return "is in"
    else:
        assert_never(condition)


def printable_expected(condition: Condition) -> str:
    """Render the bound(s) a condition compares against."""
    if isinstance(condition, LessThan):
        return str(condition.upper)
    elif isinstance(condition, GreaterThan):
        return str(condition.lower)
    elif isinstance(condition, Is):
        return str(condition.value)
    elif isinstance(condition, Between):
        return f"{condition.lower} and {condition.upper}"
    elif isinstance(condition, In):
        return "[" + ", ".join(str(e) for e in condition.elements) + "]"
    else:
        assert_never(condition)


def describe(assertion: Assertion, percentiles: PercentilesConfig) -> str:
    """Full sentence for an assertion, e.g. ``Global: max of response time is less than 800``."""
    return (
        f"{printable_path(assertion.path)}: "
        f"{printable_target(assertion.target, percentiles)} "
        f"{printable_condition(assertion.condition)} "
        f"{printable_expected(assertion.condition)}"
    )

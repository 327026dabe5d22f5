"""Evaluate assertions against the statistics of a completed run."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, assert_never

from loadgate.assertions.base import (
    Assertion,
    AssertionResult,
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
    TimeMetric,
    TimeSelection,
    TimeTarget,
)
from loadgate.assertions.printable import describe
from loadgate.config import PercentilesConfig
from loadgate.stats import (
    GeneralStats,
    GroupStatsPath,
    RequestStatsPath,
    Status,
    StatsPath,
    StatsSource,
)
from loadgate.validation import Failure, Success, Validation

# Status filter is late-bound: percentages need both filtered and unfiltered
# counts for the same resolved path.
StatsByStatus = Callable[[Status | None], list[GeneralStats]]

_COUNT_METRIC_STATUS: dict[CountMetric, Status | None] = {
    CountMetric.ALL_REQUESTS: None,
    CountMetric.FAILED_REQUESTS: Status.KO,
    CountMetric.SUCCESSFUL_REQUESTS: Status.OK,
}

_TIME_SELECTION_FIELDS: dict[TimeSelection, str] = {
    TimeSelection.MIN: "min",
    TimeSelection.MAX: "max",
    TimeSelection.MEAN: "mean",
    TimeSelection.STANDARD_DEVIATION: "std_dev",
    TimeSelection.PERCENTILES_1: "percentile1",
    TimeSelection.PERCENTILES_2: "percentile2",
    TimeSelection.PERCENTILES_3: "percentile3",
    TimeSelection.PERCENTILES_4: "percentile4",
}


def stats_path_parts(stats_path: StatsPath) -> tuple[str, ...]:
    """Segment names identifying a stats path, as written in a details path."""
    if isinstance(stats_path, RequestStatsPath):
        if stats_path.group is None:
            return (stats_path.request,)
        return stats_path.group.hierarchy + (stats_path.request,)
    elif isinstance(stats_path, GroupStatsPath):
        return stats_path.group.hierarchy
    else:
        assert_never(stats_path)


def find_stats_path(parts: tuple[str, ...], source: StatsSource) -> StatsPath | None:
    """Return the first stats path in index order whose identity equals ``parts``."""
    for stats_path in source.stats_paths():
        if stats_path_parts(stats_path) == parts:
            return stats_path
    return None


class AssertionValidator:
    """Turns assertions plus run statistics into pass/fail results."""

    def __init__(
        self,
        percentiles: PercentilesConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.percentiles = percentiles or PercentilesConfig()
        self.logger = logger or logging.getLogger("loadgate")

    def validate_assertions(
        self, source: StatsSource, parallel: int = 1
    ) -> list[AssertionResult]:
        """Evaluate every assertion of ``source``; results keep input order."""
        assertions = source.assertions()
        self.logger.debug(f"Validating {len(assertions)} assertion(s)")

        if parallel <= 1 or len(assertions) <= 1:
            return [self.validate_assertion(a, source) for a in assertions]

        with ThreadPoolExecutor(max_workers=parallel) as executor:
            return list(
                executor.map(lambda a: self.validate_assertion(a, source), assertions)
            )

    def validate_assertion(
        self, assertion: Assertion, source: StatsSource
    ) -> AssertionResult:
        resolved = self.resolve_path(assertion, source)

        if isinstance(resolved, Failure):
            self.logger.warning(resolved.message)
            return AssertionResult(assertion, False, resolved.message, ())

        actual_values = self.resolve_target(assertion, resolved.value)
        result = self.resolve_condition(assertion, actual_values)
        self.logger.info(
            f"{'PASS' if result.passed else 'FAIL'} {result.message} "
            f"(actual: {list(result.actual_values)})"
        )
        return result

    def resolve_path(
        self, assertion: Assertion, source: StatsSource
    ) -> Validation[StatsByStatus]:
        path = assertion.path

        if isinstance(path, GlobalPath) or (
            isinstance(path, DetailsPath) and not path.parts
        ):
            return Success(
                lambda status: [source.request_general_stats(None, None, status)]
            )

        elif isinstance(path, ForAllPath):
            requests = [
                p for p in source.stats_paths() if isinstance(p, RequestStatsPath)
            ]
            return Success(
                lambda status: [
                    source.request_general_stats(p.request, p.group, status)
                    for p in requests
                ]
            )

        elif isinstance(path, DetailsPath):
            found = find_stats_path(path.parts, source)
            if found is None:
                return Failure(
                    f"Could not find stats matching assertion path {list(path.parts)}"
                )
            elif isinstance(found, RequestStatsPath):
                return Success(
                    lambda status: [
                        source.request_general_stats(found.request, found.group, status)
                    ]
                )
            elif isinstance(found, GroupStatsPath):
                return Success(
                    lambda status: [
                        source.group_cumulated_response_time_general_stats(
                            found.group, status
                        )
                    ]
                )
            else:
                assert_never(found)

        else:
            assert_never(path)

    def resolve_target(
        self, assertion: Assertion, stats: StatsByStatus
    ) -> tuple[int, ...]:
        target = assertion.target

        if isinstance(target, MeanRequestsPerSecondTarget):
            return tuple(int(s.mean_requests_per_sec) for s in stats(None))
        elif isinstance(target, CountTarget):
            return self._resolve_count_target(target, stats)
        elif isinstance(target, TimeTarget):
            return self._resolve_time_target(target, stats)
        else:
            assert_never(target)

    def _resolve_count_target(
        self, target: CountTarget, stats: StatsByStatus
    ) -> tuple[int, ...]:
        resolved_stats = stats(_COUNT_METRIC_STATUS[target.metric])

        if target.selection is CountSelection.COUNT:
            return tuple(s.count for s in resolved_stats)
        elif target.selection is CountSelection.PERCENT:
            all_counts = [s.count for s in stats(None)]
            percentages = []
            for resolved, all_count in zip(resolved_stats, all_counts):
                if all_count == 0:
                    # No requests at all on this path: report 0% instead of NaN.
                    self.logger.warning(
                        "Total request count is 0, using 0 as percentage"
                    )
                    percentages.append(0)
                else:
                    # Multiplies before dividing, unlike count / total * 100,
                    # which truncates 29/100 to 28.
                    percentages.append(int(resolved.count * 100 / all_count))
            return tuple(percentages)
        else:
            assert_never(target.selection)

    def _resolve_time_target(
        self, target: TimeTarget, stats: StatsByStatus
    ) -> tuple[int, ...]:
        if target.metric is TimeMetric.RESPONSE_TIME:
            resolved_stats = stats(None)
        else:
            assert_never(target.metric)

        field_name = _TIME_SELECTION_FIELDS[target.selection]
        return tuple(getattr(s, field_name) for s in resolved_stats)

    def resolve_condition(
        self, assertion: Assertion, actual_values: tuple[int, ...]
    ) -> AssertionResult:
        message = describe(assertion, self.percentiles)
        passed = all(check_value(assertion.condition, v) for v in actual_values)
        return AssertionResult(assertion, passed, message, actual_values)


def check_value(condition: Condition, value: int) -> bool:
    """Whether a single actual value satisfies ``condition``."""
    if isinstance(condition, LessThan):
        return value <= condition.upper
    elif isinstance(condition, GreaterThan):
        return value >= condition.lower
    elif isinstance(condition, Is):
        return value == condition.value
    elif isinstance(condition, Between):
        return condition.lower <= value <= condition.upper
    elif isinstance(condition, In):
        return value in condition.elements
    else:
        assert_never(condition)

"""Fluent builder for assertions.

Reads left to right as path, metric, selection, condition::

    global_().response_time.max.less_than(800)
    details("Auth", "Login").failed_requests.percent.less_than(5)
    for_all().requests_per_sec.greater_than(10)
"""

from __future__ import annotations

from dataclasses import dataclass

from loadgate.assertions.base import (
    Assertion,
    Between,
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


def global_() -> AssertionWithPath:
    return AssertionWithPath(GlobalPath())


def for_all() -> AssertionWithPath:
    return AssertionWithPath(ForAllPath())


def details(*parts: str) -> AssertionWithPath:
    return AssertionWithPath(DetailsPath(tuple(parts)))


@dataclass(frozen=True)
class AssertionWithPath:
    path: Path

    @property
    def response_time(self) -> AssertionWithPathAndTimeMetric:
        return AssertionWithPathAndTimeMetric(self.path, TimeMetric.RESPONSE_TIME)

    @property
    def all_requests(self) -> AssertionWithPathAndCountMetric:
        return AssertionWithPathAndCountMetric(self.path, CountMetric.ALL_REQUESTS)

    @property
    def failed_requests(self) -> AssertionWithPathAndCountMetric:
        return AssertionWithPathAndCountMetric(self.path, CountMetric.FAILED_REQUESTS)

    @property
    def successful_requests(self) -> AssertionWithPathAndCountMetric:
        return AssertionWithPathAndCountMetric(
            self.path, CountMetric.SUCCESSFUL_REQUESTS
        )

    @property
    def requests_per_sec(self) -> AssertionWithPathAndTarget:
        return AssertionWithPathAndTarget(self.path, MeanRequestsPerSecondTarget())


@dataclass(frozen=True)
class AssertionWithPathAndTimeMetric:
    path: Path
    metric: TimeMetric

    def _next(self, selection: TimeSelection) -> AssertionWithPathAndTarget:
        return AssertionWithPathAndTarget(self.path, TimeTarget(self.metric, selection))

    @property
    def min(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.MIN)

    @property
    def max(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.MAX)

    @property
    def mean(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.MEAN)

    @property
    def std_dev(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.STANDARD_DEVIATION)

    @property
    def percentile1(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.PERCENTILES_1)

    @property
    def percentile2(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.PERCENTILES_2)

    @property
    def percentile3(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.PERCENTILES_3)

    @property
    def percentile4(self) -> AssertionWithPathAndTarget:
        return self._next(TimeSelection.PERCENTILES_4)


@dataclass(frozen=True)
class AssertionWithPathAndCountMetric:
    path: Path
    metric: CountMetric

    @property
    def count(self) -> AssertionWithPathAndTarget:
        return AssertionWithPathAndTarget(
            self.path, CountTarget(self.metric, CountSelection.COUNT)
        )

    @property
    def percent(self) -> AssertionWithPathAndTarget:
        return AssertionWithPathAndTarget(
            self.path, CountTarget(self.metric, CountSelection.PERCENT)
        )


@dataclass(frozen=True)
class AssertionWithPathAndTarget:
    path: Path
    target: Target

    def less_than(self, upper: int) -> Assertion:
        return Assertion(self.path, self.target, LessThan(upper))

    def greater_than(self, lower: int) -> Assertion:
        return Assertion(self.path, self.target, GreaterThan(lower))

    def is_(self, value: int) -> Assertion:
        return Assertion(self.path, self.target, Is(value))

    def between(self, lower: int, upper: int) -> Assertion:
        if lower > upper:
            raise ValueError(f"between: lower bound {lower} exceeds upper bound {upper}")
        return Assertion(self.path, self.target, Between(lower, upper))

    def in_(self, *values: int) -> Assertion:
        return Assertion(self.path, self.target, In(tuple(values)))

import pytest

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
    TimeMetric,
    TimeSelection,
    TimeTarget,
)
from loadgate.assertions.printable import (
    describe,
    ordinal,
    printable_condition,
    printable_expected,
    printable_path,
    printable_target,
)
from loadgate.config import PercentilesConfig


@pytest.mark.parametrize(
    "n, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
     (13, "13th"), (21, "21st"), (50, "50th"), (95, "95th"), (99, "99th"), (100, "100th")],
)
def test_ordinal(n, expected):
    assert ordinal(n) == expected


def test_printable_path():
    assert printable_path(GlobalPath()) == "Global"
    assert printable_path(ForAllPath()) == "For all requests"
    assert printable_path(DetailsPath(())) == "Global"
    assert printable_path(DetailsPath(("Auth", "Login"))) == "Auth / Login"


def test_printable_count_target():
    target = CountTarget(CountMetric.SUCCESSFUL_REQUESTS, CountSelection.COUNT)
    assert printable_target(target, PercentilesConfig()) == "count of successful requests"

    target = CountTarget(CountMetric.ALL_REQUESTS, CountSelection.PERCENT)
    assert printable_target(target, PercentilesConfig()) == "percentage of all requests"


def test_printable_time_target_uses_configured_percentiles():
    target = TimeTarget(TimeMetric.RESPONSE_TIME, TimeSelection.PERCENTILES_3)
    assert printable_target(target, PercentilesConfig()) == "95th percentile of response time"
    assert (
        printable_target(target, PercentilesConfig(percentile3=92))
        == "92nd percentile of response time"
    )

    target = TimeTarget(TimeMetric.RESPONSE_TIME, TimeSelection.STANDARD_DEVIATION)
    assert printable_target(target, PercentilesConfig()) == "standard deviation of response time"


def test_printable_mean_requests_per_second():
    assert (
        printable_target(MeanRequestsPerSecondTarget(), PercentilesConfig())
        == "mean requests per second"
    )


@pytest.mark.parametrize(
    "condition, text, expected",
    [
        (LessThan(5), "is less than", "5"),
        (GreaterThan(5), "is greater than", "5"),
        (Is(5), "is", "5"),
        (Between(1, 9), "is between", "1 and 9"),
        (In((5, 10, 15)), "is in", "[5, 10, 15]"),
    ],
)
def test_printable_condition_and_expected(condition, text, expected):
    assert printable_condition(condition) == text
    assert printable_expected(condition) == expected


def test_describe():
    assertion = Assertion(
        ForAllPath(),
        TimeTarget(TimeMetric.RESPONSE_TIME, TimeSelection.MAX),
        Between(100, 200),
    )
    assert (
        describe(assertion, PercentilesConfig())
        == "For all requests: max of response time is between 100 and 200"
    )

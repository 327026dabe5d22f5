"""Base data structures for the assertion system.

An assertion is a ``(path, target, condition)`` triple. Each of the three
parts is a closed union of frozen dataclasses, so every resolver dispatches
over a fixed set of variants and ends with ``assert_never``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


# --- paths ---


@dataclass(frozen=True)
class GlobalPath:
    """The whole run."""


@dataclass(frozen=True)
class ForAllPath:
    """Every individual request, each checked on its own."""


@dataclass(frozen=True)
class DetailsPath:
    """A specific request or group, identified by its segment names.

    An empty ``parts`` tuple means the same as :class:`GlobalPath`.
    """

    parts: tuple[str, ...] = ()


Path = Union[GlobalPath, ForAllPath, DetailsPath]


# --- targets ---


class CountMetric(str, Enum):
    ALL_REQUESTS = "all_requests"
    FAILED_REQUESTS = "failed_requests"
    SUCCESSFUL_REQUESTS = "successful_requests"


class CountSelection(str, Enum):
    COUNT = "count"
    PERCENT = "percent"


class TimeMetric(str, Enum):
    RESPONSE_TIME = "response_time"


class TimeSelection(str, Enum):
    MIN = "min"
    MAX = "max"
    MEAN = "mean"
    STANDARD_DEVIATION = "stddev"
    PERCENTILES_1 = "percentile1"
    PERCENTILES_2 = "percentile2"
    PERCENTILES_3 = "percentile3"
    PERCENTILES_4 = "percentile4"


@dataclass(frozen=True)
class MeanRequestsPerSecondTarget:
    pass


@dataclass(frozen=True)
class CountTarget:
    metric: CountMetric
    selection: CountSelection


@dataclass(frozen=True)
class TimeTarget:
    metric: TimeMetric
    selection: TimeSelection


Target = Union[MeanRequestsPerSecondTarget, CountTarget, TimeTarget]


# --- conditions ---


@dataclass(frozen=True)
class LessThan:
    upper: int


@dataclass(frozen=True)
class GreaterThan:
    lower: int


@dataclass(frozen=True)
class Is:
    value: int


@dataclass(frozen=True)
class Between:
    lower: int
    upper: int


@dataclass(frozen=True)
class In:
    elements: tuple[int, ...]


Condition = Union[LessThan, GreaterThan, Is, Between, In]


@dataclass(frozen=True)
class Assertion:
    path: Path
    target: Target
    condition: Condition


@dataclass(frozen=True)
class AssertionResult:
    """Result of evaluating a single assertion.

    Attributes:
        assertion: The assertion that was evaluated.
        passed: Whether every actual value satisfied the condition.
        message: Human-readable description of the check, or the
            resolution diagnostic when the path matched no statistics.
        actual_values: One value per statistics record the path resolved
            to, in resolution order. Empty when resolution failed.
    """

    assertion: Assertion
    passed: bool
    message: str
    actual_values: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "message": self.message,
            "actual_values": list(self.actual_values),
        }

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

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
    Path as AssertionPath,
    Target,
    TimeMetric,
    TimeSelection,
    TimeTarget,
)


class PercentilesConfig(BaseModel):
    """Ranks of the four percentiles stored in the run statistics."""

    model_config = ConfigDict(extra="forbid")
    percentile1: int = Field(50, ge=0, le=100)
    percentile2: int = Field(75, ge=0, le=100)
    percentile3: int = Field(95, ge=0, le=100)
    percentile4: int = Field(99, ge=0, le=100)


# --- targets ---


class CountTargetSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    count: CountMetric

    def to_target(self) -> Target:
        return CountTarget(self.count, CountSelection.COUNT)


class PercentTargetSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    percent: CountMetric

    def to_target(self) -> Target:
        return CountTarget(self.percent, CountSelection.PERCENT)


class ResponseTimeTargetSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    response_time: TimeSelection

    def to_target(self) -> Target:
        return TimeTarget(TimeMetric.RESPONSE_TIME, self.response_time)


TargetSpec = (
    Literal["mean_requests_per_second"]
    | CountTargetSpec
    | PercentTargetSpec
    | ResponseTimeTargetSpec
)


# --- conditions ---


class LessThanSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    less_than: int

    def to_condition(self) -> Condition:
        return LessThan(self.less_than)


class GreaterThanSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    greater_than: int

    def to_condition(self) -> Condition:
        return GreaterThan(self.greater_than)


class IsSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    is_: int = Field(alias="is")

    def to_condition(self) -> Condition:
        return Is(self.is_)


class BetweenSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    between: tuple[int, int]

    @field_validator("between")
    @classmethod
    def lower_must_not_exceed_upper(cls, v: tuple[int, int]) -> tuple[int, int]:
        lower, upper = v
        if lower > upper:
            raise ValueError(f"between lower bound {lower} exceeds upper bound {upper}")
        return v

    def to_condition(self) -> Condition:
        return Between(*self.between)


class InSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    in_: list[int] = Field(alias="in")

    @field_validator("in_")
    @classmethod
    def must_not_be_empty(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("in must list at least one value")
        return v

    def to_condition(self) -> Condition:
        return In(tuple(self.in_))


ConditionSpec = LessThanSpec | GreaterThanSpec | IsSpec | BetweenSpec | InSpec


class AssertionSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: Literal["global", "for_all"] | list[str] = "global"
    target: TargetSpec
    condition: ConditionSpec

    def to_assertion(self) -> Assertion:
        path: AssertionPath
        if self.path == "global":
            path = GlobalPath()
        elif self.path == "for_all":
            path = ForAllPath()
        else:
            path = DetailsPath(tuple(self.path))

        if self.target == "mean_requests_per_second":
            target: Target = MeanRequestsPerSecondTarget()
        else:
            target = self.target.to_target()

        return Assertion(path, target, self.condition.to_condition())


class CheckConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    stats: str
    percentiles: PercentilesConfig = PercentilesConfig()
    assertions: list[AssertionSpec]

    @model_validator(mode="after")
    def assertions_must_not_be_empty(self) -> CheckConfig:
        if not self.assertions:
            raise ValueError("assertions must not be empty")
        return self

    def to_assertions(self) -> list[Assertion]:
        return [spec.to_assertion() for spec in self.assertions]


def load_config(path: Path) -> CheckConfig:
    """Load and validate a check config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    config = CheckConfig(**(raw or {}))

    # ${VAR} references in the stats path (unset raises UnboundVariable),
    # then resolve relative to the config file
    stats_path = Path(expandvars(config.stats, nounset=True))
    if not stats_path.is_absolute():
        stats_path = (config_dir / stats_path).resolve()
    config.stats = str(stats_path)

    return config

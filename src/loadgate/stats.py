"""Read-only access to the precomputed statistics of a load-test run.

Nothing here computes statistics: :class:`RunStatsSource` only serves the
summaries written to a stats file by whatever aggregated the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from loadgate.assertions.base import Assertion

logger = logging.getLogger(__name__)

NO_PLOT_MAGIC_VALUE = -1


class Status(str, Enum):
    OK = "ok"
    KO = "ko"


@dataclass(frozen=True)
class Group:
    hierarchy: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.hierarchy[-1]


@dataclass(frozen=True)
class RequestStatsPath:
    request: str
    group: Group | None = None


@dataclass(frozen=True)
class GroupStatsPath:
    group: Group


StatsPath = Union[RequestStatsPath, GroupStatsPath]


@dataclass(frozen=True)
class GeneralStats:
    """Summary of one (path, status filter) combination. Times are in ms."""

    count: int
    min: int
    max: int
    mean: int
    std_dev: int
    percentile1: int
    percentile2: int
    percentile3: int
    percentile4: int
    mean_requests_per_sec: float

    @classmethod
    def no_data(cls) -> GeneralStats:
        return cls(
            count=0,
            min=NO_PLOT_MAGIC_VALUE,
            max=NO_PLOT_MAGIC_VALUE,
            mean=NO_PLOT_MAGIC_VALUE,
            std_dev=NO_PLOT_MAGIC_VALUE,
            percentile1=NO_PLOT_MAGIC_VALUE,
            percentile2=NO_PLOT_MAGIC_VALUE,
            percentile3=NO_PLOT_MAGIC_VALUE,
            percentile4=NO_PLOT_MAGIC_VALUE,
            mean_requests_per_sec=0.0,
        )


class StatsSource(Protocol):
    """What the assertion validator needs from a completed run."""

    def assertions(self) -> list[Assertion]: ...

    def stats_paths(self) -> list[StatsPath]: ...

    def request_general_stats(
        self,
        request: str | None,
        group: Group | None,
        status: Status | None,
    ) -> GeneralStats: ...

    def group_cumulated_response_time_general_stats(
        self, group: Group, status: Status | None
    ) -> GeneralStats: ...


# --- stats file ---


class GeneralStatsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    count: int = Field(ge=0)
    min: int = NO_PLOT_MAGIC_VALUE
    max: int = NO_PLOT_MAGIC_VALUE
    mean: int = NO_PLOT_MAGIC_VALUE
    std_dev: int = NO_PLOT_MAGIC_VALUE
    percentile1: int = NO_PLOT_MAGIC_VALUE
    percentile2: int = NO_PLOT_MAGIC_VALUE
    percentile3: int = NO_PLOT_MAGIC_VALUE
    percentile4: int = NO_PLOT_MAGIC_VALUE
    mean_requests_per_sec: float = 0.0

    def to_general_stats(self) -> GeneralStats:
        return GeneralStats(**self.model_dump())


class StatsByStatusModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    all: GeneralStatsModel
    ok: GeneralStatsModel | None = None
    ko: GeneralStatsModel | None = None

    def for_status(self, status: Status | None) -> GeneralStats:
        if status is None:
            entry = self.all
        elif status is Status.OK:
            entry = self.ok
        else:
            entry = self.ko
        if entry is None:
            return GeneralStats.no_data()
        return entry.to_general_stats()


class PathStatsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    request: str | None = None
    group: list[str] | None = None
    stats: StatsByStatusModel

    @model_validator(mode="after")
    def request_or_group_required(self) -> PathStatsModel:
        if self.request is None and not self.group:
            raise ValueError("stats path needs a request name or a non-empty group")
        return self

    def to_stats_path(self) -> StatsPath:
        if self.request is None:
            return GroupStatsPath(Group(tuple(self.group or ())))
        group = Group(tuple(self.group)) if self.group else None
        return RequestStatsPath(self.request, group)


class RunStatsFile(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    global_: StatsByStatusModel = Field(alias="global")
    paths: list[PathStatsModel] = []

    @model_validator(mode="after")
    def paths_must_be_unique(self) -> RunStatsFile:
        seen: set[StatsPath] = set()
        duplicates: list[str] = []
        for entry in self.paths:
            stats_path = entry.to_stats_path()
            if stats_path in seen:
                duplicates.append(f"  {stats_path}")
            seen.add(stats_path)

        if duplicates:
            details = "\n".join(duplicates)
            raise ValueError(f"stats file lists the same path more than once:\n{details}")
        return self


def load_run_stats(path: Path) -> RunStatsFile:
    """Load a stats file. JSON is accepted too since it parses as YAML."""
    with open(path) as f:
        raw = yaml.safe_load(f)
    return RunStatsFile(**(raw or {}))


class RunStatsSource:
    """:class:`StatsSource` backed by a parsed stats file."""

    def __init__(self, run_stats: RunStatsFile, assertions: list[Assertion]):
        self._global = run_stats.global_
        self._assertions = list(assertions)
        self._paths: list[StatsPath] = []
        self._requests: dict[tuple[str, tuple[str, ...]], StatsByStatusModel] = {}
        self._groups: dict[tuple[str, ...], StatsByStatusModel] = {}

        for entry in run_stats.paths:
            stats_path = entry.to_stats_path()
            self._paths.append(stats_path)
            if isinstance(stats_path, RequestStatsPath):
                hierarchy = stats_path.group.hierarchy if stats_path.group else ()
                self._requests[(stats_path.request, hierarchy)] = entry.stats
            else:
                self._groups[stats_path.group.hierarchy] = entry.stats

    def assertions(self) -> list[Assertion]:
        return list(self._assertions)

    def stats_paths(self) -> list[StatsPath]:
        return list(self._paths)

    def request_general_stats(
        self,
        request: str | None,
        group: Group | None,
        status: Status | None,
    ) -> GeneralStats:
        if request is None and group is None:
            return self._global.for_status(status)

        if request is None:
            stats = self._groups.get(group.hierarchy)
        else:
            hierarchy = group.hierarchy if group else ()
            stats = self._requests.get((request, hierarchy))

        if stats is None:
            logger.debug(f"No stats for request={request!r} group={group!r}")
            return GeneralStats.no_data()
        return stats.for_status(status)

    def group_cumulated_response_time_general_stats(
        self, group: Group, status: Status | None
    ) -> GeneralStats:
        stats = self._groups.get(group.hierarchy)
        if stats is None:
            logger.debug(f"No stats for group={group!r}")
            return GeneralStats.no_data()
        return stats.for_status(status)

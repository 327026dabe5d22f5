"""Pytest configuration and fixtures."""

import logging
import textwrap
from pathlib import Path

import pytest

from loadgate.stats import GeneralStats, Group, GroupStatsPath, RequestStatsPath


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up loadgate loggers after each test so handlers don't leak."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("loadgate")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


def make_stats(count: int = 100, **overrides) -> GeneralStats:
    values = {
        "count": count,
        "min": 10,
        "max": 500,
        "mean": 150,
        "std_dev": 40,
        "percentile1": 140,
        "percentile2": 180,
        "percentile3": 300,
        "percentile4": 450,
        "mean_requests_per_sec": 12.7,
    }
    values.update(overrides)
    return GeneralStats(**values)


class RecordingStatsSource:
    """In-memory stats source that records every query it answers.

    ``requests`` maps ``(request, group hierarchy)`` and ``groups`` maps a
    group hierarchy to ``{None: stats, "ok": stats, "ko": stats}``.
    """

    def __init__(
        self,
        assertions=(),
        global_stats=None,
        requests=None,
        groups=None,
        paths=None,
    ):
        self._assertions = list(assertions)
        self.global_stats = global_stats or {None: make_stats()}
        self.requests = requests or {}
        self.groups = groups or {}
        if paths is None:
            paths = [
                RequestStatsPath(name, Group(h) if h else None)
                for name, h in self.requests
            ] + [GroupStatsPath(Group(h)) for h in self.groups]
        self.paths = paths
        self.calls: list[tuple] = []

    @staticmethod
    def _pick(by_status, status):
        key = status.value if status is not None else None
        return by_status.get(key, GeneralStats.no_data())

    def assertions(self):
        return list(self._assertions)

    def stats_paths(self):
        return list(self.paths)

    def request_general_stats(self, request, group, status):
        self.calls.append(("request", request, group, status))
        if request is None and group is None:
            return self._pick(self.global_stats, status)
        hierarchy = group.hierarchy if group else ()
        return self._pick(self.requests[(request, hierarchy)], status)

    def group_cumulated_response_time_general_stats(self, group, status):
        self.calls.append(("group", group, status))
        return self._pick(self.groups[group.hierarchy], status)


@pytest.fixture
def make_source():
    return RecordingStatsSource


@pytest.fixture
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str, name: str = "check.yaml") -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(content))
        return p

    return _write


STATS_YAML = """\
    global:
      all: {count: 100, min: 10, max: 250, mean: 150, std_dev: 30, percentile1: 140, percentile2: 170, percentile3: 220, percentile4: 245, mean_requests_per_sec: 25.9}
      ok: {count: 80, mean: 140}
      ko: {count: 20, mean: 190}
    paths:
      - group: [Auth]
        stats:
          all: {count: 60, max: 400}
      - request: Login
        group: [Auth]
        stats:
          all: {count: 60, max: 300, mean_requests_per_sec: 15.2}
          ko: {count: 15}
      - request: Search
        stats:
          all: {count: 40, max: 200, mean_requests_per_sec: 10.7}
"""


@pytest.fixture
def stats_file(tmp_yaml):
    return tmp_yaml(STATS_YAML, name="stats.yaml")

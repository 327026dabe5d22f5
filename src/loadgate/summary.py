from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from loadgate.assertions.base import AssertionResult


@dataclass
class CheckSummary:
    """Pass/fail totals over the results of one check run."""

    total: int
    passed: int
    failed: int
    pass_rate: float
    all_passed: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_results(results: list[AssertionResult]) -> CheckSummary:
    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed
    pass_rate = (passed / len(results) * 100) if results else 0.0

    return CheckSummary(
        total=len(results),
        passed=passed,
        failed=failed,
        pass_rate=round(pass_rate, 2),
        all_passed=failed == 0,
    )

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from loadgate.assertions.base import AssertionResult
from loadgate.assertions.printable import (
    printable_condition,
    printable_expected,
    printable_path,
    printable_target,
)
from loadgate.config import PercentilesConfig
from loadgate.summary import summarize_results

SUITE_NAME = "assertions"


def result_to_dict(
    result: AssertionResult, percentiles: PercentilesConfig
) -> dict[str, Any]:
    assertion = result.assertion
    return {
        "path": printable_path(assertion.path),
        "target": printable_target(assertion.target, percentiles),
        "condition": (
            f"{printable_condition(assertion.condition)} "
            f"{printable_expected(assertion.condition)}"
        ),
        **result.to_dict(),
    }


def write_results_json(
    run_dir: Path,
    results: list[AssertionResult],
    percentiles: PercentilesConfig | None = None,
) -> Path:
    """Write assertions.json (one entry per result, input order), return path."""
    percentiles = percentiles or PercentilesConfig()
    json_path = run_dir / "assertions.json"
    payload = [result_to_dict(r, percentiles) for r in results]
    json_path.write_text(json.dumps(payload, indent=2) + "\n")
    return json_path


def write_junit(run_dir: Path, results: list[AssertionResult]) -> Path:
    """Write junit.xml with one test case per assertion result, return path."""
    xml = JUnitXml()
    suite = TestSuite(SUITE_NAME)

    summary = summarize_results(results)
    suite.add_property("assertion_pass_count", str(summary.passed))
    suite.add_property("assertion_fail_count", str(summary.failed))
    suite.add_property("assertion_pass_rate", str(summary.pass_rate))

    for result in results:
        case = TestCase(result.message)
        case.classname = printable_path(result.assertion.path)
        if not result.passed:
            failure = Failure(result.message)
            failure.text = f"actual values: {list(result.actual_values)}"
            case.result = [failure]
        suite.add_testcase(case)

    # Use append (not +=) to preserve properties
    xml.append(suite)

    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path

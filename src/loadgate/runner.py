from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from loadgate.assertions.base import AssertionResult
from loadgate.assertions.validator import AssertionValidator
from loadgate.config import CheckConfig
from loadgate.reporting.junit import write_junit, write_results_json
from loadgate.stats import RunStatsSource, load_run_stats
from loadgate.summary import CheckSummary, summarize_results
from loadgate.verbose import setup_logger


@dataclass
class CheckOutcome:
    run_dir: Path
    results: list[AssertionResult]
    summary: CheckSummary

    @property
    def all_passed(self) -> bool:
        return self.summary.all_passed


class CheckRunner:
    """Loads run statistics, evaluates the configured assertions and writes reports."""

    def __init__(
        self,
        config: CheckConfig,
        output_dir: Path,
        verbose: bool = False,
        parallel: int = 1,
    ):
        self.config = config
        self.output_dir = output_dir
        self.verbose = verbose
        self.parallel = parallel

    def execute(self) -> CheckOutcome:
        """Run the check. Raises FileNotFoundError if the stats file is missing."""
        stats_path = Path(self.config.stats)
        if not stats_path.exists():
            raise FileNotFoundError(f"stats file not found: {stats_path}")

        run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
        run_dir = self.output_dir / run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        logger = setup_logger(run_dir / "debug.log", verbose=self.verbose)
        logger.debug(f"Loading stats from {stats_path}")

        source = RunStatsSource(load_run_stats(stats_path), self.config.to_assertions())
        validator = AssertionValidator(self.config.percentiles, logger=logger)
        results = validator.validate_assertions(source, parallel=self.parallel)

        summary = summarize_results(results)
        logger.info(
            f"{summary.passed}/{summary.total} assertion(s) passed ({summary.pass_rate}%)"
        )

        write_junit(run_dir, results)
        write_results_json(run_dir, results, self.config.percentiles)

        return CheckOutcome(run_dir=run_dir, results=results, summary=summary)

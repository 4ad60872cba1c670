"""
Comparison runner: single-thread versus multi-thread throughput per workload.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import ConfigError, WorkloadInvariantViolation
from .scheduler import DurationScheduler, RunResult

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ','


@dataclass(frozen=True)
class ComparisonRecord:
    """One output line: a workload's single- and multi-thread reports."""
    name: str
    single_report: str
    multi_report: str
    single: Optional[RunResult] = None
    multi: Optional[RunResult] = None

    def to_csv_line(self) -> str:
        return FIELD_SEPARATOR.join((self.name, self.single_report, self.multi_report))


class ComparisonRunner:
    """
    Drive the duration scheduler twice per workload.

    For every workload, in the order given, a parallelism-1 run is followed by
    a run at the configured parallelism. Runs never overlap and workloads are
    never interleaved. Any failure propagates immediately; no record is
    produced for the failing workload and later workloads do not run.
    """

    def __init__(self, parallelism: int, duration: float,
                 scheduler: Optional[DurationScheduler] = None, metrics=None):
        """
        Initialize comparison runner.

        Args:
            parallelism: Thread count for the multi-thread run (>= 1)
            duration: Seconds per scheduler invocation, identical for both runs
            scheduler: DurationScheduler to use (a fresh one by default)
            metrics: Optional MetricsCollector receiving every completed comparison
        """
        if isinstance(parallelism, bool) or not isinstance(parallelism, int) or parallelism < 1:
            raise ConfigError(f"parallelism must be a positive integer, got {parallelism!r}")
        if duration <= 0:
            raise ConfigError(f"duration must be positive, got {duration}")

        self.parallelism = parallelism
        self.duration = duration
        self.scheduler = scheduler or DurationScheduler()
        self.metrics = metrics

    def compare(self, workload) -> ComparisonRecord:
        """
        Run one workload at parallelism 1 and at the configured parallelism.

        Returns:
            ComparisonRecord with both reports

        Raises:
            WorkloadInvariantViolation: If a run fails or a report breaks the CSV contract
        """
        logger.info(f"Running {workload.name}: 1 thread, then {self.parallelism} threads, {self.duration}s each")

        single = self.scheduler.run(workload, 1, self.duration)
        multi = self.scheduler.run(workload, self.parallelism, self.duration)

        record = ComparisonRecord(
            name=workload.name,
            single_report=self._report(workload, single),
            multi_report=self._report(workload, multi),
            single=single,
            multi=multi,
        )

        if self.metrics is not None:
            self.metrics.record_comparison(record)

        return record

    def run(self, workloads: Iterable) -> Iterator[ComparisonRecord]:
        """Yield one ComparisonRecord per workload, strictly in order."""
        for workload in workloads:
            yield self.compare(workload)

    def _report(self, workload, result: RunResult) -> str:
        # Reports are computed over the configured duration, not the observed elapsed time
        report = workload.report(result.total_operations, self.duration)

        if not isinstance(report, str) or not report:
            raise WorkloadInvariantViolation(f"{workload.name}: report must be a non-empty string, got {report!r}")
        if FIELD_SEPARATOR in report or '\n' in report:
            raise WorkloadInvariantViolation(f"{workload.name}: report {report!r} is not a single CSV field")

        return report

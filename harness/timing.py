"""
Metrics collection for comparison runs.
"""

import sys
import time
from typing import Dict, List, Any, Optional, TextIO
from dataclasses import dataclass, field, asdict
import json


@dataclass
class TimingMetric:
    """Individual scheduler run."""
    name: str
    duration: float
    start_time: float
    end_time: float
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkloadMetrics:
    """Single- and multi-thread runs of one workload."""
    workload: str
    single: TimingMetric
    multi: TimingMetric
    single_report: str = ""
    multi_report: str = ""


@dataclass
class ComparisonMetrics:
    """Complete metrics for a comparison run."""
    experiment_name: str
    parallelism: int
    duration: float
    total_duration: float = 0.0
    workloads: List[WorkloadMetrics] = field(default_factory=list)

    # Extended metadata
    timestamp: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    cli_args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert metrics to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def print_summary(self, stream: Optional[TextIO] = None):
        """Print human-readable metrics summary (stderr by default; stdout carries CSV)."""
        out = stream or sys.stderr
        print("\n" + "=" * 60, file=out)
        print(f"Throughput Comparison: {self.experiment_name}", file=out)
        print(f"Threads: {self.parallelism}, {self.duration}s per run", file=out)
        print("=" * 60, file=out)

        for entry in self.workloads:
            speedup = 0.0
            if entry.single.metadata.get('operations'):
                speedup = entry.multi.metadata.get('operations', 0) / entry.single.metadata['operations']
            print(f"\n{entry.workload}:", file=out)
            for label, metric, report in (("1 thread", entry.single, entry.single_report),
                                          (f"{self.parallelism} threads", entry.multi, entry.multi_report)):
                print(f"  {label}: {report} "
                      f"({metric.metadata.get('operations_per_second', 0.0):.2f} ops/s over {metric.duration:.2f}s elapsed)",
                      file=out)
            print(f"  Scaling: {speedup:.2f}x", file=out)

        print(f"\nTotal Comparison Duration: {self.total_duration:.2f}s", file=out)
        print("=" * 60 + "\n", file=out)


class MetricsCollector:
    """Collect and manage comparison metrics."""

    def __init__(self, experiment_name: str, parallelism: int, duration: float):
        """
        Initialize metrics collector.

        Args:
            experiment_name: Name of the comparison run
            parallelism: Thread count of the multi-thread runs
            duration: Seconds per scheduler invocation
        """
        from datetime import datetime

        self.metrics = ComparisonMetrics(
            experiment_name=experiment_name,
            parallelism=parallelism,
            duration=duration,
            timestamp=datetime.now().isoformat()
        )
        self.start_time = time.time()

    def set_config(self, config: Dict[str, Any]):
        """
        Store harness configuration.

        Args:
            config: Full configuration dictionary
        """
        self.metrics.config = {
            'benchmark': config.get('benchmark', {}),
            'fixtures': config.get('fixtures', {}),
        }

    def set_cli_args(self, args_dict: Dict[str, Any]):
        """
        Store CLI arguments used for the run.

        Args:
            args_dict: Dictionary of CLI arguments
        """
        # Filter out None values
        self.metrics.cli_args = {k: v for k, v in args_dict.items() if v is not None}

    def record_comparison(self, record):
        """
        Record both runs of a ComparisonRecord.

        Args:
            record: ComparisonRecord carrying its single and multi RunResults
        """
        self.metrics.workloads.append(WorkloadMetrics(
            workload=record.name,
            single=self._run_metric(f"{record.name} x1", record.single),
            multi=self._run_metric(f"{record.name} x{record.multi.parallelism}", record.multi),
            single_report=record.single_report,
            multi_report=record.multi_report,
        ))

    def _run_metric(self, name: str, result) -> TimingMetric:
        end = time.time()
        return TimingMetric(
            name=name,
            duration=result.elapsed,
            start_time=end - result.elapsed,
            end_time=end,
            metadata={
                'operations': result.total_operations,
                'parallelism': result.parallelism,
                'operations_per_second': result.operations_per_second,
            }
        )

    def finalize(self):
        """Finalize metrics collection."""
        self.metrics.total_duration = time.time() - self.start_time

    def get_metrics(self) -> ComparisonMetrics:
        """
        Get collected metrics.

        Returns:
            ComparisonMetrics object
        """
        return self.metrics

    def save_to_file(self, filepath: str):
        """
        Save metrics to JSON file.

        Args:
            filepath: Output file path
        """
        self.finalize()
        with open(filepath, 'w') as f:
            f.write(self.metrics.to_json())

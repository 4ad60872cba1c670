"""
Parallel Throughput Benchmark Harness

Runs registered workloads on one thread and on N threads for a fixed
wall-clock budget and reports both throughputs side by side.
"""

from .errors import HarnessError, ConfigError, ResourceError, WorkloadInvariantViolation
from .config import ConfigLoader, ConfigValidator, HarnessConfig, resolve_parallelism
from .selection import compile_filter, filter_workloads
from .scheduler import Aggregator, DurationScheduler, RunResult, WorkerResult
from .comparison import ComparisonRecord, ComparisonRunner
from .profiling import ProfileSession
from .timing import MetricsCollector

__all__ = [
    'HarnessError',
    'ConfigError',
    'ResourceError',
    'WorkloadInvariantViolation',
    'ConfigLoader',
    'ConfigValidator',
    'HarnessConfig',
    'resolve_parallelism',
    'compile_filter',
    'filter_workloads',
    'Aggregator',
    'DurationScheduler',
    'RunResult',
    'WorkerResult',
    'ComparisonRecord',
    'ComparisonRunner',
    'ProfileSession',
    'MetricsCollector',
]

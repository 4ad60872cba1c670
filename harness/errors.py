"""
Error taxonomy for the benchmark harness.

Every member terminates the whole comparison run; nothing is retried.
"""


class HarnessError(Exception):
    """Base class for fatal harness conditions."""


class ConfigError(HarnessError, ValueError):
    """Invalid configuration: filter pattern, parallelism, duration, registry."""


class ResourceError(HarnessError):
    """A resource needed before benchmarking (e.g. a profile file) is unavailable."""


class WorkloadInvariantViolation(HarnessError):
    """A workload's own self-check or contract failed during a run."""

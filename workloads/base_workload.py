"""
Base workload class for throughput benchmarks.

All workloads should inherit from BaseWorkload and implement:
- setup(): Returns a zero-argument operation with its own private state
- report(): Formats an operation count as a throughput string

ThroughputWorkload covers the common "size per second" report shape.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, List

from harness.errors import ConfigError

logger = logging.getLogger(__name__)

MIB = 1024 * 1024

Operation = Callable[[], Any]


def ops_per_second(total: int, duration: float) -> str:
    """Format a count as operations per second."""
    return f"{total / duration:.2f} ops/s"


def mib_per_second(total: int, payload_bytes: int, duration: float) -> str:
    """Format a count of fixed-size operations as MiB per second."""
    return f"{total * payload_bytes / MIB / duration:.2f} MiB/s"


class BaseWorkload(ABC):
    """
    Abstract base class for all workloads.

    A workload is constructed once at startup and is immutable afterwards.
    The harness calls setup() once per worker and counts how many times the
    returned operation completes; it never looks inside the operation.
    """

    def __init__(self, name: str):
        """
        Initialize workload.

        Args:
            name: Unique workload name, also the first CSV field of its record
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def setup(self) -> Operation:
        """
        Prepare one worker's private state.

        Returns:
            Zero-argument callable performing a single operation
        """
        pass

    def report(self, total: int, duration: float) -> str:
        """
        Format the total operation count for a run of the given duration.

        Override in subclasses for other units. The result must be non-empty
        and must not contain a comma.
        """
        return ops_per_second(total, duration)

    def validate_config(self) -> bool:
        """
        Validate workload configuration.

        Override in subclasses for workload-specific validation.

        Raises:
            ConfigError: If configuration is invalid
        """
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r})"


class ThroughputWorkload(BaseWorkload):
    """Workload whose operations each process a known number of bytes."""

    @abstractmethod
    def payload_size(self) -> int:
        """Bytes processed by one operation."""
        pass

    def report(self, total: int, duration: float) -> str:
        return mib_per_second(total, self.payload_size(), duration)


class WorkloadRegistry:
    """Ordered collection of workloads with unique names."""

    def __init__(self):
        self._workloads: Dict[str, BaseWorkload] = {}

    def register(self, workload: BaseWorkload) -> BaseWorkload:
        """
        Register a workload.

        Args:
            workload: Workload instance (must inherit from BaseWorkload)

        Returns:
            The registered workload

        Raises:
            TypeError: If workload is not a BaseWorkload
            ConfigError: If the name is not a single CSV field or is already registered
        """
        if not isinstance(workload, BaseWorkload):
            raise TypeError(f"{workload!r} must inherit from BaseWorkload")
        if not workload.name or ',' in workload.name or '\n' in workload.name:
            raise ConfigError(f"Workload name must be a non-empty single CSV field: {workload.name!r}")
        if workload.name in self._workloads:
            raise ConfigError(f"Duplicate workload name: {workload.name}")

        workload.validate_config()
        self._workloads[workload.name] = workload
        logger.debug(f"Registered workload {workload.name}")
        return workload

    def get(self, name: str) -> BaseWorkload:
        """
        Look up a workload by name.

        Raises:
            ConfigError: If workload name not registered
        """
        if name not in self._workloads:
            raise ConfigError(f"Unknown workload: {name}. Available: {self.names()}")
        return self._workloads[name]

    def all(self) -> List[BaseWorkload]:
        """Registered workloads in registration order."""
        return list(self._workloads.values())

    def names(self) -> List[str]:
        return list(self._workloads.keys())

    def __iter__(self) -> Iterator[BaseWorkload]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._workloads)

    def __contains__(self, name: str) -> bool:
        return name in self._workloads

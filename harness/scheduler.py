"""
Duration scheduler: run one workload on T threads for a fixed wall-clock budget.

All workers share one monotonic start timestamp. Each worker calls the
workload's setup() once, then repeats the returned operation while the shared
elapsed time is below the budget. The check happens between operations only,
so the budget is a lower bound: a run lasts at least `duration` and at most
one operation longer per worker.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .errors import ConfigError, HarnessError, ResourceError, WorkloadInvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkerResult:
    """Operation count produced by one worker."""
    worker_id: int
    count: int


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one scheduler invocation."""
    total_operations: int
    parallelism: int
    elapsed: float

    @property
    def operations_per_second(self) -> float:
        if self.elapsed <= 0:
            return 0.0
        return self.total_operations / self.elapsed


class Aggregator:
    """
    Sum worker counts into one total.

    Each handoff is a single addition under a lock, so delivery order does
    not matter and simultaneous handoffs are never lost.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._total = 0
        self._results: List[WorkerResult] = []

    def add(self, result: WorkerResult):
        if result.count < 0:
            raise ValueError(f"Worker {result.worker_id} reported a negative count: {result.count}")

        with self._lock:
            self._results.append(result)
            self._total += result.count

    @property
    def total(self) -> int:
        with self._lock:
            return self._total

    @property
    def results(self) -> List[WorkerResult]:
        with self._lock:
            return list(self._results)

    @property
    def worker_count(self) -> int:
        with self._lock:
            return len(self._results)


class DurationScheduler:
    """Fan a workload out over a fresh pool of worker threads for each run."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize scheduler.

        Args:
            clock: Monotonic clock in seconds, shared by the scheduler and its workers
        """
        self.clock = clock

    def run(self, workload, parallelism: int, duration: float) -> RunResult:
        """
        Run workload on `parallelism` threads for at least `duration` seconds.

        Args:
            workload: Object with a setup() method returning a zero-argument operation
            parallelism: Number of worker threads (>= 1)
            duration: Time budget in seconds (> 0)

        Returns:
            RunResult with the summed operation count and the observed elapsed time

        Raises:
            ConfigError: If parallelism or duration is out of range
            ResourceError: If a worker thread cannot be started
            WorkloadInvariantViolation: If any worker's setup or operation fails
        """
        if isinstance(parallelism, bool) or not isinstance(parallelism, int) or parallelism < 1:
            raise ConfigError(f"parallelism must be a positive integer, got {parallelism!r}")
        if duration <= 0:
            raise ConfigError(f"duration must be positive, got {duration}")

        aggregator = Aggregator()
        abort = threading.Event()
        failures: List[Tuple[int, BaseException]] = []

        start = self.clock()
        threads = []
        for worker_id in range(parallelism):
            thread = threading.Thread(
                target=self._worker,
                args=(worker_id, workload, start, duration, aggregator, abort, failures),
                name=f"bench-worker-{worker_id}",
            )
            try:
                thread.start()
            except RuntimeError as e:
                abort.set()
                for started in threads:
                    started.join()
                raise ResourceError(f"Could not start worker {worker_id} of {parallelism}: {e}") from e
            threads.append(thread)

        for thread in threads:
            thread.join()
        elapsed = self.clock() - start

        if failures:
            worker_id, error = failures[0]
            if isinstance(error, HarnessError):
                raise error
            raise WorkloadInvariantViolation(
                f"Workload {_name_of(workload)} failed in worker {worker_id}: {error!r}"
            ) from error

        if aggregator.worker_count != parallelism:
            raise WorkloadInvariantViolation(
                f"Expected {parallelism} worker results, got {aggregator.worker_count}"
            )

        result = RunResult(
            total_operations=aggregator.total,
            parallelism=parallelism,
            elapsed=elapsed,
        )
        logger.debug(
            f"{_name_of(workload)}: {result.total_operations} ops on {parallelism} thread(s) "
            f"in {elapsed:.3f}s"
        )
        return result

    def _worker(self, worker_id: int, workload, start: float, duration: float,
                aggregator: Aggregator, abort: threading.Event,
                failures: List[Tuple[int, BaseException]]):
        count = 0
        try:
            operation = workload.setup()
            while self.clock() - start < duration and not abort.is_set():
                operation()
                count += 1
        except Exception as e:
            # First failure stops the other workers at their next iteration
            failures.append((worker_id, e))
            abort.set()
            logger.error(f"Worker {worker_id} of {_name_of(workload)} failed: {e}")
            return

        aggregator.add(WorkerResult(worker_id=worker_id, count=count))


def _name_of(workload) -> str:
    return getattr(workload, 'name', repr(workload))

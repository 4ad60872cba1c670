"""Shared pytest fixtures and test workloads for the harness tests."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest
import yaml

from harness.errors import WorkloadInvariantViolation
from workloads import BaseWorkload, SharedFixtures, WorkloadRegistry
from workloads.fixtures import DEFAULT_TEXT_SIZE


class CountingWorkload(BaseWorkload):
    """Workload whose operations increment a per-worker tally kept by the test."""

    def __init__(self, name: str = "counting", sleep: float = 0.0) -> None:
        super().__init__(name)
        self.sleep = sleep
        self.tallies: list[list[int]] = []
        self._lock = threading.Lock()

    def setup(self):
        tally = [0]
        with self._lock:
            self.tallies.append(tally)
        sleep = self.sleep

        def operation() -> None:
            if sleep:
                time.sleep(sleep)
            tally[0] += 1

        return operation

    @property
    def setup_calls(self) -> int:
        return len(self.tallies)

    def independent_total(self) -> int:
        return sum(tally[0] for tally in self.tallies)


class NoopWorkload(CountingWorkload):
    """The `noop` scenario workload: reports the raw count."""

    def __init__(self) -> None:
        super().__init__("noop")

    def report(self, total: int, duration: float) -> str:
        return f"{total} ops"


class FailingWorkload(BaseWorkload):
    """Workload whose first operation fails its self-check."""

    def __init__(self, name: str = "broken") -> None:
        super().__init__(name)
        self.calls = 0

    def setup(self):
        def operation() -> None:
            self.calls += 1
            raise WorkloadInvariantViolation(f"{self.name}: expected match did not occur")

        return operation


@pytest.fixture()
def counting_workload() -> CountingWorkload:
    return CountingWorkload()


@pytest.fixture()
def noop_registry() -> WorkloadRegistry:
    registry = WorkloadRegistry()
    registry.register(NoopWorkload())
    return registry


@pytest.fixture(scope="session")
def full_fixtures() -> SharedFixtures:
    """Fixtures large enough for the built-in catalog (generated once per session)."""
    return SharedFixtures(text_size=DEFAULT_TEXT_SIZE, escape_repeat=10, corpora={"tiny": b"hello world " * 64})


@pytest.fixture()
def small_config(tmp_path: Path) -> Path:
    """A configuration file with short runs and tiny fixtures."""
    config = {
        "benchmark": {"duration": 0.2, "parallelism": 2, "filter": ".*"},
        "output": {"cpuprofile": None, "metrics": None},
        "fixtures": {"text_size": 1024, "escape_repeat": 1, "corpora": {}},
        "logging": {"level": "INFO"},
    }
    path = tmp_path / "bench.yaml"
    path.write_text(yaml.safe_dump(config))
    return path

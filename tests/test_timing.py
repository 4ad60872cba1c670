"""Tests for comparison metrics collection."""

import io
import json
from pathlib import Path

from harness.comparison import ComparisonRecord
from harness.scheduler import RunResult
from harness.timing import MetricsCollector


def _record(name: str = "noop") -> ComparisonRecord:
    return ComparisonRecord(
        name=name,
        single_report="100 ops",
        multi_report="180 ops",
        single=RunResult(total_operations=100, parallelism=1, elapsed=1.01),
        multi=RunResult(total_operations=180, parallelism=2, elapsed=1.02),
    )


def test_save_to_file(tmp_path: Path) -> None:
    collector = MetricsCollector("run", parallelism=2, duration=1)
    collector.set_config({"benchmark": {"duration": 1}, "fixtures": {}, "output": {}})
    collector.set_cli_args({"threads": 2, "run": None})
    collector.record_comparison(_record())

    path = tmp_path / "metrics.json"
    collector.save_to_file(str(path))
    data = json.loads(path.read_text())

    assert data["experiment_name"] == "run"
    assert data["parallelism"] == 2
    assert data["cli_args"] == {"threads": 2}
    assert data["config"] == {"benchmark": {"duration": 1}, "fixtures": {}}
    assert data["total_duration"] >= 0
    entry = data["workloads"][0]
    assert entry["workload"] == "noop"
    assert entry["single"]["duration"] == 1.01
    assert entry["multi"]["metadata"] == {"operations": 180, "parallelism": 2, "operations_per_second": 180 / 1.02}
    assert entry["multi_report"] == "180 ops"


def test_print_summary_shows_scaling() -> None:
    collector = MetricsCollector("run", parallelism=2, duration=1)
    collector.record_comparison(_record())
    collector.finalize()

    out = io.StringIO()
    collector.get_metrics().print_summary(out)

    text = out.getvalue()
    assert "noop:" in text
    assert "Scaling: 1.80x" in text
    assert "99.01 ops/s over 1.01s elapsed" in text
    assert "176.47 ops/s over 1.02s elapsed" in text

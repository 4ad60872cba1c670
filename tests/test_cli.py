"""End-to-end tests for the comparison command line."""

import io
import json
import re
from pathlib import Path

import pytest

from conftest import CountingWorkload, FailingWorkload, NoopWorkload
from experiments.comparison_experiment import build_overrides, main, parse_args
from workloads import WorkloadRegistry


class _UnsavableStats:
    def save(self, path, type=None) -> None:
        raise OSError(28, "No space left on device")


def _factory(*workloads):
    calls = []

    def factory(fixtures):
        calls.append(fixtures)
        registry = WorkloadRegistry()
        for workload in workloads:
            registry.register(workload)
        return registry

    factory.calls = calls
    return factory


def test_noop_scenario(small_config: Path) -> None:
    out = io.StringIO()
    code = main(["--config", str(small_config), "-t", "0.2", "-c", "2"],
                registry_factory=_factory(NoopWorkload()), stream=out)

    assert code == 0
    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    match = re.fullmatch(r"noop,(\d+) ops,(\d+) ops", lines[0])
    assert match
    assert int(match.group(1)) > 0
    assert int(match.group(2)) > 0


def test_one_line_per_workload_in_registration_order(small_config: Path) -> None:
    out = io.StringIO()
    workloads = [CountingWorkload("b-second"), CountingWorkload("a-first"), CountingWorkload("c-third")]
    code = main(["--config", str(small_config), "-t", "0.05"],
                registry_factory=_factory(*workloads), stream=out)

    assert code == 0
    names = [line.split(",")[0] for line in out.getvalue().splitlines()]
    assert names == ["b-second", "a-first", "c-third"]


def test_filter_matching_nothing_prints_nothing(small_config: Path) -> None:
    out = io.StringIO()
    workload = CountingWorkload("only")
    code = main(["--config", str(small_config), "-r", "^nothing$"],
                registry_factory=_factory(workload), stream=out)

    assert code == 0
    assert out.getvalue() == ""
    assert workload.setup_calls == 0


def test_failing_workload_aborts_with_no_output(small_config: Path) -> None:
    out = io.StringIO()
    later = CountingWorkload("later")
    code = main(["--config", str(small_config), "-t", "0.1"],
                registry_factory=_factory(FailingWorkload(), later), stream=out)

    assert code != 0
    assert out.getvalue() == ""
    assert later.setup_calls == 0


def test_invalid_filter_aborts_before_any_workload(small_config: Path) -> None:
    out = io.StringIO()
    factory = _factory(NoopWorkload())
    code = main(["--config", str(small_config), "-r", "(unclosed"], registry_factory=factory, stream=out)

    assert code != 0
    assert out.getvalue() == ""
    assert factory.calls == []


def test_unusable_profile_path_aborts_before_any_workload(small_config: Path, tmp_path: Path) -> None:
    out = io.StringIO()
    workload = NoopWorkload()
    code = main(["--config", str(small_config), "--cpuprofile", str(tmp_path / "no" / "such" / "dir.prof")],
                registry_factory=_factory(workload), stream=out)

    assert code != 0
    assert out.getvalue() == ""
    assert workload.setup_calls == 0


def test_profile_write_failure_does_not_mask_workload_error(
        small_config: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr("harness.profiling.yappi.get_func_stats", lambda: _UnsavableStats())
    out = io.StringIO()
    code = main(["--config", str(small_config), "-t", "0.05", "--cpuprofile", str(tmp_path / "cpu.prof")],
                registry_factory=_factory(FailingWorkload()), stream=out)

    assert code != 0
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Workload failed") for message in messages)
    assert any("CPU profile not written" in message for message in messages)
    assert not any(message.startswith("Resource error") for message in messages)


def test_profile_write_failure_after_success_is_fatal(
        small_config: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("harness.profiling.yappi.get_func_stats", lambda: _UnsavableStats())
    code = main(["--config", str(small_config), "-t", "0.02", "--cpuprofile", str(tmp_path / "cpu.prof")],
                registry_factory=_factory(NoopWorkload()), stream=io.StringIO())

    assert code != 0


def test_cpuprofile_and_metrics_outputs(small_config: Path, tmp_path: Path) -> None:
    out = io.StringIO()
    profile = tmp_path / "cpu.prof"
    metrics = tmp_path / "metrics.json"
    code = main(["--config", str(small_config), "-t", "0.05", "-c", "2",
                 "--cpuprofile", str(profile), "--metrics-output", str(metrics)],
                registry_factory=_factory(NoopWorkload()), stream=out)

    assert code == 0
    assert profile.stat().st_size > 0
    data = json.loads(metrics.read_text())
    assert data["parallelism"] == 2
    assert [entry["workload"] for entry in data["workloads"]] == ["noop"]


def test_list_prints_matching_names(small_config: Path) -> None:
    out = io.StringIO()
    workloads = [CountingWorkload("gzip a"), CountingWorkload("html b")]
    code = main(["--config", str(small_config), "--list", "-r", "gzip"],
                registry_factory=_factory(*workloads), stream=out)

    assert code == 0
    assert out.getvalue().splitlines() == ["gzip a"]
    assert workloads[0].setup_calls == 0


def test_missing_config_file(tmp_path: Path) -> None:
    out = io.StringIO()
    code = main(["--config", str(tmp_path / "absent.yaml")], registry_factory=_factory(), stream=out)
    assert code != 0
    assert out.getvalue() == ""


def test_negative_threads_use_all_cpus(small_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("harness.config.os.cpu_count", lambda: 3)
    out = io.StringIO()
    setups = []

    class SetupRecorder(CountingWorkload):
        def setup(self):
            setups.append(1)
            return super().setup()

    recorder = SetupRecorder("recorder")
    code = main(["--config", str(small_config), "-c", "-5", "-t", "0.02"],
                registry_factory=_factory(recorder), stream=out)

    assert code == 0
    # One single-thread setup plus one per thread of the multi-thread run
    assert len(setups) == 1 + 3


class TestArgumentParsing:
    def test_short_flags(self) -> None:
        args = parse_args(["-c", "4", "-t", "2", "-r", "gzip", "--cpuprofile", "p.prof"])
        assert build_overrides(args) == {
            "benchmark.parallelism": 4,
            "benchmark.duration": 2.0,
            "benchmark.filter": "gzip",
            "output.cpuprofile": "p.prof",
        }

    def test_no_flags_no_overrides(self) -> None:
        assert build_overrides(parse_args([])) == {}

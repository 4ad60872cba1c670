"""Tests for the workload registry and the name filter."""

import pytest

from conftest import CountingWorkload
from harness.errors import ConfigError
from harness.selection import compile_filter, filter_workloads
from workloads import WorkloadRegistry


@pytest.fixture()
def registry() -> WorkloadRegistry:
    registry = WorkloadRegistry()
    for name in ("regexp.Match easy", "regexp.Match hard", "html.escape", "gzip compression Twain -8"):
        registry.register(CountingWorkload(name))
    return registry


class TestWorkloadRegistry:
    def test_preserves_registration_order(self, registry: WorkloadRegistry) -> None:
        assert registry.names() == [
            "regexp.Match easy",
            "regexp.Match hard",
            "html.escape",
            "gzip compression Twain -8",
        ]

    def test_all_is_restartable(self, registry: WorkloadRegistry) -> None:
        first = [w.name for w in registry.all()]
        second = [w.name for w in registry]
        assert first == second
        assert len(registry) == 4

    def test_duplicate_name_is_config_error(self, registry: WorkloadRegistry) -> None:
        with pytest.raises(ConfigError, match="Duplicate"):
            registry.register(CountingWorkload("html.escape"))
        assert len(registry) == 4

    @pytest.mark.parametrize("name", ["", "a,b", "line\nbreak"])
    def test_name_must_be_single_csv_field(self, name: str) -> None:
        with pytest.raises(ConfigError):
            WorkloadRegistry().register(CountingWorkload(name))

    def test_rejects_non_workloads(self) -> None:
        with pytest.raises(TypeError):
            WorkloadRegistry().register(object())

    def test_get_and_contains(self, registry: WorkloadRegistry) -> None:
        assert registry.get("html.escape").name == "html.escape"
        assert "html.escape" in registry
        assert "nope" not in registry
        with pytest.raises(ConfigError, match="Unknown workload"):
            registry.get("nope")


class TestNameFilter:
    def test_default_pattern_selects_everything_in_order(self, registry: WorkloadRegistry) -> None:
        selected = filter_workloads(".*", registry.all())
        assert [w.name for w in selected] == registry.names()

    def test_partial_match_preserves_order(self, registry: WorkloadRegistry) -> None:
        selected = filter_workloads("regexp|gzip", registry.all())
        assert [w.name for w in selected] == [
            "regexp.Match easy",
            "regexp.Match hard",
            "gzip compression Twain -8",
        ]

    def test_matches_anywhere_in_name(self, registry: WorkloadRegistry) -> None:
        selected = filter_workloads("hard", registry.all())
        assert [w.name for w in selected] == ["regexp.Match hard"]

    def test_no_match_is_empty_not_error(self, registry: WorkloadRegistry) -> None:
        assert filter_workloads("^does-not-exist$", registry.all()) == []

    def test_invalid_pattern_is_config_error(self, registry: WorkloadRegistry) -> None:
        with pytest.raises(ConfigError, match="Invalid workload filter"):
            filter_workloads("(", registry.all())

    def test_invalid_pattern_fails_before_iterating(self) -> None:
        def workloads():
            raise AssertionError("workloads must not be inspected")
            yield  # pragma: no cover

        with pytest.raises(ConfigError):
            filter_workloads("[", workloads())

    def test_compile_filter(self) -> None:
        assert compile_filter("^html").search("html.escape")

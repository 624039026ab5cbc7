"""Tests for the shared data model."""

import pytest

from gql_explorer.core.models import BenchmarkStats, ExecutionResult, path_key


def test_path_key():
    assert path_key(()) == ""
    assert path_key(("user", "friends")) == "user,friends"


class TestExecutionResult:
    def test_prefers_tracing(self):
        assert ExecutionResult(data={}, elapsed=5.0, tracing_duration=3_000_000).duration_ms == 3

    def test_falls_back_to_elapsed(self):
        assert ExecutionResult(data={}, elapsed=0.25).duration_ms == 250


class TestBenchmarkStats:
    def test_summary(self):
        stats = BenchmarkStats.from_durations([0.1, 0.3, 0.2])
        assert stats.runs == 3
        assert stats.minimum == 0.1
        assert stats.maximum == 0.3
        assert stats.average == pytest.approx(0.2)

    def test_empty(self):
        with pytest.raises(ValueError):
            BenchmarkStats.from_durations([])

    def test_float_tracing_is_whole_milliseconds(self):
        result = ExecutionResult(data={}, elapsed=0.0, tracing_duration=12_345_678.0)
        assert result.duration_ms == 12
        assert isinstance(result.duration_ms, int)

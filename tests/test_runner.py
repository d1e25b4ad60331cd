"""Tests for the benchmark runner and its statistics."""

import json

import pytest

from parse_bench.errors import ConfigurationError, MeasurementError
from parse_bench.runner import (
    DEFAULT_ITERATIONS,
    WARMUP_ITERATIONS,
    run_benchmark,
    summarize,
)


def scripted_timer(durations_ms):
    """Timer whose consecutive start/end pairs differ by the given durations."""
    readings = []
    now = 0
    for duration in durations_ms:
        readings.append(now)
        now += duration * 1_000_000
        readings.append(now)
    it = iter(readings)
    return lambda: next(it)


class TestSummarize:

    def test_odd_sample(self):
        result = summarize("x", [5.0, 1.0, 3.0])
        assert result.median == 3.0
        assert result.min == 1.0
        assert result.max == 5.0
        assert result.average == pytest.approx(3.0)
        assert result.iterations == 3

    def test_even_sample_takes_upper_middle(self):
        result = summarize("x", [4.0, 1.0, 3.0, 2.0])
        assert result.median == 3.0

    def test_two_samples(self):
        assert summarize("x", [10.0, 2.0]).median == 10.0

    def test_single_sample(self):
        result = summarize("x", [7.5])
        assert result.average == result.median == result.min == result.max == 7.5

    def test_empty_sample_rejected(self):
        with pytest.raises(ConfigurationError):
            summarize("x", [])


class TestRunBenchmark:

    def test_constant_cost(self, clock):
        result = run_benchmark("baseline", clock.parser(5), "{}", iterations=20, timer=clock)
        assert result.name == "baseline"
        assert result.iterations == 20
        assert result.average == result.median == result.min == result.max == 5

    def test_statistics_from_scripted_latencies(self):
        durations = [8, 2, 6, 4]
        result = run_benchmark(
            "scripted", lambda text: None, "{}", iterations=4, warmup=0,
            timer=scripted_timer(durations),
        )
        assert result.median == 6.0
        assert result.min == 2.0
        assert result.max == 8.0
        assert result.average == 5.0

    def test_submillisecond_latency(self):
        result = run_benchmark(
            "fast", lambda text: None, "{}", iterations=2, warmup=0,
            timer=iter([0, 250_000, 1_000_000, 1_750_000]).__next__,
        )
        assert result.min == 0.25
        assert result.max == 0.75
        assert result.average == 0.5

    def test_default_clock_is_nanosecond_counter(self):
        import inspect
        import time

        default = inspect.signature(run_benchmark).parameters["timer"].default
        assert default is time.perf_counter_ns

    @pytest.mark.parametrize("iterations", [1, 2, 7, 50])
    def test_ordering_invariants(self, small_encoded, iterations):
        result = run_benchmark("json", json.loads, small_encoded, iterations=iterations, warmup=1)
        assert result.iterations == iterations
        assert result.min <= result.median <= result.max
        assert result.min <= result.average <= result.max
        assert result.min >= 0

    def test_calls_warmup_plus_iterations(self):
        calls = []
        run_benchmark("count", calls.append, "doc", iterations=7, warmup=3)
        assert len(calls) == 10
        assert all(text == "doc" for text in calls)

    def test_defaults(self):
        calls = []
        result = run_benchmark("count", calls.append, "doc")
        assert result.iterations == DEFAULT_ITERATIONS
        assert len(calls) == DEFAULT_ITERATIONS + WARMUP_ITERATIONS

    def test_warmup_failures_are_ignored(self, clock):
        calls = {"n": 0}
        slow = clock.parser(2)

        def flaky(text):
            calls["n"] += 1
            if calls["n"] <= WARMUP_ITERATIONS:
                raise RuntimeError("cold start")
            return slow(text)

        result = run_benchmark("flaky", flaky, "{}", iterations=5, timer=clock)
        assert result.iterations == 5
        assert result.average == 2.0

    def test_measured_failure_propagates(self):
        calls = {"n": 0}

        def breaks_late(text):
            calls["n"] += 1
            if calls["n"] > WARMUP_ITERATIONS + 3:
                raise ValueError("bad token")

        with pytest.raises(MeasurementError) as info:
            run_benchmark("late", breaks_late, "{}", iterations=10)
        assert info.value.candidate == "late"
        assert info.value.iteration == 3
        assert isinstance(info.value.__cause__, ValueError)
        assert "late" in str(info.value)

    def test_failing_candidate(self, failing_candidate):
        with pytest.raises(MeasurementError):
            run_benchmark(failing_candidate.name, failing_candidate.parse, "{}", iterations=3)

    @pytest.mark.parametrize("iterations", [0, -1, 2.5, True, "10"])
    def test_invalid_iterations(self, iterations):
        calls = []
        with pytest.raises(ConfigurationError):
            run_benchmark("x", calls.append, "{}", iterations=iterations)
        assert calls == []

    def test_negative_warmup(self):
        with pytest.raises(ConfigurationError):
            run_benchmark("x", lambda text: None, "{}", iterations=1, warmup=-1)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            run_benchmark("x", lambda text: None, "{}", iterations=0)

    def test_progress_bar(self, clock):
        result = run_benchmark("bar", clock.parser(1), "{}", iterations=3, timer=clock, progress=True)
        assert result.iterations == 3

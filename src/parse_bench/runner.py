"""Timed execution of a single parser candidate."""

import statistics
import time
from dataclasses import dataclass
from typing import Any, Callable

from tqdm import tqdm

from parse_bench.errors import ConfigurationError, MeasurementError

DEFAULT_ITERATIONS = 100
WARMUP_ITERATIONS = 10


@dataclass(frozen=True)
class BenchmarkResult:
    """Latency summary for one candidate, in milliseconds."""

    name: str
    average: float
    median: float
    min: float
    max: float
    iterations: int

    def __repr__(self) -> str:
        return (
            f"{self.name:20s}: "
            f"avg {self.average:8.3f}ms, "
            f"median {self.median:8.3f}ms, "
            f"min {self.min:8.3f}ms, "
            f"max {self.max:8.3f}ms "
            f"({self.iterations} iterations)"
        )


def summarize(name: str, samples: list[float]) -> BenchmarkResult:
    """
    Reduce latency samples to summary statistics.

    The median is the element at index ``n // 2`` of the sorted samples, so
    an even-sized sample reports its upper-middle value rather than the mean
    of the two middle values.

    Args:
        name: Candidate name
        samples: Latencies in milliseconds

    Returns:
        BenchmarkResult for the samples
    """
    if not samples:
        raise ConfigurationError(f"no samples to summarize for {name}")

    ordered = sorted(samples)
    return BenchmarkResult(
        name=name,
        average=statistics.mean(ordered),
        median=ordered[len(ordered) // 2],
        min=ordered[0],
        max=ordered[-1],
        iterations=len(ordered),
    )


def _check_count(label: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{label} must be an integer >= {minimum}, got {value!r}")


def validate_iterations(iterations: Any, warmup: Any = WARMUP_ITERATIONS) -> None:
    """Reject iteration counts before any candidate is called."""
    _check_count("iterations", iterations, 1)
    _check_count("warmup", warmup, 0)


def run_benchmark(
    name: str,
    parse_fn: Callable[[str], Any],
    encoded: str,
    iterations: int = DEFAULT_ITERATIONS,
    warmup: int = WARMUP_ITERATIONS,
    timer: Callable[[], int] = time.perf_counter_ns,
    progress: bool = False,
) -> BenchmarkResult:
    """
    Benchmark a parser against an encoded document.

    The parser is first called ``warmup`` times untimed; failures in that
    phase are ignored. It is then called exactly ``iterations`` times, each
    call timed individually. A failure in the measured phase aborts the run.

    Args:
        name: Candidate name used in the result
        parse_fn: Callable taking the encoded text
        encoded: Encoded document, shared between candidates
        iterations: Number of measured calls
        warmup: Number of untimed priming calls
        timer: Clock returning integer nanoseconds
        progress: Show a tqdm progress bar over the measured calls

    Returns:
        BenchmarkResult with latencies in milliseconds

    Raises:
        ConfigurationError: iterations < 1 or warmup < 0
        MeasurementError: parse_fn raised during the measured phase
    """
    validate_iterations(iterations, warmup)

    for _ in range(warmup):
        try:
            parse_fn(encoded)
        except Exception:
            pass

    samples = []
    for i in tqdm(range(iterations), desc=name, disable=not progress, leave=False):
        start = timer()
        try:
            parse_fn(encoded)
        except Exception as exc:
            raise MeasurementError(name, i, exc) from exc
        end = timer()
        samples.append((end - start) / 1_000_000)

    return summarize(name, samples)

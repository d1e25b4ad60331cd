"""Run every candidate against one workload, rank them, and report."""

import random
import time
import traceback
from dataclasses import dataclass, field
from typing import Any

from parse_bench.candidates import BASELINE, Candidate
from parse_bench.errors import MeasurementError
from parse_bench.runner import (
    DEFAULT_ITERATIONS,
    WARMUP_ITERATIONS,
    BenchmarkResult,
    run_benchmark,
    validate_iterations,
)
from parse_bench.workload import DEFAULT_SIZE, generate_encoded, resolve_size

RULE_WIDTH = 100


@dataclass(frozen=True)
class CandidateFailure:
    """A candidate excluded from ranking because its measured phase failed."""

    name: str
    error: MeasurementError


@dataclass
class Comparison:
    """Ranked results of all candidates on one workload."""

    size: str
    iterations: int
    encoded_bytes: int
    results: list[BenchmarkResult]
    failures: list[CandidateFailure] = field(default_factory=list)
    baseline: str | None = BASELINE

    @property
    def fastest(self) -> BenchmarkResult | None:
        return self.results[0] if self.results else None

    def relative_speed(self, result: BenchmarkResult) -> float:
        """Speed of result as a percentage of the fastest candidate."""
        if result.average == 0:
            return 100.0
        return self.fastest.average / result.average * 100

    def baseline_result(self) -> BenchmarkResult | None:
        for result in self.results:
            if result.name == self.baseline:
                return result
        return None

    def baseline_delta(self, result: BenchmarkResult) -> float | None:
        """Percentage by which result beats the baseline; negative when slower."""
        base = self.baseline_result()
        if base is None:
            return None
        if base.average == 0:
            return 0.0
        return (base.average - result.average) / base.average * 100


def rank_results(results: list[BenchmarkResult]) -> list[BenchmarkResult]:
    """Sort results fastest first by average latency."""
    return sorted(results, key=lambda r: r.average)


def compare_parsers(
    candidates: list[Candidate],
    size: str | None = DEFAULT_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
    warmup: int = WARMUP_ITERATIONS,
    baseline: str | None = BASELINE,
    rng: random.Random | None = None,
    progress: bool = False,
    encoded: str | None = None,
    timer=time.perf_counter_ns,
) -> Comparison:
    """
    Benchmark each candidate in turn on the same encoded document.

    The document is generated and encoded once, then passed unchanged to
    every candidate. A candidate whose measured phase fails is reported and
    left out of the ranking; the remaining candidates still run.

    Args:
        candidates: Parsers to compare, run sequentially in order
        size: Workload size class
        iterations: Measured calls per candidate
        warmup: Untimed priming calls per candidate
        baseline: Candidate name used for percentage deltas
        rng: Optional random source for the workload content
        progress: Show a progress bar per candidate
        encoded: Pre-encoded document; generated from size when omitted
        timer: Clock passed through to the runner

    Returns:
        Comparison with results sorted by average latency
    """
    validate_iterations(iterations, warmup)
    workload = resolve_size(size)

    if encoded is None:
        print(f"Generating {workload.name} workload...")
        encoded = generate_encoded(workload.name, rng)
    encoded_bytes = len(encoded.encode("utf-8"))
    print(f"JSON size: {encoded_bytes / 1024 / 1024:.2f} MB, {iterations} iterations")

    results = []
    failures = []
    for candidate in candidates:
        print(f"\nBenchmarking {candidate.name}...")
        try:
            result = run_benchmark(
                candidate.name,
                candidate.parse,
                encoded,
                iterations=iterations,
                warmup=warmup,
                timer=timer,
                progress=progress,
            )
        except MeasurementError as e:
            print(f"  Error benchmarking {candidate.name}: {e}")
            traceback.print_exc()
            failures.append(CandidateFailure(candidate.name, e))
            continue
        results.append(result)
        print(f"  {result}")

    return Comparison(
        size=workload.name,
        iterations=iterations,
        encoded_bytes=encoded_bytes,
        results=rank_results(results),
        failures=failures,
        baseline=baseline,
    )


def check_agreement(
    candidates: list[Candidate],
    encoded: str,
    reference: str | None = BASELINE,
) -> dict[str, bool]:
    """
    Parse once with every candidate and compare against a reference output.

    The reference is the named candidate, or the first one when that name is
    not among the candidates. A candidate that raises counts as disagreeing.

    Returns:
        Mapping of candidate name to whether its output equals the reference
    """
    if not candidates:
        return {}

    outputs: dict[str, Any] = {}
    errors: set[str] = set()
    for candidate in candidates:
        try:
            outputs[candidate.name] = candidate.parse(encoded)
        except Exception as e:
            print(f"  {candidate.name} failed to parse: {type(e).__name__}: {e}")
            errors.add(candidate.name)

    names = [c.name for c in candidates]
    ref_name = reference if reference in names else names[0]
    if ref_name in errors:
        return {name: False for name in names}

    expected = outputs[ref_name]
    return {
        name: name not in errors and outputs[name] == expected
        for name in names
    }


def format_report(comparison: Comparison) -> str:
    """Render a comparison as a fixed-width text report."""
    lines = []
    lines.append("=" * RULE_WIDTH)
    lines.append(f"JSON Parser Performance Comparison - Size: {comparison.size.upper()}")
    lines.append("=" * RULE_WIDTH)
    lines.append(f"JSON Size: {comparison.encoded_bytes / 1024 / 1024:.2f} MB")
    lines.append(f"Iterations: {comparison.iterations}")
    lines.append("")
    lines.append("Results (all times in milliseconds):")
    lines.append("-" * RULE_WIDTH)
    lines.append(
        f"{'Parser':<36} {'Average':>10} {'Median':>10} {'Min':>10} {'Max':>10}   Speed"
    )
    lines.append("-" * RULE_WIDTH)

    for index, r in enumerate(comparison.results):
        speed = "FASTEST" if index == 0 else f"{comparison.relative_speed(r):.1f}% speed"
        lines.append(
            f"{r.name:<36} "
            f"{r.average:>10.3f} "
            f"{r.median:>10.3f} "
            f"{r.min:>10.3f} "
            f"{r.max:>10.3f}   "
            f"{speed}"
        )
    lines.append("-" * RULE_WIDTH)

    if comparison.baseline_result() is not None:
        lines.append("")
        lines.append(f"Performance vs {comparison.baseline}:")
        for r in comparison.results:
            if r.name == comparison.baseline:
                continue
            delta = comparison.baseline_delta(r)
            label = "FASTER" if delta > 0 else "SLOWER"
            lines.append(f"  {label} {r.name}: {abs(delta):.2f}%")

    if comparison.failures:
        lines.append("")
        lines.append("Failed (excluded from ranking):")
        for failure in comparison.failures:
            lines.append(f"  {failure.name}: {failure.error}")

    lines.append("")
    if comparison.fastest is not None:
        lines.append(
            f"Winner: {comparison.fastest.name} ({comparison.fastest.average:.3f}ms avg)"
        )
    else:
        lines.append("No candidate completed the measured phase.")

    return "\n".join(lines)


def print_report(comparison: Comparison) -> None:
    print()
    print(format_report(comparison))
    print()

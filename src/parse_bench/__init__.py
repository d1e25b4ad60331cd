"""JSON parser latency benchmarking suite."""

from parse_bench.workload import WorkloadSpec, SIZES, generate_document, encode_document, resolve_size
from parse_bench.runner import BenchmarkResult, run_benchmark, summarize
from parse_bench.candidates import Candidate, default_candidates
from parse_bench.compare import Comparison, compare_parsers, format_report

__all__ = [
    "WorkloadSpec",
    "SIZES",
    "generate_document",
    "encode_document",
    "resolve_size",
    "BenchmarkResult",
    "run_benchmark",
    "summarize",
    "Candidate",
    "default_candidates",
    "Comparison",
    "compare_parsers",
    "format_report",
]

"""Command-line interface for parse-bench."""

import random
import sys

import click

from parse_bench.candidates import BASELINE, default_candidates, select_candidates
from parse_bench.compare import check_agreement, compare_parsers, print_report
from parse_bench.errors import ConfigurationError
from parse_bench.runner import DEFAULT_ITERATIONS, WARMUP_ITERATIONS
from parse_bench.workload import SIZES, generate_encoded, resolve_size


def _print_agreement(candidates, baseline) -> None:
    """Parse a small document with every candidate and report mismatches."""
    print("\nChecking parser output agreement on a small document...")
    agreement = check_agreement(candidates, generate_encoded("small"), reference=baseline)
    for name, ok in agreement.items():
        print(f"  {'OK      ' if ok else 'MISMATCH'} {name}")


@click.command()
@click.option('--size', '-s', 'sizes', multiple=True, default=("small", "medium", "large"),
              help=f'Workload size ({", ".join(SIZES)}); repeatable', show_default=True)
@click.option('--iterations', '-i', default=DEFAULT_ITERATIONS, type=click.IntRange(min=1),
              help='Measured iterations per parser', show_default=True)
@click.option('--warmup', '-w', default=WARMUP_ITERATIONS, type=click.IntRange(min=0),
              help='Untimed warm-up iterations per parser', show_default=True)
@click.option('--parser', '-p', 'parsers', multiple=True,
              help='Restrict to the named parser; repeatable')
@click.option('--baseline', default=BASELINE, help='Parser used for percentage deltas', show_default=True)
@click.option('--seed', type=int, default=None, help='Seed for reproducible workload content')
@click.option('--check/--no-check', default=True, help='Check that parsers agree on output', show_default=True)
@click.option('--progress', is_flag=True, help='Show a progress bar while measuring')
@click.option('--plot', 'plot_dir', type=click.Path(file_okay=False), default=None,
              help='Write a latency chart to this directory')
def main(sizes, iterations, warmup, parsers, baseline, seed, check, progress, plot_dir):
    """Benchmark JSON parsers on synthetic nested documents."""
    try:
        candidates = select_candidates(parsers, default_candidates())
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--parser")

    for size in sizes:
        if size not in SIZES:
            print(f"Warning: unknown size {size!r}, using {resolve_size(size).name}")

    print("=" * 100)
    print("JSON PARSER BENCHMARK SUITE")
    print("=" * 100)
    print(f"Parsers: {', '.join(c.name for c in candidates)}")
    print(f"Sizes: {', '.join(sizes)}")
    print(f"Iterations: {iterations} (warm-up {warmup})")
    print("=" * 100)

    if check:
        _print_agreement(candidates, baseline)

    rng = random.Random(seed) if seed is not None else None
    comparisons = []
    for size in sizes:
        comparison = compare_parsers(
            candidates,
            size=size,
            iterations=iterations,
            warmup=warmup,
            baseline=baseline,
            rng=rng,
            progress=progress,
        )
        print_report(comparison)
        comparisons.append(comparison)

    if plot_dir is not None:
        import matplotlib
        matplotlib.use("Agg")
        from parse_bench.visualize import plot_comparisons
        plot_comparisons(comparisons, plot_dir)

    print("=" * 100)
    print("BENCHMARK COMPLETE!")
    print("=" * 100)

    if any(not c.results for c in comparisons):
        sys.exit(1)


if __name__ == "__main__":
    main()

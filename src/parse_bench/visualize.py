"""Visualization functions for parser comparisons."""

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from parse_bench.compare import Comparison


def comparisons_to_frame(comparisons: list[Comparison]) -> pd.DataFrame:
    """Flatten comparisons into one row per (size, parser)."""
    return pd.DataFrame([
        {
            "size": c.size,
            "parser": r.name,
            "average_ms": r.average,
            "median_ms": r.median,
            "min_ms": r.min,
            "max_ms": r.max,
            "iterations": r.iterations,
        }
        for c in comparisons
        for r in c.results
    ])


def plot_comparisons(comparisons: list[Comparison], output_dir: Path | str = ".") -> Path:
    """
    Plot average parse latency per parser for each workload size.

    Each size gets its own subplot, with min and max latency drawn as
    asymmetric error bars around the average.

    Args:
        comparisons: Comparisons to plot, one per workload size
        output_dir: Directory to save the chart (default: current directory)

    Returns:
        Path of the saved PNG
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = comparisons_to_frame(comparisons)
    sizes = [c.size for c in comparisons]

    fig, axes = plt.subplots(1, max(len(sizes), 1), figsize=(6 * max(len(sizes), 1), 6), squeeze=False)
    fig.suptitle("JSON Parser Latency (lower is better)", fontsize=16, fontweight="bold")

    for ax, size in zip(axes[0], sizes):
        frame = df[df["size"] == size] if not df.empty else df
        ax.set_title(f"Size: {size}", fontweight="bold")
        ax.set_xlabel("Parser")
        ax.set_ylabel("Time (ms)")
        ax.grid(axis="y", alpha=0.3)
        if frame.empty:
            continue
        errors = [
            (frame["average_ms"] - frame["min_ms"]).clip(lower=0).to_list(),
            (frame["max_ms"] - frame["average_ms"]).clip(lower=0).to_list(),
        ]
        ax.bar(frame["parser"], frame["average_ms"], yerr=errors, capsize=4, color="#2E86AB")
        ax.set_xticks(range(len(frame)))
        ax.set_xticklabels(frame["parser"], rotation=45, ha="right")

    plt.tight_layout()
    output_path = output_dir / "parse_bench_results.png"
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\nPlot saved to: {output_path}")
    return output_path

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from slabs.configurations import ROOT, SUMMARY_DIR_NAME


METRIC_SPECS = [
    # column, title, y_label, scale
    ("part1", "Part 1", "Safe-to-disintegrate bricks", 1.0),
    ("part2", "Part 2", "Sum of chain-reaction falls", 1.0),
    ("elapsed", "Time", "Elapsed time per snapshot (s)", 1.0),
]

RESULTS_BASE = ROOT / "results"

OUT_DIR = RESULTS_BASE / "_comparison_plots"

COLORS = ["#1f77b4", "#d62728", "#2ca02c", "#9467bd"]

TITLE_FONT_SIZE = 13
LABEL_FONT_SIZE = 12
TICK_FONT_SIZE = 11
LEGEND_FONT_SIZE = 11
SUPTITLE_FONT_SIZE = 16


def flat_summary_path(results_dir_name: str) -> Path:
    """Flat workbook written by aggregate_results for one results dir."""
    return RESULTS_BASE / results_dir_name / SUMMARY_DIR_NAME / f"{results_dir_name}_flat.xlsx"


def load_summary(path: Path, label: str) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(path)
    df = pd.read_excel(path)
    df.columns = [str(c).strip() for c in df.columns]
    df["label"] = label
    return df


def merge_summaries(frames: Sequence[pd.DataFrame]) -> pd.DataFrame:
    df = pd.concat(list(frames), ignore_index=True)

    required = {"snapshot", "label"} | {c for c, _, _, _ in METRIC_SPECS}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in merged df: {sorted(missing)}")
    return df


def plot_comparison(df: pd.DataFrame, out_path: Path, dpi: int = 150) -> Path:
    labels: List[str] = list(dict.fromkeys(df["label"]))
    colors = {lab: COLORS[i % len(COLORS)] for i, lab in enumerate(labels)}

    fig, axes = plt.subplots(1, len(METRIC_SPECS), figsize=(6 * len(METRIC_SPECS), 5))

    for ax, (col, title, ylab, scale) in zip(axes, METRIC_SPECS):
        piv = df.pivot_table(index="snapshot", columns="label", values=col, aggfunc="mean")
        piv = piv[[c for c in labels if c in piv.columns]] * scale
        piv.plot(kind="bar", ax=ax, width=0.8, color=[colors[c] for c in piv.columns], legend=False)

        ax.set_title(title, fontsize=TITLE_FONT_SIZE)
        ax.set_xlabel("Snapshot", fontsize=LABEL_FONT_SIZE)
        ax.set_ylabel(ylab, fontsize=LABEL_FONT_SIZE)
        ax.grid(axis="y", alpha=0.3)
        ax.tick_params(axis="x", rotation=0, labelsize=TICK_FONT_SIZE)
        ax.tick_params(axis="y", labelsize=TICK_FONT_SIZE)

    fig.legend(
        handles=[Patch(facecolor=colors[lab], label=lab) for lab in labels],
        loc="upper center",
        bbox_to_anchor=(0.5, 0.965),
        frameon=True,
        ncol=max(len(labels), 1),
        fontsize=LEGEND_FONT_SIZE,
    )
    fig.suptitle("Snapshot comparison", fontsize=SUPTITLE_FONT_SIZE, y=0.99)
    plt.tight_layout(rect=[0, 0, 1, 0.88])

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    print("Saved:", out_path)
    return out_path


def main(files: Sequence[Tuple[Path, str]], out_dir: Path = OUT_DIR) -> Path:
    """Compares two or more flat workbooks given as (path, label) pairs."""
    if len(files) < 2:
        raise ValueError(f"Need at least two summaries to compare, got {len(files)}")
    df = merge_summaries([load_summary(p, lab) for p, lab in files])

    print("\nSanity check (rows per label):")
    print(df.groupby("label").size())

    out_dir.mkdir(parents=True, exist_ok=True)
    out = plot_comparison(df, out_dir / "compare_snapshots.png")

    merged = out_dir / "merged_summaries.xlsx"
    df.to_excel(merged, index=False)
    print("Saved:", merged)
    return out


if __name__ == "__main__":
    import argparse

    ap = argparse.ArgumentParser(description="Compare aggregated results dirs")
    ap.add_argument("results_dirs", nargs="+",
                    help="results dir names under slabs/results, e.g. unit-step unit-step-debug")
    args = ap.parse_args()

    if len(args.results_dirs) < 2:
        ap.error("give at least two results dirs")
    main([(flat_summary_path(name), name) for name in args.results_dirs])

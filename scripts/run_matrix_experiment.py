# scripts/run_matrix_experiment.py
from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table

from owacoverage.experiments import DEFAULT_MATRIX, DEFAULT_PROBABILITIES, run_matrix_experiment
from owacoverage.generators import EXPERIMENT_SEED


def main():
    ap = argparse.ArgumentParser(description="Sweep tag counts and Unknown probabilities")
    ap.add_argument("--max-tags", type=int, default=8, help="largest tag count of the default matrix to run")
    ap.add_argument("--max-ticks", type=int, default=100_000, help="tick cap per run")
    ap.add_argument("--seed", type=int, default=EXPERIMENT_SEED, help="PRNG seed")
    ap.add_argument("--out", default=None, help="optional CSV path for the summary table")
    args = ap.parse_args()

    matrix = [(n, s) for n, s in DEFAULT_MATRIX if n <= args.max_tags]
    df = run_matrix_experiment(matrix, DEFAULT_PROBABILITIES, max_ticks=args.max_ticks, seed=args.seed)

    console = Console()
    cols = ["label", "ticks", "lower", "min_uncover", "max_uncover", "upper", "gap_percent", "stop_reason"]
    table = Table(title="Matrix experiment")
    for c in cols:
        table.add_column(c, justify="right" if c != "label" else "left")
    for _, row in df.iterrows():
        table.add_row(*[f"{row[c]:.2f}" if c == "gap_percent" else str(row.get(c, "")) for c in cols])
    console.print(table)

    if args.out:
        df.to_csv(args.out, index=False)


if __name__ == "__main__":
    main()

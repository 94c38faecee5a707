# scripts/run_frame_experiment.py
from __future__ import annotations

import argparse

import pandas as pd

from owacoverage import CoverageBoundEngine, EngineConfig, TagSchema
from owacoverage.experiments import print_summary, run_stream


def main():
    ap = argparse.ArgumentParser(
        description="Coverage bounds over pre-tagged ticks (CSV, one column per tag; empty cell = Unknown)"
    )
    ap.add_argument("csv", help="input CSV of tagged ticks")
    ap.add_argument("--tags", nargs="*", default=None, help="tag columns (default: all columns)")
    ap.add_argument("--sample-size", type=int, default=1, help="recompute cadence")
    ap.add_argument("--out", default=None, help="optional CSV path for the bound series")
    args = ap.parse_args()

    df = pd.read_csv(args.csv)
    schema = TagSchema(args.tags or list(df.columns))
    engine = CoverageBoundEngine(EngineConfig(tag_count=schema.tag_count, sample_size=args.sample_size, verbose=True))
    res = run_stream(engine, schema.vectors_from_frame(df), label=args.csv, progress=True, total=len(df))

    print_summary(res.summary(), title=f"Tagged ticks: {args.csv}")
    if args.out:
        res.frame.to_csv(args.out)


if __name__ == "__main__":
    main()

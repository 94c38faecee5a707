# scripts/run_random_experiment.py
from __future__ import annotations

import argparse

from owacoverage.experiments import print_summary, run_random_experiment
from owacoverage.generators import EXPERIMENT_SEED


def main():
    ap = argparse.ArgumentParser(description="Coverage bounds over random three-valued tag vectors")
    ap.add_argument("num_tags", type=int, help="tag vector width")
    ap.add_argument("max_ticks", type=int, help="number of ticks to generate")
    ap.add_argument("probability", type=int, help="per-tag Unknown probability in percent")
    ap.add_argument("--seed", type=int, default=EXPERIMENT_SEED, help="PRNG seed")
    ap.add_argument("--sample-size", type=int, default=None,
                    help="recompute cadence (default: max_ticks / 1000, at least 1)")
    ap.add_argument("--out", default=None, help="optional CSV path for the bound series")
    ap.add_argument("--quiet", action="store_true", help="no per-sample status lines")
    args = ap.parse_args()

    sample_size = args.sample_size or max(1, args.max_ticks // 1000)
    res = run_random_experiment(
        args.num_tags,
        args.probability / 100.0,
        sample_size=sample_size,
        max_ticks=args.max_ticks,
        seed=args.seed,
        verbose=not args.quiet,
    )
    print_summary(res.summary(), title=f"Random experiment {res.label}")
    if args.out:
        res.frame.to_csv(args.out)


if __name__ == "__main__":
    main()

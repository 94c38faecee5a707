# src/owacoverage/experiments.py

"""
Thin experiment drivers.

Each driver builds its own :class:`~owacoverage.engine.CoverageBoundEngine`,
a tag-vector source and a loop. The loop pushes one vector per tick, lets the
engine recompute on its cadence and stops when the engine signals
termination, when the gap closes (optional), or when the source runs dry.
Nothing is written to disk here; results come back as DataFrames.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from rich.console import Console
from rich.table import Table
from tqdm.auto import tqdm

from .config import EngineConfig
from .engine import CoverageBoundEngine
from .errors import SolverUnknownError
from .generators import EXPERIMENT_SEED, random_tag_vectors
from .valuation import TagVector

__all__ = [
    "ExperimentResult",
    "run_stream",
    "run_random_experiment",
    "run_matrix_experiment",
    "print_summary",
    "DEFAULT_MATRIX",
    "DEFAULT_PROBABILITIES",
]

console = Console()

# (num_tags, sample_size)
DEFAULT_MATRIX: Tuple[Tuple[int, int], ...] = (
    (1, 1),
    (2, 1),
    (3, 1),
    (4, 1),
    (5, 1),
    (6, 1),
    (7, 1),
    (8, 10),
    (9, 100),
    (10, 1000),
)
DEFAULT_PROBABILITIES: Tuple[float, ...] = (0.10, 0.15, 0.20)


@dataclass
class ExperimentResult:
    label: str
    engine: CoverageBoundEngine
    stop_reason: str
    skipped_points: List[int] = field(default_factory=list)

    @property
    def frame(self) -> pd.DataFrame:
        return self.engine.series.as_frame()

    def summary(self) -> Dict[str, Any]:
        out = {"label": self.label, "stop_reason": self.stop_reason}
        out.update(self.engine.summary())
        out["skipped_points"] = len(self.skipped_points)
        return out


def run_stream(
    engine: CoverageBoundEngine,
    vectors: Iterable[TagVector],
    *,
    label: str = "run",
    stop_on_zero_gap: bool = False,
    skip_unknown: bool = True,
    progress: bool = False,
    total: Optional[int] = None,
) -> ExperimentResult:
    """
    Feed ``vectors`` into ``engine`` until it asks to stop.

    With ``skip_unknown`` a sampling point whose solve came back UNKNOWN is
    skipped (its tick is recorded in ``skipped_points``) and the loop goes on;
    otherwise :class:`~owacoverage.errors.SolverUnknownError` propagates.
    """
    skipped: List[int] = []
    it = vectors
    if progress:
        it = tqdm(vectors, total=total, desc=label, leave=False)

    stop_reason = "exhausted"
    for v in it:
        engine.observe(v)
        try:
            recomputed = engine.maybe_recompute()
        except SolverUnknownError:
            if not skip_unknown:
                raise
            skipped.append(engine.tick_count)
            if engine.config.verbose:
                console.print(f"[yellow]tick {engine.tick_count}: solver UNKNOWN, sampling point skipped[/yellow]")
            continue
        if engine.should_terminate():
            stop_reason = "saturated"
            break
        if stop_on_zero_gap and recomputed and engine.current_gap_percent() == 0.0:
            stop_reason = "gap closed"
            break

    return ExperimentResult(label=label, engine=engine, stop_reason=stop_reason, skipped_points=skipped)


def run_random_experiment(
    num_tags: int,
    probability: float,
    *,
    sample_size: int = 1,
    max_ticks: Optional[int] = None,
    seed: int = EXPERIMENT_SEED,
    stop_on_zero_gap: bool = True,
    progress: bool = True,
    verbose: bool = False,
    config_overrides: Optional[Dict[str, Any]] = None,
) -> ExperimentResult:
    """Random tag vectors with Unknown probability ``probability``."""
    label = f"n={num_tags}_p={probability}"
    if verbose:
        console.print(
            f"Running random experiment with configuration: numTags={num_tags}, "
            f"probability={probability}, maxTicks={max_ticks}, sampleSize={sample_size}"
        )
    cfg = EngineConfig(
        tag_count=num_tags,
        sample_size=sample_size,
        verbose=verbose,
        **(config_overrides or {}),
    )
    engine = CoverageBoundEngine(cfg)
    vectors = random_tag_vectors(num_tags, probability, seed=seed, max_ticks=max_ticks)
    result = run_stream(
        engine,
        vectors,
        label=label,
        stop_on_zero_gap=stop_on_zero_gap,
        progress=progress,
        total=max_ticks,
    )
    if verbose and len(engine.series):
        console.print(f"Remaining gap: {engine.current_gap_percent():.2f} %")
    return result


def run_matrix_experiment(
    matrix: Sequence[Tuple[int, int]] = DEFAULT_MATRIX,
    probabilities: Sequence[float] = DEFAULT_PROBABILITIES,
    *,
    max_ticks: Optional[int] = 100_000,
    seed: int = EXPERIMENT_SEED,
    progress: bool = True,
    verbose: bool = False,
) -> pd.DataFrame:
    """Sweep ``(num_tags, sample_size)`` × ``probabilities``; one summary row per run."""
    rows = []
    for num_tags, sample_size in matrix:
        for p in probabilities:
            res = run_random_experiment(
                num_tags,
                p,
                sample_size=sample_size,
                max_ticks=max_ticks,
                seed=seed,
                progress=progress,
                verbose=verbose,
            )
            rows.append(res.summary())
    return pd.DataFrame(rows)


def print_summary(summary: Dict[str, Any], *, title: str = "Coverage bounds") -> None:
    """Render an engine/experiment summary dict as a two-column rich table."""
    table = Table(title=title)
    table.add_column("metric", style="bold")
    table.add_column("value", justify="right")
    for k, v in summary.items():
        if isinstance(v, float):
            v = f"{v:.4g}"
        table.add_row(str(k), str(v))
    console.print(table)

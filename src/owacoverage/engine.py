# src/owacoverage/engine.py

"""
Coverage bound engine.

The engine ingests three-valued tag vectors one tick at a time and, every
``sample_size`` ticks, recomputes four bounds on the number of distinct
concrete scenarios actually realized:

    lower ≤ Min-UnCover ≤ Max-UnCover ≤ upper ≤ 2 ** tag_count

Each recomputation works on the *entire* observed set, never incrementally.
The engine is single-threaded: callers must not ``observe`` while a
recomputation is running.

Typical driver loop
-------------------
>>> from owacoverage import CoverageBoundEngine, EngineConfig, parse_tag_vector
>>> eng = CoverageBoundEngine(EngineConfig(tag_count=2))
>>> for text in ["?F", "TF"]:
...     _ = eng.observe(parse_tag_vector(text))
...     _ = eng.maybe_recompute()
...     if eng.should_terminate():
...         break
>>> eng.series.row()
{'tick': 2, 'lower': 1, 'min_uncover': 1, 'max_uncover': 2, 'upper': 2}
"""

from __future__ import annotations
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set
import time

import pandas as pd
from rich.console import Console

from .bounds import check_ordering, ground_truth_count, lower_bound, upper_bound
from .config import EngineConfig
from .errors import DimensionMismatchError, InternalSolverError, InvalidValuationError
from .max_uncover import MaxUncoverSolver
from .min_uncover import MinUncoverSolver
from .powerset import expand_all
from .series import BoundSeries
from .valuation import TagVector, Valuation, tag_vector

__all__ = ["CoverageBoundEngine"]

console = Console()


class CoverageBoundEngine:
    """
    Owns one run's observed set and bound series.

    Parameters
    ----------
    config : EngineConfig
        Width, cadence and solver knobs.
    min_solver, max_solver : optional
        Injected solver instances (e.g. instrumented ones in tests). By default
        fresh solvers are built from ``config``; nothing is shared between
        engine instances.
    """

    def __init__(
        self,
        config: EngineConfig,
        *,
        min_solver: Optional[MinUncoverSolver] = None,
        max_solver: Optional[MaxUncoverSolver] = None,
    ):
        self.config = config
        self.max_possible = config.resolved_max_possible
        self.ceiling = 2 ** config.tag_count  # number of concrete vectors of this width
        self.min_solver = min_solver or MinUncoverSolver(time_limit=config.solver_time_limit)
        self.max_solver = max_solver or MaxUncoverSolver(
            cross_check=config.cross_check_matching,
            use_maxsat_oracle=config.use_maxsat_oracle,
            time_limit=config.solver_time_limit,
        )

        self._observed: Set[TagVector] = set()
        self.series = BoundSeries()
        self.observed_counts: List[int] = []  # distinct observed vectors after every tick
        self.tick_count = 0
        self._t0 = time.perf_counter()

    # ------------- ingestion -------------

    @property
    def observed(self) -> FrozenSet[TagVector]:
        return frozenset(self._observed)

    def _validate(self, v: Iterable) -> TagVector:
        items = list(v)
        for x in items:
            if not isinstance(x, Valuation):
                raise InvalidValuationError(f"expected Valuation entries, got {type(x).__name__}")
        if len(items) != self.config.tag_count:
            raise DimensionMismatchError(self.config.tag_count, len(items))
        return tag_vector(items)

    def observe(self, v: Iterable[Valuation]) -> bool:
        """
        Record one tick.

        The vector is copied into an immutable tuple before insertion. Returns
        ``True`` if it was new to the observed set.

        Raises
        ------
        InvalidValuationError
            An entry is not a :class:`~owacoverage.valuation.Valuation`.
        DimensionMismatchError
            The width differs from ``config.tag_count``.
        """
        vec = self._validate(v)
        before = len(self._observed)
        self._observed.add(vec)
        self.tick_count += 1
        self.observed_counts.append(len(self._observed))
        return len(self._observed) > before

    def maybe_recompute(self) -> bool:
        """Recompute if the tick counter hit the sampling cadence; report whether it did."""
        if self.tick_count == 0 or self.tick_count % self.config.sample_size != 0:
            return False
        self.recompute()
        return True

    def step(self, v: Iterable[Valuation]) -> bool:
        """``observe`` + ``maybe_recompute``; returns :meth:`should_terminate`."""
        self.observe(v)
        self.maybe_recompute()
        return self.should_terminate()

    # ------------- bounds -------------

    def _saturated(self, name: str) -> bool:
        last = self.series.last_or_none(name)
        return last is not None and last >= self.ceiling

    def recompute(self) -> Dict[str, Any]:
        """
        Recompute all bounds from the full observed set and append one row.

        Nothing is appended if a solver raises, so a sampling point is either
        fully recorded or absent.
        """
        families = expand_all(self._observed)

        lower = lower_bound(self._observed)
        upper = upper_bound(families)

        # Min-/Max-UnCover only grow with the observed set and never exceed
        # 2 ** tag_count; once they reach it they stay there.
        if self._saturated("min_uncover"):
            min_uc, t_min = self.ceiling, 0.0
        else:
            t0 = time.perf_counter()
            min_uc = self.min_solver.solve([ps for _, ps in families])
            t_min = time.perf_counter() - t0

        if self._saturated("max_uncover"):
            max_uc, t_max = self.ceiling, 0.0
        else:
            t0 = time.perf_counter()
            max_uc = self.max_solver.solve(families)
            t_max = time.perf_counter() - t0

        truth = ground_truth_count(self._observed) if self.config.track_ground_truth else None

        if not check_ordering([lower, min_uc, max_uc, upper, self.ceiling]):
            raise InternalSolverError(
                f"bound ordering violated at tick {self.tick_count}: "
                f"LB={lower} MinUC={min_uc} MaxUC={max_uc} UB={upper} Max={self.ceiling}"
            )

        self.series.append(
            tick=self.tick_count,
            lower=lower,
            min_uncover=min_uc,
            max_uncover=max_uc,
            upper=upper,
            ground_truth=truth,
            min_uncover_seconds=t_min,
            max_uncover_seconds=t_max,
        )
        if self.config.verbose:
            self._print_status()
        return self.series.row()

    # ------------- driver surface -------------

    def current_gap_percent(self) -> float:
        """
        ``(upper - lower) / upper * 100`` at the latest sampling point.

        Must not be called before the first recomputation
        (:class:`~owacoverage.errors.EmptySeriesError`). An upper bound of 0
        only happens for an empty observed set and yields ``0.0``.
        """
        upper = self.series.last("upper")
        lower = self.series.last("lower")
        if upper == 0:
            return 0.0
        return (upper - lower) / upper * 100

    def should_terminate(self) -> bool:
        """True once Min-UnCover reached or passed ``max_possible``."""
        last = self.series.last_or_none("min_uncover")
        return last is not None and last >= self.max_possible

    # ------------- reporting -------------

    def elapsed(self) -> float:
        return time.perf_counter() - self._t0

    def timings_frame(self) -> pd.DataFrame:
        """Per-call solver wall times, one column per algorithm."""
        cols = {"min_uncover_maxsat": self.min_solver.elapsed}
        for name, times in self.max_solver.elapsed.items():
            cols[f"max_uncover_{name}"] = times
        return pd.DataFrame({k: pd.Series(v, dtype=float) for k, v in cols.items()})

    def summary(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "ticks": self.tick_count,
            "observed": len(self._observed),
            "max_possible": self.max_possible,
            "sampling_points": len(self.series),
        }
        if len(self.series):
            out.update(self.series.row())
            out["ground_truth"] = self.series.last("ground_truth")
            out["gap_percent"] = self.current_gap_percent()
        out["min_uncover_seconds"] = self.min_solver.total_time
        out["max_uncover_seconds"] = sum(self.max_solver.total_time.values())
        out["terminated"] = self.should_terminate()
        return out

    def _print_status(self) -> None:
        t = self.elapsed()
        t_min = self.min_solver.total_time
        t_max = self.max_solver.total_time

        def pct(x: float) -> str:
            return f"{x * 100 / t:.2f}" if t > 0 else "0.00"

        s = self.series
        console.print(
            f"Tick: {self.tick_count} "
            f"| UB: {s.upper[-1]} "
            f"| MaxUC: {s.max_uncover[-1]} "
            f"| Real: {s.ground_truth[-1] if s.ground_truth[-1] is not None else '-'} "
            f"| MinUC: {s.min_uncover[-1]} "
            f"| LB: {s.lower[-1]} "
            f"| Max: {self.max_possible} "
            f"  ||   Gap: {self.current_gap_percent():.2f} % "
            f"  ||   Time: {t:.2f} s "
            f"| MinUnCover (SAT): {t_min:.2f} s ({pct(t_min)} %) "
            f"| MaxUnCover (Edmonds / Hopcroft-Karp / SAT): "
            f"{t_max['general']:.2f} s ({pct(t_max['general'])} %) / "
            f"{t_max['bipartite']:.2f} s ({pct(t_max['bipartite'])} %) / "
            f"{t_max['maxsat']:.2f} s ({pct(t_max['maxsat'])} %)",
            highlight=False,
        )

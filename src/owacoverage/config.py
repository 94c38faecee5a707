# src/owacoverage/config.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

"""
Configuration for a coverage bound engine run.

:class:`EngineConfig` is a small dataclass with sane defaults. Treat it as an
immutable snapshot handed to :class:`~owacoverage.engine.CoverageBoundEngine`
at construction; the engine never mutates it.

Examples
--------
>>> from owacoverage.config import EngineConfig
>>> cfg = EngineConfig(tag_count=3, sample_size=10)
>>> cfg.resolved_max_possible
8
"""

__all__ = [
    "EngineConfig",
]


@dataclass(frozen=True)
class EngineConfig:
    """
    Knobs of a single engine instance.

    Parameters
    ----------
    tag_count : int
        Fixed width of every tag vector of the run. Each observed vector is
        validated against it.
    sample_size : int, default=1
        Recompute the four bounds every ``sample_size`` ticks. ``1`` recomputes
        on every tick.
    max_possible : int, optional
        Termination threshold on Min-UnCover. Defaults to ``2 ** tag_count``
        and must not exceed it. A smaller value only stops the run earlier;
        the solver-skipping shortcut still waits for ``2 ** tag_count``.
    cross_check_matching : bool, default=True
        Run both maximum-matching algorithms for Max-UnCover and fail hard if
        they disagree.
    use_maxsat_oracle : bool, default=False
        Additionally validate Max-UnCover against the (slow) MaxSAT encoding.
        Intended for small inputs in tests.
    solver_time_limit : float, optional
        Per-call time limit in seconds for MaxSAT solves. ``None`` = no limit.
        A run that hits the limit surfaces as
        :class:`~owacoverage.errors.SolverUnknownError`.
    verbose : bool, default=False
        Print a status line at each sampling point.
    track_ground_truth : bool, default=True
        Maintain the diagnostic ground-truth series.
    """

    tag_count: int
    sample_size: int = 1
    max_possible: Optional[int] = None
    cross_check_matching: bool = True
    use_maxsat_oracle: bool = False
    solver_time_limit: Optional[float] = None
    verbose: bool = False
    track_ground_truth: bool = True

    def __post_init__(self):
        if self.tag_count < 1:
            raise ValueError("tag_count must be ≥ 1")
        if self.sample_size < 1:
            raise ValueError("sample_size must be ≥ 1")
        if self.max_possible is not None and self.max_possible < 1:
            raise ValueError("max_possible must be ≥ 1")
        if self.max_possible is not None and self.max_possible > 2 ** self.tag_count:
            raise ValueError(
                f"max_possible={self.max_possible} can never be reached with "
                f"tag_count={self.tag_count} (at most {2 ** self.tag_count})"
            )
        if self.solver_time_limit is not None and self.solver_time_limit <= 0:
            raise ValueError("solver_time_limit must be > 0")

    @property
    def resolved_max_possible(self) -> int:
        if self.max_possible is not None:
            return self.max_possible
        return 2 ** self.tag_count

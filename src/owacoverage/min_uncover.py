# src/owacoverage/min_uncover.py

"""
Min-UnCover: minimum hitting set over observed power sets.

Given the power set of every observed tag vector, find the fewest concrete
vectors such that each power set contains at least one of them. Encoded as
weighted partial MaxSAT:

- one variable per *distinct* concrete vector (shared across families),
- one hard clause per family: the disjunction of its members,
- one soft unit clause ``¬x`` of weight 1 per variable.

The hard part is satisfiable by construction (all variables true), so an
UNSATISFIABLE answer is an encoding defect and raises
:class:`~owacoverage.errors.UnsatisfiableEncodingError`.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import time

from .errors import SolverUnknownError, UnsatisfiableEncodingError
from .maxsat import MILPBackend, OPTIMAL, UNSATISFIABLE, WeightedMaxSAT
from .valuation import TagVector, format_tag_vector

__all__ = ["MinUncoverSolver"]


class MinUncoverSolver:
    """
    Stateless apart from instrumentation: ``calls`` counts invocations of
    :meth:`solve` and ``elapsed`` holds the wall time of each call in seconds.
    """

    def __init__(self, *, time_limit: Optional[float] = None, backend: Optional[MILPBackend] = None):
        self.time_limit = time_limit
        self.backend = backend
        self.calls = 0
        self.elapsed: List[float] = []

    def build(self, families: Iterable[Iterable[TagVector]]):
        """Return the MaxSAT instance and the concrete-vector → variable map."""
        sat = WeightedMaxSAT(backend=self.backend)
        variables: Dict[TagVector, int] = {}
        for family in families:
            clause = []
            for option in family:
                var = variables.get(option)
                if var is None:
                    var = sat.new_var(format_tag_vector(option))
                    variables[option] = var
                clause.append((var, True))
            sat.add_hard(clause)
        for var in variables.values():
            sat.add_soft([(var, False)], weight=1)
        return sat, variables

    def solve(self, families: Iterable[Iterable[TagVector]]) -> int:
        """
        Size of a minimum hitting set of ``families``.

        Raises
        ------
        UnsatisfiableEncodingError
            The solver reported UNSATISFIABLE (fatal).
        SolverUnknownError
            The solver returned UNKNOWN, e.g. after ``time_limit`` seconds.
        """
        t0 = time.perf_counter()
        self.calls += 1
        try:
            sat, variables = self.build(families)
            res = sat.solve(time_limit=self.time_limit)
        finally:
            self.elapsed.append(time.perf_counter() - t0)

        if res.status == UNSATISFIABLE:
            raise UnsatisfiableEncodingError(
                f"hitting-set encoding over {len(variables)} concrete vectors reported UNSATISFIABLE"
            )
        if res.status != OPTIMAL:
            raise SolverUnknownError("Min-UnCover solve returned UNKNOWN", time_limit=self.time_limit)
        return sum(1 for var in variables.values() if res.value(var))

    @property
    def total_time(self) -> float:
        return float(sum(self.elapsed))

# src/owacoverage/max_uncover.py

"""
Max-UnCover: maximum bipartite matching between observed vectors and their
concrete resolutions.

Left vertices are the distinct observed tag vectors, right vertices the
distinct concrete vectors of any power set, with an edge ``(v, c)`` iff
``c ∈ PowerSet(v)``. The answer is the size of a maximum-cardinality
matching: the largest number of observations that can be given pairwise
distinct concrete resolutions.

Three interchangeable formulations are provided:

- :meth:`MaxUncoverSolver.matching_general`: Edmonds' blossom algorithm
  (``networkx.max_weight_matching`` with ``maxcardinality=True``), valid on
  any graph and used as ground truth.
- :meth:`MaxUncoverSolver.matching_bipartite`: Hopcroft-Karp, asymptotically
  faster and the primary answer.
- :meth:`MaxUncoverSolver.matching_maxsat`: weighted MaxSAT over edge
  variables with pairwise mutual exclusion per vertex. Equivalent but slow;
  only consulted when ``use_maxsat_oracle`` is set.
"""

from __future__ import annotations
from typing import Dict, Hashable, Iterable, List, Optional, Set, Tuple
import time

import networkx as nx
from networkx.algorithms import bipartite

from .errors import (
    InternalSolverError,
    MatchingMismatchError,
    SolverUnknownError,
)
from .maxsat import MILPBackend, OPTIMAL, UNSATISFIABLE, WeightedMaxSAT
from .powerset import Family
from .valuation import format_tag_vector

__all__ = ["MaxUncoverSolver", "build_graph"]

GENERAL = "general"
BIPARTITE = "bipartite"
MAXSAT = "maxsat"


def _observed(v) -> Tuple[str, Hashable]:
    return ("observed", v)


def _concrete(c) -> Tuple[str, Hashable]:
    return ("concrete", c)


def build_graph(families: Iterable[Family]) -> Tuple[nx.Graph, Set]:
    """Undirected bipartite graph of ``families`` and its left (observed) partition."""
    G = nx.Graph()
    left = set()
    for v, power_set in families:
        o = _observed(v)
        left.add(o)
        G.add_node(o, bipartite=0)
        for c in power_set:
            G.add_node(_concrete(c), bipartite=1)
            G.add_edge(o, _concrete(c))
    return G, left


def _edges_by_vertex(families: Iterable[Family]):
    """Distinct edges, grouped per left vertex and per right vertex."""
    left: Dict[Hashable, Set] = {}
    for v, power_set in families:
        left.setdefault(v, set()).update(power_set)
    edges = [(v, c) for v, cs in left.items() for c in cs]
    by_left: Dict[Hashable, List[int]] = {}
    by_right: Dict[Hashable, List[int]] = {}
    for k, (v, c) in enumerate(edges):
        by_left.setdefault(v, []).append(k)
        by_right.setdefault(c, []).append(k)
    return edges, by_left, by_right


class MaxUncoverSolver:
    """
    Parameters
    ----------
    cross_check : bool, default=True
        Run both graph algorithms and raise
        :class:`~owacoverage.errors.MatchingMismatchError` on disagreement.
    use_maxsat_oracle : bool, default=False
        Also compare against the MaxSAT encoding.
    time_limit : float, optional
        Time limit for the MaxSAT oracle only.

    ``calls`` counts :meth:`solve` invocations; ``elapsed`` maps each
    algorithm name to the wall times of its runs.
    """

    def __init__(
        self,
        *,
        cross_check: bool = True,
        use_maxsat_oracle: bool = False,
        time_limit: Optional[float] = None,
        backend: Optional[MILPBackend] = None,
    ):
        self.cross_check = cross_check
        self.use_maxsat_oracle = use_maxsat_oracle
        self.time_limit = time_limit
        self.backend = backend
        self.calls = 0
        self.elapsed: Dict[str, List[float]] = {GENERAL: [], BIPARTITE: [], MAXSAT: []}

    # ------------- algorithms -------------

    def matching_general(self, families: Iterable[Family]) -> int:
        t0 = time.perf_counter()
        G, _ = build_graph(families)
        matching = nx.max_weight_matching(G, maxcardinality=True)
        self.elapsed[GENERAL].append(time.perf_counter() - t0)
        return len(matching)

    def matching_bipartite(self, families: Iterable[Family]) -> int:
        t0 = time.perf_counter()
        G, left = build_graph(families)
        # mapping contains both directions of every matched edge
        matching = bipartite.hopcroft_karp_matching(G, top_nodes=left)
        self.elapsed[BIPARTITE].append(time.perf_counter() - t0)
        return len(matching) // 2

    def matching_maxsat(self, families: Iterable[Family]) -> int:
        t0 = time.perf_counter()
        try:
            edges, by_left, by_right = _edges_by_vertex(families)
            sat = WeightedMaxSAT(backend=self.backend)
            xs = [sat.new_var(f"{format_tag_vector(v)}_{format_tag_vector(c)}") for v, c in edges]

            # at most one selected edge per observed and per concrete vertex
            for group in list(by_left.values()) + list(by_right.values()):
                for i in range(len(group)):
                    for j in range(i + 1, len(group)):
                        sat.add_hard([(xs[group[i]], False), (xs[group[j]], False)])

            for x in xs:
                sat.add_soft([(x, True)], weight=1)

            res = sat.solve(time_limit=self.time_limit)
        finally:
            self.elapsed[MAXSAT].append(time.perf_counter() - t0)

        if res.status == UNSATISFIABLE:
            raise InternalSolverError("matching encoding reported UNSATISFIABLE")
        if res.status != OPTIMAL:
            raise SolverUnknownError("Max-UnCover MaxSAT oracle returned UNKNOWN", time_limit=self.time_limit)
        return sum(1 for x in xs if res.value(x))

    # ------------- public entry -------------

    def solve(self, families: Iterable[Family]) -> int:
        """
        Maximum matching size for ``families`` (pairs of observed vector and
        its power set).
        """
        families = list(families)
        self.calls += 1
        results = {BIPARTITE: self.matching_bipartite(families)}
        if self.cross_check:
            results[GENERAL] = self.matching_general(families)
        if self.use_maxsat_oracle:
            results[MAXSAT] = self.matching_maxsat(families)
        if len(set(results.values())) != 1:
            raise MatchingMismatchError(results)
        return results[BIPARTITE]

    @property
    def total_time(self) -> Dict[str, float]:
        return {name: float(sum(times)) for name, times in self.elapsed.items()}

import numpy as np
import pytest

from owacoverage.errors import SolverUnknownError, UnsatisfiableEncodingError
from owacoverage.maxsat import MILPBackend, OPTIMAL, UNKNOWN, UNSATISFIABLE
from owacoverage.min_uncover import MinUncoverSolver
from owacoverage.powerset import expand


class _FixedStatus(MILPBackend):
    def __init__(self, status):
        self.status = status

    def solve(self, form, *, time_limit=None):
        return self.status, None


def test_shared_concrete_vector_hits_both(tv):
    # (?,F) and (T,F): choosing (T,F) hits both power sets
    fams = [expand(tv("?F")), expand(tv("TF"))]
    assert MinUncoverSolver().solve(fams) == 1


def test_disjoint_families_need_one_each(tv):
    fams = [expand(tv("TT")), expand(tv("FF")), expand(tv("T?"))]
    # {TT} and {FF} are forced; TT also hits T?
    assert MinUncoverSolver().solve(fams) == 2


def test_variables_are_shared_across_families(tv):
    solver = MinUncoverSolver()
    sat, variables = solver.build([expand(tv("?F")), expand(tv("TF")), expand(tv("T?"))])
    assert len(variables) == 3   # TF, FF, TT
    assert sat.num_vars == 3


def test_empty_family_list():
    assert MinUncoverSolver().solve([]) == 0


def test_matches_brute_force(rng, random_text):
    from itertools import combinations
    from owacoverage.valuation import parse_tag_vector

    solver = MinUncoverSolver()
    for _ in range(25):
        k = int(rng.integers(1, 4))
        n = int(rng.integers(1, 6))
        fams = [expand(parse_tag_vector(random_text(rng, k, 0.4))) for _ in range(n)]
        universe = sorted(set().union(*fams), key=str)
        best = None
        for size in range(0, len(universe) + 1):
            for H in combinations(universe, size):
                if all(f & set(H) for f in fams):
                    best = size
                    break
            if best is not None:
                break
        assert solver.solve(fams) == best
    assert solver.calls == 25
    assert len(solver.elapsed) == 25


def test_unsat_is_fatal(tv):
    solver = MinUncoverSolver(backend=_FixedStatus(UNSATISFIABLE))
    with pytest.raises(UnsatisfiableEncodingError):
        solver.solve([expand(tv("?"))])


def test_unknown_is_surfaced_not_defaulted(tv):
    solver = MinUncoverSolver(time_limit=0.01, backend=_FixedStatus(UNKNOWN))
    with pytest.raises(SolverUnknownError) as exc:
        solver.solve([expand(tv("?"))])
    assert exc.value.time_limit == 0.01
    assert solver.calls == 1

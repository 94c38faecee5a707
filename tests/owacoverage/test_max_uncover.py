import pytest

from owacoverage.errors import MatchingMismatchError, SolverUnknownError
from owacoverage.max_uncover import MaxUncoverSolver, build_graph
from owacoverage.maxsat import MILPBackend, UNKNOWN
from owacoverage.powerset import expand, expand_all
from owacoverage.valuation import parse_tag_vector


def _families(texts):
    return expand_all(parse_tag_vector(t) for t in texts)


def test_concrete_scenario_two_tags():
    fams = _families(["?F", "TF"])
    solver = MaxUncoverSolver(use_maxsat_oracle=True)
    # ?F -> FF, TF -> TF
    assert solver.solve(fams) == 2


def test_contention_for_single_resolution():
    # three observations all resolving only into {TT, TF}
    fams = _families(["T?", "T?", "TT", "TF"])
    assert MaxUncoverSolver().solve(fams) == 2


def test_build_graph_partitions():
    fams = _families(["?F", "TF"])
    G, left = build_graph(fams)
    assert len(left) == 2
    assert G.number_of_nodes() == 4      # 2 observed + {TF, FF}
    assert G.number_of_edges() == 3


def test_duplicate_observations_collapse():
    fams = _families(["??", "??"])
    assert MaxUncoverSolver(use_maxsat_oracle=True).solve(fams) == 1


def test_empty_input():
    assert MaxUncoverSolver().solve([]) == 0


def test_algorithms_agree_on_random_bipartite_instances(rng):
    # right side: integers; left side: labelled observations with random neighbourhoods
    solver = MaxUncoverSolver(cross_check=True)
    for i in range(250):
        n_left = int(rng.integers(1, 15))
        n_right = int(rng.integers(1, 15))
        density = float(rng.uniform(0.05, 0.9))
        fams = []
        for j in range(n_left):
            nbrs = frozenset(int(r) for r in range(n_right) if rng.random() < density)
            if not nbrs:
                nbrs = frozenset({int(rng.integers(0, n_right))})
            fams.append((("obs", i, j), nbrs))
        general = solver.matching_general(fams)
        bip = solver.matching_bipartite(fams)
        assert general == bip
        assert solver.solve(fams) == bip
        assert bip <= min(n_left, n_right)
    assert solver.calls == 250


def test_maxsat_oracle_agrees_on_small_instances(rng, random_text):
    solver = MaxUncoverSolver(cross_check=True, use_maxsat_oracle=True)
    for _ in range(30):
        k = int(rng.integers(1, 4))
        n = int(rng.integers(1, 7))
        fams = _families([random_text(rng, k, 0.5) for _ in range(n)])
        solver.solve(fams)
    assert len(solver.elapsed["maxsat"]) == 30


def test_oracle_disabled_by_default():
    solver = MaxUncoverSolver()
    solver.solve(_families(["?"]))
    assert solver.elapsed["maxsat"] == []
    assert len(solver.elapsed["general"]) == 1


def test_mismatch_is_fatal(monkeypatch):
    solver = MaxUncoverSolver(cross_check=True)
    monkeypatch.setattr(solver, "matching_general", lambda fams: 99)
    with pytest.raises(MatchingMismatchError) as exc:
        solver.solve(_families(["?"]))
    assert exc.value.results["general"] == 99


def test_oracle_unknown_surfaces():
    class _Unknown(MILPBackend):
        def solve(self, form, *, time_limit=None):
            return UNKNOWN, None

    solver = MaxUncoverSolver(use_maxsat_oracle=True, backend=_Unknown())
    with pytest.raises(SolverUnknownError):
        solver.solve(_families(["??"]))

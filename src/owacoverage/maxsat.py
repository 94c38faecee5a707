# src/owacoverage/maxsat.py

"""
Weighted partial MaxSAT on top of 0-1 integer programming.

Clauses are lists of literals ``(var, polarity)`` where ``var`` is an integer
handle from :meth:`WeightedMaxSAT.new_var`. The problem is encoded as a
binary ILP and handed to a MILP backend:

- hard clause ``C``:  ``sum(x for positive) + sum(1 - x for negative) >= 1``
- soft unit clause ``(l, w)``: cost ``w * (1 - l)``
- soft clause ``(C, w)`` with ``|C| > 1``: fresh relaxation ``r``, hard
  ``C ∨ r``, cost ``w * r``

Minimizing total cost is minimizing the weight of falsified soft clauses.

Two backends mirror each other's formulation: :class:`SciPyBackend` (HiGHS
in-process via ``scipy.optimize.milp``) and :class:`PuLPBackend` (CBC or
GLPK via PuLP). :func:`best_available_backend` prefers SciPy.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import shutil

import numpy as np
import pulp  # type: ignore

from .errors import SolverUnavailableError

__all__ = [
    "OPTIMAL",
    "UNSATISFIABLE",
    "UNKNOWN",
    "Literal",
    "MaxSATResult",
    "ILPForm",
    "MILPBackend",
    "SciPyBackend",
    "PuLPBackend",
    "best_available_backend",
    "WeightedMaxSAT",
]

OPTIMAL = "OPTIMAL"
UNSATISFIABLE = "UNSATISFIABLE"
UNKNOWN = "UNKNOWN"

Literal = Tuple[int, bool]


@dataclass(frozen=True)
class MaxSATResult:
    """Status, model (``var -> bool``, empty unless OPTIMAL) and optimal cost."""
    status: str
    model: Dict[int, bool] = field(default_factory=dict)
    cost: Optional[float] = None

    @property
    def is_optimal(self) -> bool:
        return self.status == OPTIMAL

    def value(self, var: int) -> bool:
        return self.model.get(var, False)


@dataclass
class ILPForm:
    """``min c·x + offset`` s.t. ``A x >= lb``, ``x ∈ {0,1}^n`` (sparse rows)."""
    num_vars: int = 0
    rows: List[Dict[int, float]] = field(default_factory=list)
    lb: List[float] = field(default_factory=list)
    costs: Dict[int, float] = field(default_factory=dict)
    offset: float = 0.0

    def add_clause(self, clause: Sequence[Literal]) -> None:
        row: Dict[int, float] = {}
        negatives = 0
        for var, positive in clause:
            if positive:
                row[var] = row.get(var, 0.0) + 1.0
            else:
                row[var] = row.get(var, 0.0) - 1.0
                negatives += 1
        self.rows.append(row)
        self.lb.append(1.0 - negatives)

    def add_cost(self, var: int, weight: float) -> None:
        self.costs[var] = self.costs.get(var, 0.0) + weight

    def cost_vector(self) -> np.ndarray:
        c = np.zeros(self.num_vars)
        for j, w in self.costs.items():
            c[j] = w
        return c


class MILPBackend:
    """Solves an :class:`ILPForm`; returns ``(status, x)`` with ``x`` a 0/1 array."""
    name = "abstract"

    def solve(self, form: ILPForm, *, time_limit: Optional[float] = None) -> Tuple[str, Optional[np.ndarray]]:  # pragma: no cover - abstract
        raise NotImplementedError


class SciPyBackend(MILPBackend):
    """
    In-process HiGHS via ``scipy.optimize.milp``.

    HiGHS status 0 is a proven optimum, 2 is infeasible; a time/iteration
    limit (1) or anything else is UNKNOWN even if an incumbent exists.
    """
    name = "scipy"

    def __init__(self) -> None:
        from scipy.optimize import milp as _milp, LinearConstraint, Bounds  # lazy import
        from scipy.sparse import coo_matrix
        self._milp = _milp
        self._LinearConstraint = LinearConstraint
        self._Bounds = Bounds
        self._coo = coo_matrix

    def solve(self, form: ILPForm, *, time_limit: Optional[float] = None) -> Tuple[str, Optional[np.ndarray]]:
        n = form.num_vars
        if n == 0:
            if any(lb > 0 for lb in form.lb):
                return UNSATISFIABLE, None
            return OPTIMAL, np.zeros(0)

        constraints = []
        if form.rows:
            data, ri, ci = [], [], []
            for i, row in enumerate(form.rows):
                for j, a in row.items():
                    data.append(a); ri.append(i); ci.append(j)
            A = self._coo((data, (ri, ci)), shape=(len(form.rows), n)).tocsr()
            constraints.append(self._LinearConstraint(A, np.asarray(form.lb, dtype=float), np.inf))

        options = {"disp": False}
        if time_limit is not None:
            options["time_limit"] = float(time_limit)

        res = self._milp(
            form.cost_vector(),
            constraints=constraints or None,
            integrality=np.ones(n),
            bounds=self._Bounds(0, 1),
            options=options,
        )
        if res.status == 0 and res.x is not None:
            return OPTIMAL, np.rint(res.x)
        if res.status == 2:
            return UNSATISFIABLE, None
        return UNKNOWN, None


class PuLPBackend(MILPBackend):
    """
    External solver fallback (CBC or GLPK via PuLP).
    Keeps the same formulation/optimality as SciPyBackend.
    """
    name = "pulp"

    def _pick_solver(self, time_limit: Optional[float]):
        # Pick an available solver: bundled CBC, then CLI solvers
        bundled = pulp.PULP_CBC_CMD(msg=False, timeLimit=time_limit)
        if bundled.available():
            return bundled
        cbc = shutil.which("cbc")
        if cbc:
            return pulp.COIN_CMD(path=cbc, msg=False, timeLimit=time_limit)
        glp = shutil.which("glpsol")
        if glp:
            return pulp.GLPK_CMD(path=glp, msg=False, timeLimit=time_limit)
        raise SolverUnavailableError("No MILP solver found (need SciPy or CBC/GLPK).")

    def solve(self, form: ILPForm, *, time_limit: Optional[float] = None) -> Tuple[str, Optional[np.ndarray]]:
        n = form.num_vars
        if n == 0:
            if any(lb > 0 for lb in form.lb):
                return UNSATISFIABLE, None
            return OPTIMAL, np.zeros(0)

        solver = self._pick_solver(time_limit)
        prob = pulp.LpProblem("weighted_maxsat", pulp.LpMinimize)
        x = [pulp.LpVariable(f"x_{j}", cat="Binary") for j in range(n)]

        # Objective: weighted falsified soft clauses
        prob += pulp.lpSum(w * x[j] for j, w in form.costs.items()) + 0

        for row, lb in zip(form.rows, form.lb):
            prob += pulp.lpSum(a * x[j] for j, a in row.items()) >= lb

        prob.solve(solver)

        sol_status = getattr(prob, "sol_status", None)
        if sol_status == pulp.LpSolutionOptimal:
            return OPTIMAL, np.array([round(v.value() or 0.0) for v in x], dtype=float)
        if pulp.LpStatus[prob.status] == "Infeasible" or sol_status == pulp.LpSolutionInfeasible:
            return UNSATISFIABLE, None
        return UNKNOWN, None


def best_available_backend() -> MILPBackend:
    """Prefer SciPy (in-process) else fallback to PuLP (external solver)."""
    try:
        return SciPyBackend()
    except ImportError:
        return PuLPBackend()


class WeightedMaxSAT:
    """
    Builder for one weighted partial MaxSAT instance.

    Examples
    --------
    >>> sat = WeightedMaxSAT()
    >>> a, b = sat.new_var("a"), sat.new_var("b")
    >>> sat.add_hard([(a, True), (b, True)])
    >>> sat.add_soft([(a, False)]); sat.add_soft([(b, False)])
    >>> res = sat.solve()
    >>> res.status, res.cost
    ('OPTIMAL', 1.0)
    """

    def __init__(self, backend: Optional[MILPBackend] = None):
        self.backend = backend or best_available_backend()
        self.names: List[str] = []
        self._form = ILPForm()
        self._relaxations: List[int] = []

    @property
    def num_vars(self) -> int:
        return len(self.names)

    def new_var(self, name: str = "") -> int:
        var = self._form.num_vars
        self._form.num_vars += 1
        self.names.append(name or f"v{var}")
        return var

    def add_hard(self, clause: Sequence[Literal]) -> None:
        self._form.add_clause(clause)

    def add_soft(self, clause: Sequence[Literal], weight: float = 1) -> None:
        if weight <= 0:
            raise ValueError("soft clause weight must be > 0")
        if len(clause) == 1:
            var, positive = clause[0]
            if positive:
                # w * (1 - x)
                self._form.offset += weight
                self._form.add_cost(var, -weight)
            else:
                self._form.add_cost(var, weight)
            return
        r = self.new_var(f"relax_{len(self._relaxations)}")
        self._relaxations.append(r)
        self._form.add_clause(list(clause) + [(r, True)])
        self._form.add_cost(r, weight)

    def solve(self, time_limit: Optional[float] = None) -> MaxSATResult:
        status, x = self.backend.solve(self._form, time_limit=time_limit)
        if status != OPTIMAL:
            return MaxSATResult(status=status)
        model = {j: bool(x[j] > 0.5) for j in range(self._form.num_vars)}
        cost = float(self._form.cost_vector() @ x) + self._form.offset if self._form.num_vars else self._form.offset
        return MaxSATResult(status=OPTIMAL, model=model, cost=cost)

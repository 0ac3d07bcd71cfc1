"""
Reference backend: the same problem handed to OR-Tools CP-SAT.

Each meeting becomes one integer variable holding its day offset from
range_start, so every date comparison turns into a linear relation:
  unary   x[m]  <op>  (date - range_start).days
  binary  x[l]  <op>  x[r]

It shares no code with the propagation/backtracking solver, which makes
it a useful cross-check for that solver's answers.

Reference: OR-Tools CP-SAT Python API
https://developers.google.com/optimization/reference/python/sat/python/cp_model
"""

from __future__ import annotations

import datetime as dt

from ortools.sat.python import cp_model

from ..logging_utils import get_logger
from ..models import Problem
from .precheck import ensure_ok
from .result import SATISFIED, UNKNOWN, UNSATISFIABLE, SolveResult

logger = get_logger(__name__)


def _status_str(s: object) -> str:
    """Convert a CP-SAT solver status value to a readable string."""
    mapping = {
        int(cp_model.OPTIMAL):       "OPTIMAL",
        int(cp_model.FEASIBLE):      "FEASIBLE",
        int(cp_model.INFEASIBLE):    "INFEASIBLE",
        int(cp_model.MODEL_INVALID): "MODEL_INVALID",
    }
    return mapping.get(int(s), "UNKNOWN")  # type: ignore[call-overload]


def solve_cpsat(problem: Problem) -> SolveResult:
    ensure_ok(problem)

    N     = problem.meeting_count
    D     = problem.range_days
    start = problem.range_start

    if N == 0:
        return SolveResult(status=SATISFIED, assignment=[], backend="cpsat")
    if D == 0:
        return SolveResult(
            status=UNSATISFIABLE, backend="cpsat",
            diagnostics=["Date range is empty."],
        )

    model = cp_model.CpModel()

    # x[m] = day offset of meeting m from range_start
    x = [model.new_int_var(0, D - 1, f"x_m{m}") for m in range(N)]

    for c in problem.constraints:
        # Operator.holds on IntVars builds the linear relation directly
        if c.arity == 1:
            offset = (c.date - start).days
            model.add(c.op.holds(x[c.meeting], offset))
        elif c.left == c.right:
            # x op x has no variable left in it; decide it on any value
            if not c.op.holds(0, 0):
                return SolveResult(
                    status=UNSATISFIABLE, backend="cpsat",
                    diagnostics=[f"Constraint '{c}' can never hold."],
                )
        else:
            model.add(c.op.holds(x[c.left], x[c.right]))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = problem.solver.max_time_in_seconds
    solver.parameters.num_workers         = problem.solver.num_workers
    status = solver.solve(model)
    name   = _status_str(status)
    stats  = {
        "cpsat_status":  name,
        "num_conflicts": solver.num_conflicts,
        "wall_time_s":   round(solver.wall_time, 3),
    }
    logger.debug("CP-SAT finished with %s", name)

    if name in ("OPTIMAL", "FEASIBLE"):
        assignment = [start + dt.timedelta(days=solver.value(x[m])) for m in range(N)]
        return SolveResult(status=SATISFIED, assignment=assignment,
                           backend="cpsat", stats=stats)
    if name == "INFEASIBLE":
        return SolveResult(status=UNSATISFIABLE, backend="cpsat", stats=stats,
                           diagnostics=["No schedule satisfies every constraint (cpsat)."])
    return SolveResult(status=UNKNOWN, backend="cpsat", stats=stats,
                       diagnostics=[f"CP-SAT stopped with status {name}."])

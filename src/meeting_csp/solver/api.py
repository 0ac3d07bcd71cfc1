"""
Public entry points.

solve()          the exact solver's plain contract: list of dates or None
solve_problem()  Problem in, SolveResult out, with backend selection
"""

from __future__ import annotations

import datetime as dt
import time
from typing import Iterable, List, Optional

from ..logging_utils import get_logger
from ..models import DateConstraint, Problem
from .arcs import build_arcs
from .backtracking import backtrack, new_assignment
from .cpsat import solve_cpsat
from .domain import build_domains, domain_sizes
from .precheck import ensure_ok
from .propagation import arc_consistency, node_consistency
from .result import SATISFIED, UNSATISFIABLE, SolveResult

logger = get_logger(__name__)


def solve(meeting_count: int,
          range_start: dt.date,
          range_end: dt.date,
          constraints: Iterable[DateConstraint]) -> Optional[List[dt.date]]:
    """
    Find one date per meeting satisfying every constraint.

    Returns a list whose i-th element is meeting i's date, or None when
    no such schedule exists. Raises PrecheckError for malformed input.
    """
    problem = Problem(meeting_count, range_start, range_end, list(constraints))
    return _solve_backtracking(problem).assignment


def solve_problem(problem: Problem, backend: Optional[str] = None) -> SolveResult:
    backend = (backend or problem.solver.backend or "").lower()
    if backend == "backtracking":
        return _solve_backtracking(problem)
    if backend == "cpsat":
        return solve_cpsat(problem)
    raise ValueError(f"Unknown solver backend: {backend!r}")


def _solve_backtracking(problem: Problem) -> SolveResult:
    ensure_ok(problem)
    began = time.perf_counter()
    n = problem.meeting_count
    constraints = list(problem.constraints)

    domains = build_domains(n, problem.range_start, problem.range_end)
    stats = {"domain_sizes_initial": domain_sizes(domains)}

    stats["node_removed"] = node_consistency(domains, constraints)
    arcs = build_arcs(constraints)
    stats["arcs"] = len(arcs)
    stats["arc_revisions"] = arc_consistency(domains, constraints, arcs)
    stats["domain_sizes_filtered"] = domain_sizes(domains)
    logger.debug("filtered domain sizes: %s", stats["domain_sizes_filtered"])

    assignments = new_assignment(n)
    found = backtrack(assignments, domains, constraints, 0, stats)
    stats["wall_time_s"] = round(time.perf_counter() - began, 3)

    if found:
        logger.info("schedule found for %d meeting(s) after %d search node(s)",
                    n, stats["nodes"])
        return SolveResult(status=SATISFIED, assignment=assignments, stats=stats)

    diagnostics = ["No schedule satisfies every constraint."]
    empty = [m for m, d in enumerate(domains) if d.is_empty()]
    if empty:
        diagnostics.append(f"Filtering left meeting(s) {empty} with no candidate dates.")
    logger.info("no schedule exists for %d meeting(s)", n)
    return SolveResult(status=UNSATISFIABLE, stats=stats, diagnostics=diagnostics)

"""Exact meeting-date scheduling by constraint propagation and backtracking search."""

from meeting_csp.models import (BinaryDateConstraint, Operator, Problem,
    SolverParams, UnaryDateConstraint, parse_constraint)
from meeting_csp.solver.api import solve, solve_problem

__all__ = [
    "BinaryDateConstraint",
    "Operator",
    "Problem",
    "SolverParams",
    "UnaryDateConstraint",
    "parse_constraint",
    "solve",
    "solve_problem",
]

"""
Input checks that run before the solver is invoked.

A malformed problem (bad meeting index, negative meeting count) is a
caller bug and is reported as PrecheckError. It must never come back as
"unsatisfiable", which is reserved for well-formed but over-constrained
schedules.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Set, Tuple

from ..models import BinaryDateConstraint, Problem, UnaryDateConstraint


class PrecheckError(ValueError):
    """Raised by ensure_ok() when hard errors are present."""


def precheck(problem: Problem) -> Tuple[List[str], List[str]]:
    """Return (errors, warnings). errors = the problem is malformed."""
    errors:   List[str] = []
    warnings: List[str] = []

    n = problem.meeting_count
    if not isinstance(n, int) or isinstance(n, bool) or n < 0:
        errors.append(f"meeting_count must be a non-negative integer, got {n!r}.")
        return errors, warnings

    for label, value in (("range_start", problem.range_start),
                         ("range_end", problem.range_end)):
        if not isinstance(value, dt.date):
            errors.append(f"{label} must be a date, got {type(value).__name__}.")
    if errors:
        return errors, warnings

    if problem.range_start > problem.range_end and n > 0:
        warnings.append(
            f"range_start {problem.range_start} is after range_end "
            f"{problem.range_end}: every domain is empty, no schedule exists."
        )

    mentioned: Set[int] = set()
    for i, c in enumerate(problem.constraints):
        if not isinstance(c, (UnaryDateConstraint, BinaryDateConstraint)):
            errors.append(
                f"constraints[{i}] is a {type(c).__name__}, "
                f"not a unary or binary date constraint."
            )
            continue

        bad = [m for m in c.meetings
               if not isinstance(m, int) or not 0 <= m < n]
        if bad:
            errors.append(
                f"Constraint '{c}' references meeting(s) {bad} outside "
                f"[0, {n})."
            )
            continue
        mentioned.update(c.meetings)

        if isinstance(c, BinaryDateConstraint) and c.left == c.right:
            warnings.append(
                f"Constraint '{c}' relates meeting {c.left} to itself; "
                f"a unary constraint says the same more directly."
            )
        if isinstance(c, UnaryDateConstraint) and not (
                problem.range_start <= c.date <= problem.range_end):
            warnings.append(
                f"Constraint '{c}' uses a date outside "
                f"[{problem.range_start}, {problem.range_end}]."
            )

    free = sorted(set(range(n)) - mentioned)
    if free and problem.constraints:
        warnings.append(
            f"Meeting(s) {free} have no constraints and will get the "
            f"earliest date in range."
        )

    return errors, warnings


def ensure_ok(problem: Problem) -> None:
    errors, _ = precheck(problem)
    if errors:
        raise PrecheckError("\n".join(errors))

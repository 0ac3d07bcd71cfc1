"""Independent check that an assignment satisfies a constraint set."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence

from ..models import DateConstraint


def find_violations(assignment: Sequence[Optional[dt.date]],
                    constraints: Iterable[DateConstraint]) -> List[DateConstraint]:
    """Constraints broken by assignment. Unassigned (None) meetings count as violations."""
    broken: List[DateConstraint] = []
    for c in constraints:
        values = [assignment[m] for m in c.meetings]
        if any(v is None for v in values) or not c.is_satisfied_by(*values):
            broken.append(c)
    return broken


def is_solution(assignment: Optional[Sequence[Optional[dt.date]]],
                meeting_count: int,
                constraints: Iterable[DateConstraint]) -> bool:
    if assignment is None or len(assignment) != meeting_count:
        return False
    if any(d is None for d in assignment):
        return False
    return not find_violations(assignment, constraints)

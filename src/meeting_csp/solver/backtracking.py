"""
Depth-first assignment search over already-filtered domains.

Meetings are assigned in index order and each domain is tried in
ascending date order, so the first solution found is deterministic.
The search is exhaustive over the finite domains: it finds a solution
whenever one exists.

The search keeps its own stack of (candidates, position) per level
instead of recursing, so the number of meetings is not capped by
sys.getrecursionlimit(). It visits nodes in exactly the order the
recursive formulation would.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, List, MutableMapping, Optional

from ..models import DateConstraint
from .domain import MeetingDomain

Assignment = List[Optional[dt.date]]


def constraints_by_meeting(constraints: Iterable[DateConstraint],
                           meeting_count: int) -> List[List[DateConstraint]]:
    """Bucket constraints under every meeting they mention."""
    buckets: List[List[DateConstraint]] = [[] for _ in range(meeting_count)]
    for c in constraints:
        for m in set(c.meetings):
            buckets[m].append(c)
    return buckets


def is_consistent(assignments: Assignment,
                  constraints: Iterable[DateConstraint],
                  index: int) -> bool:
    """
    Check the date just placed at assignments[index] against every
    constraint that mentions index.

    Binary constraints whose other meeting is still unassigned cannot be
    checked yet and are skipped; they are checked when that meeting is
    assigned.
    """
    value = assignments[index]
    for c in constraints:
        if c.arity == 1:
            if c.meeting == index and not c.is_satisfied_by(value):
                return False
        elif index in (c.left, c.right):
            if assignments[c.other(index)] is None:
                continue
            if not c.is_satisfied_by(assignments[c.left], assignments[c.right]):
                return False
    return True


def backtrack(assignments: Assignment,
              domains: List[MeetingDomain],
              constraints: Iterable[DateConstraint],
              index: int = 0,
              stats: Optional[MutableMapping[str, Any]] = None) -> bool:
    """
    Fill assignments[index:] so every constraint holds.

    Returns True with assignments filled in, or False with every slot
    from index on reset to None. Slots before index are treated as
    fixed.
    """
    n = len(assignments)
    nodes = backtracks = 0
    try:
        if index >= n:
            return True

        related = constraints_by_meeting(constraints, n)
        candidates: List[List[dt.date]] = [[] for _ in range(n)]
        positions = [0] * n

        level = index
        candidates[level] = list(domains[level])
        while True:
            options = candidates[level]
            pos = positions[level]
            placed = False
            while pos < len(options):
                assignments[level] = options[pos]
                pos += 1
                nodes += 1
                if is_consistent(assignments, related[level], level):
                    placed = True
                    break
            positions[level] = pos

            if placed:
                level += 1
                if level == n:
                    return True
                candidates[level] = list(domains[level])
                positions[level] = 0
                continue

            # level exhausted: undo and resume the caller's next candidate
            assignments[level] = None
            backtracks += 1
            if level == index:
                return False
            level -= 1
    finally:
        if stats is not None:
            stats["nodes"] = stats.get("nodes", 0) + nodes
            stats["backtracks"] = stats.get("backtracks", 0) + backtracks


def new_assignment(meeting_count: int) -> Assignment:
    return [None] * meeting_count

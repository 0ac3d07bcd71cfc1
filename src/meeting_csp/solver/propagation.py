"""
Domain filtering that runs once, before search.

node_consistency  drops dates that break a unary constraint.
arc_consistency   AC-3: drops dates with no supporting partner in a
                  neighbouring domain, repeated until nothing changes.

Neither pass fails. An emptied domain is left empty and the search
that follows returns "unsatisfiable" on it straight away.

Worklist note:
  The textbook loop re-sweeps every arc after any productive sweep.
  Here only the arcs pointing into a domain that just shrank are
  queued again, which reaches the same fixed point with less work.
  Reference: Mackworth, A.K. "Consistency in Networks of Relations",
  Artificial Intelligence 8 (1977), AC-3.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional, Set

from ..logging_utils import get_logger
from ..models import DateConstraint
from .arcs import Arc, arcs_into, build_arcs
from .domain import MeetingDomain

logger = get_logger(__name__)


def node_consistency(domains: List[MeetingDomain],
                     constraints: Iterable[DateConstraint]) -> int:
    """Apply every unary constraint to its meeting's domain. Returns dates removed."""
    removed = 0
    for c in constraints:
        if c.arity != 1:
            continue
        domain = domains[c.meeting]
        removed += domain.retain({d for d in domain.values if c.is_satisfied_by(d)})
    logger.debug("node consistency removed %d date(s)", removed)
    return removed


def revise(domains: List[MeetingDomain], arc: Arc) -> bool:
    """Drop tail dates that no head date supports. True if anything was dropped."""
    tail = domains[arc.tail]
    satisfied = arc.constraint.is_satisfied_by
    if arc.tail == arc.head:
        # meeting related to itself: the only partner of t is t
        supported = {t for t in tail.values if satisfied(t, t)}
        return tail.retain(supported) > 0
    head = domains[arc.head].values
    supported = {t for t in tail.values if any(satisfied(t, h) for h in head)}
    return tail.retain(supported) > 0


def arc_consistency(domains: List[MeetingDomain],
                    constraints: Iterable[DateConstraint],
                    arcs: Optional[List[Arc]] = None) -> int:
    """
    Run AC-3 to a fixed point over all binary constraints.

    Returns the number of productive revisions. The domains are changed
    in place; the result is the same whatever order arcs are processed in.
    """
    if arcs is None:
        arcs = build_arcs(constraints)
    incoming = arcs_into(arcs)

    queue: Deque[Arc] = deque(arcs)
    queued: Set[Arc] = set(arcs)
    productive = 0

    while queue:
        arc = queue.popleft()
        queued.discard(arc)
        if not revise(domains, arc):
            continue
        productive += 1
        if domains[arc.tail].is_empty():
            logger.debug("domain of meeting %d emptied by arc %s", arc.tail, arc)

        # D_tail shrank: every arc that checks against D_tail may lose support.
        # The exact reverse arc is skipped since a dropped date supported nothing.
        reverse = arc.constraint.reverse()
        for other in incoming.get(arc.tail, ()):
            if other.tail == arc.head and other.constraint == reverse:
                continue
            if other not in queued:
                queue.append(other)
                queued.add(other)

    logger.debug("arc consistency: %d arc(s), %d productive revision(s)",
                 len(arcs), productive)
    return productive

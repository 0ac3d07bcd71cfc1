"""
Directed arcs for AC-3.

Each binary constraint c over (L, R) yields two arcs:
  Arc(L, R, c)             revises D_L against D_R
  Arc(R, L, c.reverse())   revises D_R against D_L
The reversed constraint keeps is_satisfied_by(tail_date, head_date)
argument order valid for both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..models import BinaryDateConstraint, DateConstraint


@dataclass(frozen=True)
class Arc:
    tail:       int
    head:       int
    constraint: BinaryDateConstraint

    def __str__(self) -> str:
        return f"({self.tail} -> {self.head})"


def build_arcs(constraints: Iterable[DateConstraint]) -> List[Arc]:
    """Both directions of every binary constraint, duplicates dropped, in input order."""
    arcs: Dict[Arc, None] = {}
    for c in constraints:
        if c.arity != 2:
            continue
        arcs.setdefault(Arc(c.left, c.right, c))
        arcs.setdefault(Arc(c.right, c.left, c.reverse()))
    return list(arcs)


def arcs_into(arcs: Iterable[Arc]) -> Dict[int, List[Arc]]:
    """Map meeting -> arcs whose head is that meeting."""
    incoming: Dict[int, List[Arc]] = {}
    for arc in arcs:
        incoming.setdefault(arc.head, []).append(arc)
    return incoming

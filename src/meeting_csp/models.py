"""
Data model layer for the meeting-date constraint solver.

Every domain object is a plain Python dataclass. Constraints are frozen
so they can live in sets and be used as parts of Arc keys.

Design note: meetings have no object of their own.
  A meeting is just its integer index in [0, meeting_count). Constraints
  reference meetings by index, and the solver keeps one domain and one
  assignment slot per index.

Constraint text form (used by the CLI and the JSON problem files):
  unary   "<meeting> <op> <YYYY-MM-DD>"    e.g. "1 == 2026-01-05"
  binary  "<meeting> <op> <meeting>"       e.g. "0 < 1"
"""

from __future__ import annotations

import datetime as dt
import enum
import operator
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union


class Operator(enum.Enum):
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    def holds(self, left: Any, right: Any) -> Any:
        """left <op> right. Dates give a bool, CP-SAT variables give a linear relation."""
        return _COMPARE[self](left, right)

    def flipped(self) -> "Operator":
        """Operator with the same meaning once the operands are swapped."""
        return _FLIP[self]

    @classmethod
    def parse(cls, text: str) -> "Operator":
        try:
            return cls(text.strip())
        except ValueError:
            raise ValueError(
                f"Unknown operator {text!r}; expected one of "
                f"{[o.value for o in cls]}"
            ) from None


_COMPARE = {
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
    Operator.LT: operator.lt,
    Operator.LE: operator.le,
    Operator.GT: operator.gt,
    Operator.GE: operator.ge,
}

_FLIP = {
    Operator.EQ: Operator.EQ,
    Operator.NE: Operator.NE,
    Operator.LT: Operator.GT,
    Operator.LE: Operator.GE,
    Operator.GT: Operator.LT,
    Operator.GE: Operator.LE,
}


@dataclass(frozen=True)
class UnaryDateConstraint:
    """meeting <op> fixed date, e.g. meeting 1 == 2026-01-05."""
    meeting: int
    op:      Operator
    date:    dt.date

    arity = 1

    @property
    def meetings(self) -> Tuple[int]:
        return (self.meeting,)

    def is_satisfied_by(self, value: dt.date) -> bool:
        return self.op.holds(value, self.date)

    def __str__(self) -> str:
        return f"{self.meeting} {self.op.value} {self.date.isoformat()}"


@dataclass(frozen=True)
class BinaryDateConstraint:
    """left <op> right over two meetings. Order matters: 0 < 1 is not 1 < 0."""
    left:  int
    op:    Operator
    right: int

    arity = 2

    @property
    def meetings(self) -> Tuple[int, int]:
        return (self.left, self.right)

    def is_satisfied_by(self, left_date: dt.date, right_date: dt.date) -> bool:
        return self.op.holds(left_date, right_date)

    def reverse(self) -> "BinaryDateConstraint":
        # "0 < 1" becomes "1 > 0"
        return BinaryDateConstraint(self.right, self.op.flipped(), self.left)

    def other(self, meeting: int) -> int:
        return self.right if meeting == self.left else self.left

    def __str__(self) -> str:
        return f"{self.left} {self.op.value} {self.right}"


DateConstraint = Union[UnaryDateConstraint, BinaryDateConstraint]


def parse_constraint(text: str) -> DateConstraint:
    """Parse "0 < 1" or "0 == 2026-01-05" into a constraint."""
    parts = text.split()
    if len(parts) != 3:
        raise ValueError(
            f"Constraint {text!r} must have the form '<meeting> <op> <meeting|date>'"
        )
    lhs, op_text, rhs = parts
    try:
        meeting = int(lhs)
    except ValueError:
        raise ValueError(f"Constraint {text!r}: left side must be a meeting index") from None
    op = Operator.parse(op_text)

    if rhs.lstrip("-").isdigit():
        return BinaryDateConstraint(meeting, op, int(rhs))
    try:
        date = dt.date.fromisoformat(rhs)
    except ValueError:
        raise ValueError(
            f"Constraint {text!r}: right side must be a meeting index or YYYY-MM-DD date"
        ) from None
    return UnaryDateConstraint(meeting, op, date)


BACKENDS = ("backtracking", "cpsat")


@dataclass
class SolverParams:
    backend: str = "backtracking"
    # Only read by the cpsat backend. 0 = use all available cores.
    max_time_in_seconds: float = 10.0
    num_workers:         int   = 0


@dataclass
class Problem:
    meeting_count: int
    range_start:   dt.date
    range_end:     dt.date
    constraints:   List[DateConstraint] = field(default_factory=list)
    meta:          Dict[str, Any]       = field(default_factory=dict)
    solver:        SolverParams         = field(default_factory=SolverParams)

    @property
    def range_days(self) -> int:
        """Number of dates in the inclusive range, 0 when inverted."""
        return max((self.range_end - self.range_start).days + 1, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta":          dict(self.meta),
            "meeting_count": self.meeting_count,
            "range_start":   self.range_start.isoformat(),
            "range_end":     self.range_end.isoformat(),
            "constraints":   [str(c) for c in self.constraints],
            "solver": {
                "backend":             self.solver.backend,
                "max_time_in_seconds": self.solver.max_time_in_seconds,
                "num_workers":         self.solver.num_workers,
            },
        }

    def validate(self) -> None:
        if self.meeting_count < 0:
            raise ValueError("meeting_count must be >= 0")
        if self.solver.backend not in BACKENDS:
            raise ValueError(
                f"solver.backend must be one of {list(BACKENDS)}, "
                f"got {self.solver.backend!r}"
            )
        if self.solver.max_time_in_seconds <= 0:
            raise ValueError("solver.max_time_in_seconds must be > 0")
        if self.solver.num_workers < 0:
            raise ValueError("solver.num_workers must be >= 0")

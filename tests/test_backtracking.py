"""Tests for the local consistency check and the backtracking search."""
import datetime as dt
import sys

from meeting_csp.dates import date_range
from meeting_csp.models import BinaryDateConstraint, Operator, UnaryDateConstraint
from meeting_csp.solver.backtracking import backtrack, is_consistent, new_assignment
from meeting_csp.solver.domain import build_domains
from meeting_csp.solver.verify import find_violations, is_solution

START = dt.date(2026, 6, 1)
DAYS = list(date_range(START, START + dt.timedelta(days=3)))   # 4 days


def test_unassigned_partner_is_skipped() -> None:
    c = BinaryDateConstraint(0, Operator.GT, 1)
    assignments = [DAYS[0], None]
    assert is_consistent(assignments, [c], 0)


def test_binary_checked_in_constraint_order() -> None:
    c = BinaryDateConstraint(0, Operator.LT, 1)
    assert is_consistent([DAYS[0], DAYS[1]], [c], 1)
    assert not is_consistent([DAYS[1], DAYS[0]], [c], 1)
    assert not is_consistent([DAYS[1], DAYS[0]], [c], 0)


def test_unary_rechecked() -> None:
    c = UnaryDateConstraint(0, Operator.EQ, DAYS[2])
    assert not is_consistent([DAYS[1]], [c], 0)
    assert is_consistent([DAYS[2]], [c], 0)


def test_constraints_on_other_meetings_ignored() -> None:
    c = UnaryDateConstraint(1, Operator.EQ, DAYS[2])
    assert is_consistent([DAYS[0], DAYS[0]], [c], 0)


def test_first_solution_in_ascending_order() -> None:
    constraints = [BinaryDateConstraint(0, Operator.NE, 1)]
    domains = build_domains(2, DAYS[0], DAYS[-1])
    assignments = new_assignment(2)
    assert backtrack(assignments, domains, constraints)
    assert assignments == [DAYS[0], DAYS[1]]


def test_search_backtracks_past_dead_end() -> None:
    # meeting 0 = DAYS[0] looks fine until meeting 2 has nowhere to go
    constraints = [
        BinaryDateConstraint(0, Operator.LT, 1),
        BinaryDateConstraint(2, Operator.LT, 0),
    ]
    domains = build_domains(3, DAYS[0], DAYS[-1])
    assignments = new_assignment(3)
    stats = {}
    assert backtrack(assignments, domains, constraints, stats=stats)
    assert is_solution(assignments, 3, constraints)
    assert assignments == [DAYS[1], DAYS[2], DAYS[0]]
    assert stats["backtracks"] > 0


def test_failure_resets_every_slot() -> None:
    constraints = [
        BinaryDateConstraint(0, Operator.LT, 1),
        BinaryDateConstraint(1, Operator.LT, 2),
        BinaryDateConstraint(2, Operator.LT, 0),
    ]
    domains = build_domains(3, DAYS[0], DAYS[-1])
    assignments = new_assignment(3)
    assert not backtrack(assignments, domains, constraints)
    assert assignments == [None, None, None]


def test_empty_domain_fails_immediately() -> None:
    domains = build_domains(2, DAYS[0], DAYS[-1])
    domains[1].retain(set())
    assignments = new_assignment(2)
    stats = {}
    assert not backtrack(assignments, domains, [], stats=stats)
    assert assignments == [None, None]
    # only meeting 0's dates were tried
    assert stats["nodes"] == len(DAYS)


def test_start_index_keeps_earlier_slots() -> None:
    constraints = [BinaryDateConstraint(0, Operator.LT, 1)]
    domains = build_domains(2, DAYS[0], DAYS[-1])
    assignments = [DAYS[2], None]
    assert backtrack(assignments, domains, constraints, index=1)
    assert assignments == [DAYS[2], DAYS[3]]


def test_no_meetings_is_trivially_solved() -> None:
    assignments = new_assignment(0)
    assert backtrack(assignments, [], [])
    assert assignments == []


def test_depth_beyond_recursion_limit() -> None:
    n = sys.getrecursionlimit() + 200
    constraints = [BinaryDateConstraint(i, Operator.LE, i + 1) for i in range(n - 1)]
    domains = build_domains(n, DAYS[0], DAYS[1])
    assignments = new_assignment(n)
    assert backtrack(assignments, domains, constraints)
    assert assignments == [DAYS[0]] * n


def test_find_violations_lists_broken_constraints() -> None:
    ok = BinaryDateConstraint(0, Operator.LT, 1)
    bad = UnaryDateConstraint(1, Operator.EQ, DAYS[0])
    assert find_violations([DAYS[0], DAYS[1]], [ok, bad]) == [bad]
    assert not is_solution([DAYS[0], None], 2, [ok])
    assert not is_solution(None, 2, [ok])

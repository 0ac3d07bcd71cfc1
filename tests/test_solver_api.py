"""End-to-end tests for solve() and solve_problem() with the exact solver."""
import datetime as dt
import itertools
import random

import pytest

from meeting_csp.dates import date_range
from meeting_csp.models import (BinaryDateConstraint, Operator, Problem,
    UnaryDateConstraint, parse_constraint)
from meeting_csp.solver.api import solve, solve_problem
from meeting_csp.solver.precheck import PrecheckError
from meeting_csp.solver.verify import find_violations

START = dt.date(2026, 1, 5)
END = dt.date(2026, 1, 9)      # 5 consecutive days
DAYS = list(date_range(START, END))


def _brute_force(n, start, end, constraints):
    """Every satisfying assignment, by enumeration."""
    days = list(date_range(start, end))
    return [list(combo) for combo in itertools.product(days, repeat=n)
            if not find_violations(combo, constraints)]


def _random_constraints(rng, n, days, count):
    ops = list(Operator)
    out = []
    for _ in range(count):
        if n > 1 and rng.random() < 0.7:
            left, right = rng.sample(range(n), 2)
            out.append(BinaryDateConstraint(left, rng.choice(ops), right))
        else:
            out.append(UnaryDateConstraint(rng.randrange(n), rng.choice(ops),
                                           rng.choice(days)))
    return out


def test_before_and_last_day() -> None:
    constraints = {
        BinaryDateConstraint(0, Operator.LT, 1),
        UnaryDateConstraint(1, Operator.EQ, END),
    }
    result = solve(2, START, END, constraints)
    assert result is not None
    assert result[1] == END
    assert result[0] < END
    assert find_violations(result, constraints) == []


def test_same_forced_day_with_before_is_unsatisfiable() -> None:
    day = DAYS[2]
    constraints = {
        UnaryDateConstraint(0, Operator.EQ, day),
        UnaryDateConstraint(1, Operator.EQ, day),
        BinaryDateConstraint(0, Operator.LT, 1),
    }
    assert solve(2, START, END, constraints) is None


def test_three_day_chain_is_filtered_before_search() -> None:
    end = DAYS[2]
    constraints = [BinaryDateConstraint(0, Operator.LT, 1),
                   BinaryDateConstraint(1, Operator.LT, 2)]
    result = solve_problem(Problem(3, START, end, constraints))
    assert result.satisfied
    assert result.assignment == DAYS[:3]
    assert result.stats["domain_sizes_filtered"] == [1, 1, 1]
    # a single value per domain means no dead ends at all
    assert result.stats["backtracks"] == 0
    assert _brute_force(3, START, end, constraints) == [DAYS[:3]]


def test_zero_meetings_returns_empty_list() -> None:
    assert solve(0, START, END, set()) == []


def test_single_day_range() -> None:
    constraints = [BinaryDateConstraint(0, Operator.EQ, 1),
                   BinaryDateConstraint(1, Operator.LE, 2)]
    assert solve(3, START, START, constraints) == [START] * 3


def test_single_day_range_with_strict_order_fails() -> None:
    assert solve(2, START, START, [BinaryDateConstraint(0, Operator.LT, 1)]) is None


def test_inverted_range_is_unsatisfiable_not_an_error() -> None:
    assert solve(2, END, START, []) is None
    assert solve(0, END, START, []) == []


def test_no_constraints_picks_earliest_dates() -> None:
    assert solve(3, START, END, []) == [START] * 3


def test_accepts_any_iterable_of_constraints() -> None:
    gen = (parse_constraint(t) for t in ["0 < 1", "1 < 2"])
    assert solve(3, START, END, gen) == DAYS[:3]


@pytest.mark.parametrize("constraints", [
    [BinaryDateConstraint(0, Operator.LT, 2)],
    [UnaryDateConstraint(-1, Operator.EQ, START)],
    ["0 < 1"],
])
def test_malformed_input_is_a_precheck_error(constraints) -> None:
    with pytest.raises(PrecheckError):
        solve(2, START, END, constraints)


def test_meeting_related_to_itself_solves() -> None:
    constraints = [BinaryDateConstraint(0, Operator.LE, 0),
                   BinaryDateConstraint(1, Operator.EQ, 1),
                   BinaryDateConstraint(0, Operator.LT, 1)]
    assert solve(2, START, END, constraints) == [DAYS[0], DAYS[1]]


@pytest.mark.parametrize("op", [Operator.LT, Operator.GT, Operator.NE])
def test_impossible_relation_to_itself_is_unsatisfiable(op: Operator) -> None:
    result = solve_problem(Problem(1, START, END, [BinaryDateConstraint(0, op, 0)]))
    assert result.status == "UNSATISFIABLE"
    assert result.stats["domain_sizes_filtered"] == [0]


def test_negative_meeting_count_is_a_precheck_error() -> None:
    with pytest.raises(PrecheckError):
        solve(-1, START, END, [])


def test_unsatisfiable_result_carries_diagnostics() -> None:
    problem = Problem(2, START, END, [
        UnaryDateConstraint(0, Operator.EQ, START),
        UnaryDateConstraint(0, Operator.EQ, END),
    ])
    result = solve_problem(problem)
    assert result.status == "UNSATISFIABLE"
    assert result.assignment is None
    assert any("[0]" in d for d in result.diagnostics)


def test_unknown_backend_raises() -> None:
    with pytest.raises(ValueError, match="backend"):
        solve_problem(Problem(1, START, END), backend="genetic")


def test_repeat_solves_are_identical() -> None:
    constraints = [BinaryDateConstraint(0, Operator.NE, 1),
                   BinaryDateConstraint(2, Operator.GT, 0),
                   UnaryDateConstraint(1, Operator.LE, DAYS[1])]
    first = solve(3, START, END, constraints)
    assert all(solve(3, START, END, constraints) == first for _ in range(5))


@pytest.mark.parametrize("seed", range(40))
def test_matches_brute_force(seed: int) -> None:
    rng = random.Random(seed)
    n = rng.randint(1, 3)
    end = START + dt.timedelta(days=rng.randint(0, 3))
    constraints = _random_constraints(rng, n, list(date_range(START, end)),
                                      rng.randint(0, 5))

    result = solve(n, START, end, constraints)
    expected = _brute_force(n, START, end, constraints)

    if expected:
        assert result is not None
        assert find_violations(result, constraints) == []
        # ascending search order means the lexicographically first solution
        assert result == min(expected)
    else:
        assert result is None

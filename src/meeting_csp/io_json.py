"""
JSON serialisation / deserialisation for Problem and SolveResult objects.

Uses only the Python standard-library json module. Structural
validation happens before any domain object is built, so a broken file
is reported as ProblemFileError rather than a stray KeyError.

Problem file layout:
  {
    "meta":          {...},                     optional
    "meeting_count": 3,
    "range_start":   "2026-01-05",
    "range_end":     "2026-01-09",
    "constraints":   ["0 < 1", "1 == 2026-01-09"],
    "solver":        {"backend": "backtracking"} optional
  }
Constraints may also be written as objects:
  {"meeting": 1, "op": "==", "date": "2026-01-09"}
  {"left": 0, "op": "<", "right": 1}

Reference: Python docs — json
https://docs.python.org/3/library/json.html
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from meeting_csp.dates import parse_date
from meeting_csp.models import (BinaryDateConstraint, DateConstraint, Operator,
    Problem, SolverParams, UnaryDateConstraint, parse_constraint)
from meeting_csp.solver.result import SolveResult


class ProblemFileError(ValueError):
    """Raised when the problem JSON is structurally invalid."""


def _require(obj: Dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ProblemFileError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _as_list(obj: Any, ctx: str) -> List[Any]:
    if not isinstance(obj, list):
        raise ProblemFileError(f"Expected a JSON array in {ctx}, got {type(obj).__name__}")
    return obj


def _as_dict(obj: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise ProblemFileError(
            f"Expected a JSON object in {ctx}, got {type(obj).__name__}"
        )
    return obj


def _as_int(obj: Any, ctx: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise ProblemFileError(f"Expected an integer in {ctx}, got {obj!r}")
    return obj


def _constraint(raw: Any, ctx: str) -> DateConstraint:
    try:
        if isinstance(raw, str):
            return parse_constraint(raw)
        raw = _as_dict(raw, ctx)
        op = Operator.parse(str(_require(raw, "op", ctx)))
        if "date" in raw:
            return UnaryDateConstraint(
                meeting = _as_int(_require(raw, "meeting", ctx), f"{ctx}.meeting"),
                op      = op,
                date    = parse_date(raw["date"]),
            )
        return BinaryDateConstraint(
            left  = _as_int(_require(raw, "left",  ctx), f"{ctx}.left"),
            op    = op,
            right = _as_int(_require(raw, "right", ctx), f"{ctx}.right"),
        )
    except ProblemFileError:
        raise
    except ValueError as e:
        raise ProblemFileError(f"{ctx}: {e}") from e


def problem_from_dict(raw: Any) -> Problem:
    raw  = _as_dict(raw, "root")
    meta = _as_dict(raw.get("meta") or {}, "meta")

    try:
        range_start = parse_date(_require(raw, "range_start", "root"))
        range_end   = parse_date(_require(raw, "range_end",   "root"))
    except ProblemFileError:
        raise
    except ValueError as e:
        raise ProblemFileError(str(e)) from e

    constraints_raw = _as_list(raw.get("constraints", []), "constraints")
    solver_raw      = _as_dict(raw.get("solver") or {}, "solver")

    try:
        solver = SolverParams(
            backend             = str(solver_raw.get("backend", "backtracking")),
            max_time_in_seconds = float(solver_raw.get("max_time_in_seconds", 10.0)),
            num_workers         = int(solver_raw.get("num_workers", 0)),
        )
    except (TypeError, ValueError) as e:
        raise ProblemFileError(f"Invalid value in solver: {e}") from e

    problem = Problem(
        meeting_count = _as_int(_require(raw, "meeting_count", "root"), "meeting_count"),
        range_start   = range_start,
        range_end     = range_end,
        constraints   = [_constraint(c, f"constraints[{i}]")
                         for i, c in enumerate(constraints_raw)],
        meta          = meta,
        solver        = solver,
    )
    try:
        problem.validate()
    except ValueError as e:
        raise ProblemFileError(str(e)) from e
    return problem


def load_problem(path: str | Path) -> Problem:
    """Load and validate a Problem from a JSON file."""
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ProblemFileError(f"Invalid JSON in {path}: {e}") from e
    return problem_from_dict(raw)


def save_problem(problem: Problem, path: str | Path) -> None:
    """Serialise a Problem to JSON, creating parent directories if needed."""
    problem.validate()
    _write(problem.to_dict(), path)


def save_result(result: SolveResult, path: str | Path) -> None:
    _write(result.to_dict(), path)


def _write(data: Dict[str, Any], path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)

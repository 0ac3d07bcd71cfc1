"""
Command-line interface for the meeting-date constraint solver.

Usage examples:
    python -m meeting_csp.cli --problem examples/week.json
    python -m meeting_csp.cli --problem examples/week.json --out result.json
    python -m meeting_csp.cli --problem examples/week.json --backend cpsat

Exit codes:
    0  every meeting got a date
    1  bad arguments, unreadable problem file, or precheck found blocking errors
    2  no schedule exists (or CP-SAT gave up before deciding)
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from meeting_csp.io_json import ProblemFileError, load_problem, save_result
from meeting_csp.logging_utils import set_verbose
from meeting_csp.models import BACKENDS
from meeting_csp.solver.api import solve_problem
from meeting_csp.solver.precheck import PrecheckError, precheck


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Meeting date constraint solver — command-line mode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  meeting-csp --problem week.json\n"
            "  meeting-csp --problem week.json --out result.json --backend cpsat\n"
        ),
    )
    parser.add_argument("--problem", required=True, metavar="FILE",
                        help="path to the problem JSON")
    parser.add_argument("--out",     default=None,  metavar="FILE",
                        help="write result JSON to this path (optional)")
    parser.add_argument(
        "--backend",
        default=None,
        choices=list(BACKENDS),
        help=(
            "solver backend  "
            "[backtracking = node/arc consistency + backtracking search, "
            "cpsat = OR-Tools CP-SAT cross-check]  "
            "(default: the problem file's solver.backend)"
        ),
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log solver phases at DEBUG level")
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    # ── 1. load problem ───────────────────────────────────────────────────────
    try:
        problem = load_problem(args.problem)
    except FileNotFoundError:
        print(f"[ERROR] File not found: {args.problem}", file=sys.stderr)
        sys.exit(1)
    except ProblemFileError as e:
        print(f"[ERROR] Could not load problem: {e}", file=sys.stderr)
        sys.exit(1)

    # ── 2. precheck — reject malformed input before it reaches the solver ─────
    errors, warnings = precheck(problem)
    for w in warnings:
        print(f"[WARNING] {w}")

    if errors:
        print(
            f"\n[ERROR] {len(errors)} precheck error(s) found — "
            "the problem cannot be solved until these are fixed:\n",
            file=sys.stderr,
        )
        for i, err in enumerate(errors, 1):
            print(f"  {i}. {err}", file=sys.stderr)
        sys.exit(1)

    # ── 3. solve ──────────────────────────────────────────────────────────────
    backend = args.backend or problem.solver.backend
    print(f"Running solver ({backend})…")
    try:
        result = solve_problem(problem, backend)
    except PrecheckError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    # ── 4. print summary ──────────────────────────────────────────────────────
    print(f"\nStatus : {result.status}")
    for k, v in result.stats.items():
        print(f"  {k}: {v}")
    for d in result.diagnostics:
        print(f"[DIAG] {d}")

    if result.assignment is not None:
        print(f"\nSchedule ({len(result.assignment)} meetings):")
        for m, day in enumerate(result.assignment):
            print(f"  meeting {m:>3}  {day.isoformat()}  {day:%A}")

    # ── 5. write output file (optional) ──────────────────────────────────────
    if args.out:
        save_result(result, args.out)
        print(f"\nResult written to: {args.out}")

    sys.exit(0 if result.satisfied else 2)


if __name__ == "__main__":
    main()

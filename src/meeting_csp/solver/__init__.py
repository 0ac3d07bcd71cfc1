from meeting_csp.solver.precheck import PrecheckError
from meeting_csp.solver.result import SolveResult

__all__ = ["PrecheckError", "SolveResult"]

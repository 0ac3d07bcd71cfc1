from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SATISFIED     = "SATISFIED"
UNSATISFIABLE = "UNSATISFIABLE"
UNKNOWN       = "UNKNOWN"


@dataclass
class SolveResult:
    status:      str                        # SATISFIED/UNSATISFIABLE/UNKNOWN
    assignment:  Optional[List[dt.date]] = None
    backend:     str                     = "backtracking"
    diagnostics: List[str]               = field(default_factory=list)
    stats:       Dict[str, Any]          = field(default_factory=dict)

    @property
    def satisfied(self) -> bool:
        return self.status == SATISFIED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status":      self.status,
            "backend":     self.backend,
            "assignment":  ([d.isoformat() for d in self.assignment]
                            if self.assignment is not None else None),
            "diagnostics": list(self.diagnostics),
            "stats":       dict(self.stats),
        }

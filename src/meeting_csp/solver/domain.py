"""
Per-meeting candidate date sets.

The solver keeps one MeetingDomain per meeting in a plain list indexed
by meeting number. Propagation mutates them in place; search only reads.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Iterator, List, Set

from ..dates import date_range


class MeetingDomain:
    """Set of dates still possible for one meeting. Only ever shrinks."""

    __slots__ = ("values",)

    def __init__(self, values: Iterable[dt.date] = ()) -> None:
        self.values: Set[dt.date] = set(values)

    def __iter__(self) -> Iterator[dt.date]:
        # ascending so search order does not depend on set hashing
        return iter(sorted(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def __repr__(self) -> str:
        if not self.values:
            return "MeetingDomain(empty)"
        return (f"MeetingDomain({len(self.values)} dates, "
                f"{min(self.values)}..{max(self.values)})")

    def is_empty(self) -> bool:
        return not self.values

    def retain(self, keep: Set[dt.date]) -> int:
        """Intersect with keep in place and return how many dates were removed."""
        before = len(self.values)
        self.values &= keep
        return before - len(self.values)


def build_domains(meeting_count: int, start: dt.date, end: dt.date) -> List[MeetingDomain]:
    """One independent full-range domain per meeting."""
    full = list(date_range(start, end))
    return [MeetingDomain(full) for _ in range(meeting_count)]


def domain_sizes(domains: List[MeetingDomain]) -> List[int]:
    return [len(d) for d in domains]

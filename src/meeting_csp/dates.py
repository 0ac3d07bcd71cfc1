"""Calendar helpers: inclusive date ranges and ISO date parsing."""

from __future__ import annotations

import datetime as dt
from typing import Iterator, Union

ONE_DAY = dt.timedelta(days=1)


def date_range(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield every date from start to end, both inclusive. Empty if start > end."""
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def parse_date(value: Union[str, dt.date]) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid date {value!r}; expected YYYY-MM-DD") from None

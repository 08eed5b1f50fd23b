from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Tuple

from .date_rules import add_days
from .models import CalendarDay, Holiday

GRID_CELLS = 42  # 6 weeks x 7 days
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _grid_start(year: int, month: int) -> date:
    first = date(year, month, 1)
    # Sunday-first grid; date.weekday() has Monday == 0
    leading = (first.weekday() + 1) % 7
    return add_days(first, -leading)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1


def month_grid(year: int, month: int, holidays: List[Holiday]) -> List[CalendarDay]:
    """
    Lay out `month` as 42 consecutive days starting on a Sunday.

    Filler days from the neighbouring months are included for shape only and
    never carry holidays.
    """
    by_date: Dict[date, List[Holiday]] = defaultdict(list)
    for h in holidays:
        by_date[h.date].append(h)

    start = _grid_start(year, month)
    days: List[CalendarDay] = []
    for i in range(GRID_CELLS):
        d = add_days(start, i)
        in_month = d.month == month and d.year == year
        days.append(
            CalendarDay(
                date=d,
                is_current_month=in_month,
                holidays=tuple(by_date.get(d, [])) if in_month else (),
            )
        )
    return days


def grid_weeks(days: List[CalendarDay]) -> List[List[CalendarDay]]:
    return [days[i:i + 7] for i in range(0, len(days), 7)]

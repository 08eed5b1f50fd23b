"""
Calendar arithmetic shared by the NZ holiday rules.

Everything here is a plain function of its arguments; weekdays use the
datetime convention (Monday == 0 ... Sunday == 6).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Optional, Tuple

MONDAY = 0
TUESDAY = 1
SATURDAY = 5
SUNDAY = 6

# Matariki follows the maramataka and is set by gazette, so there is no formula.
MATARIKI_DATES: Dict[int, date] = {
    2023: date(2023, 7, 14),
    2024: date(2024, 6, 28),
    2025: date(2025, 6, 20),
    2026: date(2026, 7, 10),
    2027: date(2027, 6, 25),
    2028: date(2028, 7, 14),
}


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def mondayise(d: date) -> date:
    """Move a Saturday or Sunday to the following Monday."""
    weekday = d.weekday()
    if weekday == SUNDAY:
        return add_days(d, 1)
    if weekday == SATURDAY:
        return add_days(d, 2)
    return d


def observe_pair(first: date, second: date) -> Tuple[date, date]:
    """
    Observed dates for two consecutive holidays (New Year, Christmas).

    Each is Mondayised; if the second would then land on or before the first,
    it takes the day after the first's observed date.
    """
    first_observed = mondayise(first)
    second_observed = mondayise(second)
    if second_observed <= first_observed:
        second_observed = add_days(first_observed, 1)
    return first_observed, second_observed


def easter_sunday(year: int) -> date:
    """Anonymous Gregorian algorithm (Meeus/Jones/Butcher)."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """
    The n-th `weekday` of `month` (n >= 1).

    Callers only ask for occurrences that exist (at most the 4th); an n past
    the end of the month silently rolls into the next month.
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return add_days(first, offset + (n - 1) * 7)


def first_weekday_on_or_after(d: date, weekday: int) -> date:
    return add_days(d, (weekday - d.weekday()) % 7)


def matariki_date(year: int) -> Optional[date]:
    return MATARIKI_DATES.get(year)

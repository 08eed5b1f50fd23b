from __future__ import annotations

from datetime import date
from typing import List, Optional

from .date_rules import (
    MONDAY,
    add_days,
    easter_sunday,
    matariki_date,
    mondayise,
    nth_weekday,
    observe_pair,
)
from .models import Holiday, HolidayType, RegionId
from .regional_rules import labour_day, regional_anniversaries
from .school_terms import school_holidays


def _public(key: str, name: str, d: date, year: int) -> Holiday:
    return Holiday(id=f"{key}-{year}", name=name, date=d, type=HolidayType.PUBLIC)


def national_holidays(year: int, easter: Optional[date] = None) -> List[Holiday]:
    """
    National public holidays for `year`, in calendar order.
    """
    if easter is None:
        easter = easter_sunday(year)

    ny1, ny2 = observe_pair(date(year, 1, 1), date(year, 1, 2))
    xmas, boxing = observe_pair(date(year, 12, 25), date(year, 12, 26))

    holidays = [
        _public("ny1", "New Year's Day", ny1, year),
        _public("ny2", "Day after New Year's Day", ny2, year),
        _public("waitangi", "Waitangi Day", mondayise(date(year, 2, 6)), year),
        _public("goodfri", "Good Friday", add_days(easter, -2), year),
        _public("eastermon", "Easter Monday", add_days(easter, 1), year),
        _public("anzac", "ANZAC Day", mondayise(date(year, 4, 25)), year),
        _public("kings", "King's Birthday", nth_weekday(year, 6, MONDAY, 1), year),
    ]

    matariki = matariki_date(year)
    if matariki is not None:
        holidays.append(_public("matariki", "Matariki", matariki, year))

    holidays += [
        _public("labour", "Labour Day", labour_day(year), year),
        _public("xmas", "Christmas Day", xmas, year),
        _public("boxing", "Boxing Day", boxing, year),
    ]
    return holidays


def year_holidays(year: int) -> List[Holiday]:
    """
    Return every NZ public, regional and school holiday for the given year.

    Order is stable: national holidays, then regional anniversaries, then
    school holiday days.
    """
    easter = easter_sunday(year)
    return (
        national_holidays(year, easter)
        + regional_anniversaries(year, easter)
        + school_holidays(year, easter)
    )


def filter_holidays_for_region(holidays: List[Holiday], region: Optional[RegionId]) -> List[Holiday]:
    """
    Holidays observed in `region`: everything nationwide plus the regional
    holidays listing it. With no region only nationwide holidays are kept.
    """
    if region is None:
        return [h for h in holidays if h.is_nationwide]
    return [h for h in holidays if h.applies_to(region)]


def holidays_between(holidays: List[Holiday], start: date, end: date) -> List[Holiday]:
    return [h for h in holidays if start <= h.date <= end]

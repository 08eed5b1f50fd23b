from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

from .date_rules import (
    MONDAY,
    TUESDAY,
    add_days,
    first_weekday_on_or_after,
    nth_weekday,
)
from .models import Holiday, HolidayType, RegionId


@dataclass(frozen=True)
class AnniversaryRule:
    key: str
    name: str
    region_ids: Tuple[RegionId, ...]
    # (year, easter_sunday) -> observed date
    resolve: Callable[[int, date], date]
    notes: str = ""


def _fixed(month: int, day: int) -> Callable[[int, date], date]:
    # Statute says "Monday nearest"; the raw date is used as a placeholder.
    return lambda year, easter: date(year, month, day)


def labour_day(year: int) -> date:
    return nth_weekday(year, 10, MONDAY, 4)


def _canterbury_show_day(year: int, easter: date) -> date:
    first_tuesday = first_weekday_on_or_after(date(year, 11, 1), TUESDAY)
    return add_days(first_tuesday, 10)


ANNIVERSARY_RULES: List[AnniversaryRule] = [
    AnniversaryRule(
        key="well-ann",
        name="Wellington Anniversary",
        region_ids=(RegionId.WELLINGTON, RegionId.MANAWATU_WHANGANUI),
        resolve=_fixed(1, 22),
        notes="Monday nearest 22 January (raw date used)",
    ),
    AnniversaryRule(
        key="auck-ann",
        name="Auckland Anniversary",
        region_ids=(
            RegionId.AUCKLAND,
            RegionId.NORTHLAND,
            RegionId.WAIKATO,
            RegionId.BAY_OF_PLENTY,
            RegionId.GISBORNE,
        ),
        resolve=_fixed(1, 29),
        notes="Monday nearest 29 January (raw date used)",
    ),
    AnniversaryRule(
        key="nel-ann",
        name="Nelson Anniversary",
        region_ids=(RegionId.NELSON, RegionId.TASMAN),
        resolve=_fixed(2, 1),
        notes="Monday nearest 1 February (raw date used)",
    ),
    AnniversaryRule(
        key="otago-ann",
        name="Otago Anniversary",
        region_ids=(RegionId.OTAGO,),
        resolve=_fixed(3, 23),
        notes="Monday nearest 23 March (raw date used)",
    ),
    AnniversaryRule(
        key="south-ann",
        name="Southland Anniversary",
        region_ids=(RegionId.SOUTHLAND,),
        resolve=lambda year, easter: add_days(easter, 2),
        notes="Easter Tuesday",
    ),
    AnniversaryRule(
        key="tara-ann",
        name="Taranaki Anniversary",
        region_ids=(RegionId.TARANAKI,),
        resolve=lambda year, easter: nth_weekday(year, 3, MONDAY, 2),
        notes="Second Monday in March",
    ),
    AnniversaryRule(
        key="hb-ann",
        name="Hawke's Bay Anniversary",
        region_ids=(RegionId.HAWKES_BAY,),
        resolve=lambda year, easter: add_days(labour_day(year), -3),
        notes="Friday before Labour Day",
    ),
    AnniversaryRule(
        key="marl-ann",
        name="Marlborough Anniversary",
        region_ids=(RegionId.MARLBOROUGH,),
        resolve=_fixed(11, 1),
        notes="Monday nearest 1 November (raw date used)",
    ),
    AnniversaryRule(
        key="cant-ann",
        name="Canterbury Anniversary",
        region_ids=(RegionId.CANTERBURY,),
        resolve=_canterbury_show_day,
        notes="Show Day: Friday of the week after the first Tuesday in November",
    ),
    AnniversaryRule(
        key="west-ann",
        name="Westland Anniversary",
        region_ids=(RegionId.WEST_COAST,),
        resolve=_fixed(12, 1),
        notes="Monday nearest 1 December (raw date used)",
    ),
]


def regional_anniversaries(year: int, easter: date) -> List[Holiday]:
    return [
        Holiday(
            id=f"{rule.key}-{year}",
            name=rule.name,
            date=rule.resolve(year, easter),
            type=HolidayType.REGIONAL,
            region_ids=rule.region_ids,
        )
        for rule in ANNIVERSARY_RULES
    ]


def rule_for_region(region: RegionId) -> Optional[AnniversaryRule]:
    for rule in ANNIVERSARY_RULES:
        if region in rule.region_ids:
            return rule
    return None


def regions_without_anniversary() -> List[RegionId]:
    return [r for r in RegionId if rule_for_region(r) is None]


def match_regional_holidays(holidays: List[Holiday], region: RegionId) -> List[Holiday]:
    """Regional holidays from `holidays` that are observed in `region`."""
    return [
        h for h in holidays
        if h.type is HolidayType.REGIONAL and h.region_ids and region in h.region_ids
    ]

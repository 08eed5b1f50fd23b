from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from .date_rules import add_days
from .models import Holiday, HolidayType


@dataclass(frozen=True)
class SchoolBreak:
    name: str
    start: date
    end: date  # inclusive

    @property
    def slug(self) -> str:
        return "-".join(self.name.lower().split())

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def school_breaks(year: int, easter: date) -> List[SchoolBreak]:
    """
    Approximate school holiday windows for `year`.

    Term 1 is anchored on Easter; the rest are fixed windows. The summer break
    runs into January but is cut at 31 December so the year stays self-contained.
    """
    t1_start = add_days(easter, 14)
    return [
        SchoolBreak("Term 1 Break", t1_start, add_days(t1_start, 14)),
        SchoolBreak("Term 2 Break", date(year, 7, 6), date(year, 7, 21)),
        SchoolBreak("Term 3 Break", date(year, 9, 28), date(year, 10, 13)),
        SchoolBreak("Summer Break", date(year, 12, 20), date(year, 12, 31)),
    ]


def expand_break(school_break: SchoolBreak) -> List[Holiday]:
    """
    One SCHOOL holiday per calendar day of the break.

    The calendar grid looks holidays up by exact date, so ranges are
    flattened here rather than stored as start/end records.
    """
    out: List[Holiday] = []
    curr = school_break.start
    while curr <= school_break.end:
        out.append(
            Holiday(
                id=f"school-{school_break.slug}-{curr.isoformat()}",
                name=f"School Holiday ({school_break.name})",
                date=curr,
                type=HolidayType.SCHOOL,
            )
        )
        curr = add_days(curr, 1)
    return out


def school_holidays(year: int, easter: date) -> List[Holiday]:
    out: List[Holiday] = []
    for b in school_breaks(year, easter):
        out.extend(expand_break(b))
    return out

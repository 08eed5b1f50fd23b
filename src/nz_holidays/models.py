from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class HolidayType(str, Enum):
    PUBLIC = "public"
    REGIONAL = "regional"
    SCHOOL = "school"


class RegionId(str, Enum):
    NORTHLAND = "northland"
    AUCKLAND = "auckland"
    WAIKATO = "waikato"
    BAY_OF_PLENTY = "bop"
    GISBORNE = "gisborne"
    HAWKES_BAY = "hawkes_bay"
    TARANAKI = "taranaki"
    MANAWATU_WHANGANUI = "manawatu"
    WELLINGTON = "wellington"
    TASMAN = "tasman"
    NELSON = "nelson"
    MARLBOROUGH = "marlborough"
    WEST_COAST = "west_coast"
    CANTERBURY = "canterbury"
    OTAGO = "otago"
    SOUTHLAND = "southland"
    CHATHAM_ISLANDS = "chatham"


REGION_NAMES: Dict[RegionId, str] = {
    RegionId.NORTHLAND: "Northland",
    RegionId.AUCKLAND: "Auckland",
    RegionId.WAIKATO: "Waikato",
    RegionId.BAY_OF_PLENTY: "Bay of Plenty",
    RegionId.GISBORNE: "Gisborne",
    RegionId.HAWKES_BAY: "Hawke's Bay",
    RegionId.TARANAKI: "Taranaki",
    RegionId.MANAWATU_WHANGANUI: "Manawatu-Whanganui",
    RegionId.WELLINGTON: "Wellington",
    RegionId.TASMAN: "Tasman",
    RegionId.NELSON: "Nelson",
    RegionId.MARLBOROUGH: "Marlborough",
    RegionId.WEST_COAST: "West Coast",
    RegionId.CANTERBURY: "Canterbury",
    RegionId.OTAGO: "Otago",
    RegionId.SOUTHLAND: "Southland",
    RegionId.CHATHAM_ISLANDS: "Chatham Islands",
}

# Spellings people type that don't match the display name once normalised
REGION_ALIASES: Dict[str, RegionId] = {
    "hawkes bay": RegionId.HAWKES_BAY,
    "manawatu": RegionId.MANAWATU_WHANGANUI,
    "whanganui": RegionId.MANAWATU_WHANGANUI,
    "manawatu whanganui": RegionId.MANAWATU_WHANGANUI,
    "westland": RegionId.WEST_COAST,
    "chathams": RegionId.CHATHAM_ISLANDS,
    "chatham is.": RegionId.CHATHAM_ISLANDS,
}


def _norm(s: str | None) -> str:
    return " ".join((s or "").strip().lower().replace("_", " ").split())


def region_name(region_id: RegionId) -> str:
    return REGION_NAMES[region_id]


def resolve_region(value: str | RegionId | None) -> Optional[RegionId]:
    """
    Resolve a region code, display name or common alias to a RegionId.
    Returns None when nothing matches.
    """
    if isinstance(value, RegionId):
        return value

    key = _norm(value)
    if not key:
        return None

    for region in RegionId:
        if key == _norm(region.value) or key == _norm(REGION_NAMES[region]):
            return region

    return REGION_ALIASES.get(key)


@dataclass(frozen=True)
class Holiday:
    id: str
    name: str
    date: date
    type: HolidayType
    region_ids: Optional[Tuple[RegionId, ...]] = None

    def __post_init__(self) -> None:
        if self.type is HolidayType.REGIONAL:
            if not self.region_ids:
                raise ValueError(f"Regional holiday {self.id!r} needs at least one region")
        elif self.region_ids is not None:
            raise ValueError(f"{self.type.value} holiday {self.id!r} cannot carry regions")

    @property
    def is_nationwide(self) -> bool:
        return self.region_ids is None

    def applies_to(self, region: RegionId) -> bool:
        return self.region_ids is None or region in self.region_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "name": self.name,
            "type": self.type.value,
            "regions": [r.value for r in self.region_ids] if self.region_ids else [],
            "is_regional": self.type is HolidayType.REGIONAL,
        }


@dataclass(frozen=True)
class CalendarDay:
    date: date
    is_current_month: bool
    holidays: Tuple[Holiday, ...] = field(default_factory=tuple)

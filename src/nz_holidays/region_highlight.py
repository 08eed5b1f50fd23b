from __future__ import annotations

from typing import Dict, List, Optional

from .models import REGION_NAMES, Holiday, HolidayType, RegionId

STATE_FOCUSED = "focused"
STATE_HIGHLIGHTED = "highlighted"
STATE_NONE = "none"


def highlighted_regions(holidays: List[Holiday], year: int, month: int) -> List[RegionId]:
    """Regions with at least one regional holiday in the given month."""
    seen: Dict[RegionId, None] = {}
    for h in holidays:
        if h.type is not HolidayType.REGIONAL or not h.region_ids:
            continue
        if h.date.year != year or h.date.month != month:
            continue
        for r in h.region_ids:
            seen.setdefault(r, None)
    return list(seen)


def focused_regions(holiday: Optional[Holiday]) -> List[RegionId]:
    if holiday is not None and holiday.type is HolidayType.REGIONAL and holiday.region_ids:
        return list(holiday.region_ids)
    return []


def region_states(highlighted: List[RegionId], focused: List[RegionId]) -> Dict[RegionId, str]:
    """Display state for every region; focus wins over highlight."""
    states: Dict[RegionId, str] = {}
    for region in RegionId:
        if region in focused:
            states[region] = STATE_FOCUSED
        elif region in highlighted:
            states[region] = STATE_HIGHLIGHTED
        else:
            states[region] = STATE_NONE
    return states


def suggestion_region_name(holiday: Holiday) -> str:
    """Region used to key activity suggestions: the first listed, else the whole country."""
    if holiday.region_ids:
        return REGION_NAMES[holiday.region_ids[0]]
    return "New Zealand"

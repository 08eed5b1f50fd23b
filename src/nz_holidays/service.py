from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .date_rules import matariki_date
from .holidays_nz import filter_holidays_for_region, holidays_between, year_holidays
from .models import REGION_NAMES, Holiday, HolidayType, RegionId, resolve_region
from .regional_rules import match_regional_holidays

logger = logging.getLogger(__name__)

# ----------------------------
# Status codes
# ----------------------------
STATUS_OK = "OK"
STATUS_LOW_CONFIDENCE = "LOW_CONFIDENCE"
STATUS_UNKNOWN_REGION = "UNKNOWN_REGION"
STATUS_RULES_MISSING = "RULES_MISSING"
STATUS_ERROR = "ERROR"

# Easter and Mondayisation are only checked against the Gregorian calendar here
VERIFIED_YEARS = range(1900, 2100)


def _init_audit(region: str | None, year: int) -> Dict[str, Any]:
    return {
        "status": STATUS_OK,
        "manual_review": False,
        "audit_message": "",
        "region_resolution_method": None,
        "rules_applied": [],
        "matariki_available": matariki_date(year) is not None,
        "input_region": region,
        "error": None,
    }


def _finalise_audit(audit: Dict[str, Any]) -> None:
    audit["manual_review"] = audit.get("status") != STATUS_OK


def _pay_period(start: date | None, end: date | None) -> Dict[str, Optional[str]]:
    return {
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
    }


def _result(
    audit: Dict[str, Any],
    *,
    year: int,
    region: Optional[RegionId],
    holidays: List[Holiday],
    in_period: List[Holiday],
    start: date | None,
    end: date | None,
) -> Dict[str, Any]:
    _finalise_audit(audit)
    return {
        "year": year,
        "region": region.value if region else None,
        "region_name": REGION_NAMES[region] if region else "New Zealand",
        "holidays": [h.to_dict() for h in holidays],
        "holiday_count": len(holidays),
        "pay_period": _pay_period(start, end),
        "holidays_in_period": [h.to_dict() for h in in_period],
        "holiday_count_in_period": len(in_period),
        # audit (flat + json)
        **audit,
        "audit_json": json.dumps(audit, ensure_ascii=False),
    }


def lookup_region_holidays(
    region: str | RegionId | None,
    year: int,
    start: date | None = None,
    end: date | None = None,
    *,
    include_school: bool = True,
) -> Dict[str, Any]:
    """
    Holidays observed in one NZ region for `year`, optionally narrowed to a
    pay period, with an audit trail describing how confident the result is.

    A blank region means "nationwide only": public and school holidays, no
    regional anniversaries. The pay period only applies when both `start` and
    `end` are given; with either missing the whole year counts as in period.
    """
    audit = _init_audit(getattr(region, "value", region), year)
    resolved: Optional[RegionId] = None

    try:
        # ----------------------------
        # 1) Region
        # ----------------------------
        blank = region is None or (isinstance(region, str) and not region.strip())
        if blank:
            audit["region_resolution_method"] = "nationwide"
        else:
            resolved = resolve_region(region)
            if resolved is None:
                audit["status"] = STATUS_UNKNOWN_REGION
                audit["audit_message"] = f"Region {region!r} is not a New Zealand region."
                return _result(audit, year=year, region=None, holidays=[], in_period=[], start=start, end=end)
            is_code = isinstance(region, RegionId) or resolved.value == str(region).strip().lower()
            audit["region_resolution_method"] = "code" if is_code else "name"

        # ----------------------------
        # 2) Holidays for the year and region
        # ----------------------------
        all_holidays = year_holidays(year)
        holidays = filter_holidays_for_region(all_holidays, resolved)
        if not include_school:
            holidays = [h for h in holidays if h.type is not HolidayType.SCHOOL]

        if resolved is not None:
            audit["rules_applied"] = [h.id for h in match_regional_holidays(holidays, resolved)]

        # ----------------------------
        # 3) Pay-period filtering
        # ----------------------------
        if start and end:
            in_period = holidays_between(holidays, start, end)
        else:
            in_period = holidays

        # ----------------------------
        # 4) Status + message
        # ----------------------------
        if year not in VERIFIED_YEARS:
            audit["status"] = STATUS_LOW_CONFIDENCE
            audit["audit_message"] = (
                f"{year} is outside 1900-2099; Easter-based and Mondayised dates are unverified."
            )
        elif not audit["matariki_available"]:
            audit["status"] = STATUS_RULES_MISSING
            audit["audit_message"] = f"Matariki date for {year} is not published; it is omitted."
        elif resolved is None:
            audit["audit_message"] = "Nationwide holidays calculated; regional anniversaries not applied."
        elif not audit["rules_applied"]:
            audit["audit_message"] = f"{REGION_NAMES[resolved]} has no regional anniversary rule; national holidays only."
        else:
            audit["audit_message"] = f"Holidays calculated with the {REGION_NAMES[resolved]} anniversary rule."

    except Exception as e:
        logger.exception("Holiday lookup failed for region=%r year=%r", region, year)
        audit["status"] = STATUS_ERROR
        audit["error"] = f"{type(e).__name__}: {e}"
        audit["audit_message"] = "An unexpected error occurred while calculating holidays."
        return _result(audit, year=year, region=resolved, holidays=[], in_period=[], start=start, end=end)

    return _result(audit, year=year, region=resolved, holidays=holidays, in_period=in_period, start=start, end=end)

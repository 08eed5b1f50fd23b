"""
tests/test_service.py

Covers:
  - Region resolution outcomes and status codes
  - Nationwide vs regional holiday sets
  - Pay-period filtering
  - Audit fields (rules applied, manual review, json copy)
"""

import json
from datetime import date

import pytest

from nz_holidays import service
from nz_holidays.models import RegionId
from nz_holidays.service import (
    STATUS_ERROR,
    STATUS_LOW_CONFIDENCE,
    STATUS_OK,
    STATUS_RULES_MISSING,
    STATUS_UNKNOWN_REGION,
    lookup_region_holidays,
)


def _names(holidays):
    return {h["name"] for h in holidays}


class TestRegionResolution:

    def test_by_code(self):
        r = lookup_region_holidays("hawkes_bay", 2025)
        assert r["status"] == STATUS_OK
        assert r["region"] == "hawkes_bay"
        assert r["region_name"] == "Hawke's Bay"
        assert r["region_resolution_method"] == "code"

    def test_by_name(self):
        r = lookup_region_holidays("Bay of Plenty", 2025)
        assert r["region"] == "bop"
        assert r["region_resolution_method"] == "name"

    def test_by_enum(self):
        r = lookup_region_holidays(RegionId.OTAGO, 2025)
        assert r["region"] == "otago"
        assert r["region_resolution_method"] == "code"
        assert r["input_region"] == "otago"

    def test_unknown(self):
        r = lookup_region_holidays("Atlantis", 2025)
        assert r["status"] == STATUS_UNKNOWN_REGION
        assert r["manual_review"] is True
        assert r["holidays"] == []
        assert r["holiday_count"] == 0

    @pytest.mark.parametrize("region", [None, "", "  "])
    def test_blank_is_nationwide(self, region):
        r = lookup_region_holidays(region, 2025)
        assert r["status"] == STATUS_OK
        assert r["region"] is None
        assert r["region_name"] == "New Zealand"
        assert r["region_resolution_method"] == "nationwide"
        assert all(not h["is_regional"] for h in r["holidays"])


class TestHolidaySets:

    def test_regional_anniversary_included(self):
        r = lookup_region_holidays("Gisborne", 2025)
        names = _names(r["holidays"])
        assert "Auckland Anniversary" in names
        assert "Wellington Anniversary" not in names
        assert r["rules_applied"] == ["auck-ann-2025"]

    def test_school_excluded_on_request(self):
        r = lookup_region_holidays("Otago", 2025, include_school=False)
        assert all(h["type"] != "school" for h in r["holidays"])
        assert r["holiday_count"] == 12  # 11 national + Otago Anniversary

    def test_chatham_has_no_rule(self):
        r = lookup_region_holidays("chatham", 2025, include_school=False)
        assert r["status"] == STATUS_OK
        assert r["rules_applied"] == []
        assert "no regional anniversary rule" in r["audit_message"]


class TestPayPeriod:

    def test_filters_inclusive(self):
        r = lookup_region_holidays(
            "Southland", 2025, date(2025, 4, 18), date(2025, 4, 22), include_school=False
        )
        assert [h["name"] for h in r["holidays_in_period"]] == [
            "Good Friday",
            "Easter Monday",
            "Southland Anniversary",
        ]
        assert r["holiday_count_in_period"] == 3
        assert r["pay_period"] == {"start": "2025-04-18", "end": "2025-04-22"}

    def test_open_period_is_whole_year(self):
        r = lookup_region_holidays("Southland", 2025)
        assert r["holidays_in_period"] == r["holidays"]
        assert r["pay_period"] == {"start": None, "end": None}

    def test_half_open_period_is_whole_year(self):
        r = lookup_region_holidays("Southland", 2025, start=date(2025, 4, 18))
        assert r["holidays_in_period"] == r["holidays"]
        assert r["pay_period"] == {"start": "2025-04-18", "end": None}


class TestStatus:

    def test_matariki_missing(self):
        r = lookup_region_holidays("Wellington", 2030)
        assert r["status"] == STATUS_RULES_MISSING
        assert r["matariki_available"] is False
        assert r["manual_review"] is True
        # still returns holidays
        assert r["holiday_count"] > 0

    def test_year_outside_verified_range(self):
        r = lookup_region_holidays("Wellington", 2150)
        assert r["status"] == STATUS_LOW_CONFIDENCE
        assert r["holiday_count"] > 0

    def test_unexpected_error(self, monkeypatch):
        def boom(year):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(service, "year_holidays", boom)
        r = lookup_region_holidays("Wellington", 2025)
        assert r["status"] == STATUS_ERROR
        assert r["error"] == "RuntimeError: kaboom"
        assert r["holidays"] == []

    def test_audit_json_mirrors_flat_fields(self):
        r = lookup_region_holidays("Nelson", 2025)
        audit = json.loads(r["audit_json"])
        assert audit["status"] == r["status"]
        assert audit["rules_applied"] == ["nel-ann-2025"]

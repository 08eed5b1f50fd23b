"""
tests/test_regional_rules.py

Covers:
  - Anniversary dates for each rule (fixed placeholders and computed)
  - The holiday -> region mapping table
  - Region matching helpers
"""

from datetime import date

import pytest

from nz_holidays.date_rules import easter_sunday
from nz_holidays.models import HolidayType, RegionId
from nz_holidays.regional_rules import (
    ANNIVERSARY_RULES,
    labour_day,
    match_regional_holidays,
    regional_anniversaries,
    regions_without_anniversary,
    rule_for_region,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def anniversaries_2024():
    holidays = regional_anniversaries(2024, easter_sunday(2024))
    return {h.name: h for h in holidays}


@pytest.fixture
def anniversaries_2025():
    holidays = regional_anniversaries(2025, easter_sunday(2025))
    return {h.name: h for h in holidays}


# ── Dates ─────────────────────────────────────────────────────────────────────

class TestAnniversaryDates:

    def test_fixed_placeholders_use_raw_date(self, anniversaries_2024):
        assert anniversaries_2024["Wellington Anniversary"].date == date(2024, 1, 22)
        assert anniversaries_2024["Auckland Anniversary"].date == date(2024, 1, 29)
        assert anniversaries_2024["Nelson Anniversary"].date == date(2024, 2, 1)
        assert anniversaries_2024["Otago Anniversary"].date == date(2024, 3, 23)
        assert anniversaries_2024["Marlborough Anniversary"].date == date(2024, 11, 1)
        assert anniversaries_2024["Westland Anniversary"].date == date(2024, 12, 1)

    def test_weekend_placeholder_stays_on_weekend(self, anniversaries_2025):
        # 1 Nov 2025 is a Saturday; the raw date is kept
        assert anniversaries_2025["Marlborough Anniversary"].date == date(2025, 11, 1)
        assert anniversaries_2025["Marlborough Anniversary"].date.weekday() == 5

    def test_southland_is_easter_tuesday(self, anniversaries_2024, anniversaries_2025):
        assert anniversaries_2024["Southland Anniversary"].date == date(2024, 4, 2)
        assert anniversaries_2025["Southland Anniversary"].date == date(2025, 4, 22)

    def test_taranaki_second_monday_march(self, anniversaries_2024, anniversaries_2025):
        assert anniversaries_2024["Taranaki Anniversary"].date == date(2024, 3, 11)
        assert anniversaries_2025["Taranaki Anniversary"].date == date(2025, 3, 10)

    def test_hawkes_bay_friday_before_labour_day(self, anniversaries_2024, anniversaries_2025):
        assert anniversaries_2024["Hawke's Bay Anniversary"].date == date(2024, 10, 25)
        assert anniversaries_2025["Hawke's Bay Anniversary"].date == date(2025, 10, 24)

    def test_canterbury_show_day(self, anniversaries_2024, anniversaries_2025):
        assert anniversaries_2024["Canterbury Anniversary"].date == date(2024, 11, 15)
        assert anniversaries_2025["Canterbury Anniversary"].date == date(2025, 11, 14)

    def test_canterbury_always_friday(self):
        for year in range(2000, 2040):
            h = next(
                x for x in regional_anniversaries(year, easter_sunday(year))
                if x.name == "Canterbury Anniversary"
            )
            assert h.date.weekday() == 4

    def test_labour_day(self):
        assert labour_day(2024) == date(2024, 10, 28)


# ── Region mapping ────────────────────────────────────────────────────────────

class TestRegionMapping:

    EXPECTED = {
        "Wellington Anniversary": (RegionId.WELLINGTON, RegionId.MANAWATU_WHANGANUI),
        "Auckland Anniversary": (
            RegionId.AUCKLAND,
            RegionId.NORTHLAND,
            RegionId.WAIKATO,
            RegionId.BAY_OF_PLENTY,
            RegionId.GISBORNE,
        ),
        "Nelson Anniversary": (RegionId.NELSON, RegionId.TASMAN),
        "Otago Anniversary": (RegionId.OTAGO,),
        "Southland Anniversary": (RegionId.SOUTHLAND,),
        "Taranaki Anniversary": (RegionId.TARANAKI,),
        "Hawke's Bay Anniversary": (RegionId.HAWKES_BAY,),
        "Marlborough Anniversary": (RegionId.MARLBOROUGH,),
        "Canterbury Anniversary": (RegionId.CANTERBURY,),
        "Westland Anniversary": (RegionId.WEST_COAST,),
    }

    def test_table(self, anniversaries_2025):
        assert {name: h.region_ids for name, h in anniversaries_2025.items()} == self.EXPECTED

    def test_rule_order(self):
        assert [r.name for r in ANNIVERSARY_RULES] == list(self.EXPECTED)

    def test_all_regional_type(self, anniversaries_2025):
        assert all(h.type is HolidayType.REGIONAL for h in anniversaries_2025.values())

    def test_ids(self, anniversaries_2025):
        assert anniversaries_2025["Wellington Anniversary"].id == "well-ann-2025"
        assert anniversaries_2025["Westland Anniversary"].id == "west-ann-2025"

    def test_each_region_in_at_most_one_rule(self):
        seen = [r for rule in ANNIVERSARY_RULES for r in rule.region_ids]
        assert len(seen) == len(set(seen))

    def test_only_chatham_uncovered(self):
        assert regions_without_anniversary() == [RegionId.CHATHAM_ISLANDS]

    def test_rule_for_region(self):
        assert rule_for_region(RegionId.GISBORNE).name == "Auckland Anniversary"
        assert rule_for_region(RegionId.CHATHAM_ISLANDS) is None


# ── Matching ──────────────────────────────────────────────────────────────────

class TestMatchRegionalHolidays:

    def test_matches_only_listing_rules(self, anniversaries_2025):
        out = match_regional_holidays(list(anniversaries_2025.values()), RegionId.TASMAN)
        assert [h.name for h in out] == ["Nelson Anniversary"]

    def test_no_match(self, anniversaries_2025):
        assert match_regional_holidays(list(anniversaries_2025.values()), RegionId.CHATHAM_ISLANDS) == []

"""
tests/test_date_rules.py

Covers:
  - Mondayisation of Saturday/Sunday dates and its idempotence
  - Cascading observation of consecutive holidays (New Year, Christmas)
  - Easter Sunday against known dates and the dateutil computus
  - Nth-weekday helper
  - Matariki lookup table, including years with no published date
"""

from datetime import date, timedelta

import pytest
from dateutil.easter import easter as dateutil_easter

from nz_holidays.date_rules import (
    MATARIKI_DATES,
    MONDAY,
    SUNDAY,
    TUESDAY,
    easter_sunday,
    first_weekday_on_or_after,
    matariki_date,
    mondayise,
    nth_weekday,
    observe_pair,
)


# ── Mondayise ─────────────────────────────────────────────────────────────────

class TestMondayise:

    def test_weekday_unchanged(self):
        # 6 Feb 2024 is a Tuesday
        assert mondayise(date(2024, 2, 6)) == date(2024, 2, 6)

    def test_saturday_moves_two_days(self):
        assert mondayise(date(2021, 2, 6)) == date(2021, 2, 8)

    def test_sunday_moves_one_day(self):
        assert mondayise(date(2021, 4, 25)) == date(2021, 4, 26)

    def test_result_is_never_weekend(self):
        d = date(2024, 1, 1)
        for _ in range(14):
            assert mondayise(d).weekday() < 5
            d += timedelta(days=1)

    def test_idempotent(self):
        d = date(2020, 1, 1)
        for _ in range(366):
            once = mondayise(d)
            assert mondayise(once) == once
            d += timedelta(days=1)


# ── Consecutive holidays ──────────────────────────────────────────────────────

class TestObservePair:

    def test_new_year_sunday_cascades(self):
        # 1 Jan 2023 is a Sunday: observed Mon 2nd, so the 2nd moves to Tue 3rd
        assert observe_pair(date(2023, 1, 1), date(2023, 1, 2)) == (
            date(2023, 1, 2),
            date(2023, 1, 3),
        )

    def test_new_year_saturday_cascades(self):
        # 1 Jan 2022 Saturday, 2 Jan Sunday: both would land on Mon 3rd
        assert observe_pair(date(2022, 1, 1), date(2022, 1, 2)) == (
            date(2022, 1, 3),
            date(2022, 1, 4),
        )

    def test_christmas_saturday_cascades(self):
        assert observe_pair(date(2021, 12, 25), date(2021, 12, 26)) == (
            date(2021, 12, 27),
            date(2021, 12, 28),
        )

    def test_christmas_sunday_cascades(self):
        assert observe_pair(date(2022, 12, 25), date(2022, 12, 26)) == (
            date(2022, 12, 26),
            date(2022, 12, 27),
        )

    def test_friday_saturday_pair(self):
        # 25 Dec 2026 Friday stays; Boxing Day Saturday goes to Monday
        assert observe_pair(date(2026, 12, 25), date(2026, 12, 26)) == (
            date(2026, 12, 25),
            date(2026, 12, 28),
        )

    def test_weekday_pair_unchanged(self):
        assert observe_pair(date(2024, 12, 25), date(2024, 12, 26)) == (
            date(2024, 12, 25),
            date(2024, 12, 26),
        )


# ── Easter ────────────────────────────────────────────────────────────────────

class TestEasterSunday:

    @pytest.mark.parametrize(
        "year, expected",
        [
            (1900, date(1900, 4, 15)),
            (2000, date(2000, 4, 23)),
            (2008, date(2008, 3, 23)),
            (2011, date(2011, 4, 24)),
            (2023, date(2023, 4, 9)),
            (2024, date(2024, 3, 31)),
            (2025, date(2025, 4, 20)),
            (2026, date(2026, 4, 5)),
        ],
    )
    def test_known_dates(self, year, expected):
        assert easter_sunday(year) == expected

    def test_is_sunday(self):
        for year in range(1900, 2100):
            assert easter_sunday(year).weekday() == SUNDAY

    def test_matches_dateutil_1900_to_2099(self):
        for year in range(1900, 2100):
            assert easter_sunday(year) == dateutil_easter(year), year


# ── Nth weekday ───────────────────────────────────────────────────────────────

class TestNthWeekday:

    def test_kings_birthday_2025(self):
        # 1 June 2025 is a Sunday
        assert nth_weekday(2025, 6, MONDAY, 1) == date(2025, 6, 2)

    def test_first_day_is_the_weekday(self):
        # 1 Jan 2024 is a Monday
        assert nth_weekday(2024, 1, MONDAY, 1) == date(2024, 1, 1)

    def test_fourth_monday_october(self):
        assert nth_weekday(2023, 10, MONDAY, 4) == date(2023, 10, 23)
        assert nth_weekday(2024, 10, MONDAY, 4) == date(2024, 10, 28)

    def test_second_monday_march(self):
        assert nth_weekday(2025, 3, MONDAY, 2) == date(2025, 3, 10)

    def test_first_weekday_on_or_after(self):
        assert first_weekday_on_or_after(date(2024, 11, 1), TUESDAY) == date(2024, 11, 5)
        assert first_weekday_on_or_after(date(2024, 10, 1), TUESDAY) == date(2024, 10, 1)


# ── Matariki ──────────────────────────────────────────────────────────────────

class TestMatariki:

    def test_table_covers_2023_to_2028(self):
        assert sorted(MATARIKI_DATES) == list(range(2023, 2029))

    def test_known_date(self):
        assert matariki_date(2025) == date(2025, 6, 20)

    @pytest.mark.parametrize("year", [1999, 2022, 2029, 2100])
    def test_missing_years_return_none(self, year):
        assert matariki_date(year) is None

    def test_every_date_in_its_own_year(self):
        for year, d in MATARIKI_DATES.items():
            assert d.year == year

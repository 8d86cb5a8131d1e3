"""Tests for weekend and holiday facts."""

from datetime import date

import pytest

from models import HolidayFact
from scheduler.calendar import CalendarFacts, HolidayTable, default_holiday_table


class TestWeekends:
    """Test weekend detection."""

    def test_wednesday_is_not_weekend(self, calendar):
        """01/01/2025 is a Wednesday."""
        assert calendar.is_weekend("01/01/2025") is False

    def test_saturday_after_friday_holiday(self, calendar):
        """Anzac Day 2025 is a Friday; the next day is a Saturday."""
        assert calendar.is_holiday("25/04/2025") is True
        assert calendar.is_weekend("25/04/2025") is False
        assert calendar.is_weekend("26/04/2025") is True

    def test_sunday_is_weekend(self, calendar):
        assert calendar.is_weekend("05/01/2025") is True

    def test_accepts_date_objects(self, calendar):
        assert calendar.is_weekend(date(2025, 1, 4)) is True

    def test_invalid_text_is_not_weekend(self, calendar):
        assert calendar.is_weekend("31/02/2025") is False


class TestHolidays:
    """Test holiday lookups, including regional collisions."""

    def test_regional_collision_same_date(self, calendar):
        """06/05/2024 is May Day in NT and Labour Day in QLD, not a VIC holiday."""
        assert calendar.is_holiday("06/05/2024", "NT") is True
        assert calendar.is_holiday("06/05/2024", "QLD") is True
        assert calendar.is_holiday("06/05/2024", "VIC") is False

    def test_all_query_matches_any_region(self, calendar):
        """The default query asks 'a holiday anywhere?'."""
        assert calendar.is_holiday("06/05/2024") is True

    def test_national_fact_matches_every_region(self, calendar):
        assert calendar.is_holiday("25/12/2024", "WA") is True

    def test_jurisdiction_query_is_case_insensitive(self, calendar):
        assert calendar.is_holiday("06/05/2024", "qld") is True

    def test_plain_day_is_not_holiday(self, calendar):
        assert calendar.is_holiday("10/03/2025") is False

    def test_info_returns_first_registered(self, calendar):
        """With no jurisdiction, the earliest-registered fact is reported."""
        info = calendar.holiday_info("06/05/2024")
        assert info.is_holiday is True
        assert info.name == "May Day"
        assert info.jurisdictions == ["NT"]

    def test_info_for_jurisdiction(self, calendar):
        info = calendar.holiday_info("06/05/2024", "QLD")
        assert info.name == "Labour Day"
        assert info.label == "Labour Day (QLD)"

    def test_info_not_holiday(self, calendar):
        info = calendar.holiday_info("07/03/2025")
        assert info.is_holiday is False
        assert info.name is None
        assert info.label == ""

    def test_flags_for_either_milestone(self, calendar):
        flags = calendar.flags_for("24/04/2025", "26/04/2025")
        assert flags == {"is_weekend": True, "is_holiday": False}
        flags = calendar.flags_for("25/04/2025", "28/04/2025")
        assert flags == {"is_weekend": False, "is_holiday": True}


class TestHolidayTable:
    """Test the injectable dataset."""

    def test_lookup_returns_all_facts_for_date(self):
        table = default_holiday_table()
        names = [f.name for f in table.lookup(date(2024, 5, 6))]
        assert names == ["May Day", "Labour Day"]

    def test_default_table_is_versioned(self):
        assert default_holiday_table().version.startswith("au-")

    def test_extend_adds_without_mutating(self):
        base = default_holiday_table()
        extra = HolidayFact(date=date(2025, 3, 7), name="Company Day")
        extended = base.extend([extra], version="test")

        assert len(extended) == len(base) + 1
        assert base.lookup(date(2025, 3, 7)) == []
        assert CalendarFacts(extended).is_holiday("07/03/2025") is True

    def test_empty_table(self):
        facts = CalendarFacts(HolidayTable([]))
        assert facts.is_holiday("25/12/2025") is False


class TestHolidayFact:
    """Test HolidayFact validation."""

    def test_codes_upper_cased(self):
        fact = HolidayFact(date=date(2025, 1, 1), name="X", jurisdictions={"nsw"})
        assert fact.jurisdictions == frozenset({"NSW"})

    def test_empty_jurisdictions_rejected(self):
        with pytest.raises(ValueError):
            HolidayFact(date=date(2025, 1, 1), name="X", jurisdictions=set())

"""Tests for CSV import, CSV/ICS export and the store adapter."""

from datetime import datetime, timezone

import pytest

from adapters import (
    CSVImportError,
    StoreFormatError,
    check_store_ready,
    from_store_record,
    generate_ics,
    parse_csv,
    to_csv,
    to_store_record,
    to_store_records,
)

from .conftest import make_activity

FIXED_STAMP = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestParseCsv:
    """Test the line-oriented importer."""

    def test_header_skipped_and_dates_normalized(self):
        content = (
            "Activity ID,Activity Name,Description,Strategy,PREP Date,GO Date\n"
            "A1,Kickoff,Intro,Meeting,2025-01-06,9/1/2025\n"
        )
        activities = parse_csv(content)

        assert len(activities) == 1
        assert activities[0].activity_id == "A1"
        assert activities[0].prep_date == "06/01/2025"
        assert activities[0].go_date == "09/01/2025"

    def test_quoted_commas_and_blank_lines(self):
        content = '\nA1,"Plan, then act","Notes, more",Workshop,06/01/2025,09/01/2025\n\n'
        activity = parse_csv(content)[0]
        assert activity.activity_name == "Plan, then act"
        assert activity.description == "Notes, more"

    def test_short_rows_skipped(self):
        content = "A1,Kickoff,Intro\nA2,Review,Notes,Call,10/01/2025,15/01/2025\n"
        assert [a.activity_id for a in parse_csv(content)] == ["A2"]

    def test_unsequenced_ids_replaced(self):
        content = (
            "A1,First,,,06/01/2025,09/01/2025\n"
            "misc,Second,,,10/01/2025,15/01/2025\n"
        )
        assert [a.activity_id for a in parse_csv(content)] == ["A1", "A2"]

    def test_custom_fallback_prefix(self):
        content = "x,First,,,06/01/2025,09/01/2025\n"
        assert parse_csv(content, fallback_prefix="T")[0].activity_id == "T1"

    def test_flags_computed(self):
        content = "A1,Xmas,,,22/12/2025,25/12/2025\n"
        activity = parse_csv(content)[0]
        assert activity.is_holiday is True
        assert activity.is_weekend is False

    def test_unparseable_dates_kept_as_text(self):
        content = "A1,Someday,,,soon,later\n"
        activity = parse_csv(content)[0]
        assert activity.prep_date == "soon"
        assert activity.go_date == "later"

    def test_partial_dates_kept_as_text(self):
        content = "A1,Kickoff,d,s,March 2025,10/03/2025\n"
        activity = parse_csv(content)[0]
        assert activity.prep_date == "March 2025"
        assert activity.go_date == "10/03/2025"

    @pytest.mark.parametrize("content", ["", "\n\n", "Activity ID,Name,Description\n", "a,b\n"])
    def test_nothing_usable(self, content):
        with pytest.raises(CSVImportError):
            parse_csv(content)


class TestToCsv:
    """Test CSV export."""

    def test_header_and_rows(self, two_activities):
        lines = to_csv(two_activities).splitlines()
        assert lines[0] == "Activity ID,Activity Name,Description,Strategy,PREP Date,GO Date"
        assert lines[1] == "A1,Kickoff,,,01/01/2025,05/01/2025"
        assert len(lines) == 3

    def test_export_reimports(self, two_activities):
        reloaded = parse_csv(to_csv(two_activities))
        assert [(a.activity_id, a.prep_date, a.go_date) for a in reloaded] == [
            ("A1", "01/01/2025", "05/01/2025"),
            ("A2", "10/01/2025", "15/01/2025"),
        ]


class TestGenerateIcs:
    """Test iCalendar export."""

    def test_event_per_activity(self, two_activities):
        ics = generate_ics(two_activities, "Q1 Plan", stamp=FIXED_STAMP)
        lines = ics.split("\r\n")

        assert lines[0] == "BEGIN:VCALENDAR"
        assert "X-WR-CALNAME:Q1 Plan" in lines
        assert ics.count("BEGIN:VEVENT") == 2
        assert "UID:A1-20250101-1735689600@prepgo" in lines
        assert "DTSTART;VALUE=DATE:20250101" in lines
        assert "DTEND;VALUE=DATE:20250105" in lines
        assert "DTSTAMP:20250101T000000Z" in lines
        assert ics.endswith("END:VCALENDAR\r\n")

    def test_text_escaped(self):
        activity = make_activity("A1", "Plan; review, ship", prep="06/01/2025", go="09/01/2025",
                                 description="line one", strategy="Call")
        lines = generate_ics([activity], "Cal", stamp=FIXED_STAMP).split("\r\n")

        assert "SUMMARY:Plan\\; review\\, ship" in lines
        assert "DESCRIPTION:line one\\nStrategy: Call\\nActivity ID: A1" in lines

    def test_carriage_returns_escaped(self):
        activity = make_activity("A1", prep="06/01/2025", go="09/01/2025",
                                 description="one\r\ntwo\rthree", strategy="Call")
        ics = generate_ics([activity], "Cal", stamp=FIXED_STAMP)

        assert "DESCRIPTION:one\\ntwo\\nthree\\nStrategy: Call\\nActivity ID: A1" in ics.split("\r\n")
        assert "\r" not in ics.replace("\r\n", "")

    def test_long_lines_folded(self):
        description = "Ünïcödé notes " * 20
        activity = make_activity("A1", prep="06/01/2025", go="09/01/2025",
                                 description=description, strategy="Call")
        ics = generate_ics([activity], "Cal", stamp=FIXED_STAMP)
        lines = ics.split("\r\n")[:-1]

        assert all(len(line.encode("utf-8")) <= 75 for line in lines)
        unfolded = ics.replace("\r\n ", "").split("\r\n")
        assert f"DESCRIPTION:{description}\\nStrategy: Call\\nActivity ID: A1" in unfolded

    def test_invalid_rows_skipped(self, two_activities):
        broken = two_activities + [make_activity("A3", prep="soon", go="09/01/2025")]
        ics = generate_ics(broken, "Cal", stamp=FIXED_STAMP)
        assert ics.count("BEGIN:VEVENT") == 2


class TestStore:
    """Test the ISO-dated store adapter."""

    def test_record_uses_iso_dates(self, two_activities):
        record = to_store_record(two_activities[0])
        assert record["prep_date"] == "2025-01-01"
        assert record["go_date"] == "2025-01-05"

    def test_record_back_to_activity(self):
        record = {
            "activity_id": "A1",
            "activity_name": "Kickoff",
            "description": None,
            "strategy": None,
            "prep_date": "2025-01-01",
            "go_date": "2025-01-05",
        }
        activity = from_store_record(record)
        assert activity.prep_date == "01/01/2025"
        assert activity.description == ""

    def test_invalid_date_refused(self):
        with pytest.raises(StoreFormatError):
            to_store_record(make_activity("A1", prep="soon", go="05/01/2025"))

    def test_prep_after_go_refused(self, two_activities):
        bad = two_activities + [make_activity("A3", prep="20/01/2025", go="18/01/2025")]
        with pytest.raises(StoreFormatError, match="A3"):
            check_store_ready(bad)
        with pytest.raises(StoreFormatError):
            to_store_records(bad)

    def test_all_records(self, two_activities):
        assert [r["activity_id"] for r in to_store_records(two_activities)] == ["A1", "A2"]

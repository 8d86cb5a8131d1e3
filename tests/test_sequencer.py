"""Tests for activity id parsing and renumbering."""

import pytest

from scheduler.sequencer import (
    first_available_number,
    is_dense,
    next_id,
    next_number,
    parse_id,
    renumber_after_mutation,
    unmanaged_ids,
)

from .conftest import make_activity


class TestParseId:
    """Test id structure parsing."""

    @pytest.mark.parametrize("activity_id,prefix,number", [
        ("A1", "A", 1),
        ("A12", "A", 12),
        ("PRJ-007", "PRJ-", 7),
        ("Q2X10", "Q2X", 10),
    ])
    def test_trailing_digit_run(self, activity_id, prefix, number):
        parsed = parse_id(activity_id)
        assert parsed.prefix == prefix
        assert parsed.number == number

    @pytest.mark.parametrize("activity_id", ["A", "12", "", "A1b"])
    def test_unmanaged(self, activity_id):
        """No prefix or no trailing digits -> not sequenced."""
        assert parse_id(activity_id) is None


class TestNextNumber:
    """Test next-number computation."""

    def test_unused_prefix_starts_at_one(self, two_activities):
        assert next_number(two_activities, "B") == 1

    def test_max_plus_one(self):
        collection = [make_activity("A1"), make_activity("A7"), make_activity("B9")]
        assert next_number(collection, "A") == 8
        assert next_id(collection, "B") == "B10"

    def test_prefix_must_match_exactly(self):
        collection = [make_activity("AB4")]
        assert next_number(collection, "A") == 1

    def test_first_available_fills_gaps(self):
        collection = [make_activity("A1"), make_activity("A3"), make_activity("A4")]
        assert first_available_number(collection, "A") == 2
        assert first_available_number(collection, "Z") == 1


class TestRenumber:
    """Test dense, date-ordered renumbering."""

    def test_closes_gap(self):
        """A1, A3, A4 -> A1, A2, A3 in PREP-date order."""
        collection = [
            make_activity("A1", prep="01/02/2025", go="05/02/2025"),
            make_activity("A3", prep="10/02/2025", go="14/02/2025"),
            make_activity("A4", prep="20/02/2025", go="24/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [a.activity_id for a in result] == ["A1", "A2", "A3"]
        assert is_dense(result, "A")

    def test_numbers_follow_prep_date_not_position(self):
        collection = [
            make_activity("A1", prep="20/02/2025", go="24/02/2025"),
            make_activity("A2", prep="01/02/2025", go="05/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [a.activity_id for a in result] == ["A2", "A1"]
        assert result[0].prep_date == "20/02/2025"

    def test_ties_keep_collection_order(self):
        collection = [
            make_activity("A9", "first", prep="01/02/2025", go="05/02/2025"),
            make_activity("A4", "second", prep="01/02/2025", go="06/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [(a.activity_name, a.activity_id) for a in result] == [("first", "A1"), ("second", "A2")]

    def test_groups_are_independent(self):
        collection = [
            make_activity("A2", prep="01/02/2025", go="05/02/2025"),
            make_activity("B5", prep="03/02/2025", go="07/02/2025"),
            make_activity("A5", prep="10/02/2025", go="14/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [a.activity_id for a in result] == ["A1", "B1", "A2"]

    def test_unmanaged_left_untouched(self):
        collection = [
            make_activity("misc", prep="01/02/2025", go="05/02/2025"),
            make_activity("A3", prep="10/02/2025", go="14/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [a.activity_id for a in result] == ["misc", "A1"]
        assert unmanaged_ids(result) == ["misc"]

    def test_scope_limits_groups(self):
        collection = [
            make_activity("A3", prep="01/02/2025", go="05/02/2025"),
            make_activity("B3", prep="10/02/2025", go="14/02/2025"),
        ]
        result = renumber_after_mutation(collection, {"A"})
        assert [a.activity_id for a in result] == ["A1", "B3"]

    def test_undated_rows_rank_last(self):
        collection = [
            make_activity("A1", prep="", go=""),
            make_activity("A2", prep="10/02/2025", go="14/02/2025"),
        ]
        result = renumber_after_mutation(collection)
        assert [a.activity_id for a in result] == ["A2", "A1"]

    def test_input_not_modified(self):
        collection = [make_activity("A5", prep="01/02/2025", go="05/02/2025")]
        renumber_after_mutation(collection)
        assert collection[0].activity_id == "A5"

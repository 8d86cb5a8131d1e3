"""Pytest configuration and shared fixtures."""

import pytest

from models import Activity, SchedulingPolicy
from scheduler import ActivityPlanner, CalendarFacts


def make_activity(activity_id="A1", name=None, prep="", go="", **kwargs) -> Activity:
    return Activity(
        activity_id=activity_id,
        activity_name=name or f"Activity {activity_id}",
        prep_date=prep,
        go_date=go,
        **kwargs
    )


@pytest.fixture
def calendar():
    return CalendarFacts()


@pytest.fixture
def planner():
    return ActivityPlanner()


@pytest.fixture
def strict_policy():
    return SchedulingPolicy.strict()


@pytest.fixture
def permissive_policy():
    return SchedulingPolicy.permissive()


@pytest.fixture
def two_activities():
    """A1 and A2 from the January 2025 end-to-end scenario."""
    return [
        make_activity("A1", "Kickoff", prep="01/01/2025", go="05/01/2025"),
        make_activity("A2", "Review", prep="10/01/2025", go="15/01/2025"),
    ]

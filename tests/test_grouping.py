"""Tests for grouping activities into date buckets."""

import uuid
from datetime import date, datetime
from types import SimpleNamespace

from app.services.itineraries.grouping import group_activities_by_date


def _activity(title: str, occurs_at: datetime):
    return SimpleNamespace(id=uuid.uuid4(), title=title, occurs_at=occurs_at)


def test_groups_same_day_activities_in_input_order():
    breakfast = _activity("Breakfast", datetime(2024, 1, 1, 9, 0))
    dinner = _activity("Dinner", datetime(2024, 1, 1, 18, 0))
    museum = _activity("Museum", datetime(2024, 1, 2, 10, 0))

    groups = group_activities_by_date([breakfast, dinner, museum])

    assert [g.date for g in groups] == [date(2024, 1, 1), date(2024, 1, 2)]
    assert [a.title for a in groups[0].activities] == ["Breakfast", "Dinner"]
    assert [a.title for a in groups[1].activities] == ["Museum"]


def test_keeps_time_of_day_on_entries():
    dinner = _activity("Dinner", datetime(2024, 1, 1, 18, 30))

    groups = group_activities_by_date([dinner])

    assert groups[0].activities[0].occurs_at == datetime(2024, 1, 1, 18, 30)
    assert groups[0].activities[0].id == dinner.id


def test_buckets_sorted_by_date_regardless_of_input_order():
    late = _activity("Late", datetime(2024, 3, 5, 8, 0))
    early = _activity("Early", datetime(2024, 3, 1, 20, 0))
    later_same_day = _activity("Later", datetime(2024, 3, 5, 7, 0))

    groups = group_activities_by_date([late, early, later_same_day])

    assert [g.date for g in groups] == [date(2024, 3, 1), date(2024, 3, 5)]
    # within the bucket input order wins over time of day
    assert [a.title for a in groups[1].activities] == ["Late", "Later"]


def test_empty_input_gives_empty_result():
    assert group_activities_by_date([]) == []


def test_is_deterministic():
    activities = [
        _activity("A", datetime(2024, 1, 2, 10, 0)),
        _activity("B", datetime(2024, 1, 1, 10, 0)),
    ]

    assert group_activities_by_date(activities) == group_activities_by_date(activities)

from collections import defaultdict
from typing import Iterable, List
from app.schemas.itineraries.activity import ActivityGroup, ActivityResponse


def group_activities_by_date(activities: Iterable) -> List[ActivityGroup]:
    """
    Bucket activities by the calendar date of ``occurs_at``.

    Buckets come out in ascending date order and keep the input order inside
    each bucket. Entries keep their full timestamp. Empty input gives an
    empty list.
    """
    grouped = defaultdict(list)
    for activity in activities:
        grouped[activity.occurs_at.date()].append(ActivityResponse.model_validate(activity))

    return [ActivityGroup(date=day, activities=grouped[day]) for day in sorted(grouped)]

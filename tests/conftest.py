"""Shared fixtures: a fixed clock and a SleepEvent factory."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
import pytz

from lullaby.services.sleep_events import SleepEvent

NOW = datetime(2025, 2, 1, 12, 0, tzinfo=timezone.utc)

# US clocks jump from 02:00 EST to 03:00 EDT on this morning
NEW_YORK = pytz.timezone("America/New_York")
SPRING_FORWARD_NOON = NEW_YORK.localize(datetime(2025, 3, 9, 12, 0))

_ids = count(1)


def at(day: int, hour: int, minute: int = 0) -> datetime:
    """UTC instant in Jan/Feb 2025; day 0 is Jan 31, day 1 is Feb 1, negative days go back."""
    return datetime(2025, 2, 1, tzinfo=timezone.utc) + timedelta(days=day - 1, hours=hour, minutes=minute)


def make_event(
    start: datetime,
    minutes=None,
    category=None,
    skipped=False,
    is_scheduled=False,
    in_progress=False,
):
    """Completed sleep of `minutes` from `start`, or in progress when in_progress=True."""
    end = None
    if not in_progress:
        end = start + timedelta(minutes=minutes or 0)
    return SleepEvent(
        id=f"sleep-{next(_ids)}",
        start_time=start,
        end_time=end,
        duration_minutes=None if in_progress else minutes,
        sleep_category=category,
        skipped=skipped,
        is_scheduled=is_scheduled,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def event_factory():
    return make_event

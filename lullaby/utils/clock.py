"""Clock helpers: minute/hour differences, hour-of-day maths, baby age."""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from pytz.tzinfo import BaseTzInfo

from ..core.constants import DAYS_PER_WEEK


# Used by: every public engine function when no `now` is injected
def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Used by: intervals.py, overdue.py, wake_windows.py, sleep_stats.py
def minutes_between(later: datetime, earlier: datetime) -> int:
    """Whole minutes from earlier to later, truncated toward zero."""
    seconds = (later - earlier).total_seconds()
    if not math.isfinite(seconds):
        raise ValueError(f"Invalid time difference between {earlier!r} and {later!r}")
    return int(seconds / 60)


# Used by: intervals.py
def hours_between(later: datetime, earlier: datetime) -> float:
    return minutes_between(later, earlier) / 60.0


# Used by: sleep_stats.py
def whole_hours_between(later: datetime, earlier: datetime) -> int:
    return int(minutes_between(later, earlier) / 60)


# Used by: sleep_patterns.py, sleep_quality.py, nap_schedule.py, sleep_actions.py
def hour_of_day(moment: datetime) -> float:
    """Clock time as decimal hours, e.g. 19:30 -> 19.5."""
    return moment.hour + moment.minute / 60.0


# Used by: start_of_day(), at_hour_of_day(), days_earlier(); wall-clock time back onto base's zone
def localize_wall_time(naive: datetime, tzinfo) -> datetime:
    """pytz zones need localize() so the offset matches the new date, not the old one."""
    if isinstance(tzinfo, BaseTzInfo):
        return tzinfo.normalize(tzinfo.localize(naive))
    return naive.replace(tzinfo=tzinfo)


# Used by: sleep_prediction.py, overdue.py, nap_schedule.py, sleep_actions.py; after timedelta arithmetic
def normalize(moment: datetime) -> datetime:
    if isinstance(moment.tzinfo, BaseTzInfo):
        return moment.tzinfo.normalize(moment)
    return moment


# Used by: at_hour_of_day(), sleep_stats.py
def start_of_day(moment: datetime) -> datetime:
    midnight = moment.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    return localize_wall_time(midnight, moment.tzinfo)


# Used by: sleep_patterns.py, sleep_quality.py, nap_schedule.py
def at_hour_of_day(base: datetime, hour: float) -> datetime:
    """Same calendar day as base at the given decimal hour; hours >= 24 roll into following days."""
    if not math.isfinite(hour):
        raise ValueError(f"Invalid hour of day: {hour}")
    total_minutes = math.floor(hour * 60 + 1e-6)
    midnight = base.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    return localize_wall_time(midnight + timedelta(minutes=total_minutes), base.tzinfo)


# Used by: sleep_patterns.py; same wall-clock time on an earlier day
def days_earlier(moment: datetime, days: int) -> datetime:
    return localize_wall_time(moment.replace(tzinfo=None) - timedelta(days=days), moment.tzinfo)


# Used by: sleep_prediction.py, wake_windows.py, sleep_quality.py, nap_schedule.py
def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (builtin round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


# Used by: sleep_patterns.py, wake_windows.py; reasoning strings
def format_hour(hour: float) -> str:
    """Decimal hour to "7 AM" / "6:30 PM"."""
    h = int(math.floor(hour)) % 24
    m = round_half_up((hour % 1) * 60)
    if m == 60:
        h, m = (h + 1) % 24, 0
    period = "PM" if h >= 12 else "AM"
    display_hour = h - 12 if h > 12 else (12 if h == 0 else h)
    if m > 0:
        return f"{display_hour}:{m:02d} {period}"
    return f"{display_hour} {period}"


# Used by: sleep_patterns.py, wake_windows.py, nap_schedule.py; "6 weeks old" / "unknown age"
def describe_age(age_days: Optional[int]) -> str:
    if age_days is None:
        return "unknown age"
    weeks = age_days // DAYS_PER_WEEK
    return f"{weeks} week{'' if weeks == 1 else 's'} old"


# Used by: sleep_analysis.py, sleep_patterns.py, wake_windows.py, nap_schedule.py, api/sleep.py
def age_in_days(
    birth_date: Optional[Union[datetime, date]],
    now: Optional[datetime] = None
) -> Optional[int]:
    """Whole days since birth; None when the birth date is unknown, 0 for future dates."""
    if birth_date is None:
        return None
    if now is None:
        now = utc_now()

    if isinstance(birth_date, datetime):
        if birth_date.tzinfo is None and now.tzinfo is not None:
            birth_date = birth_date.replace(tzinfo=timezone.utc)
        elif birth_date.tzinfo is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        seconds = (now - birth_date).total_seconds()
        days = int(seconds // 86400)
    else:
        days = (now.date() - birth_date).days

    return max(0, days)

"""Age-based pediatric sleep defaults: one ordered table per guideline."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, TypeVar

from ..core.constants import (
    SLEEP_INTERVAL_HOURS, SLEEP_INTERVAL_HOURS_OLDER, SLEEP_INTERVAL_HOURS_UNKNOWN,
    WAKE_WINDOW_SETTLING_HOURS, WAKE_WINDOW_MINUTES_UNKNOWN,
    WAKE_TIME_RANGES, WAKE_TIME_RANGE_OLDER, WAKE_TIME_RANGE_UNKNOWN,
    BEDTIME_RANGES, BEDTIME_RANGE_OLDER, BEDTIME_RANGE_UNKNOWN,
    NAP_COUNTS, NAP_COUNT_OLDER, NAP_COUNT_UNKNOWN,
    NAP_DURATION_MINUTES, NAP_DURATION_MINUTES_OLDER, NAP_DURATION_MINUTES_UNKNOWN,
    DAILY_SLEEP_GOAL_HOURS, DAILY_SLEEP_GOAL_HOURS_OLDER, DAILY_SLEEP_GOAL_HOURS_UNKNOWN,
    SLEEP_GUIDANCE, SLEEP_GUIDANCE_OLDER, SLEEP_GUIDANCE_UNKNOWN,
)
from ..utils.clock import round_half_up

T = TypeVar("T")


@dataclass(frozen=True)
class ClockRange:
    """Decimal hours from midnight."""
    early: float
    typical: float
    late: float


# Used by: every lookup below
def lookup_by_age(
    table: List[Tuple[int, T]],
    age_days: Optional[int],
    older: T,
    unknown: T
) -> T:
    """First row with max_age_days >= age_days; `older` past the last row, `unknown` for None."""
    if age_days is None:
        return unknown
    for max_age_days, value in table:
        if age_days <= max_age_days:
            return value
    return older


# Used by: sleep_prediction.py, wake_windows.py (via wake_window_minutes_for_age)
def interval_hours_for_age(age_days: Optional[int]) -> float:
    """Expected hours between consecutive sleep onsets."""
    return lookup_by_age(
        SLEEP_INTERVAL_HOURS, age_days,
        SLEEP_INTERVAL_HOURS_OLDER, SLEEP_INTERVAL_HOURS_UNKNOWN
    )


# Used by: wake_windows.py
def wake_window_minutes_for_age(age_days: Optional[int]) -> int:
    if age_days is None:
        return WAKE_WINDOW_MINUTES_UNKNOWN
    return round_half_up((interval_hours_for_age(age_days) - WAKE_WINDOW_SETTLING_HOURS) * 60)


# Used by: sleep_patterns.py (wake-time analyzer)
def wake_time_range_for_age(age_days: Optional[int]) -> ClockRange:
    return ClockRange(*lookup_by_age(
        WAKE_TIME_RANGES, age_days,
        WAKE_TIME_RANGE_OLDER, WAKE_TIME_RANGE_UNKNOWN
    ))


# Used by: sleep_patterns.py (bedtime analyzer)
def bedtime_range_for_age(age_days: Optional[int]) -> ClockRange:
    return ClockRange(*lookup_by_age(
        BEDTIME_RANGES, age_days,
        BEDTIME_RANGE_OLDER, BEDTIME_RANGE_UNKNOWN
    ))


# Used by: nap_schedule.py
def nap_count_for_age(age_days: Optional[int]) -> int:
    return lookup_by_age(NAP_COUNTS, age_days, NAP_COUNT_OLDER, NAP_COUNT_UNKNOWN)


# Used by: nap_schedule.py
def nap_duration_for_age(age_days: Optional[int], nap_index: int, total_naps: int) -> int:
    """Minutes for one nap; the first nap (and the middle one of three) runs longer."""
    if age_days is None:
        return NAP_DURATION_MINUTES_UNKNOWN
    longer, shorter = lookup_by_age(
        NAP_DURATION_MINUTES, age_days,
        NAP_DURATION_MINUTES_OLDER, None
    )
    is_earlier_nap = nap_index == 0 or (nap_index == 1 and total_naps == 3)
    return longer if is_earlier_nap else shorter


# Used by: nap_schedule.py
def total_daily_sleep_goal(age_days: Optional[int]) -> int:
    """Recommended total sleep per 24h, in hours."""
    return lookup_by_age(
        DAILY_SLEEP_GOAL_HOURS, age_days,
        DAILY_SLEEP_GOAL_HOURS_OLDER, DAILY_SLEEP_GOAL_HOURS_UNKNOWN
    )


# Used by: api/sleep.py (upcoming sleep guidance message)
def sleep_guidance_for_age(age_days: Optional[int]) -> str:
    return lookup_by_age(SLEEP_GUIDANCE, age_days, SLEEP_GUIDANCE_OLDER, SLEEP_GUIDANCE_UNKNOWN)

"""Overdue thresholds and status for a predicted sleep time."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.constants import (
    SLEEP_OVERDUE_THRESHOLDS, SLEEP_OVERDUE_THRESHOLD_OLDER,
    SOON_WINDOW_MAX_MINUTES, RECOVERY_INTERVAL_FACTOR,
)
from ..utils.clock import minutes_between, normalize, utc_now

logger = logging.getLogger(__name__)

SLEEP_ACTIVITY = "sleep"

STATUS_UPCOMING = "upcoming"
STATUS_SOON = "soon"
STATUS_OVERDUE = "overdue"

# (activity_type, age_days) -> minutes past the prediction before it counts as overdue
ThresholdPolicy = Callable[[str, Optional[int]], int]


# Used by: sleep_prediction.py, get_sleep_status(), is_sleep_overdue(); the default policy
def default_overdue_threshold(activity_type: str, age_days: Optional[int]) -> int:
    """Unknown age is treated as a newborn (strictest threshold)."""
    if activity_type != SLEEP_ACTIVITY:
        raise ValueError(f"No overdue threshold defined for activity type {activity_type!r}")

    age = age_days if age_days is not None else 0
    for max_age_days, minutes in SLEEP_OVERDUE_THRESHOLDS:
        if age <= max_age_days:
            return minutes
    return SLEEP_OVERDUE_THRESHOLD_OLDER


# Used by: api/sleep.py; parent-configured alarm threshold overrides the age table
def fixed_threshold(minutes: int) -> ThresholdPolicy:
    if minutes <= 0:
        raise ValueError(f"Overdue threshold must be positive, got {minutes}")

    def policy(activity_type: str, age_days: Optional[int]) -> int:
        return minutes

    return policy


# Used by: api/sleep.py; tooltip text for the upcoming-sleep card
def overdue_threshold_description(
    age_days: Optional[int],
    threshold_policy: ThresholdPolicy = default_overdue_threshold
) -> str:
    threshold = threshold_policy(SLEEP_ACTIVITY, age_days)
    age = age_days if age_days is not None else 0

    if age <= 7:
        context = "newborns sleep erratically"
    elif age <= 30:
        context = "young babies are still forming sleep patterns"
    elif age <= 90:
        context = "babies this age are developing patterns"
    else:
        context = "babies this age have more established schedules"

    return f"Marked overdue after {threshold} minutes because {context}"


# Used by: sleep_prediction.py, get_sleep_status(), is_sleep_overdue()
def minutes_until(next_sleep_time: datetime, now: datetime) -> int:
    return minutes_between(next_sleep_time, now)


# Used by: sleep_prediction.py
def evaluate_overdue(
    next_sleep_time: datetime,
    predicted_interval_hours: float,
    age_days: Optional[int],
    now: datetime,
    threshold_policy: ThresholdPolicy = default_overdue_threshold
):
    """Returns (is_overdue, overdue_minutes, suggested_recovery_time)."""
    threshold = threshold_policy(SLEEP_ACTIVITY, age_days)
    until = minutes_until(next_sleep_time, now)
    is_overdue = until < -threshold

    if not is_overdue:
        return False, None, None

    # Recovery nap comes sooner than a full interval
    recovery_hours = predicted_interval_hours * RECOVERY_INTERVAL_FACTOR
    suggested_recovery_time = normalize(now + timedelta(minutes=recovery_hours * 60))

    logger.debug(
        f"Sleep overdue by {abs(until)} min (threshold {threshold}), "
        f"recovery suggested at {suggested_recovery_time.isoformat()}"
    )
    return True, abs(until), suggested_recovery_time


# Used by: external alarm checks
def is_sleep_overdue(
    next_sleep_time: datetime,
    age_days: Optional[int],
    now: Optional[datetime] = None,
    threshold_policy: ThresholdPolicy = default_overdue_threshold
) -> bool:
    if now is None:
        now = utc_now()
    threshold = threshold_policy(SLEEP_ACTIVITY, age_days)
    return minutes_until(next_sleep_time, now) < -threshold


# Used by: api/sleep.py (POST /sleep/upcoming)
def get_sleep_status(
    next_sleep_time: datetime,
    age_days: Optional[int],
    now: Optional[datetime] = None,
    threshold_policy: ThresholdPolicy = default_overdue_threshold
) -> str:
    """Overdue past the threshold, soon within half of it (max 30 min), else upcoming."""
    if now is None:
        now = utc_now()
    threshold = threshold_policy(SLEEP_ACTIVITY, age_days)
    until = minutes_until(next_sleep_time, now)

    if until < -threshold:
        return STATUS_OVERDUE

    soon_threshold = min(SOON_WINDOW_MAX_MINUTES, threshold / 2)
    if until <= soon_threshold:
        return STATUS_SOON

    return STATUS_UPCOMING

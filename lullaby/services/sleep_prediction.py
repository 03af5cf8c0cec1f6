"""Predicts the next sleep onset by blending age guidelines with recent intervals."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from statistics import mean
from typing import List, Optional, Sequence

from ..core.constants import (
    PREDICTION_MAX_SESSIONS, PREDICTION_PATTERN_SIZE,
    HIGH_CONFIDENCE_MIN_INTERVALS, HIGH_CONFIDENCE_WEIGHTS, MEDIUM_CONFIDENCE_WEIGHTS,
    SUGGESTED_DURATION_MINUTES, SUGGESTED_DURATION_MINUTES_OLDER, SUGGESTED_DURATION_MINUTES_UNKNOWN,
    MAX_REALISTIC_SLEEP_MINUTES, DURATION_HIGH_SAMPLE_COUNT,
    DURATION_HIGH_WEIGHTS, DURATION_LOW_WEIGHTS,
)
from .age_guidelines import interval_hours_for_age, lookup_by_age
from .intervals import compute_intervals, valid_intervals
from .overdue import ThresholdPolicy, default_overdue_threshold, evaluate_overdue
from .sleep_events import SleepEvent, find_in_progress, most_recent_first
from ..utils.clock import normalize, round_half_up, utc_now

logger = logging.getLogger(__name__)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"


@dataclass
class SleepPatternEntry:
    time: datetime
    duration: Optional[int]
    interval_from_previous: Optional[float]


@dataclass
class SleepPrediction:
    next_sleep_time: datetime
    confidence_level: str  # "high", "medium", "low"
    interval_hours: float
    average_interval_hours: Optional[float]
    last_sleep_time: Optional[datetime]
    last_sleep_duration: Optional[int]  # minutes
    recent_pattern: List[SleepPatternEntry] = field(default_factory=list)
    is_overdue: bool = False
    overdue_minutes: Optional[int] = None
    suggested_recovery_time: Optional[datetime] = None
    suggested_duration: int = SUGGESTED_DURATION_MINUTES_UNKNOWN
    recent_skip_time: Optional[datetime] = None
    in_progress_since: Optional[datetime] = None


# Used by: suggest_sleep_duration()
def age_based_duration(age_days: Optional[int]) -> int:
    return lookup_by_age(
        SUGGESTED_DURATION_MINUTES, age_days,
        SUGGESTED_DURATION_MINUTES_OLDER, SUGGESTED_DURATION_MINUTES_UNKNOWN
    )


# Used by: predict_next_sleep(); pre-filled duration for the quick-log button
def suggest_sleep_duration(age_days: Optional[int], recent_sleeps: Sequence[SleepEvent]) -> int:
    """Recent average weighted 60/40 with 3+ realistic samples, 40/60 with fewer."""
    age_based = age_based_duration(age_days)

    durations = [
        s.duration_minutes for s in recent_sleeps
        if s.duration_minutes is not None and 0 < s.duration_minutes < MAX_REALISTIC_SLEEP_MINUTES
    ]
    if not durations:
        return age_based

    avg_duration = mean(durations)
    if len(durations) >= DURATION_HIGH_SAMPLE_COUNT:
        recent_weight, age_weight = DURATION_HIGH_WEIGHTS
    else:
        recent_weight, age_weight = DURATION_LOW_WEIGHTS

    return round_half_up(avg_duration * recent_weight + age_based * age_weight)


# Used by: predict_next_sleep()
def blend_interval(
    age_based: float,
    average_interval: Optional[float],
    last_interval: Optional[float],
    valid_count: int
):
    """Returns (predicted_hours, confidence)."""
    if valid_count >= HIGH_CONFIDENCE_MIN_INTERVALS:
        weights, confidence = HIGH_CONFIDENCE_WEIGHTS, HIGH
    elif valid_count >= 1:
        weights, confidence = MEDIUM_CONFIDENCE_WEIGHTS, MEDIUM
    else:
        return age_based, LOW

    age_weight, average_weight, last_weight = weights
    predicted = (
        age_based * age_weight
        + (average_interval if average_interval is not None else age_based) * average_weight
        + (last_interval if last_interval is not None else age_based) * last_weight
    )
    return predicted, confidence


# Used by: sleep_analysis.py, api/sleep.py (POST /sleep/upcoming)
def predict_next_sleep(
    events: Sequence[SleepEvent],
    age_days: Optional[int],
    now: Optional[datetime] = None,
    threshold_policy: ThresholdPolicy = default_overdue_threshold
) -> SleepPrediction:
    """Hybrid prediction: age baseline + recent average interval + last interval.

    Only completed, unscheduled sleeps feed the prediction. An in-progress
    sleep is reported through `in_progress_since` and never moves the
    anchor; the next sleep is projected from the end of the last completed
    one.
    """
    if now is None:
        now = utc_now()

    recent = most_recent_first(
        e for e in events if not e.is_scheduled and e.is_completed
    )[:PREDICTION_MAX_SESSIONS]

    skips = most_recent_first(e for e in events if e.skipped)
    recent_skip_time = skips[0].start_time if skips else None

    in_progress = find_in_progress(events)
    in_progress_since = in_progress.start_time if in_progress else None

    age_based = interval_hours_for_age(age_days)

    if not recent:
        logger.debug(f"No completed sleeps, using age-based interval of {age_based}h")
        return SleepPrediction(
            next_sleep_time=normalize(now + timedelta(hours=age_based)),
            confidence_level=LOW,
            interval_hours=age_based,
            average_interval_hours=None,
            last_sleep_time=None,
            last_sleep_duration=None,
            suggested_duration=suggest_sleep_duration(age_days, []),
            recent_skip_time=recent_skip_time,
            in_progress_since=in_progress_since,
        )

    last_sleep = recent[0]
    last_sleep_time = last_sleep.end_time
    last_sleep_duration = last_sleep.duration_minutes or None

    intervals = compute_intervals(recent)
    valid = valid_intervals(intervals)

    average_interval = mean(valid) if valid else None
    last_interval = valid[0] if valid else None

    predicted, confidence = blend_interval(age_based, average_interval, last_interval, len(valid))
    next_sleep_time = normalize(last_sleep_time + timedelta(minutes=predicted * 60))

    recent_pattern = [
        SleepPatternEntry(
            time=sleep.start_time,
            duration=sleep.duration_minutes or None,
            interval_from_previous=intervals[idx],
        )
        for idx, sleep in enumerate(recent[:PREDICTION_PATTERN_SIZE])
    ]

    is_overdue, overdue_minutes, suggested_recovery_time = evaluate_overdue(
        next_sleep_time=next_sleep_time,
        predicted_interval_hours=predicted,
        age_days=age_days,
        now=now,
        threshold_policy=threshold_policy,
    )

    logger.debug(
        f"Predicted next sleep at {next_sleep_time.isoformat()} "
        f"({predicted:.2f}h, {confidence} confidence, {len(valid)} valid intervals)"
    )

    return SleepPrediction(
        next_sleep_time=next_sleep_time,
        confidence_level=confidence,
        interval_hours=predicted,
        average_interval_hours=average_interval,
        last_sleep_time=last_sleep_time,
        last_sleep_duration=last_sleep_duration,
        recent_pattern=recent_pattern,
        is_overdue=is_overdue,
        overdue_minutes=overdue_minutes,
        suggested_recovery_time=suggested_recovery_time,
        suggested_duration=suggest_sleep_duration(age_days, recent),
        recent_skip_time=recent_skip_time,
        in_progress_since=in_progress_since,
    )

"""Recommends wake time and bedtime from recent night sleeps, falling back to age guidelines."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from statistics import mean, pstdev
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..core.constants import (
    PATTERN_LOOKBACK_DAYS, MODE_WEIGHT, MEAN_WEIGHT,
    PATTERN_HIGH_MIN_SAMPLES, PATTERN_MEDIUM_MIN_SAMPLES,
    PATTERN_HIGH_MAX_STD_HOURS, PATTERN_MEDIUM_MAX_STD_HOURS,
    TYPICAL_RANGE_HALF_WIDTH_HOURS,
)
from .age_guidelines import ClockRange, bedtime_range_for_age, wake_time_range_for_age
from .sleep_events import SleepEvent, observed_sleeps
from ..utils.clock import (
    age_in_days, at_hour_of_day, days_earlier, describe_age, format_hour, hour_of_day, round_half_up, utc_now,
)

logger = logging.getLogger(__name__)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"


@dataclass
class TimeRange:
    start: datetime
    end: datetime


@dataclass
class ClockTimeRecommendation:
    recommended_time: datetime
    confidence: str  # "high", "medium", "low"
    typical_range: TimeRange
    reasoning: str


# Same shape, kept as distinct names for callers
WakeTimeRecommendation = ClockTimeRecommendation
BedtimeRecommendation = ClockTimeRecommendation


@dataclass(frozen=True)
class _ClockTimeKind:
    """Which timestamp of a night sleep the analyzer reads, plus reasoning wording."""
    timestamp: Callable[[SleepEvent], Optional[datetime]]
    age_range: Callable[[Optional[int]], ClockRange]
    consistent_phrase: str
    typical_phrase: str


_WAKE = _ClockTimeKind(
    timestamp=lambda e: e.end_time,
    age_range=wake_time_range_for_age,
    consistent_phrase="consistent wake times",
    typical_phrase="wakes around",
)

_BEDTIME = _ClockTimeKind(
    timestamp=lambda e: e.start_time,
    age_range=bedtime_range_for_age,
    consistent_phrase="consistent bedtimes",
    typical_phrase="goes to sleep around",
)


# Used by: _analyze_clock_time(); rounded-hour mode, first-seen wins ties
def most_common_hour(hours: Sequence[float], default: float) -> float:
    counts: Dict[int, int] = {}
    for hour in hours:
        rounded = round_half_up(hour)
        counts[rounded] = counts.get(rounded, 0) + 1

    best_hour = default
    best_count = 0
    for hour, count in counts.items():
        if count > best_count:
            best_count = count
            best_hour = hour
    return best_hour


# Used by: _analyze_clock_time()
def pattern_confidence(hours: Sequence[float]) -> str:
    """High/medium need 10+ samples with a tight spread; 5-9 samples is medium."""
    count = len(hours)
    if count >= PATTERN_HIGH_MIN_SAMPLES:
        std_dev = pstdev(hours)
        if std_dev < PATTERN_HIGH_MAX_STD_HOURS:
            return HIGH
        if std_dev < PATTERN_MEDIUM_MAX_STD_HOURS:
            return MEDIUM
        return LOW
    if count >= PATTERN_MEDIUM_MIN_SAMPLES:
        return MEDIUM
    return LOW


# Used by: _analyze_clock_time(); recommendations describe a time of day already lived
def _not_in_future(moment: datetime, now: datetime) -> datetime:
    if moment > now:
        return days_earlier(moment, 1)
    return moment


# Used by: _analyze_clock_time()
def _clamped_hour(hour: float) -> float:
    return min(23.0, max(0.0, hour))


def _age_based_recommendation(
    kind: _ClockTimeKind,
    age_days: Optional[int],
    now: datetime
) -> ClockTimeRecommendation:
    age_range = kind.age_range(age_days)
    recommended = _not_in_future(at_hour_of_day(now, age_range.typical), now)

    return ClockTimeRecommendation(
        recommended_time=recommended,
        confidence=LOW,
        typical_range=TimeRange(
            start=at_hour_of_day(recommended, age_range.early),
            end=at_hour_of_day(recommended, age_range.late),
        ),
        reasoning=(
            f"Based on age guidelines ({describe_age(age_days)}). "
            f"Start tracking sleep to get personalized recommendations."
        ),
    )


def _reasoning(kind: _ClockTimeKind, count: int, confidence: str, hour: float) -> str:
    if confidence == HIGH:
        return (
            f"Based on {count} nights of {kind.consistent_phrase} ({confidence} confidence). "
            f"Your baby typically {kind.typical_phrase} {format_hour(hour)}."
        )
    if confidence == MEDIUM:
        return (
            f"Based on {count} nights of data ({confidence} confidence). "
            f"Your baby typically {kind.typical_phrase} {format_hour(hour)}. "
            f"More data will improve accuracy."
        )
    return (
        f"Based on {count} night{'' if count == 1 else 's'} of data ({confidence} confidence). "
        f"Keep tracking for better recommendations."
    )


def _analyze_clock_time(
    kind: _ClockTimeKind,
    events: Sequence[SleepEvent],
    birth_date: Optional[Union[datetime, date]],
    lookback_days: int,
    now: Optional[datetime]
) -> ClockTimeRecommendation:
    if now is None:
        now = utc_now()
    cutoff = now - timedelta(days=lookback_days)
    age_days = age_in_days(birth_date, now)

    timestamps: List[datetime] = []
    for event in observed_sleeps(events):
        if not event.is_night:
            continue
        moment = kind.timestamp(event)
        if moment is not None and cutoff <= moment <= now:
            timestamps.append(moment)

    if not timestamps:
        logger.debug(f"No night sleeps in the last {lookback_days} days, using age guidelines")
        return _age_based_recommendation(kind, age_days, now)

    hours = [hour_of_day(t) for t in timestamps]
    avg_hour = mean(hours)
    mode_hour = most_common_hour(hours, default=kind.age_range(age_days).typical)
    recommended_hour = mode_hour * MODE_WEIGHT + avg_hour * MEAN_WEIGHT

    if not math.isfinite(recommended_hour):
        raise ValueError(f"Non-finite recommended hour from {len(hours)} samples")

    confidence = pattern_confidence(hours)
    recommended = _not_in_future(at_hour_of_day(now, recommended_hour), now)

    typical_range = TimeRange(
        start=at_hour_of_day(recommended, _clamped_hour(recommended_hour - TYPICAL_RANGE_HALF_WIDTH_HOURS)),
        end=at_hour_of_day(recommended, _clamped_hour(recommended_hour + TYPICAL_RANGE_HALF_WIDTH_HOURS)),
    )

    return ClockTimeRecommendation(
        recommended_time=recommended,
        confidence=confidence,
        typical_range=typical_range,
        reasoning=_reasoning(kind, len(hours), confidence, recommended_hour),
    )


# Used by: sleep_analysis.py
def analyze_optimal_wake_time(
    events: Sequence[SleepEvent],
    birth_date: Optional[Union[datetime, date]],
    lookback_days: int = PATTERN_LOOKBACK_DAYS,
    now: Optional[datetime] = None
) -> WakeTimeRecommendation:
    """Morning wake time from the end times of completed night sleeps."""
    return _analyze_clock_time(_WAKE, events, birth_date, lookback_days, now)


# Used by: sleep_analysis.py
def analyze_optimal_bedtime(
    events: Sequence[SleepEvent],
    birth_date: Optional[Union[datetime, date]],
    lookback_days: int = PATTERN_LOOKBACK_DAYS,
    now: Optional[datetime] = None
) -> BedtimeRecommendation:
    """Bedtime from the start times of night sleeps, including one still in progress."""
    return _analyze_clock_time(_BEDTIME, events, birth_date, lookback_days, now)

"""Night sleep quality: averages, a 0-100 consistency score and a duration trend."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from statistics import mean, pvariance
from typing import Optional, Sequence

from ..core.constants import (
    PATTERN_LOOKBACK_DAYS, MAX_CLOCK_TIME_VARIANCE, MAX_DURATION_VARIANCE_FACTOR,
    TREND_MIN_SAMPLES, TREND_IMPROVING_THRESHOLD_PCT, TREND_DECLINING_THRESHOLD_PCT,
)
from .sleep_events import SleepEvent, observed_sleeps, oldest_first
from ..utils.clock import at_hour_of_day, hour_of_day, round_half_up, utc_now

IMPROVING = "improving"
STABLE = "stable"
DECLINING = "declining"


@dataclass
class SleepQualityMetrics:
    average_duration_minutes: Optional[float]
    average_wake_time: Optional[datetime]
    average_bedtime: Optional[datetime]
    consistency_score: int  # 0-100
    quality_trend: str  # "improving", "stable", "declining"


# Used by: consistency_score()
def _sub_score(variance: float, cap: float) -> float:
    if cap <= 0:
        return 100.0 if variance == 0 else 0.0
    return max(0.0, 100 * (1 - min(1.0, variance / cap)))


# Used by: analyze_night_sleep_quality()
def consistency_score(bedtimes: Sequence[float], wake_times: Sequence[float], durations: Sequence[float]) -> int:
    """Mean of three sub-scores; lower variance in each scores higher."""
    average_duration = mean(durations)
    scores = [
        _sub_score(pvariance(bedtimes), MAX_CLOCK_TIME_VARIANCE),
        _sub_score(pvariance(wake_times), MAX_CLOCK_TIME_VARIANCE),
        _sub_score(pvariance(durations), average_duration * MAX_DURATION_VARIANCE_FACTOR),
    ]
    return round_half_up(mean(scores))


# Used by: analyze_night_sleep_quality()
def duration_trend(durations: Sequence[float]) -> str:
    """Second half vs first half of a chronological list, ±5% is stable."""
    if len(durations) < TREND_MIN_SAMPLES:
        return STABLE

    half = len(durations) // 2
    first_avg = mean(durations[:half])
    second_avg = mean(durations[half:])
    if first_avg <= 0:
        return STABLE

    change = (second_avg - first_avg) / first_avg * 100
    if change > TREND_IMPROVING_THRESHOLD_PCT:
        return IMPROVING
    if change < TREND_DECLINING_THRESHOLD_PCT:
        return DECLINING
    return STABLE


# Used by: sleep_analysis.py
def analyze_night_sleep_quality(
    events: Sequence[SleepEvent],
    lookback_days: int = PATTERN_LOOKBACK_DAYS,
    now: Optional[datetime] = None
) -> SleepQualityMetrics:
    if now is None:
        now = utc_now()
    cutoff = now - timedelta(days=lookback_days)

    nights = oldest_first(
        e for e in observed_sleeps(events)
        if e.is_night and e.is_completed and e.duration_minutes and e.start_time >= cutoff
    )

    if not nights:
        return SleepQualityMetrics(
            average_duration_minutes=None,
            average_wake_time=None,
            average_bedtime=None,
            consistency_score=0,
            quality_trend=STABLE,
        )

    durations = [e.duration_minutes for e in nights]
    bedtimes = [hour_of_day(e.start_time) for e in nights]
    wake_times = [hour_of_day(e.end_time) for e in nights]

    return SleepQualityMetrics(
        average_duration_minutes=mean(durations),
        average_wake_time=at_hour_of_day(now, mean(wake_times)),
        average_bedtime=at_hour_of_day(now, mean(bedtimes)),
        consistency_score=consistency_score(bedtimes, wake_times, durations),
        quality_trend=duration_trend(durations),
    )

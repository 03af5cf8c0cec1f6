"""Daily sleep totals, period-over-period comparison and per-day trend points."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from statistics import mean
from typing import Dict, List, Optional, Sequence

from ..core.constants import STATS_COMPARISON_HOURS, STATS_TREND_DAYS
from .sleep_events import SleepEvent, observed_sleeps, oldest_first
from ..utils.clock import minutes_between, start_of_day, utc_now, whole_hours_between


@dataclass
class TodaysSleepStats:
    sleep_count: int
    total_sleep_minutes: int
    avg_sleep_duration: Optional[float]
    longest_sleep_minutes: Optional[int]
    avg_interval_hours: Optional[float]


@dataclass
class PeriodSleepStats:
    sleep_count: int
    total_minutes: int
    avg_sleep_duration: Optional[float]


@dataclass
class SleepStatsChange:
    """Percent change vs the previous period; None when there is nothing to compare to."""
    sleep_count: Optional[float]
    total_minutes: Optional[float]
    avg_sleep_duration: Optional[float]


@dataclass
class SleepStatsComparison:
    current: PeriodSleepStats
    previous: PeriodSleepStats
    percentage_change: SleepStatsChange


@dataclass
class DailySleepTrendPoint:
    date: date
    count: int
    total_minutes: int


# Used by: calculate_todays_sleep_stats(), _period_stats()
def sleep_minutes(event: SleepEvent, now: datetime) -> int:
    """Recorded duration, falling back to the timestamps; in-progress sleeps count elapsed minutes."""
    if event.is_in_progress:
        return max(0, minutes_between(now, event.start_time))
    if event.duration_minutes is not None:
        return event.duration_minutes
    return minutes_between(event.end_time, event.start_time)


# Used by: api/sleep.py (POST /sleep/stats)
def calculate_todays_sleep_stats(
    events: Sequence[SleepEvent],
    now: Optional[datetime] = None
) -> TodaysSleepStats:
    """Sleeps that ended today (full length, even if they began yesterday) plus any in progress."""
    if now is None:
        now = utc_now()
    today = start_of_day(now)

    todays = [
        e for e in observed_sleeps(events)
        if (e.is_completed and e.end_time >= today) or (e.is_in_progress and e.start_time < now)
    ]
    if not todays:
        return TodaysSleepStats(
            sleep_count=0,
            total_sleep_minutes=0,
            avg_sleep_duration=None,
            longest_sleep_minutes=None,
            avg_interval_hours=None,
        )

    minutes = [sleep_minutes(e, now) for e in todays]
    total = sum(minutes)

    ordered = oldest_first(todays)
    intervals = [
        whole_hours_between(current.start_time, previous.start_time)
        for previous, current in zip(ordered, ordered[1:])
    ]
    intervals = [h for h in intervals if h > 0]

    return TodaysSleepStats(
        sleep_count=len(todays),
        total_sleep_minutes=total,
        avg_sleep_duration=total / len(todays),
        longest_sleep_minutes=max(minutes),
        avg_interval_hours=mean(intervals) if intervals else None,
    )


def _period_stats(events: Sequence[SleepEvent], start: datetime, end: datetime, now: datetime) -> PeriodSleepStats:
    in_period = [e for e in events if start <= e.start_time < end]
    total = sum(sleep_minutes(e, now) for e in in_period if e.is_completed)
    return PeriodSleepStats(
        sleep_count=len(in_period),
        total_minutes=total,
        avg_sleep_duration=total / len(in_period) if in_period else None,
    )


# Used by: calculate_sleep_stats_with_comparison()
def percentage_change(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


# Used by: api/sleep.py (POST /sleep/stats)
def calculate_sleep_stats_with_comparison(
    events: Sequence[SleepEvent],
    time_range_hours: int = STATS_COMPARISON_HOURS,
    now: Optional[datetime] = None
) -> SleepStatsComparison:
    """Last `time_range_hours` vs the same span right before it, bucketed by start time."""
    if now is None:
        now = utc_now()
    span = timedelta(hours=time_range_hours)
    current_start = now - span
    previous_start = now - 2 * span

    sleeps = observed_sleeps(events)
    current = _period_stats(sleeps, current_start, now, now)
    previous = _period_stats(sleeps, previous_start, current_start, now)

    return SleepStatsComparison(
        current=current,
        previous=previous,
        percentage_change=SleepStatsChange(
            sleep_count=percentage_change(current.sleep_count, previous.sleep_count),
            total_minutes=percentage_change(current.total_minutes, previous.total_minutes),
            avg_sleep_duration=percentage_change(current.avg_sleep_duration, previous.avg_sleep_duration),
        ),
    )


# Used by: api/sleep.py (POST /sleep/stats); chart data
def calculate_sleep_trend_data(
    events: Sequence[SleepEvent],
    days: int = STATS_TREND_DAYS,
    now: Optional[datetime] = None
) -> List[DailySleepTrendPoint]:
    """One point per calendar day (by start time), oldest first, empty days included."""
    if now is None:
        now = utc_now()
    cutoff = now - timedelta(days=days)

    totals: Dict[date, DailySleepTrendPoint] = {}
    for event in observed_sleeps(events):
        if event.start_time < cutoff or event.is_in_progress:
            continue
        day = event.start_time.date()
        point = totals.setdefault(day, DailySleepTrendPoint(date=day, count=0, total_minutes=0))
        point.count += 1
        point.total_minutes += sleep_minutes(event, now)

    points = []
    for offset in range(days - 1, -1, -1):
        day = (now - timedelta(days=offset)).date()
        points.append(totals.get(day, DailySleepTrendPoint(date=day, count=0, total_minutes=0)))
    return points

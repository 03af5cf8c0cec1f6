"""Wake window length: age guideline blended with the measured awake time between sleeps."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from statistics import mean
from typing import List, Optional, Sequence, Union

from ..core.constants import (
    WAKE_WINDOW_LOOKBACK_DAYS, MAX_WAKE_WINDOW_MINUTES,
    WAKE_WINDOW_HIGH_MIN_GAPS, WAKE_WINDOW_MEDIUM_MIN_GAPS,
    WAKE_WINDOW_HIGH_WEIGHT, WAKE_WINDOW_MEDIUM_WEIGHT, WAKE_WINDOW_LOW_WEIGHT,
)
from .age_guidelines import wake_window_minutes_for_age
from .sleep_events import SleepEvent, observed_sleeps, oldest_first
from ..utils.clock import age_in_days, describe_age, minutes_between, round_half_up, utc_now

logger = logging.getLogger(__name__)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"


@dataclass
class WakeWindowResult:
    window_minutes: int
    confidence: str  # "high", "medium", "low"
    age_based_minutes: int
    pattern_based_minutes: Optional[int]
    reasoning: str


# Used by: calculate_wake_windows()
def measure_wake_gaps(sleeps: Sequence[SleepEvent]) -> List[int]:
    """Minutes awake between each sleep's end and the next sleep's start (sorted oldest first)."""
    gaps = []
    for previous, current in zip(sleeps, sleeps[1:]):
        gap = minutes_between(current.start_time, previous.end_time)
        if 0 < gap < MAX_WAKE_WINDOW_MINUTES:
            gaps.append(gap)
    return gaps


# Used by: calculate_wake_windows()
def pattern_weight(gap_count: int):
    """Returns (weight, confidence) for the measured average."""
    if gap_count >= WAKE_WINDOW_HIGH_MIN_GAPS:
        return WAKE_WINDOW_HIGH_WEIGHT, HIGH
    if gap_count >= WAKE_WINDOW_MEDIUM_MIN_GAPS:
        return WAKE_WINDOW_MEDIUM_WEIGHT, MEDIUM
    return WAKE_WINDOW_LOW_WEIGHT, LOW


def _hours_label(minutes: int) -> str:
    return f"{round_half_up(minutes / 60 * 10) / 10:g}"


# Used by: sleep_analysis.py
def calculate_wake_windows(
    events: Sequence[SleepEvent],
    birth_date: Optional[Union[datetime, date]],
    lookback_days: int = WAKE_WINDOW_LOOKBACK_DAYS,
    now: Optional[datetime] = None
) -> WakeWindowResult:
    if now is None:
        now = utc_now()
    cutoff = now - timedelta(days=lookback_days)
    age_days = age_in_days(birth_date, now)
    age_based_minutes = wake_window_minutes_for_age(age_days)

    sleeps = oldest_first(
        e for e in observed_sleeps(events)
        if e.is_completed and e.start_time >= cutoff
    )

    if len(sleeps) < 2:
        return WakeWindowResult(
            window_minutes=age_based_minutes,
            confidence=LOW,
            age_based_minutes=age_based_minutes,
            pattern_based_minutes=None,
            reasoning=(
                f"Based on age guidelines ({describe_age(age_days)}). "
                f"Track more sleep sessions for personalized recommendations."
            ),
        )

    gaps = measure_wake_gaps(sleeps)
    if not gaps:
        logger.debug(f"No realistic wake gaps among {len(sleeps)} sleeps, using age guidelines")
        return WakeWindowResult(
            window_minutes=age_based_minutes,
            confidence=LOW,
            age_based_minutes=age_based_minutes,
            pattern_based_minutes=None,
            reasoning="Based on age guidelines. Track more sleep sessions for personalized wake windows.",
        )

    pattern_based_minutes = round_half_up(mean(gaps))
    weight, confidence = pattern_weight(len(gaps))
    window_minutes = round_half_up(age_based_minutes * (1 - weight) + pattern_based_minutes * weight)

    if confidence == HIGH:
        reasoning = (
            f"Based on {len(gaps)} recent wake windows. Your baby typically stays awake "
            f"for about {_hours_label(window_minutes)} hours between sleeps."
        )
    elif confidence == MEDIUM:
        reasoning = (
            f"Based on {len(gaps)} recent wake windows. "
            f"Recommended awake time: {_hours_label(window_minutes)} hours."
        )
    else:
        reasoning = (
            f"Based on {len(gaps)} wake window{'' if len(gaps) == 1 else 's'}. "
            f"More data will improve accuracy."
        )

    return WakeWindowResult(
        window_minutes=window_minutes,
        confidence=confidence,
        age_based_minutes=age_based_minutes,
        pattern_based_minutes=pattern_based_minutes,
        reasoning=reasoning,
    )

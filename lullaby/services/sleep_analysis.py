"""Runs every sleep analyzer against one snapshot and one clock reading."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..core.constants import PATTERN_LOOKBACK_DAYS, WAKE_WINDOW_LOOKBACK_DAYS
from .nap_schedule import NapRecommendation, find_best_daytime_nap_times
from .overdue import ThresholdPolicy, default_overdue_threshold
from .sleep_events import SleepEvent
from .sleep_patterns import (
    BedtimeRecommendation, WakeTimeRecommendation, analyze_optimal_bedtime, analyze_optimal_wake_time,
)
from .sleep_prediction import SleepPrediction, predict_next_sleep
from .sleep_quality import SleepQualityMetrics, analyze_night_sleep_quality
from .wake_windows import WakeWindowResult, calculate_wake_windows
from ..utils.clock import age_in_days, utc_now

logger = logging.getLogger(__name__)


@dataclass
class SleepAnalysis:
    age_days: Optional[int]
    prediction: SleepPrediction
    wake_time: WakeTimeRecommendation
    bedtime: BedtimeRecommendation
    wake_window: WakeWindowResult
    quality: SleepQualityMetrics
    naps: NapRecommendation


# Used by: api/sleep.py (POST /sleep/analysis)
def analyze_sleep(
    events: Sequence[SleepEvent],
    birth_date: Optional[Union[datetime, date]],
    now: Optional[datetime] = None,
    threshold_policy: ThresholdPolicy = default_overdue_threshold,
    pattern_lookback_days: int = PATTERN_LOOKBACK_DAYS,
    wake_window_lookback_days: int = WAKE_WINDOW_LOOKBACK_DAYS
) -> SleepAnalysis:
    """Full sleep picture for one child.

    The nap schedule is laid out between the recommended wake time and
    bedtime, so it always agrees with them.
    """
    if now is None:
        now = utc_now()
    age_days = age_in_days(birth_date, now)

    prediction = predict_next_sleep(events, age_days, now=now, threshold_policy=threshold_policy)
    wake_time = analyze_optimal_wake_time(events, birth_date, lookback_days=pattern_lookback_days, now=now)
    bedtime = analyze_optimal_bedtime(events, birth_date, lookback_days=pattern_lookback_days, now=now)
    wake_window = calculate_wake_windows(events, birth_date, lookback_days=wake_window_lookback_days, now=now)
    quality = analyze_night_sleep_quality(events, lookback_days=pattern_lookback_days, now=now)

    naps = find_best_daytime_nap_times(
        birth_date,
        bedtime=bedtime.recommended_time,
        wake_time=wake_time.recommended_time,
        now=now,
    )

    logger.info(
        f"Sleep analysis: {len(events)} events, age {age_days} days, "
        f"prediction {prediction.confidence_level}, wake {wake_time.confidence}, "
        f"bedtime {bedtime.confidence}, quality score {quality.consistency_score}"
    )

    return SleepAnalysis(
        age_days=age_days,
        prediction=prediction,
        wake_time=wake_time,
        bedtime=bedtime,
        wake_window=wake_window,
        quality=quality,
        naps=naps,
    )

"""Spreads the age-recommended naps evenly between wake time and bedtime."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from ..core.constants import EXPECTED_NIGHT_SLEEP_HOURS
from .age_guidelines import nap_count_for_age, nap_duration_for_age, total_daily_sleep_goal
from ..utils.clock import age_in_days, at_hour_of_day, hour_of_day, normalize, utc_now

NAP_PRIORITIES = ("high", "medium")
LOWEST_PRIORITY = "low"


@dataclass
class NapSlot:
    start: datetime
    end: datetime
    priority: str  # "high", "medium", "low"


@dataclass
class NapRecommendation:
    naps: List[NapSlot] = field(default_factory=list)
    total_daytime_sleep_minutes: int = 0
    reasoning: str = ""


# Used by: find_best_daytime_nap_times()
def nap_priority(nap_index: int) -> str:
    """Earlier naps matter most for night sleep."""
    if nap_index < len(NAP_PRIORITIES):
        return NAP_PRIORITIES[nap_index]
    return LOWEST_PRIORITY


# Used by: sleep_analysis.py
def find_best_daytime_nap_times(
    birth_date: Optional[Union[datetime, date]],
    bedtime: datetime,
    wake_time: datetime,
    now: Optional[datetime] = None
) -> NapRecommendation:
    if now is None:
        now = utc_now()
    age_days = age_in_days(birth_date, now)
    nap_count = nap_count_for_age(age_days)

    wake_hour = hour_of_day(wake_time)
    hours_awake = hour_of_day(bedtime) - wake_hour
    if hours_awake < 0:
        hours_awake += 24
    spacing = hours_awake / (nap_count + 1)

    naps = []
    for i in range(nap_count):
        start = at_hour_of_day(wake_time, wake_hour + spacing * (i + 1))
        duration = nap_duration_for_age(age_days, i, nap_count)
        naps.append(NapSlot(
            start=start,
            end=normalize(start + timedelta(minutes=duration)),
            priority=nap_priority(i),
        ))

    daytime_hours = max(0, total_daily_sleep_goal(age_days) - EXPECTED_NIGHT_SLEEP_HOURS)
    age_label = f"{age_days // 7} weeks" if age_days is not None else "unknown"

    return NapRecommendation(
        naps=naps,
        total_daytime_sleep_minutes=daytime_hours * 60,
        reasoning=(
            f"Based on your baby's age ({age_label}), recommended {nap_count} "
            f"nap{'' if nap_count == 1 else 's'} spaced throughout the day. "
            f"Earlier naps support better night sleep."
        ),
    )

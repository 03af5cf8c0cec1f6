"""SleepEvent value type and the snapshot filters shared by every analyzer."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

NAP = "nap"
NIGHT = "night"
SLEEP_CATEGORIES = (NAP, NIGHT)


class InvalidSleepEventError(ValueError):
    """Raised for records that break the input contract (bad timestamps, skip without end)."""


@dataclass(frozen=True)
class SleepEvent:
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    sleep_category: Optional[str] = None  # "nap", "night" or unset
    skipped: bool = False
    is_scheduled: bool = False

    def __post_init__(self):
        if not isinstance(self.start_time, datetime):
            raise InvalidSleepEventError(f"Sleep {self.id}: start_time must be a datetime")
        if self.end_time is not None:
            if not isinstance(self.end_time, datetime):
                raise InvalidSleepEventError(f"Sleep {self.id}: end_time must be a datetime")
            try:
                ends_before_start = self.end_time < self.start_time
            except TypeError as e:
                raise InvalidSleepEventError(f"Sleep {self.id}: {e}") from e
            if ends_before_start:
                raise InvalidSleepEventError(f"Sleep {self.id}: end_time is before start_time")
        if self.duration_minutes is not None:
            if not math.isfinite(self.duration_minutes) or self.duration_minutes < 0:
                raise InvalidSleepEventError(
                    f"Sleep {self.id}: invalid duration {self.duration_minutes!r}"
                )
        if self.sleep_category is not None and self.sleep_category not in SLEEP_CATEGORIES:
            raise InvalidSleepEventError(
                f"Sleep {self.id}: unknown sleep category {self.sleep_category!r}"
            )
        if self.skipped and self.end_time is None:
            raise InvalidSleepEventError(f"Sleep {self.id}: a skipped sleep must have an end_time")

    @property
    def is_in_progress(self) -> bool:
        return self.end_time is None

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

    @property
    def is_night(self) -> bool:
        return self.sleep_category == NIGHT


# Used by: sleep_prediction.py, sleep_stats.py
def most_recent_first(events: Iterable[SleepEvent]) -> List[SleepEvent]:
    return sorted(events, key=lambda e: e.start_time, reverse=True)


# Used by: wake_windows.py, sleep_quality.py, sleep_stats.py
def oldest_first(events: Iterable[SleepEvent]) -> List[SleepEvent]:
    return sorted(events, key=lambda e: e.start_time)


# Used by: sleep_prediction.py; in-progress session stays visible to the caller
def find_in_progress(events: Iterable[SleepEvent]) -> Optional[SleepEvent]:
    in_progress = [e for e in events if e.is_in_progress]
    if not in_progress:
        return None
    if len(in_progress) > 1:
        logger.warning(f"Found {len(in_progress)} in-progress sleeps, using the most recent")
    return max(in_progress, key=lambda e: e.start_time)


# Used by: sleep_patterns.py, sleep_quality.py, wake_windows.py, sleep_stats.py
def observed_sleeps(events: Iterable[SleepEvent]) -> List[SleepEvent]:
    """Sleeps that actually happened; skips are dismissal markers, not observations."""
    return [e for e in events if not e.skipped]

"""Builds the sleep records that skip, quick-log and stop actions hand to storage."""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import (
    QUICK_LOG_MIN_MINUTES, QUICK_LOG_MAX_MINUTES, NAP_HOURS_START, NAP_HOURS_END,
)
from .sleep_events import NAP, NIGHT, InvalidSleepEventError, SleepEvent
from ..utils.clock import minutes_between, normalize, utc_now

logger = logging.getLogger(__name__)


# Used by: build_skip_event(), build_quick_log_event()
def classify_sleep_category(moment: datetime) -> str:
    if NAP_HOURS_START <= moment.hour < NAP_HOURS_END:
        return NAP
    return NIGHT


def _new_id() -> str:
    return str(uuid.uuid4())


# Used by: api/sleep.py (POST /sleep/skip)
def build_skip_event(now: Optional[datetime] = None) -> SleepEvent:
    """Zero-length completed record; the predictor's clock restarts from it."""
    if now is None:
        now = utc_now()
    event = SleepEvent(
        id=_new_id(),
        start_time=now,
        end_time=now,
        duration_minutes=0,
        sleep_category=classify_sleep_category(now),
        skipped=True,
    )
    logger.info(f"Built skip record {event.id} at {now.isoformat()}")
    return event


# Used by: api/sleep.py (POST /sleep/quick-log)
def build_quick_log_event(
    duration_minutes: int,
    end_time: Optional[datetime] = None,
    now: Optional[datetime] = None
) -> SleepEvent:
    if not QUICK_LOG_MIN_MINUTES <= duration_minutes <= QUICK_LOG_MAX_MINUTES:
        raise ValueError(
            f"Quick-log duration must be between {QUICK_LOG_MIN_MINUTES} and "
            f"{QUICK_LOG_MAX_MINUTES} minutes, got {duration_minutes}"
        )
    if now is None:
        now = utc_now()
    if end_time is None:
        end_time = now

    start_time = normalize(end_time - timedelta(minutes=duration_minutes))
    return SleepEvent(
        id=_new_id(),
        start_time=start_time,
        end_time=end_time,
        duration_minutes=duration_minutes,
        sleep_category=classify_sleep_category(start_time),
    )


# Used by: api/sleep.py callers that end the running timer
def stop_in_progress_sleep(event: SleepEvent, now: Optional[datetime] = None) -> SleepEvent:
    if not event.is_in_progress:
        raise InvalidSleepEventError(f"Sleep {event.id} is not in progress")
    if now is None:
        now = utc_now()
    if now < event.start_time:
        raise InvalidSleepEventError(f"Sleep {event.id} starts after {now.isoformat()}")

    return replace(
        event,
        end_time=now,
        duration_minutes=minutes_between(now, event.start_time),
    )

"""
Sleep API: next-sleep prediction, pattern analysis, stats and record builders.

Every request carries the sleep snapshot it is about; nothing is stored here.

Routes (/sleep):
  POST /upcoming     - Next sleep prediction, status and age guidance (72h lookback)
  POST /skip         - Skip record to persist when a parent dismisses a predicted sleep
  POST /quick-log    - Completed record for a sleep logged after the fact
  POST /stop         - Completed copy of an in-progress sleep
  POST /analysis     - Prediction, wake time, bedtime, wake window, quality and naps
  POST /stats        - Today's totals, period comparison and per-day trend
  GET  /guidelines   - Age-based defaults for one age
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

import pytz
from fastapi import APIRouter, HTTPException, Query

from ..core.settings import settings
from ..services.age_guidelines import (
    bedtime_range_for_age, interval_hours_for_age, nap_count_for_age, nap_duration_for_age,
    sleep_guidance_for_age, total_daily_sleep_goal, wake_time_range_for_age, wake_window_minutes_for_age,
)
from ..services.overdue import (
    SLEEP_ACTIVITY, default_overdue_threshold, fixed_threshold, get_sleep_status, overdue_threshold_description,
)
from ..services.sleep_actions import build_quick_log_event, build_skip_event, stop_in_progress_sleep
from ..services.sleep_analysis import analyze_sleep
from ..services.sleep_events import InvalidSleepEventError, SleepEvent
from ..services.sleep_prediction import age_based_duration, predict_next_sleep
from ..services.sleep_stats import (
    calculate_sleep_stats_with_comparison, calculate_sleep_trend_data, calculate_todays_sleep_stats,
)
from ..utils.clock import age_in_days, utc_now
from .models import (
    AgeGuidelinesResponse,
    ClockRangeOut,
    ClockRequest,
    QuickLogRequest,
    SkipSleepRequest,
    SleepAnalysisResponse,
    SleepEventIn,
    SleepEventOut,
    SleepPredictionOut,
    SleepSnapshotRequest,
    SleepStatsComparisonOut,
    SleepStatsRequest,
    SleepStatsResponse,
    DailySleepTrendPointOut,
    StopSleepRequest,
    TodaysSleepStatsOut,
    UpcomingSleepRequest,
    UpcomingSleepResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sleep", tags=["sleep"])


# Used by: every route; hour-of-day maths runs on the family's local clock
def resolve_timezone(name: Optional[str]):
    try:
        return pytz.timezone(name or settings.DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {name or settings.DEFAULT_TIMEZONE}")


# Used by: resolve_clock(), to_sleep_events(); naive timestamps are UTC
def localize(moment: datetime, tz) -> datetime:
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(tz)


# Used by: every route
def resolve_clock(request: ClockRequest):
    """Returns (tz, now) with now read once and expressed in the request timezone."""
    tz = resolve_timezone(request.timezone)
    now = request.now if request.now is not None else utc_now()
    return tz, localize(now, tz)


# Used by: snapshot routes
def to_sleep_events(events: List[SleepEventIn], tz) -> List[SleepEvent]:
    try:
        return [
            SleepEvent(
                id=e.id,
                start_time=localize(e.start_time, tz),
                end_time=localize(e.end_time, tz) if e.end_time is not None else None,
                duration_minutes=e.duration_minutes,
                sleep_category=e.sleep_category,
                skipped=e.skipped,
                is_scheduled=e.is_scheduled,
            )
            for e in events
        ]
    except InvalidSleepEventError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _birth_date(request: SleepSnapshotRequest):
    if request.birth_date is None:
        return None
    return localize(request.birth_date, pytz.utc)


# Used by: Home Dashboard; upcoming sleep card
@router.post("/upcoming", response_model=UpcomingSleepResponse)
async def get_upcoming_sleep(request: UpcomingSleepRequest):
    tz, now = resolve_clock(request)
    events = to_sleep_events(request.events, tz)

    cutoff = now - timedelta(hours=settings.UPCOMING_SLEEP_LOOKBACK_HOURS)
    recent = [e for e in events if e.start_time >= cutoff]

    policy = default_overdue_threshold
    if request.alarm_threshold_minutes is not None:
        policy = fixed_threshold(request.alarm_threshold_minutes)

    age_days = age_in_days(_birth_date(request), now)
    prediction = predict_next_sleep(recent, age_days, now=now, threshold_policy=policy)
    status = get_sleep_status(prediction.next_sleep_time, age_days, now=now, threshold_policy=policy)

    logger.info(
        f"Upcoming sleep from {len(recent)}/{len(events)} events: "
        f"{prediction.next_sleep_time.isoformat()} ({prediction.confidence_level}, {status})"
    )

    return UpcomingSleepResponse(
        prediction=SleepPredictionOut.model_validate(prediction, from_attributes=True),
        status=status,
        age_days=age_days,
        guidance=sleep_guidance_for_age(age_days),
        overdue_threshold_description=overdue_threshold_description(age_days, policy),
    )


# Used by: upcoming sleep card; "skip this nap"
@router.post("/skip", response_model=SleepEventOut)
async def skip_sleep(request: SkipSleepRequest):
    _, now = resolve_clock(request)
    event = build_skip_event(now=now)
    return SleepEventOut.model_validate(event, from_attributes=True)


# Used by: quick-log button; pre-filled with prediction.suggested_duration
@router.post("/quick-log", response_model=SleepEventOut)
async def quick_log_sleep(request: QuickLogRequest):
    tz, now = resolve_clock(request)
    end_time = localize(request.end_time, tz) if request.end_time is not None else None

    try:
        event = build_quick_log_event(request.duration_minutes, end_time=end_time, now=now)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Quick-logged {event.duration_minutes} min {event.sleep_category} sleep")
    return SleepEventOut.model_validate(event, from_attributes=True)


# Used by: sleep timer; stop button
@router.post("/stop", response_model=SleepEventOut)
async def stop_sleep(request: StopSleepRequest):
    tz, now = resolve_clock(request)
    event = to_sleep_events([request.event], tz)[0]

    try:
        stopped = stop_in_progress_sleep(event, now=now)
    except InvalidSleepEventError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SleepEventOut.model_validate(stopped, from_attributes=True)


# Used by: Sleep insights screen
@router.post("/analysis", response_model=SleepAnalysisResponse)
async def get_sleep_analysis(request: SleepSnapshotRequest):
    tz, now = resolve_clock(request)
    events = to_sleep_events(request.events, tz)

    try:
        analysis = analyze_sleep(
            events,
            _birth_date(request),
            now=now,
            pattern_lookback_days=settings.PATTERN_LOOKBACK_DAYS,
            wake_window_lookback_days=settings.WAKE_WINDOW_LOOKBACK_DAYS,
        )
    except ValueError as e:
        logger.error(f"Sleep analysis failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return SleepAnalysisResponse.model_validate(analysis, from_attributes=True)


# Used by: Sleep stats drawer
@router.post("/stats", response_model=SleepStatsResponse)
async def get_sleep_stats(request: SleepStatsRequest):
    tz, now = resolve_clock(request)
    events = to_sleep_events(request.events, tz)

    today = calculate_todays_sleep_stats(events, now=now)
    comparison = calculate_sleep_stats_with_comparison(events, time_range_hours=request.time_range_hours, now=now)
    trend = calculate_sleep_trend_data(events, days=request.trend_days, now=now)

    return SleepStatsResponse(
        today=TodaysSleepStatsOut.model_validate(today, from_attributes=True),
        comparison=SleepStatsComparisonOut.model_validate(comparison, from_attributes=True),
        trend=[DailySleepTrendPointOut.model_validate(p, from_attributes=True) for p in trend],
    )


# Used by: onboarding and settings screens; what to expect at this age
@router.get("/guidelines", response_model=AgeGuidelinesResponse)
async def get_age_guidelines(
    age_days: Optional[int] = Query(None, ge=0, description="Baby age in days; omit for defaults")
):
    nap_count = nap_count_for_age(age_days)

    return AgeGuidelinesResponse(
        age_days=age_days,
        interval_hours=interval_hours_for_age(age_days),
        wake_window_minutes=wake_window_minutes_for_age(age_days),
        wake_time_range=ClockRangeOut.model_validate(wake_time_range_for_age(age_days), from_attributes=True),
        bedtime_range=ClockRangeOut.model_validate(bedtime_range_for_age(age_days), from_attributes=True),
        nap_count=nap_count,
        nap_durations_minutes=[nap_duration_for_age(age_days, i, nap_count) for i in range(nap_count)],
        daily_sleep_goal_hours=total_daily_sleep_goal(age_days),
        suggested_duration_minutes=age_based_duration(age_days),
        overdue_threshold_minutes=default_overdue_threshold(SLEEP_ACTIVITY, age_days),
        guidance=sleep_guidance_for_age(age_days),
    )

"""Pydantic request/response models for the sleep endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, date
from typing import List, Optional, Literal

import pytz


class EngineModel(BaseModel):
    """Built from engine dataclasses via model_validate(obj, from_attributes=True)."""
    model_config = ConfigDict(from_attributes=True)


# Request models

class SleepEventIn(BaseModel):
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    sleep_category: Optional[Literal["nap", "night"]] = None
    skipped: bool = False
    is_scheduled: bool = False


class ClockRequest(BaseModel):
    now: Optional[datetime] = None
    timezone: Optional[str] = Field(None, description="IANA timezone, e.g. Europe/London")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {v}")
        return v


class SleepSnapshotRequest(ClockRequest):
    events: List[SleepEventIn] = []
    birth_date: Optional[datetime] = None


class UpcomingSleepRequest(SleepSnapshotRequest):
    alarm_threshold_minutes: Optional[int] = Field(None, gt=0)


class SleepStatsRequest(SleepSnapshotRequest):
    time_range_hours: int = Field(24, gt=0)
    trend_days: int = Field(7, gt=0, le=90)


class SkipSleepRequest(ClockRequest):
    pass


class QuickLogRequest(ClockRequest):
    duration_minutes: int
    end_time: Optional[datetime] = None


class StopSleepRequest(ClockRequest):
    event: SleepEventIn


# Response models

class SleepEventOut(EngineModel):
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    sleep_category: Optional[str] = None
    skipped: bool = False
    is_scheduled: bool = False


class SleepPatternEntryOut(EngineModel):
    time: datetime
    duration: Optional[int] = None
    interval_from_previous: Optional[float] = None


class SleepPredictionOut(EngineModel):
    next_sleep_time: datetime
    confidence_level: Literal["high", "medium", "low"]
    interval_hours: float
    average_interval_hours: Optional[float] = None
    last_sleep_time: Optional[datetime] = None
    last_sleep_duration: Optional[int] = None
    recent_pattern: List[SleepPatternEntryOut] = []
    is_overdue: bool
    overdue_minutes: Optional[int] = None
    suggested_recovery_time: Optional[datetime] = None
    suggested_duration: int
    recent_skip_time: Optional[datetime] = None
    in_progress_since: Optional[datetime] = None


class UpcomingSleepResponse(BaseModel):
    prediction: SleepPredictionOut
    status: Literal["upcoming", "soon", "overdue"]
    age_days: Optional[int] = None
    guidance: str
    overdue_threshold_description: str


class TimeRangeOut(EngineModel):
    start: datetime
    end: datetime


class ClockTimeRecommendationOut(EngineModel):
    recommended_time: datetime
    confidence: Literal["high", "medium", "low"]
    typical_range: TimeRangeOut
    reasoning: str


class WakeWindowOut(EngineModel):
    window_minutes: int
    confidence: Literal["high", "medium", "low"]
    age_based_minutes: int
    pattern_based_minutes: Optional[int] = None
    reasoning: str


class SleepQualityOut(EngineModel):
    average_duration_minutes: Optional[float] = None
    average_wake_time: Optional[datetime] = None
    average_bedtime: Optional[datetime] = None
    consistency_score: int
    quality_trend: Literal["improving", "stable", "declining"]


class NapSlotOut(EngineModel):
    start: datetime
    end: datetime
    priority: Literal["high", "medium", "low"]


class NapRecommendationOut(EngineModel):
    naps: List[NapSlotOut]
    total_daytime_sleep_minutes: int
    reasoning: str


class SleepAnalysisResponse(EngineModel):
    age_days: Optional[int] = None
    prediction: SleepPredictionOut
    wake_time: ClockTimeRecommendationOut
    bedtime: ClockTimeRecommendationOut
    wake_window: WakeWindowOut
    quality: SleepQualityOut
    naps: NapRecommendationOut


# Statistics models

class TodaysSleepStatsOut(EngineModel):
    sleep_count: int
    total_sleep_minutes: int
    avg_sleep_duration: Optional[float] = None
    longest_sleep_minutes: Optional[int] = None
    avg_interval_hours: Optional[float] = None


class PeriodSleepStatsOut(EngineModel):
    sleep_count: int
    total_minutes: int
    avg_sleep_duration: Optional[float] = None


class SleepStatsChangeOut(EngineModel):
    sleep_count: Optional[float] = None
    total_minutes: Optional[float] = None
    avg_sleep_duration: Optional[float] = None


class SleepStatsComparisonOut(EngineModel):
    current: PeriodSleepStatsOut
    previous: PeriodSleepStatsOut
    percentage_change: SleepStatsChangeOut


class DailySleepTrendPointOut(EngineModel):
    date: date
    count: int
    total_minutes: int


class SleepStatsResponse(BaseModel):
    today: TodaysSleepStatsOut
    comparison: SleepStatsComparisonOut
    trend: List[DailySleepTrendPointOut]


# Age guideline models

class ClockRangeOut(EngineModel):
    early: float
    typical: float
    late: float


class AgeGuidelinesResponse(BaseModel):
    age_days: Optional[int] = None
    interval_hours: float
    wake_window_minutes: int
    wake_time_range: ClockRangeOut
    bedtime_range: ClockRangeOut
    nap_count: int
    nap_durations_minutes: List[int]
    daily_sleep_goal_hours: int
    suggested_duration_minutes: int
    overdue_threshold_minutes: int
    guidance: str

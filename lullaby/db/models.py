"""Activities table mapping and its conversion to engine SleepEvents."""

# The engine never imports this module; storage callers convert rows here first.

import logging
from typing import Iterable, List

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import func

from ..services.sleep_events import SleepEvent

logger = logging.getLogger(__name__)

SLEEP_TYPE = "sleep"


class Base(DeclarativeBase):
    pass


class Activity(Base):
    """One tracked activity. Sleep rows keep `sleepType` and `skipped` in details."""
    __tablename__ = "activities"

    id = Column(String(64), primary_key=True)
    baby_id = Column(String(64), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    duration = Column(Integer, nullable=True)  # minutes
    is_scheduled = Column(Boolean, nullable=False, default=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_activities_baby_type_start", "baby_id", "type", "start_time"),
    )

    def __repr__(self):
        return (
            f"<Activity(id={self.id}, type={self.type}, start={self.start_time}, "
            f"duration={self.duration}min)>"
        )


# Used by: activities_to_sleep_events()
def activity_to_sleep_event(row: Activity) -> SleepEvent:
    details = row.details or {}
    return SleepEvent(
        id=str(row.id),
        start_time=row.start_time,
        end_time=row.end_time,
        duration_minutes=row.duration,
        sleep_category=details.get("sleepType"),
        skipped=bool(details.get("skipped", False)),
        is_scheduled=bool(row.is_scheduled),
    )


# Used by: storage callers before handing a snapshot to the engine
def activities_to_sleep_events(rows: Iterable[Activity]) -> List[SleepEvent]:
    events = [activity_to_sleep_event(row) for row in rows if row.type == SLEEP_TYPE]
    logger.debug(f"Converted {len(events)} sleep activities")
    return events


# Used by: storage callers persisting skip and quick-log records
def sleep_event_to_activity(event: SleepEvent, baby_id: str) -> Activity:
    details = {"sleepType": event.sleep_category}
    if event.skipped:
        details["skipped"] = True
    return Activity(
        id=event.id,
        baby_id=baby_id,
        type=SLEEP_TYPE,
        start_time=event.start_time,
        end_time=event.end_time,
        duration=event.duration_minutes,
        is_scheduled=event.is_scheduled,
        details=details,
    )

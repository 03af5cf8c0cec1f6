"""Hours between consecutive sleep onsets."""

from typing import List, Optional, Sequence

from ..core.constants import MAX_VALID_INTERVAL_HOURS
from .sleep_events import SleepEvent
from ..utils.clock import hours_between


# Used by: sleep_prediction.py
def compute_intervals(events: Sequence[SleepEvent]) -> List[Optional[float]]:
    """Index 0 is None; index i is hours from events[i] to events[i-1].

    Callers pass events sorted by start_time, most recent first, already
    limited to the window they want to analyze.
    """
    intervals: List[Optional[float]] = []
    for i, event in enumerate(events):
        if i == 0:
            intervals.append(None)
            continue
        intervals.append(hours_between(events[i - 1].start_time, event.start_time))
    return intervals


# Used by: sleep_prediction.py
def is_valid_interval(hours: Optional[float]) -> bool:
    return hours is not None and 0 < hours < MAX_VALID_INTERVAL_HOURS


# Used by: sleep_prediction.py; keeps order, so [0] is the most recent valid gap
def valid_intervals(intervals: Sequence[Optional[float]]) -> List[float]:
    return [h for h in intervals if is_valid_interval(h)]

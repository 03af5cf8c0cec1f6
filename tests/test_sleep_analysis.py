"""Composed analysis: one clock reading, naps aligned with the wake and bed recommendations."""

from datetime import timedelta

from conftest import NOW, at, make_event
from lullaby.api.models import SleepAnalysisResponse
from lullaby.services.sleep_analysis import analyze_sleep


def _week_of_sleep():
    events = []
    for day in range(-6, 1):
        events.append(make_event(at(day, 19, 30), 630, category="night"))
        events.append(make_event(at(day, 9), 90, category="nap"))
        events.append(make_event(at(day, 13), 90, category="nap"))
    events.append(make_event(at(1, 9, 15), 75, category="nap"))
    return events


class TestAnalyzeSleep:

    def test_empty_history_is_all_defaults(self):
        analysis = analyze_sleep([], None, now=NOW)

        assert analysis.age_days is None
        assert analysis.prediction.next_sleep_time == NOW + timedelta(hours=3)
        assert analysis.wake_time.confidence == "low"
        assert analysis.bedtime.confidence == "low"
        assert analysis.wake_window.window_minutes == 90
        assert analysis.quality.consistency_score == 0
        assert len(analysis.naps.naps) == 3

    def test_naps_follow_recommended_wake_time(self):
        analysis = analyze_sleep(_week_of_sleep(), NOW - timedelta(days=150), now=NOW)

        assert analysis.age_days == 150
        first_nap = analysis.naps.naps[0]
        wake = analysis.wake_time.recommended_time
        assert first_nap.start > wake
        assert first_nap.start.date() == wake.date()

    def test_history_raises_confidence(self):
        analysis = analyze_sleep(_week_of_sleep(), NOW - timedelta(days=150), now=NOW)

        assert analysis.prediction.confidence_level == "high"
        assert analysis.wake_time.confidence == "medium"
        assert analysis.wake_window.confidence == "high"
        assert analysis.quality.consistency_score == 100

    def test_same_inputs_same_output(self):
        events = _week_of_sleep()
        birth = NOW - timedelta(days=150)

        first = SleepAnalysisResponse.model_validate(analyze_sleep(events, birth, now=NOW), from_attributes=True)
        second = SleepAnalysisResponse.model_validate(analyze_sleep(events, birth, now=NOW), from_attributes=True)

        assert first.model_dump_json() == second.model_dump_json()

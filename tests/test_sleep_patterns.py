"""Wake-time and bedtime recommendations from night sleep history."""

from datetime import datetime, timedelta

from conftest import NEW_YORK, NOW, SPRING_FORWARD_NOON, at, make_event
from lullaby.services.sleep_patterns import (
    HIGH, LOW, MEDIUM,
    analyze_optimal_bedtime,
    analyze_optimal_wake_time,
    most_common_hour,
    pattern_confidence,
)


def _nights(nights, bed_hour, bed_minute=0, minutes=600, **kwargs):
    """One night sleep per day going back from Jan 31, starting at bed_hour:bed_minute."""
    return [
        make_event(at(-i, bed_hour, bed_minute), minutes, category="night", **kwargs)
        for i in range(nights)
    ]


class TestWakeTime:

    def test_consistent_history_is_high_confidence(self):
        """Ten nights ending at 06:00."""
        result = analyze_optimal_wake_time(_nights(10, 20), None, now=NOW)

        assert result.confidence == HIGH
        assert result.recommended_time == at(1, 6)
        assert result.typical_range.start == at(1, 4, 30)
        assert result.typical_range.end == at(1, 7, 30)
        assert "10 nights" in result.reasoning
        assert "high" in result.reasoning

    def test_rolls_back_when_later_than_now(self):
        result = analyze_optimal_wake_time(_nights(10, 20), None, now=at(1, 5))
        assert result.recommended_time == at(0, 6)

    def test_mode_and_mean_blend(self):
        """Wake hours 6, 6, 6, 9: 0.6*6 + 0.4*6.75 = 6.3."""
        events = _nights(3, 20) + [make_event(at(-3, 23), 600, category="night")]

        result = analyze_optimal_wake_time(events, None, now=NOW)

        assert result.recommended_time == at(1, 6, 18)
        assert result.confidence == LOW
        assert "4 nights" in result.reasoning
        assert "low" in result.reasoning

    def test_medium_with_five_samples(self):
        result = analyze_optimal_wake_time(_nights(5, 20), None, now=NOW)
        assert result.confidence == MEDIUM
        assert "medium" in result.reasoning

    def test_in_progress_and_naps_ignored(self):
        events = _nights(5, 20) + [
            make_event(at(1, 9), 90, category="nap"),
            make_event(at(1, 11), in_progress=True, category="night"),
        ]
        result = analyze_optimal_wake_time(events, None, now=NOW)
        assert "5 nights" in result.reasoning

    def test_skipped_nights_ignored(self):
        events = _nights(5, 20) + [make_event(at(1, 3), 0, category="night", skipped=True)]
        assert analyze_optimal_wake_time(events, None, now=NOW) == analyze_optimal_wake_time(_nights(5, 20), None, now=NOW)

    def test_outside_lookback_ignored(self):
        result = analyze_optimal_wake_time(_nights(20, 20), None, lookback_days=7, now=NOW)
        assert "7 nights" in result.reasoning


class TestAgeFallback:

    def test_unknown_age(self):
        result = analyze_optimal_wake_time([], None, now=NOW)

        assert result.confidence == LOW
        assert result.recommended_time == at(1, 6, 30)
        assert result.typical_range.start == at(1, 5)
        assert result.typical_range.end == at(1, 8)
        assert "unknown age" in result.reasoning

    def test_known_age_in_weeks(self):
        birth = NOW - timedelta(days=70)
        result = analyze_optimal_bedtime([], birth, now=NOW)

        assert "10 weeks old" in result.reasoning
        assert result.recommended_time == at(0, 21, 30)
        assert result.typical_range.start == at(0, 20)
        assert result.typical_range.end == at(0, 23)

    def test_local_clock_on_daylight_saving_day(self):
        result = analyze_optimal_bedtime([], None, now=SPRING_FORWARD_NOON)

        assert result.recommended_time == NEW_YORK.localize(datetime(2025, 3, 8, 19, 30))
        assert result.typical_range.start == NEW_YORK.localize(datetime(2025, 3, 8, 18, 0))
        assert result.typical_range.end == NEW_YORK.localize(datetime(2025, 3, 8, 21, 0))


class TestBedtime:

    def test_consistent_bedtime_rolls_back_to_yesterday(self):
        result = analyze_optimal_bedtime(_nights(10, 19), None, now=NOW)

        assert result.confidence == HIGH
        assert result.recommended_time == at(0, 19)
        assert result.typical_range.start == at(0, 17, 30)
        assert result.typical_range.end == at(0, 20, 30)

    def test_range_clamped_to_end_of_day(self):
        """Bedtime 22:30: mode 23, mean 22.5, recommended 22.8 = 22:48."""
        result = analyze_optimal_bedtime(_nights(10, 22, 30), None, now=NOW)

        assert result.recommended_time == at(0, 22, 48)
        assert result.typical_range.start == at(0, 21, 18)
        assert result.typical_range.end == at(0, 23)


class TestStatistics:

    def test_mode_ties_go_to_first_seen(self):
        assert most_common_hour([7.2, 5.9], default=0) == 7
        assert most_common_hour([5.9, 7.2], default=0) == 6

    def test_mode_rounds_half_up(self):
        assert most_common_hour([6.5], default=0) == 7

    def test_spread_lowers_confidence(self):
        assert pattern_confidence([6.0] * 10) == HIGH
        assert pattern_confidence([4.0] * 5 + [8.0] * 5) == MEDIUM
        assert pattern_confidence([1.0] * 5 + [9.0] * 5) == LOW

    def test_sample_count_tiers(self):
        assert pattern_confidence([6.0] * 9) == MEDIUM
        assert pattern_confidence([6.0] * 4) == LOW

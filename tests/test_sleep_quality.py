"""Night sleep consistency score and duration trend."""

from conftest import NOW, at, make_event
from lullaby.services.sleep_quality import (
    DECLINING, IMPROVING, STABLE,
    analyze_night_sleep_quality,
    duration_trend,
)


def _night(day, hour, minutes):
    return make_event(at(day, hour), minutes, category="night")


class TestEmpty:

    def test_no_nights(self):
        result = analyze_night_sleep_quality([], now=NOW)

        assert result.average_duration_minutes is None
        assert result.average_bedtime is None
        assert result.average_wake_time is None
        assert result.consistency_score == 0
        assert result.quality_trend == STABLE

    def test_naps_zero_length_and_skips_excluded(self):
        events = [
            make_event(at(1, 9), 90, category="nap"),
            _night(0, 20, 0),
            make_event(at(0, 22), 0, category="night", skipped=True),
        ]
        assert analyze_night_sleep_quality(events, now=NOW).average_duration_minutes is None


class TestScores:

    def test_identical_nights_score_100(self):
        nights = [_night(-i, 20, 600) for i in range(6)]

        result = analyze_night_sleep_quality(nights, now=NOW)

        assert result.consistency_score == 100
        assert result.average_duration_minutes == 600
        assert result.average_bedtime == at(1, 20)
        assert result.average_wake_time == at(1, 6)
        assert result.quality_trend == STABLE

    def test_bedtime_spread(self):
        """Bed/wake variance 1h² scores 75 each, duration variance 0 scores 100: mean 83."""
        nights = [_night(0, 19, 600), _night(-1, 21, 600)]

        result = analyze_night_sleep_quality(nights, now=NOW)

        assert result.consistency_score == 83
        assert result.average_bedtime == at(1, 20)

    def test_lookback(self):
        nights = [_night(-20, 20, 600)]
        assert analyze_night_sleep_quality(nights, now=NOW).average_duration_minutes is None


class TestTrend:

    def test_improving(self):
        nights = [_night(-5 + i, 20, d) for i, d in enumerate([500, 500, 500, 600, 600, 600])]
        assert analyze_night_sleep_quality(nights, now=NOW).quality_trend == IMPROVING

    def test_declining(self):
        nights = [_night(-5 + i, 20, d) for i, d in enumerate([600, 600, 600, 500, 500, 500])]
        assert analyze_night_sleep_quality(nights, now=NOW).quality_trend == DECLINING

    def test_small_change_is_stable(self):
        assert duration_trend([600, 600, 600, 620, 620, 620]) == STABLE

    def test_needs_six_nights(self):
        assert duration_trend([300, 300, 600, 600, 600]) == STABLE

    def test_odd_count_second_half_is_larger(self):
        """7 nights split 3/4."""
        assert duration_trend([500, 500, 500, 500, 600, 600, 600]) == IMPROVING

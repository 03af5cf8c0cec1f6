"""Wake window blending across the low, medium and high confidence tiers."""

from datetime import timedelta

from conftest import NOW, at, make_event
from lullaby.services.wake_windows import HIGH, LOW, MEDIUM, calculate_wake_windows, measure_wake_gaps


def _sleeps(count, first_start, every_hours=3, minutes=60):
    """`count` sleeps of `minutes`, one every `every_hours`, so each gap is every_hours*60 - minutes."""
    return [make_event(first_start + timedelta(hours=every_hours * i), minutes) for i in range(count)]


class TestAgeOnly:

    def test_no_history(self):
        result = calculate_wake_windows([], None, now=NOW)

        assert result.window_minutes == 90
        assert result.age_based_minutes == 90
        assert result.pattern_based_minutes is None
        assert result.confidence == LOW
        assert "unknown age" in result.reasoning

    def test_single_sleep(self):
        result = calculate_wake_windows([make_event(at(1, 8), 60)], NOW - timedelta(days=100), now=NOW)
        assert result.window_minutes == 180
        assert result.pattern_based_minutes is None

    def test_unrealistic_gaps_only(self):
        overlapping = [make_event(at(1, 8), 120), make_event(at(1, 9), 60)]
        result = calculate_wake_windows(overlapping, None, now=NOW)

        assert result.window_minutes == 90
        assert result.pattern_based_minutes is None
        assert result.confidence == LOW

    def test_twelve_hour_gap_is_unrealistic(self):
        events = [make_event(at(0, 8), 60), make_event(at(0, 21), 60)]
        assert measure_wake_gaps(events) == []


class TestBlend:

    def test_few_gaps_weight_history_lightly(self):
        """One 120 min gap: 0.7*90 + 0.3*120 = 99."""
        result = calculate_wake_windows(_sleeps(2, at(1, 8)), None, now=NOW)

        assert result.pattern_based_minutes == 120
        assert result.window_minutes == 99
        assert result.confidence == LOW
        assert result.reasoning == "Based on 1 wake window. More data will improve accuracy."

    def test_four_gaps_still_low(self):
        result = calculate_wake_windows(_sleeps(5, at(0, 20)), None, now=NOW)
        assert result.confidence == LOW
        assert result.window_minutes == 99

    def test_five_gaps_medium(self):
        """0.5*90 + 0.5*120 = 105."""
        result = calculate_wake_windows(_sleeps(6, at(0, 20)), None, now=NOW)
        assert result.confidence == MEDIUM
        assert result.window_minutes == 105
        assert "1.8 hours" in result.reasoning

    def test_ten_gaps_high(self):
        """0.3*90 + 0.7*120 = 111."""
        result = calculate_wake_windows(_sleeps(11, at(0, 0)), None, now=NOW)
        assert result.confidence == HIGH
        assert result.window_minutes == 111
        assert "10 recent wake windows" in result.reasoning

    def test_skips_do_not_split_wake_windows(self):
        events = [
            make_event(at(1, 8), 60),
            make_event(at(1, 10), 0, skipped=True),
            make_event(at(1, 11), 60),
        ]
        result = calculate_wake_windows(events, None, now=NOW)
        assert result.pattern_based_minutes == 120

    def test_in_progress_ignored(self):
        events = _sleeps(2, at(1, 8)) + [make_event(at(1, 11, 30), in_progress=True)]
        assert calculate_wake_windows(events, None, now=NOW).pattern_based_minutes == 120

    def test_lookback(self):
        events = _sleeps(2, at(-10, 8))
        assert calculate_wake_windows(events, None, now=NOW).pattern_based_minutes is None

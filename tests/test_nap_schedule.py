"""Daytime nap slots spread between wake time and bedtime."""

from datetime import timedelta

from conftest import NOW, at
from lullaby.services.nap_schedule import find_best_daytime_nap_times, nap_priority


class TestNapSchedule:

    def test_unknown_age_three_naps(self):
        result = find_best_daytime_nap_times(None, bedtime=at(1, 19), wake_time=at(1, 7), now=NOW)

        assert [n.start for n in result.naps] == [at(1, 10), at(1, 13), at(1, 16)]
        assert [n.end for n in result.naps] == [at(1, 11, 30), at(1, 14, 30), at(1, 17, 30)]
        assert [n.priority for n in result.naps] == ["high", "medium", "low"]
        assert result.total_daytime_sleep_minutes == 300
        assert "unknown" in result.reasoning
        assert "3 naps" in result.reasoning

    def test_nine_month_old_two_naps(self):
        birth = NOW - timedelta(days=300)
        result = find_best_daytime_nap_times(birth, bedtime=at(1, 19), wake_time=at(1, 7), now=NOW)

        assert [n.start for n in result.naps] == [at(1, 11), at(1, 15)]
        assert [n.end for n in result.naps] == [at(1, 13), at(1, 16, 30)]
        assert result.total_daytime_sleep_minutes == 180
        assert "42 weeks" in result.reasoning

    def test_toddler_single_nap(self):
        birth = NOW - timedelta(days=600)
        result = find_best_daytime_nap_times(birth, bedtime=at(1, 19), wake_time=at(1, 7), now=NOW)

        assert len(result.naps) == 1
        assert result.naps[0].start == at(1, 13)
        assert result.naps[0].end == at(1, 15)
        assert result.total_daytime_sleep_minutes == 60
        assert "1 nap spaced" in result.reasoning

    def test_wake_period_across_midnight(self):
        result = find_best_daytime_nap_times(None, bedtime=at(1, 4), wake_time=at(0, 20), now=NOW)
        assert [n.start for n in result.naps] == [at(0, 22), at(1, 0), at(1, 2)]

    def test_half_hour_spacing(self):
        result = find_best_daytime_nap_times(None, bedtime=at(1, 19), wake_time=at(1, 6), now=NOW)
        assert result.naps[0].start == at(1, 9, 15)

    def test_priority(self):
        assert [nap_priority(i) for i in range(4)] == ["high", "medium", "low", "low"]

"""Onset-to-onset interval calculation and the validity filter."""

from datetime import timedelta

import pytest

from conftest import at, make_event
from lullaby.services.intervals import compute_intervals, is_valid_interval, valid_intervals


class TestComputeIntervals:

    def test_first_entry_has_no_interval(self):
        events = [make_event(at(1, 12), 30), make_event(at(1, 9), 60), make_event(at(1, 6, 30), 60)]
        assert compute_intervals(events) == [None, 3.0, 2.5]

    def test_single_event(self):
        assert compute_intervals([make_event(at(1, 9), 60)]) == [None]

    def test_empty(self):
        assert compute_intervals([]) == []

    def test_partial_minutes_truncate(self):
        """179 min 59 s counts as 179 whole minutes."""
        later = make_event(at(1, 12), 30)
        earlier = make_event(at(1, 9) + timedelta(seconds=1), 60)
        assert compute_intervals([later, earlier])[1] == pytest.approx(179 / 60)


class TestValidity:

    @pytest.mark.parametrize("hours, valid", [
        (None, False), (0, False), (-1.5, False), (0.01, True), (23.99, True), (24, False), (48, False),
    ])
    def test_is_valid_interval(self, hours, valid):
        assert is_valid_interval(hours) is valid

    def test_valid_intervals_keep_order(self):
        assert valid_intervals([None, 2.0, 30.0, 0.0, 3.5]) == [2.0, 3.5]

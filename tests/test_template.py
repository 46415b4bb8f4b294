"""Tests for the day slot template."""
import pytest

from foyer.engine.template import build_day_slots, minutes_to_time, slots_overlap, time_to_minutes


def starts(slots):
    return [s.start_time for s in slots]


class TestTimeConversion:
    def test_time_to_minutes(self):
        assert time_to_minutes("00:00") == 0
        assert time_to_minutes("09:30") == 570
        assert time_to_minutes("17:00") == 1020
        assert time_to_minutes(600) == 600

    def test_minutes_to_time(self):
        assert minutes_to_time(0) == "00:00"
        assert minutes_to_time(570) == "09:30"
        assert minutes_to_time(1439) == "23:59"

    def test_overlap_is_half_open(self):
        assert slots_overlap(540, 600, 570, 630) is True
        assert slots_overlap(540, 600, 600, 660) is False
        assert slots_overlap(600, 660, 540, 600) is False


class TestBuildDaySlots:
    def test_lunch_hour_dropped(self):
        """09:00-17:00, lunch 12:00-13:00, 60 min: the 12:00 slot disappears."""
        slots = build_day_slots("09:00", "17:00", "12:00", "13:00", 60)
        assert starts(slots) == ["09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00"]

    def test_slots_have_exact_length(self):
        slots = build_day_slots("09:00", "17:00", "12:00", "13:00", 30)
        assert all(s.duration == 30 for s in slots)
        assert len(slots) == 14

    def test_partially_overlapping_slots_excluded(self):
        """Lunch 12:30-14:00 removes both the 12:00 and 13:00 hourly slots."""
        slots = build_day_slots("09:00", "17:00", "12:30", "14:00", 60)
        assert starts(slots) == ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"]

    def test_trailing_partial_slot_dropped(self):
        slots = build_day_slots("09:00", "10:45", "12:00", "13:00", 30)
        assert starts(slots) == ["09:00", "09:30", "10:00"]
        assert slots[-1].end_time == "10:30"

    def test_accepts_minutes(self):
        slots = build_day_slots(540, 1020, 720, 780, 60)
        assert len(slots) == 7

    def test_no_overlap_with_lunch(self):
        slots = build_day_slots("08:00", "19:00", "12:15", "13:45", 15)
        lunch = (time_to_minutes("12:15"), time_to_minutes("13:45"))
        assert not any(slots_overlap(s.start, s.end, *lunch) for s in slots)

    def test_ordered_and_disjoint(self):
        slots = build_day_slots("09:00", "17:00", "12:00", "13:00", 45)
        for a, b in zip(slots, slots[1:]):
            assert a.end <= b.start

    def test_invalid_duration(self):
        with pytest.raises(ValueError):
            build_day_slots("09:00", "17:00", "12:00", "13:00", 0)

    def test_empty_window(self):
        assert build_day_slots("09:00", "09:20", "12:00", "13:00", 30) == []

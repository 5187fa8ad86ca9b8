import pytest

from helpers.slots import generate_range_slots, generate_slots, minutes_to_slot, slot_to_minutes


DEFAULT_RANGES = (("09:00", "13:30"), ("17:00", "21:00"))


def test_morning_range_includes_both_boundaries():
    slots = generate_range_slots("09:00", "13:30", 30)
    assert slots == [
        "09:00", "09:30", "10:00", "10:30", "11:00",
        "11:30", "12:00", "12:30", "13:00", "13:30",
    ]
    assert len(slots) == 10


def test_default_day_concatenates_ranges_in_order():
    slots = generate_slots(DEFAULT_RANGES, 30)
    assert len(slots) == 19
    assert slots[:2] == ["09:00", "09:30"]
    assert slots[9:11] == ["13:30", "17:00"]
    assert slots[-1] == "21:00"


def test_generation_is_deterministic():
    assert generate_slots(DEFAULT_RANGES, 30) == generate_slots(DEFAULT_RANGES, 30)


def test_unaligned_end_is_not_emitted():
    assert generate_range_slots("09:00", "10:45", 30) == ["09:00", "09:30", "10:00", "10:30"]


def test_end_before_start_gives_no_slots():
    assert generate_range_slots("13:00", "09:00", 30) == []
    assert generate_slots((("13:00", "09:00"), ("17:00", "17:30")), 30) == ["17:00", "17:30"]


def test_ranges_are_not_sorted():
    assert generate_slots((("17:00", "17:30"), ("09:00", "09:30")), 30) == ["17:00", "17:30", "09:00", "09:30"]


@pytest.mark.parametrize("step", [0, -15])
def test_non_positive_step_is_rejected(step):
    with pytest.raises(ValueError):
        generate_slots(DEFAULT_RANGES, step)


def test_sorted_within_each_range():
    slots = generate_range_slots("08:00", "12:00", 15)
    minutes = [slot_to_minutes(s) for s in slots]
    assert minutes == sorted(minutes)
    assert all(b - a == 15 for a, b in zip(minutes, minutes[1:]))


def test_slot_minute_conversions():
    assert slot_to_minutes("00:00") == 0
    assert slot_to_minutes("13:30") == 810
    assert minutes_to_slot(810) == "13:30"
    assert minutes_to_slot(5) == "00:05"

from typing import Iterable, List, Tuple


def slot_to_minutes(slot: str) -> int:
    """Convert "HH:MM" into minutes since midnight."""
    hours, minutes = slot.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_slot(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_range_slots(start: str, end: str, step_minutes: int) -> List[str]:
    """
    Every slot from start to end (inclusive when end lands on a step).

    An end before start gives an empty list.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")

    slots = []
    current = slot_to_minutes(start)
    last = slot_to_minutes(end)
    while current <= last:
        slots.append(minutes_to_slot(current))
        current += step_minutes
    return slots


def generate_slots(ranges: Iterable[Tuple[str, str]], step_minutes: int) -> List[str]:
    """
    Bookable slots for a clinic day.

    Ranges are concatenated in the given order, without sorting or
    de-duplication.

    Args:
        ranges: (start, end) "HH:MM" pairs, e.g. (("09:00", "13:30"), ("17:00", "21:00"))
        step_minutes: Distance between two consecutive slots

    Returns:
        ["09:00", "09:30", ..., "13:30", "17:00", ..., "21:00"]
    """
    slots: List[str] = []
    for start, end in ranges:
        slots.extend(generate_range_slots(start, end, step_minutes))
    return slots

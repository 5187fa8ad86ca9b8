from typing import Iterable, List, Set
from pydantic import BaseModel

from helpers.civil_time import CivilNow, Clock, now_civil, utc_now
from helpers.config import Settings
from helpers.slots import generate_slots, slot_to_minutes
from models.booking import Booking


class SlotAvailability(BaseModel):
    slot: str
    taken: bool
    expired: bool


async def get_taken_slots(date_iso: str) -> Set[str]:
    # every status counts, a cancelled booking still holds its slot
    slots = await Booking.filter(date_iso=date_iso).values_list("slot", flat=True)
    return set(slots)


def evaluate_slots(
    date_iso: str,
    all_slots: Iterable[str],
    taken: Set[str],
    now: CivilNow,
) -> List[SlotAvailability]:
    """
    Flag each slot as taken and/or expired.

    Only the civil "today" can have expired slots, and a slot starting at the
    current minute already counts as expired. Other dates, past ones included,
    never expire anything.
    """
    is_today = date_iso == now.date_iso
    return [
        SlotAvailability(
            slot=slot,
            taken=slot in taken,
            expired=is_today and slot_to_minutes(slot) <= now.minutes,
        )
        for slot in all_slots
    ]


async def get_availability(date_iso: str, settings: Settings, clock: Clock = utc_now) -> List[SlotAvailability]:
    all_slots = generate_slots(settings.slot_ranges, settings.slot_step_minutes)
    taken = await get_taken_slots(date_iso)
    now = now_civil(clock, settings.civil_utc_offset_minutes)
    return evaluate_slots(date_iso, all_slots, taken, now)

from helpers.availability import evaluate_slots, get_availability
from helpers.booking_guard import create_booking
from helpers.civil_time import CivilNow
from helpers.slots import generate_slots, slot_to_minutes
from models.booking import Booking, BookingStatus

from conftest import TODAY


ALL_SLOTS = generate_slots((("09:00", "13:30"), ("17:00", "21:00")), 30)
NOON = CivilNow(date_iso=TODAY, minutes=12 * 60)


def test_future_date_never_expires():
    result = evaluate_slots("2025-06-11", ALL_SLOTS, set(), NOON)
    assert [r.slot for r in result] == ALL_SLOTS
    assert not any(r.expired for r in result)


def test_today_expires_slots_up_to_and_including_now():
    result = evaluate_slots(TODAY, ALL_SLOTS, set(), NOON)
    for r in result:
        assert r.expired == (slot_to_minutes(r.slot) <= 12 * 60)
    by_slot = {r.slot: r for r in result}
    assert by_slot["12:00"].expired
    assert not by_slot["12:30"].expired


def test_past_date_is_not_expired():
    result = evaluate_slots("2025-06-09", ALL_SLOTS, set(), NOON)
    assert not any(r.expired for r in result)


def test_taken_and_expired_are_independent():
    result = evaluate_slots(TODAY, ALL_SLOTS, {"09:00", "17:00"}, NOON)
    by_slot = {r.slot: r for r in result}
    assert by_slot["09:00"].taken and by_slot["09:00"].expired
    assert by_slot["17:00"].taken and not by_slot["17:00"].expired
    assert not by_slot["09:30"].taken


async def test_get_availability_reads_bookings_of_any_status(db, settings, clock):
    await create_booking(name="A", contact="a@example.com", date_iso="2025-06-12", slot="09:00")
    cancelled = await create_booking(name="B", contact="b@example.com", date_iso="2025-06-12", slot="17:30")
    await Booking.filter(id=cancelled.id).update(status=BookingStatus.CANCELLED)
    await create_booking(name="C", contact="c@example.com", date_iso="2025-06-13", slot="10:00")

    result = await get_availability("2025-06-12", settings, clock)

    taken = [r.slot for r in result if r.taken]
    assert taken == ["09:00", "17:30"]
    assert not any(r.expired for r in result)
    assert len(result) == len(ALL_SLOTS)


async def test_get_availability_for_today_uses_the_clock(db, settings, clock):
    result = await get_availability(TODAY, settings, clock)
    expired = [r.slot for r in result if r.expired]
    assert expired == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30", "12:00"]

import logging
from typing import Optional
from tortoise.exceptions import IntegrityError

from helpers.errors import Conflict
from models.booking import Booking


logger = logging.getLogger(__name__)


async def create_booking(
    *,
    name: str,
    contact: str,
    date_iso: str,
    slot: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    service: Optional[str] = None,
    notes: Optional[str] = None,
) -> Booking:
    """
    Insert a booking, relying on the (date_iso, slot) unique constraint.

    No lookup happens before the insert. Between concurrent requests for the
    same slot the constraint alone decides which one wins.

    Raises:
        Conflict: the slot already holds a booking, whatever its status.
    """
    try:
        return await Booking.create(
            name=name,
            contact=contact,
            email=email,
            phone=phone,
            service=service,
            date_iso=date_iso,
            slot=slot,
            notes=notes,
        )
    except IntegrityError as e:
        logger.info(f"Slot {date_iso} {slot} already taken: {e}")
        raise Conflict("Slot already taken") from e

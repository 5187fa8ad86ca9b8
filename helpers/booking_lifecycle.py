import logging
import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict

from helpers.config import Settings
from helpers.email import Notifier, build_confirmation_email
from helpers.errors import NotFound, NotificationFailure, ValidationError
from models.booking import Booking, BookingStatus


logger = logging.getLogger(__name__)


class StatusChange(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    booking: Booking
    email_sent: bool = False
    email_error: Optional[str] = None
    email_id: Optional[str] = None


def parse_status(value) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError:
        raise ValidationError("invalid status")


def parse_booking_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise NotFound("Booking not found")


async def set_status(booking_id: str, new_status, notifier: Notifier, settings: Settings) -> StatusChange:
    """
    Move a booking to pending, confirmed or cancelled.

    Any of the three statuses is accepted from any current one. Entering
    confirmed sends one confirmation email; its outcome is reported on the
    result and never undoes the status change.

    Raises:
        ValidationError: new_status is not a known status.
        NotFound: no booking with that id.
    """
    status = parse_status(new_status)
    pk = parse_booking_id(booking_id)

    updated_rows = await Booking.filter(id=pk).update(status=status)
    if not updated_rows:
        raise NotFound("Booking not found")
    booking = await Booking.get(id=pk)
    logger.info(f"Booking {pk} set to {status.value}")

    change = StatusChange(booking=booking)
    if status != BookingStatus.CONFIRMED:
        return change

    message = build_confirmation_email(booking, settings)
    try:
        change.email_id = await notifier.send(message)
        change.email_sent = True
        logger.info(f"Confirmation email sent: {change.email_id}")
    except NotificationFailure as e:
        change.email_error = str(e)
        logger.warning(f"Confirmation email failed: {e}")
    return change

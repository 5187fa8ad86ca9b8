from tortoise import fields
from tortoise.models import Model
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(Model):
    id = fields.UUIDField(primary_key=True)
    name = fields.CharField(max_length=255)
    contact = fields.CharField(max_length=255)  # raw legacy contact field
    email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=50, null=True)
    service = fields.CharField(max_length=255, null=True)
    date_iso = fields.CharField(max_length=10, description="YYYY-MM-DD")
    slot = fields.CharField(max_length=5, description="HH:MM (24h)")
    notes = fields.TextField(null=True)
    status = fields.CharEnumField(enum_type=BookingStatus, max_length=10, default=BookingStatus.PENDING)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "bookings"
        # one booking per slot, whatever its status
        unique_together = (("date_iso", "slot"),)


def booking_to_dict(booking: Booking) -> dict:
    return {
        "id": str(booking.id),
        "name": booking.name,
        "contact": booking.contact,
        "email": booking.email,
        "phone": booking.phone,
        "service": booking.service,
        "dateISO": booking.date_iso,
        "slot": booking.slot,
        "notes": booking.notes,
        "status": booking.status.value if isinstance(booking.status, BookingStatus) else booking.status,
        "createdAt": booking.created_at.isoformat() if booking.created_at else None,
    }

import logging
import re
from datetime import datetime
from typing import Annotated, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from pydantic import BaseModel
from tortoise.exceptions import BaseORMException

from helpers.admin_auth import require_admin
from helpers.availability import get_availability
from helpers.booking_guard import create_booking
from helpers.booking_lifecycle import set_status
from helpers.civil_time import Clock
from helpers.config import Settings
from helpers.contact import split_contact
from helpers.dependencies import get_clock, get_notifier, get_settings
from helpers.email import Notifier, notify_admin_new_booking
from helpers.errors import ClinicError, StorageFailure, ValidationError
from helpers.slots import generate_slots
from models.booking import Booking, BookingStatus, booking_to_dict


logger = logging.getLogger(__name__)

booking_router = APIRouter()

DATE_ISO_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class BookingRequest(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    dateISO: Optional[str] = None
    slot: Optional[str] = None
    service: Optional[str] = None
    notes: Optional[str] = None


class StatusRequest(BaseModel):
    status: Optional[str] = None


def validate_date_iso(value: Optional[str]) -> str:
    if not value:
        raise ValidationError("date query required (YYYY-MM-DD)")
    # strptime alone accepts "2025-1-5" and non-ASCII digits
    if not DATE_ISO_RE.fullmatch(value):
        raise ValidationError("date must be a valid YYYY-MM-DD date")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("date must be a valid YYYY-MM-DD date")
    return value


def validate_booking_request(req: BookingRequest, settings: Settings) -> BookingRequest:
    if not req.name or not (req.contact or req.email or req.phone) or not req.dateISO or not req.slot:
        raise ValidationError("name, contact/email/phone, dateISO and slot are required")
    validate_date_iso(req.dateISO)
    if req.slot not in generate_slots(settings.slot_ranges, settings.slot_step_minutes):
        raise ValidationError(f"slot {req.slot} is not offered")
    return req


@booking_router.get("/slots")
async def list_slots(
    settings: Annotated[Settings, Depends(get_settings)],
    clock: Annotated[Clock, Depends(get_clock)],
    date: Optional[str] = Query(None),
):
    date_iso = validate_date_iso(date)
    try:
        slots = await get_availability(date_iso, settings, clock)
        return [s.model_dump() for s in slots]
    except BaseORMException as e:
        logger.exception(f"GET /api/slots error: {e}")
        raise StorageFailure("server error")


@booking_router.post("/book")
async def book_appointment(
    req: BookingRequest,
    background_tasks: BackgroundTasks,
    settings: Annotated[Settings, Depends(get_settings)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
):
    validate_booking_request(req, settings)
    contact, email, phone = split_contact(req.contact, req.email, req.phone)
    try:
        booking = await create_booking(
            name=req.name,
            contact=contact,
            email=email,
            phone=phone,
            service=req.service,
            date_iso=req.dateISO,
            slot=req.slot,
            notes=req.notes,
        )
    except ClinicError:
        raise
    except BaseORMException as e:
        logger.exception(f"POST /api/book error: {e}")
        raise StorageFailure("server error")

    background_tasks.add_task(notify_admin_new_booking, notifier, booking, settings)
    return {"success": True, "id": str(booking.id)}


@booking_router.get("/bookings", dependencies=[Depends(require_admin)])
async def list_bookings(status: Optional[str] = Query(None)):
    try:
        query = Booking.all()
        if status:
            query = query.filter(status=BookingStatus(status))
        bookings = await query.order_by("date_iso", "slot")
        return [booking_to_dict(b) for b in bookings]
    except ValueError:
        raise ValidationError("invalid status")
    except BaseORMException as e:
        logger.exception(f"GET /api/bookings error: {e}")
        raise StorageFailure("server error")


@booking_router.post("/bookings/{booking_id}/status", dependencies=[Depends(require_admin)])
async def change_booking_status(
    booking_id: str,
    req: StatusRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
):
    try:
        change = await set_status(booking_id, req.status, notifier, settings)
    except ClinicError:
        raise
    except BaseORMException as e:
        logger.exception(f"POST /api/bookings/{booking_id}/status error: {e}")
        raise StorageFailure("server error")

    response = {"updated": booking_to_dict(change.booking), "emailSent": change.email_sent}
    if change.email_id:
        response["emailId"] = change.email_id
    if change.email_error:
        response["emailError"] = change.email_error
    return response

import asyncio
import logging
import smtplib
from contextlib import contextmanager
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional, Protocol
from pydantic import BaseModel

from helpers.config import Settings
from helpers.contact import patient_email
from helpers.errors import NotificationFailure
from models.booking import Booking


logger = logging.getLogger(__name__)


class OutboundEmail(BaseModel):
    to: str
    cc: Optional[str] = None
    subject: str
    text: str


class Notifier(Protocol):
    async def send(self, message: OutboundEmail) -> str:
        """Deliver one message. Returns a delivery id, raises NotificationFailure."""
        ...


class SmtpNotifier:
    """Sends mail through the configured SMTP server, one attempt per message."""

    def __init__(self, settings: Settings):
        if not settings.smtp_configured:
            raise ValueError("SMTP configuration is not set properly in environment variables.")
        self.settings = settings

    def _build(self, message: OutboundEmail) -> MIMEMultipart:
        mime = MIMEMultipart()
        mime["From"] = f'"{self.settings.clinic_name}" <{self.settings.from_email}>'
        mime["To"] = message.to
        if message.cc:
            mime["Cc"] = message.cc
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        mime.attach(MIMEText(message.text, "plain"))
        return mime

    @contextmanager
    def _session(self):
        s = self.settings
        if s.smtp_port == 465:
            server = smtplib.SMTP_SSL(s.smtp_server, s.smtp_port)
        else:
            server = smtplib.SMTP(s.smtp_server, s.smtp_port)
        with server:
            if s.smtp_port != 465:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            server.login(s.smtp_user, s.smtp_password)
            yield server

    def _send_blocking(self, message: OutboundEmail) -> str:
        mime = self._build(message)
        with self._session() as server:
            server.send_message(mime)
        return mime["Message-ID"]

    def _verify_blocking(self):
        with self._session():
            pass

    async def send(self, message: OutboundEmail) -> str:
        try:
            return await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationFailure(str(e)) from e

    async def verify(self):
        """Connect and log in without sending anything."""
        try:
            await asyncio.to_thread(self._verify_blocking)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationFailure(str(e)) from e


class DisabledNotifier:
    """Stand-in used when SMTP is not configured: logs what would have been sent."""

    async def send(self, message: OutboundEmail) -> str:
        logger.info(f"Mailer disabled, would send to: {message.to} cc: {message.cc}\n{message.subject}\n{message.text}")
        raise NotificationFailure("Mailer not configured")


def build_notifier(settings: Settings) -> Notifier:
    if settings.smtp_configured:
        logger.info(f"SMTP configured: {settings.smtp_server}:{settings.smtp_port}")
        return SmtpNotifier(settings)
    logger.warning("SMTP not configured. Emails will be logged but not actually sent.")
    return DisabledNotifier()


async def verify_notifier(notifier: Notifier) -> Notifier:
    """Check the SMTP login once; an unreachable server falls back to DisabledNotifier."""
    if not isinstance(notifier, SmtpNotifier):
        return notifier
    try:
        await notifier.verify()
    except NotificationFailure as e:
        logger.warning(f"SMTP verify failed, emails will be logged but not sent: {e}")
        return DisabledNotifier()
    logger.info("SMTP ready")
    return notifier


def build_new_booking_email(booking: Booking, settings: Settings) -> OutboundEmail:
    text = f"""New appointment request:
Name: {booking.name}
Contact(raw): {booking.contact or ''}
Email: {booking.email or 'N/A'}
Phone: {booking.phone or 'N/A'}
Service: {booking.service or 'N/A'}
Date: {booking.date_iso}
Slot: {booking.slot}
Notes: {booking.notes or ''}
CreatedAt: {booking.created_at.isoformat()}
"""
    return OutboundEmail(
        to=settings.admin_email,
        subject=f"New appointment: {booking.name} {booking.date_iso} {booking.slot}",
        text=text,
    )


def build_confirmation_email(booking: Booking, settings: Settings) -> OutboundEmail:
    """
    Confirmation addressed to the patient with the clinic in copy.

    When no patient address can be resolved the clinic itself is the recipient.
    """
    recipient = patient_email(booking.email, booking.contact)
    text = f"""Dear {booking.name},

Your appointment at {settings.clinic_name} has been CONFIRMED.

Patient details:
Name: {booking.name}
Contact (raw): {booking.contact or 'N/A'}
Email: {booking.email or 'N/A'}
Phone: {booking.phone or 'N/A'}

Appointment details:
Service: {booking.service or 'N/A'}
Date: {booking.date_iso}
Time: {booking.slot}

Notes: {booking.notes or 'N/A'}

If you need to reschedule or cancel, please contact us at {settings.clinic_phone}.

Regards,
{settings.clinic_name}
"""
    return OutboundEmail(
        to=recipient or settings.admin_email,
        cc=settings.admin_email if recipient else None,
        subject=f"Appointment Confirmed - {booking.name} - {booking.date_iso} {booking.slot}",
        text=text,
    )


async def notify_admin_new_booking(notifier: Notifier, booking: Booking, settings: Settings):
    try:
        delivery_id = await notifier.send(build_new_booking_email(booking, settings))
        logger.info(f"Admin notification sent: {delivery_id}")
    except NotificationFailure as e:
        logger.warning(f"Admin notification failed: {e}")

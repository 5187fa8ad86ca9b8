from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel


class ContactKind(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    UNKNOWN = "unknown"


class Contact(BaseModel):
    kind: ContactKind
    value: Optional[str] = None


def classify_contact(raw: Optional[str]) -> Contact:
    """
    Guess what a free-text contact field holds.

    Anything with an "@" is an email, any other non-blank text a phone number.
    """
    if raw is None:
        return Contact(kind=ContactKind.UNKNOWN)
    value = str(raw).strip()
    if not value:
        return Contact(kind=ContactKind.UNKNOWN)
    if "@" in value:
        return Contact(kind=ContactKind.EMAIL, value=value)
    return Contact(kind=ContactKind.PHONE, value=value)


def split_contact(
    contact: Optional[str],
    email: Optional[str],
    phone: Optional[str],
) -> Tuple[str, Optional[str], Optional[str]]:
    """
    Resolve (raw contact, email, phone) for a new booking.

    Explicit email/phone win over whatever the legacy contact field holds.
    """
    guessed = classify_contact(contact)
    resolved_email = email or (guessed.value if guessed.kind == ContactKind.EMAIL else None)
    resolved_phone = phone or (guessed.value if guessed.kind == ContactKind.PHONE else None)
    raw = contact or email or phone or ""
    return raw, resolved_email, resolved_phone


def patient_email(email: Optional[str], contact: Optional[str]) -> Optional[str]:
    if email:
        return email
    guessed = classify_contact(contact)
    return guessed.value if guessed.kind == ContactKind.EMAIL else None

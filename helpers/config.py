from dotenv import load_dotenv
load_dotenv()
import os
import re
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict


HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

DEFAULT_SLOT_RANGES = "09:00-13:30,17:00-21:00"


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    database_uri: str = "sqlite://clinic.sqlite3"
    generate_schemas: bool = False

    admin_key: str = "admin123"

    smtp_server: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    from_email: str = "no-reply@clinic.local"
    admin_email: str = "admin@clinic.local"

    clinic_name: str = "AAYUSH Surgical Clinic"
    clinic_phone: str = "+91 99609 95809"

    civil_utc_offset_minutes: int = 330
    slot_ranges: Tuple[Tuple[str, str], ...] = (("09:00", "13:30"), ("17:00", "21:00"))
    slot_step_minutes: int = 30

    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)

    @property
    def smtp_configured(self) -> bool:
        return all([self.smtp_server, self.smtp_port, self.smtp_user, self.smtp_password])


def parse_slot_ranges(value: str) -> Tuple[Tuple[str, str], ...]:
    """
    Parse "09:00-13:30,17:00-21:00" into (("09:00", "13:30"), ("17:00", "21:00")).
    """
    ranges = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            start, end = [part.strip() for part in chunk.split("-")]
        except ValueError:
            raise ValueError(f"Invalid slot range '{chunk}', expected HH:MM-HH:MM")
        if not HHMM_PATTERN.match(start) or not HHMM_PATTERN.match(end):
            raise ValueError(f"Invalid slot range '{chunk}', expected HH:MM-HH:MM")
        ranges.append((start, end))
    if not ranges:
        raise ValueError("SLOT_RANGES must contain at least one range")
    return tuple(ranges)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


def load_settings() -> Settings:
    smtp_user = os.getenv("SMTP_USER")
    step = _env_int("SLOT_STEP_MINUTES", 30)
    if step <= 0:
        raise ValueError("SLOT_STEP_MINUTES must be positive")

    return Settings(
        database_uri=os.getenv("DATABASE_URI", "sqlite://clinic.sqlite3"),
        generate_schemas=_env_bool("DB_GENERATE_SCHEMAS"),
        admin_key=os.getenv("ADMIN_KEY", "admin123"),
        smtp_server=os.getenv("SMTP_SERVER"),
        smtp_port=_env_int("SMTP_PORT"),
        smtp_user=smtp_user,
        smtp_password=os.getenv("SMTP_PASSWORD"),
        from_email=os.getenv("SMTP_FROM_ADDRESS") or smtp_user or "no-reply@clinic.local",
        admin_email=os.getenv("ADMIN_EMAIL", "admin@clinic.local"),
        clinic_name=os.getenv("CLINIC_NAME", "AAYUSH Surgical Clinic"),
        clinic_phone=os.getenv("CLINIC_PHONE", "+91 99609 95809"),
        civil_utc_offset_minutes=_env_int("CIVIL_UTC_OFFSET_MINUTES", 330),
        slot_ranges=parse_slot_ranges(os.getenv("SLOT_RANGES", DEFAULT_SLOT_RANGES)),
        slot_step_minutes=step,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()),
    )

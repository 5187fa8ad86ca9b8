from datetime import datetime
from typing import Callable, NamedTuple
import pytz


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


class CivilNow(NamedTuple):
    date_iso: str
    minutes: int


def now_civil(clock: Clock = utc_now, offset_minutes: int = 330) -> CivilNow:
    """
    Current calendar date and minute-of-day in the clinic's fixed-offset zone.

    The host timezone is never consulted: the clock's instant is taken as UTC
    and shifted by offset_minutes (330 for UTC+5:30).
    """
    instant = clock()
    if instant.tzinfo is None:
        instant = pytz.utc.localize(instant)
    civil = instant.astimezone(pytz.FixedOffset(offset_minutes))
    return CivilNow(
        date_iso=civil.strftime("%Y-%m-%d"),
        minutes=civil.hour * 60 + civil.minute,
    )

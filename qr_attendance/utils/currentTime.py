from datetime import date, datetime
from zoneinfo import ZoneInfo

from qr_attendance.config import TIMEZONE


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(ZoneInfo("UTC")).replace(tzinfo=None)


def local_now() -> datetime:
    """Current wall-clock time in the zone session dates and times are written in."""
    return datetime.now(ZoneInfo(TIMEZONE)).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()

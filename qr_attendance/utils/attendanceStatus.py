from datetime import date, datetime, time

from qr_attendance.config import LATE_THRESHOLD_MINUTES
from qr_attendance.models.enums import AttendanceStatus


def minutes_late(session_date: date, start_time: time, now: datetime) -> float:
    """Minutes between the nominal class start and `now`.

    Negative when scanning before the class starts.
    """
    class_start = datetime.combine(session_date, start_time)
    return (now - class_start).total_seconds() / 60


def classify_scan(
    session_date: date,
    start_time: time,
    now: datetime,
    threshold: int = LATE_THRESHOLD_MINUTES,
) -> AttendanceStatus:
    # Early scans have no lower bound and count as present
    if minutes_late(session_date, start_time, now) > threshold:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT

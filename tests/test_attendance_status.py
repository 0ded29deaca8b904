from datetime import date, datetime, time

from qr_attendance.models.enums import AttendanceStatus
from qr_attendance.utils import classify_scan, minutes_late

SESSION_DATE = date(2026, 3, 2)
START = time(9, 0)


def at(hour, minute, second=0):
    return datetime(2026, 3, 2, hour, minute, second)


def test_ten_minutes_after_start_is_present():
    assert classify_scan(SESSION_DATE, START, at(9, 10)) == AttendanceStatus.PRESENT


def test_sixteen_minutes_after_start_is_late():
    assert classify_scan(SESSION_DATE, START, at(9, 16)) == AttendanceStatus.LATE


def test_exactly_fifteen_minutes_is_still_present():
    assert classify_scan(SESSION_DATE, START, at(9, 15)) == AttendanceStatus.PRESENT


def test_one_second_past_threshold_is_late():
    assert classify_scan(SESSION_DATE, START, at(9, 15, 1)) == AttendanceStatus.LATE


def test_scan_before_start_is_present():
    assert minutes_late(SESSION_DATE, START, at(8, 30)) == -30
    assert classify_scan(SESSION_DATE, START, at(8, 30)) == AttendanceStatus.PRESENT


def test_scan_on_a_later_day_is_late():
    assert classify_scan(SESSION_DATE, START, datetime(2026, 3, 3, 8, 0)) == AttendanceStatus.LATE


def test_custom_threshold():
    assert classify_scan(SESSION_DATE, START, at(9, 6), threshold=5) == AttendanceStatus.LATE

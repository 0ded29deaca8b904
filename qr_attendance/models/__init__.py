from qr_attendance.models.course import Course, ScheduleEntry
from qr_attendance.models.user import User
from qr_attendance.models.classSession import ClassSession
from qr_attendance.models.attendanceRecord import Attendance

__all__ = ["User", "Course", "ScheduleEntry", "ClassSession", "Attendance"]

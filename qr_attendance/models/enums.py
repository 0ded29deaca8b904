from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    LECTURER = "lecturer"
    ADMIN = "admin"
    CLASS_REP = "class_rep"


# Roles whose courses come from enrollment rather than ownership
ENROLLED_ROLES = (Role.STUDENT, Role.CLASS_REP)


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"


class ScanMethod(str, Enum):
    QR_SCAN = "qr_scan"
    MANUAL = "manual"
    SYSTEM = "system"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

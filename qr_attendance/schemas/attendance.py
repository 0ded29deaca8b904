import datetime as dt

from pydantic import BaseModel, Field

from qr_attendance.schemas.classSession import ClassSessionOut
from qr_attendance.schemas.user import UserSummary


class DeviceInfo(BaseModel):
    user_agent: str | None = None
    ip_address: str | None = None


class Location(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ScanRequest(BaseModel):
    session_id: str
    device_info: DeviceInfo | None = None
    location: Location | None = None


class AttendanceOut(BaseModel):
    id: int
    scan_time: dt.datetime
    status: str
    scanned_by: str
    class_session: ClassSessionOut

    class Config:
        from_attributes = True


class CourseAttendanceOut(AttendanceOut):
    student: UserSummary

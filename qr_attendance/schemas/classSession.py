import datetime as dt

from pydantic import BaseModel, model_validator

from qr_attendance.models.enums import SessionStatus
from qr_attendance.schemas.course import CourseSummary


class ClassSessionCreate(BaseModel):
    course_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    venue: str

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class SessionStatusUpdate(BaseModel):
    status: SessionStatus


class ClassSessionOut(BaseModel):
    id: int
    session_id: str
    course: CourseSummary
    lecturer_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    venue: str
    status: SessionStatus
    qr_code_expiry: dt.datetime | None = None
    qr_code_is_active: bool
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True

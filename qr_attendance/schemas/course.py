import datetime as dt

from pydantic import BaseModel, Field, model_validator

from qr_attendance.models.enums import Weekday
from qr_attendance.schemas.user import UserSummary


class ScheduleEntryIn(BaseModel):
    day: Weekday
    start_time: dt.time
    end_time: dt.time
    venue: str

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ScheduleEntryOut(BaseModel):
    day: str
    start_time: dt.time
    end_time: dt.time
    venue: str | None = None

    class Config:
        from_attributes = True


class CourseCreate(BaseModel):
    course_code: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    department: str
    credits: int = Field(default=3, ge=0)
    schedule: list[ScheduleEntryIn] = []
    # Required when an admin creates the course on a lecturer's behalf
    lecturer_id: int | None = None


class EnrollRequest(BaseModel):
    student_ids: list[int] = Field(min_length=1)


class ClassRepRequest(BaseModel):
    user_id: int


class LecturerSummary(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class CourseSummary(BaseModel):
    id: int
    course_code: str
    course_name: str

    class Config:
        from_attributes = True


class CourseOut(BaseModel):
    id: int
    course_code: str
    course_name: str
    department: str
    credits: int
    lecturer: LecturerSummary
    schedule: list[ScheduleEntryOut]
    students: list[UserSummary]
    class_reps: list[UserSummary]
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True

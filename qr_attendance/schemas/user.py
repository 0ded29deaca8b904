from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from qr_attendance.models.enums import Role


class CreateUserRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role
    department: str | None = None
    student_id: str | None = None
    lecturer_id: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    student_id: str | None = None

    class Config:
        from_attributes = True


class UserOut(BaseModel):
    id: int
    user_id: str
    name: str
    email: str
    role: Role
    department: str | None = None
    student_id: str | None = None
    lecturer_id: str | None = None
    last_login: datetime | None = None

    class Config:
        from_attributes = True

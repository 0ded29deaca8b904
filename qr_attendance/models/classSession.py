from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import relationship

from qr_attendance.database.session import Base
from qr_attendance.models.enums import SessionStatus


class ClassSession(Base):
    __tablename__ = "ClassSessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), unique=True, nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    venue = Column(String(100), nullable=False)
    status = Column(String(15), default=SessionStatus.SCHEDULED.value)
    created_at = Column(DateTime)

    # QR artifact: PNG data URL, naive UTC deadline, active flag
    qr_code_data = Column(Text)
    qr_code_expiry = Column(DateTime)
    qr_code_is_active = Column(Boolean, default=True)

    # foreign keys
    course_id = Column(Integer, ForeignKey("Courses.id"), nullable=False)
    lecturer_id = Column(Integer, ForeignKey("Users.id"), nullable=False)

    course = relationship("Course", back_populates="sessions")
    lecturer = relationship("User")
    attendances = relationship("Attendance", back_populates="class_session")

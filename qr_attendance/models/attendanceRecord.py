from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from qr_attendance.database.session import Base
from qr_attendance.models.enums import AttendanceStatus, ScanMethod


class Attendance(Base):
    __tablename__ = "AttendanceRecords"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "class_session_id", name="uq_attendance_student_session"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("Users.id"), nullable=False)
    class_session_id = Column(Integer, ForeignKey("ClassSessions.id"), nullable=False)
    course_id = Column(Integer, ForeignKey("Courses.id"), nullable=False)
    scan_time = Column(DateTime)
    status = Column(String(10), default=AttendanceStatus.PRESENT.value)
    scanned_by = Column(String(10), default=ScanMethod.QR_SCAN.value)
    user_agent = Column(String(255))
    ip_address = Column(String(45))
    latitude = Column(Float)
    longitude = Column(Float)

    student = relationship("User", back_populates="attendances")
    class_session = relationship("ClassSession", back_populates="attendances")
    course = relationship("Course")

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from qr_attendance.database.session import Base
from qr_attendance.models.course import course_students


class User(Base):
    __tablename__ = "Users"

    id = Column(Integer, autoincrement=True, primary_key=True)
    user_id = Column(String(36), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(120), unique=True, nullable=False)
    hashed_password = Column(String(128), nullable=False)
    role = Column(String(15), nullable=False)
    department = Column(String(100))
    # Unique when present; NULL for every other role
    student_id = Column(String(50), unique=True)
    lecturer_id = Column(String(50), unique=True)
    created_at = Column(DateTime)
    last_login = Column(DateTime)

    enrolled_courses = relationship(
        "Course", secondary=course_students, back_populates="students"
    )
    courses_taught = relationship("Course", back_populates="lecturer")
    attendances = relationship("Attendance", back_populates="student")

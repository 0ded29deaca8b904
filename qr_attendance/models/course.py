from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Time,
)
from sqlalchemy.orm import relationship

from qr_attendance.database.session import Base

course_students = Table(
    "CourseStudents",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("Courses.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("Users.id"), primary_key=True),
)

course_class_reps = Table(
    "CourseClassReps",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("Courses.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("Users.id"), primary_key=True),
)


class Course(Base):
    __tablename__ = "Courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String(20), unique=True, nullable=False)
    course_name = Column(String(120), nullable=False)
    department = Column(String(100), nullable=False)
    credits = Column(Integer, default=3)
    created_at = Column(DateTime)

    # foreign key
    lecturer_id = Column(Integer, ForeignKey("Users.id"), nullable=False)

    lecturer = relationship("User", back_populates="courses_taught")
    schedule = relationship(
        "ScheduleEntry",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="ScheduleEntry.id",
    )
    students = relationship(
        "User", secondary=course_students, back_populates="enrolled_courses"
    )
    class_reps = relationship("User", secondary=course_class_reps)
    sessions = relationship("ClassSession", back_populates="course")


class ScheduleEntry(Base):
    __tablename__ = "CourseSchedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("Courses.id"), nullable=False)
    day = Column(String(10))
    start_time = Column(Time)
    end_time = Column(Time)
    venue = Column(String(100))

    course = relationship("Course", back_populates="schedule")

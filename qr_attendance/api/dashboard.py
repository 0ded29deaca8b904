from fastapi import APIRouter
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from qr_attendance.api.auth import current_user_dependency, db_dependency
from qr_attendance.models import Attendance, ClassSession, Course, User
from qr_attendance.models.course import course_students
from qr_attendance.models.enums import Role
from qr_attendance.utils import local_today

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def attendance_rate(attended: int, total: int) -> float:
    if total == 0:
        return 0
    return round(attended / total * 100, 2)


def _student_stats(db: Session, user: User) -> dict:
    course_ids = [course.id for course in user.enrolled_courses]
    total_classes = (
        db.query(func.count(ClassSession.id))
        .filter(
            ClassSession.course_id.in_(course_ids),
            ClassSession.date <= local_today(),
        )
        .scalar()
    )
    attended_classes = (
        db.query(func.count(Attendance.id))
        .filter(Attendance.student_id == user.id)
        .scalar()
    )
    return {
        "total_classes": total_classes,
        "attended_classes": attended_classes,
        "attendance_rate": attendance_rate(attended_classes, total_classes),
    }


def _lecturer_stats(db: Session, user: User) -> dict:
    course_ids = [
        course_id
        for (course_id,) in db.query(Course.id).filter(Course.lecturer_id == user.id)
    ]
    total_sessions = (
        db.query(func.count(ClassSession.id))
        .filter(ClassSession.course_id.in_(course_ids))
        .scalar()
    )
    total_students = (
        db.query(func.count(distinct(course_students.c.user_id)))
        .filter(course_students.c.course_id.in_(course_ids))
        .scalar()
    )
    return {
        "total_courses": len(course_ids),
        "total_sessions": total_sessions,
        "total_students": total_students,
    }


def _admin_stats(db: Session, user: User) -> dict:
    return {
        "total_users": db.query(func.count(User.id)).scalar(),
        "total_courses": db.query(func.count(Course.id)).scalar(),
        "total_sessions": db.query(func.count(ClassSession.id)).scalar(),
        "total_attendance_records": db.query(func.count(Attendance.id)).scalar(),
    }


STATS_BUILDERS = {
    Role.STUDENT: _student_stats,
    Role.CLASS_REP: _student_stats,
    Role.LECTURER: _lecturer_stats,
    Role.ADMIN: _admin_stats,
}


@router.get("/stats")
def dashboard_stats(user: current_user_dependency, db: db_dependency):
    stats = STATS_BUILDERS[Role(user.role)](db, user)
    return {"success": True, "stats": stats}

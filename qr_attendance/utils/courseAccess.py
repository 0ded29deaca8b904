from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from qr_attendance.models import ClassSession, Course, User
from qr_attendance.models.enums import Role


def get_course_or_404(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Course not found"
        )
    return course


def get_session_or_404(db: Session, session_id: str) -> ClassSession:
    class_session = (
        db.query(ClassSession).filter(ClassSession.session_id == session_id).first()
    )
    if class_session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Class session not found"
        )
    return class_session


def is_enrolled(user: User, course: Course) -> bool:
    return any(student.id == user.id for student in course.students)


def is_class_rep(user: User, course: Course) -> bool:
    return any(rep.id == user.id for rep in course.class_reps)


def owns_course(user: User, course: Course) -> bool:
    return course.lecturer_id == user.id


def _always(user: User, course: Course) -> bool:
    return True


def _never(user: User, course: Course) -> bool:
    return False


# Who may see a course and its sessions
COURSE_VIEWERS = {
    Role.ADMIN: _always,
    Role.LECTURER: owns_course,
    Role.STUDENT: is_enrolled,
    Role.CLASS_REP: is_enrolled,
}

# Who may change enrollment, class reps, and read a course's attendance
COURSE_MANAGERS = {
    Role.ADMIN: _always,
    Role.LECTURER: owns_course,
}

# Who may manage a course's sessions
SESSION_MANAGERS = {
    Role.ADMIN: _always,
    Role.LECTURER: owns_course,
    Role.CLASS_REP: is_class_rep,
}


def check_course_access(
    rules: dict, user: User, course: Course, detail: str = "Access denied"
) -> None:
    allowed = rules.get(Role(user.role), _never)
    if not allowed(user, course):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from qr_attendance.api.auth import (
    current_user_dependency,
    db_dependency,
    require_roles,
)
from qr_attendance.models import Course, ScheduleEntry, User
from qr_attendance.models.enums import ENROLLED_ROLES, Role
from qr_attendance.schemas.course import (
    ClassRepRequest,
    CourseCreate,
    CourseOut,
    EnrollRequest,
)
from qr_attendance.utils import utc_now
from qr_attendance.utils.courseAccess import (
    COURSE_MANAGERS,
    COURSE_VIEWERS,
    check_course_access,
    get_course_or_404,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])

course_creator = Annotated[User, Depends(require_roles(Role.LECTURER, Role.ADMIN))]


# ---------------------------- Ownership of a new course, per creator role
def _owner_for_lecturer(db: Session, user: User, course: CourseCreate) -> User:
    return user


def _owner_for_admin(db: Session, user: User, course: CourseCreate) -> User:
    if course.lecturer_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="lecturer_id is required when an admin creates a course",
        )
    lecturer = db.get(User, course.lecturer_id)
    if lecturer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Lecturer not found"
        )
    if lecturer.role != Role.LECTURER.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="lecturer_id must reference a lecturer",
        )
    return lecturer


COURSE_OWNERS = {
    Role.LECTURER: _owner_for_lecturer,
    Role.ADMIN: _owner_for_admin,
}


# ---------------------------- Courses visible to each role
def _owned_courses(db: Session, user: User):
    return db.query(Course).filter(Course.lecturer_id == user.id)


def _enrolled_courses(db: Session, user: User):
    return db.query(Course).filter(Course.students.any(User.id == user.id))


def _all_courses(db: Session, user: User):
    return db.query(Course)


COURSE_SCOPES = {
    Role.LECTURER: _owned_courses,
    Role.STUDENT: _enrolled_courses,
    Role.CLASS_REP: _enrolled_courses,
    Role.ADMIN: _all_courses,
}


# ---------------------------- Endpoint to create a course
@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(course: CourseCreate, user: course_creator, db: db_dependency):
    """Creates a course owned by the calling lecturer, or by `lecturer_id` for admins."""
    lecturer = COURSE_OWNERS[Role(user.role)](db, user, course)

    if db.query(Course).filter(Course.course_code == course.course_code).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Course {course.course_code} already exists",
        )

    new_course = Course(
        course_code=course.course_code,
        course_name=course.course_name,
        department=course.department,
        credits=course.credits,
        lecturer_id=lecturer.id,
        created_at=utc_now(),
        schedule=[
            ScheduleEntry(
                day=entry.day.value,
                start_time=entry.start_time,
                end_time=entry.end_time,
                venue=entry.venue,
            )
            for entry in course.schedule
        ],
    )
    db.add(new_course)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Course {course.course_code} already exists",
        )
    db.refresh(new_course)

    logger.info("Course %s created for lecturer %s", new_course.course_code, lecturer.id)
    return {"success": True, "course": CourseOut.model_validate(new_course)}


# ---------------------------- Endpoint to list courses
@router.get("")
def list_courses(user: current_user_dependency, db: db_dependency):
    """Lecturers see their own courses, students and class reps their enrolled
    courses, admins every course."""
    courses = COURSE_SCOPES[Role(user.role)](db, user).order_by(Course.course_code).all()
    return {
        "success": True,
        "courses": [CourseOut.model_validate(course) for course in courses],
    }


@router.get("/{course_id}")
def get_course(course_id: int, user: current_user_dependency, db: db_dependency):
    course = get_course_or_404(db, course_id)
    check_course_access(COURSE_VIEWERS, user, course)
    return {"success": True, "course": CourseOut.model_validate(course)}


# ---------------------------- Enrollment
@router.post("/{course_id}/students")
def enroll_students(
    course_id: int,
    enrollment: EnrollRequest,
    user: course_creator,
    db: db_dependency,
):
    course = get_course_or_404(db, course_id)
    check_course_access(
        COURSE_MANAGERS, user, course, detail="Not authorized for this course"
    )

    for student_pk in dict.fromkeys(enrollment.student_ids):
        student = db.get(User, student_pk)
        if student is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User {student_pk} not found",
            )
        if Role(student.role) not in ENROLLED_ROLES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"User {student_pk} is not a student",
            )
        if student not in course.students:
            course.students.append(student)

    db.commit()
    db.refresh(course)
    logger.info("Enrollment of %s now %d", course.course_code, len(course.students))
    return {"success": True, "course": CourseOut.model_validate(course)}


@router.delete("/{course_id}/students/{student_id}")
def unenroll_student(
    course_id: int, student_id: int, user: course_creator, db: db_dependency
):
    course = get_course_or_404(db, course_id)
    check_course_access(
        COURSE_MANAGERS, user, course, detail="Not authorized for this course"
    )

    student = next((s for s in course.students if s.id == student_id), None)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not enrolled in this course",
        )

    course.students.remove(student)
    if student in course.class_reps:
        course.class_reps.remove(student)

    db.commit()
    db.refresh(course)
    return {"success": True, "course": CourseOut.model_validate(course)}


@router.post("/{course_id}/class-reps")
def add_class_rep(
    course_id: int, rep: ClassRepRequest, user: course_creator, db: db_dependency
):
    """Makes a class_rep user a representative of the course, enrolling them too."""
    course = get_course_or_404(db, course_id)
    check_course_access(
        COURSE_MANAGERS, user, course, detail="Not authorized for this course"
    )

    class_rep = db.get(User, rep.user_id)
    if class_rep is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    if class_rep.role != Role.CLASS_REP.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User does not have the class_rep role",
        )

    if class_rep not in course.class_reps:
        course.class_reps.append(class_rep)
    if class_rep not in course.students:
        course.students.append(class_rep)

    db.commit()
    db.refresh(course)
    return {"success": True, "course": CourseOut.model_validate(course)}

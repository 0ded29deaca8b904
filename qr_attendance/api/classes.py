import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status

from qr_attendance.api.auth import (
    current_user_dependency,
    db_dependency,
    require_roles,
)
from qr_attendance.models import ClassSession, Course, User
from qr_attendance.models.enums import ENROLLED_ROLES, Role, SessionStatus
from qr_attendance.schemas.classSession import (
    ClassSessionCreate,
    ClassSessionOut,
    SessionStatusUpdate,
)
from qr_attendance.schemas.course import CourseSummary
from qr_attendance.utils import (
    build_qr_payload,
    local_today,
    qr_expiry,
    qr_is_expired,
    render_qr_data_url,
    utc_now,
)
from qr_attendance.utils.courseAccess import (
    COURSE_VIEWERS,
    SESSION_MANAGERS,
    check_course_access,
    get_course_or_404,
    get_session_or_404,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/classes", tags=["classes"])

session_creator = Annotated[User, Depends(require_roles(Role.LECTURER, Role.CLASS_REP))]
session_manager = Annotated[
    User, Depends(require_roles(Role.LECTURER, Role.CLASS_REP, Role.ADMIN))
]

ALLOWED_TRANSITIONS = {
    SessionStatus.SCHEDULED: {SessionStatus.ONGOING, SessionStatus.CANCELLED},
    SessionStatus.ONGOING: {SessionStatus.COMPLETED, SessionStatus.CANCELLED},
}

# Statuses after which the QR code can no longer be scanned
CLOSED_STATUSES = {SessionStatus.COMPLETED, SessionStatus.CANCELLED}


# ---------------------------- Sessions visible to each role
def _lectured_sessions(db: Session, user: User):
    return db.query(ClassSession).filter(ClassSession.lecturer_id == user.id)


def _enrolled_sessions(db: Session, user: User):
    return db.query(ClassSession).filter(
        ClassSession.course.has(Course.students.any(User.id == user.id))
    )


def _all_sessions(db: Session, user: User):
    return db.query(ClassSession)


SESSION_SCOPES = {
    Role.LECTURER: _lectured_sessions,
    Role.STUDENT: _enrolled_sessions,
    Role.CLASS_REP: _enrolled_sessions,
    Role.ADMIN: _all_sessions,
}


# ---------------------------- Endpoint to create a class session and its QR code
@router.post("", status_code=status.HTTP_201_CREATED)
def create_class_session(
    new_session: ClassSessionCreate, user: session_creator, db: db_dependency
):
    """Creates a scheduled session and issues its QR code.

    Lecturers may only open sessions for courses they teach, class reps only
    for courses they represent. The QR code stays valid for a fixed window
    after issuance.
    """
    course = get_course_or_404(db, new_session.course_id)
    check_course_access(
        SESSION_MANAGERS, user, course, detail="Not authorized for this course"
    )

    class_session = ClassSession(
        session_id=str(uuid.uuid4()),
        course_id=course.id,
        lecturer_id=course.lecturer_id,
        date=new_session.date,
        start_time=new_session.start_time,
        end_time=new_session.end_time,
        venue=new_session.venue,
        status=SessionStatus.SCHEDULED.value,
        created_at=utc_now(),
    )
    db.add(class_session)
    db.commit()
    db.refresh(class_session)

    issued_at = utc_now()
    payload = build_qr_payload(class_session.session_id, course.id, issued_at)
    class_session.qr_code_data = render_qr_data_url(payload)
    class_session.qr_code_expiry = qr_expiry(issued_at)
    class_session.qr_code_is_active = True
    db.commit()
    db.refresh(class_session)

    logger.info(
        "Session %s opened for %s on %s",
        class_session.session_id,
        course.course_code,
        class_session.date,
    )
    return {
        "success": True,
        "class_session": ClassSessionOut.model_validate(class_session),
        "qr_code": class_session.qr_code_data,
    }


# ---------------------------- Endpoint to list today's sessions
@router.get("/today")
def list_today_sessions(user: current_user_dependency, db: db_dependency):
    classes = (
        SESSION_SCOPES[Role(user.role)](db, user)
        .filter(ClassSession.date == local_today())
        .order_by(ClassSession.start_time)
        .all()
    )
    return {
        "success": True,
        "classes": [ClassSessionOut.model_validate(c) for c in classes],
    }


# ---------------------------- Endpoint to fetch a session's QR code
@router.get("/{session_id}/qr-code")
def get_qr_code(session_id: str, user: current_user_dependency, db: db_dependency):
    class_session = get_session_or_404(db, session_id)

    if Role(user.role) in ENROLLED_ROLES:
        check_course_access(
            COURSE_VIEWERS,
            user,
            class_session.course,
            detail="Not enrolled in this course",
        )

    if qr_is_expired(class_session.qr_code_expiry, utc_now()):
        if class_session.qr_code_is_active:
            class_session.qr_code_is_active = False
            db.commit()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="QR code expired"
        )

    return {
        "success": True,
        "qr_code": class_session.qr_code_data,
        "course": CourseSummary.model_validate(class_session.course),
        "expiry": class_session.qr_code_expiry,
        "is_active": class_session.qr_code_is_active,
    }


# ---------------------------- Endpoint to move a session through its lifecycle
@router.put("/{session_id}/status")
def update_session_status(
    session_id: str,
    update: SessionStatusUpdate,
    user: session_manager,
    db: db_dependency,
):
    class_session = get_session_or_404(db, session_id)
    check_course_access(
        SESSION_MANAGERS,
        user,
        class_session.course,
        detail="Not authorized for this course",
    )

    current = SessionStatus(class_session.status)
    if update.status not in ALLOWED_TRANSITIONS.get(current, set()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot move session from {current.value} to {update.status.value}",
        )

    class_session.status = update.status.value
    if update.status in CLOSED_STATUSES:
        class_session.qr_code_is_active = False
    db.commit()
    db.refresh(class_session)

    logger.info("Session %s is now %s", session_id, class_session.status)
    return {
        "success": True,
        "class_session": ClassSessionOut.model_validate(class_session),
    }

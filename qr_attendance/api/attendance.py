import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from starlette import status

from qr_attendance.api.auth import db_dependency, require_roles
from qr_attendance.models import Attendance, User
from qr_attendance.models.enums import Role, ScanMethod
from qr_attendance.schemas.attendance import (
    AttendanceOut,
    CourseAttendanceOut,
    DeviceInfo,
    ScanRequest,
)
from qr_attendance.utils import classify_scan, local_now, qr_is_usable, utc_now
from qr_attendance.utils.courseAccess import (
    COURSE_MANAGERS,
    check_course_access,
    get_course_or_404,
    get_session_or_404,
    is_enrolled,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attendance", tags=["attendance"])

student_dependency = Annotated[User, Depends(require_roles(Role.STUDENT))]
staff_dependency = Annotated[User, Depends(require_roles(Role.LECTURER, Role.ADMIN))]


def _device_from_request(request: Request) -> DeviceInfo:
    return DeviceInfo(
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )


# ---------------------------- Endpoint to validate a scan and record attendance
@router.post("/scan")
def scan_attendance(
    scan: ScanRequest,
    request: Request,
    user: student_dependency,
    db: db_dependency,
):
    """Student endpoint for recording attendance from a scanned QR code.

    A student is marked late when scanning more than the late threshold after
    the session's start time, present otherwise.
    """
    class_session = get_session_or_404(db, scan.session_id)

    if not qr_is_usable(
        class_session.qr_code_is_active, class_session.qr_code_expiry, utc_now()
    ):
        logger.warning(
            "Rejected scan by %s: QR for %s expired or inactive",
            user.id,
            scan.session_id,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="QR code expired or inactive",
        )

    course = class_session.course
    if not is_enrolled(user, course):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enrolled in this course",
        )

    existing = (
        db.query(Attendance)
        .filter(
            Attendance.student_id == user.id,
            Attendance.class_session_id == class_session.id,
        )
        .first()
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Attendance already marked"
        )

    attendance_status = classify_scan(
        class_session.date, class_session.start_time, local_now()
    )
    device = scan.device_info or _device_from_request(request)

    attendance = Attendance(
        student_id=user.id,
        class_session_id=class_session.id,
        course_id=course.id,
        scan_time=utc_now(),
        status=attendance_status.value,
        scanned_by=ScanMethod.QR_SCAN.value,
        user_agent=device.user_agent,
        ip_address=device.ip_address,
        latitude=scan.location.lat if scan.location else None,
        longitude=scan.location.lng if scan.location else None,
    )
    db.add(attendance)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent scan for the same session
        db.rollback()
        logger.warning("Duplicate scan by %s for %s", user.id, scan.session_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Attendance already marked"
        )
    db.refresh(attendance)

    logger.info(
        "Attendance %s for student %s in %s", attendance.status, user.id, course.course_code
    )
    return {
        "success": True,
        "message": "Attendance marked successfully",
        "attendance": {
            "id": attendance.id,
            "course": course.course_code,
            "time": attendance.scan_time,
            "status": attendance.status,
        },
    }


# ---------------------------- Endpoint to list a student's own records
@router.get("/my-attendance")
def my_attendance(user: student_dependency, db: db_dependency):
    records = (
        db.query(Attendance)
        .filter(Attendance.student_id == user.id)
        .order_by(Attendance.scan_time.desc())
        .all()
    )
    return {
        "success": True,
        "attendance": [AttendanceOut.model_validate(r) for r in records],
    }


# ---------------------------- Endpoint to list all records of a course
@router.get("/course/{course_id}")
def course_attendance(course_id: int, user: staff_dependency, db: db_dependency):
    """Gets the attendance records for a course.
    Lecturers can only see the records of courses they teach.
    """
    course = get_course_or_404(db, course_id)
    check_course_access(COURSE_MANAGERS, user, course)

    records = (
        db.query(Attendance)
        .filter(Attendance.course_id == course.id)
        .order_by(Attendance.scan_time.desc())
        .all()
    )
    return {
        "success": True,
        "attendance": [CourseAttendanceOut.model_validate(r) for r in records],
    }

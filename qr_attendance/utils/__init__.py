from qr_attendance.utils.attendanceStatus import classify_scan, minutes_late
from qr_attendance.utils.authenticateUser import authenticate_user, bcrypt_context
from qr_attendance.utils.createAccessToken import create_access_token
from qr_attendance.utils.currentTime import local_now, local_today, utc_now
from qr_attendance.utils.decodeAccessToken import decode_token
from qr_attendance.utils.qrCode import (
    build_qr_payload,
    qr_expiry,
    qr_is_expired,
    qr_is_usable,
    render_qr_data_url,
)

import base64
import io
import json
from datetime import datetime, timedelta

import qrcode

from qr_attendance.config import QR_EXPIRY_HOURS


def build_qr_payload(session_id: str, course_id: int, issued_at: datetime) -> str:
    """JSON text encoded into the QR image: which session, which course, when."""
    return json.dumps(
        {
            "session_id": session_id,
            "course_id": course_id,
            "timestamp": issued_at.isoformat(),
        }
    )


def render_qr_data_url(payload: str) -> str:
    img = qrcode.make(payload)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    qr_b64 = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{qr_b64}"


def qr_expiry(issued_at: datetime, hours: int = QR_EXPIRY_HOURS) -> datetime:
    return issued_at + timedelta(hours=hours)


def qr_is_expired(expiry: datetime | None, now: datetime) -> bool:
    # A session without an issued QR has nothing valid to serve
    return expiry is None or now > expiry


def qr_is_usable(is_active: bool, expiry: datetime | None, now: datetime) -> bool:
    return bool(is_active) and not qr_is_expired(expiry, now)

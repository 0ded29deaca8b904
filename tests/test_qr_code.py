import base64
import json
from datetime import datetime, timedelta

from qr_attendance.utils import (
    build_qr_payload,
    qr_expiry,
    qr_is_expired,
    qr_is_usable,
    render_qr_data_url,
)

ISSUED_AT = datetime(2026, 3, 2, 8, 0)


def test_payload_identifies_session_course_and_issue_time():
    payload = json.loads(build_qr_payload("abc-123", 7, ISSUED_AT))

    assert payload == {
        "session_id": "abc-123",
        "course_id": 7,
        "timestamp": "2026-03-02T08:00:00",
    }


def test_rendered_artifact_is_png_data_url():
    data_url = render_qr_data_url(build_qr_payload("abc-123", 7, ISSUED_AT))

    prefix = "data:image/png;base64,"
    assert data_url.startswith(prefix)
    png = base64.b64decode(data_url[len(prefix):])
    assert png.startswith(b"\x89PNG")


def test_expiry_is_three_hours_after_issue():
    assert qr_expiry(ISSUED_AT) == ISSUED_AT + timedelta(hours=3)


def test_expired_only_strictly_after_deadline():
    expiry = qr_expiry(ISSUED_AT)

    assert not qr_is_expired(expiry, expiry - timedelta(seconds=1))
    assert not qr_is_expired(expiry, expiry)
    assert qr_is_expired(expiry, expiry + timedelta(seconds=1))


def test_missing_expiry_counts_as_expired():
    assert qr_is_expired(None, ISSUED_AT)


def test_usable_needs_active_flag_and_unexpired():
    expiry = qr_expiry(ISSUED_AT)

    assert qr_is_usable(True, expiry, ISSUED_AT)
    assert not qr_is_usable(False, expiry, ISSUED_AT)
    assert not qr_is_usable(True, expiry, expiry + timedelta(minutes=1))

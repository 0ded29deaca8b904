from datetime import datetime, timedelta, timezone

from jose import jwt

from qr_attendance.config import ALGORITHM, SECRET_KEY


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: timedelta,
):
    data_to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
    }
    expires = datetime.now(timezone.utc) + expires_delta
    data_to_encode.update({"exp": expires})
    return jwt.encode(data_to_encode, SECRET_KEY, algorithm=ALGORITHM)

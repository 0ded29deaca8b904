from fastapi import HTTPException, status
from jose import JWTError, jwt

from qr_attendance.config import ALGORITHM, SECRET_KEY


def decode_token(token: str):
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    user_id = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")

    if not all([user_id, email, role]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    return {
        "sub": user_id,
        "email": email,
        "role": role,
    }

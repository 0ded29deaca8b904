from passlib.context import CryptContext

from qr_attendance.models import User

bcrypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def authenticate_user(email: str, password: str, db):
    user = db.query(User).filter(User.email == email).first()

    if not user or not bcrypt_context.verify(password, user.hashed_password):
        return False
    return user

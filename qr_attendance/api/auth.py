import logging
import uuid
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from qr_attendance.config import ACCESS_TOKEN_EXPIRE_MINUTES
from qr_attendance.database.session import get_db
from qr_attendance.models import User
from qr_attendance.models.enums import Role
from qr_attendance.schemas.accessToken import Token
from qr_attendance.schemas.user import CreateUserRequest, LoginRequest, UserOut
from qr_attendance.utils import (
    authenticate_user,
    bcrypt_context,
    create_access_token,
    decode_token,
    utc_now,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_bearer = OAuth2PasswordBearer(tokenUrl="/auth/token/")


db_dependency = Annotated[Session, Depends(get_db)]


def issue_token(user: User) -> str:
    return create_access_token(
        user.id,
        user.email,
        user.role,
        timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def get_current_user(db: db_dependency, token: str = Depends(oauth2_bearer)) -> User:
    """Resolve the bearer token back to the stored user."""
    claims = decode_token(token)
    try:
        user_pk = int(claims["sub"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    user = db.get(User, user_pk)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )
    return user


def require_roles(*roles: Role):
    allowed = {role.value for role in roles}

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Access denied"
            )
        return current_user

    return role_checker


current_user_dependency = Annotated[User, Depends(get_current_user)]


# --------------------------------------------------------------------------------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(db: db_dependency, new_user: CreateUserRequest):
    existing_user = db.query(User).filter(User.email == new_user.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="User already exists"
        )

    # Institutional identifiers only apply to their own role
    student_id = new_user.student_id if new_user.role == Role.STUDENT else None
    lecturer_id = new_user.lecturer_id if new_user.role == Role.LECTURER else None

    if student_id and db.query(User).filter(User.student_id == student_id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Student ID already registered",
        )
    if lecturer_id and db.query(User).filter(User.lecturer_id == lecturer_id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Lecturer ID already registered",
        )

    user = User(
        user_id=str(uuid.uuid4()),
        name=new_user.name,
        email=new_user.email,
        hashed_password=bcrypt_context.hash(new_user.password),
        role=new_user.role.value,
        department=new_user.department,
        student_id=student_id,
        lecturer_id=lecturer_id,
        created_at=utc_now(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Registration raced on a unique field for %s", new_user.email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="User already exists"
        )
    db.refresh(user)

    logger.info("Registered %s user %s", user.role, user.email)
    return {
        "success": True,
        "token": issue_token(user),
        "user": UserOut.model_validate(user),
    }


def _login(db: Session, email: str, password: str) -> User:
    user = authenticate_user(email, password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user.last_login = utc_now()
    db.commit()
    db.refresh(user)
    logger.info("User %s logged in", user.email)
    return user


@router.post("/login")
def login(db: db_dependency, credentials: LoginRequest):
    user = _login(db, credentials.email, credentials.password)
    return {
        "success": True,
        "token": issue_token(user),
        "user": UserOut.model_validate(user),
    }


@router.post("/token/", response_model=Token)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()], db: db_dependency
):
    """OAuth2 password flow for the interactive docs; `username` is the email."""
    user = _login(db, form_data.username, form_data.password)
    return {"access_token": issue_token(user), "token_type": "bearer"}


@router.get("/me")
def read_current_user(current_user: current_user_dependency):
    return {"success": True, "user": UserOut.model_validate(current_user)}

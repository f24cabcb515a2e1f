"""Auth service — password hashing, registration and credential checks."""

from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from qto.config import get_settings
from qto.core.exceptions import ConflictError, StorageError, ValidationError
from qto.domain.enums import UserRole
from qto.domain.models.user import User
from qto.domain.schemas.auth import RegisterRequest, SessionUser

settings = get_settings()
logger = structlog.get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

MIN_PASSWORD_LENGTH = 8
MIN_EMAIL_LENGTH = 5


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def to_session_user(user: User) -> SessionUser:
    return SessionUser(user_id=user.id, username=user.username, role=user.role)


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def create_user(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    role: str = UserRole.DATA_ENTRY.value,
) -> User:
    user = User(
        username=email,
        email=email,
        full_name=full_name,
        password_hash=hash_password(password),
        role=role,
    )
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("User insert violated a unique constraint", error=str(e.orig))
        if "username" in str(e.orig):
            raise ConflictError("Username (email) already registered.") from e
        raise ConflictError("Email already registered.") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("User insert failed", error=str(e))
        raise StorageError("Registration failed due to a server error. Please try again.") from e

    db.refresh(user)
    return user


def validate_registration(body: RegisterRequest) -> None:
    if not body.full_name or not body.email or not body.password or not body.confirm_password:
        raise ValidationError("All fields are required.")
    if body.password != body.confirm_password:
        raise ValidationError("Passwords do not match.", details={"confirm_password": "Passwords do not match."})
    if "@" not in body.email or len(body.email) < MIN_EMAIL_LENGTH:
        raise ValidationError("Invalid email format.", details={"email": "Invalid email format."})
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
            details={"password": "Password is too short."},
        )


def register_user(db: Session, body: RegisterRequest) -> User:
    """Register a new Data Entry user. Email doubles as the username."""
    validate_registration(body)

    if get_user_by_email(db, body.email):
        raise ConflictError("Email already registered.")
    if get_user_by_username(db, body.email):
        raise ConflictError("Username (email) already registered.")

    user = create_user(db, full_name=body.full_name, email=body.email, password=body.password)
    logger.info("User registered", user_id=user.id)
    return user


def ensure_initial_admin(db: Session) -> Optional[User]:
    """Create the configured bootstrap admin if it does not exist yet."""
    if not settings.INITIAL_ADMIN_EMAIL or not settings.INITIAL_ADMIN_PASSWORD:
        return None

    existing = get_user_by_email(db, settings.INITIAL_ADMIN_EMAIL)
    if existing:
        return existing

    admin = create_user(
        db,
        full_name=settings.INITIAL_ADMIN_NAME,
        email=settings.INITIAL_ADMIN_EMAIL,
        password=settings.INITIAL_ADMIN_PASSWORD,
        role=UserRole.ADMIN.value,
    )
    logger.info("Initial admin user created", user_id=admin.id)
    return admin

"""Authentication service for JWT, password handling and user status."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialapi.config import get_settings
from socialapi.errors import AuthError, ConflictError, NotFoundError, ValidationError
from socialapi.models.user import User
from socialapi.services.guards import ANONYMOUS, Identity, validate_user_fields

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def identity_from_token(token: str | None) -> Identity:
    """Resolve a bearer token into an Identity; bad tokens are anonymous."""
    if not token:
        return ANONYMOUS
    payload = decode_access_token(token)
    if payload is None:
        return ANONYMOUS
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return ANONYMOUS
    return Identity(user_id=user_id, email=payload.get("email"))


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user(db: Session, user_id: int) -> User:
    """Get a user by id or fail with 404."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def signup(db: Session, email: str, name: str, password: str) -> User:
    """Register a new user after validating input and email uniqueness."""
    normalized_email = validate_user_fields(email, password, name)

    if get_user_by_email(db, normalized_email):
        raise ConflictError("User already exists!")

    user = User(
        email=normalized_email,
        password_hash=get_password_hash(password),
        name=name.strip(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same address
        db.rollback()
        raise ConflictError("User already exists!") from e
    db.refresh(user)

    logger.info(f"User signed up: id={user.id}")
    return user


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    """Check credentials and issue an access token."""
    user = get_user_by_email(db, email)
    if not user:
        raise AuthError("No account with this email exists.")
    if not verify_password(password, user.password_hash):
        raise AuthError("Incorrect password.")

    token = create_access_token(user.id, user.email)
    logger.info(f"User logged in: id={user.id}")
    return token, user


def get_user_status(db: Session, user_id: int) -> str:
    """Read the status of the given user."""
    return get_user(db, user_id).status


def update_user_status(db: Session, user_id: int, status: str) -> User:
    """Overwrite the status of the given user."""
    user = get_user(db, user_id)

    new_status = (status or "").strip()
    if not new_status:
        raise ValidationError(
            "Validation failed.", data=[{"field": "status", "message": "Status is required."}]
        )

    user.status = new_status
    db.commit()
    db.refresh(user)
    return user

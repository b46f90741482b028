# storefront/auth/service.py

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..users.models import User, Role
from . import models
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from ..logging import logger
from ..utils.password_utils import is_password_strong, verify_password, get_password_hash, dummy_verify

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
INACTIVE_ACCOUNT_MESSAGE = "Your account has been deactivated. Please contact support."


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Authenticates by username or email.

    Unknown users and wrong passwords get the same message so usernames
    cannot be enumerated; an inactive account with the right password is
    told it was deactivated.
    """
    user = db.query(User).filter(or_(User.username == username, User.email == username)).first()
    if not user:
        dummy_verify()
        logger.warning(f"Failed login attempt for user: {username} - unknown account")
        raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for user: {username} - wrong password")
        raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

    if not user.is_active:
        logger.warning(f"Login attempt for inactive user: {username}")
        raise AuthenticationError(message=INACTIVE_ACCOUNT_MESSAGE)

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.info(f"User authenticated successfully: {user.username}, Role: {user.role}")
    return user


def register_user(db: Session, register_user_request: models.RegisterUserRequest) -> User:
    """Registers a new account; the role is always Customer."""
    logger.info(f"Registration attempt for username: {register_user_request.username}")

    if not is_password_strong(register_user_request.password):
        raise ValidationError(
            field="password",
            user_message="Password is not strong enough. It must be at least 6 characters long and include a letter and a number.",
        )

    if db.query(User).filter(User.username == register_user_request.username).first():
        raise ConflictError(field="username", user_message="Username already exists")

    if db.query(User).filter(User.email == register_user_request.email).first():
        raise ConflictError(field="email", user_message="Email already exists")

    now = datetime.now(timezone.utc)
    user = User(
        id=str(uuid4()),
        username=register_user_request.username,
        email=register_user_request.email,
        first_name=register_user_request.first_name,
        last_name=register_user_request.last_name,
        password_hash=get_password_hash(register_user_request.password),
        role=Role.CUSTOMER.value,
        is_active=True,
        created_at=now,
        last_login=now,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"New customer registered successfully: {user.username}")
    return user

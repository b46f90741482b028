# storefront/utils/password_utils.py

import re
from passlib.context import CryptContext
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

# Create the context once and reuse it
bcrypt_context = CryptContext(
    schemes=['bcrypt'],
    deprecated='auto',
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def is_password_strong(password: str) -> bool:
    """
    Checks if a password meets the registration requirements.
    """
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        return False
    if not re.search(r"[A-Za-z]", password):
        return False
    if not re.search(r"[0-9]", password):
        return False
    return True


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain-text password against a hashed password.

    Comparison is delegated to bcrypt; a malformed hash counts as a mismatch.
    """
    try:
        return bcrypt_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be parsed.")
        return False


def dummy_verify() -> None:
    """
    Spends the same time as a real verification when no account matched.
    """
    bcrypt_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """
    Hashes a plain-text password.
    """
    try:
        return bcrypt_context.hash(password)
    except Exception:
        logger.exception("Error occurred while hashing password.")
        raise

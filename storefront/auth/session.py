# storefront/auth/session.py
"""
Signed session credentials.

A credential is an HS256 JWT carrying the account id, username, email,
given/family name and role. The role is captured at sign-in and never
re-read from the store, so a role change only takes effect after the user
signs in again.

Lifetimes:

* ``remember_me=False`` -> ``AUTH_COOKIE_HOURS`` (1 hour), browser-session cookie
* ``remember_me=True``  -> ``REMEMBER_ME_DAYS`` (30 days), persistent cookie

Expiration slides: once less than half of the window is left, validation
re-issues the credential with a fresh window of the same length.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt import PyJWTError
from fastapi import Request, Response

from ..core.config import settings
from ..users.models import User
from .models import Identity
from ..logging import logger

REQUIRED_CLAIMS = ["sub", "username", "role", "exp", "win"]


@dataclass
class IssuedCredential:
    token: str
    expires_at: datetime
    persistent: bool
    window: timedelta


@dataclass
class ValidatedSession:
    identity: Identity
    # Set only when the credential was slid forward
    refreshed: Optional[IssuedCredential] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def credential_window(remember_me: bool) -> timedelta:
    if remember_me:
        return timedelta(days=settings.REMEMBER_ME_DAYS)
    return timedelta(hours=settings.AUTH_COOKIE_HOURS)


def _encode(claims: dict, now: datetime, window: timedelta, persistent: bool) -> IssuedCredential:
    expires_at = now + window
    payload = {
        **claims,
        'iat': int(now.timestamp()),
        'exp': int(expires_at.timestamp()),
        'win': int(window.total_seconds()),
        'persistent': persistent,
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return IssuedCredential(token=token, expires_at=expires_at, persistent=persistent, window=window)


def issue_credential(user: User, remember_me: bool, now: Optional[datetime] = None) -> IssuedCredential:
    """Creates the credential for a successful sign-in."""
    now = now or _utcnow()
    claims = {
        'sub': str(user.id),
        'username': user.username,
        'email': user.email,
        'given_name': user.first_name,
        'family_name': user.last_name,
        'role': user.role,
    }
    return _encode(claims, now, credential_window(remember_me), remember_me)


def validate_credential(token: Optional[str], now: Optional[datetime] = None) -> Optional[ValidatedSession]:
    """
    Returns the session carried by ``token`` or None when the token is
    missing, malformed, tampered with or past its expiry.
    """
    if not token:
        return None

    now = now or _utcnow()
    try:
        # Expiry is checked against ``now`` below so callers can pin the clock
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": REQUIRED_CLAIMS, "verify_exp": False},
        )
    except PyJWTError as e:
        logger.warning(f"Rejected session credential: {e}")
        return None

    expires_ts = payload['exp']
    if expires_ts <= now.timestamp():
        logger.info(f"Session credential for {payload.get('username')} has expired")
        return None

    window = timedelta(seconds=payload['win'])
    persistent = bool(payload.get('persistent', False))
    expires_at = datetime.fromtimestamp(expires_ts, tz=timezone.utc)

    refreshed = None
    if expires_at - now < window / 2:
        claims = {k: payload.get(k) for k in ('sub', 'username', 'email', 'given_name', 'family_name', 'role')}
        refreshed = _encode(claims, now, window, persistent)
        expires_at = refreshed.expires_at

    identity = Identity(
        user_id=payload['sub'],
        username=payload['username'],
        email=payload.get('email') or "",
        first_name=payload.get('given_name') or "",
        last_name=payload.get('family_name') or "",
        role=payload['role'],
        expires_at=expires_at,
        persistent=persistent,
    )
    return ValidatedSession(identity=identity, refreshed=refreshed)


def read_credential(request: Request) -> Optional[str]:
    """Pulls the credential from the auth cookie or a bearer header."""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value:
            return value.strip()
    return None


def set_auth_cookie(response: Response, credential: IssuedCredential):
    """Writes the credential cookie; non-persistent credentials get a browser-session cookie."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=credential.token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        max_age=int(credential.window.total_seconds()) if credential.persistent else None,
    )


def clear_auth_cookie(response: Response):
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def revoke_credential(request: Request, response: Response):
    """
    Signs the caller out for the rest of this request and clears the cookie.
    There is no server-side deny list: a copied token stays valid until it expires.
    """
    request.state.identity = None
    request.state.signed_out = True
    clear_auth_cookie(response)

# storefront/auth/authorization.py
"""
Role and ownership checks.

Every action is annotated with the roles allowed to call it through one of
the dependency aliases below (``AdminUser``, ``CustomerUser``,
``CustomerOrAdmin``, ``AnyUser``); public actions take ``OptionalUser``.
"""

from typing import Annotated, Iterable, Optional
from urllib.parse import quote, urlsplit

from fastapi import Depends, Request

from ..core.exceptions import AuthenticationError, AuthorizationError, LOGIN_PATH
from ..users.models import Role
from .models import Identity
from .session import read_credential, validate_credential
from ..logging import logger

ADMIN_HOME = "/admin"
CUSTOMER_HOME = "/"


def authorize(identity: Optional[Identity], required_roles: Iterable[Role]) -> bool:
    """An empty role set marks a public action."""
    roles = {Role(r).value for r in required_roles}
    if not roles:
        return True
    if identity is None:
        return False
    return identity.role in roles


def is_owner(identity: Optional[Identity], customer_name: Optional[str]) -> bool:
    """
    Admins own everything; a customer owns a record when their username
    appears anywhere in its customer name, ignoring case.

    NOTE: this is a loose substring match. A username like "al" matches
    "Alice Johnson" as well. Kept as-is until customer ids are carried on
    the credential.
    """
    if identity is None:
        return False
    if identity.is_admin:
        return True
    return identity.username.lower() in (customer_name or "").lower()


def ensure_owner(identity: Identity, customer_name: str, resource: str, resource_id: str) -> None:
    if not is_owner(identity, customer_name):
        logger.warning(
            f"Customer {identity.username} attempted to access {resource} {resource_id} they don't own"
        )
        raise AuthorizationError(
            username=identity.username,
            reason="ownership",
            context={"resource": resource, "resource_id": resource_id},
        )


def is_local_url(url: Optional[str]) -> bool:
    """True for same-site absolute paths such as ``/orders/my``."""
    if not url:
        return False
    if not url.startswith("/") or url.startswith("//") or url.startswith("/\\"):
        return False
    parts = urlsplit(url)
    return not parts.scheme and not parts.netloc


def login_redirect(identity: Identity, return_url: Optional[str] = None) -> str:
    """Admins land on the dashboard; customers go back to where they were headed."""
    if identity.is_admin:
        return ADMIN_HOME
    if is_local_url(return_url):
        return return_url
    return CUSTOMER_HOME


def get_optional_identity(request: Request) -> Optional[Identity]:
    """FastAPI dependency returning the caller's identity, or None when anonymous."""
    if hasattr(request.state, "identity"):
        return request.state.identity
    # Session middleware not installed (e.g. a bare router under test)
    session = validate_credential(read_credential(request))
    request.state.identity = session.identity if session else None
    return request.state.identity


def require_roles(*roles: Role):
    """Builds a dependency that admits only the given roles (any signed-in user if none given)."""

    def dependency(request: Request) -> Identity:
        identity = get_optional_identity(request)
        if identity is None:
            return_url = request.url.path
            if request.url.query:
                return_url = f"{return_url}?{request.url.query}"
            raise AuthenticationError(
                message="Please sign in to continue.",
                redirect=f"{LOGIN_PATH}?return_url={quote(return_url, safe='')}",
            )
        if roles and not authorize(identity, roles):
            logger.warning(
                f"Access denied for user {identity.username} (role {identity.role}) on "
                f"{request.method} {request.url.path}"
            )
            raise AuthorizationError(username=identity.username, reason="role")
        return identity

    return dependency


OptionalUser = Annotated[Optional[Identity], Depends(get_optional_identity)]
AnyUser = Annotated[Identity, Depends(require_roles())]
AdminUser = Annotated[Identity, Depends(require_roles(Role.ADMIN))]
CustomerUser = Annotated[Identity, Depends(require_roles(Role.CUSTOMER))]
CustomerOrAdmin = Annotated[Identity, Depends(require_roles(Role.CUSTOMER, Role.ADMIN))]

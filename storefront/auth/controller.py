# storefront/auth/controller.py
from typing import Optional
from fastapi import APIRouter, Request, Response
from starlette import status

from . import models
from . import service
from .authorization import AnyUser, OptionalUser, login_redirect
from .session import issue_credential, set_auth_cookie, revoke_credential
from ..core.exceptions import StorefrontError, UnexpectedError
from ..core.flash import flash
from ..core.rate_limiter import limiter
from ..database.core import DbSession
from ..logging import logger

router = APIRouter(prefix='/account', tags=['Account'])


def _identity_for(user, credential) -> models.Identity:
    return models.Identity(
        user_id=str(user.id),
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        expires_at=credential.expires_at,
        persistent=credential.persistent,
    )


@router.post("/register", response_model=models.MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/hour")
async def register_user(
    request: Request,
    db: DbSession,
    register_user_request: models.RegisterUserRequest
):
    """Register a new customer account."""
    try:
        service.register_user(db, register_user_request)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error during registration for user: {register_user_request.username}")
        raise UnexpectedError("register", str(e)) from e

    message = "Registration successful! Please login with your credentials."
    flash(request, "success", message)
    return models.MessageResponse(message=message, redirect="/account/login")


@router.post("/login", response_model=models.LoginResponse)
@limiter.limit("50/hour")
async def login(
    request: Request,
    response: Response,
    login_request: models.LoginRequest,
    db: DbSession,
    return_url: Optional[str] = None,
):
    """Sign in with username or email; sets the auth cookie and returns the token."""
    logger.info(f"Login attempt for user: {login_request.username}")
    try:
        user = service.authenticate_user(db, login_request.username, login_request.password)
        credential = issue_credential(user, login_request.remember_me)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error during login for user: {login_request.username}")
        raise UnexpectedError("sign you in", str(e)) from e

    set_auth_cookie(response, credential)
    request.state.signed_in = True

    identity = _identity_for(user, credential)
    redirect = login_redirect(identity, return_url)
    message = f"Welcome back, {user.first_name}!"
    flash(request, "success", message)
    logger.info(f"User {user.username} signed in with role {user.role}; redirecting to {redirect}")

    return models.LoginResponse(
        access_token=credential.token,
        expires_at=credential.expires_at,
        redirect=redirect,
        message=message,
    )


@router.post("/logout", response_model=models.MessageResponse)
async def logout(request: Request, response: Response, current_user: AnyUser):
    """Sign out: the credential is dropped for this request and the cookie cleared."""
    revoke_credential(request, response)
    logger.info(f"User {current_user.username} logged out successfully")
    message = "You have been logged out successfully."
    flash(request, "success", message)
    return models.MessageResponse(message=message, redirect="/")


@router.get("/access-denied", response_model=models.MessageResponse, status_code=status.HTTP_403_FORBIDDEN)
async def access_denied(current_user: OptionalUser):
    logger.warning(f"Access denied for user: {current_user.username if current_user else 'Anonymous'}")
    return models.MessageResponse(
        success=False,
        message="You do not have permission to access this resource.",
        redirect="/",
    )


@router.get("/profile", response_model=models.ProfileResponse)
async def profile(current_user: AnyUser):
    """Claims from the caller's credential."""
    return models.ProfileResponse(
        username=current_user.username,
        email=current_user.email,
        first_name=current_user.first_name,
        last_name=current_user.last_name,
        role=current_user.role,
    )

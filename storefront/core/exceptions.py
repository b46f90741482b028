# storefront/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging
from fastapi import status

logger = logging.getLogger(__name__)

ACCESS_DENIED_PATH = "/account/access-denied"
LOGIN_PATH = "/account/login"


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    ACCESS_DENIED = "ACCESS_DENIED"
    EMPTY_CART = "EMPTY_CART"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EMPTY_CART: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
}


class StorefrontError(Exception):
    """Base exception for all storefront application errors."""

    log_level = logging.WARNING

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        redirect: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}
        self.redirect = redirect
        self.field = field

        logger.log(
            self.log_level,
            f"Storefront Error: {code.value}: {user_message}",
            extra={
                "error_code": code.value,
                "technical_details": technical_details,
                "context": self.context,
            },
        )

        super().__init__(self.user_message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, status.HTTP_400_BAD_REQUEST)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        response = {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
                "context": self.context,
            }
        }

        if self.field:
            response["error"]["field"] = self.field
        if self.redirect:
            response["redirect"] = self.redirect

        return response


class ValidationError(StorefrontError):
    """Malformed input: missing field, out-of-range quantity, bad upload."""

    def __init__(self, field: str, user_message: str, technical_details: Optional[str] = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            user_message=user_message,
            technical_details=technical_details,
            context={"field": field},
            field=field,
        )


class NotFoundError(StorefrontError):
    """A referenced customer, product, order, cart line or upload does not exist."""

    def __init__(self, resource: str, resource_id: Any = None, redirect: Optional[str] = None):
        message = f"{resource} not found."
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            user_message=message,
            context={"resource": resource, "resource_id": None if resource_id is None else str(resource_id)},
            redirect=redirect,
        )


class ConflictError(StorefrontError):
    """Duplicate username or email at registration."""

    def __init__(self, field: str, user_message: str):
        super().__init__(
            code=ErrorCode.CONFLICT,
            user_message=user_message,
            context={"field": field},
            field=field,
        )


class AuthenticationError(StorefrontError):
    """Bad credentials, an inactive account, or a missing credential."""

    def __init__(self, message: str = "Invalid username or password.", redirect: Optional[str] = None):
        self.message = message
        super().__init__(
            code=ErrorCode.AUTHENTICATION_FAILED,
            user_message=message,
            redirect=redirect,
        )


class AuthorizationError(StorefrontError):
    """Role or ownership check failed."""

    def __init__(self, username: Optional[str] = None, reason: str = "role", context: Optional[Dict[str, Any]] = None):
        ctx = {"username": username or "Anonymous", "reason": reason}
        ctx.update(context or {})
        super().__init__(
            code=ErrorCode.ACCESS_DENIED,
            user_message="You do not have permission to access this resource.",
            context=ctx,
            redirect=ACCESS_DENIED_PATH,
        )


class EmptyCartError(StorefrontError):
    """Checkout was attempted with no cart lines."""

    def __init__(self, username: str):
        super().__init__(
            code=ErrorCode.EMPTY_CART,
            user_message="Your cart is empty!",
            context={"username": username},
            redirect="/cart",
        )


class UnexpectedError(StorefrontError):
    """Any other failure from the persistence or storage adapters."""

    log_level = logging.ERROR

    def __init__(self, action: str, technical_details: Optional[str] = None):
        super().__init__(
            code=ErrorCode.INTERNAL_SERVER_ERROR,
            user_message=f"An error occurred while trying to {action}. Please try again.",
            technical_details=technical_details,
            context={"action": action},
        )

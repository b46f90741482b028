from fastapi import Request

from .session import read_credential, validate_credential, set_auth_cookie, clear_auth_cookie
from ..core.config import settings

# Bearer clients read their slid credential from this header
REFRESHED_TOKEN_HEADER = "X-Refreshed-Token"


async def session_middleware(request: Request, call_next):
    """
    Resolves the caller's identity before routing and slides the credential
    forward on the way out.
    """
    token = read_credential(request)
    session = validate_credential(token)

    request.state.identity = session.identity if session else None
    request.state.signed_out = False

    response = await call_next(request)

    if getattr(request.state, "signed_out", False) or getattr(request.state, "signed_in", False):
        # Login and logout wrote their own cookie
        return response

    from_cookie = bool(request.cookies.get(settings.AUTH_COOKIE_NAME))
    if session and session.refreshed:
        if from_cookie:
            set_auth_cookie(response, session.refreshed)
        else:
            response.headers[REFRESHED_TOKEN_HEADER] = session.refreshed.token
    elif session is None and from_cookie:
        clear_auth_cookie(response)

    return response

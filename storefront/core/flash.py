# storefront/core/flash.py
"""
One-shot user messages carried in the Starlette session cookie.

A message queued during one request is returned (and dropped) by the next
call to ``pop_flashes``.
"""

from typing import Dict, List

from fastapi import Request

FLASH_KEY = "_flashes"


def _session(request: Request):
    # SessionMiddleware not installed
    if "session" not in request.scope:
        return None
    return request.session


def flash(request: Request, category: str, message: str) -> None:
    session = _session(request)
    if session is None:
        return
    flashes = list(session.get(FLASH_KEY, []))
    flashes.append({"category": category, "message": message})
    session[FLASH_KEY] = flashes


def pop_flashes(request: Request) -> List[Dict[str, str]]:
    session = _session(request)
    if session is None:
        return []
    return session.pop(FLASH_KEY, [])

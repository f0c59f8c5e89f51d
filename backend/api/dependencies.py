"""FastAPI dependencies: container access and session cookie transport."""

from typing import Optional

from fastapi import Request, Response

from domain.session.token import SessionToken
from infrastructure.config import get_session_cookie_max_age, get_session_cookie_name
from infrastructure.container import Container


def get_container(request: Request) -> Container:
    """Container attached to the application by create_app."""
    container: Optional[Container] = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Application container not initialized")
    return container


def get_session_token(request: Request) -> Optional[str]:
    """Raw session token from the cookie, None when absent or empty."""
    value = request.cookies.get(get_session_cookie_name())
    return value or None


def set_session_cookie(response: Response, token: SessionToken) -> None:
    response.set_cookie(
        key=get_session_cookie_name(),
        value=str(token),
        max_age=get_session_cookie_max_age(),
        path="/",
        httponly=True,
        samesite="lax",
    )

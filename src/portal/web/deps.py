"""Request-scoped helpers shared by the portal views.

Every view follows the same protocol: load_session() resolves the state for
the request cookie, the view reads or mutates it, and save_session() stores
it and attaches a cookie when the session is new.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Depends, HTTPException, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from portal.config.settings import get_settings
from portal.session import Role, SessionState, SessionStore

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ROLE_HOME = {
    Role.PATIENT: "/patient/scans",
    Role.CLINIC: "/clinic/dashboard",
    Role.GOVERNMENT: "/government/dashboard",
}


class LoginRequired(Exception):
    """Raised when a session opens a view its role does not allow."""

    def __init__(self, role: Role) -> None:
        super().__init__(f"Login as {role.value} required")
        self.role = role


@dataclass
class PortalSession:
    """The state resolved for one request and the identifier it came from.

    session_id is None until the state has been persisted for the first time.
    """

    state: SessionState
    session_id: str | None


def get_session_store(request: Request) -> SessionStore:
    """Get session store from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The session store.

    Raises:
        HTTPException: If the store is not initialized.
    """
    store = getattr(request.app.state, "session_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Session store not initialized")
    return store


def load_session(request: Request) -> PortalSession:
    """Resolve the session for the cookie carried by the request."""
    store = get_session_store(request)
    cookie = request.cookies.get(get_settings().session_cookie_name)
    state, session_id = store.resolve(cookie)
    return PortalSession(state=state, session_id=session_id)


def save_session(request: Request, response: Response, session: PortalSession) -> str:
    """Persist the session and hand a new identifier to the client.

    Args:
        request: The FastAPI request object.
        response: The response that will be returned to the client.
        session: The session resolved for this request.

    Returns:
        The identifier the session is stored under.
    """
    settings = get_settings()
    store = get_session_store(request)
    session_id = store.persist(session.session_id, session.state)

    if session.session_id is None:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session_id,
            max_age=settings.session_cookie_max_age,
            path="/",
            httponly=True,
            samesite="lax",
        )
        session.session_id = session_id

    return session_id


def require_role(role: Role) -> Callable[..., PortalSession]:
    """Build a dependency that only lets sessions with the given role through.

    Args:
        role: The role the view is reserved for.

    Returns:
        A FastAPI dependency returning the PortalSession.
    """

    def dependency(session: PortalSession = Depends(load_session)) -> PortalSession:
        if not session.state.has_role(role):
            raise LoginRequired(role)
        return session

    return dependency


def redirect(url: str) -> RedirectResponse:
    """303 redirect, so a POST is followed by a GET."""
    return RedirectResponse(url=url, status_code=303)


def render(
    request: Request,
    name: str,
    session: PortalSession,
    status_code: int = 200,
    **context: Any,
) -> Response:
    """Render a template with the session state in its context."""
    return templates.TemplateResponse(
        request,
        name,
        {"state": session.state, **context},
        status_code=status_code,
    )

"""Home, login and logout views."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from portal.config import AccountsConfig
from portal.web.deps import (
    ROLE_HOME,
    PortalSession,
    load_session,
    redirect,
    render,
    save_session,
)

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Неверный логин или пароль"
LOGIN_UNAVAILABLE = "Вход временно недоступен"


def get_accounts_config(request: Request) -> AccountsConfig | None:
    """Get demo accounts from app state, None if they failed to load."""
    return getattr(request.app.state, "accounts_config", None)


@auth_router.get("/")
def home(
    request: Request,
    session: Annotated[PortalSession, Depends(load_session)],
) -> Response:
    """Send authenticated sessions to their role home, others to the login page."""
    state = session.state
    if state.authenticated and state.role in ROLE_HOME:
        return redirect(ROLE_HOME[state.role])
    state.clear_auth_error()
    return render(request, "login.html", session)


@auth_router.get("/login")
def login_form(
    request: Request,
    session: Annotated[PortalSession, Depends(load_session)],
) -> Response:
    """Show a clean login page."""
    session.state.clear_auth_error()
    return render(request, "login.html", session)


@auth_router.post("/login")
def login(
    request: Request,
    session: Annotated[PortalSession, Depends(load_session)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """Check the submitted credentials and log the session in.

    A failed attempt is stored on the session and shown on the login page;
    it is never raised as an error.
    """
    accounts = get_accounts_config(request)
    account = accounts.authenticate(username, password) if accounts else None

    if account is None:
        message = INVALID_CREDENTIALS if accounts else LOGIN_UNAVAILABLE
        logger.warning("Failed login attempt (username=%s)", username)
        session.state.fail_login(message)
        response = render(request, "login.html", session, status_code=401)
        save_session(request, response, session)
        return response

    session.state.login(account.role)
    logger.info("Login succeeded (username=%s, role=%s)", account.username, account.role.value)
    response = redirect("/")
    save_session(request, response, session)
    return response


@auth_router.api_route("/logout", methods=["GET", "POST"])
def logout(
    request: Request,
    session: Annotated[PortalSession, Depends(load_session)],
) -> Response:
    """Return the session to the anonymous state.

    A request without a stored session has nothing to log out of and is not
    persisted.
    """
    response = redirect("/")
    if session.session_id is None:
        return response

    session.state.logout()
    save_session(request, response, session)
    return response
